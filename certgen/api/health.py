"""Health and readiness endpoints.

/health (liveness) answers "is the process up?" and reports which
storage backend and bucket the process is wired to, which is the first
thing to check when a deployment issues certificates nobody can verify.

/ready (readiness) answers "can this instance take traffic?".  Every
dependency is reached lazily per request and failures are reported on
that request, so a live process is a ready one.
"""

from __future__ import annotations

from fastapi import APIRouter, Response

from certgen.core.config import SETTINGS
from certgen.db.aws import certificates_table

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict:
    checks = {
        "records": "dynamodb" if certificates_table is not None else "in_memory",
        "artifacts": "s3" if certificates_table is not None else "in_memory",
        "mode": "offline" if SETTINGS.is_offline else "deployed",
    }
    return {
        "status": "ok",
        "checks": checks,
        "table": SETTINGS.table_name,
        "bucket": SETTINGS.bucket_name,
    }


@router.get("/ready")
def ready() -> Response:
    return Response(status_code=200)
