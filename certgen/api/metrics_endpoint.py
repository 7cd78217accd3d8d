"""Prometheus metrics endpoint.

Returns every registered metric in the Prometheus text exposition
format (not JSON), e.g.:

  # TYPE certificates_issued_total counter
  certificates_issued_total{outcome="created"} 42.0
  certificates_issued_total{outcome="existing"} 3.0

Restrict access to this path at the load balancer in production; metric
names and rates describe the service's internals.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Expose all Prometheus metrics in text exposition format."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
