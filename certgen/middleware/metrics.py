"""Prometheus metrics middleware: instruments every HTTP request.

For each request it tracks the in-flight gauge, counts the request by
method/path/status and observes its duration.  Paths are used as the
endpoint label; verification paths carry the certificate id, so they are
collapsed to the route template to keep label cardinality bounded.
"""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from certgen.core.metrics import ACTIVE_REQUESTS, REQUEST_COUNT, REQUEST_DURATION

_VERIFY_PREFIX = "/verifyCertificate/"


def _endpoint_label(path: str) -> str:
    if path.startswith(_VERIFY_PREFIX):
        return _VERIFY_PREFIX + "{certificate_id}"
    return path


class MetricsMiddleware(BaseHTTPMiddleware):
    """Collect Prometheus metrics for every HTTP request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # Prometheus scrapes would otherwise inflate the request count.
        if request.url.path == "/metrics":
            return await call_next(request)

        endpoint = _endpoint_label(request.url.path)
        ACTIVE_REQUESTS.inc()
        start = time.monotonic()
        status_code: str | None = None

        try:
            response = await call_next(request)
            status_code = str(response.status_code)
        except Exception:
            # Unhandled exceptions become a 500 from Starlette; record it.
            status_code = "500"
            raise
        finally:
            duration = time.monotonic() - start
            ACTIVE_REQUESTS.dec()
            REQUEST_COUNT.labels(
                method=request.method,
                endpoint=endpoint,
                status_code=status_code if status_code is not None else "500",
            ).inc()
            REQUEST_DURATION.labels(
                method=request.method,
                endpoint=endpoint,
            ).observe(duration)

        return response
