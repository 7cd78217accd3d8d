"""Request context: a unique id per request, attached to every log line.

Issuance logs several lines per request (record write, render, upload).
When requests overlap, those lines interleave; the request id is what
ties them back together.  Under Lambda the id is the invocation's
aws_request_id (set by certgen.lambda_handlers), so log lines line up
with the platform's own START/END/REPORT lines.

A ContextVar (not a thread-local) holds the id: FastAPI runs sync route
handlers in a threadpool and async code on one thread, and contextvars
are copied correctly into both.
"""

from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from certgen.core.logging import request_id_var

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assigns a request id, times the request and logs one summary line.

    1. Reads X-Request-ID (if the client sent one) or generates a UUID
    2. Stores it in request_id_var for everything downstream
    3. Logs method, path, status and duration on completion
    4. Echoes X-Request-ID on the response
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        req_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        token = request_id_var.set(req_id)

        start = time.monotonic()
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        duration_ms = round((time.monotonic() - start) * 1000, 1)

        logger.info(
            "%s %s → %d (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            extra={
                "request_id": req_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        response.headers["X-Request-ID"] = req_id
        return response
