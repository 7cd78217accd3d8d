from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from certgen.api.certificates import router as certificates_router
from certgen.api.health import router as health_router
from certgen.api.metrics_endpoint import router as metrics_router
from certgen.core.config import SETTINGS
from certgen.core.errors import (
    CertificateError,
    CertificateValidationError,
    validation_errors,
)
from certgen.core.logging import setup_logging
from certgen.db.aws import lifespan_aws
from certgen.middleware.metrics import MetricsMiddleware
from certgen.middleware.request_context import RequestContextMiddleware

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    async with lifespan_aws():
        yield


# only app setup + router registration

app = FastAPI(
    title="certificate-service",
    lifespan=lifespan,
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Middleware execution order: last-added runs first (outermost layer).
# RequestContext (outermost) → Metrics → CORS → route handler
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    err = CertificateValidationError(validation_errors(exc.errors()))
    logger.warning("Rejected request body: %s", err.errors)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=err.to_body())


@app.exception_handler(CertificateError)
async def handle_certificate_error(
    _request: Request, exc: CertificateError
) -> JSONResponse:
    logger.error("Certificate request failed: %s: %s", type(exc).__name__, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(certificates_router)

logger.info(
    "certificate-service started  env=%s log_level=%s port=%d backend=%s "
    "offline=%s docs=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    SETTINGS.storage_backend,
    SETTINGS.is_offline,
    "on" if SETTINGS.is_dev else "off",
)
