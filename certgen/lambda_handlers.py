"""AWS Lambda entry points for API Gateway (REST, proxy integration).

  generateCertificate  POST /generateCertificate        body {id, name, grade}
  verifyCertificate    GET  /verifyCertificate/{id}

Each invocation runs the same CertificateService as the FastAPI routes
and answers with the same bodies; only the envelope differs:

  {"statusCode": 201, "headers": {...}, "body": "<json string>"}

Module import does the expensive setup (logging, boto3 resources), so a
warm execution environment reuses it across invocations.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from pydantic import ValidationError

from certgen.api import dependencies
from certgen.api.certificates import CertificateIn, issued_body, verification_body
from certgen.core.config import SETTINGS
from certgen.core.errors import (
    CertificateError,
    CertificateValidationError,
    validation_errors,
)
from certgen.core.logging import request_id_var, setup_logging

setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-type": "application/json"}


def _response(status_code: int, body: dict[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(JSON_HEADERS),
        "body": json.dumps(body, ensure_ascii=False),
    }


def _error_response(exc: CertificateError) -> dict[str, Any]:
    return _response(exc.status_code, exc.to_body())


def _read_body(event: dict[str, Any]) -> str | bytes:
    body = event.get("body") or ""
    if event.get("isBase64Encoded") and body:
        return base64.b64decode(body, validate=True)
    return body


@contextmanager
def _invocation(context: Any) -> Iterator[str]:
    """Bind the Lambda request id to every log line of this invocation."""
    req_id = getattr(context, "aws_request_id", None) or str(uuid.uuid4())
    token = request_id_var.set(req_id)
    try:
        yield req_id
    finally:
        request_id_var.reset(token)


def generate_certificate(event: dict[str, Any], context: Any) -> dict[str, Any]:
    with _invocation(context):
        try:
            payload = CertificateIn.model_validate_json(_read_body(event))
        except binascii.Error as exc:
            err = CertificateValidationError(
                [
                    {
                        "loc": ["body"],
                        "msg": f"Invalid base64 body: {exc}",
                        "type": "base64_invalid",
                    }
                ]
            )
            logger.warning("Rejected request body: %s", err.errors)
            return _error_response(err)
        except ValidationError as exc:
            err = CertificateValidationError(validation_errors(exc.errors()))
            logger.warning("Rejected request body: %s", err.errors)
            return _error_response(err)

        try:
            issued = dependencies.get_certificate_service().issue(payload.to_record())
        except CertificateError as exc:
            logger.error(
                "Issuance failed id=%s: %s: %s", payload.id, type(exc).__name__, exc
            )
            return _error_response(exc)

        return _response(201, issued_body(issued).model_dump())


def verify_certificate(event: dict[str, Any], context: Any) -> dict[str, Any]:
    with _invocation(context):
        certificate_id = (event.get("pathParameters") or {}).get("id") or ""
        try:
            result = dependencies.get_certificate_service().verify(certificate_id)
        except CertificateError as exc:
            logger.error(
                "Verification failed id=%s: %s: %s",
                certificate_id,
                type(exc).__name__,
                exc,
            )
            return _error_response(exc)

        status_code, body = verification_body(result)
        return _response(status_code, body.model_dump())
