"""Failure kinds surfaced by the certificate pipeline.

Each adapter wraps the exceptions of the library it drives (botocore,
jinja2, playwright) into one of these, so the HTTP layer and the Lambda
entry points only need to know about CertificateError.

  CertificateValidationError  400  request body missing/invalid fields
  TemplateRenderError         500  template or medal asset unavailable
  RecordStoreError            502  DynamoDB unreachable or denied
  PdfExportError              502  Chromium failed to launch or print
  ArtifactStoreError          502  S3 upload failed

"Certificate not found" is not an error: verification answers it with a
normal response.
"""

from __future__ import annotations


class CertificateError(Exception):
    status_code = 500
    message = "Internal error"

    def to_body(self) -> dict[str, object]:
        return {"message": self.message}


class CertificateValidationError(CertificateError, ValueError):
    status_code = 400
    message = "Invalid certificate request"

    def __init__(self, errors: list[dict[str, object]]) -> None:
        super().__init__(errors)
        self.errors = errors

    def to_body(self) -> dict[str, object]:
        return {"message": self.message, "errors": self.errors}


class TemplateRenderError(CertificateError):
    status_code = 500
    message = "Certificate template unavailable"


class RecordStoreError(CertificateError):
    status_code = 502
    message = "Certificate store unavailable"


class PdfExportError(CertificateError):
    status_code = 502
    message = "Certificate rendering failed"


class ArtifactStoreError(CertificateError):
    status_code = 502
    message = "Certificate upload failed"


def validation_errors(errors) -> list[dict[str, object]]:
    """Trim pydantic error dicts to JSON-safe fields (loc, msg, type)."""
    return [
        {
            "loc": [str(part) for part in e.get("loc", ())],
            "msg": e.get("msg", ""),
            "type": e.get("type", ""),
        }
        for e in errors
    ]
