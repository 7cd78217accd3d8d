"""Certificate issuance and verification endpoints.

- POST /generateCertificate       issue (or re-issue) a certificate PDF
- GET  /verifyCertificate/{id}    public verification lookup

Both are public; the response bodies are the contract shared with the
Lambda entry points in certgen.lambda_handlers, which reuse the body
builders below.

Verification answers an unknown id with 400 and the invalid message,
not 404: existing clients branch on that status.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, StringConstraints

from certgen.api.dependencies import get_certificate_service
from certgen.models.certificate import CertificateRecord
from certgen.services.certificate_service import (
    CertificateService,
    IssuedCertificate,
    VerificationResult,
)

router = APIRouter(tags=["certificates"])

CREATED_MESSAGE = "Certificate created!"
VALID_MESSAGE = "Certificado válido!"
INVALID_MESSAGE = "Certificado inválido!"

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CertificateIn(BaseModel):
    # Grades are often sent as numbers (9.5); store them as given, as text.
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: NonEmptyStr
    name: NonEmptyStr
    grade: NonEmptyStr

    def to_record(self) -> CertificateRecord:
        return CertificateRecord(id=self.id, name=self.name, grade=self.grade)


class CertificateIssuedOut(BaseModel):
    message: str
    url: str


class CertificateVerifiedOut(BaseModel):
    message: str
    name: str
    url: str


class MessageOut(BaseModel):
    message: str


def issued_body(issued: IssuedCertificate) -> CertificateIssuedOut:
    return CertificateIssuedOut(message=CREATED_MESSAGE, url=issued.url)


def verification_body(
    result: VerificationResult,
) -> tuple[int, CertificateVerifiedOut | MessageOut]:
    if result.record is None:
        return status.HTTP_400_BAD_REQUEST, MessageOut(message=INVALID_MESSAGE)
    return status.HTTP_200_OK, CertificateVerifiedOut(
        message=VALID_MESSAGE,
        name=result.record.name,
        url=result.url,
    )


@router.post(
    "/generateCertificate",
    response_model=CertificateIssuedOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": MessageOut}, 502: {"model": MessageOut}},
)
def generate_certificate(
    body: CertificateIn,
    service: Annotated[CertificateService, Depends(get_certificate_service)],
) -> CertificateIssuedOut:
    # Failures surface as CertificateError subclasses; main.py maps them
    # to JSON error responses.
    return issued_body(service.issue(body.to_record()))


@router.get(
    # ":path" lets ids containing "/", and the empty id, reach the lookup
    "/verifyCertificate/{certificate_id:path}",
    response_model=CertificateVerifiedOut,
    responses={400: {"model": MessageOut}},
)
def verify_certificate(
    certificate_id: str,
    service: Annotated[CertificateService, Depends(get_certificate_service)],
) -> CertificateVerifiedOut | JSONResponse:
    status_code, body = verification_body(service.verify(certificate_id))
    if isinstance(body, CertificateVerifiedOut):
        return body
    return JSONResponse(status_code=status_code, content=body.model_dump())
