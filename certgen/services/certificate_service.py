"""Certificate issuance and verification.

Issuance is one linear pipeline, each step finishing before the next:

  record (insert-if-absent) → render HTML → print PDF → upload → URL

The record write is a single conditional insert, so concurrent issuances
of the same id cannot both write; the loser is told the record already
existed and carries on.  The PDF is rendered and uploaded on every call,
existing record or not, so the stored artifact always reflects the
current template.  It is rendered from the STORED record, so a second
issuance that submits a different name cannot make the PDF disagree with
what verification reports.

Verification is a read-only lookup; an unknown id is a normal outcome,
not an error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from certgen.core.metrics import CERTIFICATE_VERIFICATIONS, CERTIFICATES_ISSUED
from certgen.models.certificate import CertificateRecord, CertificateTemplateData
from certgen.repos.certificate_repo import CertificateRepo
from certgen.services.artifact_store import ArtifactStore
from certgen.services.pdf_exporter import PdfExporter
from certgen.services.template_renderer import TemplateRenderer

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d/%m/%Y"


@dataclass(frozen=True, slots=True)
class IssuedCertificate:
    record: CertificateRecord
    url: str
    created: bool  # False when the id had already been issued


@dataclass(frozen=True, slots=True)
class VerificationResult:
    certificate_id: str
    record: CertificateRecord | None
    url: str

    @property
    def valid(self) -> bool:
        return self.record is not None


class CertificateService:
    def __init__(
        self,
        *,
        repo: CertificateRepo,
        renderer: TemplateRenderer,
        exporter: PdfExporter,
        artifacts: ArtifactStore,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.repo = repo
        self.renderer = renderer
        self.exporter = exporter
        self.artifacts = artifacts
        self._today = today

    def issue(self, record: CertificateRecord) -> IssuedCertificate:
        log_ctx = {"certificate_id": record.id}

        created = self.repo.create_if_absent(record)
        if created:
            logger.info("Recorded certificate id=%s", record.id, extra=log_ctx)
        else:
            logger.info(
                "Record already exists id=%s, keeping stored name/grade",
                record.id,
                extra=log_ctx,
            )
            # Never deleted, so the lookup only misses if the store is
            # eventually consistent; fall back to the submitted fields then.
            record = self.repo.find_by_id(record.id) or record

        html = self.renderer.render(
            CertificateTemplateData.for_record(
                record,
                date=self._today().strftime(DATE_FORMAT),
                medal=self.renderer.load_medal(),
            )
        )
        pdf = self.exporter.export(html)
        url = self.artifacts.upload(record.id, pdf)

        CERTIFICATES_ISSUED.labels(outcome="created" if created else "existing").inc()
        logger.info("Issued certificate id=%s url=%s", record.id, url, extra=log_ctx)
        return IssuedCertificate(record=record, url=url, created=created)

    def verify(self, certificate_id: str) -> VerificationResult:
        # DynamoDB rejects empty key values outright; an empty id is just unknown.
        record = self.repo.find_by_id(certificate_id) if certificate_id else None
        result = VerificationResult(
            certificate_id=certificate_id,
            record=record,
            url=self.artifacts.url_for(certificate_id),
        )
        CERTIFICATE_VERIFICATIONS.labels(result="valid" if result.valid else "invalid").inc()
        if not result.valid:
            logger.info(
                "Verification failed: unknown id=%s",
                certificate_id,
                extra={"certificate_id": certificate_id},
            )
        return result
