from __future__ import annotations

from certgen.core.config import SETTINGS, Settings
from certgen.db.aws import certificates_table, s3_client
from certgen.repos.certificate_repo import CertificateRepo, InMemoryCertificateRepo
from certgen.repos.dynamo_certificate_repo import DynamoCertificateRepo
from certgen.services.artifact_store import (
    ArtifactStore,
    InMemoryArtifactStore,
    S3ArtifactStore,
)
from certgen.services.certificate_service import CertificateService
from certgen.services.pdf_exporter import PlaywrightPdfExporter
from certgen.services.template_renderer import TemplateRenderer


def build_certificate_service(settings: Settings = SETTINGS) -> CertificateService:
    """Wire the certificate pipeline for the configured backend."""
    if settings.storage_backend == "aws" and certificates_table is not None:
        repo: CertificateRepo = DynamoCertificateRepo(certificates_table)
        artifacts: ArtifactStore = S3ArtifactStore(
            s3_client, settings.bucket_name, settings.public_base_url
        )
    else:
        repo = InMemoryCertificateRepo()
        artifacts = InMemoryArtifactStore(settings.public_base_url)

    exporter = PlaywrightPdfExporter(
        # Offline runs use Playwright's bundled Chromium, not the layer binary
        executable_path=None if settings.is_offline else settings.chromium_executable_path,
        local_copy_path=settings.local_pdf_path if settings.is_offline else None,
    )
    return CertificateService(
        repo=repo,
        renderer=TemplateRenderer(settings.template_dir),
        exporter=exporter,
        artifacts=artifacts,
    )


# Module-level singleton, shared by the HTTP routes and the Lambda entry points.
certificate_service = build_certificate_service()


def get_certificate_service() -> CertificateService:
    """FastAPI dependency; reads the module attribute at call time so tests
    can swap the service with monkeypatch."""
    return certificate_service
