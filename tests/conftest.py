from __future__ import annotations

import os
import sys
from datetime import date
from pathlib import Path

# Ensure repo root is on sys.path so `import certgen` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Settings are read once at import time; pin them before certgen is imported.
os.environ["APP_ENV"] = "test"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["CERT_TEMPLATE_DIR"] = str(ROOT / "templates")
os.environ.pop("IS_OFFLINE", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from certgen.api import dependencies  # noqa: E402
from certgen.core.config import SETTINGS  # noqa: E402
from certgen.main import app  # noqa: E402
from certgen.repos.certificate_repo import InMemoryCertificateRepo  # noqa: E402
from certgen.services.artifact_store import InMemoryArtifactStore  # noqa: E402
from certgen.services.certificate_service import CertificateService  # noqa: E402
from certgen.services.template_renderer import TemplateRenderer  # noqa: E402

TEMPLATE_DIR = ROOT / "templates"
ISSUE_DATE = date(2024, 3, 5)
FAKE_PDF = b"%PDF-1.4\n% fake certificate\n%%EOF\n"


class FakePdfExporter:
    """Records the HTML it is given instead of launching Chromium."""

    def __init__(self, pdf: bytes = FAKE_PDF) -> None:
        self.pdf = pdf
        self.rendered: list[str] = []

    def export(self, html: str) -> bytes:
        self.rendered.append(html)
        return self.pdf


def make_service(exporter: FakePdfExporter | None = None) -> CertificateService:
    return CertificateService(
        repo=InMemoryCertificateRepo(),
        renderer=TemplateRenderer(TEMPLATE_DIR),
        exporter=exporter or FakePdfExporter(),
        artifacts=InMemoryArtifactStore(SETTINGS.public_base_url),
        today=lambda: ISSUE_DATE,
    )


@pytest.fixture
def exporter() -> FakePdfExporter:
    return FakePdfExporter()


@pytest.fixture(autouse=True)
def certificate_service(
    monkeypatch: pytest.MonkeyPatch, exporter: FakePdfExporter
) -> CertificateService:
    """Fresh in-memory pipeline per test, shared by routes and Lambda handlers."""
    service = make_service(exporter)
    monkeypatch.setattr(dependencies, "certificate_service", service)
    return service


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def base_url() -> str:
    return SETTINGS.public_base_url
