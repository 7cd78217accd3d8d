"""Tests for Prometheus metrics.

The prometheus-client library uses a global default registry and counters
cannot be reset between tests, so every test asserts on DELTAS: read the
value before the action, perform it, read it again.
"""

from __future__ import annotations

from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from certgen.middleware.metrics import _endpoint_label


def _get_sample(name: str, labels: dict | None = None) -> float:
    """Read a metric sample's current value from the global registry."""
    value = REGISTRY.get_sample_value(name, labels=labels or {})
    return value if value is not None else 0.0


def test_request_counter_increments(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "/health", "status_code": "200"}
    before = _get_sample("http_requests_total", labels)
    client.get("/health")
    assert _get_sample("http_requests_total", labels) - before >= 1


def test_request_duration_histogram_observes(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "/health"}
    before = _get_sample("http_request_duration_seconds_count", labels)
    client.get("/health")
    assert _get_sample("http_request_duration_seconds_count", labels) - before >= 1


def test_endpoint_label_collapses_certificate_ids() -> None:
    assert _endpoint_label("/verifyCertificate/abc123") == (
        "/verifyCertificate/{certificate_id}"
    )
    assert _endpoint_label("/generateCertificate") == "/generateCertificate"


def test_verify_requests_share_one_label(client: TestClient) -> None:
    labels = {
        "method": "GET",
        "endpoint": "/verifyCertificate/{certificate_id}",
        "status_code": "400",
    }
    before = _get_sample("http_requests_total", labels)
    client.get("/verifyCertificate/first-unknown")
    client.get("/verifyCertificate/second-unknown")
    assert _get_sample("http_requests_total", labels) - before == 2


def test_issuance_counters(client: TestClient) -> None:
    created = {"outcome": "created"}
    existing = {"outcome": "existing"}
    before_created = _get_sample("certificates_issued_total", created)
    before_existing = _get_sample("certificates_issued_total", existing)
    before_pdf = _get_sample("pdf_render_duration_seconds_count")

    body = {"id": "metrics-1", "name": "Ana Silva", "grade": "9.5"}
    client.post("/generateCertificate", json=body)
    client.post("/generateCertificate", json=body)

    assert _get_sample("certificates_issued_total", created) - before_created == 1
    assert _get_sample("certificates_issued_total", existing) - before_existing == 1
    # The test exporter never launches Chromium
    assert _get_sample("pdf_render_duration_seconds_count") == before_pdf


def test_verification_counters(client: TestClient) -> None:
    before_valid = _get_sample("certificate_verifications_total", {"result": "valid"})
    before_invalid = _get_sample(
        "certificate_verifications_total", {"result": "invalid"}
    )

    client.post(
        "/generateCertificate", json={"id": "metrics-2", "name": "Bia", "grade": "8"}
    )
    client.get("/verifyCertificate/metrics-2")
    client.get("/verifyCertificate/not-issued")

    after_valid = _get_sample("certificate_verifications_total", {"result": "valid"})
    after_invalid = _get_sample(
        "certificate_verifications_total", {"result": "invalid"}
    )
    assert after_valid - before_valid == 1
    assert after_invalid - before_invalid == 1


def test_metrics_endpoint_returns_prometheus_format(client: TestClient) -> None:
    client.get("/health")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "http_requests_total" in resp.text
    assert "certificates_issued_total" in resp.text


def test_metrics_endpoint_not_self_instrumented(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "/metrics", "status_code": "200"}
    before = _get_sample("http_requests_total", labels)
    client.get("/metrics")
    client.get("/metrics")
    assert _get_sample("http_requests_total", labels) == before
