from __future__ import annotations

# FastAPI → Starlette → httpx
# pip install "fastapi[standard]"
from fastapi.testclient import TestClient

from certgen.main import app

client = TestClient(app)


def test_health_returns_ok() -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_docs_disabled_outside_dev() -> None:
    assert client.get("/docs").status_code == 404
    assert client.get("/redoc").status_code == 404


def test_cors_preflight_allows_any_origin() -> None:
    resp = client.options(
        "/generateCertificate",
        headers={
            "Origin": "https://school.example.com",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"


def test_unknown_route_is_404() -> None:
    assert client.get("/users").status_code == 404


def test_validation_errors_are_400_not_422() -> None:
    resp = client.post("/generateCertificate", json=["abc123", "Ana Silva", "9.5"])
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid certificate request"
