"""Demo: issue and verify a certificate through the HTTP routes.

Runs entirely in-process against the in-memory stores, but prints a real
PDF with headless Chromium and keeps a copy at LOCAL_PDF_PATH.

Run with:
    playwright install chromium
    python scripts/demo_issue_flow.py
"""

from __future__ import annotations

import os

os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("IS_OFFLINE", "true")

from fastapi.testclient import TestClient  # noqa: E402

from certgen.core.config import SETTINGS  # noqa: E402
from certgen.main import app  # noqa: E402

CERTIFICATE = {"id": "demo-0001", "name": "Ana Silva", "grade": "9.5"}


def main() -> None:
    client = TestClient(app)

    # ── Step 1: verify before issuance ──────────────────────────────
    r = client.get(f"/verifyCertificate/{CERTIFICATE['id']}")
    print(f"1. GET  /verifyCertificate (unknown) → {r.status_code}  {r.json()}")

    # ── Step 2: rejected body ───────────────────────────────────────
    r = client.post("/generateCertificate", json={"id": CERTIFICATE["id"]})
    print(f"2. POST /generateCertificate (no name) → {r.status_code}")

    # ── Step 3: issue ───────────────────────────────────────────────
    r = client.post("/generateCertificate", json=CERTIFICATE)
    print(f"3. POST /generateCertificate → {r.status_code}  {r.json()}")

    # ── Step 4: re-issue with a different name ──────────────────────
    r = client.post(
        "/generateCertificate", json={**CERTIFICATE, "name": "Someone Else"}
    )
    print(f"4. POST /generateCertificate (again) → {r.status_code}  (stored name kept)")

    # ── Step 5: verify ──────────────────────────────────────────────
    r = client.get(f"/verifyCertificate/{CERTIFICATE['id']}")
    print(f"5. GET  /verifyCertificate → {r.status_code}  {r.json()}")

    print(f"\nPDF copy written to {SETTINGS.local_pdf_path.resolve()}")


if __name__ == "__main__":
    main()
