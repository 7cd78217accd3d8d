"""Tests for structured (JSON) logging output.

CloudWatch Logs Insights only indexes fields of lines that parse as JSON,
so a formatter regression turns every certificate_id filter into an
empty result.
"""

from __future__ import annotations

import json
import logging
import sys

from certgen.core.logging import _ContainerFormatter, _JsonFormatter


def _record(**kwargs) -> logging.LogRecord:
    params = {
        "name": "certgen.services.certificate_service",
        "level": logging.INFO,
        "pathname": "certificate_service.py",
        "lineno": 10,
        "msg": "Issued certificate %s",
        "args": ("abc123",),
        "exc_info": None,
    }
    params.update(kwargs)
    return logging.LogRecord(**params)


def test_json_formatter_produces_valid_json() -> None:
    parsed = json.loads(_JsonFormatter().format(_record()))
    assert parsed["level"] == "INFO"
    assert parsed["logger"] == "certgen.services.certificate_service"
    assert parsed["message"] == "Issued certificate abc123"
    assert "timestamp" in parsed


def test_json_formatter_includes_context_fields() -> None:
    record = _record()
    record.request_id = "abc-123"  # type: ignore[attr-defined]
    record.method = "POST"  # type: ignore[attr-defined]
    record.path = "/generateCertificate"  # type: ignore[attr-defined]
    record.status_code = 201  # type: ignore[attr-defined]
    record.duration_ms = 812.5  # type: ignore[attr-defined]
    record.certificate_id = "abc123"  # type: ignore[attr-defined]

    parsed = json.loads(_JsonFormatter().format(record))
    assert parsed["request_id"] == "abc-123"
    assert parsed["method"] == "POST"
    assert parsed["path"] == "/generateCertificate"
    assert parsed["status_code"] == 201
    assert parsed["duration_ms"] == 812.5
    assert parsed["certificate_id"] == "abc123"


def test_json_formatter_omits_absent_fields() -> None:
    parsed = json.loads(_JsonFormatter().format(_record()))
    assert "certificate_id" not in parsed
    assert "status_code" not in parsed


def test_json_formatter_keeps_non_ascii_names_parseable() -> None:
    record = _record(msg="Issued certificate for %s", args=("João Conceição",))
    parsed = json.loads(_JsonFormatter().format(record))
    assert parsed["message"] == "Issued certificate for João Conceição"


def test_json_formatter_includes_exception_info() -> None:
    try:
        raise RuntimeError("chromium exited")
    except RuntimeError:
        record = _record(
            level=logging.ERROR, msg="PDF export failed", args=(), exc_info=sys.exc_info()
        )
        output = _JsonFormatter().format(record)

    parsed = json.loads(output)
    assert "RuntimeError: chromium exited" in parsed["exception"]


def test_container_formatter_is_plain_text() -> None:
    output = _ContainerFormatter().format(_record())
    assert "INFO" in output
    assert "certgen.services.certificate_service" in output
    assert "Issued certificate abc123" in output
    try:
        json.loads(output)
        raise AssertionError("Container format should not be valid JSON")
    except json.JSONDecodeError:
        pass
