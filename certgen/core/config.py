from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

AppEnv = Literal["dev", "test", "prod"]
LogLevel = Literal["debug", "info", "warning", "error"]
StorageBackend = Literal["aws", "memory"]

_TRUTHY = ("1", "true", "yes", "on")


def _getenv(name: str, default: str) -> str:
    # Centralize env access so it’s easy to extend later (type casting, required vars)
    return os.environ.get(name, default).strip()


def _getflag(name: str) -> bool:
    return _getenv(name, "").lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    app_env: AppEnv
    log_level: LogLevel
    log_json: bool
    port: int
    is_offline: bool
    storage_backend: StorageBackend
    aws_region: str | None
    table_name: str
    bucket_name: str
    public_base_url: str
    dynamodb_endpoint_url: str | None
    s3_endpoint_url: str | None
    template_dir: Path
    chromium_executable_path: str | None
    local_pdf_path: Path

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"

    @property
    def is_test(self) -> bool:
        return self.app_env == "test"

    @property
    def is_prod(self) -> bool:
        return self.app_env == "prod"


def load_settings() -> Settings:
    app_env_raw = _getenv("APP_ENV", "dev").lower()
    log_level_raw = _getenv("LOG_LEVEL", "info").lower()
    # 3000 matches serverless-offline; DynamoDB Local keeps 8000
    port_raw = _getenv("PORT", "3000")
    backend_raw = _getenv("STORAGE_BACKEND", "aws").lower()

    if app_env_raw not in ("dev", "test", "prod"):
        raise ValueError(f"APP_ENV must be dev|test|prod (got {app_env_raw!r})")

    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )

    if backend_raw not in ("aws", "memory"):
        raise ValueError(f"STORAGE_BACKEND must be aws|memory (got {backend_raw!r})")

    try:
        port = int(port_raw)
    except ValueError:
        raise ValueError(f"PORT must be an integer (got {port_raw!r})") from None

    is_offline = _getflag("IS_OFFLINE")
    bucket_name = _getenv("CERT_BUCKET_NAME", "certificate-generator-serverless")
    if not bucket_name:
        raise ValueError("CERT_BUCKET_NAME must be non-empty")

    public_base_url = _getenv(
        "CERT_PUBLIC_BASE_URL", f"https://{bucket_name}.s3.amazonaws.com"
    ).rstrip("/")

    # serverless-offline runs DynamoDB Local next to the handlers
    dynamodb_default = "http://localhost:8000" if is_offline else ""
    dynamodb_endpoint_url = _getenv("DYNAMODB_ENDPOINT_URL", dynamodb_default) or None

    return Settings(  # type: ignore[arg-type]
        app_env=app_env_raw,
        log_level=log_level_raw,
        log_json=_getflag("LOG_JSON"),
        port=port,
        is_offline=is_offline,
        storage_backend=backend_raw,
        aws_region=_getenv("AWS_REGION", "") or None,
        table_name=_getenv("CERT_TABLE_NAME", "users_certificates"),
        bucket_name=bucket_name,
        public_base_url=public_base_url,
        dynamodb_endpoint_url=dynamodb_endpoint_url,
        s3_endpoint_url=_getenv("S3_ENDPOINT_URL", "") or None,
        template_dir=Path(_getenv("CERT_TEMPLATE_DIR", "templates")),
        chromium_executable_path=_getenv("CHROMIUM_EXECUTABLE_PATH", "") or None,
        local_pdf_path=Path(_getenv("LOCAL_PDF_PATH", "./certificate.pdf")),
    )


# Optional: module-level singleton so imports are cheap
SETTINGS = load_settings()
