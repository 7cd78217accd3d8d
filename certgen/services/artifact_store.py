"""Certificate PDF storage.

Objects are keyed ``<id>.pdf`` in a single public-read bucket, so the
public URL of a certificate is a pure function of its id.  Verification
relies on that: it answers with url_for(id) without touching the bucket.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from botocore.exceptions import BotoCoreError, ClientError

from certgen.core.errors import ArtifactStoreError

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


def artifact_key(certificate_id: str) -> str:
    return f"{certificate_id}.pdf"


@runtime_checkable
class ArtifactStore(Protocol):
    def upload(self, certificate_id: str, pdf_bytes: bytes) -> str:
        """Store the PDF and return its public URL."""
        ...

    def url_for(self, certificate_id: str) -> str:
        """Public URL of the certificate PDF (existence is not checked)."""
        ...


class InMemoryArtifactStore:
    """Keeps uploaded PDFs in a dict, for local dev and tests."""

    def __init__(self, public_base_url: str) -> None:
        self._base = public_base_url.rstrip("/")
        self._objects: dict[str, bytes] = {}

    def upload(self, certificate_id: str, pdf_bytes: bytes) -> str:
        self._objects[artifact_key(certificate_id)] = pdf_bytes
        return self.url_for(certificate_id)

    def url_for(self, certificate_id: str) -> str:
        return f"{self._base}/{artifact_key(certificate_id)}"

    def get(self, certificate_id: str) -> bytes | None:
        return self._objects.get(artifact_key(certificate_id))


class S3ArtifactStore:
    """S3-backed store; each upload is one atomic put_object."""

    def __init__(self, s3_client, bucket: str, public_base_url: str) -> None:
        self._s3 = s3_client
        self._bucket = bucket
        self._base = public_base_url.rstrip("/")

    def upload(self, certificate_id: str, pdf_bytes: bytes) -> str:
        key = artifact_key(certificate_id)
        try:
            self._s3.put_object(
                Bucket=self._bucket,
                Key=key,
                ACL="public-read",
                Body=pdf_bytes,
                ContentType=PDF_CONTENT_TYPE,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("S3 put_object failed bucket=%s key=%s: %s", self._bucket, key, exc)
            raise ArtifactStoreError(str(exc)) from exc

        logger.info("Uploaded s3://%s/%s (%d bytes)", self._bucket, key, len(pdf_bytes))
        return self.url_for(certificate_id)

    def url_for(self, certificate_id: str) -> str:
        return f"{self._base}/{artifact_key(certificate_id)}"
