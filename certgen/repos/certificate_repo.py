from __future__ import annotations

from typing import Protocol

from certgen.models.certificate import CertificateRecord


class CertificateRepo(Protocol):
    def find_by_id(self, certificate_id: str) -> CertificateRecord | None: ...
    def create_if_absent(self, record: CertificateRecord) -> bool: ...


class InMemoryCertificateRepo:
    def __init__(self) -> None:
        self._by_id: dict[str, CertificateRecord] = {}

    def find_by_id(self, certificate_id: str) -> CertificateRecord | None:
        return self._by_id.get(certificate_id)

    def create_if_absent(self, record: CertificateRecord) -> bool:
        """Insert the record unless its id is taken.  Returns True when
        written, False when an existing record was left untouched."""
        if record.id in self._by_id:
            return False
        self._by_id[record.id] = record
        return True
