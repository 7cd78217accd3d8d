from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CertificateRecord:
    """Durable issuance record, one per id.  Never updated once written."""

    id: str
    name: str
    grade: str

    def to_item(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "grade": self.grade}

    @staticmethod
    def from_item(item: dict) -> CertificateRecord:
        return CertificateRecord(
            id=str(item["id"]),
            name=str(item.get("name", "")),
            grade=str(item.get("grade", "")),
        )


@dataclass(frozen=True, slots=True)
class CertificateTemplateData:
    """Fields substituted into certificate.html."""

    id: str
    name: str
    grade: str
    date: str  # DD/MM/YYYY
    medal: str  # base64 PNG payload

    @staticmethod
    def for_record(
        record: CertificateRecord, *, date: str, medal: str
    ) -> CertificateTemplateData:
        return CertificateTemplateData(
            id=record.id, name=record.name, grade=record.grade, date=date, medal=medal
        )
