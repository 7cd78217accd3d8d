"""DynamoDB implementation of CertificateRepo."""

from __future__ import annotations

import logging

from botocore.exceptions import BotoCoreError, ClientError

from certgen.core.errors import RecordStoreError
from certgen.models.certificate import CertificateRecord

logger = logging.getLogger(__name__)


class DynamoCertificateRepo:
    """Satisfies the CertificateRepo Protocol using a DynamoDB table keyed by id.

    `table` is a boto3 ``dynamodb.Table`` resource.
    """

    def __init__(self, table) -> None:
        self._table = table

    def find_by_id(self, certificate_id: str) -> CertificateRecord | None:
        try:
            resp = self._table.get_item(
                Key={"id": certificate_id},
                ConsistentRead=True,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("DynamoDB get_item failed id=%s: %s", certificate_id, exc)
            raise RecordStoreError(str(exc)) from exc

        item = resp.get("Item")
        if item is None:
            return None
        return CertificateRecord.from_item(item)

    def create_if_absent(self, record: CertificateRecord) -> bool:
        """Conditional put: fails server-side when the id already exists,
        so two concurrent issuances cannot both write."""
        try:
            self._table.put_item(
                Item=record.to_item(),
                ConditionExpression="attribute_not_exists(id)",
            )
        except ClientError as exc:
            if exc.response["Error"]["Code"] == "ConditionalCheckFailedException":
                return False
            logger.error("DynamoDB put_item failed id=%s: %s", record.id, exc)
            raise RecordStoreError(str(exc)) from exc
        except BotoCoreError as exc:
            logger.error("DynamoDB put_item failed id=%s: %s", record.id, exc)
            raise RecordStoreError(str(exc)) from exc
        return True
