"""DynamoDB backend implementing ICredentialStore.

Single table, one item per credential:
    PK = USER#{user_id}
    SK = ENTRY#{created_at}#{id}
so a partition query returns a user's entries in creation order.
"""

from __future__ import annotations

from typing import Any

import boto3
import structlog
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from safepass.core.exceptions import StoreError
from safepass.models.credential import CanonicalRecord, StoredCredential

logger = structlog.get_logger(__name__)

_ITEM_FIELDS = (
    "id", "user_id", "title", "email", "username", "encrypted_password",
    "url", "notes", "created_at", "updated_at",
)


def _to_item(entry: StoredCredential) -> dict[str, Any]:
    item: dict[str, Any] = {
        "PK": f"USER#{entry.user_id}",
        "SK": f"ENTRY#{entry.created_at}#{entry.id}",
    }
    for field in _ITEM_FIELDS:
        value = getattr(entry, field)
        if value is not None:
            item[field] = value
    return item


def _from_item(item: dict[str, Any]) -> StoredCredential:
    return StoredCredential(**{k: item[k] for k in _ITEM_FIELDS if k in item})


class DynamoDBCredentialStore:
    """Production ICredentialStore backed by DynamoDB."""

    def __init__(self, table_name: str, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._table_name = f"{table_name}{table_suffix}"
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._table = boto3.resource("dynamodb", **kwargs).Table(self._table_name)

    @property
    def table_name(self) -> str:
        return self._table_name

    def create(self, user_id: str, record: CanonicalRecord) -> str:
        entry = StoredCredential.from_record(user_id, record)
        try:
            self._table.put_item(
                Item=_to_item(entry),
                ConditionExpression="attribute_not_exists(PK)",
            )
        except ClientError as exc:
            raise StoreError(
                f"DynamoDB put failed for user_id={user_id!r} in {self._table_name!r}: {exc}"
            ) from exc
        logger.debug("credential_created", user_id=user_id, entry_id=entry.id)
        return entry.id

    def list_for_user(self, user_id: str) -> list[StoredCredential]:
        items: list[dict[str, Any]] = []
        query: dict[str, Any] = {
            "KeyConditionExpression": Key("PK").eq(f"USER#{user_id}") & Key("SK").begins_with("ENTRY#"),
        }
        try:
            while True:
                resp = self._table.query(**query)
                items.extend(resp.get("Items", []))
                last_key = resp.get("LastEvaluatedKey")
                if not last_key:
                    break
                query["ExclusiveStartKey"] = last_key
        except ClientError as exc:
            raise StoreError(f"DynamoDB query failed for user_id={user_id!r}: {exc}") from exc
        return [_from_item(item) for item in items]
