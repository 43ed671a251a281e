"""DynamoDB backend implementing IPolicyStore.

One item per user: ``PK = USER#{user_id}``, ``SK = POLICY``; the remaining
attributes are the policy's camelCase JSON fields with numbers as Decimal.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from nestegg.core.exceptions import NotFoundError, StoreError
from nestegg.core.types import Clock
from nestegg.models.policy import ContributionPolicy, PolicyUpdate, apply_update, utcnow

POLICY_SK = "POLICY"


def _to_dynamodb(value: Any) -> Any:
    """Convert floats to Decimal; DynamoDB rejects Python floats."""
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _to_dynamodb(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_dynamodb(v) for v in value]
    return value


def _decode_decimals(item: dict[str, Any]) -> dict[str, Any]:
    """Convert Decimal values in a DynamoDB item to int/float."""
    out: dict[str, Any] = {}
    for k, v in item.items():
        if isinstance(v, Decimal):
            out[k] = int(v) if v == int(v) else float(v)
        elif isinstance(v, dict):
            out[k] = _decode_decimals(v)
        else:
            out[k] = v
    return out


def policy_key(user_id: str) -> dict[str, str]:
    return {"PK": f"USER#{user_id}", "SK": POLICY_SK}


def policy_to_item(policy: ContributionPolicy) -> dict[str, Any]:
    return {**policy_key(policy.user_id), **_to_dynamodb(policy.model_dump(mode="json", by_alias=True))}


def item_to_policy(item: dict[str, Any]) -> ContributionPolicy:
    fields = {k: v for k, v in _decode_decimals(item).items() if k not in ("PK", "SK")}
    return ContributionPolicy.model_validate(fields)


class DynamoDBPolicyStore:
    """Production IPolicyStore backed by a single DynamoDB table."""

    def __init__(self, table_name: str, region: str = "us-east-1",
                 endpoint_url: str | None = None, clock: Clock = utcnow) -> None:
        self._table_name = table_name
        self._region = region
        self._endpoint_url = endpoint_url
        self._clock = clock
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)
        self._table = self._ddb.Table(table_name)

    def _load(self, user_id: str) -> ContributionPolicy | None:
        try:
            resp = self._table.get_item(Key=policy_key(user_id))
        except (ClientError, BotoCoreError) as exc:
            raise StoreError(f"DynamoDB get_item failed for user_id={user_id!r}: {exc}") from exc
        item = resp.get("Item")
        return item_to_policy(item) if item else None

    def _save(self, policy: ContributionPolicy) -> None:
        try:
            self._table.put_item(Item=policy_to_item(policy))
        except (ClientError, BotoCoreError) as exc:
            raise StoreError(f"DynamoDB put_item failed for user_id={policy.user_id!r}: {exc}") from exc

    # ---- IPolicyStore methods ----

    def get(self, user_id: str) -> ContributionPolicy:
        policy = self._load(user_id)
        if policy is None:
            raise NotFoundError(user_id)
        return policy

    def upsert(self, user_id: str, update: PolicyUpdate) -> ContributionPolicy:
        policy = apply_update(self._load(user_id), user_id, update, self._clock())
        self._save(policy)
        return policy

    def put(self, policy: ContributionPolicy) -> None:
        self._save(policy)

    def ping(self) -> bool:
        try:
            self._ddb.meta.client.describe_table(TableName=self._table_name)
        except (ClientError, BotoCoreError) as exc:
            raise StoreError(f"DynamoDB table {self._table_name!r} unavailable: {exc}") from exc
        return True
