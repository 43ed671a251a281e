"""Create the DynamoDB contributions table and seed the demo user.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
from typing import Any

import boto3

from nestegg.persistence import demo_policy
from nestegg.persistence.dynamodb_backend import policy_key, policy_to_item

DEFAULT_TABLE = "nestegg-contributions"
DEFAULT_USER = "user123"


def create_table(ddb: Any, table_name: str = DEFAULT_TABLE) -> bool:
    """Create the contributions table. Returns False if it already exists."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])
    if table_name in existing:
        print(f"  Table {table_name} already exists, skipping")
        return False
    client.create_table(
        TableName=table_name,
        KeySchema=[
            {"AttributeName": "PK", "KeyType": "HASH"},
            {"AttributeName": "SK", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "PK", "AttributeType": "S"},
            {"AttributeName": "SK", "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )
    print(f"  Created table {table_name}")
    return True


def seed_demo_user(ddb: Any, table_name: str = DEFAULT_TABLE, user_id: str = DEFAULT_USER,
                   overwrite: bool = False) -> bool:
    """Write the demo policy for ``user_id``. Existing records are kept unless ``overwrite``."""
    tbl = ddb.Table(table_name)
    if not overwrite and "Item" in tbl.get_item(Key=policy_key(user_id)):
        print(f"  Policy for {user_id} already exists, skipping")
        return False
    tbl.put_item(Item=policy_to_item(demo_policy(user_id)))
    print(f"  Seeded demo policy for {user_id}")
    return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed DynamoDB for NestEgg")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-name", default=DEFAULT_TABLE, help="Contributions table name")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    parser.add_argument("--user-id", default=DEFAULT_USER, help="Demo user id to seed")
    parser.add_argument("--overwrite", action="store_true", help="Replace an existing demo record")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating table...")
    create_table(ddb, args.table_name)

    print("Seeding data...")
    seed_demo_user(ddb, args.table_name, args.user_id, overwrite=args.overwrite)

    print("Done!")


if __name__ == "__main__":
    main()
