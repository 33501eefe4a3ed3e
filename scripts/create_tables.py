"""Create the SafePass DynamoDB credential table.

Usage:
    python scripts/create_tables.py --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
from typing import Any

import boto3
import structlog

from safepass.core.config import DynamoDBConfig
from safepass.core.logging import configure_logging

logger = structlog.get_logger("safepass.scripts.create_tables")


def create_tables(ddb: Any, table_name: str = DynamoDBConfig().table_name, suffix: str = "") -> bool:
    """Create the credential table. Returns False if it already exists."""
    client = ddb.meta.client
    full_name = f"{table_name}{suffix}"
    if full_name in client.list_tables().get("TableNames", []):
        logger.info("table_exists", table=full_name)
        return False

    client.create_table(
        TableName=full_name,
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
    logger.info("table_created", table=full_name)
    return True


def main() -> None:
    config = DynamoDBConfig()
    parser = argparse.ArgumentParser(description="Create SafePass DynamoDB tables")
    parser.add_argument("--endpoint-url", default=config.endpoint_url)
    parser.add_argument("--region", default=config.region)
    parser.add_argument("--suffix", default=config.table_suffix)
    args = parser.parse_args()

    configure_logging()
    kwargs: dict = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url
    create_tables(boto3.resource("dynamodb", **kwargs), config.table_name, suffix=args.suffix)


if __name__ == "__main__":
    main()
