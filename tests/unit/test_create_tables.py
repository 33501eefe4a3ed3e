"""Tests for the DynamoDB table bootstrap script."""

from __future__ import annotations

import sys
from pathlib import Path

import boto3
import pytest
from moto import mock_aws

# Make scripts/ importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "scripts"))

from create_tables import create_tables  # noqa: E402


@pytest.fixture
def ddb():
    with mock_aws():
        yield boto3.resource("dynamodb", region_name="us-east-1")


class TestCreateTables:
    def test_creates_credential_table(self, ddb):
        assert create_tables(ddb, suffix="-test") is True
        client = boto3.client("dynamodb", region_name="us-east-1")
        assert client.list_tables()["TableNames"] == ["safepass-password-entries-test"]

    def test_idempotent_skips_existing(self, ddb):
        create_tables(ddb, suffix="-test")
        assert create_tables(ddb, suffix="-test") is False
        client = boto3.client("dynamodb", region_name="us-east-1")
        assert len(client.list_tables()["TableNames"]) == 1

    def test_key_schema(self, ddb):
        create_tables(ddb, table_name="custom")
        schema = ddb.Table("custom").key_schema
        assert {k["AttributeName"]: k["KeyType"] for k in schema} == {"PK": "HASH", "SK": "RANGE"}
