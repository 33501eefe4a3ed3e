"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class DynamoDBConfig(BaseSettings):
    """DynamoDB credential table configuration."""

    model_config = {"env_prefix": "SAFEPASS_DYNAMO_"}

    table_name: str = "safepass-password-entries"
    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class ImportConfig(BaseSettings):
    """Bulk import behaviour."""

    model_config = {"env_prefix": "SAFEPASS_IMPORT_"}

    auto_encrypt: bool = True
    max_upload_bytes: int = 10 * 1024 * 1024


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "SAFEPASS_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    log_json: bool = False
    persistence_backend: Literal["memory", "dynamodb"] = "memory"

    dynamodb: DynamoDBConfig = DynamoDBConfig()
    importer: ImportConfig = ImportConfig()
