"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from safepass.core.config import AppSettings
from safepass.core.protocols import ICredentialStore
from safepass.persistence.dynamodb_backend import DynamoDBCredentialStore
from safepass.persistence.memory_backend import MemoryCredentialStore


def create_persistence(settings: AppSettings | None = None) -> ICredentialStore:
    """Create the credential store selected by application settings."""
    if settings is None:
        settings = AppSettings()

    if settings.persistence_backend == "dynamodb":
        return DynamoDBCredentialStore(
            table_name=settings.dynamodb.table_name,
            table_suffix=settings.dynamodb.table_suffix,
            region=settings.dynamodb.region,
            endpoint_url=settings.dynamodb.endpoint_url,
        )

    return MemoryCredentialStore()
