"""Tests for configuration defaults and env overrides."""

from __future__ import annotations

from safepass.core.config import AppSettings, DynamoDBConfig, ImportConfig


def test_default_settings():
    settings = AppSettings()
    assert settings.environment == "dev"
    assert settings.persistence_backend == "memory"
    assert settings.importer.auto_encrypt is True


def test_dynamodb_config_defaults():
    config = DynamoDBConfig()
    assert config.table_name == "safepass-password-entries"
    assert config.endpoint_url is None


def test_import_config_env_override(monkeypatch):
    monkeypatch.setenv("SAFEPASS_IMPORT_AUTO_ENCRYPT", "false")
    monkeypatch.setenv("SAFEPASS_IMPORT_MAX_UPLOAD_BYTES", "2048")
    config = ImportConfig()
    assert config.auto_encrypt is False
    assert config.max_upload_bytes == 2048
