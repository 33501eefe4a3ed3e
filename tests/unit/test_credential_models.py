"""Tests for credential and import result models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from safepass.models.credential import CanonicalRecord, StoredCredential
from safepass.models.transfer import ImportResult, ImportWarning, WarningReason


def test_canonical_record_is_frozen():
    record = CanonicalRecord(title="Gmail", secret="hunter2")
    with pytest.raises(ValidationError):
        record.secret = "changed"


def test_model_copy_leaves_original_untouched():
    record = CanonicalRecord(title="Gmail", secret="hunter2")
    sealed = record.model_copy(update={"secret": "aa:bb"})
    assert record.secret == "hunter2"
    assert sealed.secret == "aa:bb"


def test_stored_credential_from_record_maps_secret():
    entry = StoredCredential.from_record("u1", CanonicalRecord(title="Gmail", secret="aa:bb"))
    assert entry.encrypted_password == "aa:bb"
    assert entry.user_id == "u1"
    assert entry.id
    assert entry.created_at <= entry.updated_at
    assert entry.to_record() == CanonicalRecord(title="Gmail", secret="aa:bb")


def test_import_result_rejects_negative_count():
    with pytest.raises(ValidationError):
        ImportResult(imported_count=-1)


def test_warning_reason_serializes_as_name():
    warning = ImportWarning(subject_label="Gmail", reason=WarningReason.PLAINTEXT_SECRET_DETECTED)
    assert warning.model_dump(mode="json") == {
        "subject_label": "Gmail",
        "reason": "PlaintextSecretDetected",
    }
