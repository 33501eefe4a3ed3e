"""In-memory credential store: dict-backed, for unit tests and local dev."""

from __future__ import annotations

from safepass.models.credential import CanonicalRecord, StoredCredential


class MemoryCredentialStore:
    """Dict-backed ICredentialStore."""

    def __init__(self) -> None:
        self._entries: dict[str, list[StoredCredential]] = {}

    def create(self, user_id: str, record: CanonicalRecord) -> str:
        entry = StoredCredential.from_record(user_id, record)
        self._entries.setdefault(user_id, []).append(entry)
        return entry.id

    def list_for_user(self, user_id: str) -> list[StoredCredential]:
        return list(self._entries.get(user_id, []))
