"""Shared test doubles: memory store re-export plus a store that fails on demand."""

from __future__ import annotations

from safepass.core.exceptions import StoreError
from safepass.models.credential import CanonicalRecord
from safepass.persistence.memory_backend import MemoryCredentialStore


class FailingCredentialStore(MemoryCredentialStore):
    """MemoryCredentialStore that raises StoreError on the ``fail_on``-th create (1-based)."""

    def __init__(self, fail_on: int) -> None:
        super().__init__()
        self.fail_on = fail_on
        self.attempts: list[CanonicalRecord] = []

    def create(self, user_id: str, record: CanonicalRecord) -> str:
        self.attempts.append(record)
        if len(self.attempts) == self.fail_on:
            raise StoreError("simulated write failure")
        return super().create(user_id, record)


__all__ = ["FailingCredentialStore", "MemoryCredentialStore"]
