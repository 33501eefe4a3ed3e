"""Protocol interfaces for SafePass collaborators.

Inter-layer communication uses these Protocols: structural typing,
no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from safepass.models.credential import CanonicalRecord, StoredCredential


# ---------------------------------------------------------------------------
# Persistence: Credential Store
# ---------------------------------------------------------------------------

@runtime_checkable
class ICredentialStore(Protocol):
    """Per-user credential records (one document per login entry)."""

    def create(self, user_id: str, record: CanonicalRecord) -> str: ...

    def list_for_user(self, user_id: str) -> list[StoredCredential]: ...
