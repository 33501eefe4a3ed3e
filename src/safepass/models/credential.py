"""Credential record models.

``CanonicalRecord`` is the normalized shape every import row is reduced to,
whatever the source format. ``StoredCredential`` is what a credential store
hands back: the same fields plus identity and timestamps, with the secret
under its persisted name ``encrypted_password``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


class CanonicalRecord(BaseModel):
    """Single credential in canonical six-field form."""

    title: str
    email: Optional[str] = None
    username: Optional[str] = None
    secret: str = ""  # plaintext pending encryption, or ivHex:cipherHex
    url: Optional[str] = None
    notes: Optional[str] = None

    model_config = {"frozen": True}


class StoredCredential(BaseModel):
    """A credential entry as persisted for one user."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    title: str
    email: Optional[str] = None
    username: Optional[str] = None
    encrypted_password: str = ""
    url: Optional[str] = None
    notes: Optional[str] = None
    created_at: str = Field(default_factory=_utcnow_iso)
    updated_at: str = Field(default_factory=_utcnow_iso)

    @classmethod
    def from_record(cls, user_id: str, record: CanonicalRecord) -> StoredCredential:
        return cls(
            user_id=user_id,
            title=record.title,
            email=record.email,
            username=record.username,
            encrypted_password=record.secret,
            url=record.url,
            notes=record.notes,
        )

    def to_record(self) -> CanonicalRecord:
        return CanonicalRecord(
            title=self.title,
            email=self.email,
            username=self.username,
            secret=self.encrypted_password,
            url=self.url,
            notes=self.notes,
        )
