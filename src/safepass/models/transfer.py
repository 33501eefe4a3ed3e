"""Import result and warning models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class WarningReason(StrEnum):
    PLAINTEXT_SECRET_DETECTED = "PlaintextSecretDetected"
    PLAINTEXT_SECRET_AUTO_ENCRYPTED = "PlaintextSecretAutoEncrypted"


class ImportWarning(BaseModel):
    """Advisory note about one imported row."""

    subject_label: str
    reason: WarningReason

    model_config = {"frozen": True}


class ImportResult(BaseModel):
    """Outcome of a bulk import: rows stored plus per-row warnings in source order."""

    imported_count: int = Field(default=0, ge=0)
    warnings: list[ImportWarning] = Field(default_factory=list)

    @property
    def plaintext_count(self) -> int:
        return len(self.warnings)
