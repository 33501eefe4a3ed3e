"""Encrypted bulk export of a subject's vault."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from safepass.core.exceptions import NothingToExportError, UnsupportedFormatError
from safepass.core.protocols import ICredentialStore
from safepass.crypto.cipher import CredentialCipher
from safepass.exporter import format_writer
from safepass.importer.format_parser import normalize_extension
from safepass.importer.plaintext_detector import looks_plaintext
from safepass.models.credential import StoredCredential

logger = structlog.get_logger(__name__)

EXPORT_FILENAME_STEM = "safepass_export"


@dataclass(frozen=True)
class ExportFile:
    content: bytes
    media_type: str
    filename: str


class ExportService:
    """Serialize stored credentials, sealing any secret still held in plaintext."""

    def __init__(
        self,
        store: ICredentialStore,
        *,
        cipher: type[CredentialCipher] = CredentialCipher,
    ) -> None:
        self._store = store
        self._cipher = cipher

    def export(self, subject_id: str, fmt: str = "csv", passphrase: str | None = None) -> ExportFile:
        """Build the export file for ``subject_id``.

        With a passphrase, plaintext secrets are encrypted under one key derived
        for the whole batch; without one they are written as stored.

        Raises:
            NothingToExportError: the subject has no credentials.
            UnsupportedFormatError: ``fmt`` is not csv, xlsx, xlsm or xml.
        """
        ext = normalize_extension(fmt)
        if ext not in format_writer.MEDIA_TYPES:
            raise UnsupportedFormatError(fmt)

        entries = self._store.list_for_user(subject_id)
        if not entries:
            raise NothingToExportError(f"No passwords to export for {subject_id!r}")

        key: bytes | None = None
        sealed: list[StoredCredential] = []
        for entry in entries:
            if passphrase and looks_plaintext(entry.encrypted_password):
                if key is None:
                    key = self._cipher.derive_key(passphrase, subject_id)
                entry = entry.model_copy(
                    update={"encrypted_password": self._cipher.encrypt(entry.encrypted_password, key)}
                )
            sealed.append(entry)

        content, media_type = format_writer.write(sealed, ext)
        logger.info(
            "export_completed",
            subject_id=subject_id,
            format=ext,
            entries=len(sealed),
            sealed_on_export=key is not None,
        )
        return ExportFile(
            content=content,
            media_type=media_type,
            filename=f"{EXPORT_FILENAME_STEM}.{ext}",
        )
