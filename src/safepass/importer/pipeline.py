"""ImportPipeline: parse, normalize, classify, encrypt, persist.

Rows are processed strictly in source order. The store is called once per
accepted row and the first failure stops the import: rows already stored
stay stored and no later row is attempted.
"""

from __future__ import annotations

import structlog

from safepass.core.exceptions import PersistenceFailureError
from safepass.core.protocols import ICredentialStore
from safepass.crypto.cipher import CredentialCipher
from safepass.importer import format_parser
from safepass.importer.normalizer import normalize
from safepass.importer.plaintext_detector import looks_plaintext
from safepass.models.transfer import ImportResult, ImportWarning, WarningReason

logger = structlog.get_logger(__name__)


class ImportPipeline:
    """Bulk credential import for one subject at a time.

    Dependencies are injected at construction time; the pipeline itself holds
    no per-import state, so one instance serves concurrent imports.
    """

    def __init__(
        self,
        store: ICredentialStore,
        *,
        auto_encrypt: bool = True,
        cipher: type[CredentialCipher] = CredentialCipher,
    ) -> None:
        self._store = store
        self._auto_encrypt = auto_encrypt
        self._cipher = cipher

    def run(
        self,
        data: bytes,
        extension: str,
        subject_id: str,
        passphrase: str | None = None,
    ) -> ImportResult:
        """Import every usable row of ``data`` into ``subject_id``'s vault.

        Plaintext secrets are encrypted with the passphrase-derived key when
        auto-encrypt is on and a passphrase is given; either way each one is
        reported as an ImportWarning.

        Raises:
            UnsupportedFormatError: unknown extension, nothing imported.
            MalformedInputError: unreadable container, nothing imported.
            PersistenceFailureError: the store failed on a row; carries the
                count of rows stored before it.
        """
        log = logger.bind(subject_id=subject_id, extension=extension)
        rows = format_parser.parse(data, extension)

        encrypt = self._auto_encrypt and bool(passphrase)
        key: bytes | None = None
        result = ImportResult()
        skipped = 0

        for row_number, raw in enumerate(rows, start=1):
            record = normalize(raw)
            if record is None:
                skipped += 1
                continue

            if looks_plaintext(record.secret):
                if encrypt:
                    if key is None:
                        key = self._cipher.derive_key(passphrase, subject_id)
                    record = record.model_copy(
                        update={"secret": self._cipher.encrypt(record.secret, key)}
                    )
                    reason = WarningReason.PLAINTEXT_SECRET_AUTO_ENCRYPTED
                else:
                    reason = WarningReason.PLAINTEXT_SECRET_DETECTED
                result.warnings.append(ImportWarning(subject_label=record.title, reason=reason))

            try:
                self._store.create(subject_id, record)
            except Exception as exc:
                log.error(
                    "import_aborted",
                    row=row_number,
                    imported=result.imported_count,
                    error=str(exc),
                )
                raise PersistenceFailureError(row_number, result.imported_count, str(exc)) from exc
            result.imported_count += 1

        log.info(
            "import_completed",
            imported=result.imported_count,
            skipped=skipped,
            plaintext=result.plaintext_count,
            auto_encrypted=key is not None,
        )
        return result
