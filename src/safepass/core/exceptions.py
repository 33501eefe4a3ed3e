"""SafePass exception hierarchy."""

from __future__ import annotations


class SafePassError(Exception):
    """Base exception for all SafePass errors."""


class TransferError(SafePassError):
    """Error while importing or exporting a credential file."""


class UnsupportedFormatError(TransferError):
    """File extension is not one of the supported containers."""

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(f"Unsupported file format: {extension!r}")


class MalformedInputError(TransferError):
    """Container could not be parsed (bad encoding, CSV quoting, XML, workbook)."""


class NothingToExportError(TransferError):
    """Subject has no stored credentials."""


class PersistenceFailureError(TransferError):
    """The credential store rejected a row; the rest of the import was abandoned."""

    def __init__(self, row_number: int, imported_count: int, message: str) -> None:
        self.row_number = row_number
        self.imported_count = imported_count
        super().__init__(
            f"Row {row_number} could not be stored after {imported_count} imported: {message}"
        )


class CipherError(SafePassError):
    """Error decrypting a wire-format secret."""


class MalformedSecretError(CipherError):
    """Value is not a valid ``ivHex:cipherHex`` secret."""


class AuthenticationFailedError(CipherError):
    """GCM tag did not verify: wrong passphrase or tampered data."""


class StoreError(SafePassError):
    """Credential store operation failed."""
