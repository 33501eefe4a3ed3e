"""Passphrase-derived AES-256-GCM encryption for stored secrets.

Flow:
1. ``derive_key`` stretches the master passphrase with PBKDF2-HMAC-SHA256,
   salted with a fixed prefix plus the owning subject id.
2. ``encrypt`` seals a secret under a fresh 96-bit IV and returns the
   ``ivHex:cipherHex`` wire string (GCM tag appended to the ciphertext).
3. ``decrypt`` reverses it, refusing anything that is not well formed or
   whose tag does not verify.

The salt depends only on the subject, so one derived key serves every secret
the subject owns. Derive it once per batch and pass it to every call.
"""

from __future__ import annotations

import os
import re

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from safepass.core.exceptions import AuthenticationFailedError, MalformedSecretError

_HEX_RE = re.compile(r"[0-9a-fA-F]+")


class CredentialCipher:
    """PBKDF2 key derivation plus AES-GCM in the ``ivHex:cipherHex`` format."""

    SALT_PREFIX = "safepass-"
    PBKDF2_ITERATIONS = 100_000
    KEY_LENGTH = 32  # 256 bits for AES-256
    IV_LENGTH = 12  # 96-bit nonce for GCM

    @staticmethod
    def derive_key(passphrase: str, subject_id: str) -> bytes:
        """Derive the subject's 256-bit key. Deliberately slow; call once per batch."""
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=CredentialCipher.KEY_LENGTH,
            salt=f"{CredentialCipher.SALT_PREFIX}{subject_id}".encode("utf-8"),
            iterations=CredentialCipher.PBKDF2_ITERATIONS,
        )
        return kdf.derive(passphrase.encode("utf-8"))

    @staticmethod
    def encrypt(plaintext: str, key: bytes) -> str:
        # IV must never repeat under one key
        iv = os.urandom(CredentialCipher.IV_LENGTH)
        sealed = AESGCM(key).encrypt(iv, plaintext.encode("utf-8"), None)
        return f"{iv.hex()}:{sealed.hex()}"

    @staticmethod
    def decrypt(secret: str, key: bytes) -> str:
        """Open a wire-format secret.

        Raises:
            MalformedSecretError: not ``ivHex:cipherHex`` or IV is not 12 bytes.
            AuthenticationFailedError: tag mismatch (wrong key or tampered data).
        """
        iv, sealed = CredentialCipher._split(secret)
        try:
            opened = AESGCM(key).decrypt(iv, sealed, None)
        except InvalidTag as exc:
            raise AuthenticationFailedError("Secret failed integrity check") from exc
        try:
            return opened.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedSecretError("Decrypted secret is not UTF-8 text") from exc

    @staticmethod
    def is_wire_format(value: str) -> bool:
        try:
            CredentialCipher._split(value)
        except MalformedSecretError:
            return False
        return True

    @staticmethod
    def _split(secret: str) -> tuple[bytes, bytes]:
        parts = secret.split(":")
        if len(parts) != 2:
            raise MalformedSecretError("Expected exactly one ':' separator")
        iv_hex, sealed_hex = parts
        for half in (iv_hex, sealed_hex):
            if not _HEX_RE.fullmatch(half) or len(half) % 2:
                raise MalformedSecretError("Secret halves must be even-length hexadecimal")
        iv = bytes.fromhex(iv_hex)
        if len(iv) != CredentialCipher.IV_LENGTH:
            raise MalformedSecretError(
                f"IV must be {CredentialCipher.IV_LENGTH} bytes, got {len(iv)}"
            )
        return iv, bytes.fromhex(sealed_hex)
