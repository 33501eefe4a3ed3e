"""Best-effort check for secrets that arrive unencrypted.

Advisory only: a hex password shaped like ``ab12:cd34`` or longer than 64
hex characters reads as encrypted, and any other foreign ciphertext reads
as plaintext. Never use the result as a security decision.
"""

from __future__ import annotations

import re

_WIRE_RE = re.compile(r"[0-9a-f]+:[0-9a-f]+", re.IGNORECASE)
_HEX_RE = re.compile(r"[0-9a-f]+", re.IGNORECASE)

OPAQUE_BLOB_MIN_LENGTH = 65


def looks_plaintext(secret: str | None) -> bool:
    if not secret:
        return False
    if _WIRE_RE.fullmatch(secret):
        return False
    # Long hex blobs are treated as another manager's ciphertext
    if len(secret) >= OPAQUE_BLOB_MIN_LENGTH and _HEX_RE.fullmatch(secret):
        return False
    return True
