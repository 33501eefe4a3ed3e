"""Header-to-field mapping for third-party credential exports.

Exports from browsers and password managers name the same column a dozen
ways ("Login Name", "user_id", "E-mail Address"). ``map_column`` reduces a
raw header to one of the six canonical fields with three ordered phases:

1. exact: normalized header equals a normalized alias;
2. header contains alias: multi-word aliases as a literal substring,
   single-word aliases only as a whole token ("user" must not be claimed by
   "username" here);
3. alias contains header: headers of at least 3 characters, and the alias
   may be at most 4 characters longer ("user" -> "username", but "id" never
   matches inside "userid").

Each phase walks the fields in ``FIELD_ORDER`` and returns the first hit, so
tie-breaks are reproducible. An alias that normalizes identically for two
fields stays with the field declared first.
"""

from __future__ import annotations

import re
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from safepass.core.types import CanonicalField

FIELD_ORDER: tuple[CanonicalField, ...] = ("title", "email", "username", "secret", "url", "notes")

DECLARED_ALIASES: Mapping[CanonicalField, tuple[str, ...]] = MappingProxyType({
    "title": (
        "site name", "website name", "title", "name", "site", "website",
        "service", "account", "app", "application",
    ),
    "email": ("email address", "e-mail address", "email", "e-mail", "mail"),
    "username": (
        "username", "user name", "login name", "account name", "user id",
        "userid", "login", "user",
    ),
    "secret": (
        "encrypted password", "encrypted_password", "password", "pwd", "pass",
        "secret", "credential",
    ),
    "url": (
        "site url", "web address", "site address", "url", "website", "link",
        "address", "domain",
    ),
    "notes": (
        "additional info", "extra", "comments", "comment", "description",
        "details", "notes", "note", "memo", "info",
    ),
})

PHASE3_MIN_HEADER_LENGTH = 3
PHASE3_MAX_EXTRA_CHARS = 4

_SEPARATORS_RE = re.compile(r"[_\s-]+")
_DISALLOWED_RE = re.compile(r"[^a-z0-9 ]")


def normalize_header(text: str) -> str:
    """Lowercase, fold ``_``/space/``-`` runs to one space, drop other symbols, trim."""
    collapsed = _SEPARATORS_RE.sub(" ", text.lower())
    return _DISALLOWED_RE.sub("", collapsed).strip()


def _build_alias_table() -> tuple[
    Mapping[CanonicalField, tuple[str, ...]],
    tuple[tuple[str, CanonicalField, CanonicalField], ...],
]:
    owner: dict[str, CanonicalField] = {}
    table: dict[CanonicalField, list[str]] = {field: [] for field in FIELD_ORDER}
    shadowed: list[tuple[str, CanonicalField, CanonicalField]] = []
    for field in FIELD_ORDER:
        for alias in DECLARED_ALIASES[field]:
            normalized = normalize_header(alias)
            claimed_by = owner.get(normalized)
            if claimed_by is None:
                owner[normalized] = field
                table[field].append(normalized)
            elif claimed_by != field:
                shadowed.append((normalized, field, claimed_by))
    return (
        MappingProxyType({field: tuple(aliases) for field, aliases in table.items()}),
        tuple(shadowed),
    )


# Normalized, de-duplicated aliases per field; built once at import.
# SHADOWED_ALIASES lists (alias, losing field, kept by) for every collision.
ALIAS_TABLE, SHADOWED_ALIASES = _build_alias_table()


def map_column(raw_header: str) -> CanonicalField | None:
    """Return the canonical field for ``raw_header``, or None if unmapped."""
    return _map_normalized(normalize_header(raw_header))


@lru_cache(maxsize=1024)
def _map_normalized(header: str) -> CanonicalField | None:
    if not header:
        return None

    for field in FIELD_ORDER:
        if header in ALIAS_TABLE[field]:
            return field

    tokens = header.split(" ")
    for field in FIELD_ORDER:
        for alias in ALIAS_TABLE[field]:
            if " " in alias:
                if alias in header:
                    return field
            elif alias in tokens:
                return field

    if len(header) >= PHASE3_MIN_HEADER_LENGTH:
        for field in FIELD_ORDER:
            for alias in ALIAS_TABLE[field]:
                if header in alias and len(alias) - len(header) <= PHASE3_MAX_EXTRA_CHARS:
                    return field

    return None
