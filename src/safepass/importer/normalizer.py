"""RecordNormalizer: raw field-map to CanonicalRecord."""

from __future__ import annotations

from typing import Any, Mapping

from safepass.core.types import CanonicalField
from safepass.importer.column_mapper import map_column
from safepass.models.credential import CanonicalRecord

UNTITLED = "Untitled"

# Spreadsheet and JS exporters write these for missing cells
_NULL_LITERALS = frozenset({"null", "undefined"})


def clean_value(value: Any) -> str:
    if value is None:
        return ""
    text = str(value).strip()
    return "" if text in _NULL_LITERALS else text


def normalize(raw: Mapping[str, Any]) -> CanonicalRecord | None:
    """Map one raw row onto the canonical fields.

    The first non-empty value per canonical field wins; unmapped headers are
    dropped. Returns None for degenerate rows with no title, username or url.
    """
    values: dict[CanonicalField, str] = {}
    for raw_key, raw_value in raw.items():
        field = map_column(str(raw_key))
        if field is None or field in values:
            continue
        cleaned = clean_value(raw_value)
        if cleaned:
            values[field] = cleaned

    title = values.get("title")
    username = values.get("username")
    url = values.get("url")
    if not (title or username or url):
        return None

    return CanonicalRecord(
        title=title or username or UNTITLED,
        email=values.get("email"),
        username=username,
        secret=values.get("secret", ""),
        url=url,
        notes=values.get("notes"),
    )
