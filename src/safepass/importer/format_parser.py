"""FormatParser: raw export bytes to flat header -> cell maps.

Supported containers are delimited tables (csv), spreadsheets (xlsx, xlsm;
first sheet only) and tagged markup (xml, ``<passwords><entry>...``).
Container-level problems are raised from ``parse()`` itself, before any row
is handed out, so a broken file never causes partial ingestion.
"""

from __future__ import annotations

import csv
import io
import xml.etree.ElementTree as ET
import zipfile
from datetime import date, datetime
from typing import Any, Iterator

import structlog
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from safepass.core.exceptions import MalformedInputError, UnsupportedFormatError
from safepass.core.types import RawFieldMap

logger = structlog.get_logger(__name__)

SUPPORTED_EXTENSIONS = frozenset({"csv", "xlsx", "xlsm", "xml"})

MARKUP_ROOT = "passwords"
MARKUP_ENTRY = "entry"
# Tag emitted first when an entry carries both it and its fallback
MARKUP_PREFERRED = {
    "name": "title",
    "password": "encrypted_password",
    "extra": "notes",
}


def normalize_extension(extension: str) -> str:
    return extension.strip().lstrip(".").lower()


def parse(data: bytes, extension: str) -> Iterator[RawFieldMap]:
    """Parse ``data`` according to ``extension``.

    Returns a one-pass iterator of raw field-maps in source order.

    Raises:
        UnsupportedFormatError: extension is not csv, xlsx, xlsm or xml.
        MalformedInputError: the container cannot be read.
    """
    ext = normalize_extension(extension)
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError(extension)

    if ext == "csv":
        rows = _read_table(data)
    elif ext in ("xlsx", "xlsm"):
        rows = _read_sheet(data)
    else:
        rows = _read_markup(data)

    logger.debug("file_parsed", extension=ext, rows=len(rows))
    return iter(rows)


# ---------------------------------------------------------------------------
# Delimited table
# ---------------------------------------------------------------------------

def _read_table(data: bytes) -> list[RawFieldMap]:
    try:
        text = data.decode("utf-8-sig")
        grid = list(csv.reader(io.StringIO(text, newline=""), strict=True))
    except UnicodeDecodeError as exc:
        raise MalformedInputError(f"CSV is not valid UTF-8: {exc}") from exc
    except csv.Error as exc:
        raise MalformedInputError(f"CSV could not be parsed: {exc}") from exc

    grid = [row for row in grid if any(cell.strip() for cell in row)]
    if not grid:
        return []
    header = [cell.strip() for cell in grid[0]]
    return [_zip_row(header, [cell.strip() for cell in row]) for row in grid[1:]]


# ---------------------------------------------------------------------------
# Spreadsheet
# ---------------------------------------------------------------------------

def _read_sheet(data: bytes) -> list[RawFieldMap]:
    try:
        wb = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError, OSError) as exc:
        raise MalformedInputError(f"Workbook could not be opened: {exc}") from exc

    # Read-only worksheets parse their XML lazily, inside iter_rows
    try:
        if not wb.worksheets:
            return []
        grid = [
            [_cell_to_str(cell) for cell in row]
            for row in wb.worksheets[0].iter_rows(values_only=True)
        ]
    except (ET.ParseError, zipfile.BadZipFile, KeyError, ValueError, OSError) as exc:
        raise MalformedInputError(f"Worksheet could not be read: {exc}") from exc
    finally:
        wb.close()

    grid = [row for row in grid if any(row)]
    if not grid:
        return []
    header = [cell.strip() for cell in grid[0]]
    return [_zip_row(header, row) for row in grid[1:]]


def _cell_to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value).strip()


def _zip_row(header: list[str], cells: list[str]) -> RawFieldMap:
    row: RawFieldMap = {}
    for idx, key in enumerate(header):
        if not key or key in row:
            continue
        row[key] = cells[idx] if idx < len(cells) else ""
    return row


# ---------------------------------------------------------------------------
# Tagged markup
# ---------------------------------------------------------------------------

def _local_name(tag: str) -> str:
    # "{urn:x}passwords" -> "passwords"
    return tag.rsplit("}", 1)[-1]


def _read_markup(data: bytes) -> list[RawFieldMap]:
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise MalformedInputError(f"XML could not be parsed: {exc}") from exc

    if _local_name(root.tag) != MARKUP_ROOT:
        logger.warning("xml_root_unrecognized", root=root.tag, expected=MARKUP_ROOT)
        return []

    return [
        _flatten_entry(entry) for entry in root
        if _local_name(entry.tag) == MARKUP_ENTRY
    ]


def _flatten_entry(entry: ET.Element) -> RawFieldMap:
    values: RawFieldMap = {}
    for child in entry:
        tag = _local_name(child.tag)
        if tag not in values:
            values[tag] = (child.text or "").strip()

    ordered: RawFieldMap = {}
    for tag, value in values.items():
        preferred = MARKUP_PREFERRED.get(tag)
        if preferred is not None and values.get(preferred):
            ordered.setdefault(preferred, values[preferred])
        ordered.setdefault(tag, value)
    return ordered
