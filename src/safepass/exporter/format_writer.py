"""Serialize stored credentials to the formats the importer reads back."""

from __future__ import annotations

import csv
import io
import xml.etree.ElementTree as ET
from typing import Callable, Sequence

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from safepass.core.exceptions import UnsupportedFormatError
from safepass.importer.format_parser import MARKUP_ENTRY, MARKUP_ROOT, normalize_extension
from safepass.models.credential import StoredCredential

EXPORT_COLUMNS: tuple[str, ...] = ("title", "email", "username", "encrypted_password", "url", "notes")
SHEET_TITLE = "Passwords"

MEDIA_TYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "xlsm": "application/vnd.ms-excel.sheet.macroEnabled.12",
    "xml": "application/xml",
}


def _row(entry: StoredCredential) -> list[str]:
    return [getattr(entry, column) or "" for column in EXPORT_COLUMNS]


def _xml_safe_row(entry: StoredCredential) -> list[str]:
    # Control characters other than tab, newline and CR are not allowed in XML
    return [ILLEGAL_CHARACTERS_RE.sub("", value) for value in _row(entry)]


def write_csv(entries: Sequence[StoredCredential]) -> bytes:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)
    writer.writerows(_row(entry) for entry in entries)
    return buf.getvalue().encode("utf-8")


def write_sheet(entries: Sequence[StoredCredential]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    ws.append(list(EXPORT_COLUMNS))
    for entry in entries:
        ws.append(_xml_safe_row(entry))
        for cell in ws[ws.max_row]:
            # a leading "=" would otherwise be stored as a formula
            if cell.data_type == "f":
                cell.data_type = "s"
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def write_markup(entries: Sequence[StoredCredential]) -> bytes:
    root = ET.Element(MARKUP_ROOT)
    for entry in entries:
        node = ET.SubElement(root, MARKUP_ENTRY)
        for column, value in zip(EXPORT_COLUMNS, _xml_safe_row(entry)):
            ET.SubElement(node, column).text = value
    ET.indent(root)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


_WRITERS: dict[str, Callable[[Sequence[StoredCredential]], bytes]] = {
    "csv": write_csv,
    "xlsx": write_sheet,
    "xlsm": write_sheet,
    "xml": write_markup,
}


def write(entries: Sequence[StoredCredential], fmt: str) -> tuple[bytes, str]:
    """Return ``(content, media_type)`` for ``fmt``."""
    ext = normalize_extension(fmt)
    writer = _WRITERS.get(ext)
    if writer is None:
        raise UnsupportedFormatError(fmt)
    return writer(entries), MEDIA_TYPES[ext]
