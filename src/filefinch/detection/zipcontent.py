"""Disambiguate zip archives by scanning for member-name fragments.

Zip local file headers store member names uncompressed, so the names of
the first entries normally appear near the start of the stream. Rather
than parsing the central directory we look for literal fragments that
belong to either an Office Open XML spreadsheet or a bundled shapefile.
Unrelated occurrences of these fragments inside compressed payloads can
fool the check.
"""

from __future__ import annotations

import logging
from typing import Optional

from .models import FileType
from .search import contains_any

LOGGER = logging.getLogger(__name__)

EXCEL_MARKERS: tuple[bytes, ...] = (
    b"xl/worksheets",
    b"xl/_rels",
    b"docProps/",
    b"[Content_Types]",
    b"xl/workbook",
    b"xl/styles",
    b"xl/theme",
    b"xl/strings",
    b"xl/charts",
    b"xl/drawings",
    b"xl/sharedStrings",
    b"xl/metadata",
    b"xl/calc",
)

SHAPEFILE_MARKERS: tuple[bytes, ...] = (b".shp", b".dbf", b".prj", b".shx")


def detect_zip_content(data: bytes) -> Optional[FileType]:
    """Classify the bytes that follow a zip local-file-header magic.

    Args:
        data: Archive bytes after the 4-byte ``PK\\x03\\x04`` signature.

    Returns:
        Optional[FileType]: ``EXCEL`` or ``SHAPEFILE`` when exactly one
        marker family is present, otherwise None so later heuristics run.
    """
    is_excel = contains_any(data, EXCEL_MARKERS)
    is_shapefile = contains_any(data, SHAPEFILE_MARKERS)

    if is_excel and not is_shapefile:
        return FileType.EXCEL
    if is_shapefile and not is_excel:
        return FileType.SHAPEFILE

    if is_excel and is_shapefile:
        LOGGER.debug("Zip content carries both spreadsheet and shapefile markers.")
    return None


__all__ = ["EXCEL_MARKERS", "SHAPEFILE_MARKERS", "detect_zip_content"]
