"""Ordered magic-byte signatures for the supported formats."""

from __future__ import annotations

import logging
from typing import Optional

from .arrow import is_arrow_ipc_stream
from .models import FileType
from .zipcontent import detect_zip_content

LOGGER = logging.getLogger(__name__)

ZIP_MAGIC = b"PK\x03\x04"
OLE_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
PARQUET_MAGIC = b"PAR1"
SQLITE_MAGIC = b"SQLite format 3\x00"
ARROW_FILE_MAGIC = b"ARROW1"

_FIXED_SIGNATURES: tuple[tuple[bytes, FileType], ...] = (
    (OLE_MAGIC, FileType.EXCEL),
    (PARQUET_MAGIC, FileType.PARQUET),
    (SQLITE_MAGIC, FileType.GEOPACKAGE),
    (ARROW_FILE_MAGIC, FileType.ARROW),
)


def detect_by_magic(data: bytes) -> Optional[FileType]:
    """Match ``data`` against the signature table; the first match wins.

    A zip prefix is resolved by the zip content classifier and its answer,
    including None, is final for this stage.

    Args:
        data: Buffer to inspect.

    Returns:
        Optional[FileType]: Matched type, or None when no signature applies.
    """
    if data.startswith(ZIP_MAGIC):
        return detect_zip_content(data[len(ZIP_MAGIC) :])

    for magic, file_type in _FIXED_SIGNATURES:
        if data.startswith(magic):
            LOGGER.debug("Matched %s signature.", file_type)
            return file_type

    if is_arrow_ipc_stream(data):
        LOGGER.debug("Matched Arrow IPC stream header.")
        return FileType.ARROW

    return None


__all__ = [
    "ARROW_FILE_MAGIC",
    "OLE_MAGIC",
    "PARQUET_MAGIC",
    "SQLITE_MAGIC",
    "ZIP_MAGIC",
    "detect_by_magic",
]
