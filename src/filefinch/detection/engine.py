"""Detection facade composing the signature and content heuristics."""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePath
from typing import Union

from .models import FileType
from .signatures import detect_by_magic
from .text import detect_geojson, looks_like_csv

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

_GEOJSON_EXTENSIONS = frozenset({"json", "geojson"})


def detect(data: bytes) -> FileType:
    """Classify ``data`` from its content alone.

    Signatures are consulted first, then the GeoJSON sniff, then the CSV
    sniff. GeoJSON runs before CSV because JSON text can pass the comma
    regularity check.

    Args:
        data: Buffer to classify. It is never mutated or retained.

    Returns:
        FileType: Detected type, ``FileType.UNKNOWN`` when nothing matched.
    """
    data = bytes(data)

    file_type = detect_by_magic(data)
    if file_type is not None:
        return file_type

    if detect_geojson(data) is not None:
        LOGGER.debug("Matched GeoJSON structure.")
        return FileType.GEOJSON

    if looks_like_csv(data):
        LOGGER.debug("Matched comma-delimited text.")
        return FileType.CSV

    return FileType.UNKNOWN


def file_extension(path: PathLike) -> str:
    """Return the lower-cased extension of ``path`` without the leading dot."""
    return PurePath(os.fspath(path)).suffix[1:].lower()


def detect_from_path(path: PathLike, data: bytes) -> FileType:
    """Classify ``data``, falling back on the extension of ``path``.

    Content detection always wins. Only when it is inconclusive does the
    extension matter: ``csv`` is trusted outright, while ``json`` and
    ``geojson`` still require the GeoJSON sniff to pass.

    Args:
        path: Filename or path whose extension is consulted.
        data: Buffer to classify.

    Returns:
        FileType: Detected type.
    """
    detected = detect(data)
    if detected is not FileType.UNKNOWN:
        return detected

    extension = file_extension(path)
    if extension == "csv":
        LOGGER.debug("Falling back to CSV from extension of %s.", path)
        return FileType.CSV
    if extension in _GEOJSON_EXTENSIONS and detect_geojson(bytes(data)) is not None:
        return FileType.GEOJSON

    return FileType.UNKNOWN


class TypeDetector:
    """Identify the format of files on disk or of named buffers."""

    def __init__(self, *, use_extension: bool = True) -> None:
        self.use_extension = use_extension

    def detect(self, path: Path, sample_limit: int | None = None) -> FileType:
        """Read ``path`` (up to ``sample_limit`` bytes) and classify it.

        Raises:
            OSError: If the file cannot be read.
        """
        with path.open("rb") as fh:
            data = fh.read(sample_limit) if sample_limit else fh.read()
        return self.detect_bytes(path.name, data)

    def detect_bytes(self, filename: str, data: bytes) -> FileType:
        """Classify a buffer that arrived with ``filename``."""
        if self.use_extension:
            return detect_from_path(filename, data)
        return detect(data)


__all__ = ["TypeDetector", "detect", "detect_from_path", "file_extension"]
