"""File type models produced by the detection engine."""

from __future__ import annotations

from enum import Enum


class FileType(Enum):
    """Closed set of formats the detector can report.

    Values are stable identifiers used in serialized output; use
    :attr:`display_name` (or ``str()``) for human-facing labels.
    """

    GEOPACKAGE = "geopackage"
    SHAPEFILE = "shapefile"
    GEOJSON = "geojson"
    EXCEL = "excel"
    CSV = "csv"
    PARQUET = "parquet"
    ARROW = "arrow"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        """Return the canonical label for the file type."""
        return _DISPLAY_NAMES[self]

    def __str__(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES: dict[FileType, str] = {
    FileType.GEOPACKAGE: "Geopackage",
    FileType.SHAPEFILE: "Shapefile",
    FileType.GEOJSON: "GeoJSON",
    FileType.EXCEL: "Excel",
    FileType.CSV: "CSV",
    FileType.PARQUET: "Parquet",
    FileType.ARROW: "Arrow",
    FileType.UNKNOWN: "Unknown",
}


__all__ = ["FileType"]
