"""Content-based detection of tabular and geospatial file formats."""

from .diagnostics import analyze_data_format, describe_buffer
from .engine import TypeDetector, detect, detect_from_path, file_extension
from .models import FileType

__all__ = [
    "FileType",
    "TypeDetector",
    "analyze_data_format",
    "describe_buffer",
    "detect",
    "detect_from_path",
    "file_extension",
]
