"""Entry sources and the triage pipeline."""

from .discovery import ArchiveReader, DirectoryScanner
from .errors import SourceError
from .models import PendingFile, SourceEntry, TriageRecord, TriageResult
from .pipeline import TriagePipeline

__all__ = [
    "ArchiveReader",
    "DirectoryScanner",
    "PendingFile",
    "SourceEntry",
    "SourceError",
    "TriagePipeline",
    "TriageRecord",
    "TriageResult",
]
