"""Data models exchanged between entry sources and the triage pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from filefinch.detection import FileType


class PendingFile(BaseModel):
    """A file discovered on disk that has not been read yet."""

    path: Path
    size_bytes: int
    modified_at: Optional[datetime] = None
    oversized: bool = False


@dataclass(slots=True)
class SourceEntry:
    """A named buffer handed to the detector.

    Attributes:
        filename: Name of the entry, used only for its extension.
        data: Bytes read for the entry (possibly a leading sample).
        size_bytes: Full size of the entry before sampling.
        sampled: Whether ``data`` holds only a prefix of the entry.
    """

    filename: str
    data: bytes
    size_bytes: int
    sampled: bool = False


class TriageRecord(BaseModel):
    """Classification outcome for a single entry."""

    filename: str
    size_bytes: int
    file_type: FileType
    sampled: bool = False


class TriageResult(BaseModel):
    """Aggregated outcome of a triage run."""

    records: List[TriageRecord] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)

    @property
    def total_entries(self) -> int:
        """Return the number of classified entries."""
        return len(self.records)

    @property
    def total_bytes(self) -> int:
        """Return the summed size of all classified entries."""
        return sum(record.size_bytes for record in self.records)

    def distribution(self) -> Dict[str, int]:
        """Return counts keyed by display name in ``FileType`` order, omitting zeros."""
        counts = {file_type: 0 for file_type in FileType}
        for record in self.records:
            counts[record.file_type] += 1
        return {str(file_type): count for file_type, count in counts.items() if count}


__all__ = ["PendingFile", "SourceEntry", "TriageRecord", "TriageResult"]
