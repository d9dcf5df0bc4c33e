"""Triage pipeline feeding named buffers to the detector one at a time."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from filefinch.config.models import ProcessingOptions
from filefinch.detection import TypeDetector

from .discovery import ArchiveReader, DirectoryScanner
from .errors import SourceError
from .models import PendingFile, SourceEntry, TriageRecord, TriageResult

LOGGER = logging.getLogger(__name__)

_MEGABYTE = 1024 * 1024


class TriagePipeline:
    """Coordinate entry discovery and detection to produce triage records."""

    def __init__(
        self,
        scanner: DirectoryScanner,
        detector: TypeDetector,
        processing: ProcessingOptions,
    ) -> None:
        self.scanner = scanner
        self.detector = detector
        self.processing = processing

    @property
    def sample_limit(self) -> int | None:
        """Return the byte limit applied to oversized entries, if any."""
        if self.processing.sample_size_mb > 0:
            return self.processing.sample_size_mb * _MEGABYTE
        return None

    @property
    def max_size_bytes(self) -> int | None:
        """Return the size above which entries are sampled, if any."""
        if self.processing.max_file_size_mb > 0:
            return self.processing.max_file_size_mb * _MEGABYTE
        return None

    def limit_for(self, size_bytes: int) -> int | None:
        """Return the read limit for an entry of ``size_bytes``."""
        max_size_bytes = self.max_size_bytes
        if max_size_bytes is not None and size_bytes > max_size_bytes:
            return self.sample_limit
        return None

    def run(self, roots: Iterable[Path]) -> TriageResult:
        """Triage every file discovered under ``roots``."""
        result = TriageResult()
        for root in roots:
            root_path = root.expanduser().resolve()
            entries = self._read_pending(self.scanner.scan(root_path), root_path, result)
            self.triage(entries, result)
        return result

    def run_archive(self, path: Path) -> TriageResult:
        """Triage every member of the zip archive at ``path``.

        A read failure is recorded in the result and ends the run; entries
        classified before the failure are kept.
        """
        result = TriageResult()
        reader = ArchiveReader(
            path, max_size_bytes=self.max_size_bytes, sample_limit=self.sample_limit
        )
        try:
            self.triage(reader.entries(), result)
        except SourceError as exc:
            LOGGER.warning("Stopped reading archive: %s", exc)
            result.errors.append(str(exc))
        return result

    def triage(
        self, entries: Iterable[SourceEntry], result: TriageResult | None = None
    ) -> TriageResult:
        """Classify each entry and append a record to ``result``."""
        result = result if result is not None else TriageResult()
        for entry in entries:
            file_type = self.detector.detect_bytes(entry.filename, entry.data)
            LOGGER.debug("%s (%d bytes) -> %s", entry.filename, entry.size_bytes, file_type)
            result.records.append(
                TriageRecord(
                    filename=entry.filename,
                    size_bytes=entry.size_bytes,
                    file_type=file_type,
                    sampled=entry.sampled,
                )
            )
        return result

    def _read_pending(
        self,
        pending_files: Iterable[PendingFile],
        root: Path,
        result: TriageResult,
    ) -> Iterator[SourceEntry]:
        for pending in pending_files:
            limit = self.sample_limit if pending.oversized else None
            try:
                with pending.path.open("rb") as fh:
                    data = fh.read(limit) if limit else fh.read()
            except OSError as exc:
                LOGGER.warning("Could not read %s: %s", pending.path, exc)
                result.errors.append(f"{pending.path}: {exc}")
                continue
            yield SourceEntry(
                filename=_display_name(pending.path, root),
                data=data,
                size_bytes=pending.size_bytes,
                sampled=len(data) < pending.size_bytes,
            )


def _display_name(path: Path, root: Path) -> str:
    if path == root:
        return path.name
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.name


__all__ = ["TriagePipeline"]
