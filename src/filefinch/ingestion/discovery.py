"""Entry discovery for directories and zip archives."""

from __future__ import annotations

import logging
import zipfile
import zlib
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator

from .errors import SourceError
from .models import PendingFile, SourceEntry

LOGGER = logging.getLogger(__name__)


def _is_hidden(path: Path) -> bool:
    return any(part.startswith(".") for part in path.parts if part not in (".", ".."))


class DirectoryScanner:
    """Discover files within a directory tree subject to configuration filters."""

    def __init__(
        self,
        *,
        recursive: bool,
        include_hidden: bool,
        follow_symlinks: bool,
        max_size_bytes: int | None,
    ) -> None:
        self.recursive = recursive
        self.include_hidden = include_hidden
        self.follow_symlinks = follow_symlinks
        self.max_size_bytes = max_size_bytes

    def scan(self, root: Path) -> Iterator[PendingFile]:
        """Yield files under ``root`` (or ``root`` itself when it is a file)."""
        root = root.expanduser().resolve()
        if not root.exists():
            LOGGER.warning("Scan root %s does not exist.", root)
            return

        for path in sorted(self._iter_paths(root)):
            if path.is_symlink() and not self.follow_symlinks:
                continue
            if not path.is_file():
                continue
            try:
                relative = path.relative_to(root)
            except ValueError:
                relative = Path(path.name)
            if not self.include_hidden and _is_hidden(relative):
                continue
            try:
                stat = path.stat()
            except OSError as exc:
                LOGGER.warning("Skipping %s: %s", path, exc)
                continue

            oversized = self.max_size_bytes is not None and stat.st_size > self.max_size_bytes
            yield PendingFile(
                path=path,
                size_bytes=stat.st_size,
                modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                oversized=oversized,
            )

    def _iter_paths(self, root: Path) -> Iterable[Path]:
        if root.is_file():
            yield root
            return

        if self.recursive:
            yield from root.rglob("*")
        else:
            yield from root.iterdir()


class ArchiveReader:
    """Yield the members of a zip archive as named buffers.

    Members are read one at a time in archive order so callers can triage
    large archives without holding every entry in memory.
    """

    def __init__(
        self,
        path: Path,
        *,
        max_size_bytes: int | None = None,
        sample_limit: int | None = None,
    ) -> None:
        self.path = path
        self.max_size_bytes = max_size_bytes
        self.sample_limit = sample_limit

    def entries(self) -> Iterator[SourceEntry]:
        """Yield a :class:`SourceEntry` for every file member.

        Raises:
            SourceError: If the archive is missing, corrupt, or a member
                cannot be read.
        """
        try:
            archive = zipfile.ZipFile(self.path)
        except (OSError, zipfile.BadZipFile) as exc:
            raise SourceError(f"{self.path}: cannot open archive: {exc}") from exc

        with archive:
            for info in archive.infolist():
                if info.is_dir():
                    continue
                oversized = self.max_size_bytes is not None and info.file_size > self.max_size_bytes
                limit = self.sample_limit if oversized else None
                try:
                    with archive.open(info) as member:
                        data = member.read(limit) if limit else member.read()
                except (
                    OSError,
                    EOFError,
                    RuntimeError,
                    NotImplementedError,
                    zipfile.BadZipFile,
                    zlib.error,
                ) as exc:
                    raise SourceError(f"{self.path}: cannot read {info.filename}: {exc}") from exc
                yield SourceEntry(
                    filename=info.filename,
                    data=data,
                    size_bytes=info.file_size,
                    sampled=len(data) < info.file_size,
                )


__all__ = ["ArchiveReader", "DirectoryScanner"]
