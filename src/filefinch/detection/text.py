"""Text heuristics for GeoJSON and comma-separated content."""

from __future__ import annotations

from typing import Optional

from .models import FileType

CSV_SAMPLE_BYTES = 1000
CSV_SAMPLE_LINES = 5

_GEOJSON_TYPES = ('"featurecollection"', '"feature"', '"geometry"')

# Unicode White_Space characters. str.lstrip() with no argument also drops the
# \x1c-\x1f separators, which are not whitespace here.
_LEADING_WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def _decode_utf8(data: bytes) -> Optional[str]:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def _split_lines(text: str) -> list[str]:
    """Split on ``\\n`` and strip one trailing ``\\r`` from each line.

    A trailing newline does not introduce an empty final line.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def detect_geojson(data: bytes) -> Optional[FileType]:
    """Return ``FileType.GEOJSON`` when the buffer looks like a GeoJSON object.

    The check is structural only: the decoded text must open with ``{``,
    mention a ``"type"`` key, and name one of the GeoJSON object types.
    Undecodable input is reported as no match.
    """
    text = _decode_utf8(data)
    if text is None:
        return None

    lowered = text.lstrip(_LEADING_WHITESPACE).lower()
    if (
        lowered.startswith("{")
        and '"type"' in lowered
        and any(marker in lowered for marker in _GEOJSON_TYPES)
    ):
        return FileType.GEOJSON
    return None


def looks_like_csv(data: bytes) -> bool:
    """Return True when the leading lines share a constant, positive comma count.

    Only the first ``CSV_SAMPLE_BYTES`` bytes and ``CSV_SAMPLE_LINES`` lines
    are examined. Quoted fields and other delimiters are not understood.
    """
    if not data or _decode_utf8(data) is None:
        return False

    # The byte cut may split a multi-byte character; drop the fragment.
    sample = data[:CSV_SAMPLE_BYTES].decode("utf-8", errors="ignore")
    lines = _split_lines(sample)[:CSV_SAMPLE_LINES]
    if not lines:
        return False

    counts = [line.count(",") for line in lines]
    first = counts[0]
    return first > 0 and all(count == first for count in counts)


__all__ = ["CSV_SAMPLE_BYTES", "CSV_SAMPLE_LINES", "detect_geojson", "looks_like_csv"]
