"""Byte-window search helpers shared by the content heuristics."""

from __future__ import annotations

from typing import Iterable


def contains(data: bytes, pattern: bytes) -> bool:
    """Return True when ``pattern`` occurs anywhere inside ``data``.

    An empty pattern never matches, and a pattern longer than the buffer
    cannot match.
    """
    if not pattern or len(pattern) > len(data):
        return False
    return data.find(pattern) != -1


def contains_any(data: bytes, patterns: Iterable[bytes]) -> bool:
    """Return True when at least one of ``patterns`` occurs in ``data``."""
    return any(contains(data, pattern) for pattern in patterns)


__all__ = ["contains", "contains_any"]
