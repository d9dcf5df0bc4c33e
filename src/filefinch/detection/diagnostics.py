"""Human-readable structural report for a buffer.

This is an inspection aid only; it has no part in classification.
"""

from __future__ import annotations

from rich.console import Console

from .arrow import is_arrow_ipc_stream, read_u32_le
from .signatures import ARROW_FILE_MAGIC

_PREVIEW_BYTES = 16


def _hex(chunk: bytes) -> str:
    return "[" + ", ".join(f"{byte:02X}" for byte in chunk) + "]"


def describe_buffer(data: bytes) -> list[str]:
    """Return report lines describing the leading structure of ``data``."""
    has_header = len(data) >= 8
    lines = [
        "Data analysis:",
        f"Size: {len(data)} bytes",
        f"Has FlatBuffer header: {str(has_header).lower()}",
    ]
    if has_header:
        lines.append(f"Message length: {read_u32_le(data, 0)} bytes")
    lines.append(f"First {_PREVIEW_BYTES} bytes: {_hex(data[:_PREVIEW_BYTES])}")
    if len(data) > _PREVIEW_BYTES:
        lines.append(f"Last {_PREVIEW_BYTES} bytes: {_hex(data[-_PREVIEW_BYTES:])}")

    if data.startswith(ARROW_FILE_MAGIC):
        lines.append("Arrow IPC File format detected (starts with ARROW1 magic)")
    elif is_arrow_ipc_stream(data):
        lines.append("Arrow IPC Stream format detected (FlatBuffer header)")
        lines.append(f"Metadata length: {read_u32_le(data, 4)} bytes")
    return lines


def analyze_data_format(data: bytes, console: Console | None = None) -> None:
    """Print the report produced by :func:`describe_buffer`."""
    output = console or Console()
    for line in describe_buffer(data):
        output.print(line, markup=False, highlight=False)


__all__ = ["analyze_data_format", "describe_buffer"]
