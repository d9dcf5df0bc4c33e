"""Heuristic recognition of Arrow IPC stream frames.

The streaming flavour of Arrow IPC has no file magic; a message starts
with length fields instead. We accept either the continuation marker
followed by a zero length, or a pair of little-endian lengths that are
plausible for a schema message. Arbitrary binary data can satisfy the
numeric checks, so false positives are possible.
"""

from __future__ import annotations

import struct

CONTINUATION_MARKER = b"\xff\xff\xff\xff"
MAX_MESSAGE_LENGTH = 0x100000
MIN_MESSAGE_LENGTH = 8

_U32_LE = struct.Struct("<I")


def read_u32_le(data: bytes, offset: int = 0) -> int:
    """Decode an unsigned 32-bit little-endian integer at ``offset``."""
    return _U32_LE.unpack_from(data, offset)[0]


def is_arrow_ipc_stream(data: bytes) -> bool:
    """Return True when ``data`` looks like the start of an Arrow IPC stream."""
    if len(data) < 8:
        return False

    if data[0:4] == b"\x00\x00\x00\x00" and data[4:8] == CONTINUATION_MARKER:
        return True

    message_length = read_u32_le(data, 0)
    metadata_length = read_u32_le(data, 4)
    body = data[8:]

    return (
        MIN_MESSAGE_LENGTH < message_length < MAX_MESSAGE_LENGTH
        and 0 < metadata_length < message_length
        and message_length <= len(data)
        and len(body) > 0
        and not body.startswith(b"{")
        and not body.startswith(b'"')
    )


__all__ = ["CONTINUATION_MARKER", "MAX_MESSAGE_LENGTH", "is_arrow_ipc_stream", "read_u32_le"]
