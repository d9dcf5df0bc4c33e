"""Tests for the buffer diagnostic report."""

import io

from rich.console import Console

from filefinch.detection import analyze_data_format, describe_buffer


def test_describe_empty_buffer() -> None:
    assert describe_buffer(b"") == [
        "Data analysis:",
        "Size: 0 bytes",
        "Has FlatBuffer header: false",
        "First 16 bytes: []",
    ]


def test_describe_arrow_stream() -> None:
    data = b"\x10\x00\x00\x00\x08\x00\x00\x00" + b"\x00" * 8

    lines = describe_buffer(data)

    assert "Has FlatBuffer header: true" in lines
    assert "Message length: 16 bytes" in lines
    assert "First 16 bytes: [10, 00, 00, 00, 08, 00, 00, 00, 00, 00, 00, 00, 00, 00, 00, 00]" in lines
    assert not any(line.startswith("Last 16 bytes") for line in lines)
    assert lines[-2:] == [
        "Arrow IPC Stream format detected (FlatBuffer header)",
        "Metadata length: 8 bytes",
    ]


def test_describe_arrow_file_and_tail() -> None:
    data = b"ARROW1\x00\x00" + bytes(range(20))

    lines = describe_buffer(data)

    assert f"Size: {len(data)} bytes" in lines
    assert "Last 16 bytes: [04, 05, 06, 07, 08, 09, 0A, 0B, 0C, 0D, 0E, 0F, 10, 11, 12, 13]" in lines
    assert lines[-1] == "Arrow IPC File format detected (starts with ARROW1 magic)"


def test_describe_plain_text_has_no_arrow_note() -> None:
    lines = describe_buffer(b"name,age\nJohn,30\n")

    assert not any("Arrow" in line for line in lines)


def test_analyze_data_format_prints_report() -> None:
    buffer = io.StringIO()
    console = Console(file=buffer, width=200)

    result = analyze_data_format(b"PAR1", console=console)

    assert result is None
    output = buffer.getvalue()
    assert "Size: 4 bytes" in output
    assert "First 16 bytes: [50, 41, 52, 31]" in output
