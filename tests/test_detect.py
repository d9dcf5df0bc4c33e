"""Tests for the public detection facade."""

import random
from pathlib import Path

import pytest

from filefinch import FileType, detect, detect_from_path
from filefinch.detection import TypeDetector, file_extension

ARROW_STREAM = b"\x10\x00\x00\x00\x08\x00\x00\x00" + b"\x00" * 8
BINARY = bytes(range(256))


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"PK\x03\x04xl/worksheets", FileType.EXCEL),
        (b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1", FileType.EXCEL),
        (b"PAR1", FileType.PARQUET),
        (b"SQLite format 3\x00" + b"\x00" * 100, FileType.GEOPACKAGE),
        (b"PK\x03\x04test.shp", FileType.SHAPEFILE),
        (b'{"type":"FeatureCollection","features":[]}', FileType.GEOJSON),
        (b"name,age,city\nJohn,30,NYC\nJane,25,LA\n", FileType.CSV),
        (b"ARROW1\x00\x00", FileType.ARROW),
        (ARROW_STREAM, FileType.ARROW),
        (b"\x00\x00\x00\x00\xff\xff\xff\xff", FileType.ARROW),
        (b"\x12\x34\x56\x78", FileType.UNKNOWN),
    ],
)
def test_detect_known_buffers(data: bytes, expected: FileType) -> None:
    assert detect(data) is expected


def test_detect_empty_buffer_is_unknown() -> None:
    assert detect(b"") is FileType.UNKNOWN


def test_detect_is_total_and_deterministic() -> None:
    rng = random.Random(20240611)
    for size in (0, 1, 4, 7, 8, 9, 16, 64, 257, 2048):
        data = bytes(rng.getrandbits(8) for _ in range(size))
        first = detect(data)
        assert isinstance(first, FileType)
        assert detect(data) is first


def test_sqlite_magic_takes_precedence_over_other_content() -> None:
    data = b"SQLite format 3\x00" + b'{"type":"Feature"} a,b\nc,d\n PK\x03\x04xl/workbook'
    assert detect(data) is FileType.GEOPACKAGE


def test_geojson_is_checked_before_csv() -> None:
    data = b'{"type":"Feature","geometry":null}'
    assert detect(data) is FileType.GEOJSON


def test_ambiguous_zip_falls_through_to_text_heuristics() -> None:
    assert detect(b"PK\x03\x04xl/worksheets test.shp") is FileType.UNKNOWN
    assert detect(b"PK\x03\x04a,b\nxl/workbook,.shp\n") is FileType.CSV


def test_detect_accepts_bytes_like_without_mutating() -> None:
    buffer = bytearray(b"PAR1\x00\x00")
    assert detect(buffer) is FileType.PARQUET
    assert detect(memoryview(b"ARROW1")) is FileType.ARROW
    assert buffer == bytearray(b"PAR1\x00\x00")


def test_display_names() -> None:
    labels = {file_type: str(file_type) for file_type in FileType}
    assert labels == {
        FileType.GEOPACKAGE: "Geopackage",
        FileType.SHAPEFILE: "Shapefile",
        FileType.GEOJSON: "GeoJSON",
        FileType.EXCEL: "Excel",
        FileType.CSV: "CSV",
        FileType.PARQUET: "Parquet",
        FileType.ARROW: "Arrow",
        FileType.UNKNOWN: "Unknown",
    }
    assert FileType.GEOJSON.display_name == "GeoJSON"


def test_content_detection_wins_over_extension() -> None:
    assert detect_from_path("table.csv", b"PAR1") is FileType.PARQUET
    assert detect_from_path("layer.geojson", b"SQLite format 3\x00") is FileType.GEOPACKAGE
    assert detect_from_path("x.json", b"a,b\n1,2\n") is FileType.CSV


def test_csv_extension_is_trusted_for_any_content() -> None:
    assert detect(BINARY) is FileType.UNKNOWN
    assert detect_from_path("data.csv", BINARY) is FileType.CSV
    assert detect_from_path("DATA.CSV", b"") is FileType.CSV
    assert detect_from_path(Path("nested/dir/archive.tar.csv"), BINARY) is FileType.CSV


def test_json_extensions_require_geojson_content() -> None:
    geojson = b'{"type":"Feature","geometry":null}'
    assert detect_from_path("points.geojson", geojson) is FileType.GEOJSON
    assert detect_from_path("points.JSON", geojson) is FileType.GEOJSON
    assert detect_from_path("config.json", b'{"name": "x"}') is FileType.UNKNOWN
    assert detect_from_path("points.geojson", BINARY) is FileType.UNKNOWN


def test_other_or_missing_extensions_leave_unknown() -> None:
    assert detect_from_path("notes.txt", BINARY) is FileType.UNKNOWN
    assert detect_from_path("README", BINARY) is FileType.UNKNOWN
    assert detect_from_path(".csv", BINARY) is FileType.UNKNOWN
    assert detect_from_path("", BINARY) is FileType.UNKNOWN


def test_file_extension_is_lowercased_without_dot() -> None:
    assert file_extension("a/b/Layer.GeoJSON") == "geojson"
    assert file_extension("archive.tar.gz") == "gz"
    assert file_extension("no_extension") == ""


def test_type_detector_reads_files(tmp_path: Path) -> None:
    csv_path = tmp_path / "export.csv"
    csv_path.write_bytes(BINARY)
    parquet_path = tmp_path / "table.bin"
    parquet_path.write_bytes(b"PAR1" + b"\x00" * 32)

    assert TypeDetector().detect(csv_path) is FileType.CSV
    assert TypeDetector(use_extension=False).detect(csv_path) is FileType.UNKNOWN
    assert TypeDetector().detect(parquet_path, sample_limit=4) is FileType.PARQUET


def test_type_detector_propagates_read_errors(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        TypeDetector().detect(tmp_path / "missing.csv")
