"""Tests for the GeoJSON and CSV text heuristics."""

from filefinch.detection import FileType
from filefinch.detection.text import detect_geojson, looks_like_csv


def test_geojson_feature_collection() -> None:
    assert detect_geojson(b'{"type":"FeatureCollection","features":[]}') is FileType.GEOJSON


def test_geojson_ignores_case_and_leading_whitespace() -> None:
    data = b' \n\t{"TYPE": "Feature", "Geometry": null, "properties": {}}'
    assert detect_geojson(data) is FileType.GEOJSON


def test_geojson_unicode_whitespace_is_trimmed_but_separators_are_not() -> None:
    assert detect_geojson('\u3000\xa0{"type":"feature"}'.encode()) is FileType.GEOJSON
    assert detect_geojson(b'\x1c{"type":"feature"}') is None
    assert detect_geojson(b'\x1f{"type":"feature"}') is None


def test_geojson_geometry_key_is_enough() -> None:
    assert detect_geojson(b'{"type": "x", "geometry": {}}') is FileType.GEOJSON


def test_geojson_requires_object_type_and_marker() -> None:
    assert detect_geojson(b'[{"type":"Feature"}]') is None
    assert detect_geojson(b'{"type":"Point","coordinates":[1,2]}') is None
    assert detect_geojson(b'{"kind":"FeatureCollection"}') is None
    assert detect_geojson(b"") is None


def test_geojson_rejects_invalid_utf8() -> None:
    assert detect_geojson(b'{"type":"Feature"\xff}') is None


def test_csv_with_constant_comma_count() -> None:
    assert looks_like_csv(b"name,age,city\nJohn,30,NYC\nJane,25,LA\n")


def test_csv_handles_crlf_line_endings() -> None:
    assert looks_like_csv(b"a,b\r\nc,d\r\n")


def test_csv_rejects_irregular_rows() -> None:
    assert not looks_like_csv(b"a,b,c\n1,2\n")


def test_csv_requires_commas_on_first_line() -> None:
    assert not looks_like_csv(b"plain text\nmore text\n")
    assert not looks_like_csv(b"header\n1,2\n")


def test_csv_rejects_empty_and_undecodable_input() -> None:
    assert not looks_like_csv(b"")
    assert not looks_like_csv(b"a,b\n\xff,\xfe\n")


def test_csv_only_samples_first_five_lines() -> None:
    data = b"a,b\n" * 5 + b"no delimiter here\n"
    assert looks_like_csv(data)


def test_csv_only_samples_first_thousand_bytes() -> None:
    first = b"a," + b"x" * 600 + b"\n"
    second = b"b," + b"y" * 600 + b",,,\n"
    assert looks_like_csv(first + second)
    assert not looks_like_csv(first + b"b,,,\n")


def test_csv_sample_cut_inside_multibyte_character() -> None:
    data = ("a,b\nx" + "é" * 600).encode("utf-8")
    assert not looks_like_csv(data)
