"""Tests for zip content disambiguation."""

import io
import zipfile

import pytest

from filefinch.detection import FileType
from filefinch.detection.search import contains, contains_any
from filefinch.detection.zipcontent import (
    EXCEL_MARKERS,
    SHAPEFILE_MARKERS,
    detect_zip_content,
)


@pytest.mark.parametrize("marker", EXCEL_MARKERS)
def test_each_excel_marker_classifies_as_excel(marker: bytes) -> None:
    assert detect_zip_content(b"\x14\x00" + marker + b"\x00") is FileType.EXCEL


@pytest.mark.parametrize("marker", SHAPEFILE_MARKERS)
def test_each_shapefile_marker_classifies_as_shapefile(marker: bytes) -> None:
    assert detect_zip_content(b"roads" + marker) is FileType.SHAPEFILE


def test_both_marker_families_are_ambiguous() -> None:
    assert detect_zip_content(b"xl/worksheets/sheet1.xml layer.shp") is None


def test_no_markers_is_inconclusive() -> None:
    assert detect_zip_content(b"") is None
    assert detect_zip_content(b"word/document.xml") is None


def test_markers_are_case_sensitive() -> None:
    assert detect_zip_content(b"XL/WORKSHEETS") is None
    assert detect_zip_content(b"ROADS.SHP") is None


def test_real_archives_are_classified_from_member_names() -> None:
    spreadsheet = io.BytesIO()
    with zipfile.ZipFile(spreadsheet, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("[Content_Types].xml", "<Types/>")
        archive.writestr("xl/workbook.xml", "<workbook/>")

    bundle = io.BytesIO()
    with zipfile.ZipFile(bundle, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("roads.shp", b"\x00\x00\x27\x0a")
        archive.writestr("roads.dbf", b"\x03")

    assert detect_zip_content(spreadsheet.getvalue()[4:]) is FileType.EXCEL
    assert detect_zip_content(bundle.getvalue()[4:]) is FileType.SHAPEFILE


def test_window_search_edges() -> None:
    assert contains(b"abc.shp", b".shp")
    assert not contains(b".sh", b".shp")
    assert not contains(b"anything", b"")
    assert contains_any(b"layer.prj", SHAPEFILE_MARKERS)
    assert not contains_any(b"layer.prj", ())
