"""Tests for record loading."""

import datetime
from pathlib import Path

import pytest

from waypoint.load import DocumentError, load_file, load_folder, normalize_permalink, parse_year
from waypoint.load.base import (
    detect_encoding,
    parse_document,
    reserved_path_conflict,
    split_front_matter,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (540, 540),
        (1678.0, 1678),
        ("1678", 1678),
        ("c. 1890", 1890),
        ("c. 400", 400),
        ("1890-1900", 1890),
        ("73", 73),
        ("12th century", None),
        ("1890s", None),
        ("-400", -400),
        (datetime.date(1418, 1, 1), 1418),
        ("undated", None),
        (None, None),
        (True, None),
    ],
)
def test_parse_year(value: object, expected: int | None) -> None:
    """Test year extraction from the shapes a date field takes."""
    assert parse_year(value) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, "record/rb-1/"),
        ("", "record/rb-1/"),
        ("/books/imitation", "books/imitation/"),
        ("books/imitation/", "books/imitation/"),
        ("/", "record/rb-1/"),
        ("../../escaped/", "record/rb-1/"),
        ("books/../../etc", "record/rb-1/"),
        ("./", "record/rb-1/"),
        ("books//imitation", "record/rb-1/"),
        ("books\\imitation", "record/rb-1/"),
        ("books/index.html", "record/rb-1/"),
    ],
)
def test_normalize_permalink(value: str | None, expected: str) -> None:
    """Test permalinks are made relative, and unsafe ones fall back to record/<id>/."""
    assert normalize_permalink(value, "rb-1") == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    ("permalink", "expected"),
    [
        ("books/imitation/", None),
        ("record/rb-1/", None),
        ("search/", "search/index.html"),
        ("policies/", "policies/index.html"),
        ("record/", "record/index.html"),
        ("search/index.json/", "search/index.json"),
        ("sw.js/", "sw.js"),
        ("assets/css/", "assets/"),
    ],
)
def test_reserved_path_conflict(permalink: str, expected: str | None) -> None:
    """Test record pages may not replace or nest under build-owned files."""
    assert reserved_path_conflict(permalink) == expected


@pytest.mark.unit
def test_split_front_matter() -> None:
    """Test YAML front matter is separated from the Markdown body."""
    metadata, body = split_front_matter("---\ntitle: Vita\ndate: 1200\n---\n\nBody text.\n")

    assert metadata == {"title": "Vita", "date": 1200}
    assert body == "Body text."


@pytest.mark.unit
@pytest.mark.parametrize(
    "document",
    [
        "no front matter here",
        "---\ntitle: [unclosed\n---\n",
        "---\n- a\n- b\n---\n",
    ],
)
def test_split_front_matter_rejects_malformed(document: str) -> None:
    """Test missing, invalid and non-mapping front matter are rejected."""
    with pytest.raises(DocumentError):
        split_front_matter(document)


@pytest.mark.unit
def test_parse_document_json_must_be_object() -> None:
    """Test a JSON array is not accepted as a record document."""
    with pytest.raises(DocumentError, match="not an object"):
        parse_document("[1, 2]", "json")


@pytest.mark.unit
def test_detect_encoding_utf8_bom() -> None:
    """Test UTF-8 BOM is detected."""
    assert detect_encoding(b"\xef\xbb\xbf{}") == "utf-8-sig"


@pytest.mark.unit
def test_load_file_builds_record(write_document) -> None:
    """Test a complete JSON document becomes a Record."""
    path = write_document(
        "a.json",
        {
            "id": "rb-a",
            "title": " Vita Antonii ",
            "creators": "Athanasius",
            "subjects": ["Monasticism"],
            "date": "c. 360",
            "rights": "Public domain",
            "summary": "Life of Anthony.",
            "downloads": {"pdf": "a.pdf", "epub": ""},
            "contributors": [{"name": "R. Meyer", "role": "translator"}, "Anonymous"],
        },
    )

    record, result = load_file(path)

    assert result.errors == ()
    assert record is not None
    assert record.id == "rb-a"
    assert record.title == "Vita Antonii"
    assert record.creators == ["Athanasius"]
    assert record.year == 360
    assert record.date_raw == "c. 360"
    assert record.abstract == "Life of Anthony."
    assert record.downloads == {"pdf": "a.pdf"}
    assert [c.label() for c in record.contributors] == ["R. Meyer (translator)", "Anonymous"]
    assert record.permalink == "record/rb-a/"
    assert record.source_file == "a.json"


@pytest.mark.unit
def test_load_file_missing_required_field(write_document) -> None:
    """Test a missing required field yields an error and no record."""
    path = write_document("b.json", {"id": "rb-b", "title": "No rights", "date": 1900})

    record, result = load_file(path)

    assert record is None
    assert result.errors == ("Missing rights",)


@pytest.mark.unit
def test_load_file_malformed_json(write_document) -> None:
    """Test an unparseable document is reported, not raised."""
    path = write_document("broken.json", '{"id": "x", ')

    record, result = load_file(path)

    assert record is None
    assert len(result.errors) == 1
    assert "Invalid JSON" in result.errors[0]


@pytest.mark.unit
def test_load_folder_orders_newest_first(sample_records_dir: Path) -> None:
    """Test records are sorted by descending year, then title."""
    records, report = load_folder(sample_records_dir)

    assert [r.id for r in records] == ["rb-pilgrim", "rb-imitation", "rb-benedict", "rb-confessions"]
    assert report.total_files == 4
    assert report.total_records == 4
    assert report.total_errors == 0


@pytest.mark.unit
def test_load_folder_markdown_body_is_abstract(sample_records_dir: Path) -> None:
    """Test the Markdown body stands in for a missing abstract."""
    records, _ = load_folder(sample_records_dir)
    imitation = next(r for r in records if r.id == "rb-imitation")

    assert imitation.abstract == "A manual of spiritual devotion."
    assert imitation.permalink == "books/imitation/"
    assert imitation.creators == ["Thomas à Kempis"]


@pytest.mark.unit
def test_load_folder_duplicate_id_is_error(write_document, tmp_path: Path) -> None:
    """Test the second document with a known id is rejected."""
    doc = {"id": "rb-dup", "title": "One", "date": 1900, "rights": "PD", "subjects": ["x"]}
    write_document("a.json", doc)
    write_document("b.json", {**doc, "title": "Two"})

    records, report = load_folder(tmp_path / "records")

    assert [r.title for r in records] == ["One"]
    assert report.total_errors == 1
    assert report.error_lines()[0].startswith("b.json: Duplicate record_id 'rb-dup'")


@pytest.mark.unit
def test_load_folder_ignores_other_extensions(write_document, tmp_path: Path) -> None:
    """Test only .json and .md documents are enumerated."""
    write_document("notes.txt", "not a record")
    write_document("a.json", {"id": "rb-a", "title": "A", "date": 1900, "rights": "PD"})

    records, report = load_folder(tmp_path / "records")

    assert len(records) == 1
    assert report.total_files == 1
    assert report.warning_lines() == ["a.json: Missing subjects", "a.json: Missing creators"]


@pytest.mark.unit
def test_load_folder_shared_permalink_is_error(write_document, tmp_path: Path) -> None:
    """Test a second record claiming an existing page path is rejected."""
    base = {"title": "T", "date": 1900, "rights": "PD", "subjects": ["x"], "creators": ["A"]}
    write_document("a.json", {**base, "id": "rb-a", "identifiers": {"permalink": "books/same/"}})
    write_document("b.json", {**base, "id": "rb-b", "identifiers": {"permalink": "/books/same"}})

    records, report = load_folder(tmp_path / "records")

    assert [r.id for r in records] == ["rb-a"]
    assert report.error_lines() == [
        "b.json: Duplicate page path 'books/same/index.html' (first used by a.json)"
    ]


@pytest.mark.unit
def test_load_folder_explicit_permalink_on_default_path_is_error(write_document, tmp_path: Path) -> None:
    """Test an explicit permalink may not take another record's default page."""
    base = {"title": "T", "date": 1900, "rights": "PD", "subjects": ["x"], "creators": ["A"]}
    write_document("a.json", {**base, "id": "rb-a"})
    write_document("b.json", {**base, "id": "rb-b", "identifiers": {"permalink": "record/rb-a/"}})

    records, report = load_folder(tmp_path / "records")

    assert [r.id for r in records] == ["rb-a"]
    assert report.total_errors == 1


@pytest.mark.unit
def test_load_folder_permalink_on_site_file_is_error(write_document, tmp_path: Path) -> None:
    """Test a permalink landing on the search page is a load error."""
    doc = {
        "id": "rb-c",
        "title": "C",
        "date": 1900,
        "rights": "PD",
        "subjects": ["x"],
        "creators": ["A"],
        "identifiers": {"permalink": "search/"},
    }
    write_document("c.json", doc)

    records, report = load_folder(tmp_path / "records")

    assert records == []
    assert report.error_lines() == [
        "c.json: Permalink 'search/' collides with site file 'search/index.html'"
    ]


@pytest.mark.unit
def test_load_folder_unsafe_permalink_falls_back(write_document, tmp_path: Path) -> None:
    """Test a permalink leaving the site is replaced by record/<id>/ with a warning."""
    doc = {
        "id": "rb-1",
        "title": "One",
        "date": 1900,
        "rights": "PD",
        "subjects": ["x"],
        "creators": ["A"],
        "identifiers": {"permalink": "../../escaped/"},
    }
    write_document("a.json", doc)

    records, report = load_folder(tmp_path / "records")

    assert records[0].permalink == "record/rb-1/"
    assert report.total_errors == 0
    assert report.warning_lines() == ["a.json: Unsafe permalink '../../escaped/', using record/rb-1/"]


@pytest.mark.unit
@pytest.mark.parametrize("record_id", ["../escaped", "a/b", "..", "a\\b"])
def test_load_folder_unsafe_record_id_is_error(write_document, tmp_path: Path, record_id: str) -> None:
    """Test ids that would leave record/<id>/ are rejected."""
    doc = {"id": record_id, "title": "T", "date": 1900, "rights": "PD", "subjects": ["x"], "creators": ["A"]}
    write_document("a.json", doc)

    records, report = load_folder(tmp_path / "records")

    assert records == []
    assert report.error_lines() == [f"a.json: Unsafe record_id {record_id!r}: it must be a single path segment"]
