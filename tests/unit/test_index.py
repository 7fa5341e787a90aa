"""Tests for the search index builder."""

import json
from pathlib import Path

import jsonschema
import pytest

from waypoint.index import (
    IndexValidationError,
    build_index,
    load_index,
    serialize_index,
    to_index_row,
    validate_index,
    write_index,
)
from waypoint.load import load_folder
from waypoint.schemas import load_schema


@pytest.mark.unit
def test_to_index_row_projects_record(make_record) -> None:
    """Test the row carries derived genres and renamed fields."""
    record = make_record(
        "rb-1",
        "Confessions",
        creators=["Augustine"],
        subjects=["Autobiography"],
        year=400,
        language="la",
        quality_grade="A",
        collection="Patristics",
    )

    row = to_index_row(record)

    assert row.genres == ["Biography", "Autobiography"]
    assert row.lang == "la"
    assert row.quality == "A"
    assert row.permalink == "record/rb-1/"


@pytest.mark.unit
def test_build_index_length_and_unique_ids(sample_records_dir: Path) -> None:
    """Test one row per record, ids unique, loader order kept."""
    records, _ = load_folder(sample_records_dir)

    rows = build_index(records)

    assert len(rows) == len(records)
    assert len({row.id for row in rows}) == len(rows)
    assert [row.id for row in rows] == [r.id for r in records]


@pytest.mark.unit
def test_serialize_index_format(make_row) -> None:
    """Test two-space indentation, literal UTF-8 and trailing newline."""
    text = serialize_index([make_row("rb-1", "Imitação")])

    assert text.endswith("]\n")
    assert '  {\n    "id": "rb-1"' in text
    assert "Imitação" in text


@pytest.mark.unit
def test_written_index_matches_schema(sample_records_dir: Path, tmp_path: Path) -> None:
    """Test the written document validates against the bundled schema."""
    records, _ = load_folder(sample_records_dir)
    path = tmp_path / "search" / "index.json"

    size = write_index(build_index(records), path)

    payload = json.loads(path.read_text(encoding="utf-8"))
    jsonschema.validate(payload, load_schema("search_index"))
    assert size == path.stat().st_size


@pytest.mark.unit
def test_load_index_round_trip(sample_records_dir: Path, tmp_path: Path) -> None:
    """Test reloading the index gives back equal rows in order."""
    records, _ = load_folder(sample_records_dir)
    rows = build_index(records)
    path = tmp_path / "index.json"
    write_index(rows, path)

    assert load_index(path) == rows


@pytest.mark.unit
@pytest.mark.parametrize(
    "payload",
    [
        {"id": "x"},
        [{"title": "No id", "permalink": "record/x/"}],
        [{"id": "x", "title": "T", "permalink": "/record/x/"}],
        [{"id": "x", "title": "T", "permalink": "record/x/", "extra": 1}],
    ],
)
def test_validate_index_rejects(payload: object) -> None:
    """Test schema violations raise IndexValidationError."""
    with pytest.raises(IndexValidationError):
        validate_index(payload)


@pytest.mark.unit
def test_load_index_tolerates_missing_optional_fields(tmp_path: Path) -> None:
    """Test optional fields default when absent."""
    path = tmp_path / "index.json"
    path.write_text(json.dumps([{"id": "x", "title": "T", "permalink": "record/x/"}]), encoding="utf-8")

    (row,) = load_index(path)

    assert row.creators == []
    assert row.year is None
