"""Pytest configuration and fixtures for test suite."""

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from waypoint.models import IndexRow, Record  # noqa: E402

PINNED_TIMESTAMP = "2026-01-15 09:30 UTC"


@pytest.fixture
def generated_at() -> str:
    """Pinned footer timestamp for reproducible builds."""
    return PINNED_TIMESTAMP


@pytest.fixture
def make_row() -> Callable[..., IndexRow]:
    """Factory for index rows with minimal boilerplate."""

    def _factory(
        id: str = "rb-001",
        title: str = "Untitled",
        *,
        creators: list[str] | None = None,
        subjects: list[str] | None = None,
        genres: list[str] | None = None,
        collection: str | None = None,
        year: int | None = None,
        lang: str | None = "en",
        quality: str | None = None,
        permalink: str | None = None,
    ) -> IndexRow:
        return IndexRow(
            id=id,
            title=title,
            creators=creators or [],
            subjects=subjects or [],
            genres=genres or [],
            collection=collection,
            year=year,
            lang=lang,
            quality=quality,
            permalink=permalink or f"record/{id}/",
        )

    return _factory


@pytest.fixture
def make_record() -> Callable[..., Record]:
    """Factory for records; only the required fields are preset."""

    def _factory(id: str = "rb-001", title: str = "Untitled", **fields: Any) -> Record:
        fields.setdefault("rights", "Public domain")
        fields.setdefault("permalink", f"record/{id}/")
        return Record(id=id, title=title, **fields)

    return _factory


@pytest.fixture
def write_document(tmp_path: Path) -> Callable[..., Path]:
    """Write a metadata document into ``tmp_path / 'records'``."""
    records_dir = tmp_path / "records"
    records_dir.mkdir(exist_ok=True)

    def _write(name: str, data: dict[str, Any] | str) -> Path:
        path = records_dir / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        return path

    return _write


SAMPLE_DOCUMENTS: dict[str, dict[str, Any]] = {
    "benedict.json": {
        "record_id": "rb-benedict",
        "title": "The Rule of Saint Benedict",
        "creators": ["Benedict of Nursia"],
        "subjects": ["Monasticism", "Christian life"],
        "collection": "Patristic Texts",
        "date": 540,
        "language": "la",
        "abstract": "Precepts for monks living in community under an abbot.",
        "quality_grade": "A",
        "rights": "Public domain",
        "source_url": "https://example.org/scans/benedict",
        "downloads": {"html": "editions/benedict.html", "epub": "editions/benedict.epub"},
        "contributors": [{"name": "Leonard Doyle", "role": "translator"}],
        "citation": {"mla": "Benedict. The Rule of Saint Benedict."},
        "type": "treatise",
    },
    "confessions.json": {
        "record_id": "rb-confessions",
        "title": "Confessions",
        "creators": ["Augustine of Hippo"],
        "subjects": ["Autobiography", "Christian life", "Theology"],
        "collection": "Patristic Texts",
        "date": "c. 400",
        "language": "la",
        "rights": "Public domain",
        "downloads": {"pdf": "editions/confessions.pdf"},
    },
    "pilgrim.json": {
        "id": "rb-pilgrim",
        "title": "The Pilgrim's Progress",
        "creators": ["John Bunyan"],
        "subjects": ["Allegories", "Christian fiction"],
        "collection": "Puritan Classics",
        "date": "1678",
        "language": "en",
        "rights": "Public domain",
    },
}

SAMPLE_MARKDOWN = """---
record_id: rb-imitation
title: The Imitation of Christ
creators:
  - Thomas à Kempis
subjects:
  - Devotional literature
  - Mysticism
date: 1418
rights: Public domain
identifiers:
  permalink: /books/imitation
---
A manual of spiritual devotion.
"""


@pytest.fixture
def sample_records_dir(tmp_path: Path) -> Path:
    """Records directory with three JSON documents and one Markdown document."""
    records_dir = tmp_path / "sample_records"
    records_dir.mkdir()
    for name, data in SAMPLE_DOCUMENTS.items():
        (records_dir / name).write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    (records_dir / "imitation.md").write_text(SAMPLE_MARKDOWN, encoding="utf-8")
    return records_dir
