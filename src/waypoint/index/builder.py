"""Search index projection and serialization.

The index is the sole contract between the build and the browser: an
array of rows in catalog order, written once to ``search/index.json``.
"""

import json
from pathlib import Path
from typing import Any

import jsonschema

from waypoint.derive import genres
from waypoint.models import IndexRow, Record
from waypoint.schemas import load_schema

__all__ = [
    "INDEX_PATH",
    "IndexValidationError",
    "to_index_row",
    "build_index",
    "serialize_index",
    "write_index",
    "validate_index",
    "load_index",
]

# Path of the published index relative to the site root
INDEX_PATH = "search/index.json"


class IndexValidationError(ValueError):
    """Raised when a search index document does not match its schema."""

    def __init__(self, message: str, path: str | None = None) -> None:
        """Initialize index validation error.

        Parameters
        ----------
        message : str
            Error message.
        path : str | None, optional
            JSON path of the offending value.
        """
        super().__init__(message)
        self.path = path


def to_index_row(record: Record) -> IndexRow:
    """Project a record onto the fields the browser needs."""
    return IndexRow(
        id=record.id,
        title=record.title,
        creators=list(record.creators),
        subjects=list(record.subjects),
        genres=genres(record),
        collection=record.collection,
        year=record.year,
        lang=record.language,
        quality=record.quality_grade,
        permalink=record.permalink,
    )


def build_index(records: list[Record]) -> list[IndexRow]:
    """Map every record to a row, preserving loader order."""
    return [to_index_row(record) for record in records]


def serialize_index(rows: list[IndexRow]) -> str:
    """Serialize rows as an indented JSON array with trailing newline."""
    payload = [row.to_dict() for row in rows]
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def write_index(rows: list[IndexRow], path: Path) -> int:
    """Write the index document.

    Parameters
    ----------
    rows : list[IndexRow]
        Rows in catalog order.
    path : Path
        Destination file; parent directories are created.

    Returns
    -------
    int
        Bytes written.
    """
    data = serialize_index(rows).encode("utf-8")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return len(data)


def validate_index(payload: Any) -> None:
    """Validate a decoded index document against the bundled schema.

    Raises
    ------
    IndexValidationError
        If the document does not conform.
    """
    try:
        jsonschema.validate(instance=payload, schema=load_schema("search_index"))
    except jsonschema.ValidationError as e:
        raise IndexValidationError(e.message, path=e.json_path) from e


def load_index(path: Path, validate: bool = True) -> list[IndexRow]:
    """Read a published index back into rows.

    Parameters
    ----------
    path : Path
        Index document.
    validate : bool, optional
        Check the document against the schema first, by default True.

    Returns
    -------
    list[IndexRow]
        Rows in document order.
    """
    with path.open("r", encoding="utf-8") as f:
        payload = json.load(f)
    if validate:
        validate_index(payload)
    return [IndexRow.from_dict(item) for item in payload]
