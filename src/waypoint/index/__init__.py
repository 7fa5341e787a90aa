"""Search index building, writing and reading."""

from waypoint.index.builder import (
    INDEX_PATH,
    IndexValidationError,
    build_index,
    load_index,
    serialize_index,
    to_index_row,
    validate_index,
    write_index,
)

__all__ = [
    "INDEX_PATH",
    "IndexValidationError",
    "build_index",
    "load_index",
    "serialize_index",
    "to_index_row",
    "validate_index",
    "write_index",
]
