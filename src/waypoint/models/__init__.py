"""Shared data types for waypoint.

Records as loaded from metadata documents, and the search index rows
derived from them.
"""

from waypoint.models.records import (
    DOWNLOAD_FORMATS,
    Contributor,
    IndexRow,
    Record,
)

__all__ = [
    "DOWNLOAD_FORMATS",
    "Contributor",
    "IndexRow",
    "Record",
]
