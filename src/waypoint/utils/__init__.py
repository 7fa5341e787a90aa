"""Common utility functions for waypoint.

Hashing, timestamps and text normalization used across the build.
"""

from waypoint.utils.hashing import (
    calculate_bytes_digest,
    format_sha256,
)
from waypoint.utils.text import normalize_text, safe_slug, strip_accents, title_sort_key
from waypoint.utils.timestamps import (
    format_footer_timestamp,
    get_file_mtime,
    get_iso_timestamp,
)

__all__ = [
    "get_iso_timestamp",
    "get_file_mtime",
    "format_footer_timestamp",
    "calculate_bytes_digest",
    "format_sha256",
    "normalize_text",
    "safe_slug",
    "strip_accents",
    "title_sort_key",
]
