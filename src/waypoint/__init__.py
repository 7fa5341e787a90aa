"""Static catalog site builder for digital library collections.

This package provides:
- Data models (waypoint.models) - record and index row types
- Loading (waypoint.load) - record documents and validation
- Derivation (waypoint.derive) - eras, genres, relatedness, shelves
- Index (waypoint.index) - search index writing and reading
- Render (waypoint.render) - HTML pages from Jinja2 templates
- Search (waypoint.search) - keyword and facet engine over the index
- Build (waypoint.build) - build orchestration
- Audit (waypoint.audit) - JSONL build events
- CLI (waypoint.cli) - command-line interface
- Public API (waypoint.api) - high-level convenience functions
"""

__version__ = "0.1.0"
__license__ = "MIT"

from waypoint.api import (
    LoadError,
    build_site,
    load_records,
    search_index,
    validate_records,
)
from waypoint.models import IndexRow, Record

__all__ = [
    "__version__",
    "__license__",
    "IndexRow",
    "LoadError",
    "Record",
    "build_site",
    "load_records",
    "search_index",
    "validate_records",
]
