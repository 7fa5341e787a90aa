"""Record loading and validation.

Supported documents:
- JSON (.json) - one record object per file
- Markdown (.md, .markdown) - YAML front matter, body used as abstract

Main entry points:
- load_folder: Load and sort every record in a directory
- load_file: Load a single document
- validate_folder: Report every error and warning without building records
"""

from waypoint.load.base import RESERVED_SITE_PATHS, DocumentError, normalize_permalink, parse_year
from waypoint.load.ingestion import FileLoadResult, LoadReport, load_file, load_folder, sort_records
from waypoint.load.validation import (
    ValidationIssue,
    ValidationReport,
    load_vocabulary,
    validate_document,
    validate_folder,
)

__all__ = [
    "RESERVED_SITE_PATHS",
    "DocumentError",
    "FileLoadResult",
    "LoadReport",
    "ValidationIssue",
    "ValidationReport",
    "load_file",
    "load_folder",
    "load_vocabulary",
    "normalize_permalink",
    "parse_year",
    "sort_records",
    "validate_document",
    "validate_folder",
]
