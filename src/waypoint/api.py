"""Public API for building catalog sites.

This module provides the main public API for waypoint, enabling:
- Loading a records directory into Record objects
- Validating a records directory without building
- Building the complete static site
- Querying a published search index
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from waypoint.index import load_index
from waypoint.load import ValidationReport, load_folder, load_vocabulary, validate_folder
from waypoint.models import Record
from waypoint.search import FilterState, SearchHit, run_search

if TYPE_CHECKING:
    from waypoint.build.config import BuildResult

__all__ = [
    "LoadError",
    "load_records",
    "validate_records",
    "build_site",
    "search_index",
]


class LoadError(Exception):
    """Raised when a records directory cannot be loaded cleanly."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        """Initialize load error.

        Parameters
        ----------
        message : str
            Error message.
        errors : list[str] | None, optional
            Every error line as "<file>: <message>".
        """
        super().__init__(message)
        self.errors = errors or []


def _folder(path: str | Path) -> Path:
    folder_path = Path(path)
    if not folder_path.exists():
        raise FileNotFoundError(f"Folder not found: {path}")
    if not folder_path.is_dir():
        raise ValueError(f"Path is not a directory: {path}")
    return folder_path


def load_records(
    path: str | Path,
    *,
    recursive: bool = False,
    strict: bool = True,
    vocabulary: str | Path | None = None,
) -> list[Record]:
    """Load every record document in a folder.

    Parameters
    ----------
    path : str | Path
        Records directory.
    recursive : bool, optional
        Whether to search recursively in subdirectories, by default False.
    strict : bool, optional
        If True, raise on any load error. If False, return the records that
        loaded cleanly, by default True.
    vocabulary : str | Path | None, optional
        JSON array of controlled subjects.

    Returns
    -------
    list[Record]
        Records in catalog order (newest first, then by title).

    Raises
    ------
    LoadError
        If any document fails to load and strict=True.
    FileNotFoundError
        If folder does not exist.

    Examples
    --------
        >>> from waypoint import load_records
        >>> records = load_records("records/")
        >>> print(f"Loaded {len(records)} records")
    """
    folder_path = _folder(path)
    vocab = load_vocabulary(Path(vocabulary)) if vocabulary else None
    records, report = load_folder(folder_path, recursive=recursive, vocabulary=vocab)

    if report.total_errors > 0 and strict:
        lines = report.error_lines()
        raise LoadError(f"Failed to load {len(lines)} document(s): {'; '.join(lines[:3])}", lines)

    return records


def validate_records(
    path: str | Path,
    *,
    recursive: bool = False,
    vocabulary: str | Path | None = None,
) -> ValidationReport:
    """Validate a records directory, reporting every offending file.

    Examples
    --------
        >>> from waypoint import validate_records
        >>> report = validate_records("records/")
        >>> report.ok
        True
    """
    folder_path = _folder(path)
    vocab = load_vocabulary(Path(vocabulary)) if vocabulary else None
    return validate_folder(folder_path, vocabulary=vocab, recursive=recursive)


def build_site(
    records_dir: str | Path,
    output_dir: str | Path = "site",
    **options: Any,
) -> BuildResult:
    """Build the static site from a records directory.

    Parameters
    ----------
    records_dir : str | Path
        Records directory.
    output_dir : str | Path, optional
        Site output directory, by default "site".
    **options
        Any other ``BuildConfig`` field (site_name, generated_at, ...).

    Returns
    -------
    BuildResult
        Build result with success status and artifact digests.

    Raises
    ------
    FileNotFoundError
        If records_dir does not exist.
    ValueError
        If an option is invalid.

    Examples
    --------
        >>> from waypoint import build_site
        >>> result = build_site("records/", "site/", generated_at="2026-01-01 00:00 UTC")
        >>> result.success
        True
    """
    from waypoint.build import BuildConfig, run_build

    config = BuildConfig(records_dir=_folder(records_dir), output_dir=Path(output_dir), **options)
    return run_build(config)


def search_index(
    path: str | Path,
    query: str = "",
    **filters: Any,
) -> list[SearchHit]:
    """Run the catalog search engine over a published index file.

    Parameters
    ----------
    path : str | Path
        Path to a search/index.json document.
    query : str, optional
        Keyword query.
    **filters
        FilterState fields: collection, subject, genre, author, era,
        selected_subjects.

    Returns
    -------
    list[SearchHit]
        Ranked hits.
    """
    rows = load_index(Path(path))
    if "selected_subjects" in filters:
        filters["selected_subjects"] = tuple(filters["selected_subjects"])
    return run_search(rows, FilterState(query=query, **filters))
