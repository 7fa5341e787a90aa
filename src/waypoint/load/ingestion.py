"""Records directory loading orchestrator."""

from dataclasses import dataclass
from pathlib import Path

from waypoint.load.base import SUPPORTED_EXTENSIONS, DocumentError, build_record
from waypoint.load.validation import (
    ValidationIssue,
    iter_record_files,
    read_document,
    validate_document,
)
from waypoint.models import Record
from waypoint.utils import get_file_mtime, get_iso_timestamp, title_sort_key

LOADER_VERSION = "1.0.0"

__all__ = [
    "LOADER_VERSION",
    "FileLoadResult",
    "LoadReport",
    "load_file",
    "load_folder",
    "sort_records",
]


@dataclass(frozen=True)
class FileLoadResult:
    """Immutable result of loading a single metadata document.

    Attributes
    ----------
    filename : str
        Name of the file (basename).
    filepath : str
        Full path to the file.
    file_size : int
        Size of file in bytes.
    file_mtime : str
        ISO8601 timestamp of file modification time.
    source_format : str
        'json', 'markdown' or 'unknown'.
    encoding_used : str
        Encoding used to decode file.
    record_id : str | None
        Identifier of the record when one could be read.
    warnings : tuple[str, ...]
        Warning messages.
    errors : tuple[str, ...]
        Error messages.
    """

    filename: str
    filepath: str
    file_size: int
    file_mtime: str
    source_format: str
    encoding_used: str
    record_id: str | None = None
    warnings: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class LoadReport:
    """Immutable report for a records directory load.

    Attributes
    ----------
    tool_version : str
        Loader version.
    run_timestamp : str
        ISO8601 timestamp (UTC) of the load.
    total_files : int
        Documents enumerated.
    total_records : int
        Records successfully built.
    total_errors : int
        Hard errors across all files.
    total_warnings : int
        Warnings across all files.
    file_results : tuple[FileLoadResult, ...]
        Per-file results.
    """

    tool_version: str
    run_timestamp: str
    total_files: int
    total_records: int
    total_errors: int
    total_warnings: int
    file_results: tuple[FileLoadResult, ...]

    def error_lines(self) -> list[str]:
        """Every error as "<file>: <message>"."""
        return [f"{r.filename}: {e}" for r in self.file_results for e in r.errors]

    def warning_lines(self) -> list[str]:
        """Every warning as "<file>: <message>"."""
        return [f"{r.filename}: {w}" for r in self.file_results for w in r.warnings]


def _split_issues(issues: list[ValidationIssue]) -> tuple[tuple[str, ...], tuple[str, ...]]:
    errors = tuple(i.message for i in issues if i.level == "error")
    warnings = tuple(i.message for i in issues if i.level == "warning")
    return errors, warnings


def load_file(
    file_path: Path,
    vocabulary: frozenset[str] | None = None,
) -> tuple[Record | None, FileLoadResult]:
    """Load a single metadata document.

    Parameters
    ----------
    file_path : Path
        Path to a .json or .md document.
    vocabulary : frozenset[str] | None, optional
        Controlled subject vocabulary for warnings.

    Returns
    -------
    tuple[Record | None, FileLoadResult]
        - The record, or None when the document is malformed or lacks a
          required field
        - File load result with errors and warnings
    """
    source_format = SUPPORTED_EXTENSIONS.get(file_path.suffix.lower(), "unknown")
    try:
        file_size = file_path.stat().st_size
    except OSError:
        file_size = 0

    try:
        data, body, encoding = read_document(file_path)
    except DocumentError as e:
        result = FileLoadResult(
            filename=file_path.name,
            filepath=str(file_path),
            file_size=file_size,
            file_mtime=get_file_mtime(file_path),
            source_format=source_format,
            encoding_used="",
            errors=(str(e),),
        )
        return None, result

    errors, warnings = _split_issues(validate_document(data, file_path.name, vocabulary))
    record = None if errors else build_record(data, body, file_path.name)

    result = FileLoadResult(
        filename=file_path.name,
        filepath=str(file_path),
        file_size=file_size,
        file_mtime=get_file_mtime(file_path),
        source_format=source_format,
        encoding_used=encoding,
        record_id=record.id if record else None,
        warnings=warnings,
        errors=errors,
    )
    return record, result


def sort_records(records: list[Record]) -> list[Record]:
    """Order records by descending year, then ascending title.

    Records without a parseable year sort as year 0.
    """
    return sorted(records, key=lambda r: (-(r.year or 0), title_sort_key(r.title), r.id))


def load_folder(
    folder_path: Path,
    recursive: bool = False,
    vocabulary: frozenset[str] | None = None,
) -> tuple[list[Record], LoadReport]:
    """Load every supported metadata document in a folder.

    Parameters
    ----------
    folder_path : Path
        Records directory.
    recursive : bool, optional
        Whether to search recursively in subdirectories, by default False.
    vocabulary : frozenset[str] | None, optional
        Controlled subject vocabulary for warnings.

    Returns
    -------
    tuple[list[Record], LoadReport]
        - Records in catalog order (see ``sort_records``)
        - Load report with per-file results; duplicate identifiers and
          duplicate page paths are reported as errors on the later file
          and its record is dropped
    """
    records: list[Record] = []
    file_results: list[FileLoadResult] = []
    seen_ids: dict[str, str] = {}
    seen_pages: dict[str, str] = {}

    for file_path in iter_record_files(folder_path, recursive=recursive):
        record, result = load_file(file_path, vocabulary=vocabulary)
        if record is not None:
            page = f"{record.permalink}index.html"
            message = None
            if record.id in seen_ids:
                message = f"Duplicate record_id {record.id!r} (first seen in {seen_ids[record.id]})"
            elif page in seen_pages:
                message = f"Duplicate page path {page!r} (first used by {seen_pages[page]})"

            if message is not None:
                result = FileLoadResult(
                    filename=result.filename,
                    filepath=result.filepath,
                    file_size=result.file_size,
                    file_mtime=result.file_mtime,
                    source_format=result.source_format,
                    encoding_used=result.encoding_used,
                    record_id=record.id,
                    warnings=result.warnings,
                    errors=(message, *result.errors),
                )
            else:
                seen_ids[record.id] = result.filename
                seen_pages[page] = result.filename
                records.append(record)
        file_results.append(result)

    report = LoadReport(
        tool_version=LOADER_VERSION,
        run_timestamp=get_iso_timestamp(),
        total_files=len(file_results),
        total_records=len(records),
        total_errors=sum(len(r.errors) for r in file_results),
        total_warnings=sum(len(r.warnings) for r in file_results),
        file_results=tuple(file_results),
    )

    return sort_records(records), report
