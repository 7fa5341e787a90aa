"""Record validation.

Validation is an explicit pass separate from loading: it reports every
offending file instead of stopping at the first, distinguishing hard
errors (missing required fields, malformed documents) from warnings.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from waypoint.load.base import (
    SUPPORTED_EXTENSIONS,
    DocumentError,
    detect_encoding,
    is_safe_permalink,
    is_safe_record_id,
    normalize_line_endings,
    normalize_permalink,
    parse_document,
    record_id_of,
    reserved_path_conflict,
)

__all__ = [
    "REQUIRED_FIELDS",
    "ValidationIssue",
    "FileValidation",
    "ValidationReport",
    "validate_document",
    "validate_folder",
    "load_vocabulary",
    "read_document",
    "iter_record_files",
    "page_path_of",
]

# Required field -> keys accepted for it
REQUIRED_FIELDS: dict[str, tuple[str, ...]] = {
    "record_id": ("record_id", "id"),
    "title": ("title",),
    "date": ("date",),
    "rights": ("rights",),
}


@dataclass(frozen=True)
class ValidationIssue:
    """Single validation finding.

    Attributes
    ----------
    file : str
        Basename of the offending document.
    level : str
        'error' or 'warning'.
    message : str
        Human readable description.
    record_id : str | None
        Record identifier when one could be read.
    """

    file: str
    level: str
    message: str
    record_id: str | None = None

    def format_line(self) -> str:
        """Render the issue as a single console line."""
        tag = "ERROR" if self.level == "error" else "WARN "
        return f"{tag} {self.file}: {self.message}"


@dataclass(frozen=True)
class FileValidation:
    """Validation outcome for one document."""

    file: str
    record_id: str | None
    issues: tuple[ValidationIssue, ...] = ()

    @property
    def ok(self) -> bool:
        """True when the document has no hard errors."""
        return not any(issue.level == "error" for issue in self.issues)


@dataclass(frozen=True)
class ValidationReport:
    """Aggregated validation results for a records directory.

    Attributes
    ----------
    files : tuple[FileValidation, ...]
        Per-file results in enumeration order.
    """

    files: tuple[FileValidation, ...]

    @property
    def issues(self) -> list[ValidationIssue]:
        """All issues across files, in file order."""
        return [issue for result in self.files for issue in result.issues]

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.level == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.level == "warning"]

    @property
    def ok(self) -> bool:
        """False only when at least one hard error was found."""
        return not self.errors


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict, tuple)):
        return not value
    return False


def validate_document(
    data: dict[str, Any],
    filename: str,
    vocabulary: frozenset[str] | None = None,
) -> list[ValidationIssue]:
    """Validate one parsed metadata mapping.

    Parameters
    ----------
    data : dict[str, Any]
        Parsed document metadata.
    filename : str
        Basename used in messages.
    vocabulary : frozenset[str] | None, optional
        Controlled subject vocabulary; when given, unknown subjects are
        reported as warnings.

    Returns
    -------
    list[ValidationIssue]
        Errors first (in required-field order), then warnings.
    """
    record_id = record_id_of(data)
    issues: list[ValidationIssue] = []

    for field_name, keys in REQUIRED_FIELDS.items():
        if all(_is_missing(data.get(key)) for key in keys):
            issues.append(ValidationIssue(filename, "error", f"Missing {field_name}", record_id))

    subjects = data.get("subjects")
    if _is_missing(subjects):
        issues.append(ValidationIssue(filename, "warning", "Missing subjects", record_id))
    elif vocabulary is not None and isinstance(subjects, list):
        for subject in subjects:
            if subject not in vocabulary:
                issues.append(
                    ValidationIssue(
                        filename,
                        "warning",
                        f'Subject "{subject}" not in controlled vocabulary',
                        record_id,
                    )
                )

    if _is_missing(data.get("creators")):
        issues.append(ValidationIssue(filename, "warning", "Missing creators", record_id))

    if record_id is not None:
        issues.extend(_page_path_issues(data, filename, record_id))

    return sorted(issues, key=lambda issue: issue.level != "error")


def _page_path_issues(data: dict[str, Any], filename: str, record_id: str) -> list[ValidationIssue]:
    if not is_safe_record_id(record_id):
        message = f"Unsafe record_id {record_id!r}: it must be a single path segment"
        return [ValidationIssue(filename, "error", message, record_id)]

    issues: list[ValidationIssue] = []
    identifiers = data.get("identifiers")
    explicit = identifiers.get("permalink") if isinstance(identifiers, dict) else None
    if isinstance(explicit, str) and explicit.strip() and not is_safe_permalink(explicit):
        message = f"Unsafe permalink {explicit!r}, using record/{record_id}/"
        issues.append(ValidationIssue(filename, "warning", message, record_id))

    permalink = normalize_permalink(explicit, record_id)
    conflict = reserved_path_conflict(permalink)
    if conflict is not None:
        message = f"Permalink {permalink!r} collides with site file {conflict!r}"
        issues.append(ValidationIssue(filename, "error", message, record_id))
    return issues


def page_path_of(data: dict[str, Any], record_id: str) -> str:
    """Site-relative page file a document's record renders to."""
    identifiers = data.get("identifiers")
    explicit = identifiers.get("permalink") if isinstance(identifiers, dict) else None
    return f"{normalize_permalink(explicit, record_id)}index.html"


def load_vocabulary(path: Path) -> frozenset[str]:
    """Load a controlled subject vocabulary (JSON array of strings).

    Raises
    ------
    ValueError
        If the file is not a JSON array of strings.
    """
    with path.open("r", encoding="utf-8") as f:
        terms = json.load(f)
    if not isinstance(terms, list) or not all(isinstance(t, str) for t in terms):
        raise ValueError(f"Vocabulary must be a JSON array of strings: {path}")
    return frozenset(terms)


def read_document(file_path: Path) -> tuple[dict[str, Any], str, str]:
    """Read and parse one metadata document.

    Returns
    -------
    tuple[dict[str, Any], str, str]
        (metadata, body, encoding_used).

    Raises
    ------
    DocumentError
        If the file cannot be read or parsed.
    """
    try:
        file_bytes = file_path.read_bytes()
    except OSError as e:
        raise DocumentError(f"Failed to read file: {e}") from e

    encoding = detect_encoding(file_bytes)
    content = normalize_line_endings(file_bytes.decode(encoding))
    source_format = SUPPORTED_EXTENSIONS.get(file_path.suffix.lower(), "json")
    data, body = parse_document(content, source_format)
    return data, body, encoding


def iter_record_files(folder_path: Path, recursive: bool = False) -> list[Path]:
    """List supported metadata documents in deterministic (sorted) order."""
    files = folder_path.rglob("*") if recursive else folder_path.glob("*")
    return sorted(f for f in files if f.is_file() and f.suffix.lower() in SUPPORTED_EXTENSIONS)


def validate_folder(
    folder_path: Path,
    vocabulary: frozenset[str] | None = None,
    recursive: bool = False,
) -> ValidationReport:
    """Validate every metadata document in a folder.

    Malformed documents, missing required fields, duplicate identifiers
    and duplicate page paths are errors; enumeration always continues to
    the last file.

    Parameters
    ----------
    folder_path : Path
        Records directory.
    vocabulary : frozenset[str] | None, optional
        Controlled subject vocabulary.
    recursive : bool, optional
        Whether to descend into subdirectories, by default False.

    Returns
    -------
    ValidationReport
        Per-file results.
    """
    results: list[FileValidation] = []
    seen_ids: dict[str, str] = {}
    seen_pages: dict[str, str] = {}

    for file_path in iter_record_files(folder_path, recursive=recursive):
        name = file_path.name
        try:
            data, _, _ = read_document(file_path)
        except DocumentError as e:
            results.append(FileValidation(name, None, (ValidationIssue(name, "error", str(e)),)))
            continue

        issues = validate_document(data, name, vocabulary)
        record_id = record_id_of(data)
        if record_id is not None:
            if record_id in seen_ids:
                issues.insert(
                    0,
                    ValidationIssue(
                        name,
                        "error",
                        f"Duplicate record_id {record_id!r} (first seen in {seen_ids[record_id]})",
                        record_id,
                    ),
                )
            else:
                seen_ids[record_id] = name
                if is_safe_record_id(record_id):
                    page = page_path_of(data, record_id)
                    if page in seen_pages:
                        issues.insert(
                            0,
                            ValidationIssue(
                                name,
                                "error",
                                f"Duplicate page path {page!r} (first used by {seen_pages[page]})",
                                record_id,
                            ),
                        )
                    else:
                        seen_pages[page] = name
        results.append(FileValidation(name, record_id, tuple(issues)))

    return ValidationReport(files=tuple(results))
