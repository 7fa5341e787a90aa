"""Build configuration and result dataclasses."""

import re
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

DEFAULT_SITE_NAME = "Waypoint Digital Library"

_YEAR_RE = re.compile(r"^(\d{4})")


@dataclass
class BuildConfig:
    """Configuration for one static-site build.

    Attributes
    ----------
    records_dir : Path
        Directory of record metadata documents.
    output_dir : Path
        Site output directory.
    site_name : str
        Name shown in page headers and footers.
    spotlight_size : int
        Rows embedded in the home page for hero rotation (default: 8).
    shelf_size : int
        Maximum rows per home page shelf (default: 12).
    genre_top_k : int
        Genres offered in the genre browser (default: 6).
    genre_members : int
        Rows embedded per genre (default: 12).
    related_limit : int
        Related titles on a record page (default: 4).
    vocabulary_path : Path | None
        JSON array of controlled subjects; unknown subjects become warnings.
    recursive : bool
        Search subdirectories of records_dir for documents.
    generated_at : str | None
        Footer timestamp. If None, the current UTC minute is used; pin it to
        make repeated builds byte-identical.
    audit_log : Path | None
        JSONL audit log path. If None, no audit events are written.
    copy_assets : bool
        Copy the bundled CSS/JS and service worker into the output.
    """

    records_dir: Path = Path("records")
    output_dir: Path = Path("site")
    site_name: str = DEFAULT_SITE_NAME
    spotlight_size: int = 8
    shelf_size: int = 12
    genre_top_k: int = 6
    genre_members: int = 12
    related_limit: int = 4
    vocabulary_path: Path | None = None
    recursive: bool = False
    generated_at: str | None = None
    audit_log: Path | None = None
    copy_assets: bool = True

    def __post_init__(self) -> None:
        """Coerce paths and validate."""
        self.records_dir = Path(self.records_dir)
        self.output_dir = Path(self.output_dir)
        if self.vocabulary_path is not None:
            self.vocabulary_path = Path(self.vocabulary_path)
        if self.audit_log is not None:
            self.audit_log = Path(self.audit_log)

        if not self.site_name.strip():
            raise ValueError("site_name must not be empty")

        for name in ("spotlight_size", "shelf_size", "genre_top_k", "genre_members", "related_limit"):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name} must be >= 1, got {value}")

        if self.audit_log is not None and self.audit_log.resolve().is_relative_to(
            self.output_dir.resolve()
        ):
            raise ValueError(f"audit_log must live outside output_dir, got {self.audit_log}")

    def copyright_year(self) -> int:
        """Footer copyright year, taken from a pinned generated_at when possible."""
        if self.generated_at:
            match = _YEAR_RE.match(self.generated_at)
            if match:
                return int(match.group(1))
        return datetime.now(UTC).year

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        for key in ("records_dir", "output_dir", "vocabulary_path", "audit_log"):
            data[key] = str(data[key]) if data[key] is not None else None
        return data


@dataclass
class BuildResult:
    """Results from a build.

    Attributes
    ----------
    success : bool
        Whether the site was written.
    total_records : int
        Records loaded into the catalog.
    total_warnings : int
        Load warnings (non-fatal).
    total_errors : int
        Load errors; any error fails the build.
    pages_written : int
        HTML pages written, redirect stubs included.
    output_files : dict[str, str]
        Map of relative artifact path to its "sha256:" digest.
    errors : list[str]
        Load error lines as "<file>: <message>".
    warnings : list[str]
        Load warning lines as "<file>: <message>".
    error_message : str | None
        Error message if failed.
    """

    success: bool
    total_records: int = 0
    total_warnings: int = 0
    total_errors: int = 0
    pages_written: int = 0
    output_files: dict[str, str] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
