"""End-to-end static site build runner.

Stages run sequentially in a single pass:
    load    : read and validate record documents
    index   : project records onto rows and write search/index.json
    render  : write home, record, search and policies pages plus redirects
    assets  : copy CSS/JS and write the service worker
"""

import sys
import time
import traceback
from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import Path

from waypoint.audit.helpers import generate_run_id, get_environment_info
from waypoint.audit.logger import AuditLogger
from waypoint.audit.models import ArtifactInfo
from waypoint.build.config import BuildConfig, BuildResult
from waypoint.index import INDEX_PATH, build_index, load_index, serialize_index
from waypoint.load import LoadReport, load_folder, load_vocabulary
from waypoint.models import IndexRow, Record
from waypoint.render import (
    SiteContext,
    page_path_for,
    render_home,
    render_policies,
    render_record,
    render_redirect,
    render_search,
)
from waypoint.utils import calculate_bytes_digest, format_footer_timestamp

__all__ = ["REDIRECTS", "SERVICE_WORKER_PATH", "run_build"]

# (stub path, redirect target relative to the stub)
REDIRECTS: tuple[tuple[str, str], ...] = (
    ("search.html", "search/"),
    ("policies/index.html", "../policies.html"),
    ("record/index.html", "../search/"),
)

SERVICE_WORKER_PATH = "sw.js"


class _ArtifactWriter:
    """Writes site files and records their digests."""

    def __init__(self, output_dir: Path, logger: AuditLogger | None) -> None:
        self.output_dir = output_dir
        self.logger = logger
        self.digests: dict[str, str] = {}

    def write(self, rel_path: str, content: bytes | str) -> Path:
        """Write one site file.

        Raises
        ------
        ValueError
            If ``rel_path`` resolves outside the output directory.
        """
        data = content.encode("utf-8") if isinstance(content, str) else content
        target = self.output_dir / rel_path
        if not target.resolve().is_relative_to(self.output_dir.resolve()):
            raise ValueError(f"Refusing to write outside the output directory: {rel_path}")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

        digest = calculate_bytes_digest(data)
        self.digests[rel_path] = digest
        if self.logger:
            self.logger.artifact_written(ArtifactInfo(path=rel_path, sha256=digest, bytes=len(data)))
        return target


def _log_load_report(report: LoadReport, logger: AuditLogger | None) -> None:
    if not logger:
        return
    for result in report.file_results:
        for message in result.errors:
            logger.record_flagged(result.record_id, "load_error", message, result.filename, level="ERROR")
        for message in result.warnings:
            logger.record_flagged(result.record_id, "load_warning", message, result.filename)


def _stage_load(config: BuildConfig, logger: AuditLogger | None) -> tuple[list[Record], LoadReport]:
    vocabulary = load_vocabulary(config.vocabulary_path) if config.vocabulary_path else None
    records, report = load_folder(config.records_dir, recursive=config.recursive, vocabulary=vocabulary)
    _log_load_report(report, logger)
    return records, report


def _stage_index(records: list[Record], writer: _ArtifactWriter) -> list[IndexRow]:
    rows = build_index(records)
    index_file = writer.write(INDEX_PATH, serialize_index(rows))
    # Re-read and schema-validate the written index
    reloaded = load_index(index_file)
    if [row.id for row in reloaded] != [row.id for row in rows]:
        raise RuntimeError(f"{INDEX_PATH} did not round-trip")
    return rows


def _stage_render(
    records: list[Record],
    rows: list[IndexRow],
    config: BuildConfig,
    writer: _ArtifactWriter,
) -> int:
    site = SiteContext(
        site_name=config.site_name,
        generated_at=config.generated_at or format_footer_timestamp(),
        copyright_year=config.copyright_year(),
    )
    abstracts = {record.id: record.abstract for record in records if record.abstract}

    pages = 0
    writer.write(
        page_path_for("home"),
        render_home(
            rows,
            site,
            abstracts=abstracts,
            spotlight_size=config.spotlight_size,
            shelf_size=config.shelf_size,
            genre_top_k=config.genre_top_k,
            genre_members=config.genre_members,
        ),
    )
    pages += 1

    for record, row in zip(records, rows, strict=True):
        writer.write(
            page_path_for("record", record),
            render_record(record, row, rows, site, related_limit=config.related_limit),
        )
        pages += 1

    writer.write(page_path_for("search"), render_search(site))
    writer.write(page_path_for("policies"), render_policies(site))
    pages += 2

    for stub_path, target in REDIRECTS:
        writer.write(stub_path, render_redirect(target))
        pages += 1

    return pages


def _iter_assets(root: Traversable, prefix: str = "") -> list[tuple[str, Traversable]]:
    found: list[tuple[str, Traversable]] = []
    for entry in sorted(root.iterdir(), key=lambda e: e.name):
        rel = f"{prefix}{entry.name}"
        if entry.is_dir():
            found.extend(_iter_assets(entry, f"{rel}/"))
        elif not entry.name.startswith("."):
            found.append((rel, entry))
    return found


def _stage_assets(writer: _ArtifactWriter) -> int:
    copied = 0
    precache: list[str] = []
    for rel, entry in _iter_assets(files("waypoint") / "assets"):
        if rel == SERVICE_WORKER_PATH:
            continue
        writer.write(f"assets/{rel}", entry.read_bytes())
        precache.append(f"assets/{rel}")
        copied += 1

    cache_version = writer.digests.get(INDEX_PATH, "sha256:0")[7:19]
    template = (files("waypoint") / "assets" / SERVICE_WORKER_PATH).read_text(encoding="utf-8")
    worker = (
        template.replace("__INDEX_PATH__", INDEX_PATH)
        .replace("__CACHE_VERSION__", cache_version)
        .replace("__PRECACHE__", ", ".join(f"'{path}'" for path in precache))
    )
    writer.write(SERVICE_WORKER_PATH, worker)
    return copied + 1


def _timed_stage(logger: AuditLogger | None, stage: str, expected: int | None = None) -> float:
    if logger:
        logger.stage_started(stage, expected_records=expected)
    return time.perf_counter()


def _finish_stage(logger: AuditLogger | None, stage: str, started: float, **counters: int) -> None:
    if logger:
        logger.stage_finished(stage, time.perf_counter() - started, counters=counters)


def _run_stages(config: BuildConfig, logger: AuditLogger | None) -> BuildResult:
    """Execute all build stages sequentially.

    Load errors stop the build before anything is written to the output
    directory.
    """
    if not config.records_dir.is_dir():
        return BuildResult(
            success=False,
            error_message=f"Records directory does not exist: {config.records_dir}",
        )

    total_records = 0
    writer = _ArtifactWriter(config.output_dir, logger)
    try:
        started = _timed_stage(logger, "load")
        records, report = _stage_load(config, logger)
        total_records = len(records)
        _finish_stage(
            logger,
            "load",
            started,
            files=report.total_files,
            records=report.total_records,
            errors=report.total_errors,
            warnings=report.total_warnings,
        )

        if report.total_errors:
            return BuildResult(
                success=False,
                total_records=total_records,
                total_warnings=report.total_warnings,
                total_errors=report.total_errors,
                errors=report.error_lines(),
                warnings=report.warning_lines(),
                error_message=f"{report.total_errors} load error(s) in {config.records_dir}",
            )

        started = _timed_stage(logger, "index", total_records)
        rows = _stage_index(records, writer)
        _finish_stage(logger, "index", started, rows=len(rows))

        started = _timed_stage(logger, "render", total_records)
        pages = _stage_render(records, rows, config, writer)
        _finish_stage(logger, "render", started, pages=pages)

        if config.copy_assets:
            started = _timed_stage(logger, "assets")
            copied = _stage_assets(writer)
            _finish_stage(logger, "assets", started, files=copied)

        return BuildResult(
            success=True,
            total_records=total_records,
            total_warnings=report.total_warnings,
            pages_written=pages,
            output_files=dict(writer.digests),
            warnings=report.warning_lines(),
        )

    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        if logger:
            logger.error(type(e).__name__, str(e), traceback=traceback.format_exc())
        return BuildResult(
            success=False,
            total_records=total_records,
            output_files=dict(writer.digests),
            error_message=error_msg,
        )


def run_build(config: BuildConfig) -> BuildResult:
    """Build the static site described by ``config``.

    Parameters
    ----------
    config : BuildConfig
        Build configuration.

    Returns
    -------
    BuildResult
        Build results. Load problems and unexpected failures are reported
        through ``success``/``error_message`` rather than raised.

    Examples
    --------
        >>> from waypoint.build import BuildConfig, run_build
        >>> result = run_build(BuildConfig(records_dir="records", output_dir="site"))
        >>> if result.success:
        ...     print(f"Wrote {result.pages_written} pages")
    """
    if config.audit_log is None:
        return _run_stages(config, None)

    start = time.perf_counter()
    with AuditLogger(generate_run_id(), config.audit_log) as logger:
        logger.run_started(sys.argv, config.to_dict(), environment=get_environment_info())
        result = _run_stages(config, logger)
        logger.run_finished(
            "success" if result.success else "failed",
            time.perf_counter() - start,
            records_processed=result.total_records,
        )
    return result
