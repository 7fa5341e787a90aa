"""Command-line interface for waypoint.

Provides CLI commands for building, validating and querying a catalog site.
"""

import importlib.metadata
import sys
from pathlib import Path

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("waypoint")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development


@click.group()
@click.version_option(version=__version__, prog_name="waypoint")
def cli() -> None:
    """Static catalog site builder for digital library collections.

    Use 'waypoint COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("records_dir", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default="site",
    help="Site output directory (default: site)",
)
@click.option("--site-name", type=str, default=None, help="Name shown in headers and footers")
@click.option(
    "--spotlight-size",
    type=int,
    default=8,
    help="Records embedded for home page rotation (default: 8)",
)
@click.option(
    "--vocabulary",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON array of controlled subjects",
)
@click.option(
    "--generated-at",
    type=str,
    default=None,
    help="Pin the footer timestamp (e.g. '2026-01-01 00:00 UTC') for reproducible output",
)
@click.option(
    "--audit-log",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write JSONL audit events to this file (outside the output directory)",
)
@click.option("--recursive", "-r", is_flag=True, help="Search records_dir recursively")
@click.option("--no-assets", is_flag=True, help="Skip copying CSS/JS and the service worker")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def build(
    records_dir: str,
    output_dir: str,
    site_name: str | None,
    spotlight_size: int,
    vocabulary: str | None,
    generated_at: str | None,
    audit_log: str | None,
    recursive: bool,
    no_assets: bool,
    verbose: bool,
) -> None:
    """Build the static site from RECORDS_DIR.

    Examples
    --------
        waypoint build records/ -o site
        waypoint build records/ -o site --generated-at "2026-01-01 00:00 UTC"
    """
    from waypoint.build import BuildConfig, run_build
    from waypoint.build.config import DEFAULT_SITE_NAME

    if verbose:
        click.echo("Starting build...", err=True)
        click.echo(f"  Records: {records_dir}", err=True)
        click.echo(f"  Output: {output_dir}", err=True)
        if audit_log:
            click.echo(f"  Audit log: {audit_log}", err=True)

    try:
        config = BuildConfig(
            records_dir=Path(records_dir),
            output_dir=Path(output_dir),
            site_name=site_name or DEFAULT_SITE_NAME,
            spotlight_size=spotlight_size,
            vocabulary_path=Path(vocabulary) if vocabulary else None,
            recursive=recursive,
            generated_at=generated_at,
            audit_log=Path(audit_log) if audit_log else None,
            copy_assets=not no_assets,
        )
        result = run_build(config)
    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        if verbose:
            import traceback

            click.echo(traceback.format_exc(), err=True)
        sys.exit(1)

    for line in result.warnings:
        click.echo(f"WARN  {line}", err=True)

    if not result.success:
        for line in result.errors:
            click.secho(f"ERROR {line}", fg="red", err=True)
        click.secho(f"✗ Build failed: {result.error_message}", fg="red", err=True)
        sys.exit(1)

    if verbose:
        click.echo("\nOutputs:", err=True)
        for path, digest in result.output_files.items():
            click.echo(f"  {path}  {digest}", err=True)

    click.secho(
        f"✓ Built {result.pages_written} pages from {result.total_records} records into {output_dir}",
        fg="green",
    )


@cli.command()
@click.argument("records_dir", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--vocabulary",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON array of controlled subjects",
)
@click.option("--recursive", "-r", is_flag=True, help="Search records_dir recursively")
def validate(records_dir: str, vocabulary: str | None, recursive: bool) -> None:
    """Validate every record document in RECORDS_DIR.

    Reports every offending file; exits 1 only if a hard error was found.
    """
    from waypoint import validate_records

    try:
        report = validate_records(records_dir, recursive=recursive, vocabulary=vocabulary)
    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)

    for result in report.files:
        if not result.issues:
            click.echo(f"OK    {result.file} ({result.record_id})")
            continue
        for issue in result.issues:
            if issue.level == "error":
                click.secho(issue.format_line(), fg="red")
            else:
                click.secho(issue.format_line(), fg="yellow")

    summary = f"{len(report.files)} file(s), {len(report.errors)} error(s), {len(report.warnings)} warning(s)"
    if not report.ok:
        click.secho(f"✗ {summary}", fg="red", err=True)
        sys.exit(1)
    click.secho(f"✓ {summary}", fg="green")


@cli.command()
@click.argument("records_dir", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    required=True,
    help="Output JSON file path",
)
@click.option("--recursive", "-r", is_flag=True, help="Search records_dir recursively")
def index(records_dir: str, output: str, recursive: bool) -> None:
    """Write the search index for RECORDS_DIR without rendering pages."""
    from waypoint import LoadError, load_records
    from waypoint.index import build_index, write_index

    try:
        records = load_records(records_dir, recursive=recursive)
        rows = build_index(records)
        size = write_index(rows, Path(output))
    except LoadError as e:
        for line in e.errors:
            click.secho(f"ERROR {line}", fg="red", err=True)
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)
    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)

    click.secho(f"✓ Wrote {len(rows)} rows ({size} bytes) to {output}", fg="green")


@cli.command()
@click.argument("index_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("query", required=False, default="")
@click.option("--collection", default="", help="Exact collection")
@click.option("--subject", "subjects", multiple=True, help="Required subject (repeatable)")
@click.option("--genre", default="", help="Exact genre")
@click.option("--author", default="", help="Creator substring")
@click.option("--era", default="", help="Era label")
@click.option("--limit", type=int, default=20, help="Maximum hits to print (default: 20)")
def search(
    index_file: str,
    query: str,
    collection: str,
    subjects: tuple[str, ...],
    genre: str,
    author: str,
    era: str,
    limit: int,
) -> None:
    """Query a published INDEX_FILE the way the search page does."""
    from waypoint import search_index

    try:
        hits = search_index(
            index_file,
            query,
            collection=collection,
            subject=subjects[0] if subjects else "",
            selected_subjects=subjects[1:],
            genre=genre,
            author=author,
            era=era,
        )
    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)

    for hit in hits[:limit]:
        creators = ", ".join(hit.row.creators)
        year = hit.row.year if hit.row.year is not None else "—"
        click.echo(f"{hit.score:5.2f}  {hit.row.id}  {hit.row.title} ({creators}, {year})")
    click.echo(f"{len(hits)} result(s)", err=True)


if __name__ == "__main__":
    cli()
