"""Timestamps for audit events, load reports and page footers."""

from datetime import UTC, datetime
from pathlib import Path

__all__ = ["get_iso_timestamp", "get_file_mtime", "format_footer_timestamp"]


def get_iso_timestamp() -> str:
    """Current UTC time as ISO8601 with microseconds and a "Z" suffix."""
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def get_file_mtime(file_path: Path) -> str:
    """Modification time of a metadata document, to the second.

    Returns an empty string when the file cannot be stat'ed.
    """
    try:
        file_stat = file_path.stat()
        mtime = datetime.fromtimestamp(file_stat.st_mtime, UTC)
        return mtime.replace(microsecond=0).isoformat().replace("+00:00", "Z")
    except (OSError, ValueError):
        return ""


def format_footer_timestamp(moment: datetime | None = None) -> str:
    """Format the generation time printed in every page footer.

    Parameters
    ----------
    moment : datetime | None, optional
        Time to format; defaults to now (UTC).

    Returns
    -------
    str
        Timestamp such as "2026-02-03 12:34 UTC".
    """
    if moment is None:
        moment = datetime.now(UTC)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).strftime("%Y-%m-%d %H:%M UTC")
