"""Data models for build audit logging."""

from dataclasses import asdict, dataclass, field
from typing import Any

__all__ = ["LogEvent", "ArtifactInfo"]


@dataclass(frozen=True)
class LogEvent:
    """One line of the build audit log.

    The serialized form is validated by ``schemas/log_event.schema.json``.

    Attributes
    ----------
    ts : str
        ISO8601 timestamp with microseconds (UTC).
    run_id : str
        Build run identifier.
    level : str
        "DEBUG", "INFO", "WARN" or "ERROR".
    event : str
        Event type, e.g. "stage_started" or "artifact_written".
    data : dict[str, Any]
        Event payload.
    stage : str | None
        Build stage the event belongs to (load, index, render, assets).
    record_id : str | None
        Catalog record the event is about.
    """

    ts: str
    run_id: str
    level: str
    event: str
    data: dict[str, Any] = field(default_factory=dict)
    stage: str | None = None
    record_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Envelope as written to the log; unset stage and record_id are omitted."""
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass(frozen=True)
class ArtifactInfo:
    """Site file written by the build.

    Attributes
    ----------
    path : str
        Path relative to the output directory, '/' separated.
    sha256 : str
        Content digest with "sha256:" prefix.
    bytes : int
        File size in bytes.
    """

    path: str
    sha256: str
    bytes: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
