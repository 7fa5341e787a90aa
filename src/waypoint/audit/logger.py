"""JSONL audit log for site builds.

Each build run appends one event per line to a log file kept outside the
site tree: run start and finish, stage boundaries with counters, every
record the loader flagged, and every artifact written with its digest.
"""

import json
from pathlib import Path
from typing import Any

from waypoint.audit.models import ArtifactInfo, LogEvent
from waypoint.utils import get_iso_timestamp

__all__ = ["AuditLogger", "LOG_LEVELS"]

LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


class AuditLogger:
    """Append-only JSONL event writer for one build run.

    The file handle stays open for the whole run and is flushed after every
    event, so a crashed build still leaves a readable log.

    Attributes
    ----------
    run_id : str
        Identifier stamped on every event of this run.
    log_path : Path
        JSONL file events are appended to.
    current_stage : str | None
        Stage inherited by events that do not name one.
    """

    def __init__(self, run_id: str, log_path: Path) -> None:
        """Open (creating parent directories) the log for appending."""
        self.run_id = run_id
        self.log_path = Path(log_path)
        self.current_stage: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Flush and close the log; safe to call twice."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def set_stage(self, stage: str | None) -> None:
        """Make ``stage`` the default for later events (None clears it)."""
        self.current_stage = stage

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        stage: str | None = None,
        record_id: str | None = None,
    ) -> None:
        """Append one event.

        Parameters
        ----------
        event_type : str
            Event name, e.g. "record_flagged".
        data : dict[str, Any] | None, optional
            Payload; must be JSON serializable.
        level : str, optional
            One of ``LOG_LEVELS``, by default "INFO".
        stage : str | None, optional
            Build stage; falls back to ``current_stage``.
        record_id : str | None, optional
            Catalog record the event concerns.

        Raises
        ------
        ValueError
            If ``level`` is not in ``LOG_LEVELS``.
        """
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {level}")

        log_event = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data or {},
            stage=stage if stage is not None else self.current_stage,
            record_id=record_id,
        )
        json.dump(log_event.to_dict(), self._file, ensure_ascii=False, separators=(",", ":"))
        self._file.write("\n")
        self._file.flush()

    def run_started(
        self,
        command: list[str],
        parameters: dict[str, Any],
        environment: dict[str, Any] | None = None,
    ) -> None:
        """Record the command line, the build configuration and, optionally,
        package and interpreter versions."""
        data: dict[str, Any] = {"command": command, "parameters": parameters}
        if environment is not None:
            data["environment"] = environment
        self.event("run_started", data=data)

    def run_finished(
        self,
        status: str,
        duration_seconds: float,
        records_processed: int | None = None,
    ) -> None:
        """Record the build outcome ("success" or "failed") outside any stage."""
        data: dict[str, Any] = {"status": status, "duration_seconds": duration_seconds}
        if records_processed is not None:
            data["records_processed"] = records_processed
        self.set_stage(None)
        self.event("run_finished", data=data)

    def stage_started(self, stage: str, expected_records: int | None = None) -> None:
        """Enter a build stage (load, index, render, assets)."""
        self.set_stage(stage)
        data: dict[str, Any] = {}
        if expected_records is not None:
            data["expected_records"] = expected_records
        self.event("stage_started", data=data, stage=stage)

    def stage_finished(
        self,
        stage: str,
        duration_seconds: float,
        counters: dict[str, int] | None = None,
    ) -> None:
        """Close a build stage with its timing and counters (files, pages, rows...)."""
        data: dict[str, Any] = {"duration_seconds": duration_seconds}
        if counters:
            data["counters"] = counters
        self.event("stage_finished", data=data, stage=stage)

    def record_flagged(
        self,
        record_id: str | None,
        flag_name: str,
        message: str,
        source_file: str | None = None,
        level: str = "WARN",
    ) -> None:
        """Record a loader finding about one metadata document.

        Parameters
        ----------
        record_id : str | None
            Record identifier, None when the id could not be read.
        flag_name : str
            Short flag, "load_error" or "load_warning".
        message : str
            Loader message, e.g. "Missing rights".
        source_file : str | None, optional
            Document basename.
        level : str, optional
            "ERROR" for rejected documents, by default "WARN".
        """
        data: dict[str, Any] = {"flag_name": flag_name, "message": message}
        if source_file is not None:
            data["file"] = source_file
        self.event("record_flagged", data=data, level=level, record_id=record_id)

    def artifact_written(self, artifact: ArtifactInfo, stage: str | None = None) -> None:
        self.event("artifact_written", data=artifact.to_dict(), stage=stage)

    def error(
        self,
        exception_class: str,
        message: str,
        stage: str | None = None,
        record_id: str | None = None,
        traceback: str | None = None,
    ) -> None:
        """Record an unexpected exception that aborted the build."""
        data: dict[str, Any] = {"exception_class": exception_class, "message": message}
        if traceback is not None:
            data["traceback"] = traceback
        self.event("error", data=data, stage=stage, level="ERROR", record_id=record_id)
