"""Tests for the audit logger and its helpers."""

import json
import re
from pathlib import Path

import jsonschema
import pytest

from waypoint.audit import ArtifactInfo, AuditLogger, generate_run_id, get_dependency_versions
from waypoint.schemas import load_schema


@pytest.fixture
def logger(tmp_path: Path) -> AuditLogger:
    """Create a logger that auto-closes after test."""
    lg = AuditLogger(run_id="test_run", log_path=tmp_path / "logs" / "events.jsonl")
    yield lg
    lg.close()


def _read_events(path: Path) -> list[dict]:
    """Read all JSONL events from file."""
    with path.open(encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


@pytest.mark.unit
def test_logger_init_creates_file(logger: AuditLogger) -> None:
    """Test logger creates parent directories and the log file."""
    assert logger.log_path.exists()
    assert logger.current_stage is None


@pytest.mark.unit
def test_logger_event_envelope(logger: AuditLogger) -> None:
    """Test event() writes one compact line with the expected envelope."""
    logger.event("checkpoint", data={"key": "value"}, record_id="rb-1")

    (evt,) = _read_events(logger.log_path)

    assert evt["run_id"] == "test_run"
    assert evt["event"] == "checkpoint"
    assert evt["level"] == "INFO"
    assert evt["data"] == {"key": "value"}
    assert evt["record_id"] == "rb-1"
    assert evt["ts"].endswith("Z")
    assert "stage" not in evt


@pytest.mark.unit
def test_logger_stage_context_inheritance(logger: AuditLogger) -> None:
    """Test stage set via set_stage propagates to events."""
    logger.set_stage("render")
    logger.event("ev1")
    logger.event("ev2", stage="assets")
    logger.set_stage(None)
    logger.event("ev3")

    events = _read_events(logger.log_path)

    assert [e.get("stage") for e in events] == ["render", "assets", None]


@pytest.mark.unit
def test_logger_rejects_unknown_level(logger: AuditLogger) -> None:
    """Test an unknown level raises ValueError and writes nothing."""
    with pytest.raises(ValueError, match="Unknown log level"):
        logger.event("checkpoint", level="WARNING")

    assert _read_events(logger.log_path) == []


@pytest.mark.unit
def test_logger_helpers_match_schema(logger: AuditLogger) -> None:
    """Test every helper emits schema-valid events."""
    logger.run_started(["waypoint", "build", "records"], {"site_name": "Test"})
    logger.stage_started("load", expected_records=3)
    logger.record_flagged("rb-1", "unknown_subject", "Unknown subject 'X'", source_file="a.json")
    logger.record_flagged(None, "load_error", "Malformed JSON", level="ERROR")
    logger.stage_finished("load", 0.01, counters={"records": 2})
    logger.artifact_written(ArtifactInfo(path="index.html", sha256="sha256:abc", bytes=10), stage="render")
    logger.error("OSError", "disk full", stage="assets", traceback="Traceback...")
    logger.run_finished("failed", 0.5, records_processed=2)

    schema = load_schema("log_event")
    events = _read_events(logger.log_path)

    for evt in events:
        jsonschema.validate(evt, schema)
    assert [e["event"] for e in events] == [
        "run_started",
        "stage_started",
        "record_flagged",
        "record_flagged",
        "stage_finished",
        "artifact_written",
        "error",
        "run_finished",
    ]
    assert events[2]["data"] == {
        "flag_name": "unknown_subject",
        "message": "Unknown subject 'X'",
        "file": "a.json",
    }
    assert "record_id" not in events[3]
    assert events[3]["level"] == "ERROR"
    assert events[4]["data"]["counters"] == {"records": 2}
    assert events[5]["data"]["bytes"] == 10
    assert "stage" not in events[-1]
    assert events[-1]["data"]["records_processed"] == 2


@pytest.mark.unit
def test_logger_context_manager_closes(tmp_path: Path) -> None:
    """Test the context manager closes the handle and appends across runs."""
    path = tmp_path / "events.jsonl"
    with AuditLogger("a", path) as lg:
        lg.event("first")
    with AuditLogger("b", path) as lg:
        lg.event("second")

    assert lg._file.closed
    assert [e["run_id"] for e in _read_events(path)] == ["a", "b"]


@pytest.mark.unit
def test_generate_run_id_format() -> None:
    """Test run ids are timestamp plus random suffix and unique."""
    run_id = generate_run_id()

    assert re.match(r"^\d{4}-\d{2}-\d{2}T.*Z__[0-9a-f]{8}$", run_id)
    assert run_id != generate_run_id()


@pytest.mark.unit
def test_get_dependency_versions_unknown_package() -> None:
    """Test missing distributions report "unknown"."""
    versions = get_dependency_versions(["click", "surely-not-installed-pkg"])

    assert versions["surely-not-installed-pkg"] == "unknown"
    assert versions["click"] != "unknown"
