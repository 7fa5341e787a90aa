"""Tests for build configuration."""

from pathlib import Path

import pytest

from waypoint.build import BuildConfig, BuildResult
from waypoint.build.config import DEFAULT_SITE_NAME


@pytest.mark.unit
def test_defaults() -> None:
    """Test default values."""
    config = BuildConfig()

    assert config.records_dir == Path("records")
    assert config.output_dir == Path("site")
    assert config.site_name == DEFAULT_SITE_NAME
    assert config.spotlight_size == 8
    assert config.related_limit == 4
    assert config.copy_assets is True
    assert config.audit_log is None


@pytest.mark.unit
def test_paths_are_coerced() -> None:
    """Test string paths become Path objects."""
    config = BuildConfig(records_dir="in", output_dir="out", vocabulary_path="vocab.json")

    assert config.records_dir == Path("in")
    assert config.output_dir == Path("out")
    assert config.vocabulary_path == Path("vocab.json")


@pytest.mark.unit
@pytest.mark.parametrize(
    "kwargs",
    [
        {"site_name": "   "},
        {"spotlight_size": 0},
        {"shelf_size": -1},
        {"genre_top_k": 0},
        {"genre_members": 0},
        {"related_limit": 0},
    ],
)
def test_invalid_values_rejected(kwargs: dict) -> None:
    """Test validation in __post_init__."""
    with pytest.raises(ValueError):
        BuildConfig(**kwargs)


@pytest.mark.unit
def test_audit_log_inside_output_rejected(tmp_path: Path) -> None:
    """Test the audit log may not be written into the published site."""
    with pytest.raises(ValueError, match="outside output_dir"):
        BuildConfig(output_dir=tmp_path / "site", audit_log=tmp_path / "site" / "events.jsonl")

    config = BuildConfig(output_dir=tmp_path / "site", audit_log=tmp_path / "events.jsonl")
    assert config.audit_log == tmp_path / "events.jsonl"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("generated_at", "expected"),
    [("2026-01-15 09:30 UTC", 2026), ("1999", 1999)],
)
def test_copyright_year_from_generated_at(generated_at: str, expected: int) -> None:
    """Test the copyright year follows a pinned timestamp."""
    assert BuildConfig(generated_at=generated_at).copyright_year() == expected


@pytest.mark.unit
def test_copyright_year_falls_back_to_now() -> None:
    """Test an unparseable timestamp uses the current year."""
    assert BuildConfig(generated_at="yesterday").copyright_year() >= 2026


@pytest.mark.unit
def test_to_dict_is_json_friendly() -> None:
    """Test paths serialize as strings and None stays None."""
    data = BuildConfig(records_dir="in").to_dict()

    assert data["records_dir"] == "in"
    assert data["audit_log"] is None
    assert data["site_name"] == DEFAULT_SITE_NAME


@pytest.mark.unit
def test_build_result_to_dict() -> None:
    """Test result serialization keeps defaults."""
    data = BuildResult(success=False, error_message="boom").to_dict()

    assert data["success"] is False
    assert data["output_files"] == {}
    assert data["error_message"] == "boom"
