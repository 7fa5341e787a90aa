"""Tests for shared utilities."""

import hashlib
from datetime import datetime, timedelta, timezone

import pytest

from waypoint.utils import (
    calculate_bytes_digest,
    format_footer_timestamp,
    get_iso_timestamp,
    normalize_text,
    safe_slug,
    strip_accents,
    title_sort_key,
)


@pytest.mark.unit
def test_normalize_text() -> None:
    """Test case folding, accent stripping and whitespace collapse."""
    assert normalize_text("  Imitação   de\tCRISTO ") == "imitacao de cristo"
    assert normalize_text(None) == ""


@pytest.mark.unit
def test_strip_accents_keeps_base_letters() -> None:
    """Test combining marks are removed."""
    assert strip_accents("Tomás à Kempis") == "Tomas a Kempis"


@pytest.mark.unit
def test_title_sort_key_orders_accented_titles() -> None:
    """Test accented titles sort with their base letters."""
    titles = ["Zohar", "Émile", "Apology"]

    assert sorted(titles, key=title_sort_key) == ["Apology", "Émile", "Zohar"]


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "expected"),
    [("Christian life", "christian-life"), ("Église & État", "eglise-etat"), ("--x--", "x")],
)
def test_safe_slug(value: str, expected: str) -> None:
    """Test DOM-safe slugs."""
    assert safe_slug(value) == expected


@pytest.mark.unit
def test_format_footer_timestamp() -> None:
    """Test naive and aware datetimes render in UTC to the minute."""
    assert format_footer_timestamp(datetime(2026, 1, 15, 9, 30, 59)) == "2026-01-15 09:30 UTC"

    aware = datetime(2026, 1, 15, 11, 30, tzinfo=timezone(timedelta(hours=2)))
    assert format_footer_timestamp(aware) == "2026-01-15 09:30 UTC"


@pytest.mark.unit
def test_get_iso_timestamp_is_utc() -> None:
    """Test the Z suffix."""
    assert get_iso_timestamp().endswith("Z")


@pytest.mark.unit
def test_calculate_bytes_digest() -> None:
    """Test the prefixed SHA-256 digest."""
    assert calculate_bytes_digest(b"waypoint") == "sha256:" + hashlib.sha256(b"waypoint").hexdigest()
