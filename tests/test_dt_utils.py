"""Tests for dt_utils - pure calendar arithmetic, no HA fixtures needed."""

from __future__ import annotations

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

import pytest

from custom_components.housework_queue.utils.dt_utils import (
    dt_add_days,
    dt_days_between,
    dt_format_due_label,
    dt_now_iso,
    dt_parse_date,
    dt_parse_flexible_date,
    dt_today_iso,
)

# =============================================================================
# TEST: PARSING
# =============================================================================


class TestParseDate:
    """Strict ISO parsing."""

    def test_valid_iso(self) -> None:
        """YYYY-MM-DD parses to a date."""
        assert dt_parse_date("2024-01-05") == date(2024, 1, 5)

    @pytest.mark.parametrize(
        "value", [None, "", "2024-1-5", "1/5/2024", "2024-02-30", "not a date"]
    )
    def test_rejects_other_shapes(self, value) -> None:
        """Anything but a real YYYY-MM-DD date is None."""
        assert dt_parse_date(value) is None


class TestParseFlexibleDate:
    """ISO or US-style parsing used by import and the task editor."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("2024-01-05", "2024-01-05"),
            (" 2024-01-05 ", "2024-01-05"),
            ("1/5/2024", "2024-01-05"),
            ("01/05/2024", "2024-01-05"),
            ("12/31/2023", "2023-12-31"),
        ],
    )
    def test_accepted_formats(self, text, expected) -> None:
        """Both accepted formats normalize to ISO."""
        assert dt_parse_flexible_date(text) == expected

    @pytest.mark.parametrize("text", [None, "", "   ", "Jan 5", "2/30/2024", "5.1.2024"])
    def test_rejected(self, text) -> None:
        """Unrecognized or impossible dates are None."""
        assert dt_parse_flexible_date(text) is None


# =============================================================================
# TEST: ARITHMETIC
# =============================================================================


class TestArithmetic:
    """Day arithmetic across month and year boundaries."""

    def test_add_days_crosses_month(self) -> None:
        """Adding days rolls over months."""
        assert dt_add_days("2024-01-30", 3) == "2024-02-02"

    def test_add_days_leap_year(self) -> None:
        """Leap day is counted."""
        assert dt_add_days("2024-02-28", 1) == "2024-02-29"

    def test_add_negative_days(self) -> None:
        """Negative offsets go back in time."""
        assert dt_add_days("2024-01-01", -1) == "2023-12-31"

    def test_days_between_is_signed(self) -> None:
        """Result is end minus start."""
        assert dt_days_between("2024-01-01", "2024-01-11") == 10
        assert dt_days_between("2024-01-11", "2024-01-01") == -10
        assert dt_days_between("2024-01-01", "2024-01-01") == 0


class TestDueLabel:
    """Human-readable due labels."""

    def test_overdue(self) -> None:
        """Past due dates read as overdue."""
        assert dt_format_due_label("2024-01-07", "2024-01-10") == "Overdue by 3d"

    def test_due_today(self) -> None:
        """Same day reads as due today."""
        assert dt_format_due_label("2024-01-10", "2024-01-10") == "Due today"

    def test_due_in_future(self) -> None:
        """Future due dates count down."""
        assert dt_format_due_label("2024-01-12", "2024-01-10") == "Due in 2d"


# =============================================================================
# TEST: CURRENT DATE
# =============================================================================


class TestToday:
    """Resolving "today" in a timezone."""

    def test_today_iso_matches_timezone(self) -> None:
        """Today's ISO date follows the requested zone."""
        tz = ZoneInfo("Pacific/Kiritimati")
        before = datetime.now(tz).date().isoformat()
        result = dt_today_iso(tz)
        after = datetime.now(tz).date().isoformat()
        assert result in (before, after)

    def test_now_iso_defaults_to_utc(self) -> None:
        """Without a zone the timestamp carries a UTC offset."""
        parsed = datetime.fromisoformat(dt_now_iso())
        assert parsed.utcoffset() == datetime.now(UTC).utcoffset()
