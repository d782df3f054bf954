"""Tests for UrgencyEngine - pure logic, no HA fixtures needed."""

from __future__ import annotations

import pytest

from custom_components.housework_queue.engines.urgency_engine import UrgencyEngine
from tests.conftest import make_task

TODAY = "2024-01-11"

# =============================================================================
# TEST: DUE DATES
# =============================================================================


class TestDueDate:
    """Due date and overdue checks."""

    def test_due_date_is_last_done_plus_frequency(self) -> None:
        """Due date adds the frequency to the last done date."""
        task = make_task("a", freq_days=4, last_done="2024-01-01")
        assert UrgencyEngine.due_date(task) == "2024-01-05"

    def test_frequency_floor(self) -> None:
        """A zero or missing frequency counts as one day."""
        assert UrgencyEngine.effective_frequency(make_task("a", freq_days=0)) == 1
        assert UrgencyEngine.effective_frequency({"id": "a"}) == 1

    def test_overdue_is_strictly_after_due(self) -> None:
        """Due today is not overdue; a day later is."""
        task = make_task("a", freq_days=10, last_done="2024-01-01")
        assert not UrgencyEngine.is_overdue(task, TODAY)
        assert UrgencyEngine.is_overdue(task, "2024-01-12")

    def test_days_overdue_negative_before_due(self) -> None:
        """Days overdue is negative while the task is not due."""
        task = make_task("a", freq_days=30, last_done="2024-01-01")
        assert UrgencyEngine.days_overdue(task, TODAY) == -20


# =============================================================================
# TEST: SCORES
# =============================================================================


class TestUrgencyScore:
    """Continuous urgency scoring."""

    def test_worked_example(self) -> None:
        """freq 4, last done 10 days ago: 1.5^2 + 0.05 * 2.5 = 2.375."""
        task = make_task("a", freq_days=4, last_done="2024-01-01")
        assert UrgencyEngine.urgency_score(task, TODAY) == pytest.approx(2.375)

    def test_not_due_score_is_small(self) -> None:
        """Half way through the interval scores 0.02 * 0.5."""
        task = make_task("a", freq_days=20, last_done="2024-01-01")
        assert UrgencyEngine.urgency_score(task, TODAY) == pytest.approx(0.01)

    def test_due_today_score(self) -> None:
        """Ratio 1 scores exactly 0.05."""
        task = make_task("a", freq_days=10, last_done="2024-01-01")
        assert UrgencyEngine.urgency_score(task, TODAY) == pytest.approx(0.05)

    def test_future_last_done_is_zero(self) -> None:
        """A last done date after today gives ratio 0."""
        task = make_task("a", freq_days=7, last_done="2024-02-01")
        assert UrgencyEngine.lateness_ratio(task, TODAY) == 0
        assert UrgencyEngine.urgency_score(task, TODAY) == 0

    def test_due_outscores_not_due(self) -> None:
        """Any due task beats every not-yet-due task."""
        due = make_task("due", freq_days=10, last_done="2024-01-01")
        almost = make_task("almost", freq_days=11, last_done="2024-01-01")
        assert UrgencyEngine.urgency_score(due, TODAY) > UrgencyEngine.urgency_score(
            almost, TODAY
        )

    def test_score_grows_with_lateness(self) -> None:
        """Score is non-decreasing as days pass."""
        task = make_task("a", freq_days=3, last_done="2024-01-01")
        scores = [
            UrgencyEngine.urgency_score(task, f"2024-01-{day:02d}")
            for day in range(1, 20)
        ]
        assert scores == sorted(scores)
