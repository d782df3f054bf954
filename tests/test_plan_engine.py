"""Tests for PlanEngine - greedy budget-bounded selection."""

from __future__ import annotations

from custom_components.housework_queue.engines.plan_engine import PlanEngine
from tests.conftest import make_task

TODAY = "2024-01-11"


class TestEffectiveEstimate:
    """Planning estimates."""

    def test_missing_or_invalid_uses_default(self) -> None:
        """Missing, zero and negative estimates plan as 15 minutes."""
        assert PlanEngine.effective_estimate({"id": "a"}) == 15
        assert PlanEngine.effective_estimate(make_task("a", est_min=0)) == 15
        assert PlanEngine.effective_estimate(make_task("a", est_min=-3)) == 15

    def test_valid_estimate_kept(self) -> None:
        """Positive estimates are used as-is."""
        assert PlanEngine.effective_estimate(make_task("a", est_min=40)) == 40


# =============================================================================
# TEST: BUILD PLAN
# =============================================================================


class TestBuildPlan:
    """Greedy fill behaviour."""

    def test_skips_task_that_would_overflow(self) -> None:
        """Budget 60 with [15, 15, 40] equally overdue picks 15 + 15."""
        tasks = [
            make_task("a", freq_days=1, last_done="2024-01-05", est_min=15),
            make_task("b", freq_days=1, last_done="2024-01-05", est_min=15),
            make_task("c", freq_days=1, last_done="2024-01-05", est_min=40),
        ]
        result = PlanEngine.build_plan(tasks, TODAY, 60)
        assert result.picked_ids == ["a", "b"]
        assert result.total_est_min == 30
        assert not result.overflowed

    def test_later_small_task_fills_gap(self) -> None:
        """A skipped large task does not stop smaller ones from fitting."""
        tasks = [
            make_task("big", freq_days=1, last_done="2024-01-01", est_min=50),
            make_task("mid", freq_days=1, last_done="2024-01-03", est_min=30),
            make_task("small", freq_days=1, last_done="2024-01-05", est_min=10),
        ]
        result = PlanEngine.build_plan(tasks, TODAY, 60)
        assert result.picked_ids == ["big", "small"]
        assert result.total_est_min == 60

    def test_overdue_first(self) -> None:
        """Overdue tasks come before tasks that are merely due today."""
        tasks = [
            make_task("due_today", freq_days=10, last_done="2024-01-01", est_min=10),
            make_task("overdue", freq_days=5, last_done="2024-01-05", est_min=10),
        ]
        result = PlanEngine.build_plan(tasks, TODAY, 60)
        assert result.picked_ids[0] == "overdue"

    def test_degenerate_picks_single_top_task(self) -> None:
        """When nothing fits, the top task is forced into the plan."""
        tasks = [
            make_task("huge", freq_days=1, last_done="2024-01-01", est_min=120),
            make_task("larger", freq_days=1, last_done="2024-01-09", est_min=200),
        ]
        result = PlanEngine.build_plan(tasks, TODAY, 30)
        assert result.picked_ids == ["huge"]
        assert result.total_est_min == 120
        assert result.overflowed

    def test_empty_task_list(self) -> None:
        """No tasks, empty plan."""
        result = PlanEngine.build_plan([], TODAY, 60)
        assert result.picked_ids == []
        assert result.total_est_min == 0

    def test_includes_not_due_tasks_when_budget_allows(self) -> None:
        """Not-yet-due tasks still fill leftover budget."""
        tasks = [make_task("later", freq_days=30, last_done="2024-01-10", est_min=10)]
        assert PlanEngine.build_plan(tasks, TODAY, 60).picked_ids == ["later"]

    def test_tie_breaks_on_task_order(self) -> None:
        """Identical tasks keep their collection order."""
        tasks = [
            make_task(task_id, freq_days=2, last_done="2024-01-05", est_min=10)
            for task_id in ("x", "y", "z")
        ]
        assert PlanEngine.build_plan(tasks, TODAY, 60).picked_ids == ["x", "y", "z"]

    def test_deterministic(self) -> None:
        """Same inputs give the same plan."""
        tasks = [
            make_task(f"t{i}", freq_days=i + 1, last_done="2024-01-01", est_min=5 + i)
            for i in range(10)
        ]
        first = PlanEngine.build_plan(tasks, TODAY, 45)
        second = PlanEngine.build_plan(tasks, TODAY, 45)
        assert first == second

    def test_total_within_budget_unless_overflowed(self) -> None:
        """The total never exceeds the budget outside the fallback."""
        tasks = [
            make_task(f"t{i}", freq_days=1 + i % 3, last_done="2024-01-02", est_min=7 * i + 3)
            for i in range(8)
        ]
        for budget in (10, 25, 60, 120, 240):
            result = PlanEngine.build_plan(tasks, TODAY, budget)
            assert result.overflowed or result.total_est_min <= budget
            assert len(set(result.picked_ids)) == len(result.picked_ids)
