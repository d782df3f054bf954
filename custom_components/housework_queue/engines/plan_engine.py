"""Plan Engine - Budget-bounded selection of today's tasks.

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.

The selection is a deterministic greedy fill, not an optimal knapsack:

1. Score every task (urgency, estimate, overdue flag, due date).
2. Sort: overdue first, then urgency descending, then due date ascending,
   then original task order.
3. Walk the sorted list keeping a running total. Skip any task that would
   push the total above the budget; stop once the total reaches the budget.
4. If nothing fit but tasks exist, take the single highest priority task
   even though it overflows the budget. A plan is never empty while there
   is work to do.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .. import const
from .urgency_engine import UrgencyEngine

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..type_defs import TaskData


@dataclass(frozen=True)
class ScoredTask:
    """Sort inputs computed once per task for a planning run."""

    task_id: str
    score: float
    est_min: int
    overdue: bool
    due_iso: str
    position: int

    @property
    def sort_key(self) -> tuple[bool, float, str, int]:
        """Ascending sort key implementing the priority order."""
        return (not self.overdue, -self.score, self.due_iso, self.position)


@dataclass
class PlanResult:
    """Outcome of a planning run.

    Attributes:
        picked_ids: Selected task ids in priority order
        total_est_min: Sum of the selected estimates
        overflowed: True only for the single-task fallback that exceeds budget
    """

    picked_ids: list[str] = field(default_factory=list)
    total_est_min: int = 0
    overflowed: bool = False


class PlanEngine:
    """Pure logic engine for building a daily plan.

    All methods are static - no instance state.
    """

    @staticmethod
    def effective_estimate(task: TaskData | dict[str, Any]) -> int:
        """Return the planning estimate: missing counts as the default, floor 1."""
        try:
            est = int(task.get(const.DATA_TASK_EST_MIN) or 0)
        except (TypeError, ValueError):
            est = 0
        if est <= 0:
            est = const.DEFAULT_EST_MIN
        return max(const.EST_MIN_MIN, est)

    @staticmethod
    def score_tasks(
        tasks: Iterable[TaskData | dict[str, Any]], today_iso: str
    ) -> list[ScoredTask]:
        """Score tasks and return them in priority order."""
        scored = [
            ScoredTask(
                task_id=task[const.DATA_TASK_ID],
                score=UrgencyEngine.urgency_score(task, today_iso),
                est_min=PlanEngine.effective_estimate(task),
                overdue=UrgencyEngine.is_overdue(task, today_iso),
                due_iso=UrgencyEngine.due_date(task),
                position=position,
            )
            for position, task in enumerate(tasks)
        ]
        scored.sort(key=lambda item: item.sort_key)
        return scored

    @staticmethod
    def build_plan(
        tasks: Iterable[TaskData | dict[str, Any]],
        today_iso: str,
        budget_min: int,
    ) -> PlanResult:
        """Select today's tasks within a minute budget.

        Example:
            budget 60, equally overdue estimates [15, 15, 40] →
            picks 15 + 15, skips 40 (70 > 60), total 30
        """
        budget = max(1, int(budget_min))
        scored = PlanEngine.score_tasks(tasks, today_iso)
        result = PlanResult()

        for item in scored:
            if result.total_est_min >= budget:
                break
            if result.total_est_min + item.est_min > budget:
                continue
            result.picked_ids.append(item.task_id)
            result.total_est_min += item.est_min

        if not result.picked_ids and scored:
            top = scored[0]
            const.LOGGER.debug(
                "DEBUG: Plan - No task fits budget %s; forcing '%s' (%s min)",
                budget,
                top.task_id,
                top.est_min,
            )
            result.picked_ids.append(top.task_id)
            result.total_est_min = top.est_min
            result.overflowed = True

        return result
