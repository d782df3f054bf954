"""Daily Plan Engine - Lifecycle of the locked daily work queue.

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
Every operation takes an AppState and returns a new AppState; inputs are
never mutated. A no-op returns the input object unchanged.

States (relative to "today"):
    ABSENT     no plan, or the plan was generated for another date
    ACTIVE     plan for today with picked tasks not yet completed
    EXHAUSTED  plan for today with every picked task completed

The plan is "locked": completing a task never pulls another one in to use
the freed time. Only a forced regeneration (or a new day) rebuilds it.
Edits to task fields never change plan membership.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

from .. import const
from .estimate_engine import EstimateEngine
from .plan_engine import PlanEngine

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..type_defs import AppStateData, DailyPlanData, TaskData


class PlanState(StrEnum):
    """Lifecycle state of the daily plan."""

    ABSENT = "absent"
    ACTIVE = "active"
    EXHAUSTED = "exhausted"


class DailyPlanEngine:
    """Pure logic engine for daily plan transitions and derived views.

    All methods are static - no instance state.
    """

    # =========================================================================
    # QUERIES
    # =========================================================================

    @staticmethod
    def todays_plan(state: AppStateData, today_iso: str) -> DailyPlanData | None:
        """Return the plan if it was generated for today, else None."""
        plan = state.get(const.DATA_DAILY_PLAN)
        if plan and plan.get(const.DATA_PLAN_DATE) == today_iso:
            return plan
        return None

    @staticmethod
    def get_plan_state(state: AppStateData, today_iso: str) -> PlanState:
        """Return the lifecycle state of the plan relative to today."""
        plan = DailyPlanEngine.todays_plan(state, today_iso)
        if plan is None:
            return PlanState.ABSENT

        completed = set(plan.get(const.DATA_PLAN_COMPLETED_IDS, []))
        if all(
            task_id in completed for task_id in plan.get(const.DATA_PLAN_PICKED_IDS, [])
        ):
            return PlanState.EXHAUSTED
        return PlanState.ACTIVE

    @staticmethod
    def remaining_today(state: AppStateData, today_iso: str) -> list[TaskData]:
        """Return picked-but-not-completed tasks in pick order.

        Ids whose task no longer exists are skipped. A stale or absent plan
        has nothing remaining.
        """
        plan = DailyPlanEngine.todays_plan(state, today_iso)
        if plan is None:
            return []

        completed = set(plan.get(const.DATA_PLAN_COMPLETED_IDS, []))
        tasks_by_id = {
            task[const.DATA_TASK_ID]: task for task in state.get(const.DATA_TASKS, [])
        }
        return [
            tasks_by_id[task_id]
            for task_id in plan.get(const.DATA_PLAN_PICKED_IDS, [])
            if task_id not in completed and task_id in tasks_by_id
        ]

    @staticmethod
    def remaining_minutes(state: AppStateData, today_iso: str) -> int:
        """Return the estimated minutes left in today's plan."""
        return sum(
            PlanEngine.effective_estimate(task)
            for task in DailyPlanEngine.remaining_today(state, today_iso)
        )

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    @staticmethod
    def ensure_plan(
        state: AppStateData,
        today_iso: str,
        budget_min: int,
        force: bool = False,
    ) -> AppStateData:
        """Create today's plan if absent (or when forced), replacing any old plan."""
        if not force and DailyPlanEngine.todays_plan(state, today_iso) is not None:
            return state

        result = PlanEngine.build_plan(
            state.get(const.DATA_TASKS, []), today_iso, budget_min
        )
        const.LOGGER.info(
            "INFO: Daily Plan - Generated plan for %s: %s task(s), %s/%s min%s",
            today_iso,
            len(result.picked_ids),
            result.total_est_min,
            budget_min,
            " (forced)" if force else "",
        )
        new_state = dict(state)
        new_state[const.DATA_DAILY_PLAN] = {
            const.DATA_PLAN_DATE: today_iso,
            const.DATA_PLAN_PICKED_IDS: list(result.picked_ids),
            const.DATA_PLAN_COMPLETED_IDS: [],
        }
        return new_state  # type: ignore[return-value]

    @staticmethod
    def mark_complete(
        state: AppStateData, task_id: str, today_iso: str
    ) -> AppStateData:
        """Add a picked task to today's completed set (idempotent).

        Stale/absent plans and tasks outside the plan are left alone.
        """
        plan = DailyPlanEngine.todays_plan(state, today_iso)
        if plan is None:
            return state

        picked = plan.get(const.DATA_PLAN_PICKED_IDS, [])
        completed = plan.get(const.DATA_PLAN_COMPLETED_IDS, [])
        if task_id not in picked or task_id in completed:
            return state

        new_state = dict(state)
        new_state[const.DATA_DAILY_PLAN] = {
            **plan,
            const.DATA_PLAN_PICKED_IDS: list(picked),
            const.DATA_PLAN_COMPLETED_IDS: [*completed, task_id],
        }
        return new_state  # type: ignore[return-value]

    @staticmethod
    def complete_task(
        state: AppStateData, task_id: str, today_iso: str, actual_min: Any
    ) -> AppStateData:
        """Apply a "done" event: learn the estimate, then mark plan completion.

        Raises:
            KeyError: if no task has the given id.
        """
        tasks = state.get(const.DATA_TASKS, [])
        if not any(task[const.DATA_TASK_ID] == task_id for task in tasks):
            raise KeyError(task_id)

        new_state = dict(state)
        new_state[const.DATA_TASKS] = [
            EstimateEngine.record_completion(task, today_iso, actual_min)
            if task[const.DATA_TASK_ID] == task_id
            else task
            for task in tasks
        ]
        return DailyPlanEngine.mark_complete(
            new_state,  # type: ignore[arg-type]
            task_id,
            today_iso,
        )

    @staticmethod
    def upsert_task(state: AppStateData, task: TaskData) -> AppStateData:
        """Insert a new task or replace an existing one by id.

        Plan membership is never touched; edits take effect on the next
        regeneration.
        """
        task_id = task[const.DATA_TASK_ID]
        tasks = state.get(const.DATA_TASKS, [])
        new_state = dict(state)
        if any(existing[const.DATA_TASK_ID] == task_id for existing in tasks):
            new_state[const.DATA_TASKS] = [
                task if existing[const.DATA_TASK_ID] == task_id else existing
                for existing in tasks
            ]
        else:
            new_state[const.DATA_TASKS] = [*tasks, task]
        return new_state  # type: ignore[return-value]

    @staticmethod
    def remove_task(state: AppStateData, task_id: str) -> AppStateData:
        """Delete a task and purge its id from the plan, whatever its date."""
        new_state = dict(state)
        new_state[const.DATA_TASKS] = [
            task
            for task in state.get(const.DATA_TASKS, [])
            if task[const.DATA_TASK_ID] != task_id
        ]

        plan = state.get(const.DATA_DAILY_PLAN)
        if plan:
            new_state[const.DATA_DAILY_PLAN] = {
                **plan,
                const.DATA_PLAN_PICKED_IDS: [
                    pid for pid in plan.get(const.DATA_PLAN_PICKED_IDS, []) if pid != task_id
                ],
                const.DATA_PLAN_COMPLETED_IDS: [
                    cid
                    for cid in plan.get(const.DATA_PLAN_COMPLETED_IDS, [])
                    if cid != task_id
                ],
            }
        return new_state  # type: ignore[return-value]

    @staticmethod
    def replace_tasks(
        state: AppStateData, tasks: Iterable[TaskData]
    ) -> AppStateData:
        """Replace the whole task collection; the plan is discarded."""
        new_state = dict(state)
        new_state[const.DATA_TASKS] = list(tasks)
        new_state[const.DATA_DAILY_PLAN] = None
        return new_state  # type: ignore[return-value]
