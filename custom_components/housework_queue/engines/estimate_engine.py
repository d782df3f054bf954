"""Estimate Engine - Adaptive duration estimates.

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.

Each completion pulls the estimate 30% of the way toward the observed
duration (single-step exponential moving average) and prepends the
observation to a newest-first history bounded to 20 entries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import const
from ..utils.math_utils import clamp_int, round_half_up

if TYPE_CHECKING:
    from ..type_defs import HistoryEntry, TaskData


class EstimateEngine:
    """Pure logic engine for estimate smoothing and completion history.

    All methods are static - no instance state.
    """

    @staticmethod
    def update_estimate(
        old_estimate: float | None,
        actual_minutes: float | None,
        smoothing: float = const.ESTIMATE_SMOOTHING,
    ) -> int:
        """Return the smoothed estimate, never below 1.

        A missing old estimate counts as the default (15); a missing actual
        leaves the estimate where it was.

        Examples:
            update_estimate(15, 30) → round(10.5 + 9) → 20
            update_estimate(20, 20) → 20
        """
        old_val = max(1.0, float(old_estimate or const.DEFAULT_EST_MIN))
        actual_val = max(1.0, float(actual_minutes or old_val))
        return max(
            1, round_half_up(old_val * (1 - smoothing) + actual_val * smoothing)
        )

    @staticmethod
    def append_history(
        history: list[HistoryEntry] | None, today_iso: str, actual_min: int
    ) -> list[HistoryEntry]:
        """Return a new history with the observation first, trimmed to 20."""
        entry = {
            const.DATA_HISTORY_DATE: today_iso,
            const.DATA_HISTORY_ACTUAL_MIN: actual_min,
        }
        previous = list(history) if isinstance(history, list) else []
        return [entry, *previous][: const.HISTORY_MAX_ENTRIES]  # type: ignore[list-item]

    @staticmethod
    def record_completion(
        task: TaskData | dict[str, Any], today_iso: str, actual_min: Any
    ) -> TaskData:
        """Return a copy of the task updated for a completion today."""
        actual = clamp_int(actual_min, const.EST_MIN_MIN, const.EST_MIN_MAX)
        new_estimate = EstimateEngine.update_estimate(
            task.get(const.DATA_TASK_EST_MIN), actual
        )
        updated = dict(task)
        updated[const.DATA_TASK_LAST_DONE] = today_iso
        updated[const.DATA_TASK_EST_MIN] = new_estimate
        updated[const.DATA_TASK_HISTORY] = EstimateEngine.append_history(
            task.get(const.DATA_TASK_HISTORY), today_iso, actual
        )
        const.LOGGER.debug(
            "DEBUG: Estimate - Task '%s' completed in %s min, estimate %s → %s",
            task.get(const.DATA_TASK_NAME),
            actual,
            task.get(const.DATA_TASK_EST_MIN),
            new_estimate,
        )
        return updated  # type: ignore[return-value]
