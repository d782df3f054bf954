"""Urgency Engine - Pure logic for due dates and urgency scoring.

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions are static methods that operate on passed-in data; "today" is
always an explicit ISO date argument.

Scoring:
    ratio = max(0, days since last done) / max(1, frequency)
    not yet due (ratio < 1):  0.02 * ratio
    due or overdue:           (ratio - 1)² + 0.05 * ratio

Every due task therefore outscores every not-yet-due task (0.05 > 0.02).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import const
from ..utils.dt_utils import dt_add_days, dt_days_between

if TYPE_CHECKING:
    from ..type_defs import TaskData


class UrgencyEngine:
    """Pure logic engine for due dates, overdue checks and urgency scores.

    All methods are static - no instance state.
    """

    @staticmethod
    def effective_frequency(task: TaskData | dict[str, Any]) -> int:
        """Return the task frequency in days, never below 1."""
        try:
            freq = int(task.get(const.DATA_TASK_FREQ_DAYS) or 0)
        except (TypeError, ValueError):
            freq = 0
        return max(const.FREQ_DAYS_MIN, freq)

    @staticmethod
    def due_date(task: TaskData | dict[str, Any]) -> str:
        """Return the ISO due date: last done + frequency."""
        return dt_add_days(
            task[const.DATA_TASK_LAST_DONE], UrgencyEngine.effective_frequency(task)
        )

    @staticmethod
    def days_overdue(task: TaskData | dict[str, Any], today_iso: str) -> int:
        """Return days past the due date (negative while not yet due)."""
        return dt_days_between(UrgencyEngine.due_date(task), today_iso)

    @staticmethod
    def is_overdue(task: TaskData | dict[str, Any], today_iso: str) -> bool:
        """Return True when the due date is strictly before today."""
        return UrgencyEngine.days_overdue(task, today_iso) > 0

    @staticmethod
    def lateness_ratio(task: TaskData | dict[str, Any], today_iso: str) -> float:
        """Return days since last done divided by the frequency (>= 0)."""
        days_since = max(
            0, dt_days_between(task[const.DATA_TASK_LAST_DONE], today_iso)
        )
        return days_since / UrgencyEngine.effective_frequency(task)

    @staticmethod
    def urgency_score(task: TaskData | dict[str, Any], today_iso: str) -> float:
        """Return the continuous urgency score for a task.

        Example:
            freqDays=4, last done 10 days ago → ratio 2.5 →
            1.5² + 0.05 * 2.5 = 2.375
        """
        ratio = UrgencyEngine.lateness_ratio(task, today_iso)

        if ratio < 1:
            return const.URGENCY_NOT_DUE_WEIGHT * ratio

        base = ratio - 1
        return (
            const.URGENCY_OVERDUE_QUADRATIC * base * base
            + const.URGENCY_OVERDUE_LINEAR * ratio
        )
