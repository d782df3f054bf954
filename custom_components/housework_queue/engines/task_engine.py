"""Task Engine - Validation and construction of task records.

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.

This is the edit boundary for manual add/edit: user input is validated here
before a TaskData is built, so an invalid date or empty name never reaches
the stored state. Numeric fields are clamped rather than rejected.

Input dicts use the service field names (name, frequency_days, last_done,
estimated_minutes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
import uuid

from .. import const
from ..utils.dt_utils import dt_parse_flexible_date
from ..utils.math_utils import clamp_int

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from ..type_defs import TaskData


def new_task_id() -> str:
    """Return a fresh opaque task id."""
    return uuid.uuid4().hex


class TaskEngine:
    """Pure logic engine for task validation, building and lookup.

    All methods are static - no instance state.
    """

    @staticmethod
    def validate_task_input(
        user_input: dict[str, Any], partial: bool = False
    ) -> dict[str, str]:
        """Validate add/edit input.

        Args:
            user_input: Service or form data
            partial: If True (edit), only fields present are checked

        Returns:
            Dict of field → translation key; empty when valid.
        """
        errors: dict[str, str] = {}

        if not partial or const.FIELD_NAME in user_input:
            name = str(user_input.get(const.FIELD_NAME) or "").strip()
            if not name:
                errors[const.FIELD_NAME] = const.TRANS_KEY_ERROR_INVALID_NAME

        last_done = user_input.get(const.FIELD_LAST_DONE)
        if last_done is not None and dt_parse_flexible_date(str(last_done)) is None:
            errors[const.FIELD_LAST_DONE] = const.TRANS_KEY_ERROR_INVALID_DATE

        return errors

    @staticmethod
    def build_task(
        user_input: dict[str, Any],
        today_iso: str,
        existing: TaskData | None = None,
        id_factory: Callable[[], str] = new_task_id,
    ) -> TaskData:
        """Build a task record from validated input.

        Missing fields fall back to the existing task (edit) or to the
        defaults (add): frequency 7 days, estimate 15 minutes, last done today.
        The id and history of an existing task are always kept.
        """
        base: dict[str, Any] = dict(existing) if existing else {}

        name = user_input.get(const.FIELD_NAME)
        name = str(name).strip() if name is not None else base.get(const.DATA_TASK_NAME, "")

        freq_raw = user_input.get(
            const.FIELD_FREQUENCY_DAYS,
            base.get(const.DATA_TASK_FREQ_DAYS, const.DEFAULT_FREQ_DAYS),
        )
        est_raw = user_input.get(
            const.FIELD_ESTIMATED_MINUTES,
            base.get(const.DATA_TASK_EST_MIN, const.DEFAULT_EST_MIN),
        )

        last_done_raw = user_input.get(const.FIELD_LAST_DONE)
        if last_done_raw is not None:
            last_done = dt_parse_flexible_date(str(last_done_raw)) or today_iso
        else:
            last_done = base.get(const.DATA_TASK_LAST_DONE) or today_iso

        return {
            const.DATA_TASK_ID: base.get(const.DATA_TASK_ID) or id_factory(),
            const.DATA_TASK_NAME: name,
            const.DATA_TASK_FREQ_DAYS: clamp_int(
                freq_raw, const.FREQ_DAYS_MIN, const.FREQ_DAYS_MAX
            ),
            const.DATA_TASK_LAST_DONE: last_done,
            const.DATA_TASK_EST_MIN: clamp_int(
                est_raw, const.EST_MIN_MIN, const.EST_MIN_MAX
            ),
            const.DATA_TASK_HISTORY: list(base.get(const.DATA_TASK_HISTORY) or []),
        }  # type: ignore[return-value]

    @staticmethod
    def find_task(
        tasks: Iterable[TaskData],
        task_id: str | None = None,
        name: str | None = None,
    ) -> TaskData | None:
        """Find a task by id, or else by case-insensitive name."""
        task_list = list(tasks)
        if task_id:
            for task in task_list:
                if task[const.DATA_TASK_ID] == task_id:
                    return task
        if name:
            wanted = name.strip().casefold()
            for task in task_list:
                if str(task.get(const.DATA_TASK_NAME, "")).casefold() == wanted:
                    return task
        return None
