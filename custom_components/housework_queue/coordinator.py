# File: coordinator.py
"""Coordinator for the Housework Queue integration.

Owns the live task collection and the daily plan record. Every operation
reads today's local date once, hands it to the pure engines, swaps in the
returned state, persists it and notifies the sensors.
"""

# pylint: disable=too-many-public-methods

from datetime import timedelta
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.event import async_track_time_change
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed
from homeassistant.util import dt as dt_util

from . import const
from .engines import DailyPlanEngine, TaskEngine, parse_import_text
from .helpers import backup_helpers as bh
from .storage_manager import HouseworkQueueStorageManager
from .type_defs import DailyPlanData, SnapshotData, TaskData
from .utils.dt_utils import dt_now_iso, dt_today_iso
from .utils.math_utils import clamp_int


class HouseworkQueueDataCoordinator(DataUpdateCoordinator):
    """Coordinator for Housework Queue integration.

    Tasks are addressed by their internal id; name lookups happen in the
    service layer.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        storage_manager: HouseworkQueueStorageManager,
    ):
        """Initialize the HouseworkQueueDataCoordinator."""
        update_interval_minutes = config_entry.options.get(
            const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL
        )

        super().__init__(
            hass,
            const.LOGGER,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=timedelta(minutes=update_interval_minutes),
        )
        self.config_entry = config_entry
        self.storage_manager = storage_manager
        self._data: dict[str, Any] = {}

    # -------------------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------------------

    @property
    def tasks_data(self) -> list[TaskData]:
        """Return the task list in insertion order."""
        return self._data.get(const.DATA_TASKS, [])

    @property
    def daily_plan(self) -> DailyPlanData | None:
        """Return the stored daily plan record, which may be stale."""
        return self._data.get(const.DATA_DAILY_PLAN)

    @property
    def state(self) -> dict[str, Any]:
        """Return the full in-memory state document."""
        return self._data

    @property
    def budget_minutes(self) -> int:
        """Return the configured daily budget, clamped to its bounds."""
        raw = self.config_entry.options.get(
            const.CONF_DAILY_BUDGET,
            self.config_entry.data.get(
                const.CONF_DAILY_BUDGET, const.DEFAULT_DAILY_BUDGET
            ),
        )
        return clamp_int(raw, const.BUDGET_MIN, const.BUDGET_MAX)

    @property
    def backups_max_retained(self) -> int:
        """Return how many backup files to keep (0 disables backups)."""
        return clamp_int(
            self.config_entry.options.get(
                const.CONF_BACKUPS_MAX_RETAINED, const.DEFAULT_BACKUPS_MAX_RETAINED
            ),
            0,
            const.BACKUPS_MAX_RETAINED_LIMIT,
        )

    @staticmethod
    def today_iso() -> str:
        """Return today's local calendar date as YYYY-MM-DD."""
        return dt_today_iso(dt_util.get_default_time_zone())

    def get_task(self, task_id: str) -> TaskData:
        """Return the task with the given id.

        Raises:
            HomeAssistantError: if the task does not exist.
        """
        task = TaskEngine.find_task(self.tasks_data, task_id=task_id)
        if task is None:
            raise HomeAssistantError(const.ERROR_TASK_NOT_FOUND_FMT.format(task_id))
        return task

    # -------------------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------------------

    async def _async_update_data(self):
        """Periodic update: make sure a plan exists for today."""
        try:
            self._commit(
                DailyPlanEngine.ensure_plan(
                    self._data, self.today_iso(), self.budget_minutes
                ),
                notify=False,
            )
            return self._data
        except Exception as err:  # pylint: disable=broad-exception-caught
            raise UpdateFailed(f"Error updating Housework Queue data: {err}") from err

    async def async_config_entry_first_refresh(self):
        """Load from storage and generate today's plan if needed."""
        stored_data = self.storage_manager.get_data()
        if stored_data:
            self._data = stored_data
        else:
            self._data = self.storage_manager.get_default_structure()

        # Fresh plan at local midnight
        self.config_entry.async_on_unload(
            async_track_time_change(
                self.hass, self._async_handle_day_change, **const.DEFAULT_DAILY_RESET_TIME
            )
        )

        self._data = DailyPlanEngine.ensure_plan(
            self._data, self.today_iso(), self.budget_minutes
        )
        self._persist()
        await super().async_config_entry_first_refresh()

    async def _async_handle_day_change(self, now):
        """Generate the plan for the new day."""
        const.LOGGER.debug("DEBUG: Day change detected at %s", now)
        self._commit(
            DailyPlanEngine.ensure_plan(
                self._data, self.today_iso(), self.budget_minutes
            )
        )

    # -------------------------------------------------------------------------------------
    # Task Operations
    # -------------------------------------------------------------------------------------

    def complete_task(self, task_id: str, actual_minutes: Any = None) -> TaskData:
        """Record that a task was done today.

        The estimate learner runs first, then the task joins today's
        completed set when it is part of today's plan. Without an actual
        duration the current estimate is used.
        """
        task = self.get_task(task_id)
        if actual_minutes is None:
            actual_minutes = task.get(const.DATA_TASK_EST_MIN, const.DEFAULT_EST_MIN)

        today = self.today_iso()
        state = DailyPlanEngine.ensure_plan(self._data, today, self.budget_minutes)
        new_state = DailyPlanEngine.complete_task(state, task_id, today, actual_minutes)
        self._commit(new_state)

        updated = self.get_task(task_id)
        const.LOGGER.info(
            "INFO: Task '%s' completed in %s min, estimate now %s min",
            updated[const.DATA_TASK_NAME],
            updated[const.DATA_TASK_HISTORY][0][const.DATA_HISTORY_ACTUAL_MIN],
            updated[const.DATA_TASK_EST_MIN],
        )
        return updated

    def add_task(self, task_input: dict[str, Any]) -> TaskData:
        """Create a task from service input.

        Raises:
            HomeAssistantError: if the name is empty or the date is malformed.
        """
        self._raise_on_invalid(TaskEngine.validate_task_input(task_input))
        task = TaskEngine.build_task(task_input, self.today_iso())
        self._commit(DailyPlanEngine.upsert_task(self._data, task))
        const.LOGGER.info(
            "INFO: Added task '%s' (every %s days, %s min)",
            task[const.DATA_TASK_NAME],
            task[const.DATA_TASK_FREQ_DAYS],
            task[const.DATA_TASK_EST_MIN],
        )
        return task

    def update_task(self, task_id: str, task_input: dict[str, Any]) -> TaskData:
        """Edit an existing task; omitted fields keep their values.

        Plan membership is not recomputed until the next regeneration.
        """
        existing = self.get_task(task_id)
        self._raise_on_invalid(TaskEngine.validate_task_input(task_input, partial=True))
        task = TaskEngine.build_task(task_input, self.today_iso(), existing=existing)
        self._commit(DailyPlanEngine.upsert_task(self._data, task))
        const.LOGGER.info("INFO: Updated task '%s'", task[const.DATA_TASK_NAME])
        return task

    def delete_task(self, task_id: str) -> None:
        """Delete a task and drop it from the plan."""
        task = self.get_task(task_id)
        self._commit(DailyPlanEngine.remove_task(self._data, task_id))
        const.LOGGER.info("INFO: Deleted task '%s'", task[const.DATA_TASK_NAME])

    def import_tasks(self, text: str) -> int:
        """Replace all tasks with rows parsed from pasted text.

        Returns:
            Number of tasks imported.

        Raises:
            HomeAssistantError: if no row could be parsed; state is unchanged.
        """
        tasks = parse_import_text(text)
        if not tasks:
            const.LOGGER.warning("WARNING: Import Tasks: %s", const.ERROR_IMPORT_NO_ROWS)
            raise HomeAssistantError(const.ERROR_IMPORT_NO_ROWS)

        state = DailyPlanEngine.replace_tasks(self._data, tasks)
        self._commit(
            DailyPlanEngine.ensure_plan(state, self.today_iso(), self.budget_minutes)
        )
        const.LOGGER.info("INFO: Imported %s task(s)", len(tasks))
        return len(tasks)

    # -------------------------------------------------------------------------------------
    # Plan Operations
    # -------------------------------------------------------------------------------------

    def regenerate_plan(self, budget_minutes: Any = None) -> DailyPlanData:
        """Rebuild today's plan, discarding today's completion marks."""
        budget = (
            self.budget_minutes
            if budget_minutes is None
            else clamp_int(budget_minutes, const.BUDGET_MIN, const.BUDGET_MAX)
        )
        self._commit(
            DailyPlanEngine.ensure_plan(
                self._data, self.today_iso(), budget, force=True
            )
        )
        return self._data[const.DATA_DAILY_PLAN]

    # -------------------------------------------------------------------------------------
    # Backup / Restore
    # -------------------------------------------------------------------------------------

    def build_backup_snapshot(self) -> SnapshotData:
        """Return the current state as a versioned snapshot document."""
        return bh.build_snapshot(self._data, dt_now_iso())

    async def async_create_backup(self) -> dict[str, str]:
        """Write today's backup file and prune old ones.

        Returns:
            Dict with the backup filename and full path.

        Raises:
            HomeAssistantError: if backups are disabled or the write fails.
        """
        max_backups = self.backups_max_retained
        if max_backups == 0:
            await bh.cleanup_old_backups(self.hass, 0)
            raise HomeAssistantError(const.ERROR_BACKUPS_DISABLED)

        today = self.today_iso()
        try:
            path = await bh.async_write_backup(
                self.hass, self.build_backup_snapshot(), today
            )
        except OSError as err:
            const.LOGGER.error("ERROR: Failed to write backup: %s", err)
            raise HomeAssistantError(
                const.ERROR_BACKUP_WRITE_FAILED_FMT.format(err)
            ) from err

        await bh.cleanup_old_backups(self.hass, max_backups)
        return {
            const.FIELD_FILENAME: bh.backup_filename(today),
            const.FIELD_PATH: path,
        }

    async def async_restore_backup(
        self, filename: str | None = None, backup_json: str | None = None
    ) -> int:
        """Replace the whole state with a backup.

        The snapshot is fully decoded before anything changes, so a bad
        backup leaves the current state untouched.

        Returns:
            Number of tasks restored.

        Raises:
            HomeAssistantError: if no source is given or the backup is invalid.
        """
        try:
            if filename:
                text = await bh.async_read_backup(self.hass, filename)
            elif backup_json:
                text = backup_json
            else:
                raise HomeAssistantError(const.ERROR_RESTORE_SOURCE_REQUIRED)
            restored = bh.parse_snapshot_json(text)
        except bh.InvalidSnapshotError as err:
            const.LOGGER.warning("WARNING: Restore Backup: %s", err)
            raise HomeAssistantError(const.ERROR_RESTORE_FAILED_FMT.format(err)) from err

        new_state = {
            const.DATA_SCHEMA_VERSION: const.SCHEMA_VERSION_CURRENT,
            const.DATA_TASKS: restored[const.DATA_TASKS],
            const.DATA_DAILY_PLAN: restored[const.DATA_DAILY_PLAN],
        }
        self._commit(
            DailyPlanEngine.ensure_plan(new_state, self.today_iso(), self.budget_minutes)
        )
        const.LOGGER.info(
            "INFO: Restored %s task(s) from %s",
            len(restored[const.DATA_TASKS]),
            filename or "pasted JSON",
        )
        return len(restored[const.DATA_TASKS])

    # -------------------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------------------

    @staticmethod
    def _raise_on_invalid(errors: dict[str, str]) -> None:
        """Raise the first validation error as a user-facing message."""
        if errors:
            trans_key = next(iter(errors.values()))
            raise HomeAssistantError(
                const.VALIDATION_ERROR_MESSAGES.get(trans_key, trans_key)
            )

    def _commit(self, new_state: dict[str, Any], notify: bool = True) -> bool:
        """Adopt a state returned by an engine; returns False when unchanged."""
        if new_state is self._data:
            return False
        self._data = new_state
        self._persist()
        if notify:
            self.async_set_updated_data(self._data)
        return True

    def _persist(self):
        """Save to persistent storage."""
        self.storage_manager.set_data(self._data)
        self.hass.add_job(self.storage_manager.async_save)
