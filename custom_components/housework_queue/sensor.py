# File: sensor.py
"""Sensors for the Housework Queue integration.

Sensors Defined in This File (2):

01. TodayPlanSensor - tasks still to do in today's plan
02. OverdueTasksSensor - tasks past their due date
"""

from typing import Any

from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import HouseworkQueueDataCoordinator
from .engines import DailyPlanEngine, PlanEngine, UrgencyEngine
from .entity import HouseworkQueueCoordinatorEntity
from .utils.dt_utils import dt_format_due_label


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities
):
    """Set up sensors for Housework Queue integration."""
    data = hass.data[const.DOMAIN][entry.entry_id]
    coordinator: HouseworkQueueDataCoordinator = data[const.COORDINATOR]

    async_add_entities(
        [
            TodayPlanSensor(coordinator, entry),
            OverdueTasksSensor(coordinator, entry),
        ]
    )


# ------------------------------------------------------------------------------------------
class TodayPlanSensor(HouseworkQueueCoordinatorEntity, SensorEntity):
    """Sensor for the tasks remaining in today's plan.

    State is the number of picked tasks not yet completed today. A plan
    generated on an earlier day counts as nothing remaining until the next
    refresh regenerates it.
    """

    _attr_has_entity_name = True
    _attr_translation_key = const.TRANS_KEY_SENSOR_TODAY_PLAN
    _attr_icon = const.DEFAULT_TODAY_PLAN_ICON
    _attr_native_unit_of_measurement = const.DEFAULT_TASKS_UNIT
    _attr_state_class = SensorStateClass.MEASUREMENT

    def __init__(self, coordinator: HouseworkQueueDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}{const.SENSOR_UID_SUFFIX_TODAY_PLAN}"

    @property
    def native_value(self) -> int:
        """Return the number of tasks left today."""
        return len(
            DailyPlanEngine.remaining_today(
                self.coordinator.state, self.coordinator.today_iso()
            )
        )

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the remaining tasks and plan bookkeeping."""
        state = self.coordinator.state
        today = self.coordinator.today_iso()
        plan = DailyPlanEngine.todays_plan(state, today) or {}

        remaining = [
            {
                const.ATTR_TASK_ID: task[const.DATA_TASK_ID],
                const.ATTR_TASK_NAME: task[const.DATA_TASK_NAME],
                const.ATTR_ESTIMATED_MINUTES: PlanEngine.effective_estimate(task),
                const.ATTR_DUE_DATE: UrgencyEngine.due_date(task),
                const.ATTR_DUE_LABEL: dt_format_due_label(
                    UrgencyEngine.due_date(task), today
                ),
            }
            for task in DailyPlanEngine.remaining_today(state, today)
        ]

        return {
            const.ATTR_PLAN_DATE: plan.get(const.DATA_PLAN_DATE),
            const.ATTR_PLAN_STATE: str(DailyPlanEngine.get_plan_state(state, today)),
            const.ATTR_REMAINING_TASKS: remaining,
            const.ATTR_REMAINING_MINUTES: DailyPlanEngine.remaining_minutes(
                state, today
            ),
            const.ATTR_BUDGET_MINUTES: self.coordinator.budget_minutes,
            const.ATTR_PICKED_COUNT: len(plan.get(const.DATA_PLAN_PICKED_IDS, [])),
            const.ATTR_COMPLETED_COUNT: len(
                plan.get(const.DATA_PLAN_COMPLETED_IDS, [])
            ),
        }


# ------------------------------------------------------------------------------------------
class OverdueTasksSensor(HouseworkQueueCoordinatorEntity, SensorEntity):
    """Sensor counting tasks past their due date, most overdue first."""

    _attr_has_entity_name = True
    _attr_translation_key = const.TRANS_KEY_SENSOR_OVERDUE_TASKS
    _attr_icon = const.DEFAULT_OVERDUE_TASKS_ICON
    _attr_native_unit_of_measurement = const.DEFAULT_TASKS_UNIT
    _attr_state_class = SensorStateClass.MEASUREMENT

    def __init__(self, coordinator: HouseworkQueueDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator)
        self._attr_unique_id = (
            f"{entry.entry_id}{const.SENSOR_UID_SUFFIX_OVERDUE_TASKS}"
        )

    def _overdue(self) -> list[tuple[int, dict[str, Any]]]:
        today = self.coordinator.today_iso()
        overdue = [
            (UrgencyEngine.days_overdue(task, today), task)
            for task in self.coordinator.tasks_data
            if UrgencyEngine.is_overdue(task, today)
        ]
        overdue.sort(key=lambda item: -item[0])
        return overdue

    @property
    def native_value(self) -> int:
        """Return the number of overdue tasks."""
        return len(self._overdue())

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """List overdue tasks with days overdue."""
        return {
            const.ATTR_OVERDUE_TASKS: [
                {
                    const.ATTR_TASK_ID: task[const.DATA_TASK_ID],
                    const.ATTR_TASK_NAME: task[const.DATA_TASK_NAME],
                    const.ATTR_DAYS_OVERDUE: days,
                }
                for days, task in self._overdue()
            ]
        }
