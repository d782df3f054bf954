# File: services.py
"""Defines custom services for the Housework Queue integration.

These services allow direct actions through scripts or automations: logging
a completion, editing the task list, regenerating today's plan and moving
data in and out through backups.
"""

from typing import Any

import voluptuous as vol
from homeassistant.core import (
    HomeAssistant,
    ServiceCall,
    ServiceResponse,
    SupportsResponse,
)
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers import config_validation as cv

from . import const
from .coordinator import HouseworkQueueDataCoordinator
from .engines import TaskEngine

# --- Service Schemas ---
TASK_REFERENCE_FIELDS = {
    vol.Optional(const.FIELD_TASK_ID): cv.string,
    vol.Optional(const.FIELD_TASK_NAME): cv.string,
}

COMPLETE_TASK_SCHEMA = vol.Schema(
    {
        **TASK_REFERENCE_FIELDS,
        vol.Optional(const.FIELD_ACTUAL_MINUTES): vol.Coerce(float),
    }
)

ADD_TASK_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_NAME): cv.string,
        vol.Optional(const.FIELD_FREQUENCY_DAYS): vol.Coerce(float),
        vol.Optional(const.FIELD_LAST_DONE): cv.string,
        vol.Optional(const.FIELD_ESTIMATED_MINUTES): vol.Coerce(float),
    }
)

UPDATE_TASK_SCHEMA = vol.Schema(
    {
        **TASK_REFERENCE_FIELDS,
        vol.Optional(const.FIELD_NAME): cv.string,
        vol.Optional(const.FIELD_FREQUENCY_DAYS): vol.Coerce(float),
        vol.Optional(const.FIELD_LAST_DONE): cv.string,
        vol.Optional(const.FIELD_ESTIMATED_MINUTES): vol.Coerce(float),
    }
)

DELETE_TASK_SCHEMA = vol.Schema(TASK_REFERENCE_FIELDS)

IMPORT_TASKS_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_TEXT): cv.string,
    }
)

REGENERATE_PLAN_SCHEMA = vol.Schema(
    {
        vol.Optional(const.FIELD_BUDGET_MINUTES): vol.Coerce(float),
    }
)

CREATE_BACKUP_SCHEMA = vol.Schema({})

RESTORE_BACKUP_SCHEMA = vol.Schema(
    {
        vol.Optional(const.FIELD_FILENAME): cv.string,
        vol.Optional(const.FIELD_BACKUP_JSON): cv.string,
    }
)

TASK_INPUT_FIELDS = (
    const.FIELD_NAME,
    const.FIELD_FREQUENCY_DAYS,
    const.FIELD_LAST_DONE,
    const.FIELD_ESTIMATED_MINUTES,
)


def _get_coordinator(hass: HomeAssistant) -> HouseworkQueueDataCoordinator | None:
    """Return the coordinator of the first (only) config entry."""
    domain_entries = hass.data.get(const.DOMAIN)
    if not domain_entries:
        return None
    entry_id = next(iter(domain_entries.keys()), None)
    if entry_id is None:
        return None
    return domain_entries[entry_id][const.COORDINATOR]


def _resolve_task_id(
    coordinator: HouseworkQueueDataCoordinator, data: dict[str, Any]
) -> str:
    """Map task_id or task_name from a service call to an internal id."""
    task_id = data.get(const.FIELD_TASK_ID)
    task_name = data.get(const.FIELD_TASK_NAME)
    if not task_id and not task_name:
        raise HomeAssistantError(const.ERROR_TASK_REFERENCE_REQUIRED)

    task = TaskEngine.find_task(
        coordinator.tasks_data, task_id=task_id, name=task_name
    )
    if task is None:
        reference = task_id or task_name
        const.LOGGER.warning(
            "WARNING: %s", const.ERROR_TASK_NOT_FOUND_FMT.format(reference)
        )
        raise HomeAssistantError(const.ERROR_TASK_NOT_FOUND_FMT.format(reference))
    return task[const.DATA_TASK_ID]


def _task_input(data: dict[str, Any]) -> dict[str, Any]:
    """Pick the task editor fields out of service data."""
    return {field: data[field] for field in TASK_INPUT_FIELDS if field in data}


def async_setup_services(hass: HomeAssistant):
    """Register Housework Queue services."""

    async def handle_complete_task(call: ServiceCall):
        """Handle logging a task completion."""
        coordinator = _get_coordinator(hass)
        if not coordinator:
            const.LOGGER.warning("WARNING: Complete Task: %s", const.MSG_NO_ENTRY_FOUND)
            return

        task_id = _resolve_task_id(coordinator, call.data)
        coordinator.complete_task(
            task_id, call.data.get(const.FIELD_ACTUAL_MINUTES)
        )

    async def handle_add_task(call: ServiceCall):
        """Handle adding a task."""
        coordinator = _get_coordinator(hass)
        if not coordinator:
            const.LOGGER.warning("WARNING: Add Task: %s", const.MSG_NO_ENTRY_FOUND)
            return

        coordinator.add_task(_task_input(call.data))

    async def handle_update_task(call: ServiceCall):
        """Handle editing a task."""
        coordinator = _get_coordinator(hass)
        if not coordinator:
            const.LOGGER.warning("WARNING: Update Task: %s", const.MSG_NO_ENTRY_FOUND)
            return

        task_id = _resolve_task_id(coordinator, call.data)
        coordinator.update_task(task_id, _task_input(call.data))

    async def handle_delete_task(call: ServiceCall):
        """Handle deleting a task."""
        coordinator = _get_coordinator(hass)
        if not coordinator:
            const.LOGGER.warning("WARNING: Delete Task: %s", const.MSG_NO_ENTRY_FOUND)
            return

        coordinator.delete_task(_resolve_task_id(coordinator, call.data))

    async def handle_import_tasks(call: ServiceCall):
        """Handle replacing the task list from pasted rows."""
        coordinator = _get_coordinator(hass)
        if not coordinator:
            const.LOGGER.warning("WARNING: Import Tasks: %s", const.MSG_NO_ENTRY_FOUND)
            return

        coordinator.import_tasks(call.data[const.FIELD_TEXT])

    async def handle_regenerate_plan(call: ServiceCall):
        """Handle rebuilding today's plan."""
        coordinator = _get_coordinator(hass)
        if not coordinator:
            const.LOGGER.warning(
                "WARNING: Regenerate Plan: %s", const.MSG_NO_ENTRY_FOUND
            )
            return

        coordinator.regenerate_plan(call.data.get(const.FIELD_BUDGET_MINUTES))

    async def handle_create_backup(_call: ServiceCall) -> ServiceResponse:
        """Handle writing a backup file."""
        coordinator = _get_coordinator(hass)
        if not coordinator:
            const.LOGGER.warning("WARNING: Create Backup: %s", const.MSG_NO_ENTRY_FOUND)
            raise HomeAssistantError(const.MSG_NO_ENTRY_FOUND)

        return await coordinator.async_create_backup()

    async def handle_restore_backup(call: ServiceCall):
        """Handle restoring from a backup file or pasted JSON."""
        coordinator = _get_coordinator(hass)
        if not coordinator:
            const.LOGGER.warning(
                "WARNING: Restore Backup: %s", const.MSG_NO_ENTRY_FOUND
            )
            return

        await coordinator.async_restore_backup(
            filename=call.data.get(const.FIELD_FILENAME),
            backup_json=call.data.get(const.FIELD_BACKUP_JSON),
        )

    # --- Register Services ---
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_COMPLETE_TASK,
        handle_complete_task,
        schema=COMPLETE_TASK_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_ADD_TASK,
        handle_add_task,
        schema=ADD_TASK_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_UPDATE_TASK,
        handle_update_task,
        schema=UPDATE_TASK_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_DELETE_TASK,
        handle_delete_task,
        schema=DELETE_TASK_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_IMPORT_TASKS,
        handle_import_tasks,
        schema=IMPORT_TASKS_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_REGENERATE_PLAN,
        handle_regenerate_plan,
        schema=REGENERATE_PLAN_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_CREATE_BACKUP,
        handle_create_backup,
        schema=CREATE_BACKUP_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_RESTORE_BACKUP,
        handle_restore_backup,
        schema=RESTORE_BACKUP_SCHEMA,
    )

    const.LOGGER.info("INFO: Housework Queue services have been registered successfully")


async def async_unload_services(hass: HomeAssistant):
    """Unregister Housework Queue services when unloading the integration."""
    services = [
        const.SERVICE_COMPLETE_TASK,
        const.SERVICE_ADD_TASK,
        const.SERVICE_UPDATE_TASK,
        const.SERVICE_DELETE_TASK,
        const.SERVICE_IMPORT_TASKS,
        const.SERVICE_REGENERATE_PLAN,
        const.SERVICE_CREATE_BACKUP,
        const.SERVICE_RESTORE_BACKUP,
    ]

    for service in services:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)

    const.LOGGER.info("INFO: Housework Queue services have been unregistered")
