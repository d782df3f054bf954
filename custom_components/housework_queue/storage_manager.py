# File: storage_manager.py
"""Handles persistent data storage for the Housework Queue integration.

Uses Home Assistant's Storage helper to save and load the task list and the
current daily plan, ensuring the state is preserved across restarts. The
whole document is written in one save call.
"""

from __future__ import annotations

from typing import Any

from homeassistant.core import HomeAssistant
from homeassistant.helpers.storage import Store

from . import const
from .type_defs import StorageData


class HouseworkQueueStorageManager:
    """Manages loading, saving, and accessing data from Home Assistant's storage."""

    def __init__(
        self, hass: HomeAssistant, storage_key: str = const.STORAGE_KEY
    ) -> None:
        """Initialize the storage manager.

        Args:
            hass: Home Assistant core object.
            storage_key: Key to identify storage location (default: const.STORAGE_KEY).

        """
        self.hass = hass
        self._storage_key = storage_key
        self._store: Store = Store(hass, const.STORAGE_VERSION, storage_key)
        # In-memory data cache for quick access.
        self._data: StorageData = self.get_default_structure()

    @staticmethod
    def get_default_structure() -> StorageData:
        """Return canonical empty data structure for fresh installations."""
        return {
            const.DATA_SCHEMA_VERSION: const.SCHEMA_VERSION_CURRENT,
            const.DATA_TASKS: [],
            const.DATA_DAILY_PLAN: None,
        }

    @staticmethod
    def upgrade_structure(data: dict[str, Any]) -> StorageData:
        """Bring a loaded document up to the current schema.

        Older documents stored the plan under "todayPlan"; documents without
        any plan key get an absent plan.
        """
        upgraded = dict(data)
        if const.DATA_DAILY_PLAN not in upgraded:
            upgraded[const.DATA_DAILY_PLAN] = upgraded.pop(
                const.DATA_DAILY_PLAN_LEGACY, None
            )
        else:
            upgraded.pop(const.DATA_DAILY_PLAN_LEGACY, None)

        if not isinstance(upgraded.get(const.DATA_TASKS), list):
            upgraded[const.DATA_TASKS] = []

        if upgraded.get(const.DATA_SCHEMA_VERSION) != const.SCHEMA_VERSION_CURRENT:
            const.LOGGER.info(
                "INFO: Upgraded storage from schema version %s to %s",
                upgraded.get(const.DATA_SCHEMA_VERSION, const.DEFAULT_ZERO),
                const.SCHEMA_VERSION_CURRENT,
            )
            upgraded[const.DATA_SCHEMA_VERSION] = const.SCHEMA_VERSION_CURRENT
        return upgraded  # type: ignore[return-value]

    async def async_initialize(self) -> None:
        """Load data from storage during startup.

        If no data exists, initializes with an empty structure.
        """
        const.LOGGER.debug("DEBUG: HouseworkQueueStorageManager: Loading data from storage")
        existing_data = await self._store.async_load()

        if existing_data is None:
            # No existing data, create a new default structure.
            const.LOGGER.info("INFO: No existing storage found. Initializing new data")
            self._data = self.get_default_structure()
        else:
            self._data = self.upgrade_structure(existing_data)
            const.LOGGER.debug(
                "DEBUG: Loaded existing data from storage: %s tasks, plan %s",
                len(self._data[const.DATA_TASKS]),
                "present" if self._data[const.DATA_DAILY_PLAN] else "absent",
            )

    @property
    def data(self) -> StorageData:
        """Retrieve the in-memory data cache."""
        return self._data

    def get_data(self) -> StorageData:
        """Return the in-memory data cache."""
        return self._data

    def set_data(self, new_data: StorageData) -> None:
        """Replace the entire in-memory data structure."""
        const.LOGGER.debug(
            "DEBUG: Storage manager set_data called with %s tasks",
            len(new_data.get(const.DATA_TASKS, [])),
        )
        self._data = new_data

    async def async_save(self) -> None:
        """Save the current data structure to storage asynchronously.

        Errors are logged but do not stop execution:
            OSError: file system issues prevent saving.
            TypeError: data contains non-serializable types.
            ValueError: data is invalid for JSON serialization.
        """
        try:
            await self._store.async_save(self._data)
            const.LOGGER.debug("DEBUG: Data saved successfully to storage")
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to file system error: %s. "
                "Check disk space and file permissions for %s",
                err,
                self._store.path,
            )
        except TypeError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to non-serializable data: %s",
                err,
            )
        except ValueError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to invalid data format: %s",
                err,
            )

    async def async_delete_storage(self) -> None:
        """Clear in-memory data and delete the storage file from disk."""
        const.LOGGER.warning("WARNING: Clearing all Housework Queue data and storage")
        self._data = self.get_default_structure()

        try:
            await self._store.async_remove()
            const.LOGGER.info(
                "INFO: Storage file removed successfully: %s", self._store.path
            )
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to remove storage file %s: %s. Check file permissions",
                self._store.path,
                err,
            )
