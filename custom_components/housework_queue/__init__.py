# File: __init__.py
"""Initialization file for the Housework Queue integration.

Handles setting up the integration, including loading configuration entries,
initializing data storage, and preparing the coordinator for data handling.

Key Features:
- Config entry setup and unload support.
- Coordinator initialization for data synchronization.
- Storage management for persistent data handling.
"""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady

from . import const
from .coordinator import HouseworkQueueDataCoordinator
from .services import async_setup_services, async_unload_services
from .storage_manager import HouseworkQueueStorageManager


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info(
        "INFO: Starting setup for Housework Queue entry: %s", entry.entry_id
    )

    # Initialize the storage manager to handle persistent data.
    storage_manager = HouseworkQueueStorageManager(hass, const.STORAGE_KEY)
    await storage_manager.async_initialize()

    # Create the data coordinator for managing updates and synchronization.
    coordinator = HouseworkQueueDataCoordinator(hass, entry, storage_manager)

    try:
        # Perform the first refresh to load data and ensure today's plan.
        await coordinator.async_config_entry_first_refresh()
    except ConfigEntryNotReady as e:
        const.LOGGER.error("ERROR: Failed to refresh coordinator data: %s", e)
        raise ConfigEntryNotReady from e

    # Store the coordinator and data manager in hass.data.
    hass.data.setdefault(const.DOMAIN, {})[entry.entry_id] = {
        const.COORDINATOR: coordinator,
        const.STORAGE_MANAGER: storage_manager,
    }

    # Set up services required by the integration.
    async_setup_services(hass)

    # Forward the setup to supported platforms.
    await hass.config_entries.async_forward_entry_setups(entry, const.PLATFORMS)

    # Reload when options change (budget, refresh interval, retention).
    entry.async_on_unload(entry.add_update_listener(_async_update_listener))

    const.LOGGER.info(
        "INFO: Housework Queue setup complete for entry: %s", entry.entry_id
    )
    return True


async def _async_update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry after its options were saved."""
    const.LOGGER.debug("DEBUG: Options updated. Reloading entry: %s", entry.entry_id)
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass, entry):
    """Unload a config entry."""
    const.LOGGER.info("INFO: Unloading Housework Queue entry: %s", entry.entry_id)

    # Unload platforms
    unload_ok = await hass.config_entries.async_unload_platforms(entry, const.PLATFORMS)

    if unload_ok:
        hass.data[const.DOMAIN].pop(entry.entry_id)

        # Await service unloading
        await async_unload_services(hass)

    return unload_ok


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle removal of a config entry by deleting its stored data."""
    const.LOGGER.info("INFO: Removing Housework Queue entry: %s", entry.entry_id)

    # The entry is already unloaded here, so use a fresh manager for the same key.
    storage_manager = HouseworkQueueStorageManager(hass, const.STORAGE_KEY)
    await storage_manager.async_delete_storage()

    const.LOGGER.info("INFO: Housework Queue entry data cleared: %s", entry.entry_id)
