"""Diagnostics support for Housework Queue integration.

The diagnostics JSON returns the raw storage document, identical to the
housework_queue_data file, so it can be inspected or pasted back during
data recovery.
"""

from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import HouseworkQueueDataCoordinator


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator: HouseworkQueueDataCoordinator = hass.data[const.DOMAIN][
        entry.entry_id
    ][const.COORDINATOR]

    return coordinator.storage_manager.data
