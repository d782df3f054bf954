"""Tests for Housework Queue diagnostics."""

from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.housework_queue import const
from custom_components.housework_queue.diagnostics import (
    async_get_config_entry_diagnostics,
)


async def test_config_entry_diagnostics_returns_storage(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Diagnostics return the raw storage document."""
    result = await async_get_config_entry_diagnostics(hass, init_integration)

    coordinator = hass.data[const.DOMAIN][init_integration.entry_id][const.COORDINATOR]
    assert result is coordinator.storage_manager.data
    assert result[const.DATA_SCHEMA_VERSION] == const.SCHEMA_VERSION_CURRENT
    assert [task["id"] for task in result[const.DATA_TASKS]] == [
        "dishes",
        "laundry",
        "windows",
    ]
    assert result[const.DATA_DAILY_PLAN] is not None
