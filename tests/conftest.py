"""Shared fixtures for Housework Queue tests."""

from datetime import timedelta
from typing import Any

import pytest
from homeassistant.core import HomeAssistant
from homeassistant.util import dt as dt_util
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.housework_queue.const import (
    CONF_DAILY_BUDGET,
    DATA_DAILY_PLAN,
    DATA_SCHEMA_VERSION,
    DATA_TASKS,
    DEFAULT_DAILY_BUDGET,
    DOMAIN,
    HOUSEWORK_QUEUE_TITLE,
    SCHEMA_VERSION_CURRENT,
    STORAGE_KEY,
    STORAGE_VERSION,
)

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


def make_task(
    task_id: str,
    name: str | None = None,
    freq_days: int = 7,
    last_done: str = "2024-01-01",
    est_min: int = 15,
    history: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Create a task record for testing."""
    return {
        "id": task_id,
        "name": name or task_id.title(),
        "freqDays": freq_days,
        "lastDoneISO": last_done,
        "estMin": est_min,
        "history": history or [],
    }


def days_ago(days: int) -> str:
    """Return the local ISO date `days` before today."""
    return (dt_util.now().date() - timedelta(days=days)).isoformat()


@pytest.fixture
def today_iso() -> str:
    """Return today's local date as Home Assistant sees it."""
    return dt_util.now().date().isoformat()


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Return a mock config entry."""
    return MockConfigEntry(
        domain=DOMAIN,
        title=HOUSEWORK_QUEUE_TITLE,
        data={CONF_DAILY_BUDGET: DEFAULT_DAILY_BUDGET},
        options={},
        entry_id="test_entry_id",
        unique_id="test_unique_id",
    )


@pytest.fixture
def mock_storage_data() -> dict[str, Any]:
    """Return a storage document with three tasks and no plan.

    Relative to today: "dishes" is 3 days overdue, "laundry" is due today,
    "windows" is not due for weeks.
    """
    return {
        DATA_SCHEMA_VERSION: SCHEMA_VERSION_CURRENT,
        DATA_TASKS: [
            make_task("dishes", "Dishes", 1, days_ago(4), 20),
            make_task("laundry", "Laundry", 7, days_ago(7), 30),
            make_task("windows", "Windows", 90, days_ago(1), 45),
        ],
        DATA_DAILY_PLAN: None,
    }


@pytest.fixture
async def init_integration(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,  # pylint: disable=redefined-outer-name
    mock_storage_data: dict[str, Any],  # pylint: disable=redefined-outer-name
) -> MockConfigEntry:
    """Set up the Housework Queue integration with seeded storage."""
    hass_storage[STORAGE_KEY] = {
        "version": STORAGE_VERSION,
        "minor_version": 1,
        "key": STORAGE_KEY,
        "data": mock_storage_data,
    }
    mock_config_entry.add_to_hass(hass)

    assert await hass.config_entries.async_setup(mock_config_entry.entry_id)
    await hass.async_block_till_done()

    return mock_config_entry
