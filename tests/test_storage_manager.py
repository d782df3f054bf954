"""Direct unit tests for HouseworkQueueStorageManager.

Tests loading, schema upgrade, saving error handling and deletion.
"""

# pylint: disable=protected-access  # Accessing _store for testing
# pylint: disable=redefined-outer-name  # Pytest fixtures redefine names
# pylint: disable=unused-argument  # Test fixtures may be unused in simple tests

from unittest.mock import AsyncMock, patch

import pytest
from homeassistant.core import HomeAssistant

from custom_components.housework_queue import const
from custom_components.housework_queue.storage_manager import (
    HouseworkQueueStorageManager,
)
from tests.conftest import make_task


@pytest.fixture
def storage_manager(hass: HomeAssistant) -> HouseworkQueueStorageManager:
    """Return a storage manager instance."""
    return HouseworkQueueStorageManager(hass)


async def test_data_before_initialize_is_empty_document(
    storage_manager: HouseworkQueueStorageManager,
) -> None:
    """A new manager already exposes a well-formed empty document."""
    assert storage_manager.get_data() == {
        const.DATA_SCHEMA_VERSION: const.SCHEMA_VERSION_CURRENT,
        const.DATA_TASKS: [],
        const.DATA_DAILY_PLAN: None,
    }


async def test_async_initialize_creates_default_structure(
    hass: HomeAssistant,
    storage_manager: HouseworkQueueStorageManager,
) -> None:
    """Test that async_initialize creates default structure when no data exists."""
    with patch.object(storage_manager._store, "async_load", return_value=None):
        await storage_manager.async_initialize()

    assert storage_manager.data == {
        const.DATA_SCHEMA_VERSION: const.SCHEMA_VERSION_CURRENT,
        const.DATA_TASKS: [],
        const.DATA_DAILY_PLAN: None,
    }


async def test_async_initialize_loads_existing_data(
    hass: HomeAssistant,
    storage_manager: HouseworkQueueStorageManager,
) -> None:
    """Test that async_initialize loads existing storage data unchanged."""
    existing_data = {
        const.DATA_SCHEMA_VERSION: const.SCHEMA_VERSION_CURRENT,
        const.DATA_TASKS: [make_task("a")],
        const.DATA_DAILY_PLAN: {
            "dateISO": "2024-01-11",
            "pickedIds": ["a"],
            "completedIds": [],
        },
    }
    with patch.object(storage_manager._store, "async_load", return_value=existing_data):
        await storage_manager.async_initialize()

    assert storage_manager.get_data() == existing_data


async def test_async_initialize_upgrades_legacy_plan_key(
    hass: HomeAssistant,
    storage_manager: HouseworkQueueStorageManager,
) -> None:
    """Documents with todayPlan and no schema version are upgraded."""
    plan = {"dateISO": "2024-01-11", "pickedIds": [], "completedIds": []}
    with patch.object(
        storage_manager._store,
        "async_load",
        return_value={const.DATA_TASKS: [], const.DATA_DAILY_PLAN_LEGACY: plan},
    ):
        await storage_manager.async_initialize()

    data = storage_manager.data
    assert data[const.DATA_DAILY_PLAN] == plan
    assert const.DATA_DAILY_PLAN_LEGACY not in data
    assert data[const.DATA_SCHEMA_VERSION] == const.SCHEMA_VERSION_CURRENT


async def test_async_save_writes_data(
    hass: HomeAssistant,
    storage_manager: HouseworkQueueStorageManager,
) -> None:
    """Saving hands the in-memory document to the store."""
    document = storage_manager.get_default_structure()
    storage_manager.set_data(document)
    with patch.object(storage_manager._store, "async_save", AsyncMock()) as mock_save:
        await storage_manager.async_save()

    mock_save.assert_awaited_once_with(document)


@pytest.mark.parametrize("error", [OSError("disk full"), TypeError("bad"), ValueError("bad")])
async def test_async_save_logs_errors(
    hass: HomeAssistant,
    storage_manager: HouseworkQueueStorageManager,
    caplog: pytest.LogCaptureFixture,
    error: Exception,
) -> None:
    """Save failures are logged, not raised."""
    with patch.object(storage_manager._store, "async_save", side_effect=error):
        await storage_manager.async_save()

    assert "Failed to save storage" in caplog.text


async def test_async_delete_storage_resets_data(
    hass: HomeAssistant,
    storage_manager: HouseworkQueueStorageManager,
) -> None:
    """Deleting storage removes the file and resets memory."""
    storage_manager.set_data({const.DATA_TASKS: [make_task("a")]})
    with patch.object(storage_manager._store, "async_remove", AsyncMock()) as mock_remove:
        await storage_manager.async_delete_storage()

    mock_remove.assert_awaited_once()
    assert storage_manager.data[const.DATA_TASKS] == []
