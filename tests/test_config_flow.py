"""Tests for Housework Queue config and options flows."""

from unittest.mock import patch

from homeassistant import config_entries
from homeassistant.core import HomeAssistant
from homeassistant.data_entry_flow import FlowResultType
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.housework_queue.const import (
    CONF_BACKUPS_MAX_RETAINED,
    CONF_DAILY_BUDGET,
    CONF_UPDATE_INTERVAL,
    DOMAIN,
    HOUSEWORK_QUEUE_TITLE,
)


async def test_form_user_flow_success(hass: HomeAssistant) -> None:
    """Test successful user config flow."""
    result = await hass.config_entries.flow.async_init(
        DOMAIN, context={"source": config_entries.SOURCE_USER}
    )
    assert result.get("type") == FlowResultType.FORM
    assert result.get("step_id") == "user"

    with patch(
        "custom_components.housework_queue.async_setup_entry",
        return_value=True,
    ) as mock_setup_entry:
        result = await hass.config_entries.flow.async_configure(
            result.get("flow_id"),
            user_input={CONF_DAILY_BUDGET: 45},
        )
        await hass.async_block_till_done()

    assert result.get("type") == FlowResultType.CREATE_ENTRY
    assert result.get("title") == HOUSEWORK_QUEUE_TITLE
    assert result.get("data") == {CONF_DAILY_BUDGET: 45}
    assert len(mock_setup_entry.mock_calls) == 1


async def test_single_instance_only(hass: HomeAssistant) -> None:
    """A second entry is aborted."""
    MockConfigEntry(domain=DOMAIN, title=HOUSEWORK_QUEUE_TITLE, data={}).add_to_hass(
        hass
    )

    result = await hass.config_entries.flow.async_init(
        DOMAIN, context={"source": config_entries.SOURCE_USER}
    )
    assert result.get("type") == FlowResultType.ABORT
    assert result.get("reason") == "single_instance_allowed"


async def test_options_flow_updates_options(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Saving options stores them on the entry."""
    result = await hass.config_entries.options.async_init(init_integration.entry_id)
    assert result.get("type") == FlowResultType.FORM
    assert result.get("step_id") == "init"

    result = await hass.config_entries.options.async_configure(
        result.get("flow_id"),
        user_input={
            CONF_DAILY_BUDGET: 90,
            CONF_UPDATE_INTERVAL: 10,
            CONF_BACKUPS_MAX_RETAINED: 0,
        },
    )
    await hass.async_block_till_done()

    assert result.get("type") == FlowResultType.CREATE_ENTRY
    assert init_integration.options == {
        CONF_DAILY_BUDGET: 90,
        CONF_UPDATE_INTERVAL: 10,
        CONF_BACKUPS_MAX_RETAINED: 0,
    }
