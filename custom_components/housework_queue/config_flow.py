# File: config_flow.py
"""Config flow for the Housework Queue integration.

A single entry holds the daily time budget; tasks live in storage and are
managed through services.
"""

from typing import Any, Optional

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.core import callback

from . import const
from .options_flow import HouseworkQueueOptionsFlowHandler, build_budget_selector

# pylint: disable=abstract-method


class HouseworkQueueConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for Housework Queue."""

    VERSION = 1

    async def async_step_user(self, user_input: Optional[dict[str, Any]] = None):
        """Ask for the daily budget and create the entry."""

        # Check if there's an existing Housework Queue entry
        if any(self._async_current_entries()):
            return self.async_abort(reason=const.TRANS_KEY_ERROR_SINGLE_INSTANCE)

        if user_input is not None:
            budget = int(
                user_input.get(const.CONF_DAILY_BUDGET, const.DEFAULT_DAILY_BUDGET)
            )
            const.LOGGER.debug("DEBUG: Config Flow - Daily budget set to %s", budget)
            return self.async_create_entry(
                title=const.HOUSEWORK_QUEUE_TITLE,
                data={const.CONF_DAILY_BUDGET: budget},
            )

        return self.async_show_form(
            step_id=const.CONFIG_FLOW_STEP_USER,
            data_schema=vol.Schema(
                {
                    vol.Required(
                        const.CONF_DAILY_BUDGET, default=const.DEFAULT_DAILY_BUDGET
                    ): build_budget_selector(),
                }
            ),
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Return the Options Flow."""
        return HouseworkQueueOptionsFlowHandler(config_entry)
