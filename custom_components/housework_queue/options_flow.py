# File: options_flow.py
"""Options flow for the Housework Queue integration.

Edits the daily budget, the refresh interval and backup retention. Saving
reloads the entry through the update listener registered in __init__.
"""

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.helpers import selector

from . import const


def build_budget_selector() -> selector.NumberSelector:
    """Return the number selector used for the daily budget."""
    return selector.NumberSelector(
        selector.NumberSelectorConfig(
            mode=selector.NumberSelectorMode.BOX,
            min=const.BUDGET_MIN,
            max=const.BUDGET_MAX,
            step=5,
            unit_of_measurement="min",
        )
    )


def build_general_options_schema(default: dict) -> vol.Schema:
    """Build the general options schema from current values."""
    return vol.Schema(
        {
            vol.Required(
                const.CONF_DAILY_BUDGET,
                default=default.get(const.CONF_DAILY_BUDGET, const.DEFAULT_DAILY_BUDGET),
            ): build_budget_selector(),
            vol.Required(
                const.CONF_UPDATE_INTERVAL,
                default=default.get(
                    const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL
                ),
            ): selector.NumberSelector(
                selector.NumberSelectorConfig(
                    mode=selector.NumberSelectorMode.BOX,
                    min=1,
                    step=1,
                    unit_of_measurement="min",
                )
            ),
            vol.Required(
                const.CONF_BACKUPS_MAX_RETAINED,
                default=default.get(
                    const.CONF_BACKUPS_MAX_RETAINED,
                    const.DEFAULT_BACKUPS_MAX_RETAINED,
                ),
            ): selector.NumberSelector(
                selector.NumberSelectorConfig(
                    mode=selector.NumberSelectorMode.BOX,
                    min=0,
                    max=const.BACKUPS_MAX_RETAINED_LIMIT,
                    step=1,
                )
            ),
        }
    )


class HouseworkQueueOptionsFlowHandler(config_entries.OptionsFlow):
    """Options Flow for the budget, refresh interval and backup retention."""

    def __init__(self, _config_entry: config_entries.ConfigEntry):
        """Initialize the options flow."""
        self._entry_options = {}

    async def async_step_init(self, user_input=None):
        """Show and save the general options."""
        if user_input is not None:
            self._entry_options = {
                const.CONF_DAILY_BUDGET: int(user_input[const.CONF_DAILY_BUDGET]),
                const.CONF_UPDATE_INTERVAL: int(user_input[const.CONF_UPDATE_INTERVAL]),
                const.CONF_BACKUPS_MAX_RETAINED: int(
                    user_input[const.CONF_BACKUPS_MAX_RETAINED]
                ),
            }
            const.LOGGER.debug(
                "DEBUG: General Options Updated: Daily Budget=%s, "
                "Update Interval=%s, Backups Retained=%s",
                self._entry_options[const.CONF_DAILY_BUDGET],
                self._entry_options[const.CONF_UPDATE_INTERVAL],
                self._entry_options[const.CONF_BACKUPS_MAX_RETAINED],
            )
            return self.async_create_entry(title="", data=self._entry_options)

        defaults = {**self.config_entry.data, **self.config_entry.options}
        return self.async_show_form(
            step_id=const.OPTIONS_FLOW_STEP_INIT,
            data_schema=build_general_options_schema(defaults),
        )
