"""Base entity for Housework Queue sensors."""

from __future__ import annotations

from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .coordinator import HouseworkQueueDataCoordinator


class HouseworkQueueCoordinatorEntity(CoordinatorEntity[HouseworkQueueDataCoordinator]):
    """Shared base of the today plan and overdue tasks sensors.

    Both sensors read the task list and daily plan straight from the
    coordinator, so they only need it typed.
    """

    @property
    def coordinator(self) -> HouseworkQueueDataCoordinator:
        """Return the coordinator holding tasks and today's plan."""
        return object.__getattribute__(self, "_coordinator")

    @coordinator.setter
    def coordinator(self, value: HouseworkQueueDataCoordinator) -> None:
        object.__setattr__(self, "_coordinator", value)
