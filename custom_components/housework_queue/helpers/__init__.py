# File: helpers/__init__.py
"""Home Assistant-bound helper functions for Housework Queue.

This module contains functions that REQUIRE Home Assistant dependencies.

NOTE: Functions that need `hass` object belong here, NOT in utils/.

Submodules:
    - backup_helpers: Snapshot schema plus backup file utilities

Usage:
    from .helpers import backup_helpers as bh
"""

from . import backup_helpers

__all__ = [
    "backup_helpers",
]
