# File: utils/__init__.py
"""Pure Python utilities for Housework Queue.

This module contains pure Python functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed in this module.

Submodules:
    - dt_utils: Calendar date parsing, formatting and day arithmetic
    - math_utils: Integer clamping and rounding

Usage:
    from . import dt_utils
    from .math_utils import clamp_int
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
