# File: utils/math_utils.py
"""Numeric helpers for Housework Queue.

Pure Python math functions with ZERO Home Assistant dependencies.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed.

Functions:
    - round_half_up: Round to the nearest integer, halves up
    - clamp: Clamp a value between bounds
    - clamp_int: Coerce untrusted input to a bounded integer
"""

from __future__ import annotations

import logging
import math
from typing import Any

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up.

    Python's built-in round() uses banker's rounding (round(20.5) == 20);
    estimates and clamped inputs always round halves up.

    Examples:
        round_half_up(19.5) → 20
        round_half_up(20.5) → 21
        round_half_up(20.49) → 20
    """
    return math.floor(value + 0.5)


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between minimum and maximum bounds.

    Examples:
        clamp(150, 0, 100) → 100
        clamp(-10, 0, 100) → 0
        clamp(50, 0, 100) → 50
    """
    return max(min_val, min(value, max_val))


def clamp_int(raw: Any, min_val: int, max_val: int) -> int:
    """Coerce untrusted input to an integer within [min_val, max_val].

    Numbers and numeric strings are rounded half up, then clamped. Anything
    that is not a finite number (None, "", "abc", NaN, inf) becomes min_val.

    Examples:
        clamp_int("7", 1, 3650) → 7
        clamp_int(0, 1, 240) → 1
        clamp_int(999, 1, 240) → 240
        clamp_int("abc", 1, 3650) → 1
    """
    if isinstance(raw, bool):
        return min_val
    try:
        number = float(str(raw).strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError):
        _LOGGER.debug("Non-numeric value %r clamped to %s", raw, min_val)
        return min_val

    if not math.isfinite(number):
        return min_val

    return int(clamp(round_half_up(number), min_val, max_val))
