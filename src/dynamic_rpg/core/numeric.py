"""Rounding helpers.

Quest maths rounds halves upward (``2.5 -> 3``), not to the nearest even
integer like the built-in :func:`round`.
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)
