"""Level-scaled biased sampling over ranked lists.

The party's mean level is mapped onto an index of the ranked list (the
*focus*).  A random sub-window of the list around the focus is then
chosen, whose width is governed by *scope*, and an item is drawn uniformly
from that window.  A small scope keeps the draw close to the focus; a
scope above 1 makes the draw nearly uniform over the whole list.

Used with:

- quest levels: damp 8, scope 0.83
- quest types:  damp 0, scope 1.8
"""

from __future__ import annotations

import logging
import math
from typing import Sequence, TypeVar

from dynamic_rpg.core.numeric import round_half_up
from dynamic_rpg.core.rng import GameRNG
from dynamic_rpg.errors import EmptyInputError

logger = logging.getLogger(__name__)

T = TypeVar("T")

LEVEL_DAMP = 8
LEVEL_SCOPE = 0.83
TYPE_DAMP = 0
TYPE_SCOPE = 1.8


def party_strength(member_levels: Sequence[int]) -> float:
    """Mean level of the active party; 0 for an empty party."""
    if not member_levels:
        return 0.0
    return sum(member_levels) / len(member_levels)


class QuestSampler:
    """Biased sampler for quest levels, types and step counts.

    Parameters
    ----------
    rng:
        Source of randomness.
    max_party_level:
        Party level that maps onto the top of a ranked list.
    """

    def __init__(self, rng: GameRNG, max_party_level: int = 100) -> None:
        self.rng = rng
        self.max_party_level = max_party_level

    def compute_focus(self, list_size: int, damp: float, strength: float) -> int:
        """Map *strength* onto an index of a list of *list_size* items.

        *damp* is subtracted from the per-rank level step, pulling the focus
        toward the bottom of the list.
        """
        if list_size <= 0:
            raise EmptyInputError("Cannot compute a focus over an empty list")
        if not strength or math.isnan(strength):
            return 0
        level_step = self.max_party_level / list_size
        damp_rate = max(level_step - damp, 0) / level_step
        return max(0, round_half_up(strength * damp_rate / level_step))

    def sample_weighted(self, items: Sequence[T], scope: float, focus: int) -> T:
        """Draw one item from a random window of *items* around *focus*."""
        if not items:
            raise EmptyInputError("Cannot sample from an empty list")

        if scope > 1:
            effective = self.rng.uniform(scope - 1, 1)
        else:
            effective = self.rng.uniform(0, scope)

        size = len(items)
        window_start = math.floor((1 - effective) * focus)
        window_end = math.ceil((size - 1 - focus) * effective + focus + 1)
        window = list(items[window_start:window_end])

        if not window:
            # Focus beyond the end of the list: the window slid off the top.
            fallback = items[-1] if window_start >= size else items[0]
            logger.debug(
                "Empty sample window [%d:%d] over %d items, using %r",
                window_start, window_end, size, fallback,
            )
            return fallback
        return self.rng.random_choice(window)

    def pickup(
        self,
        items: Sequence[T],
        damp: float,
        scope: float,
        strength: float,
    ) -> T:
        """Compute the focus for *strength* and sample around it."""
        focus = self.compute_focus(len(items), damp, strength)
        return self.sample_weighted(items, scope, focus)

    def sample_steps(self, level_index: int) -> int:
        """Number of steps for a quest of the given level (always >= 1)."""
        rank = level_index + 1
        low = round_half_up(rank * 0.4)
        high = round_half_up(round_half_up(rank * 1.6) / 2)
        if low > high:
            low, high = high, low
        return self.rng.random_int(low, high) + 1
