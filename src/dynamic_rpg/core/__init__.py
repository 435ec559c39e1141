"""Shared primitives: seeded randomness and rounding."""

from dynamic_rpg.core.numeric import round_half_up
from dynamic_rpg.core.rng import GameRNG

__all__ = ["GameRNG", "round_half_up"]
