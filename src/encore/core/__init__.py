"""Core helpers shared by every layer."""

from .numbers import round_half_away
from .rng import RNG

__all__ = ["RNG", "round_half_away"]
