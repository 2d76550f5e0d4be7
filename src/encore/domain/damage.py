"""Outgoing damage modifiers shared by attacks, spells and kit moves."""
from __future__ import annotations

from encore.core.rng import RNG
from encore.domain.entities import Character


def roll_outgoing_damage(user: Character, rng: RNG, *, base: int, spread: int, guard_bonus: int) -> int:
    """Roll base + bonus, then apply the user's boost and guard-ignore flags.

    The boost multiplies first; the guard-ignore bonus is added afterwards and the
    flag is consumed by this hit.
    """
    damage = base + rng.roll_bonus(spread)
    if user.battle_boost > 0:
        damage *= user.battle_boost
    if user.ignore_guard:
        damage += guard_bonus
        user.ignore_guard = False
    return damage
