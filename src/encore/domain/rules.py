"""Tunable combat constants."""
from __future__ import annotations

from dataclasses import dataclass

# Defaults mirror the shipped rules.json. Spreads are inclusive upper bounds of
# the uniform bonus added on top of a base value (a spread of 3 rolls 0..3).


@dataclass(frozen=True, slots=True)
class CombatRules:
    """Numbers shared by the resolver, the status rules and the wager maths."""

    attack_spread_solo: int = 3
    attack_spread_party: int = 4
    attack_guard_bonus: int = 6
    spell_cost: int = 10
    spell_base: int = 18
    spell_spread_solo: int = 5
    spell_spread_party: int = 6
    spell_guard_bonus: int = 8
    crit_reset: int = 3
    weaken_factor: float = 0.6
    xp_per_level: int = 100
    level_hp_gain: int = 6
    level_mana_gain: int = 4
    max_bet: int = 4

    def attack_spread(self, mode: str) -> int:
        return self.attack_spread_solo if mode == "solo" else self.attack_spread_party

    def spell_spread(self, mode: str) -> int:
        return self.spell_spread_solo if mode == "solo" else self.spell_spread_party


DEFAULT_RULES = CombatRules()
