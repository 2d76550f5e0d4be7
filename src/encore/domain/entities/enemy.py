"""Enemy runtime model."""
from __future__ import annotations

from dataclasses import dataclass

from encore.core.types import EnemyCategory


@dataclass(slots=True)
class Enemy:
    """A hostile participant that only lives for one encounter."""

    name: str
    category: EnemyCategory
    max_hp: int
    hp: int
    attack: int
    crit_timer: int = 3
    style: str = ""
    poison_turns: int = 0
    poison_damage: int = 0
    weaken_turns: int = 0
    silence_turns: int = 0
    template_id: str | None = None

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    def take_damage(self, amount: int) -> int:
        before = self.hp
        self.hp = max(0, self.hp - max(0, amount))
        return before - self.hp

    def reset_for_encounter(self, crit_reset: int = 3) -> None:
        self.hp = self.max_hp
        if self.crit_timer <= 0:
            self.crit_timer = crit_reset
        self.silence_turns = 0
