"""Playable character model."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import List, Sequence

from encore.core.types import Archetype

XP_PER_LEVEL = 100
LEVEL_HP_GAIN = 6
LEVEL_MANA_GAIN = 4


@dataclass(slots=True)
class Character:
    """A playable combatant owned by the game session.

    The last five fields are scoped to one encounter and are cleared by
    :meth:`reset_combat_flags` whenever a fight starts.
    """

    name: str
    class_label: str
    archetype: Archetype
    max_hp: int
    hp: int
    max_mana: int
    mana: int
    level: int = 1
    xp: int = 0
    wager_points: int = 0
    inventory: List[str] = field(default_factory=list)
    inventory_max: int = 12
    unlocked: bool = False
    has_spell: bool = False

    special_used: bool = False
    battle_boost: int = 0
    ignore_guard: bool = False
    dodge_next: bool = False
    shield_hp: int = 0

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    def reset_combat_flags(self) -> None:
        self.special_used = False
        self.battle_boost = 0
        self.ignore_guard = False
        self.dodge_next = False
        self.shield_hp = 0

    def revive_if_needed(self) -> int | None:
        """Bring a downed character back at half health; return the new HP or None."""
        if self.hp > 0:
            return None
        self.hp = max(1, self.max_hp // 2)
        self.shield_hp = 0
        return self.hp

    def gain_xp(
        self,
        amount: int,
        *,
        xp_per_level: int = XP_PER_LEVEL,
        hp_gain: int = LEVEL_HP_GAIN,
        mana_gain: int = LEVEL_MANA_GAIN,
    ) -> List[int]:
        """Add experience and return every level reached, in order."""
        reached: List[int] = []
        if amount <= 0:
            return reached
        self.xp += amount
        while self.xp >= xp_per_level:
            self.xp -= xp_per_level
            self.level += 1
            self.max_hp += hp_gain
            self.max_mana += mana_gain
            self.hp = self.max_hp
            self.mana = self.max_mana
            reached.append(self.level)
        return reached

    def take_damage(self, amount: int) -> int:
        before = self.hp
        self.hp = max(0, self.hp - max(0, amount))
        return before - self.hp

    def heal(self, amount: int) -> int:
        before = self.hp
        self.hp = min(self.max_hp, self.hp + max(0, amount))
        return self.hp - before

    def restore_mana(self, amount: int) -> int:
        before = self.mana
        self.mana = min(self.max_mana, self.mana + max(0, amount))
        return self.mana - before

    def raise_max_hp(self, amount: int) -> None:
        self.max_hp += amount
        self.hp = min(self.max_hp, self.hp + amount)

    def add_item(self, item_id: str) -> bool:
        if len(self.inventory) >= self.inventory_max:
            return False
        self.inventory.append(item_id)
        return True

    def remove_items(self, item_ids: Sequence[str]) -> bool:
        """Remove every listed id (duplicates count) or nothing at all."""
        needed = Counter(item_ids)
        held = Counter(self.inventory)
        if any(held[item_id] < count for item_id, count in needed.items()):
            return False
        kept: List[str] = []
        for item_id in self.inventory:
            if needed[item_id] > 0:
                needed[item_id] -= 1
                continue
            kept.append(item_id)
        self.inventory[:] = kept
        return True
