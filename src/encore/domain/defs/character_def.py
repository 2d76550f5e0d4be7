"""Playable character template definitions."""
from __future__ import annotations

from dataclasses import dataclass

from encore.core.types import Archetype


@dataclass(frozen=True, slots=True)
class CharacterDef:
    """Roster template used for new games."""

    id: str
    name: str
    class_label: str
    archetype: Archetype
    max_hp: int
    max_mana: int
    wager_points: int = 0
    inventory: tuple[str, ...] = ()
    inventory_max: int = 12
    unlocked: bool = False
    has_spell: bool = False
