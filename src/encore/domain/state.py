"""Game-session state that outlives individual encounters."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from encore.core.rng import RNG
from encore.domain.entities import Character

TRAINING_BASE_HP = 24
TRAINING_BASE_ATTACK = 5


@dataclass
class GameSession:
    """Roster, shared purse and the progress counters encounters read from."""

    seed: int
    rng: RNG
    characters: List[Character] = field(default_factory=list)
    active_index: int = 0
    gold: int = 0
    training_level: int = 0
    training_base_hp: int = TRAINING_BASE_HP
    training_base_attack: int = TRAINING_BASE_ATTACK
    farm_level: int = 0

    def active(self) -> Character:
        if not self.characters:
            raise LookupError("The session has no characters.")
        if self.active_index < 0 or self.active_index >= len(self.characters):
            self.active_index = 0
        return self.characters[self.active_index]

    def party(self) -> List[Character]:
        return [character for character in self.characters if character.unlocked]
