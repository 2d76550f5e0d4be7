"""Factory for creating characters from roster templates."""
from __future__ import annotations

from typing import List

from encore.core.rng import RNG
from encore.data.repositories import CharactersRepository
from encore.domain.defs import CharacterDef
from encore.domain.entities import Character
from encore.domain.state import GameSession


def create_character(character_def: CharacterDef) -> Character:
    """Instantiate a fresh level-1 character with full pools."""
    return Character(
        name=character_def.name,
        class_label=character_def.class_label,
        archetype=character_def.archetype,
        max_hp=character_def.max_hp,
        hp=character_def.max_hp,
        max_mana=character_def.max_mana,
        mana=character_def.max_mana,
        wager_points=character_def.wager_points,
        inventory=list(character_def.inventory),
        inventory_max=character_def.inventory_max,
        unlocked=character_def.unlocked,
        has_spell=character_def.has_spell,
    )


def create_roster(characters_repo: CharactersRepository) -> List[Character]:
    """Build the new-game roster in template order."""
    return [create_character(character_def) for character_def in characters_repo.roster()]


def create_session(seed: int, characters_repo: CharactersRepository) -> GameSession:
    """Start a new game: seeded RNG, fresh roster, empty purse."""
    return GameSession(seed=seed, rng=RNG(seed), characters=create_roster(characters_repo))
