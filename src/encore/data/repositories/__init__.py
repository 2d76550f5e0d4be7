"""Repository exports."""

from .characters_repo import CharactersRepository
from .encounters_repo import EncountersRepository
from .enemies_repo import EnemiesRepository
from .items_repo import ItemsRepository
from .rules_repo import RulesRepository

__all__ = [
    "CharactersRepository",
    "EncountersRepository",
    "EnemiesRepository",
    "ItemsRepository",
    "RulesRepository",
]
