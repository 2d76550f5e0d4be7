"""Static definition exports."""

from .character_def import CharacterDef
from .encounter_def import BattleOptions, EncounterDef
from .enemy_def import EnemyDef
from .item_def import ItemDef

__all__ = [
    "BattleOptions",
    "CharacterDef",
    "EncounterDef",
    "EnemyDef",
    "ItemDef",
]
