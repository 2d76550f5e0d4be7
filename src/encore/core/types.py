"""Shared type aliases for the core and domain layers."""
from typing import Literal

Archetype = Literal["idol", "street", "strategist", "pop"]
EnemyCategory = Literal["hater", "crew", "rival", "boss", "farm"]
BattleMode = Literal["solo", "party"]
Outcome = Literal["victory", "defeat", "retreat", "cancelled"]
ItemType = Literal["consumable", "equipment", "special", "material", "boost"]

__all__ = ["Archetype", "BattleMode", "EnemyCategory", "ItemType", "Outcome"]
