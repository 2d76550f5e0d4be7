"""Item catalog entries."""
from __future__ import annotations

from dataclasses import dataclass

from encore.core.types import ItemType


@dataclass(frozen=True, slots=True)
class ItemDef:
    """Catalog entry; ``effect_id`` links it to an effect function."""

    id: str
    name: str
    description: str
    type: ItemType
    price: int = 0
    effect_id: str | None = None
    wager_cost: int = 0
