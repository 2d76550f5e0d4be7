"""Items repository."""
from __future__ import annotations

from typing import Dict

from encore.data.errors import DataValidationError
from encore.data.repositories.base import RepositoryBase
from encore.domain.defs import ItemDef

ITEM_TYPES = {"consumable", "equipment", "special", "material", "boost"}


class ItemsRepository(RepositoryBase[ItemDef]):
    """Loads and validates catalog entries."""

    def __init__(self, base_path=None) -> None:
        super().__init__("items.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, ItemDef]:
        items: Dict[str, ItemDef] = {}
        for raw_id, payload in raw.items():
            context = f"item '{raw_id}'"
            item_data = self._require_mapping(payload, context)
            self._assert_required(item_data, {"name", "description", "type"}, context)
            self._assert_known(
                item_data,
                {"name", "description", "type", "price", "effect", "wager_cost"},
                context,
            )
            item_type = self._require_str(item_data["type"], f"{context} type")
            if item_type not in ITEM_TYPES:
                raise DataValidationError(f"{context} type '{item_type}' is not one of {sorted(ITEM_TYPES)}.")
            effect = item_data.get("effect")
            items[raw_id] = ItemDef(
                id=raw_id,
                name=self._require_str(item_data["name"], f"{context} name"),
                description=self._require_str(item_data["description"], f"{context} description"),
                type=item_type,  # type: ignore[arg-type]
                price=self._require_int(item_data.get("price", 0), f"{context} price"),
                effect_id=None if effect is None else self._require_str(effect, f"{context} effect"),
                wager_cost=self._require_int(item_data.get("wager_cost", 0), f"{context} wager_cost"),
            )
        return items
