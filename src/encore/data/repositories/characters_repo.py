"""Playable roster repository."""
from __future__ import annotations

from typing import Dict

from encore.data.errors import DataValidationError
from encore.data.repositories.base import RepositoryBase
from encore.domain.defs import CharacterDef
from encore.domain.kits import KITS

_FIELDS = {
    "name",
    "class_label",
    "archetype",
    "max_hp",
    "max_mana",
    "wager_points",
    "inventory",
    "inventory_max",
    "unlocked",
    "has_spell",
}


class CharactersRepository(RepositoryBase[CharacterDef]):
    """Loads roster templates; file order is the roster order."""

    def __init__(self, base_path=None) -> None:
        super().__init__("characters.json", base_path)
        self._order: list[str] = []

    def _build(self, raw: dict[str, object]) -> Dict[str, CharacterDef]:
        characters: Dict[str, CharacterDef] = {}
        self._order = []
        for raw_id, payload in raw.items():
            context = f"character '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_required(data, {"name", "class_label", "archetype", "max_hp", "max_mana"}, context)
            self._assert_known(data, _FIELDS, context)
            archetype = self._require_str(data["archetype"], f"{context} archetype")
            if archetype not in KITS:
                raise DataValidationError(f"{context} archetype '{archetype}' has no combatant kit.")
            max_hp = self._require_int(data["max_hp"], f"{context} max_hp")
            if max_hp <= 0:
                raise DataValidationError(f"{context} max_hp must be positive.")
            inventory = tuple(self._require_str_list(data.get("inventory", []), f"{context} inventory"))
            inventory_max = self._require_int(data.get("inventory_max", 12), f"{context} inventory_max")
            if len(inventory) > inventory_max:
                raise DataValidationError(f"{context} starts with more items than it can carry.")
            characters[raw_id] = CharacterDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                class_label=self._require_str(data["class_label"], f"{context} class_label"),
                archetype=archetype,  # type: ignore[arg-type]
                max_hp=max_hp,
                max_mana=self._require_int(data["max_mana"], f"{context} max_mana"),
                wager_points=self._require_int(data.get("wager_points", 0), f"{context} wager_points"),
                inventory=inventory,
                inventory_max=inventory_max,
                unlocked=self._require_bool(data.get("unlocked", False), f"{context} unlocked"),
                has_spell=self._require_bool(data.get("has_spell", False), f"{context} has_spell"),
            )
            self._order.append(raw_id)
        return characters

    def roster(self) -> list[CharacterDef]:
        """Return templates in file order (the first entry is the lead)."""
        self._ensure_loaded()
        assert self._definitions is not None
        return [self._definitions[def_id] for def_id in self._order]
