"""Enemies repository."""
from __future__ import annotations

from typing import Dict

from encore.data.errors import DataReferenceError, DataValidationError
from encore.data.repositories.base import RepositoryBase
from encore.domain.defs import EnemyDef

ENEMY_CATEGORIES = {"hater", "crew", "rival", "boss", "farm"}


class EnemiesRepository(RepositoryBase[EnemyDef]):
    """Loads and validates enemy templates and enemy groups."""

    def __init__(self, base_path=None) -> None:
        super().__init__("enemies.json", base_path)
        self._group_definitions: Dict[str, EnemyDef] = {}

    def _build(self, raw: dict[str, object]) -> Dict[str, EnemyDef]:
        enemies: Dict[str, EnemyDef] = {}
        self._group_definitions = {}
        for raw_id, payload in raw.items():
            context = f"enemy '{raw_id}'"
            enemy_data = self._require_mapping(payload, context)
            if "enemy_ids" in enemy_data:
                group_ids = self._require_str_list(enemy_data["enemy_ids"], f"{context} enemy_ids")
                if not group_ids:
                    raise DataValidationError(f"{context} enemy_ids must not be empty.")
                self._group_definitions[raw_id] = EnemyDef(
                    id=raw_id,
                    name=self._require_str(enemy_data.get("name"), f"{context} name"),
                    enemy_ids=tuple(group_ids),
                )
                continue

            self._assert_required(enemy_data, {"name", "category", "max_hp", "attack"}, context)
            category = self._require_str(enemy_data["category"], f"{context} category")
            if category not in ENEMY_CATEGORIES:
                raise DataValidationError(f"{context} category '{category}' is not one of {sorted(ENEMY_CATEGORIES)}.")
            enemies[raw_id] = EnemyDef(
                id=raw_id,
                name=self._require_str(enemy_data["name"], f"{context} name"),
                category=category,  # type: ignore[arg-type]
                max_hp=self._require_int(enemy_data["max_hp"], f"{context} max_hp"),
                attack=self._require_int(enemy_data["attack"], f"{context} attack"),
                crit_timer=self._require_int(enemy_data.get("crit_timer", 3), f"{context} crit_timer"),
                style=self._require_str(enemy_data.get("style", ""), f"{context} style"),
            )

        for group in self._group_definitions.values():
            for member_id in group.enemy_ids:
                if member_id not in enemies:
                    raise DataReferenceError(f"enemy group '{group.id}' references unknown enemy '{member_id}'.")
        return enemies

    def get_group(self, group_id: str) -> EnemyDef:
        """Return a group definition."""
        self._ensure_loaded()
        try:
            return self._group_definitions[group_id]
        except KeyError as exc:
            raise KeyError(group_id) from exc

    def expand(self, enemy_or_group_id: str) -> list[EnemyDef]:
        """Return the templates behind a single enemy id or a group id."""
        try:
            return [self.get(enemy_or_group_id)]
        except KeyError:
            group = self.get_group(enemy_or_group_id)
            return [self.get(member_id) for member_id in group.enemy_ids]
