"""Factory for creating enemy instances from definitions."""
from __future__ import annotations

from typing import List

from encore.data.repositories import EnemiesRepository
from encore.domain.defs import EnemyDef
from encore.domain.entities import Enemy
from encore.services.errors import FactoryError


def create_enemy_instance(enemy_def: EnemyDef) -> Enemy:
    """Instantiate a fresh enemy at full health from its template."""
    if enemy_def.is_group:
        raise FactoryError(f"Enemy '{enemy_def.id}' is a group definition and cannot be instantiated directly.")
    if enemy_def.max_hp is None or enemy_def.attack is None or enemy_def.category is None:
        raise FactoryError(f"Enemy definition '{enemy_def.id}' is missing combat stats.")
    return Enemy(
        name=enemy_def.name,
        category=enemy_def.category,
        max_hp=enemy_def.max_hp,
        hp=enemy_def.max_hp,
        attack=enemy_def.attack,
        crit_timer=enemy_def.crit_timer if enemy_def.crit_timer > 0 else 3,
        style=enemy_def.style,
        template_id=enemy_def.id,
    )


def create_enemy_line_up(enemy_ids: List[str] | tuple[str, ...], enemies_repo: EnemiesRepository) -> List[Enemy]:
    """Instantiate every enemy named by id; group ids expand in place."""
    line_up: List[Enemy] = []
    for enemy_id in enemy_ids:
        try:
            templates = enemies_repo.expand(enemy_id)
        except KeyError as exc:
            raise FactoryError(f"Enemy '{enemy_id}' not found.") from exc
        line_up.extend(create_enemy_instance(template) for template in templates)
    return line_up
