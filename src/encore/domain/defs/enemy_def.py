"""Enemy definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from encore.core.types import EnemyCategory


@dataclass(frozen=True, slots=True)
class EnemyDef:
    """Enemy template, or a named group when ``enemy_ids`` is populated."""

    id: str
    name: str
    category: EnemyCategory | None = None
    max_hp: int | None = None
    attack: int | None = None
    crit_timer: int = 3
    style: str = ""
    enemy_ids: tuple[str, ...] = ()

    @property
    def is_group(self) -> bool:
        return bool(self.enemy_ids)
