"""Battle option and encounter definitions."""
from __future__ import annotations

from dataclasses import dataclass, replace

from encore.core.types import BattleMode


@dataclass(frozen=True, slots=True)
class BattleOptions:
    """Per-encounter configuration. Only the reward fields ever change, via ``scaled``."""

    allow_bet: bool = False
    allow_escape: bool = False
    intro: tuple[str, ...] = ()
    victory: tuple[str, ...] = ()
    defeat: tuple[str, ...] = ()
    reward_xp: int = 0
    reward_gold: int = 0
    reward_wager_points: int = 0
    is_boss: bool = False

    def scaled(self, multiplier: int) -> BattleOptions:
        """Return a copy whose reward fields are multiplied by ``multiplier``."""
        return replace(
            self,
            reward_xp=self.reward_xp * multiplier,
            reward_gold=self.reward_gold * multiplier,
            reward_wager_points=self.reward_wager_points * multiplier,
        )


@dataclass(frozen=True, slots=True)
class EncounterDef:
    """A scripted fight: who is fought, in which mode, with which options."""

    id: str
    mode: BattleMode
    enemy_ids: tuple[str, ...]
    options: BattleOptions
