"""Battle domain models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from encore.core.rng import RNG
from encore.core.types import BattleMode, Outcome
from encore.domain.defs import BattleOptions
from encore.domain.entities import Character, Enemy


@dataclass(frozen=True, slots=True)
class RewardGrant:
    """Deltas a victory hands to one character; the session applies them."""

    character_name: str
    xp: int
    gold: int
    wager_points: int


@dataclass(slots=True)
class BattleState:
    """Tracks one encounter. Enemies belong to it; characters are borrowed."""

    label: str
    mode: BattleMode
    party: List[Character]
    enemies: List[Enemy]
    options: BattleOptions
    rng: RNG
    bet: int = 1
    bet_settled: bool = False
    round: int = 1
    outcome: Outcome | None = None
    rewards: List[RewardGrant] = field(default_factory=list)
    rewards_applied: bool = False

    @property
    def is_over(self) -> bool:
        return self.outcome is not None

    def living_party(self) -> List[Character]:
        return [member for member in self.party if member.is_alive]

    def living_enemies(self) -> List[Enemy]:
        return [enemy for enemy in self.enemies if enemy.is_alive]

    def all_enemies_down(self) -> bool:
        return all(not enemy.is_alive for enemy in self.enemies)

    def all_party_down(self) -> bool:
        return all(not member.is_alive for member in self.party)
