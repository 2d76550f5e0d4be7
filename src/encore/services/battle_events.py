"""Typed narration records produced by the battle engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from encore.core.types import BattleMode, Outcome


@dataclass(frozen=True, slots=True)
class CombatantSnapshot:
    """Read-only copy of one combatant for observe output."""

    index: int
    name: str
    hp: int
    max_hp: int
    is_alive: bool
    mana: int | None = None
    max_mana: int | None = None
    shield_hp: int = 0
    attack: int | None = None
    style: str | None = None


@dataclass(slots=True)
class BattleEvent:
    """Base battle event."""


@dataclass(slots=True)
class BattleStartedEvent(BattleEvent):
    label: str
    mode: BattleMode
    enemy_names: List[str]
    intro: Tuple[str, ...] = ()
    is_boss: bool = False


@dataclass(slots=True)
class WagerPlacedEvent(BattleEvent):
    character_name: str
    bet: int
    enemy_max_hp: int
    enemy_attack: int


@dataclass(slots=True)
class RoundStartedEvent(BattleEvent):
    round: int


@dataclass(slots=True)
class AttackResolvedEvent(BattleEvent):
    attacker_name: str
    target_name: str
    damage: int
    target_hp: int


@dataclass(slots=True)
class SpellCastEvent(BattleEvent):
    caster_name: str
    target_name: str
    damage: int
    target_hp: int
    mana_left: int


@dataclass(slots=True)
class MoveUsedEvent(BattleEvent):
    """A kit move resolved; ``special`` is False for repeatable signature moves."""

    user_name: str
    move_key: str
    move_name: str
    special: bool
    target_name: str | None = None
    damage: int = 0
    target_hp: int | None = None
    healed: Dict[str, int] = field(default_factory=dict)
    shielded: Dict[str, int] = field(default_factory=dict)
    status: str | None = None
    status_turns: int = 0
    dodge_granted: bool = False


@dataclass(slots=True)
class ItemUsedEvent(BattleEvent):
    user_name: str
    item_id: str
    item_name: str
    message: str
    target_name: str | None = None


@dataclass(slots=True)
class ObserveEvent(BattleEvent):
    allies: Tuple[CombatantSnapshot, ...]
    enemies: Tuple[CombatantSnapshot, ...]


@dataclass(slots=True)
class ActionRejectedEvent(BattleEvent):
    actor_name: str
    reason: str
    message: str


@dataclass(slots=True)
class CombatantDefeatedEvent(BattleEvent):
    combatant_name: str


@dataclass(slots=True)
class PoisonTickEvent(BattleEvent):
    enemy_name: str
    damage: int
    enemy_hp: int


@dataclass(slots=True)
class EnemySilencedEvent(BattleEvent):
    enemy_name: str


@dataclass(slots=True)
class CriticalStrikeEvent(BattleEvent):
    enemy_name: str


@dataclass(slots=True)
class DodgeEvent(BattleEvent):
    character_name: str
    enemy_name: str


@dataclass(slots=True)
class ShieldAbsorbedEvent(BattleEvent):
    character_name: str
    absorbed: int
    shield_left: int


@dataclass(slots=True)
class EnemyAttackEvent(BattleEvent):
    enemy_name: str
    target_name: str
    damage: int
    target_hp: int


@dataclass(slots=True)
class RetreatEvent(BattleEvent):
    character_name: str


@dataclass(slots=True)
class BattleCancelledEvent(BattleEvent):
    label: str


@dataclass(slots=True)
class BattleResolvedEvent(BattleEvent):
    outcome: Outcome


@dataclass(slots=True)
class RevivedEvent(BattleEvent):
    character_name: str
    hp: int


@dataclass(slots=True)
class WagerForfeitedEvent(BattleEvent):
    character_name: str
    lost: int
    remaining: int


@dataclass(slots=True)
class RewardsGrantedEvent(BattleEvent):
    character_name: str
    xp: int
    gold: int
    wager_points: int


@dataclass(slots=True)
class LevelUpEvent(BattleEvent):
    character_name: str
    level: int


@dataclass(slots=True)
class StoryLinesEvent(BattleEvent):
    lines: Tuple[str, ...]


@dataclass(slots=True)
class MaterialRewardEvent(BattleEvent):
    character_name: str
    item_id: str
    item_name: str
    stored: bool


@dataclass(slots=True)
class TrainingAdvancedEvent(BattleEvent):
    character_name: str
    training_level: int
    max_hp: int


@dataclass(slots=True)
class FarmAdvancedEvent(BattleEvent):
    farm_level: int


@dataclass(slots=True)
class RestedEvent(BattleEvent):
    character_name: str
    healed: int
    mana_restored: int
