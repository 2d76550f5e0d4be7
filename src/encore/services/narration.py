"""Human-readable narration for battle events. Nothing here prints."""
from __future__ import annotations

from typing import Iterable, List

from encore.services.battle_events import (
    ActionRejectedEvent,
    AttackResolvedEvent,
    BattleCancelledEvent,
    BattleEvent,
    BattleResolvedEvent,
    BattleStartedEvent,
    CombatantDefeatedEvent,
    CombatantSnapshot,
    CriticalStrikeEvent,
    DodgeEvent,
    EnemyAttackEvent,
    EnemySilencedEvent,
    FarmAdvancedEvent,
    ItemUsedEvent,
    LevelUpEvent,
    MaterialRewardEvent,
    MoveUsedEvent,
    ObserveEvent,
    PoisonTickEvent,
    RestedEvent,
    RetreatEvent,
    RevivedEvent,
    RewardsGrantedEvent,
    RoundStartedEvent,
    ShieldAbsorbedEvent,
    SpellCastEvent,
    StoryLinesEvent,
    TrainingAdvancedEvent,
    WagerForfeitedEvent,
    WagerPlacedEvent,
)

_OUTCOME_TEXT = {
    "victory": "Victory!",
    "defeat": "Defeat...",
    "retreat": "The encounter ends without a winner.",
    "cancelled": "The encounter was called off.",
}

_STATUS_TEXT = {"weaken": "weakened", "silence": "silenced"}


def narrate(events: Iterable[BattleEvent]) -> List[str]:
    """Flatten events into display lines, in order."""
    lines: List[str] = []
    for event in events:
        lines.extend(_lines_for(event))
    return lines


def describe_event(event: BattleEvent) -> str:
    return "\n".join(_lines_for(event))


def _lines_for(event: BattleEvent) -> List[str]:
    if isinstance(event, BattleStartedEvent):
        lines = list(event.intro)
        if event.is_boss:
            lines.append("A boss stands in your way!")
        lines.append(f"Battle started against {', '.join(event.enemy_names)}.")
        return lines
    if isinstance(event, WagerPlacedEvent):
        return [
            f"{event.character_name} wagers x{event.bet}: the opponent now has "
            f"{event.enemy_max_hp} HP and {event.enemy_attack} attack."
        ]
    if isinstance(event, RoundStartedEvent):
        return [f"-- Round {event.round} --"]
    if isinstance(event, AttackResolvedEvent):
        return [
            f"- {event.attacker_name} hits {event.target_name} for {event.damage} damage "
            f"(HP now {event.target_hp})."
        ]
    if isinstance(event, SpellCastEvent):
        return [
            f"- {event.caster_name} unleashes an explosive note on {event.target_name} for "
            f"{event.damage} damage (HP now {event.target_hp}, MP left {event.mana_left})."
        ]
    if isinstance(event, MoveUsedEvent):
        return _describe_move(event)
    if isinstance(event, ItemUsedEvent):
        return [f"- {event.user_name} uses {event.item_name}. {event.message}".rstrip()]
    if isinstance(event, ObserveEvent):
        lines = ["Allies:"]
        lines.extend(_describe_snapshot(snapshot) for snapshot in event.allies)
        lines.append("Opponents:")
        lines.extend(_describe_snapshot(snapshot) for snapshot in event.enemies)
        return lines
    if isinstance(event, ActionRejectedEvent):
        return [f"! {event.message}"]
    if isinstance(event, CombatantDefeatedEvent):
        return [f"- {event.combatant_name} is defeated."]
    if isinstance(event, PoisonTickEvent):
        return [f"- Poison eats {event.damage} HP from {event.enemy_name} (HP now {event.enemy_hp})."]
    if isinstance(event, EnemySilencedEvent):
        return [f"- {event.enemy_name} is silenced and cannot attack."]
    if isinstance(event, CriticalStrikeEvent):
        return [f"- {event.enemy_name} lands a CRITICAL strike!"]
    if isinstance(event, DodgeEvent):
        return [f"- {event.character_name} slips past {event.enemy_name}'s attack."]
    if isinstance(event, ShieldAbsorbedEvent):
        return [
            f"- {event.character_name}'s shield absorbs {event.absorbed} damage "
            f"({event.shield_left} left)."
        ]
    if isinstance(event, EnemyAttackEvent):
        return [
            f"- {event.enemy_name} hits {event.target_name} for {event.damage} damage "
            f"(HP now {event.target_hp})."
        ]
    if isinstance(event, RetreatEvent):
        return [f"- {event.character_name} slips away from the fight."]
    if isinstance(event, BattleCancelledEvent):
        return [f"- {event.label} is interrupted."]
    if isinstance(event, BattleResolvedEvent):
        return [_OUTCOME_TEXT.get(event.outcome, f"Battle resolved: {event.outcome}.")]
    if isinstance(event, RevivedEvent):
        return [f"- {event.character_name} gets back up with {event.hp} HP."]
    if isinstance(event, WagerForfeitedEvent):
        return [f"- {event.character_name} loses {event.lost} wager points ({event.remaining} left)."]
    if isinstance(event, RewardsGrantedEvent):
        parts = [f"+{event.xp} XP"]
        if event.gold:
            parts.append(f"+{event.gold} gold")
        if event.wager_points:
            parts.append(f"+{event.wager_points} wager points")
        return [f"- {event.character_name}: {', '.join(parts)}."]
    if isinstance(event, LevelUpEvent):
        return [f"- {event.character_name} reaches level {event.level}!"]
    if isinstance(event, StoryLinesEvent):
        return list(event.lines)
    if isinstance(event, MaterialRewardEvent):
        if event.stored:
            return [f"- {event.character_name} receives {event.item_name}."]
        return [f"- {event.character_name}'s satchel is full; {event.item_name} is left behind."]
    if isinstance(event, TrainingAdvancedEvent):
        return [f"- {event.character_name} gains stamina (max HP {event.max_hp}). Training level {event.training_level}."]
    if isinstance(event, FarmAdvancedEvent):
        return [f"- Farm opponents grow tougher (level {event.farm_level})."]
    if isinstance(event, RestedEvent):
        return [f"- {event.character_name} rests: +{event.healed} HP, +{event.mana_restored} MP."]
    return [f"- {event}"]


def _describe_move(event: MoveUsedEvent) -> List[str]:
    head = f"- {event.user_name} uses {event.move_name}"
    if event.target_name is not None and event.damage:
        lines = [f"{head} on {event.target_name} for {event.damage} damage (HP now {event.target_hp})."]
    elif event.target_name is not None:
        lines = [f"{head} on {event.target_name}."]
    else:
        lines = [f"{head}."]
    for name, amount in event.healed.items():
        lines.append(f"  {name} recovers {amount} HP.")
    for name, amount in event.shielded.items():
        lines.append(f"  {name} gains a {amount}-point shield.")
    if event.status is not None:
        turns = "turn" if event.status_turns == 1 else "turns"
        lines.append(f"  {event.target_name} is {_STATUS_TEXT.get(event.status, event.status)} for {event.status_turns} {turns}.")
    if event.dodge_granted:
        lines.append(f"  {event.user_name} will dodge the next hit.")
    return lines


def _describe_snapshot(snapshot: CombatantSnapshot) -> str:
    text = f"  {snapshot.index + 1}. {snapshot.name} HP {snapshot.hp}/{snapshot.max_hp}"
    if snapshot.max_mana is not None:
        text += f" MP {snapshot.mana}/{snapshot.max_mana}"
    if snapshot.shield_hp:
        text += f" shield {snapshot.shield_hp}"
    if snapshot.attack is not None:
        text += f" ATK {snapshot.attack}"
    if snapshot.style:
        text += f" [{snapshot.style}]"
    if not snapshot.is_alive:
        text += " (down)"
    return text
