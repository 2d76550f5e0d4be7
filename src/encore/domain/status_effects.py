"""Timed status effects and incoming-damage mitigation.

Enemies carry poison, weaken and silence counters that tick once per round
during their own phase. Characters mitigate incoming hits with a one-shot dodge
flag, then with an absorbing shield pool, before health is reduced.
"""
from __future__ import annotations

from dataclasses import dataclass

from encore.core.numbers import round_half_away
from encore.domain.entities import Character, Enemy
from encore.domain.rules import DEFAULT_RULES, CombatRules


@dataclass(slots=True)
class HitResult:
    """How an incoming hit was split between dodge, shield and health."""

    incoming: int
    dodged: bool = False
    absorbed: int = 0
    applied: int = 0


@dataclass(slots=True)
class StrikeResult:
    """Damage an enemy deals this round before the target mitigates it."""

    damage: int
    critical: bool
    weakened: bool


def absorb_with_shield(target: Character, damage: int) -> tuple[int, int]:
    """Drain the shield pool first; return ``(remaining_damage, absorbed)``."""
    if damage <= 0 or target.shield_hp <= 0:
        return max(0, damage), 0
    absorbed = min(damage, target.shield_hp)
    target.shield_hp -= absorbed
    return damage - absorbed, absorbed


def receive_hit(target: Character, damage: int) -> HitResult:
    """Apply an enemy hit to a character: dodge, then shield, then health."""
    result = HitResult(incoming=damage)
    if target.dodge_next:
        target.dodge_next = False
        result.dodged = True
        return result
    remaining, result.absorbed = absorb_with_shield(target, damage)
    result.applied = target.take_damage(remaining)
    return result


def tick_poison(enemy: Enemy) -> int | None:
    """Apply one poison tick; return the damage dealt or None when not poisoned."""
    if enemy.poison_turns <= 0:
        return None
    dealt = enemy.take_damage(enemy.poison_damage)
    enemy.poison_turns -= 1
    return dealt


def tick_silence(enemy: Enemy) -> bool:
    """Consume one silenced round. The crit countdown still advances, but never fires."""
    if enemy.silence_turns <= 0:
        return False
    enemy.silence_turns -= 1
    if enemy.crit_timer > 1:
        enemy.crit_timer -= 1
    return True


def compute_strike(enemy: Enemy, rules: CombatRules = DEFAULT_RULES) -> StrikeResult:
    """Resolve weaken and the critical countdown for this round's attack."""
    damage = enemy.attack
    weakened = False
    if enemy.weaken_turns > 0:
        damage = max(1, round_half_away(damage * rules.weaken_factor))
        enemy.weaken_turns -= 1
        weakened = True
    critical = enemy.crit_timer <= 1
    if critical:
        damage *= 2
        enemy.crit_timer = rules.crit_reset
    else:
        enemy.crit_timer -= 1
    return StrikeResult(damage=damage, critical=critical, weakened=weakened)


def apply_poison(enemy: Enemy, *, turns: int, damage: int) -> None:
    enemy.poison_turns = turns
    enemy.poison_damage = damage


def apply_weaken(enemy: Enemy, *, turns: int) -> None:
    # Re-applying never shortens a running weaken.
    enemy.weaken_turns = max(enemy.weaken_turns, turns)


def apply_silence(enemy: Enemy, *, turns: int) -> None:
    enemy.silence_turns = turns
