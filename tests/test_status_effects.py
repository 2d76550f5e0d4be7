from __future__ import annotations

import pytest

from encore.domain.entities import Character, Enemy
from encore.domain.rules import CombatRules
from encore.domain.status_effects import (
    apply_poison,
    apply_weaken,
    compute_strike,
    receive_hit,
    tick_poison,
    tick_silence,
)


def _make_character(hp: int = 50, shield_hp: int = 0) -> Character:
    return Character(
        name="Brick",
        class_label="Street Force",
        archetype="street",
        max_hp=hp,
        hp=hp,
        max_mana=30,
        mana=30,
        shield_hp=shield_hp,
    )


def _make_enemy(attack: int = 10, crit_timer: int = 3) -> Enemy:
    return Enemy(name="Rin", category="rival", max_hp=100, hp=100, attack=attack, crit_timer=crit_timer)


@pytest.mark.parametrize(
    ("incoming", "shield"),
    [(0, 0), (5, 0), (5, 10), (10, 10), (17, 10), (30, 4)],
)
def test_shield_absorption_is_monotonic(incoming: int, shield: int) -> None:
    target = _make_character(hp=100, shield_hp=shield)

    result = receive_hit(target, incoming)

    assert result.applied == max(0, incoming - shield)
    assert target.shield_hp == max(0, shield - incoming)
    assert target.hp == 100 - result.applied


def test_dodge_negates_the_hit_before_the_shield() -> None:
    target = _make_character(hp=40, shield_hp=6)
    target.dodge_next = True

    result = receive_hit(target, 25)

    assert result.dodged is True
    assert target.dodge_next is False
    assert target.shield_hp == 6
    assert target.hp == 40


def test_crit_countdown_cycles_from_three() -> None:
    enemy = _make_enemy(attack=10)

    damages = [compute_strike(enemy).damage for _ in range(6)]

    assert damages == [10, 10, 20, 10, 10, 20]
    assert enemy.crit_timer == 3


def test_weaken_applies_before_the_critical_doubling() -> None:
    enemy = _make_enemy(attack=15, crit_timer=1)
    apply_weaken(enemy, turns=2)

    strike = compute_strike(enemy)

    assert strike.weakened is True
    assert strike.critical is True
    assert strike.damage == 18
    assert enemy.weaken_turns == 1
    assert enemy.crit_timer == 3


def test_weaken_never_drops_below_one() -> None:
    enemy = _make_enemy(attack=1)
    apply_weaken(enemy, turns=1)

    assert compute_strike(enemy).damage == 1


def test_weaken_factor_is_configurable() -> None:
    enemy = _make_enemy(attack=10)
    apply_weaken(enemy, turns=1)

    assert compute_strike(enemy, CombatRules(weaken_factor=0.5)).damage == 5


def test_reapplying_weaken_keeps_the_longer_duration() -> None:
    enemy = _make_enemy()
    apply_weaken(enemy, turns=3)
    apply_weaken(enemy, turns=2)

    assert enemy.weaken_turns == 3


def test_silence_skips_damage_but_advances_the_countdown() -> None:
    enemy = _make_enemy(crit_timer=3)
    enemy.silence_turns = 1

    assert tick_silence(enemy) is True
    assert enemy.silence_turns == 0
    assert enemy.crit_timer == 2
    assert tick_silence(enemy) is False


def test_silence_does_not_push_the_countdown_below_one() -> None:
    enemy = _make_enemy(crit_timer=1)
    enemy.silence_turns = 1

    tick_silence(enemy)

    assert enemy.crit_timer == 1


def test_poison_ticks_and_expires() -> None:
    enemy = _make_enemy()
    apply_poison(enemy, turns=2, damage=5)

    assert tick_poison(enemy) == 5
    assert tick_poison(enemy) == 5
    assert tick_poison(enemy) is None
    assert enemy.hp == 90


def test_poison_clamps_health_at_zero() -> None:
    enemy = Enemy(name="Bot", category="hater", max_hp=10, hp=3, attack=2)
    apply_poison(enemy, turns=2, damage=5)

    assert tick_poison(enemy) == 3
    assert enemy.hp == 0
