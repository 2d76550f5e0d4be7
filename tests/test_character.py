from __future__ import annotations

from encore.domain.entities import Character, Enemy


def _make_character(**overrides: object) -> Character:
    values: dict[str, object] = dict(
        name="Hatsune Miku",
        class_label="Digital Idol",
        archetype="idol",
        max_hp=80,
        hp=80,
        max_mana=40,
        mana=40,
    )
    values.update(overrides)
    return Character(**values)  # type: ignore[arg-type]


def test_gain_xp_applies_every_level_from_one_reward() -> None:
    character = _make_character(hp=10, mana=3)

    reached = character.gain_xp(250)

    assert reached == [2, 3]
    assert character.level == 3
    assert character.xp == 50
    assert character.max_hp == 92
    assert character.max_mana == 48
    assert character.hp == character.max_hp
    assert character.mana == character.max_mana


def test_gain_xp_below_threshold_only_accumulates() -> None:
    character = _make_character(hp=50)

    assert character.gain_xp(99) == []
    assert character.xp == 99
    assert character.level == 1
    assert character.hp == 50


def test_gain_xp_exact_threshold_levels_once() -> None:
    character = _make_character()

    assert character.gain_xp(100) == [2]
    assert character.xp == 0


def test_revive_restores_half_health_and_drops_shield() -> None:
    character = _make_character(hp=0, shield_hp=12)

    assert character.revive_if_needed() == 40
    assert character.hp == 40
    assert character.shield_hp == 0


def test_revive_never_leaves_zero_health() -> None:
    character = _make_character(max_hp=1, hp=0)

    assert character.revive_if_needed() == 1


def test_revive_is_a_no_op_for_standing_characters() -> None:
    character = _make_character(hp=5, shield_hp=3)

    assert character.revive_if_needed() is None
    assert character.hp == 5
    assert character.shield_hp == 3


def test_reset_combat_flags_clears_encounter_state() -> None:
    character = _make_character(special_used=True, battle_boost=4, ignore_guard=True, dodge_next=True, shield_hp=9)

    character.reset_combat_flags()

    assert character.special_used is False
    assert character.battle_boost == 0
    assert character.ignore_guard is False
    assert character.dodge_next is False
    assert character.shield_hp == 0


def test_health_and_mana_mutators_clamp() -> None:
    character = _make_character(hp=70, mana=35)

    assert character.heal(50) == 10
    assert character.restore_mana(50) == 5
    assert character.take_damage(500) == 80
    assert character.hp == 0
    assert character.take_damage(5) == 0


def test_add_item_respects_capacity() -> None:
    character = _make_character(inventory=["potion_hp"], inventory_max=2)

    assert character.add_item("potion_mana") is True
    assert character.add_item("potion_mana") is False
    assert character.inventory == ["potion_hp", "potion_mana"]


def test_remove_items_is_all_or_nothing() -> None:
    character = _make_character(inventory=["mat_wolf", "potion_hp", "mat_wolf", "mat_raven"])

    assert character.remove_items(["mat_wolf", "mat_wolf", "mat_boar"]) is False
    assert character.inventory == ["mat_wolf", "potion_hp", "mat_wolf", "mat_raven"]

    assert character.remove_items(["mat_wolf", "mat_raven"]) is True
    assert character.inventory == ["potion_hp", "mat_wolf"]


def test_enemy_reset_restores_health_and_fixes_countdown() -> None:
    enemy = Enemy(name="Bot", category="hater", max_hp=30, hp=4, attack=5, crit_timer=0, silence_turns=2)

    enemy.reset_for_encounter()

    assert enemy.hp == 30
    assert enemy.crit_timer == 3
    assert enemy.silence_turns == 0


def test_enemy_reset_keeps_a_positive_countdown() -> None:
    enemy = Enemy(name="Len", category="rival", max_hp=115, hp=115, attack=13, crit_timer=2)

    enemy.reset_for_encounter()

    assert enemy.crit_timer == 2


def test_enemy_damage_clamps_at_zero() -> None:
    enemy = Enemy(name="Bot", category="hater", max_hp=10, hp=10, attack=1)

    assert enemy.take_damage(25) == 10
    assert enemy.hp == 0
    assert enemy.is_alive is False
