import json
from pathlib import Path

import pytest

from encore.data.errors import DataLoadError, DataReferenceError, DataValidationError
from encore.data.repositories import (
    CharactersRepository,
    EncountersRepository,
    EnemiesRepository,
    ItemsRepository,
    RulesRepository,
)
from encore.domain.rules import DEFAULT_RULES


def test_shipped_definitions_load() -> None:
    roster = CharactersRepository().roster()
    assert [character.archetype for character in roster] == ["idol", "street", "strategist", "pop"]
    assert roster[0].unlocked is True

    enemies = EnemiesRepository()
    assert enemies.get("studio_hater").max_hp == 28
    assert [enemy.id for enemy in enemies.expand("rivals_wave_one")] == ["luka", "rin"]

    assert ItemsRepository().get("boost_x4").wager_cost == 40
    assert RulesRepository().get() == DEFAULT_RULES
    assert EncountersRepository().get("label_finale").options.is_boss is True


def test_enemy_groups_must_reference_known_enemies(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "enemies.json",
        {
            "bot": {"name": "Bot", "category": "hater", "max_hp": 10, "attack": 2},
            "wave": {"name": "Wave", "enemy_ids": ["bot", "ghost"]},
        },
    )

    with pytest.raises(DataReferenceError):
        EnemiesRepository(base_path=definitions_dir).get("bot")


def test_enemy_category_is_validated(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "enemies.json",
        {"bot": {"name": "Bot", "category": "dragon", "max_hp": 10, "attack": 2}},
    )

    with pytest.raises(DataValidationError):
        EnemiesRepository(base_path=definitions_dir).all()


def test_characters_need_a_known_archetype(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "characters.json",
        {"bard": {"name": "Bard", "class_label": "Lute", "archetype": "bard", "max_hp": 50, "max_mana": 10}},
    )

    with pytest.raises(DataValidationError):
        CharactersRepository(base_path=definitions_dir).roster()


def test_characters_reject_bool_for_integers(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "characters.json",
        {"idol": {"name": "Idol", "class_label": "Idol", "archetype": "idol", "max_hp": True, "max_mana": 10}},
    )

    with pytest.raises(DataValidationError):
        CharactersRepository(base_path=definitions_dir).roster()


def test_roster_keeps_file_order(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "characters.json",
        {
            "zed": {"name": "Zed", "class_label": "Pop", "archetype": "pop", "max_hp": 50, "max_mana": 10},
            "amy": {"name": "Amy", "class_label": "Idol", "archetype": "idol", "max_hp": 60, "max_mana": 20},
        },
    )

    roster = CharactersRepository(base_path=definitions_dir).roster()

    assert [character.id for character in roster] == ["zed", "amy"]


def test_items_reject_unknown_fields(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "items.json",
        {"potion": {"name": "Potion", "description": "", "type": "consumable", "heal": 5}},
    )

    with pytest.raises(DataValidationError):
        ItemsRepository(base_path=definitions_dir).get("potion")


def test_rules_fall_back_to_defaults_for_missing_keys(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "rules.json", {"spell_cost": 12, "weaken_factor": 0.5})

    rules = RulesRepository(base_path=definitions_dir).get()

    assert rules.spell_cost == 12
    assert rules.weaken_factor == 0.5
    assert rules.crit_reset == DEFAULT_RULES.crit_reset


@pytest.mark.parametrize(
    "payload",
    [{"mystery": 1}, {"weaken_factor": 1.5}, {"spell_cost": -1}, {"max_bet": 0}, {"crit_reset": True}],
)
def test_rules_reject_bad_values(tmp_path: Path, payload: dict) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "rules.json", payload)

    with pytest.raises(DataValidationError):
        RulesRepository(base_path=definitions_dir).get()


def test_solo_encounters_face_exactly_one_enemy(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "encounters.json",
        {"duo": {"mode": "solo", "enemy_ids": ["a", "b"]}},
    )

    with pytest.raises(DataValidationError):
        EncountersRepository(base_path=definitions_dir).get("duo")


def test_encounter_options_default_to_a_plain_fight(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "encounters.json",
        {"brawl": {"mode": "party", "enemy_ids": ["a", "b"], "options": {"reward_xp": 10}}},
    )

    encounter = EncountersRepository(base_path=definitions_dir).get("brawl")

    assert encounter.enemy_ids == ("a", "b")
    assert encounter.options.reward_xp == 10
    assert encounter.options.allow_bet is False
    assert encounter.options.intro == ()


def test_missing_file_raises_load_error(tmp_path: Path) -> None:
    with pytest.raises(DataLoadError):
        ItemsRepository(base_path=tmp_path).all()


def test_invalid_json_raises_load_error(tmp_path: Path) -> None:
    (tmp_path / "enemies.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(DataLoadError):
        EnemiesRepository(base_path=tmp_path).all()


def _make_definitions_dir(tmp_path: Path) -> Path:
    definitions_dir = tmp_path / "definitions"
    definitions_dir.mkdir()
    return definitions_dir


def _write_json(path: Path, payload: dict) -> None:
    path.write_text(json.dumps(payload), encoding="utf-8")
