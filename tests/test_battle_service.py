from __future__ import annotations

import math

import pytest

from encore.core.rng import RNG
from encore.domain.defs import BattleOptions
from encore.domain.state import GameSession
from encore.services.battle_service import (
    BattleResolvedEvent,
    BattleStartedEvent,
    CriticalStrikeEvent,
    DodgeEvent,
    EnemyAttackEvent,
    EnemySilencedEvent,
    LevelUpEvent,
    PoisonTickEvent,
    RevivedEvent,
    ShieldAbsorbedEvent,
    StoryLinesEvent,
    WagerForfeitedEvent,
    WagerPlacedEvent,
)
from encore.services.errors import InvalidActionError
from tests.helpers.battle_builders import make_character, make_enemy, make_service

WAGER_OPTIONS = BattleOptions(allow_bet=True, reward_xp=35, reward_gold=6, reward_wager_points=1)


def test_start_solo_resets_flags_and_enemy() -> None:
    service = make_service()
    character = make_character()
    character.special_used = True
    character.shield_hp = 7
    enemy = make_enemy(hp=28)
    enemy.hp = 3
    enemy.crit_timer = 0

    state, events = service.start_solo(character, enemy, BattleOptions(intro=("Hi",)), RNG(1))

    assert isinstance(events[0], BattleStartedEvent)
    assert events[0].intro == ("Hi",)
    assert state.mode == "solo"
    assert character.special_used is False
    assert character.shield_hp == 0
    assert enemy.hp == 28
    assert enemy.crit_timer == 3


def test_start_party_revives_downed_members() -> None:
    service = make_service()
    standing = make_character("Miku")
    downed = make_character("Brick", archetype="street", hp=120)
    downed.hp = 0

    state, events = service.start_party([standing, downed], [make_enemy()], BattleOptions(), RNG(1), label="wave")

    assert downed.hp == 60
    assert any(isinstance(event, RevivedEvent) for event in events)
    assert state.bet_settled is True
    assert service.can_bet(state) is False


def test_start_event_carries_the_boss_flag() -> None:
    service = make_service()

    _, solo_events = service.start_solo(make_character(), make_enemy(), BattleOptions(), RNG(1))
    _, party_events = service.start_party(
        [make_character()], [make_enemy()], BattleOptions(is_boss=True), RNG(1), label="finale"
    )

    assert isinstance(solo_events[0], BattleStartedEvent)
    assert solo_events[0].is_boss is False
    assert isinstance(party_events[0], BattleStartedEvent)
    assert party_events[0].is_boss is True


@pytest.mark.parametrize("bet", [2, 3, 4])
def test_wager_scales_enemy_and_rewards(bet: int) -> None:
    service = make_service()
    character = make_character(wager_points=30)
    enemy = make_enemy(hp=55, attack=6, category="crew")
    state, _ = service.start_solo(character, enemy, WAGER_OPTIONS, RNG(1))

    assert service.can_bet(state) is True
    events = service.place_bet(state, bet)

    assert isinstance(events[0], WagerPlacedEvent)
    assert state.bet == bet
    assert enemy.max_hp == enemy.hp == 55 * bet
    assert enemy.attack == math.floor(6 * math.sqrt(bet) + 0.5)
    assert state.options.reward_xp == 35 * bet
    assert state.options.reward_gold == 6 * bet
    assert state.options.reward_wager_points == bet


def test_unaffordable_or_disallowed_bets_fall_back_to_one() -> None:
    service = make_service()
    character = make_character(wager_points=2)
    enemy = make_enemy(hp=55)
    state, _ = service.start_solo(character, enemy, WAGER_OPTIONS, RNG(1))

    assert service.place_bet(state, 3) == []
    assert state.bet == 1
    assert enemy.max_hp == 55

    plain, _ = service.start_solo(make_character(wager_points=30), make_enemy(), BattleOptions(), RNG(1))
    assert service.can_bet(plain) is False
    assert service.place_bet(plain, 4) == []
    assert plain.bet == 1


def test_wager_is_settled_only_once() -> None:
    service = make_service()
    state, _ = service.start_solo(make_character(wager_points=30), make_enemy(), WAGER_OPTIONS, RNG(1))
    service.place_bet(state, 2)

    with pytest.raises(InvalidActionError):
        service.place_bet(state, 4)


def test_enemy_phase_hits_shield_first_and_advances_round() -> None:
    service = make_service()
    character = make_character()
    enemy = make_enemy(attack=10)
    state, _ = service.start_solo(character, enemy, BattleOptions(), RNG(1))
    character.shield_hp = 4

    events = service.run_enemy_phase(state)

    assert isinstance(events[0], ShieldAbsorbedEvent)
    assert isinstance(events[1], EnemyAttackEvent)
    assert events[1].damage == 6
    assert character.hp == 74
    assert state.round == 2


def test_enemy_phase_critical_on_third_strike() -> None:
    service = make_service()
    character = make_character(hp=200)
    state, _ = service.start_solo(character, make_enemy(attack=10), BattleOptions(), RNG(1))

    service.run_enemy_phase(state)
    service.run_enemy_phase(state)
    events = service.run_enemy_phase(state)

    assert isinstance(events[0], CriticalStrikeEvent)
    assert character.hp == 200 - 10 - 10 - 20


def test_poison_kill_skips_the_attack() -> None:
    service = make_service()
    character = make_character()
    enemy = make_enemy(hp=28, attack=10)
    state, _ = service.start_solo(character, enemy, BattleOptions(), RNG(1))
    enemy.hp = 4
    enemy.poison_turns = 2
    enemy.poison_damage = 5

    events = service.run_enemy_phase(state)

    assert isinstance(events[0], PoisonTickEvent)
    assert not any(isinstance(event, EnemyAttackEvent) for event in events)
    assert character.hp == 80
    resolved = service.check_resolution(state)
    assert isinstance(resolved[-1], BattleResolvedEvent)
    assert state.outcome == "victory"


def test_silenced_enemy_does_not_attack_and_dodge_negates_next() -> None:
    service = make_service()
    character = make_character()
    enemy = make_enemy(attack=10)
    state, _ = service.start_solo(character, enemy, BattleOptions(), RNG(1))
    enemy.silence_turns = 1
    character.dodge_next = True

    silenced = service.run_enemy_phase(state)
    dodged = service.run_enemy_phase(state)

    assert isinstance(silenced[0], EnemySilencedEvent)
    assert isinstance(dodged[0], DodgeEvent)
    assert character.hp == 80
    assert enemy.crit_timer == 1


def test_defeat_revives_and_forfeits_the_stake() -> None:
    service = make_service()
    character = make_character(hp=80, wager_points=30)
    state, _ = service.start_solo(character, make_enemy(), WAGER_OPTIONS, RNG(1))
    service.place_bet(state, 3)
    character.hp = 0

    events = service.check_resolution(state)

    assert state.outcome == "defeat"
    assert character.hp == 40
    forfeited = [event for event in events if isinstance(event, WagerForfeitedEvent)]
    assert forfeited[0].lost == 3
    assert character.wager_points == 27
    assert service.apply_victory_rewards(state) == []


def test_solo_victory_grants_scaled_rewards_once() -> None:
    service = make_service()
    character = make_character(wager_points=30)
    enemy = make_enemy()
    session = GameSession(seed=1, rng=RNG(1), characters=[character])
    state, _ = service.start_solo(character, enemy, WAGER_OPTIONS, RNG(1))
    service.place_bet(state, 4)
    enemy.hp = 0

    service.check_resolution(state)
    grant = state.rewards[0]
    events = service.apply_victory_rewards(state, session)
    again = service.apply_victory_rewards(state, session)

    assert (grant.xp, grant.gold, grant.wager_points) == (140, 24, 3 + 4)
    assert character.wager_points == 37
    assert character.level == 2
    assert character.xp == 40
    assert session.gold == 24
    assert any(isinstance(event, LevelUpEvent) for event in events)
    assert again == []


def test_party_victory_revives_and_rewards_everyone() -> None:
    service = make_service()
    lead = make_character("Miku")
    fallen = make_character("Brick", archetype="street", hp=120)
    options = BattleOptions(reward_xp=60, reward_gold=15, victory=("Well played.",))
    state, _ = service.start_party([lead, fallen], [make_enemy()], options, RNG(1), label="wave")
    fallen.hp = 0
    state.enemies[0].hp = 0

    events = service.check_resolution(state)

    assert state.outcome == "victory"
    assert fallen.hp == 60
    assert any(isinstance(event, StoryLinesEvent) for event in events)
    assert [(grant.character_name, grant.xp, grant.gold) for grant in state.rewards] == [
        ("Miku", 60, 15),
        ("Brick", 60, 0),
    ]

    session = GameSession(seed=1, rng=RNG(1), characters=[lead, fallen])
    service.apply_victory_rewards(state, session)
    assert (lead.xp, fallen.xp, session.gold) == (60, 60, 15)


def test_retreat_requires_escape_permission() -> None:
    service = make_service()
    character = make_character()
    state, _ = service.start_solo(character, make_enemy(), BattleOptions(), RNG(1))

    with pytest.raises(InvalidActionError):
        service.retreat(state, character)

    open_state, _ = service.start_solo(character, make_enemy(), BattleOptions(allow_escape=True), RNG(1))
    service.retreat(open_state, character)
    assert open_state.outcome == "retreat"
    assert open_state.rewards == []


def test_cancel_keeps_state_as_is() -> None:
    service = make_service()
    character = make_character()
    state, _ = service.start_solo(character, make_enemy(), BattleOptions(reward_xp=50), RNG(1))
    character.hp = 33

    service.cancel(state)

    assert state.outcome == "cancelled"
    assert character.hp == 33
    assert service.check_resolution(state) == []
    assert service.apply_victory_rewards(state) == []
    assert service.cancel(state) == []
