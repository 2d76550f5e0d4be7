from __future__ import annotations

from typing import Iterable, List, Sequence

from encore.core.rng import RNG
from encore.data.repositories import ItemsRepository
from encore.domain.entities import Character, Enemy
from encore.domain.item_effects import EffectCatalog
from encore.domain.rules import CombatRules
from encore.services import BattleController, BattleService
from encore.services.controllers import ActionRequest, BattleAction

FLAT_RULES = CombatRules(
    attack_spread_solo=0,
    attack_spread_party=0,
    spell_spread_solo=0,
    spell_spread_party=0,
)


class ScriptedSource:
    """Action source that replays a fixed list of decisions and records every request."""

    def __init__(self, actions: Iterable[BattleAction]) -> None:
        self._actions = list(actions)
        self.requests: List[ActionRequest] = []

    def next_action(self, request: ActionRequest) -> BattleAction:
        self.requests.append(request)
        if not self._actions:
            raise AssertionError(f"No scripted action left for {request.actor.name} ({request.phase}).")
        return self._actions.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._actions)


def act(action_type: str, **kwargs: int | None) -> BattleAction:
    return BattleAction(action_type=action_type, **kwargs)  # type: ignore[arg-type]


def make_character(
    name: str = "Hatsune Miku",
    *,
    archetype: str = "idol",
    hp: int = 80,
    mana: int = 40,
    inventory: Sequence[str] = (),
    has_spell: bool = False,
    wager_points: int = 0,
) -> Character:
    return Character(
        name=name,
        class_label="Test",
        archetype=archetype,  # type: ignore[arg-type]
        max_hp=hp,
        hp=hp,
        max_mana=mana,
        mana=mana,
        wager_points=wager_points,
        inventory=list(inventory),
        unlocked=True,
        has_spell=has_spell,
    )


def make_enemy(
    name: str = "Studio Hater",
    *,
    hp: int = 28,
    attack: int = 4,
    category: str = "hater",
    crit_timer: int = 3,
) -> Enemy:
    return Enemy(
        name=name,
        category=category,  # type: ignore[arg-type]
        max_hp=hp,
        hp=hp,
        attack=attack,
        crit_timer=crit_timer,
    )


def make_catalog() -> EffectCatalog:
    return EffectCatalog(ItemsRepository().all())


def make_service(rules: CombatRules = FLAT_RULES) -> BattleService:
    return BattleService(make_catalog(), rules)


def make_controller(rules: CombatRules = FLAT_RULES) -> BattleController:
    return BattleController(make_service(rules))


def make_rng(seed: int = 7) -> RNG:
    return RNG(seed)
