"""Training, farm and scripted encounters built on the battle controller."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from encore.data.repositories import EncountersRepository, EnemiesRepository, ItemsRepository
from encore.domain.defs import BattleOptions
from encore.domain.entities import Character, Enemy
from encore.domain.state import GameSession
from encore.services.battle_events import (
    BattleEvent,
    FarmAdvancedEvent,
    MaterialRewardEvent,
    RestedEvent,
    TrainingAdvancedEvent,
)
from encore.services.cancellation import CancellationToken
from encore.services.controllers import ActionSource, BattleController, BattleResult
from encore.services.errors import FactoryError
from encore.services.factories import create_enemy_line_up

logger = logging.getLogger(__name__)

EventSink = Callable[[Sequence[BattleEvent]], None]

TRAINING_OPTIONS = BattleOptions(
    allow_bet=True,
    intro=("A hater wants to test your focus.",),
    victory=("Your breath grows stronger.",),
    defeat=("The haters snicker. Keep training.",),
    reward_xp=24,
    reward_gold=5,
    reward_wager_points=1,
)
FARM_OPTIONS = BattleOptions(
    allow_escape=True,
    intro=("A nameless opponent blocks the road.",),
    victory=("You pick up a few fans and some materials.",),
    reward_xp=15,
    reward_gold=3,
)

TRAINING_HP_PER_LEVEL = 6
TRAINING_MAX_HP_REWARD = 5
FARM_BASE_HP = 70
FARM_HP_PER_LEVEL = 12
FARM_BASE_ATTACK = 8
REST_HP = 10
REST_MANA = 5


class EncounterService:
    """Builds the repeatable fights and the scripted ones, then runs them to completion."""

    def __init__(
        self,
        controller: BattleController,
        enemies_repo: EnemiesRepository,
        encounters_repo: EncountersRepository,
        items_repo: ItemsRepository,
    ) -> None:
        self._controller = controller
        self._enemies_repo = enemies_repo
        self._encounters_repo = encounters_repo
        self._items_repo = items_repo

    # -----------------------
    # Opponents
    # -----------------------
    @staticmethod
    def training_enemy(session: GameSession) -> Enemy:
        hp = session.training_base_hp + session.training_level * TRAINING_HP_PER_LEVEL
        attack = session.training_base_attack + session.training_level // 2
        return Enemy(name="Training Hater", category="hater", max_hp=hp, hp=hp, attack=attack, style="Troll")

    @staticmethod
    def farm_enemy(session: GameSession) -> Enemy:
        hp = FARM_BASE_HP + session.farm_level * FARM_HP_PER_LEVEL
        attack = FARM_BASE_ATTACK + session.farm_level
        return Enemy(name="Looping Guardian", category="farm", max_hp=hp, hp=hp, attack=attack, style="Loop")

    # -----------------------
    # Encounters
    # -----------------------
    def run_training(
        self,
        session: GameSession,
        source: ActionSource,
        *,
        token: CancellationToken | None = None,
        on_events: Optional[EventSink] = None,
    ) -> BattleResult:
        character = session.active()
        result = self._controller.run_solo(
            character,
            self.training_enemy(session),
            TRAINING_OPTIONS,
            source,
            session.rng,
            session=session,
            token=token,
            label="Training",
            on_events=on_events,
        )
        if result.outcome == "victory":
            session.training_level += 1
            session.training_base_hp += 2
            session.training_base_attack += 1
            character.raise_max_hp(TRAINING_MAX_HP_REWARD)
            extra: List[BattleEvent] = [
                TrainingAdvancedEvent(
                    character_name=character.name,
                    training_level=session.training_level,
                    max_hp=character.max_hp,
                )
            ]
            extra.extend(self._reward_material(session, character))
            self._publish(result, extra, on_events)
            logger.debug("Training level is now %d", session.training_level)
        return result

    def run_farm(
        self,
        session: GameSession,
        source: ActionSource,
        *,
        token: CancellationToken | None = None,
        on_events: Optional[EventSink] = None,
    ) -> BattleResult:
        character = session.active()
        result = self._controller.run_solo(
            character,
            self.farm_enemy(session),
            FARM_OPTIONS,
            source,
            session.rng,
            session=session,
            token=token,
            label="Farm",
            on_events=on_events,
        )
        if result.outcome == "victory":
            session.farm_level += 1
            extra: List[BattleEvent] = list(self._reward_material(session, character))
            extra.append(FarmAdvancedEvent(farm_level=session.farm_level))
            self._publish(result, extra, on_events)
            logger.debug("Farm level is now %d", session.farm_level)
        return result

    def run_story(
        self,
        session: GameSession,
        encounter_id: str,
        source: ActionSource,
        *,
        party: Sequence[Character] | None = None,
        token: CancellationToken | None = None,
        on_events: Optional[EventSink] = None,
    ) -> BattleResult:
        """Run a scripted encounter from the encounter definitions."""
        try:
            encounter = self._encounters_repo.get(encounter_id)
        except KeyError as exc:
            raise FactoryError(f"Encounter '{encounter_id}' not found.") from exc
        enemies = create_enemy_line_up(encounter.enemy_ids, self._enemies_repo)

        if encounter.mode == "solo":
            if len(enemies) != 1:
                raise FactoryError(f"Solo encounter '{encounter_id}' expands to {len(enemies)} enemies.")
            return self._controller.run_solo(
                session.active(),
                enemies[0],
                encounter.options,
                source,
                session.rng,
                session=session,
                token=token,
                on_events=on_events,
            )

        members = list(party) if party is not None else session.party()
        return self._controller.run_party(
            members,
            enemies,
            encounter.options,
            source,
            session.rng,
            label=encounter_id,
            session=session,
            token=token,
            on_events=on_events,
        )

    @staticmethod
    def short_rest(party: Sequence[Character]) -> List[BattleEvent]:
        """Patch up the standing members between fights; shields do not carry over."""
        events: List[BattleEvent] = []
        for member in party:
            if not member.is_alive:
                continue
            healed = member.heal(REST_HP)
            restored = member.restore_mana(REST_MANA)
            member.shield_hp = 0
            events.append(RestedEvent(character_name=member.name, healed=healed, mana_restored=restored))
        return events

    # -----------------------
    # Helpers
    # -----------------------
    def _reward_material(self, session: GameSession, character: Character) -> List[BattleEvent]:
        pool = [item for item in self._items_repo.all() if item.type == "material"]
        if not pool:
            return []
        item = pool[session.rng.pick_index(len(pool))]
        stored = character.add_item(item.id)
        return [MaterialRewardEvent(character_name=character.name, item_id=item.id, item_name=item.name, stored=stored)]

    @staticmethod
    def _publish(result: BattleResult, events: List[BattleEvent], on_events: Optional[EventSink]) -> None:
        result.events.extend(events)
        if on_events is not None and events:
            on_events(events)
