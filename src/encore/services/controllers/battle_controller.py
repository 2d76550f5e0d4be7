"""UI-agnostic battle controller that pulls decisions from an action source."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Literal, Optional, Protocol, Sequence

from encore.core.rng import RNG
from encore.core.types import Outcome
from encore.domain.battle_models import BattleState, RewardGrant
from encore.domain.defs import BattleOptions
from encore.domain.entities import Character, Enemy
from encore.domain.state import GameSession
from encore.services.ability_resolver import ActionResult
from encore.services.battle_service import ActionRejectedEvent, BattleEvent, BattleService
from encore.services.cancellation import CancellationToken
from encore.services.errors import BattleActionError, EncounterAbortedError, InvalidActionError

logger = logging.getLogger(__name__)

BattleActionType = Literal[
    "attack",
    "spell",
    "signature",
    "special",
    "item",
    "observe",
    "retreat",
    "cancel",
    "bet",
]
RequestPhase = Literal["bet", "action"]
EventSink = Callable[[Sequence[BattleEvent]], None]


@dataclass(slots=True)
class BattleAction:
    """Represents a structured action decision from the player.

    Indices are zero-based. ``branch`` picks a special, ``bet`` a wager tier.
    """

    action_type: BattleActionType
    target_index: int | None = None
    branch: int | None = None
    inventory_index: int | None = None
    bet: int | None = None


@dataclass(slots=True)
class ActionRequest:
    """What the engine is waiting on: a wager tier, or the named actor's action."""

    phase: RequestPhase
    actor: Character
    state: BattleState


class ActionSource(Protocol):
    def next_action(self, request: ActionRequest) -> BattleAction:
        ...


@dataclass(slots=True)
class BattleResult:
    outcome: Outcome
    state: BattleState
    events: List[BattleEvent] = field(default_factory=list)
    rewards: List[RewardGrant] = field(default_factory=list)


class BattleController:
    """
    UI-agnostic controller for battle state progression.

    The controller owns the round loop: it asks the action source for one
    decision at a time, applies it through BattleService, runs the enemy phase
    and resolves the encounter. Rejected actions are reported as
    ActionRejectedEvent and the same actor is asked again.

    It does NOT render, format or read input. Narration sinks receive each
    batch of events as soon as it is produced.
    """

    def __init__(self, battle_service: BattleService) -> None:
        self._service = battle_service

    @property
    def service(self) -> BattleService:
        return self._service

    def apply_player_action(self, state: BattleState, actor: Character, action: BattleAction) -> ActionResult:
        """
        Apply a player action and return the resulting events.

        Raises a BattleActionError subclass, before touching any state, when the
        action cannot be carried out, and EncounterAbortedError for ``cancel``.
        """
        if not isinstance(action, BattleAction):
            raise InvalidActionError(f"Expected a BattleAction, got {type(action).__name__}.")
        kind = action.action_type
        if kind == "attack":
            return self._service.basic_attack(state, actor, action.target_index)
        if kind == "spell":
            return self._service.cast_spell(state, actor, action.target_index)
        if kind == "signature":
            return self._service.use_signature(state, actor, action.target_index)
        if kind == "special":
            return self._service.use_special(state, actor, action.branch, action.target_index)
        if kind == "item":
            return self._service.use_item(state, actor, action.inventory_index, action.target_index)
        if kind == "observe":
            return self._service.observe(state)
        if kind == "retreat":
            return ActionResult(events=self._service.retreat(state, actor))
        if kind == "cancel":
            raise EncounterAbortedError("Encounter cancelled by request.")
        if kind == "bet":
            raise InvalidActionError("Wagers are only taken before the first round.")
        raise InvalidActionError(f"Unknown action type: {kind}")

    # -----------------------
    # Round loops
    # -----------------------
    def run_solo(
        self,
        character: Character,
        enemy: Enemy,
        options: BattleOptions,
        source: ActionSource,
        rng: RNG,
        *,
        session: GameSession | None = None,
        token: CancellationToken | None = None,
        label: str | None = None,
        on_events: Optional[EventSink] = None,
    ) -> BattleResult:
        log: List[BattleEvent] = []
        emit = self._make_emitter(log, on_events)

        state, events = self._service.start_solo(character, enemy, options, rng, label=label)
        emit(events)
        try:
            if self._service.can_bet(state):
                self._check(token)
                decision = source.next_action(ActionRequest(phase="bet", actor=character, state=state))
                requested: int | None = None
                if isinstance(decision, BattleAction):
                    if decision.action_type == "cancel":
                        raise EncounterAbortedError("Encounter cancelled by request.")
                    if decision.action_type == "bet":
                        requested = decision.bet
                emit(self._service.place_bet(state, requested))

            while not state.is_over:
                emit(self._service.begin_round(state))
                self._take_turn(state, character, source, token, emit)
                emit(self._service.check_resolution(state))
                if state.is_over:
                    break
                emit(self._service.run_enemy_phase(state))
                emit(self._service.check_resolution(state))
        except EncounterAbortedError:
            emit(self._service.cancel(state))

        return self._finish(state, session, log, emit)

    def run_party(
        self,
        party: Sequence[Character],
        enemies: Sequence[Enemy],
        options: BattleOptions,
        source: ActionSource,
        rng: RNG,
        *,
        label: str,
        session: GameSession | None = None,
        token: CancellationToken | None = None,
        on_events: Optional[EventSink] = None,
    ) -> BattleResult:
        log: List[BattleEvent] = []
        emit = self._make_emitter(log, on_events)

        state, events = self._service.start_party(party, enemies, options, rng, label=label)
        emit(events)
        try:
            while not state.is_over:
                emit(self._service.begin_round(state))
                for member in state.party:
                    if state.is_over or state.all_enemies_down():
                        break
                    if not member.is_alive:
                        continue
                    self._take_turn(state, member, source, token, emit)
                emit(self._service.check_resolution(state))
                if state.is_over:
                    break
                emit(self._service.run_enemy_phase(state))
                emit(self._service.check_resolution(state))
        except EncounterAbortedError:
            emit(self._service.cancel(state))

        return self._finish(state, session, log, emit)

    # -----------------------
    # Helpers
    # -----------------------
    def _take_turn(
        self,
        state: BattleState,
        actor: Character,
        source: ActionSource,
        token: CancellationToken | None,
        emit: EventSink,
    ) -> None:
        while True:
            self._check(token)
            action = source.next_action(ActionRequest(phase="action", actor=actor, state=state))
            try:
                result = self.apply_player_action(state, actor, action)
            except BattleActionError as exc:
                logger.debug("Rejected %r for %s: %s", action, actor.name, exc.message)
                emit([ActionRejectedEvent(actor_name=actor.name, reason=exc.reason, message=exc.message)])
                continue
            emit(result.events)
            if state.is_over or result.consumes_turn:
                return

    def _finish(
        self,
        state: BattleState,
        session: GameSession | None,
        log: List[BattleEvent],
        emit: EventSink,
    ) -> BattleResult:
        emit(self._service.apply_victory_rewards(state, session))
        assert state.outcome is not None
        return BattleResult(outcome=state.outcome, state=state, events=log, rewards=list(state.rewards))

    @staticmethod
    def _check(token: CancellationToken | None) -> None:
        if token is not None:
            token.raise_if_cancelled()

    @staticmethod
    def _make_emitter(log: List[BattleEvent], on_events: Optional[EventSink]) -> EventSink:
        def emit(batch: Sequence[BattleEvent]) -> None:
            if not batch:
                return
            log.extend(batch)
            if on_events is not None:
                on_events(batch)

        return emit
