"""Battle service handling deterministic solo and party encounters."""
from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from encore.core.rng import RNG
from encore.domain.battle_models import BattleState, RewardGrant
from encore.domain.defs import BattleOptions
from encore.domain.entities import Character, Enemy
from encore.domain.item_effects import EffectCatalog
from encore.domain.rules import DEFAULT_RULES, CombatRules
from encore.domain.state import GameSession
from encore.domain.status_effects import compute_strike, receive_hit, tick_poison, tick_silence
from encore.domain.wager import (
    bet_placed,
    normalize_bet,
    points_after_loss,
    scale_enemy_for_bet,
    stake_refund_on_win,
)
from encore.services.ability_resolver import AbilityResolver, ActionResult
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
    ItemUsedEvent,
    LevelUpEvent,
    MoveUsedEvent,
    ObserveEvent,
    PoisonTickEvent,
    RetreatEvent,
    RevivedEvent,
    RewardsGrantedEvent,
    RoundStartedEvent,
    ShieldAbsorbedEvent,
    SpellCastEvent,
    StoryLinesEvent,
    WagerForfeitedEvent,
    WagerPlacedEvent,
)
from encore.services.errors import InvalidActionError

__all__ = [
    "ActionRejectedEvent",
    "ActionResult",
    "AttackResolvedEvent",
    "BattleCancelledEvent",
    "BattleEvent",
    "BattleResolvedEvent",
    "BattleService",
    "BattleStartedEvent",
    "CombatantDefeatedEvent",
    "CombatantSnapshot",
    "CriticalStrikeEvent",
    "DodgeEvent",
    "EnemyAttackEvent",
    "EnemySilencedEvent",
    "ItemUsedEvent",
    "LevelUpEvent",
    "MoveUsedEvent",
    "ObserveEvent",
    "PoisonTickEvent",
    "RetreatEvent",
    "RevivedEvent",
    "RewardsGrantedEvent",
    "RoundStartedEvent",
    "ShieldAbsorbedEvent",
    "SpellCastEvent",
    "StoryLinesEvent",
    "WagerForfeitedEvent",
    "WagerPlacedEvent",
]

logger = logging.getLogger(__name__)


class BattleService:
    """Deterministic battle orchestrator: lifecycle, character actions, enemy phase, resolution."""

    def __init__(self, catalog: EffectCatalog, rules: CombatRules = DEFAULT_RULES) -> None:
        self._rules = rules
        self._resolver = AbilityResolver(catalog, rules)

    @property
    def rules(self) -> CombatRules:
        return self._rules

    @property
    def resolver(self) -> AbilityResolver:
        return self._resolver

    # -----------------------
    # Battle Lifecycle
    # -----------------------
    def start_solo(
        self,
        character: Character,
        enemy: Enemy,
        options: BattleOptions,
        rng: RNG,
        *,
        label: str | None = None,
    ) -> Tuple[BattleState, List[BattleEvent]]:
        """Open a one-on-one encounter. The wager, if any, is settled by :meth:`place_bet`."""
        events: List[BattleEvent] = []
        character.reset_combat_flags()
        revived = character.revive_if_needed()
        if revived is not None:
            events.append(RevivedEvent(character_name=character.name, hp=revived))
        enemy.reset_for_encounter(self._rules.crit_reset)

        state = BattleState(
            label=label or enemy.name,
            mode="solo",
            party=[character],
            enemies=[enemy],
            options=options,
            rng=rng,
        )
        logger.debug("Solo encounter '%s' started: %s vs %s", state.label, character.name, enemy.name)
        events.insert(
            0,
            BattleStartedEvent(
                label=state.label,
                mode="solo",
                enemy_names=[enemy.name],
                intro=options.intro,
                is_boss=options.is_boss,
            ),
        )
        return state, events

    def start_party(
        self,
        party: Sequence[Character],
        enemies: Sequence[Enemy],
        options: BattleOptions,
        rng: RNG,
        *,
        label: str,
    ) -> Tuple[BattleState, List[BattleEvent]]:
        """Open a party encounter. Downed members come back before the first round."""
        if not party:
            raise InvalidActionError("A party encounter needs at least one character.")
        if not enemies:
            raise InvalidActionError("A party encounter needs at least one opponent.")

        events: List[BattleEvent] = [
            BattleStartedEvent(
                label=label,
                mode="party",
                enemy_names=[enemy.name for enemy in enemies],
                intro=options.intro,
                is_boss=options.is_boss,
            )
        ]
        for member in party:
            member.reset_combat_flags()
            revived = member.revive_if_needed()
            if revived is not None:
                events.append(RevivedEvent(character_name=member.name, hp=revived))
        for enemy in enemies:
            enemy.reset_for_encounter(self._rules.crit_reset)

        state = BattleState(
            label=label,
            mode="party",
            party=list(party),
            enemies=list(enemies),
            options=options,
            rng=rng,
            bet_settled=True,
        )
        logger.debug("Party encounter '%s' started with %d members vs %d", label, len(party), len(enemies))
        return state, events

    def can_bet(self, state: BattleState) -> bool:
        """True while a solo encounter may still take a wager its character can afford."""
        if state.mode != "solo" or state.bet_settled or not state.options.allow_bet:
            return False
        return state.party[0].wager_points > 0

    def place_bet(self, state: BattleState, requested: int | None) -> List[BattleEvent]:
        """Settle the wager tier once; out-of-range or unaffordable tiers fall back to 1."""
        if state.mode != "solo":
            raise InvalidActionError("Wagers are only taken in one-on-one encounters.")
        if state.bet_settled:
            raise InvalidActionError("The wager for this encounter is already settled.")
        state.bet_settled = True

        character = state.party[0]
        bet = 1
        if state.options.allow_bet:
            bet = normalize_bet(requested, character.wager_points, max_bet=self._rules.max_bet)
        if bet == 1:
            logger.debug("No wager for '%s' (requested %r)", state.label, requested)
            return []

        enemy = state.enemies[0]
        scale_enemy_for_bet(enemy, bet)
        state.bet = bet
        state.options = state.options.scaled(bet)
        logger.debug("Wager tier %d placed on '%s'", bet, state.label)
        return [
            WagerPlacedEvent(
                character_name=character.name,
                bet=bet,
                enemy_max_hp=enemy.max_hp,
                enemy_attack=enemy.attack,
            )
        ]

    def begin_round(self, state: BattleState) -> List[BattleEvent]:
        state.bet_settled = True
        return [RoundStartedEvent(round=state.round)]

    # -----------------------
    # Character Actions
    # -----------------------
    def basic_attack(self, state: BattleState, actor: Character, target_index: int | None = None) -> ActionResult:
        return self._resolver.basic_attack(state, actor, target_index)

    def cast_spell(self, state: BattleState, actor: Character, target_index: int | None = None) -> ActionResult:
        return self._resolver.cast_spell(state, actor, target_index)

    def use_signature(self, state: BattleState, actor: Character, target_index: int | None = None) -> ActionResult:
        return self._resolver.use_signature(state, actor, target_index)

    def use_special(
        self,
        state: BattleState,
        actor: Character,
        branch: int | None = None,
        target_index: int | None = None,
    ) -> ActionResult:
        return self._resolver.use_special(state, actor, branch, target_index)

    def use_item(
        self,
        state: BattleState,
        actor: Character,
        inventory_index: int | None,
        target_index: int | None = None,
    ) -> ActionResult:
        return self._resolver.use_item(state, actor, inventory_index, target_index)

    def observe(self, state: BattleState) -> ActionResult:
        return self._resolver.observe(state)

    def retreat(self, state: BattleState, actor: Character) -> List[BattleEvent]:
        if state.is_over:
            raise InvalidActionError("The encounter is already over.")
        if not state.options.allow_escape:
            raise InvalidActionError("There is no way out of this fight.")
        state.outcome = "retreat"
        logger.debug("%s retreated from '%s'", actor.name, state.label)
        events: List[BattleEvent] = [RetreatEvent(character_name=actor.name)]
        for member in state.party:
            revived = member.revive_if_needed()
            if revived is not None:
                events.append(RevivedEvent(character_name=member.name, hp=revived))
        events.append(BattleResolvedEvent(outcome="retreat"))
        return events

    def cancel(self, state: BattleState) -> List[BattleEvent]:
        """End the encounter in place. Health and resources stay as they are."""
        if state.is_over:
            return []
        state.outcome = "cancelled"
        logger.debug("Encounter '%s' cancelled in round %d", state.label, state.round)
        return [BattleCancelledEvent(label=state.label), BattleResolvedEvent(outcome="cancelled")]

    # -----------------------
    # Enemy Phase
    # -----------------------
    def run_enemy_phase(self, state: BattleState) -> List[BattleEvent]:
        """Tick statuses and let every standing enemy strike, in list order."""
        if state.is_over:
            return []
        events: List[BattleEvent] = []
        for enemy in state.enemies:
            if not enemy.is_alive:
                continue
            dealt = tick_poison(enemy)
            if dealt is not None:
                events.append(PoisonTickEvent(enemy_name=enemy.name, damage=dealt, enemy_hp=enemy.hp))
                if not enemy.is_alive:
                    events.append(CombatantDefeatedEvent(combatant_name=enemy.name))
                    continue
            if tick_silence(enemy):
                events.append(EnemySilencedEvent(enemy_name=enemy.name))
                continue

            living = state.living_party()
            if not living:
                break
            target = self._pick_enemy_target(state, living)
            strike = compute_strike(enemy, self._rules)
            if strike.critical:
                events.append(CriticalStrikeEvent(enemy_name=enemy.name))
            hit = receive_hit(target, strike.damage)
            if hit.dodged:
                events.append(DodgeEvent(character_name=target.name, enemy_name=enemy.name))
                continue
            if hit.absorbed:
                events.append(
                    ShieldAbsorbedEvent(character_name=target.name, absorbed=hit.absorbed, shield_left=target.shield_hp)
                )
            events.append(
                EnemyAttackEvent(enemy_name=enemy.name, target_name=target.name, damage=hit.applied, target_hp=target.hp)
            )
            if not target.is_alive:
                events.append(CombatantDefeatedEvent(combatant_name=target.name))
        state.round += 1
        return events

    # -----------------------
    # Resolution
    # -----------------------
    def check_resolution(self, state: BattleState) -> List[BattleEvent]:
        """Close the encounter if one side is down; otherwise return nothing."""
        if state.is_over:
            return []
        if state.all_enemies_down():
            return self._resolve_victory(state)
        if state.all_party_down():
            return self._resolve_defeat(state)
        return []

    def apply_victory_rewards(self, state: BattleState, session: GameSession | None = None) -> List[BattleEvent]:
        """Apply the reported grants once. Gold goes to the session purse when one is given."""
        if state.outcome != "victory" or state.rewards_applied:
            return []
        state.rewards_applied = True
        events: List[BattleEvent] = []
        members = {member.name: member for member in state.party}
        for grant in state.rewards:
            character = members[grant.character_name]
            events.append(
                RewardsGrantedEvent(
                    character_name=grant.character_name,
                    xp=grant.xp,
                    gold=grant.gold,
                    wager_points=grant.wager_points,
                )
            )
            levels = character.gain_xp(
                grant.xp,
                xp_per_level=self._rules.xp_per_level,
                hp_gain=self._rules.level_hp_gain,
                mana_gain=self._rules.level_mana_gain,
            )
            for level in levels:
                events.append(LevelUpEvent(character_name=character.name, level=level))
            character.wager_points += grant.wager_points
            if session is not None:
                session.gold += grant.gold
        return events

    # -----------------------
    # Helpers
    # -----------------------
    def _pick_enemy_target(self, state: BattleState, living: List[Character]) -> Character:
        if state.mode == "solo":
            return living[0]
        return living[state.rng.pick_index(len(living))]

    def _resolve_victory(self, state: BattleState) -> List[BattleEvent]:
        state.outcome = "victory"
        events: List[BattleEvent] = []
        if state.mode == "party":
            for member in state.party:
                revived = member.revive_if_needed()
                if revived is not None:
                    events.append(RevivedEvent(character_name=member.name, hp=revived))
        state.rewards = self._compute_grants(state)
        if state.options.victory:
            events.append(StoryLinesEvent(lines=state.options.victory))
        events.append(BattleResolvedEvent(outcome="victory"))
        logger.debug("Encounter '%s' won in round %d", state.label, state.round)
        return events

    def _resolve_defeat(self, state: BattleState) -> List[BattleEvent]:
        state.outcome = "defeat"
        events: List[BattleEvent] = []
        for member in state.party:
            revived = member.revive_if_needed()
            if revived is not None:
                events.append(RevivedEvent(character_name=member.name, hp=revived))
        if state.mode == "solo" and bet_placed(state.bet, allow_bet=state.options.allow_bet):
            character = state.party[0]
            before = character.wager_points
            character.wager_points = points_after_loss(before, state.bet, allow_bet=state.options.allow_bet)
            events.append(
                WagerForfeitedEvent(
                    character_name=character.name,
                    lost=before - character.wager_points,
                    remaining=character.wager_points,
                )
            )
        if state.options.defeat:
            events.append(StoryLinesEvent(lines=state.options.defeat))
        events.append(BattleResolvedEvent(outcome="defeat"))
        logger.debug("Encounter '%s' lost in round %d", state.label, state.round)
        return events

    def _compute_grants(self, state: BattleState) -> List[RewardGrant]:
        options = state.options
        if state.mode == "solo":
            character = state.party[0]
            wager = stake_refund_on_win(state.bet, allow_bet=options.allow_bet) + options.reward_wager_points
            return [
                RewardGrant(
                    character_name=character.name,
                    xp=options.reward_xp,
                    gold=options.reward_gold,
                    wager_points=wager,
                )
            ]
        # The purse is shared, so gold is reported once on the lead member.
        return [
            RewardGrant(
                character_name=member.name,
                xp=options.reward_xp,
                gold=options.reward_gold if idx == 0 else 0,
                wager_points=0,
            )
            for idx, member in enumerate(state.party)
        ]
