"""Resolution of character actions: attacks, spells, kit moves, items, observe."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, TypeGuard

from encore.domain.battle_models import BattleState
from encore.domain.damage import roll_outgoing_damage
from encore.domain.entities import Character, Enemy
from encore.domain.item_effects import EffectCatalog
from encore.domain.kits import KitMove, MoveContext, kit_for
from encore.domain.rules import DEFAULT_RULES, CombatRules
from encore.services.battle_events import (
    AttackResolvedEvent,
    BattleEvent,
    CombatantDefeatedEvent,
    CombatantSnapshot,
    ItemUsedEvent,
    MoveUsedEvent,
    ObserveEvent,
    SpellCastEvent,
)
from encore.services.errors import (
    AbilityExhaustedError,
    InsufficientResourceError,
    InvalidActionError,
    NoValidTargetError,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ActionResult:
    """Events from one resolved action and whether it used up the actor's turn."""

    events: List[BattleEvent] = field(default_factory=list)
    consumes_turn: bool = True


class AbilityResolver:
    """Validates and resolves the acting character's choice.

    Every check runs before any state is touched, so a rejected action can be
    retried any number of times with the same result.
    """

    def __init__(self, catalog: EffectCatalog, rules: CombatRules = DEFAULT_RULES) -> None:
        self._catalog = catalog
        self._rules = rules

    @property
    def rules(self) -> CombatRules:
        return self._rules

    # -----------------------
    # Actions
    # -----------------------
    def basic_attack(self, state: BattleState, actor: Character, target_index: int | None = None) -> ActionResult:
        self._require_actor(state, actor)
        target = self._select_target(state, target_index)
        damage = roll_outgoing_damage(
            actor,
            state.rng,
            base=kit_for(actor.archetype).base_attack,
            spread=self._rules.attack_spread(state.mode),
            guard_bonus=self._rules.attack_guard_bonus,
        )
        target.take_damage(damage)
        events: List[BattleEvent] = [
            AttackResolvedEvent(
                attacker_name=actor.name,
                target_name=target.name,
                damage=damage,
                target_hp=target.hp,
            )
        ]
        events.extend(self._defeat_events(target))
        return ActionResult(events=events)

    def cast_spell(self, state: BattleState, actor: Character, target_index: int | None = None) -> ActionResult:
        self._require_actor(state, actor)
        if not actor.has_spell:
            raise InvalidActionError(f"{actor.name} has not learned the explosive note yet.")
        if actor.mana < self._rules.spell_cost:
            raise InsufficientResourceError(
                f"{actor.name} needs {self._rules.spell_cost} MP for the explosive note ({actor.mana} left)."
            )
        target = self._select_target(state, target_index)
        actor.mana -= self._rules.spell_cost
        damage = roll_outgoing_damage(
            actor,
            state.rng,
            base=self._rules.spell_base,
            spread=self._rules.spell_spread(state.mode),
            guard_bonus=self._rules.spell_guard_bonus,
        )
        target.take_damage(damage)
        events: List[BattleEvent] = [
            SpellCastEvent(
                caster_name=actor.name,
                target_name=target.name,
                damage=damage,
                target_hp=target.hp,
                mana_left=actor.mana,
            )
        ]
        events.extend(self._defeat_events(target))
        return ActionResult(events=events)

    def use_signature(self, state: BattleState, actor: Character, target_index: int | None = None) -> ActionResult:
        self._require_actor(state, actor)
        move = kit_for(actor.archetype).signature
        if move is None:
            raise InvalidActionError(f"{actor.name} has no signature move.")
        return self._perform_move(state, actor, move, target_index, special=False)

    def use_special(
        self,
        state: BattleState,
        actor: Character,
        branch: int | None = None,
        target_index: int | None = None,
    ) -> ActionResult:
        self._require_actor(state, actor)
        if actor.special_used:
            raise AbilityExhaustedError(f"{actor.name} already used a special ability this encounter.")
        specials = kit_for(actor.archetype).specials
        if not specials:
            raise InvalidActionError(f"{actor.name} has no special ability.")
        if branch is None and len(specials) == 1:
            branch = 0
        if not _is_index(branch) or not 0 <= branch < len(specials):
            raise InvalidActionError(f"Pick a special between 1 and {len(specials)}.")
        return self._perform_move(state, actor, specials[branch], target_index, special=True)

    def use_item(
        self,
        state: BattleState,
        actor: Character,
        inventory_index: int | None,
        target_index: int | None = None,
    ) -> ActionResult:
        self._require_actor(state, actor)
        if not actor.inventory:
            raise InvalidActionError(f"{actor.name}'s satchel is empty.")
        if not _is_index(inventory_index) or not 0 <= inventory_index < len(actor.inventory):
            raise InvalidActionError(f"Pick an item between 1 and {len(actor.inventory)}.")
        item_id = actor.inventory[inventory_index]
        resolved = self._catalog.resolve(item_id)
        if resolved is None:
            raise InvalidActionError(f"{self._catalog.name_of(item_id)} cannot be used in battle.")

        target: Enemy | None = None
        if resolved.requires_target:
            if not state.living_enemies():
                raise NoValidTargetError(f"No opponent left for {resolved.item.name}.")
            target = self._select_target(state, target_index)

        result = resolved.apply(actor, target)
        if not result.consumed:
            raise InvalidActionError(result.message)
        del actor.inventory[inventory_index]

        events: List[BattleEvent] = [
            ItemUsedEvent(
                user_name=actor.name,
                item_id=item_id,
                item_name=resolved.item.name,
                message=result.message,
                target_name=target.name if target else None,
            )
        ]
        if target is not None:
            events.extend(self._defeat_events(target))
        if not actor.is_alive:
            events.append(CombatantDefeatedEvent(combatant_name=actor.name))
        return ActionResult(events=events)

    def observe(self, state: BattleState) -> ActionResult:
        allies = tuple(
            CombatantSnapshot(
                index=idx,
                name=member.name,
                hp=member.hp,
                max_hp=member.max_hp,
                is_alive=member.is_alive,
                mana=member.mana,
                max_mana=member.max_mana,
                shield_hp=member.shield_hp,
            )
            for idx, member in enumerate(state.party)
        )
        enemies = tuple(
            CombatantSnapshot(
                index=idx,
                name=enemy.name,
                hp=enemy.hp,
                max_hp=enemy.max_hp,
                is_alive=enemy.is_alive,
                attack=enemy.attack,
                style=enemy.style,
            )
            for idx, enemy in enumerate(state.enemies)
        )
        return ActionResult(events=[ObserveEvent(allies=allies, enemies=enemies)], consumes_turn=False)

    # -----------------------
    # Helpers
    # -----------------------
    def _perform_move(
        self,
        state: BattleState,
        actor: Character,
        move: KitMove,
        target_index: int | None,
        *,
        special: bool,
    ) -> ActionResult:
        if move.requires_spell and not actor.has_spell:
            raise InvalidActionError(f"{actor.name} has not recovered the explosive note yet.")
        target: Enemy | None = None
        if move.target == "enemy":
            target = self._select_target(state, target_index)
        elif move.target == "party" and not state.living_party():
            raise NoValidTargetError("Nobody is standing to benefit.")
        if actor.mana < move.cost:
            raise InsufficientResourceError(f"{move.name} costs {move.cost} MP; {actor.name} has {actor.mana}.")

        actor.mana -= move.cost
        outcome = move.effect(MoveContext(user=actor, target=target, party=state.party, rng=state.rng))
        if special:
            actor.special_used = True
        logger.debug("%s used %s (special=%s)", actor.name, move.key, special)

        events: List[BattleEvent] = [
            MoveUsedEvent(
                user_name=actor.name,
                move_key=move.key,
                move_name=move.name,
                special=special,
                target_name=target.name if target else None,
                damage=outcome.damage,
                target_hp=target.hp if target else None,
                healed=outcome.healed,
                shielded=outcome.shielded,
                status=outcome.status,
                status_turns=outcome.status_turns,
                dodge_granted=outcome.dodge_granted,
            )
        ]
        if target is not None:
            events.extend(self._defeat_events(target))
        return ActionResult(events=events, consumes_turn=move.consumes_turn)

    def _select_target(self, state: BattleState, target_index: int | None) -> Enemy:
        if target_index is None:
            if state.mode == "solo" and len(state.enemies) == 1:
                target_index = 0
            else:
                raise NoValidTargetError("Pick a target by number.")
        if not _is_index(target_index):
            raise NoValidTargetError(f"Target {target_index!r} is not a number.")
        if not 0 <= target_index < len(state.enemies):
            raise NoValidTargetError(f"Target {target_index + 1} does not exist.")
        target = state.enemies[target_index]
        if not target.is_alive:
            raise NoValidTargetError(f"{target.name} is already down.")
        return target

    @staticmethod
    def _require_actor(state: BattleState, actor: Character) -> None:
        if state.is_over:
            raise InvalidActionError("The encounter is already over.")
        if not any(member is actor for member in state.party):
            raise InvalidActionError(f"{actor.name} is not part of this encounter.")
        if not actor.is_alive:
            raise InvalidActionError(f"{actor.name} cannot act while knocked out.")

    @staticmethod
    def _defeat_events(target: Enemy) -> List[BattleEvent]:
        if target.is_alive:
            return []
        return [CombatantDefeatedEvent(combatant_name=target.name)]


def _is_index(value: object) -> TypeGuard[int]:
    return isinstance(value, int) and not isinstance(value, bool)
