"""Combatant kits: per-archetype tables of special moves.

Each playable archetype owns a fixed base attack value, a tuple of
once-per-encounter special branches and, for some archetypes, a repeatable
signature move. The resolver picks a branch by index and never looks at a
character's name.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Literal, Sequence

from encore.core.rng import RNG
from encore.core.types import Archetype
from encore.domain.damage import roll_outgoing_damage
from encore.domain.entities import Character, Enemy
from encore.domain.status_effects import apply_silence, apply_weaken

TargetKind = Literal["enemy", "self", "party"]


@dataclass(slots=True)
class MoveContext:
    user: Character
    target: Enemy | None
    party: Sequence[Character]
    rng: RNG


@dataclass(slots=True)
class MoveOutcome:
    """Everything a move changed, keyed by character name where several are touched."""

    damage: int = 0
    healed: Dict[str, int] = field(default_factory=dict)
    shielded: Dict[str, int] = field(default_factory=dict)
    status: str | None = None
    status_turns: int = 0
    dodge_granted: bool = False


MoveEffect = Callable[[MoveContext], MoveOutcome]


@dataclass(frozen=True, slots=True)
class KitMove:
    key: str
    name: str
    cost: int
    target: TargetKind
    effect: MoveEffect
    requires_spell: bool = False
    consumes_turn: bool = True


@dataclass(frozen=True, slots=True)
class CombatantKit:
    archetype: Archetype
    base_attack: int
    specials: tuple[KitMove, ...] = ()
    signature: KitMove | None = None


def _strike(base: int, spread: int, guard_bonus: int, *, grants_dodge: bool = False) -> MoveEffect:
    def effect(ctx: MoveContext) -> MoveOutcome:
        assert ctx.target is not None
        damage = roll_outgoing_damage(ctx.user, ctx.rng, base=base, spread=spread, guard_bonus=guard_bonus)
        ctx.target.take_damage(damage)
        if grants_dodge:
            ctx.user.dodge_next = True
        return MoveOutcome(damage=damage, dodge_granted=grants_dodge)

    return effect


def _self_heal(amount: int) -> MoveEffect:
    def effect(ctx: MoveContext) -> MoveOutcome:
        return MoveOutcome(healed={ctx.user.name: ctx.user.heal(amount)})

    return effect


def _party_heal(amount: int) -> MoveEffect:
    def effect(ctx: MoveContext) -> MoveOutcome:
        healed = {ally.name: ally.heal(amount) for ally in ctx.party if ally.is_alive}
        return MoveOutcome(healed=healed)

    return effect


def _self_shield(amount: int) -> MoveEffect:
    def effect(ctx: MoveContext) -> MoveOutcome:
        ctx.user.shield_hp += amount
        return MoveOutcome(shielded={ctx.user.name: amount})

    return effect


def _party_shield(amount: int) -> MoveEffect:
    def effect(ctx: MoveContext) -> MoveOutcome:
        shielded: Dict[str, int] = {}
        for ally in ctx.party:
            if not ally.is_alive:
                continue
            ally.shield_hp += amount
            shielded[ally.name] = amount
        return MoveOutcome(shielded=shielded)

    return effect


def _weaken(turns: int) -> MoveEffect:
    def effect(ctx: MoveContext) -> MoveOutcome:
        assert ctx.target is not None
        apply_weaken(ctx.target, turns=turns)
        return MoveOutcome(status="weaken", status_turns=turns)

    return effect


def _silence(turns: int) -> MoveEffect:
    def effect(ctx: MoveContext) -> MoveOutcome:
        assert ctx.target is not None
        apply_silence(ctx.target, turns=turns)
        return MoveOutcome(status="silence", status_turns=turns)

    return effect


KITS: Dict[Archetype, CombatantKit] = {
    "idol": CombatantKit(
        archetype="idol",
        base_attack=9,
        specials=(
            KitMove(
                key="legendary_note",
                name="Legendary Explosive Note",
                cost=15,
                target="enemy",
                effect=_strike(30, 10, 8),
                requires_spell=True,
            ),
        ),
        signature=KitMove(
            key="rainbow_strike",
            name="Rainbow Strike",
            cost=16,
            target="enemy",
            effect=_strike(26, 7, 10),
        ),
    ),
    "street": CombatantKit(
        archetype="street",
        base_attack=12,
        specials=(
            KitMove(key="crew_strike", name="Crew Strike", cost=0, target="enemy", effect=_strike(34, 12, 10)),
            KitMove(key="steel_shield", name="Steel Shield", cost=10, target="self", effect=_self_shield(24)),
            KitMove(key="crew_wall", name="Crew Wall", cost=18, target="party", effect=_party_shield(18)),
        ),
    ),
    "strategist": CombatantKit(
        archetype="strategist",
        base_attack=9,
        specials=(
            KitMove(
                key="spin_speech",
                name="Spin Speech",
                cost=12,
                target="enemy",
                effect=_weaken(2),
            ),
            KitMove(
                key="singing_ban",
                name="Singing Ban",
                cost=14,
                target="enemy",
                effect=_silence(1),
                consumes_turn=False,
            ),
        ),
    ),
    "pop": CombatantKit(
        archetype="pop",
        base_attack=10,
        specials=(
            KitMove(
                key="moonwalk",
                name="Offensive Moonwalk",
                cost=8,
                target="enemy",
                effect=_strike(20, 8, 6, grants_dodge=True),
            ),
            KitMove(key="beat_therapy", name="Beat Therapy", cost=12, target="self", effect=_self_heal(32)),
            KitMove(key="shared_harmony", name="Shared Harmony", cost=18, target="party", effect=_party_heal(20)),
        ),
    ),
}


def kit_for(archetype: str) -> CombatantKit:
    try:
        return KITS[archetype]  # type: ignore[index]
    except KeyError as exc:
        raise KeyError(f"No combatant kit for archetype '{archetype}'.") from exc
