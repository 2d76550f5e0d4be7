"""Effect catalog: maps item ids to pure state-mutation functions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Mapping, Optional

from encore.domain.defs import ItemDef
from encore.domain.entities import Character, Enemy
from encore.domain.status_effects import apply_poison

BAG_CAPACITY_LIMIT = 40
BAG_CAPACITY_STEP = 10


@dataclass(slots=True)
class ItemEffectResult:
    """Outcome of one effect call. ``consumed=False`` keeps the item in the bag."""

    consumed: bool
    message: str
    hp_delta: int = 0
    mana_delta: int = 0
    damage: int = 0


EffectFn = Callable[[Character, Optional[Enemy]], ItemEffectResult]


@dataclass(frozen=True, slots=True)
class EffectSpec:
    requires_target: bool
    apply: EffectFn


@dataclass(frozen=True, slots=True)
class ResolvedItem:
    """What the engine needs from the catalog for one inventory entry."""

    item: ItemDef
    requires_target: bool
    apply: EffectFn


EFFECTS: Dict[str, EffectSpec] = {}


def _effect(effect_id: str, *, requires_target: bool = False) -> Callable[[EffectFn], EffectFn]:
    def register(fn: EffectFn) -> EffectFn:
        EFFECTS[effect_id] = EffectSpec(requires_target=requires_target, apply=fn)
        return fn

    return register


def _needs_battle() -> ItemEffectResult:
    return ItemEffectResult(consumed=False, message="This item can only be used against an opponent.")


@_effect("heal")
def _heal(user: Character, enemy: Enemy | None) -> ItemEffectResult:
    gained = user.heal(50)
    return ItemEffectResult(consumed=True, message=f"{user.name} drinks a health potion (+{gained} HP).", hp_delta=gained)


@_effect("mana")
def _mana(user: Character, enemy: Enemy | None) -> ItemEffectResult:
    gained = user.restore_mana(20)
    return ItemEffectResult(consumed=True, message=f"{user.name} recovers {gained} MP.", mana_delta=gained)


@_effect("poison")
def _tainted(user: Character, enemy: Enemy | None) -> ItemEffectResult:
    lost = user.take_damage(30)
    return ItemEffectResult(
        consumed=True,
        message="The tainted potion is far too toxic to drink; keep the next one for crafting.",
        hp_delta=-lost,
    )


@_effect("note")
def _learn_spell(user: Character, enemy: Enemy | None) -> ItemEffectResult:
    if user.has_spell:
        return ItemEffectResult(consumed=False, message=f"{user.name} already knows the explosive note.")
    user.has_spell = True
    return ItemEffectResult(consumed=True, message=f"{user.name} learns the explosive note!")


@_effect("bag")
def _bag_upgrade(user: Character, enemy: Enemy | None) -> ItemEffectResult:
    if user.inventory_max >= BAG_CAPACITY_LIMIT:
        return ItemEffectResult(consumed=False, message="The satchel is already fully extended.")
    user.inventory_max += BAG_CAPACITY_STEP
    return ItemEffectResult(consumed=True, message=f"Satchel capacity raised to {user.inventory_max}.")


def _equipment(effect_id: str, bonus: int, label: str) -> None:
    def wear(user: Character, enemy: Enemy | None) -> ItemEffectResult:
        user.max_hp += bonus
        user.hp += bonus
        return ItemEffectResult(consumed=True, message=f"{user.name} wears the {label}: +{bonus} max HP.", hp_delta=bonus)

    _effect(effect_id)(wear)


_equipment("hat", 10, "stage hat")
_equipment("boot", 15, "stage boots")
_equipment("tunic", 25, "stage tunic")
_equipment("glove", 25, "legendary glove")


def _disc_strike(effect_id: str, *, base: int, bonus: int, favoured: str, label: str) -> None:
    def strike(user: Character, enemy: Enemy | None) -> ItemEffectResult:
        if enemy is None:
            return _needs_battle()
        damage = base + (bonus if enemy.category == favoured else 0)
        dealt = enemy.take_damage(damage)
        return ItemEffectResult(consumed=True, message=f"{label}: {enemy.name} takes {damage} damage.", damage=dealt)

    _effect(effect_id, requires_target=True)(strike)


_disc_strike("disc_hater", base=10, bonus=10, favoured="hater", label="Wolf disc")
_disc_strike("disc_crew", base=15, bonus=15, favoured="crew", label="Troll disc")


@_effect("disc_boss")
def _guard_breaker(user: Character, enemy: Enemy | None) -> ItemEffectResult:
    user.ignore_guard = True
    return ItemEffectResult(consumed=True, message=f"Boar disc: {user.name}'s next hit ignores guard!")


@_effect("disc_poison", requires_target=True)
def _poison_disc(user: Character, enemy: Enemy | None) -> ItemEffectResult:
    if enemy is None:
        return _needs_battle()
    apply_poison(enemy, turns=2, damage=5)
    return ItemEffectResult(consumed=True, message=f"Raven disc: {enemy.name} is poisoned.")


def _boost(effect_id: str, multiplier: int) -> None:
    def boost(user: Character, enemy: Enemy | None) -> ItemEffectResult:
        user.battle_boost = multiplier
        return ItemEffectResult(consumed=True, message=f"{user.name} powers up: damage x{multiplier} this fight.")

    _effect(effect_id)(boost)


_boost("boost_x2", 2)
_boost("boost_x4", 4)


@_effect("pass")
def _pass(user: Character, enemy: Enemy | None) -> ItemEffectResult:
    return ItemEffectResult(consumed=False, message="The presidential pass only opens doors in the story.")


@_effect("crew", requires_target=True)
def _crew_totem(user: Character, enemy: Enemy | None) -> ItemEffectResult:
    if enemy is None:
        return ItemEffectResult(consumed=False, message="Nobody to aim at.")
    dealt = enemy.take_damage(25)
    return ItemEffectResult(consumed=True, message=f"The crew bursts in and deals 25 damage to {enemy.name}!", damage=dealt)


class EffectCatalog:
    """Read-only lookup from item id to its effect, backed by catalog entries."""

    def __init__(self, items: Iterable[ItemDef], effects: Mapping[str, EffectSpec] | None = None) -> None:
        self._items = {item.id: item for item in items}
        self._effects = dict(EFFECTS if effects is None else effects)

    def get(self, item_id: str) -> ItemDef:
        return self._items[item_id]

    def name_of(self, item_id: str) -> str:
        item = self._items.get(item_id)
        return item.name if item else item_id

    def resolve(self, item_id: str) -> ResolvedItem | None:
        """Return the effect binding for an item, or None if it cannot be used."""
        item = self._items.get(item_id)
        if item is None or item.effect_id is None:
            return None
        entry = self._effects.get(item.effect_id)
        if entry is None:
            return None
        return ResolvedItem(item=item, requires_target=entry.requires_target, apply=entry.apply)
