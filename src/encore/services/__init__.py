"""Service layer exports."""

from .errors import (
    AbilityExhaustedError,
    BattleActionError,
    EncounterAbortedError,
    FactoryError,
    InsufficientResourceError,
    InvalidActionError,
    NoValidTargetError,
)
from .cancellation import CancellationToken
from .ability_resolver import AbilityResolver, ActionResult
from .battle_service import BattleService
from .controllers import ActionRequest, ActionSource, BattleAction, BattleController, BattleResult
from .encounter_service import EncounterService
from .narration import describe_event, narrate

__all__ = [
    "AbilityExhaustedError",
    "AbilityResolver",
    "ActionRequest",
    "ActionResult",
    "ActionSource",
    "BattleAction",
    "BattleActionError",
    "BattleController",
    "BattleResult",
    "BattleService",
    "CancellationToken",
    "EncounterAbortedError",
    "EncounterService",
    "FactoryError",
    "InsufficientResourceError",
    "InvalidActionError",
    "NoValidTargetError",
    "describe_event",
    "narrate",
]
