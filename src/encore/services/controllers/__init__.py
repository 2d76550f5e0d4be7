"""UI-agnostic controllers for encounter orchestration."""
from __future__ import annotations

from .battle_controller import (
    ActionRequest,
    ActionSource,
    BattleAction,
    BattleActionType,
    BattleController,
    BattleResult,
)

__all__ = [
    "ActionRequest",
    "ActionSource",
    "BattleAction",
    "BattleActionType",
    "BattleController",
    "BattleResult",
]
