"""Service-layer exceptions."""


class FactoryError(Exception):
    """Raised when a runtime entity cannot be created."""


class BattleActionError(Exception):
    """An action that cannot be carried out. The turn is not consumed."""

    reason = "invalid_action"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidActionError(BattleActionError):
    """Unknown or context-inapplicable choice."""

    reason = "invalid_action"


class InsufficientResourceError(BattleActionError):
    """The action's resource cost cannot be paid."""

    reason = "insufficient_resource"


class NoValidTargetError(BattleActionError):
    """The required target is missing, out of range or already down."""

    reason = "no_valid_target"


class AbilityExhaustedError(BattleActionError):
    """The once-per-encounter special has already been used."""

    reason = "ability_exhausted"


class EncounterAbortedError(Exception):
    """Raised when the encounter is cancelled from outside the round loop."""
