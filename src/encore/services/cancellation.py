"""Cooperative cancellation for encounters waiting on player input."""
from __future__ import annotations

from encore.services.errors import EncounterAbortedError


class CancellationToken:
    """Flag threaded through every action request; checked at each suspension point."""

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise EncounterAbortedError("Encounter cancelled.")
