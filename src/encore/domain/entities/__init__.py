"""Runtime entity exports."""

from .character import Character
from .enemy import Enemy

__all__ = [
    "Character",
    "Enemy",
]
