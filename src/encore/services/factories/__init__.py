"""Factory helpers for runtime entities."""

from .character_factory import create_character, create_roster, create_session
from .enemy_factory import create_enemy_instance, create_enemy_line_up

__all__ = [
    "create_character",
    "create_enemy_instance",
    "create_enemy_line_up",
    "create_roster",
    "create_session",
]
