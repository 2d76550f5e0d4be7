"""Wager scaling: a stake of tier ``b`` raises both the risk and the payout."""
from __future__ import annotations

import math

from encore.core.numbers import round_half_away
from encore.domain.entities import Enemy

# Enemy health scales linearly with the tier, attack with its square root so a
# tier-4 fight hits twice as hard rather than four times.
MIN_BET = 1


def normalize_bet(requested: int | None, available_points: int, *, max_bet: int = 4) -> int:
    """Return the effective tier: 1 unless a tier in 2..max_bet is requested and affordable."""
    if not isinstance(requested, int) or isinstance(requested, bool):
        return MIN_BET
    if requested <= MIN_BET or requested > max_bet:
        return MIN_BET
    if available_points < requested:
        return MIN_BET
    return requested


def scaled_attack(attack: int, bet: int) -> int:
    """Attack for tier ``bet``: ``attack * sqrt(bet)`` rounded half away from zero."""
    if bet <= MIN_BET:
        return attack
    return round_half_away(attack * math.sqrt(bet))


def scale_enemy_for_bet(enemy: Enemy, bet: int) -> None:
    if bet <= MIN_BET:
        return
    enemy.max_hp *= bet
    enemy.hp = enemy.max_hp
    enemy.attack = scaled_attack(enemy.attack, bet)


def bet_placed(bet: int, *, allow_bet: bool) -> bool:
    return allow_bet and bet > MIN_BET


def stake_refund_on_win(bet: int, *, allow_bet: bool) -> int:
    """Net wager points won back on victory: the stake doubles, so ``bet - 1``."""
    return bet - 1 if bet_placed(bet, allow_bet=allow_bet) else 0


def points_after_loss(points: int, bet: int, *, allow_bet: bool) -> int:
    if not bet_placed(bet, allow_bet=allow_bet):
        return points
    return max(0, points - bet)
