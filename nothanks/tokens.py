"""
Token economy for No-Thanks-over-SSH.

Tokens are never created or destroyed once dealt: they only move between a
player's stack and the pool sitting on the revealed card.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict

from nothanks.errors import InsufficientTokensError, UnsupportedPlayerCountError

if TYPE_CHECKING:
    from nothanks.game_state import GameState

MIN_PLAYERS = 3
MAX_PLAYERS = 7

TOKENS_BY_PLAYER_COUNT: Dict[int, int] = {
    3: 11,
    4: 11,
    5: 11,
    6: 9,
    7: 7,
}


def deal_tokens(player_count: int) -> int:
    """Number of tokens every player starts with."""
    try:
        return TOKENS_BY_PLAYER_COUNT[player_count]
    except KeyError:
        raise UnsupportedPlayerCountError(player_count, MIN_PLAYERS, MAX_PLAYERS) from None


def transfer_to_pool(state: GameState, player_index: int, amount: int = 1) -> None:
    """Move `amount` tokens from a player onto the revealed card."""
    if amount < 0:
        raise ValueError(f"Cannot transfer a negative amount ({amount})")
    player = state.players[player_index]
    if player.tokens - amount < 0:
        raise InsufficientTokensError(player.name, player.tokens, amount)

    player.tokens -= amount
    state.pool += amount


def collect_pool(state: GameState, player_index: int) -> int:
    """Give the whole pool to a player. Returns the number of tokens collected."""
    collected = state.pool
    if collected > 0:
        state.players[player_index].tokens += collected
    else:
        logging.debug(f"Empty pool, nothing for {state.players[player_index].name} to collect")
    state.pool = 0
    return collected


def tokens_in_play(state: GameState) -> int:
    return sum(p.tokens for p in state.players) + state.pool
