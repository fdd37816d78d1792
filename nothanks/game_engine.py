"""
Core game engine for No-Thanks-over-SSH.

The engine is the only code that mutates a `GameState`. Every operation checks
all of its preconditions first and raises before touching anything, so a
failed action never leaves a half-applied state behind.
"""

import logging
import random
from typing import List, Optional, Sequence

from nothanks.deck import MAX_CARD, MIN_CARD, SETUP_CARDS_REMOVED, draw_card, new_deck
from nothanks.errors import (
    CardStillOutError,
    DeckEmptyError,
    GameNotOverError,
    InsufficientTokensError,
    InvalidPlayerNameError,
    InvalidStartingPlayerError,
    NoCardRevealedError,
)
from nothanks.game_state import GameState, Phase
from nothanks.hand import Standing, rank_standings
from nothanks.player import Player
from nothanks.rng import rand_int
from nothanks.tokens import collect_pool, deal_tokens, transfer_to_pool


class GameEngine:
    """Turn and game state machine."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng

    def new_game(self, names: Sequence[str], shuffle: bool = False,
                 first_player: Optional[int] = None,
                 min_card: int = MIN_CARD, max_card: int = MAX_CARD,
                 setup_removed: int = SETUP_CARDS_REMOVED) -> GameState:
        """Seat the players, deal tokens and build a fresh deck.

        `first_player` indexes the final seating (after the optional shuffle);
        when omitted a starting player is picked at random.
        """
        names = [name.strip() if isinstance(name, str) else name for name in names]
        tokens = deal_tokens(len(names))

        for name in names:
            if not isinstance(name, str) or not name:
                raise InvalidPlayerNameError(f"Invalid player name {name!r}")
        if len(set(names)) != len(names):
            duplicates = sorted({n for n in names if names.count(n) > 1})
            raise InvalidPlayerNameError(f"Duplicate player names: {', '.join(duplicates)}")

        if first_player is not None:
            if isinstance(first_player, bool) or not isinstance(first_player, int) \
                    or not 0 <= first_player < len(names):
                raise InvalidStartingPlayerError(first_player, len(names))

        deck = new_deck(min_card, max_card, setup_removed, rng=self.rng)

        if shuffle:
            (self.rng or random).shuffle(names)
        if first_player is None:
            first_player = rand_int(len(names) - 1, rng=self.rng)

        state = GameState(
            players=[Player(name, tokens=tokens) for name in names],
            deck=deck,
            active_player=first_player,
            min_card=min_card,
            max_card=max_card,
            setup_removed=setup_removed,
            tokens_dealt=tokens * len(names),
        )
        state.record(f"New game: {', '.join(names)} with {tokens} tokens each")
        state.record(f"{state.active.name} starts")
        logging.info(f"New game {state.game_id}: {len(names)} players, {len(deck)} cards, {state.active.name} starts")
        return state

    def reveal_top_card(self, state: GameState) -> int:
        if state.current_card is not None:
            raise CardStillOutError(state.current_card)
        if not state.deck:
            raise DeckEmptyError()

        card, state.deck = draw_card(state.deck, self.rng)
        state.current_card = card
        state.pool = 0
        state.record(f"Revealed {card} ({state.deck_size} left)")
        logging.debug(f"Game {state.game_id}: revealed {card}, {state.deck_size} cards left")
        return card

    def take_card(self, state: GameState) -> int:
        card = state.current_card
        if card is None:
            raise NoCardRevealedError()

        player = state.active
        player.add_card(card)
        collected = collect_pool(state, state.active_player)
        state.current_card = None

        state.record(f"{player.name} took {card} with {collected} tokens")
        logging.debug(f"Game {state.game_id}: {player.name} took {card} (+{collected} tokens)")
        if state.phase == Phase.GAME_OVER:
            state.record("The deck is empty, game over")
            logging.info(f"Game {state.game_id} is over")
        return card

    def no_thanks(self, state: GameState) -> int:
        if state.current_card is None:
            raise NoCardRevealedError()
        player = state.active
        if player.tokens < 1:
            raise InsufficientTokensError(player.name, player.tokens)

        transfer_to_pool(state, state.active_player, 1)
        state.active_player = (state.active_player + 1) % len(state.players)

        state.record(f"{player.name}: no thanks! ({state.pool} tokens on {state.current_card})")
        logging.debug(f"Game {state.game_id}: {player.name} passed, {state.active.name} to act")
        return state.active_player

    def reveal_scores(self, state: GameState) -> List[Standing]:
        if not state.is_over:
            raise GameNotOverError(state.deck_size, state.current_card is not None)
        standings = rank_standings(state.players)
        if not state.scores_revealed:
            state.scores_revealed = True
            winners = [s.name for s in standings if s.rank == 1]
            state.record(f"Final scores revealed, winner: {' & '.join(winners)}")
        return standings
