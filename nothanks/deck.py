"""
Deck operations for No-Thanks-over-SSH.

A deck is a plain list of card values. Order carries no meaning: every draw
picks a uniformly random index, so the deck never needs shuffling.
"""

import logging
import random
from typing import List, Optional, Tuple

from nothanks.errors import DeckEmptyError, InvalidDeckError
from nothanks.rng import rand_int

MIN_CARD = 3
MAX_CARD = 35
SETUP_CARDS_REMOVED = 9

Card = int


def make_deck(min_card: int = MIN_CARD, max_card: int = MAX_CARD) -> List[Card]:
    """Create the full inclusive range of cards."""
    return list(range(min_card, max_card + 1))


def draw_card(deck: List[Card], rng: Optional[random.Random] = None) -> Tuple[Card, List[Card]]:
    """Remove a random card from the deck and return it with the remaining deck.

    The deck is shrunk in place; the returned list is the same object.
    """
    if not deck:
        raise DeckEmptyError()
    index = rand_int(len(deck) - 1, rng=rng)
    card = deck.pop(index)
    return card, deck


def new_deck(min_card: int = MIN_CARD, max_card: int = MAX_CARD,
             setup_removed: int = SETUP_CARDS_REMOVED,
             rng: Optional[random.Random] = None) -> List[Card]:
    """Build a fresh deck with `setup_removed` cards blindly taken out of the game."""
    if min_card > max_card:
        raise InvalidDeckError(f"Invalid card range [{min_card}, {max_card}]")
    size = max_card - min_card + 1
    if setup_removed < 0 or setup_removed >= size:
        raise InvalidDeckError(
            f"Cannot remove {setup_removed} cards from a deck of {size}"
        )

    deck = make_deck(min_card, max_card)
    for _ in range(setup_removed):
        # Removed cards are never shown to anyone
        _, deck = draw_card(deck, rng)

    logging.debug(f"New deck built: {len(deck)} cards in [{min_card}, {max_card}], {setup_removed} removed")
    return deck
