"""
Exceptions raised by the No-Thanks-over-SSH game core.

Every failed action raises one of these before any state is mutated, so the
caller can show the message to the player and nothing has to be rolled back.
"""

from typing import Optional


class GameError(Exception):
    """Base class for all game errors."""


class PreconditionError(GameError):
    """An action was attempted while its preconditions did not hold."""


class CardStillOutError(PreconditionError):
    def __init__(self, card: int):
        self.card = card
        super().__init__(f"The card '{card}' is still out, someone needs to take it first!")


class NoCardRevealedError(PreconditionError):
    def __init__(self):
        super().__init__("No card revealed yet!")


class InsufficientTokensError(PreconditionError):
    def __init__(self, player_name: str, tokens: int, amount: int = 1):
        self.player_name = player_name
        self.tokens = tokens
        self.amount = amount
        super().__init__(
            f"{player_name} doesn't have enough tokens left "
            f"(has {tokens}, needs {amount})"
        )


class UnsupportedPlayerCountError(PreconditionError):
    def __init__(self, count: int, min_players: int = 3, max_players: int = 7):
        self.count = count
        super().__init__(
            f"Unsupported player count {count}, need between {min_players} and {max_players} players"
        )


class InvalidStartingPlayerError(PreconditionError):
    def __init__(self, choice, player_count: int):
        self.choice = choice
        super().__init__(
            f"Starting player {choice!r} is out of range (0..{player_count - 1})"
        )


class NotYourTurnError(PreconditionError):
    def __init__(self, player_name: str, active_name: str):
        self.player_name = player_name
        self.active_name = active_name
        super().__init__(f"It's {active_name}'s turn, not {player_name}'s")


class InvalidPlayerNameError(PreconditionError):
    pass


class InvalidDeckError(PreconditionError):
    pass


class NoGameError(PreconditionError):
    def __init__(self, table_id: Optional[str] = None):
        where = f" at table '{table_id}'" if table_id else ""
        super().__init__(f"No game in progress{where}, start a new game first")


class GameNotOverError(PreconditionError):
    def __init__(self, deck_size: int, card_out: bool):
        self.deck_size = deck_size
        detail = "a card is still out" if card_out else f"{deck_size} cards left in the deck"
        super().__init__(f"The game is not over yet ({detail})")


class DeckEmptyError(GameError):
    """The deck ran out. Expected at the end of every game."""

    def __init__(self):
        super().__init__("No more cards in the deck!")


class GameBusyError(GameError):
    """The action gate could not be acquired in time."""

    def __init__(self, action: str, timeout: float, holder: Optional[str] = None):
        self.action = action
        self.timeout = timeout
        self.holder = holder
        by = f" (held by {holder})" if holder else ""
        super().__init__(
            f"Previous action still in progress{by}, could not {action} within {timeout:g}s"
        )


class SnapshotError(GameError):
    """A stored game snapshot could not be read."""
