"""
No-Thanks-over-SSH: the card game "No Thanks!" played over SSH.

The game core (deck, tokens, hands, turn engine and the action gate) does not
depend on the SSH front-end and can be driven directly through `Table`.
"""

from nothanks.errors import GameError
from nothanks.game_engine import GameEngine
from nothanks.game_state import GameState, Phase
from nothanks.gate import ActionGate
from nothanks.persistence import DatabaseGameStore, GameStore, MemoryGameStore
from nothanks.table import Table

__all__ = [
    'ActionGate',
    'DatabaseGameStore',
    'GameEngine',
    'GameError',
    'GameState',
    'GameStore',
    'MemoryGameStore',
    'Phase',
    'Table',
]
