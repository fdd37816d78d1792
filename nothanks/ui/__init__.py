"""
UI module for No-Thanks-over-SSH.
Provides terminal UI components for consistent presentation.
"""

from .colors import Colors
from .cards import card_lines, cards_horizontal, deck_lines, token_str, TOKEN_REPR

__all__ = ['Colors', 'card_lines', 'cards_horizontal', 'deck_lines', 'token_str', 'TOKEN_REPR']
