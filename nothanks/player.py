"""
Player model for No-Thanks-over-SSH.

A player is identified by their seat in the game; the name is what other
players see and does not change during a game.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from nothanks.hand import add_card_to_hand, compute_score


class Player:
    def __init__(self, name: str, tokens: int = 0, hand: Optional[List[int]] = None):
        self.name = name
        self.tokens = tokens
        self.hand: List[int] = sorted(hand) if hand else []

    def add_card(self, card: int) -> None:
        add_card_to_hand(self.hand, card)

    @property
    def score(self) -> int:
        return compute_score(self.hand, self.tokens)

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'tokens': self.tokens, 'hand': list(self.hand)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Player:
        return cls(data['name'], tokens=int(data['tokens']), hand=[int(c) for c in data.get('hand', [])])

    def __repr__(self):
        return f"Player({self.name!r}, tokens={self.tokens}, hand={self.hand!r})"

    def __eq__(self, other):
        if not isinstance(other, Player):
            return NotImplemented
        return (self.name, self.tokens, self.hand) == (other.name, other.tokens, other.hand)
