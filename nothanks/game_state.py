"""
Game aggregate for No-Thanks-over-SSH.

`GameState` is the single owner of everything a table needs to resume a game:
the deck, the revealed card, the pool, the seating and the turn pointer. It is
passed explicitly to the engine, loaded and saved whole by a `GameStore`.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from nothanks.deck import MAX_CARD, MIN_CARD, SETUP_CARDS_REMOVED
from nothanks.hand import rank_standings
from nothanks.player import Player
from nothanks.tokens import MAX_PLAYERS, MIN_PLAYERS, tokens_in_play

MAX_HISTORY = 50


class Phase(str, Enum):
    SETUP = 'setup'
    AWAITING_REVEAL = 'awaiting_reveal'
    CARD_REVEALED = 'card_revealed'
    GAME_OVER = 'game_over'
    SCORES_REVEALED = 'scores_revealed'


@dataclass
class GameState:
    players: List[Player]
    deck: List[int]
    current_card: Optional[int] = None
    pool: int = 0
    active_player: int = 0
    min_card: int = MIN_CARD
    max_card: int = MAX_CARD
    setup_removed: int = SETUP_CARDS_REMOVED
    tokens_dealt: int = 0
    scores_revealed: bool = False
    game_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    started_at: float = field(default_factory=time.time)
    action_history: List[str] = field(default_factory=list)

    @property
    def phase(self) -> Phase:
        if self.current_card is not None:
            return Phase.CARD_REVEALED
        if self.deck:
            return Phase.AWAITING_REVEAL
        if self.scores_revealed:
            return Phase.SCORES_REVEALED
        return Phase.GAME_OVER

    @property
    def active(self) -> Player:
        return self.players[self.active_player]

    @property
    def deck_size(self) -> int:
        return len(self.deck)

    @property
    def is_over(self) -> bool:
        return self.phase in (Phase.GAME_OVER, Phase.SCORES_REVEALED)

    def player_index(self, name: str) -> Optional[int]:
        for index, player in enumerate(self.players):
            if player.name == name:
                return index
        return None

    def record(self, entry: str) -> None:
        self.action_history.append(entry)
        del self.action_history[:-MAX_HISTORY]

    def check_invariants(self) -> List[str]:
        """Return a description of every broken invariant (empty when healthy)."""
        issues = []

        if not MIN_PLAYERS <= len(self.players) <= MAX_PLAYERS:
            issues.append(f"Player count {len(self.players)} outside [{MIN_PLAYERS}, {MAX_PLAYERS}]")
        if not 0 <= self.active_player < max(len(self.players), 1):
            issues.append(f"Active player {self.active_player} is not a valid seat")
        if self.pool < 0:
            issues.append(f"Negative pool: {self.pool}")
        for player in self.players:
            if player.tokens < 0:
                issues.append(f"Negative tokens: {player.name} has {player.tokens}")

        in_play = tokens_in_play(self)
        if in_play != self.tokens_dealt:
            issues.append(f"Token conservation broken: {in_play} in play, {self.tokens_dealt} dealt")

        owned: List[int] = list(self.deck)
        if self.current_card is not None:
            owned.append(self.current_card)
        for player in self.players:
            owned.extend(player.hand)
        if len(owned) != len(set(owned)):
            issues.append("A card is owned more than once")
        out_of_range = [c for c in owned if not self.min_card <= c <= self.max_card]
        if out_of_range:
            issues.append(f"Cards out of range: {sorted(out_of_range)}")
        expected = self.max_card - self.min_card + 1
        if len(owned) + self.setup_removed != expected:
            issues.append(
                f"Card conservation broken: {len(owned)} cards in play + "
                f"{self.setup_removed} removed != {expected}"
            )
        return issues

    def public_state(self, viewer: Optional[str] = None) -> Dict[str, Any]:
        """Snapshot for presentation. The deck contents are never exposed."""
        over = self.is_over
        players = []
        for index, player in enumerate(self.players):
            show_tokens = over or player.name == viewer
            players.append({
                'name': player.name,
                'seat': index,
                'tokens': player.tokens if show_tokens else None,
                'hand': list(player.hand),
                'active': index == self.active_player,
            })

        state: Dict[str, Any] = {
            'game_id': self.game_id,
            'phase': self.phase.value,
            'deck_size': self.deck_size,
            'current_card': self.current_card,
            'pool': self.pool,
            'active_player': self.active.name,
            'players': players,
            'action_history': list(self.action_history),
        }
        if self.phase == Phase.SCORES_REVEALED:
            state['standings'] = [s.to_dict() for s in rank_standings(self.players)]
        return state
