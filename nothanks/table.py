"""
Table service for No-Thanks-over-SSH.

Brings together the gate, the store and the engine. Each user action runs as:
enter the gate, load the game, apply one engine operation, save, log, then
tell the presentation listeners what changed. If the operation raises, nothing
is saved and listeners are not called.
"""

import logging
from typing import Any, Callable, List, Optional, Sequence

from nothanks.errors import NoGameError, NotYourTurnError
from nothanks.game_engine import GameEngine
from nothanks.game_state import GameState, Phase
from nothanks.gate import ActionGate
from nothanks.hand import Standing, rank_standings
from nothanks.persistence import GameStore

# listener(event, state); state is None after a reset
Listener = Callable[[str, Optional[GameState]], Any]


class Table:
    def __init__(self, store: GameStore, engine: Optional[GameEngine] = None,
                 gate: Optional[ActionGate] = None, table_id: str = "default",
                 recorder=None):
        self.store = store
        self.engine = engine or GameEngine()
        self.gate = gate or ActionGate(table_id=table_id)
        self.table_id = table_id
        self.recorder = recorder
        self._listeners: List[Listener] = []

    def add_listener(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def current_state(self) -> Optional[GameState]:
        return self.store.load_game_state()

    def phase(self) -> Phase:
        state = self.store.load_game_state()
        return state.phase if state is not None else Phase.SETUP

    def new_game(self, names: Sequence[str], shuffle: bool = False,
                 first_player: Optional[int] = None) -> GameState:
        with self.gate.hold("start a new game"):
            state = self.engine.new_game(names, shuffle=shuffle, first_player=first_player)
            self.store.save_game_state(state)
            self._log(state, "NEW_GAME", details=", ".join(p.name for p in state.players))
            logging.info(f"Table {self.table_id}: new game {state.game_id} for {len(state.players)} players")
        self._notify("new_game", state)
        return state

    def reveal_top_card(self) -> int:
        with self.gate.hold("reveal a card"):
            state = self._load()
            card = self.engine.reveal_top_card(state)
            self.store.save_game_state(state)
            self._log(state, "REVEAL", card=card)
            logging.info(f"Table {self.table_id}: revealed {card}, {state.deck_size} left")
        self._notify("reveal", state)
        return card

    def take_card(self, player_name: Optional[str] = None) -> int:
        with self.gate.hold("take the card"):
            state = self._load()
            self._check_turn(state, player_name)
            player = state.active
            pool = state.pool
            card = self.engine.take_card(state)
            self.store.save_game_state(state)
            self._log(state, "TAKE", player=player.name, card=card, tokens=pool)
            logging.info(f"Table {self.table_id}: {player.name} took {card} with {pool} tokens")
            game_over = state.phase == Phase.GAME_OVER
            if game_over:
                self._record_results(state)
        self._notify("take", state)
        if game_over:
            self._notify("game_over", state)
        return card

    def no_thanks(self, player_name: Optional[str] = None) -> int:
        with self.gate.hold("say no thanks"):
            state = self._load()
            self._check_turn(state, player_name)
            player = state.active
            card = state.current_card
            next_player = self.engine.no_thanks(state)
            self.store.save_game_state(state)
            self._log(state, "NO_THANKS", player=player.name, card=card, tokens=state.pool)
            logging.info(f"Table {self.table_id}: {player.name} declined {card}, pool is {state.pool}")
        self._notify("no_thanks", state)
        return next_player

    def reveal_scores(self) -> List[Standing]:
        with self.gate.hold("reveal the scores"):
            state = self._load()
            standings = self.engine.reveal_scores(state)
            self.store.save_game_state(state)
            self._log(state, "SCORES")
        self._notify("scores", state)
        return standings

    def reset(self) -> None:
        with self.gate.hold("clear the table"):
            self.store.clear_game_state()
            self._log(None, "RESET")
        self._notify("reset", None)

    def _load(self) -> GameState:
        state = self.store.load_game_state()
        if state is None:
            raise NoGameError(self.table_id)
        return state

    @staticmethod
    def _check_turn(state: GameState, player_name: Optional[str]) -> None:
        # Checked under the gate; the caller's view of whose turn it is may be stale
        if player_name is not None and state.current_card is not None and state.active.name != player_name:
            raise NotYourTurnError(player_name, state.active.name)

    def _log(self, state: Optional[GameState], action_type: str, player: Optional[str] = None,
             card: Optional[int] = None, tokens: Optional[int] = None,
             details: Optional[str] = None) -> None:
        if self.recorder is None:
            return
        # The action is already committed; a failed log entry must not undo it
        try:
            self.recorder.log_action(
                self.table_id, action_type,
                game_id=state.game_id if state is not None else None,
                player_name=player, card=card, tokens=tokens, details=details
            )
        except Exception as e:
            logging.error(f"Failed to log {action_type} for table {self.table_id}: {e}")

    def _record_results(self, state: GameState) -> None:
        if self.recorder is None:
            return
        try:
            self.recorder.record_game_result(state.game_id, self.table_id, rank_standings(state.players))
        except Exception as e:
            logging.error(f"Failed to record results of game {state.game_id}: {e}")

    def _notify(self, event: str, state: Optional[GameState]) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, state)
            except Exception:
                logging.exception(f"Table {self.table_id}: listener failed on {event}")
