"""
Game stores for No-Thanks-over-SSH.

A store loads and saves a whole `GameState` through its versioned snapshot.
Every load returns a fresh object, so the engine can mutate it freely and a
failed action is discarded by simply not saving.
"""

import logging
from typing import Optional

from nothanks import snapshot
from nothanks.game_state import GameState


class GameStore:
    """Interface of a persistence adapter."""

    def load_game_state(self) -> Optional[GameState]:
        raise NotImplementedError

    def save_game_state(self, state: GameState) -> None:
        raise NotImplementedError

    def clear_game_state(self) -> None:
        raise NotImplementedError


class MemoryGameStore(GameStore):
    """Keeps the snapshot in memory. Used for tests and local play."""

    def __init__(self):
        self._payload: Optional[str] = None

    def load_game_state(self) -> Optional[GameState]:
        if self._payload is None:
            return None
        return snapshot.loads(self._payload)

    def save_game_state(self, state: GameState) -> None:
        self._payload = snapshot.dumps(state)

    def clear_game_state(self) -> None:
        self._payload = None


class DatabaseGameStore(GameStore):
    """Keeps the snapshot of one table in the SQLite database."""

    def __init__(self, db, table_id: str = "default"):
        self.db = db
        self.table_id = table_id

    def load_game_state(self) -> Optional[GameState]:
        payload = self.db.load_game_payload(self.table_id)
        if payload is None:
            return None
        return snapshot.loads(payload)

    def save_game_state(self, state: GameState) -> None:
        self.db.save_game_payload(self.table_id, snapshot.dumps(state), snapshot.SCHEMA_VERSION)

    def clear_game_state(self) -> None:
        if self.db.delete_game_payload(self.table_id):
            logging.info(f"Cleared stored game for table {self.table_id}")
