"""
Database module for No-Thanks-over-SSH.

Handles persistent storage of table state, action leases, the action log and
finished game results. Uses SQLite for simplicity and reliability.
"""

import sqlite3
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from .game_state_db import GameStateDatabaseMixin
from .lease_db import LeaseDatabaseMixin
from .action_db import ActionDatabaseMixin
from .results_db import ResultsDatabaseMixin


class DatabaseManager(
    GameStateDatabaseMixin,
    LeaseDatabaseMixin,
    ActionDatabaseMixin,
    ResultsDatabaseMixin
):
    """Manages SQLite database operations for the game server."""

    def __init__(self, db_path: str = "nothanks_data.db"):
        self.db_path = Path(db_path).resolve()
        self._local = threading.local()
        self._init_database()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a thread-local database connection."""
        if not hasattr(self._local, 'connection'):
            self._local.connection = sqlite3.connect(
                self.db_path,
                check_same_thread=False,
                timeout=30.0
            )
            self._local.connection.row_factory = sqlite3.Row
            # WAL lets the healthcheck read while a table action writes
            self._local.connection.execute("PRAGMA journal_mode = WAL")
        return self._local.connection

    @contextmanager
    def get_cursor(self):
        """Get a database cursor with automatic commit/rollback."""
        conn = self._get_connection()
        cursor = conn.cursor()
        try:
            yield cursor
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()

    def close(self):
        connection = getattr(self._local, 'connection', None)
        if connection is not None:
            connection.close()
            del self._local.connection

    def _init_database(self):
        """Initialize database tables."""
        with self.get_cursor() as cursor:
            # One row per table: the serialized live game
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS game_states (
                    table_id TEXT PRIMARY KEY,
                    schema_version INTEGER NOT NULL,
                    payload TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
            """)

            # Action leases, shared between server processes
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS table_leases (
                    table_id TEXT PRIMARY KEY,
                    holder TEXT NOT NULL,
                    expires_at REAL NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS actions (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    table_id TEXT NOT NULL,
                    game_id TEXT,
                    player_name TEXT,
                    action_type TEXT NOT NULL,
                    card INTEGER,
                    tokens INTEGER,
                    timestamp REAL NOT NULL,
                    details TEXT
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS game_results (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    game_id TEXT NOT NULL,
                    table_id TEXT NOT NULL,
                    player_name TEXT NOT NULL,
                    seat INTEGER NOT NULL,
                    score INTEGER NOT NULL,
                    rank INTEGER NOT NULL,
                    tokens INTEGER NOT NULL,
                    cards TEXT NOT NULL,
                    finished_at REAL NOT NULL,
                    UNIQUE(game_id, player_name)
                )
            """)

            cursor.execute("CREATE INDEX IF NOT EXISTS idx_actions_game ON actions (game_id)")
            cursor.execute("CREATE INDEX IF NOT EXISTS idx_actions_player ON actions (player_name)")
            cursor.execute("CREATE INDEX IF NOT EXISTS idx_results_player ON game_results (player_name)")

        logging.info(f"Database initialized at {self.db_path}")


# Global database instance
_db_manager: Optional[DatabaseManager] = None


def get_database() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")
    return _db_manager


def init_database(db_path: str = "nothanks_data.db") -> DatabaseManager:
    """Initialize the global database manager."""
    global _db_manager
    _db_manager = DatabaseManager(db_path)
    return _db_manager
