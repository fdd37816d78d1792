"""
Action log for No-Thanks-over-SSH.
Every committed table action is appended here for later review.
"""

import time
from typing import Any, Dict, List, Optional


class ActionDatabaseMixin:
    """Mixin class providing action logging."""

    def log_action(self, table_id: str, action_type: str, game_id: Optional[str] = None,
                   player_name: Optional[str] = None, card: Optional[int] = None,
                   tokens: Optional[int] = None, details: Optional[str] = None) -> None:
        with self.get_cursor() as cursor:
            cursor.execute("""
                INSERT INTO actions
                (table_id, game_id, player_name, action_type, card, tokens, timestamp, details)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """, (table_id, game_id, player_name, action_type, card, tokens, time.time(), details))

    def get_game_actions(self, game_id: str) -> List[Dict[str, Any]]:
        with self.get_cursor() as cursor:
            cursor.execute(
                "SELECT * FROM actions WHERE game_id = ? ORDER BY id",
                (game_id,)
            )
            return [dict(row) for row in cursor.fetchall()]

    def get_player_actions(self, player_name: str, limit: int = 50) -> List[Dict[str, Any]]:
        with self.get_cursor() as cursor:
            cursor.execute("""
                SELECT * FROM actions WHERE player_name = ?
                ORDER BY id DESC LIMIT ?
            """, (player_name, limit))
            return [dict(row) for row in cursor.fetchall()]
