"""
Game state storage for No-Thanks-over-SSH.
Keeps the serialized live game of every table.
"""

import time
from typing import Any, Dict, List, Optional


class GameStateDatabaseMixin:
    """Mixin class providing game snapshot storage."""

    def load_game_payload(self, table_id: str) -> Optional[str]:
        with self.get_cursor() as cursor:
            cursor.execute(
                "SELECT payload FROM game_states WHERE table_id = ?",
                (table_id,)
            )
            row = cursor.fetchone()
            return row['payload'] if row else None

    def save_game_payload(self, table_id: str, payload: str, schema_version: int) -> None:
        with self.get_cursor() as cursor:
            cursor.execute("""
                INSERT INTO game_states (table_id, schema_version, payload, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(table_id) DO UPDATE SET
                    schema_version = excluded.schema_version,
                    payload = excluded.payload,
                    updated_at = excluded.updated_at
            """, (table_id, schema_version, payload, time.time()))

    def delete_game_payload(self, table_id: str) -> bool:
        with self.get_cursor() as cursor:
            cursor.execute("DELETE FROM game_states WHERE table_id = ?", (table_id,))
            return cursor.rowcount > 0

    def list_game_payloads(self) -> List[Dict[str, Any]]:
        with self.get_cursor() as cursor:
            cursor.execute("SELECT * FROM game_states ORDER BY table_id")
            return [dict(row) for row in cursor.fetchall()]
