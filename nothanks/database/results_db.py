"""
Finished game results and leaderboard for No-Thanks-over-SSH.
"""

import json
import time
import logging
from typing import Any, Dict, Iterable, List


class ResultsDatabaseMixin:
    """Mixin class providing game result storage and statistics."""

    def record_game_result(self, game_id: str, table_id: str, standings: Iterable[Any]) -> int:
        """Store the final standings of a game. Recording the same game twice is a no-op."""
        now = time.time()
        inserted = 0
        with self.get_cursor() as cursor:
            for s in standings:
                cursor.execute("""
                    INSERT OR IGNORE INTO game_results
                    (game_id, table_id, player_name, seat, score, rank, tokens, cards, finished_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (game_id, table_id, s.name, s.seat, s.score, s.rank, s.tokens,
                      json.dumps(list(s.hand)), now))
                inserted += cursor.rowcount
        if inserted:
            logging.info(f"Recorded results of game {game_id} ({inserted} players)")
        return inserted

    def get_game_results(self, game_id: str) -> List[Dict[str, Any]]:
        with self.get_cursor() as cursor:
            cursor.execute(
                "SELECT * FROM game_results WHERE game_id = ? ORDER BY rank, seat",
                (game_id,)
            )
            results = []
            for row in cursor.fetchall():
                entry = dict(row)
                entry['cards'] = json.loads(entry['cards'])
                results.append(entry)
            return results

    def get_leaderboard(self, limit: int = 10) -> List[Dict[str, Any]]:
        """Players ordered by wins, then by average score (lower is better)."""
        with self.get_cursor() as cursor:
            cursor.execute("""
                SELECT player_name,
                       COUNT(*) AS games_played,
                       SUM(CASE WHEN rank = 1 THEN 1 ELSE 0 END) AS wins,
                       AVG(score) AS average_score,
                       MIN(score) AS best_score
                FROM game_results
                GROUP BY player_name
                ORDER BY wins DESC, average_score ASC, player_name ASC
                LIMIT ?
            """, (limit,))
            return [dict(row) for row in cursor.fetchall()]

    def get_database_stats(self) -> Dict[str, Any]:
        with self.get_cursor() as cursor:
            cursor.execute("SELECT COUNT(*) AS count FROM game_states")
            live_tables = cursor.fetchone()['count']

            cursor.execute("SELECT COUNT(DISTINCT game_id) AS count FROM game_results")
            finished_games = cursor.fetchone()['count']

            cursor.execute("SELECT COUNT(*) AS count FROM actions")
            total_actions = cursor.fetchone()['count']

            cursor.execute("SELECT COUNT(DISTINCT player_name) AS count FROM game_results")
            known_players = cursor.fetchone()['count']

            return {
                'live_tables': live_tables,
                'finished_games': finished_games,
                'total_actions': total_actions,
                'known_players': known_players,
            }
