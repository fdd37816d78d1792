#!/usr/bin/env python3
"""
Database diagnostic tool for No-Thanks-over-SSH.
Run this script to check stored games for broken invariants.
"""

import argparse
import sys

from nothanks.database import init_database
from nothanks.errors import SnapshotError
from nothanks.server_info import get_server_info
from nothanks.snapshot import loads


def main(db_path: str) -> int:
    """Run database diagnostics."""
    print("🔍 No-Thanks-over-SSH Database Diagnostic Tool")
    print("=" * 50)

    db = init_database(db_path)

    print("\n📊 Database Statistics:")
    stats = db.get_database_stats()
    print(f"  Live tables: {stats['live_tables']}")
    print(f"  Finished games: {stats['finished_games']}")
    print(f"  Total actions: {stats['total_actions']}")
    print(f"  Known players: {stats['known_players']}")

    print("\n🔍 Stored games:")
    problems = 0
    rows = db.list_game_payloads()
    if not rows:
        print("  No game in progress")
    for row in rows:
        try:
            state = loads(row['payload'])
        except SnapshotError as e:
            problems += 1
            print(f"  ❌ {row['table_id']}: unreadable snapshot ({e})")
            continue
        issues = state.check_invariants()
        if not issues:
            print(f"  ✅ {row['table_id']}: {state.phase.value}, {state.deck_size} cards left")
            continue
        problems += len(issues)
        print(f"  ⚠️  {row['table_id']}: {len(issues)} issue(s)")
        for i, issue in enumerate(issues, 1):
            print(f"    {i}. {issue}")

    print("\n🏆 Top 5 Players:")
    for i, row in enumerate(db.get_leaderboard(5), 1):
        print(f"    {i}. {row['player_name']:<15} - Wins: {row['wins']:>3} | "
              f"Games: {row['games_played']:>3} | Avg score: {row['average_score']:>6.1f}")

    print(f"\n✅ Database diagnostic complete!" if not problems else f"\n⚠️  {problems} problem(s) found")
    return 1 if problems else 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Check a No-Thanks-over-SSH database")
    parser.add_argument("--db", default=get_server_info()['database_path'], help="SQLite database path")
    args = parser.parse_args()
    sys.exit(main(args.db))
