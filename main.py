"""
Entry point for No-Thanks-over-SSH
Starts the SSH server, the table it serves and the healthcheck endpoint.
"""

import argparse
import asyncio
import logging

from nothanks.database import init_database
from nothanks.gate import ActionGate
from nothanks.healthcheck import HealthcheckService
from nothanks.persistence import DatabaseGameStore
from nothanks.server_info import get_server_info
from nothanks.ssh_server import SSHServer
from nothanks.table import Table

TABLE_ID = "default"


def build_table(db, action_timeout: float, lease_seconds: float) -> Table:
    gate = ActionGate(timeout=action_timeout, lease_store=db, table_id=TABLE_ID, lease_seconds=lease_seconds)
    store = DatabaseGameStore(db, TABLE_ID)
    return Table(store, gate=gate, table_id=TABLE_ID, recorder=db)


async def main(host: str, port: int, db_path: str, healthcheck: bool):
    print("🚫 Starting No-Thanks-over-SSH server")
    print("=" * 50)

    info = get_server_info()
    db = init_database(db_path)
    # Leases left behind by a previous run can't belong to a live action
    db.clear_leases()
    stats = db.get_database_stats()
    print(f"📊 Database: {stats['finished_games']} finished games, {stats['total_actions']} actions logged")

    table = build_table(db, info['action_timeout'], info['lease_seconds'])
    state = table.current_state()
    if state is not None:
        print(f"♻️  Resuming game {state.game_id} ({state.phase.value}, {state.deck_size} cards left)")

    server = SSHServer(host=host, port=port, table=table, db=db, host_key_path=info['host_key_path'])

    if healthcheck:
        service = HealthcheckService(table, db=db, port=info['healthcheck_port'])
        await service.start()

    await server.serve_forever()


if __name__ == "__main__":
    settings = get_server_info()
    parser = argparse.ArgumentParser(description="Run the No-Thanks-over-SSH server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", default=int(settings['server_port']), type=int, help="Port to bind to")
    parser.add_argument("--db", default=settings['database_path'], help="SQLite database path")
    parser.add_argument("--no-healthcheck", action="store_true", help="Don't start the HTTP healthcheck")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    # Suppress AsyncSSH's verbose connection messages
    logging.getLogger('asyncssh').setLevel(logging.WARNING)

    try:
        asyncio.run(main(args.host, args.port, args.db, not args.no_healthcheck))
    except KeyboardInterrupt:
        print("\n👋 Server shutting down...")
    except RuntimeError as e:
        print(f"❌ Error: {e}")
