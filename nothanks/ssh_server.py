"""
SSH server for No-Thanks-over-SSH.

Anyone can connect with any username; the username is the player's name at
the table. All sessions share one table.
"""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Set

import asyncssh

from nothanks.ssh_session import TableSession
from nothanks.table import Table


class TableServerState:
    """State shared by all sessions: the table, the seated players and the sessions."""

    def __init__(self, table: Table, db=None):
        self.table = table
        self.db = db
        self.lobby: List[str] = []
        self.sessions: Set[TableSession] = set()

    def seat(self, name: str) -> bool:
        if name in self.lobby:
            return False
        self.lobby.append(name)
        logging.info(f"{name} took a seat ({len(self.lobby)} seated)")
        return True

    def leave(self, name: str) -> bool:
        if name not in self.lobby:
            return False
        self.lobby.remove(name)
        logging.info(f"{name} left their seat ({len(self.lobby)} seated)")
        return True

    def has_other_session(self, name: str, session) -> bool:
        return any(s is not session and s.username == name for s in self.sessions)


class _TableSSHServer(asyncssh.SSHServer):
    def connection_made(self, conn):
        self._conn = conn
        logging.debug("SSH connection established")

    def connection_lost(self, exc):
        if exc:
            logging.debug(f"SSH connection lost: {exc}")

    def begin_auth(self, username):
        # No accounts: the SSH username is the player name
        logging.info(f"SSH login as {username}")
        return False


class SSHServer:
    """SSH front-end for a single table."""

    def __init__(self, host: str = "0.0.0.0", port: int = 22222, table: Optional[Table] = None,
                 db=None, host_key_path: str = "nothanks_host_key"):
        self.host = host
        self.port = port
        self.db = db
        self.host_key_path = Path(host_key_path)
        self._server = None
        self._server_state = TableServerState(table, db=db) if table is not None else None

    def _ensure_host_key(self) -> None:
        if self.host_key_path.exists():
            return
        try:
            key = asyncssh.generate_private_key("ssh-ed25519")
            self.host_key_path.write_bytes(key.export_private_key())
            self.host_key_path.chmod(0o600)
        except (OSError, asyncssh.Error) as e:
            raise RuntimeError(f"Failed to generate host key: {e}") from e
        logging.info(f"Generated SSH host key at {self.host_key_path}")

    def session_factory(self, stdin, stdout, stderr):
        username = stdin.get_extra_info('username')
        return TableSession(stdin, stdout, stderr, server_state=self._server_state, username=username)

    async def start(self) -> None:
        """Start the SSH server."""
        if self._server_state is None:
            raise RuntimeError("SSHServer needs a table to serve")
        self._ensure_host_key()

        self._server = await asyncssh.create_server(
            _TableSSHServer,
            self.host,
            self.port,
            server_host_keys=[str(self.host_key_path)],
            session_factory=self.session_factory,
            reuse_address=True,
        )
        logging.info(f"SSH server listening on {self.host}:{self.port}")

    async def serve_forever(self) -> None:
        await self.start()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            pass
        finally:
            if self._server is not None:
                self._server.close()
