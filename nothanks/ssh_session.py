"""
SSH session handling for No-Thanks-over-SSH.

One `TableSession` per connected client: it line-edits the input, hands
complete lines to the command processor and repaints the table whenever a
table event is broadcast.
"""

import asyncio
import logging
from typing import Optional

from nothanks.server_info import format_motd, get_server_info
from nothanks.terminal_ui import TerminalUI
from nothanks.ui.colors import Colors

PROMPT = "❯ "


class TableSession:
    """Session handler bound to the server's table."""

    def __init__(self, stdin, stdout, stderr, server_state=None, username: Optional[str] = None,
                 start_reader: bool = True):
        self._stdin = stdin
        self._stdout = stdout
        self._stderr = stderr
        self._input_buffer = ""
        self._running = True
        self._should_exit = False
        self._reader_task: Optional[asyncio.Task] = None
        self._server_state = server_state
        self._username = username
        self._ui = TerminalUI(username)
        self.show_cards = False

        if server_state is not None:
            server_state.sessions.add(self)
            server_state.table.add_listener(self.on_table_event)

        self._send_welcome()

        if start_reader:
            self._reader_task = asyncio.create_task(self._read_input())

    @property
    def username(self) -> Optional[str]:
        return self._username

    def _send_welcome(self):
        # Disable mouse tracking so stray clicks don't end up in the input
        self._stdout.write("\033[?1000l\033[?1002l\033[?1003l")
        server_info = get_server_info()
        self._stdout.write(format_motd(server_info) + "\r\n")
        if self._username:
            self._stdout.write(f"🎭 Logged in as: {Colors.CYAN}{self._username}{Colors.RESET}\r\n")
            self._stdout.write(f"💡 Type '{Colors.GREEN}help{Colors.RESET}' for commands or '{Colors.GREEN}seat{Colors.RESET}' to join the table.\r\n\r\n")
        else:
            self._stdout.write(f"⚠️  {Colors.YELLOW}No SSH username detected. To play, reconnect with: ssh <username>@{server_info['ssh_connection_string']}{Colors.RESET}\r\n\r\n")
        self._stdout.write(PROMPT)

    def write(self, text: str) -> None:
        """Write text, translating newlines for the SSH terminal."""
        try:
            self._stdout.write(text.replace("\r\n", "\n").replace("\n", "\r\n"))
        except Exception as e:
            logging.debug(f"Write to {self._username} failed: {e}")

    async def send(self, text: str, prompt: bool = True) -> None:
        self.write(text + ("\r\n\r\n" + PROMPT if prompt else ""))
        try:
            await self._stdout.drain()
        except Exception as e:
            logging.debug(f"Drain for {self._username} failed: {e}")

    def render_state(self, state) -> str:
        return self._ui.render(state.public_state(viewer=self._username), show_hand_cards=self.show_cards)

    def on_table_event(self, event: str, state) -> None:
        """Table listener: repaint the table for this user."""
        if not self._running:
            return
        if state is None:
            self.write(f"\r\n{Colors.YELLOW}🧹 The table was cleared.{Colors.RESET}\r\n{PROMPT}")
            return
        self.write(self.render_state(state) + "\r\n" + PROMPT)

    async def _stop(self):
        """Stop the session and leave the lobby."""
        if not self._running:
            return
        self._should_exit = True
        self._running = False
        self._detach()
        try:
            self._stdout.close()
        except Exception as e:
            logging.debug(f"Closing output for {self._username} failed: {e}")

    def _detach(self):
        if self._server_state is None:
            return
        self._server_state.table.remove_listener(self.on_table_event)
        self._server_state.sessions.discard(self)
        if self._username and not self._server_state.has_other_session(self._username, self):
            self._server_state.leave(self._username)

    async def _read_input(self):
        """Continuously read input from stdin."""
        try:
            while self._running and not self._should_exit:
                data = await self._stdin.read(1)
                if not data:
                    break
                if isinstance(data, bytes):
                    data = data.decode('utf-8', errors='ignore')
                for char in data:
                    await self._handle_char(char)
                    if self._should_exit:
                        break
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logging.info(f"Input reader for {self._username} stopped: {e}")
        finally:
            logging.debug(f"TableSession: input reader ending for {self._username}")
            await self._stop()

    async def _handle_char(self, char: str):
        """Handle character input. Echo is done by the asyncssh line editor."""
        if char in ('\r', '\n'):
            cmd = self._input_buffer.strip()
            self._input_buffer = ""
            await self._process_command(cmd)
        elif char in ('\x7f', '\x08'):  # Backspace
            if self._input_buffer:
                self._input_buffer = self._input_buffer[:-1]
        elif char == '\x03':  # Ctrl+C
            self._input_buffer = ""
            self.write(f"^C\r\n{PROMPT}")
        elif char == '\x04':  # Ctrl+D
            self.write("Goodbye!\r\n")
            await self._stop()
        elif 32 <= ord(char) < 127:
            self._input_buffer += char

    async def _process_command(self, cmd: str):
        # Imported here to avoid a circular import with the command processor
        from nothanks.commands import CommandProcessor

        await CommandProcessor(self).process_command(cmd)

    def connection_lost(self, exc):
        if exc:
            logging.info(f"TableSession.connection_lost for {self._username}: {exc}")
        else:
            logging.debug(f"TableSession.connection_lost for {self._username}: clean disconnection")
        self._should_exit = True
        self._running = False
        self._detach()
