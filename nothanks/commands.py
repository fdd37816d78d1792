"""
Command handlers for SSH session commands.

Every game command maps onto exactly one table action. Rule violations come
back from the table as `GameError`s and are shown to the player as-is.
"""

import logging
import random
from typing import List, Optional, Tuple, TYPE_CHECKING

from nothanks.errors import GameError, InvalidStartingPlayerError
from nothanks.server_info import get_server_info
from nothanks.tokens import MAX_PLAYERS, MIN_PLAYERS
from nothanks.ui.colors import Colors

if TYPE_CHECKING:
    from nothanks.ssh_session import TableSession

HELP_TEXT = f"""{Colors.BOLD}{Colors.CYAN}📖 Commands:{Colors.RESET}
  {Colors.GREEN}seat{Colors.RESET}                      take a seat at the table
  {Colors.GREEN}leave{Colors.RESET}                     give up your seat
  {Colors.GREEN}players{Colors.RESET}                   list seated players
  {Colors.GREEN}start [shuffle] [first X]{Colors.RESET} start a new game; X is a name or seat number
  {Colors.GREEN}reveal{Colors.RESET}                    turn over the next card
  {Colors.GREEN}take{Colors.RESET}                      take the card and its tokens
  {Colors.GREEN}pass{Colors.RESET}                      no thanks! put a token on the card
  {Colors.GREEN}look{Colors.RESET}                      show the table
  {Colors.GREEN}cards{Colors.RESET}                     toggle big card display for your hand
  {Colors.GREEN}scores{Colors.RESET}                    reveal the final scores
  {Colors.GREEN}leaderboard{Colors.RESET}               best players on this server
  {Colors.GREEN}whoami{Colors.RESET} / {Colors.GREEN}server{Colors.RESET}           about you / this server
  {Colors.GREEN}quit{Colors.RESET}                      disconnect"""


def parse_start_args(args: List[str]) -> Tuple[bool, Optional[str]]:
    """Parse `start [shuffle] [first X]` arguments into (shuffle, first)."""
    shuffle = False
    first = None
    i = 0
    while i < len(args):
        arg = args[i].lower()
        if arg == "shuffle":
            shuffle = True
        elif arg == "first":
            if i + 1 >= len(args):
                raise ValueError("'first' needs a player name or seat number")
            first = args[i + 1]
            i += 1
        else:
            raise ValueError(f"Unknown start option '{args[i]}'")
        i += 1
    return shuffle, first


def resolve_first_player(choice: Optional[str], names: List[str]) -> Optional[int]:
    """Map a name or a 1-based seat number onto an index into `names`."""
    if choice is None:
        return None
    if choice in names:
        return names.index(choice)
    if choice.isdigit():
        index = int(choice) - 1
        if 0 <= index < len(names):
            return index
    raise InvalidStartingPlayerError(choice, len(names))


class CommandProcessor:
    """Handles command processing for SSH sessions."""

    def __init__(self, session: 'TableSession'):
        self.session = session
        self.state = session._server_state

    async def process_command(self, cmd: str):
        """Process user commands."""
        logging.debug(f"User {self.session.username} executed command: '{cmd}'")

        if not cmd:
            await self.session.send("", prompt=True)
            return

        parts = cmd.split()
        name, args = parts[0].lower(), parts[1:]

        if name in ("quit", "exit"):
            await self.session.send("Goodbye!", prompt=False)
            await self.session._stop()
            return

        handlers = {
            'help': self.show_help,
            'whoami': self.show_whoami,
            'server': self.show_server_info,
            'seat': self.handle_seat,
            'leave': self.handle_leave,
            'players': self.show_players,
            'start': self.handle_start,
            'reveal': self.handle_reveal,
            'take': self.handle_take,
            'pass': self.handle_no_thanks,
            'no': self.handle_no_thanks,
            'nothanks': self.handle_no_thanks,
            'look': self.show_table,
            'cards': self.toggle_cards,
            'scores': self.handle_scores,
            'leaderboard': self.show_leaderboard,
        }
        handler = handlers.get(name)
        if handler is None:
            await self.session.send(f"❓ Unknown command '{name}'. Type '{Colors.GREEN}help{Colors.RESET}' for commands.")
            return

        try:
            await handler(args)
        except GameError as e:
            logging.info(f"{self.session.username}: {name} rejected: {e}")
            await self.session.send(f"❌ {Colors.RED}{e}{Colors.RESET}")
        except ValueError as e:
            await self.session.send(f"❌ {Colors.RED}{e}{Colors.RESET}")

    async def show_help(self, args):
        await self.session.send(HELP_TEXT)

    async def show_whoami(self, args):
        username = self.session.username or "(anonymous)"
        seated = self.session.username in self.state.lobby
        await self.session.send(f"🎭 You are {Colors.CYAN}{username}{Colors.RESET}"
                                f"{' (seated)' if seated else ''}")

    async def show_server_info(self, args):
        info = get_server_info()
        await self.session.send(
            f"🖥️ {info['server_name']} ({info['server_env']})\n"
            f"📦 Version {info['version']}\n"
            f"📍 ssh <username>@{info['ssh_connection_string']}"
        )

    async def _require_username(self) -> Optional[str]:
        if not self.session.username:
            await self.session.send(f"❌ {Colors.RED}No SSH username available, reconnect with ssh <username>@host{Colors.RESET}")
            return None
        return self.session.username

    async def handle_seat(self, args):
        name = await self._require_username()
        if name is None:
            return
        if name in self.state.lobby:
            await self.session.send(f"✅ {Colors.GREEN}You are already seated as {Colors.BOLD}{name}{Colors.RESET}")
            return
        if len(self.state.lobby) >= MAX_PLAYERS:
            await self.session.send(f"❌ {Colors.RED}The table is full ({MAX_PLAYERS} players){Colors.RESET}")
            return
        self.state.seat(name)
        await self.session.send(
            f"✅ {Colors.GREEN}Seat claimed for {Colors.BOLD}{name}{Colors.RESET}\n"
            f"{self.session._ui.render_lobby(self.state.lobby, MIN_PLAYERS, MAX_PLAYERS)}"
        )

    async def handle_leave(self, args):
        name = self.session.username
        if name not in self.state.lobby:
            await self.session.send("You are not seated.")
            return
        self.state.leave(name)
        await self.session.send("👋 You left your seat.")

    async def show_players(self, args):
        await self.session.send(self.session._ui.render_lobby(self.state.lobby, MIN_PLAYERS, MAX_PLAYERS))

    async def handle_start(self, args):
        name = self.session.username
        if name not in self.state.lobby:
            await self.session.send(f"❌ {Colors.RED}Take a seat first with '{Colors.GREEN}seat{Colors.RED}'{Colors.RESET}")
            return

        shuffle, first = parse_start_args(args)
        names = list(self.state.lobby)
        if shuffle:
            random.shuffle(names)
        first_player = resolve_first_player(first, names)

        self.state.table.new_game(names, first_player=first_player)
        logging.info(f"{name} started a game for {', '.join(names)}")

    def _current_game(self):
        return self.state.table.current_state()

    async def _require_in_game(self):
        state = self._current_game()
        if state is None:
            await self.session.send(f"❌ {Colors.RED}No game in progress, type '{Colors.GREEN}start{Colors.RED}' to begin{Colors.RESET}")
            return None
        if state.player_index(self.session.username) is None:
            await self.session.send(f"❌ {Colors.RED}You are not playing in the current game{Colors.RESET}")
            return None
        return state

    async def _require_turn(self):
        state = await self._require_in_game()
        if state is None:
            return None
        if state.current_card is not None and state.active.name != self.session.username:
            await self.session.send(f"⏳ It's {Colors.CYAN}{state.active.name}{Colors.RESET}'s turn.")
            return None
        return state

    async def handle_reveal(self, args):
        if await self._require_in_game() is None:
            return
        self.state.table.reveal_top_card()

    async def handle_take(self, args):
        if await self._require_turn() is None:
            return
        self.state.table.take_card(self.session.username)

    async def handle_no_thanks(self, args):
        if await self._require_turn() is None:
            return
        self.state.table.no_thanks(self.session.username)

    async def handle_scores(self, args):
        if await self._require_in_game() is None:
            return
        self.state.table.reveal_scores()

    async def show_table(self, args):
        state = self._current_game()
        if state is None:
            await self.session.send(self.session._ui.render_lobby(self.state.lobby, MIN_PLAYERS, MAX_PLAYERS))
            return
        await self.session.send(self.session.render_state(state))

    async def toggle_cards(self, args):
        self.session.show_cards = not self.session.show_cards
        await self.session.send(f"🎴 Big card display {'on' if self.session.show_cards else 'off'}")

    async def show_leaderboard(self, args):
        db = self.state.db
        if db is None:
            await self.session.send("Leaderboard not available (no database).")
            return
        rows = db.get_leaderboard()
        if not rows:
            await self.session.send("No finished games yet.")
            return
        lines = [f"{Colors.BOLD}{Colors.YELLOW}🏆 Leaderboard:{Colors.RESET}"]
        for i, row in enumerate(rows, start=1):
            lines.append(
                f"  {i}. {row['player_name']}: {row['wins']} wins in {row['games_played']} games, "
                f"avg score {row['average_score']:.1f}, best {row['best_score']}"
            )
        await self.session.send("\n".join(lines))
