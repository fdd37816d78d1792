"""
Terminal UI renderer for No-Thanks-over-SSH with colours and cards.

This keeps presentation logic out of the engine so SSH sessions can call
`TerminalUI.render(public_state)` to get a colorized string to send to clients.
"""

from typing import Any, Dict, Iterable, List, Optional

from .hand import describe_runs
from .ui.cards import blocks_horizontal, card_lines, deck_lines, empty_slot_lines, token_str
from .ui.colors import Colors


class TerminalUI:
    def __init__(self, player_name: Optional[str] = None):
        self.player_name = player_name

    def render(self, game_state: Dict[str, Any], show_hand_cards: bool = False) -> str:
        """Render a public game state (see GameState.public_state) as a colorized string."""
        out = []

        out.append(Colors.CLEAR_SCREEN)
        out.append(f"{Colors.BOLD}{Colors.RED}🚫 NO THANKS! 🚫{Colors.RESET}")
        out.append("")

        phase = game_state.get('phase', 'setup')
        active = game_state.get('active_player')
        over = phase in ('game_over', 'scores_revealed')

        if over:
            out.append(f"{Colors.BOLD}{Colors.MAGENTA}🏁 GAME OVER{Colors.RESET}")
        elif active == self.player_name:
            out.append(f"{Colors.BOLD}{Colors.GREEN}🎯 YOUR TURN{Colors.RESET}")
        elif active:
            out.append(f"{Colors.BOLD}{Colors.CYAN}👤 {active}'s turn{Colors.RESET}")
        out.append("")

        # Deck, revealed card and pool side by side
        current_card = game_state.get('current_card')
        revealed = card_lines(current_card) if current_card is not None else empty_slot_lines()
        out.append(blocks_horizontal([deck_lines(game_state.get('deck_size', 0)), revealed]))
        pool = game_state.get('pool', 0)
        if current_card is not None:
            out.append(f"{Colors.BOLD}Pool on {current_card}:{Colors.RESET} {token_str(pool)} ({pool})")
        out.append("")

        out.append(f"{Colors.BOLD}{Colors.CYAN}👥 Players:{Colors.RESET}")
        for player in game_state.get('players', []):
            out.append(self._player_line(player, over))
        out.append("")

        if show_hand_cards:
            me = self._find_player(game_state)
            if me and me['hand']:
                out.append(f"{Colors.BOLD}{Colors.YELLOW}🎴 Your Cards:{Colors.RESET}")
                out.append(blocks_horizontal([card_lines(c) for c in me['hand']]))
                out.append("")

        standings = game_state.get('standings')
        if standings:
            out.append(self.render_scoreboard(standings))
            out.append("")

        history = game_state.get('action_history')
        if history:
            out.append(f"{Colors.BOLD}{Colors.CYAN}📜 Recent Actions:{Colors.RESET}")
            for action in history[-5:]:
                out.append(f"{Colors.DIM}  {action}{Colors.RESET}")
            out.append("")

        out.append(self._instructions(phase, active))
        return "\n".join(out)

    def _find_player(self, game_state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for player in game_state.get('players', []):
            if player['name'] == self.player_name:
                return player
        return None

    def _player_line(self, player: Dict[str, Any], over: bool) -> str:
        marker = f"{Colors.GREEN}➡️{Colors.RESET} " if player.get('active') and not over else "   "
        name = player['name']
        if name == self.player_name:
            name = f"{Colors.BOLD}{name} (you){Colors.RESET}"

        tokens = player.get('tokens')
        token_info = f"{tokens} 🌑" if tokens is not None else f"{Colors.DIM}? 🌑{Colors.RESET}"

        hand = describe_runs(player.get('hand', []))
        hand_info = hand if hand else f"{Colors.DIM}no cards{Colors.RESET}"
        return f"{marker}{name}  [{token_info}]  {hand_info}"

    def _instructions(self, phase: str, active: Optional[str]) -> str:
        if phase == 'card_revealed':
            if active == self.player_name:
                return (f"{Colors.BOLD}Available actions: {Colors.GREEN}take{Colors.RESET}, "
                        f"{Colors.GREEN}pass{Colors.RESET} (no thanks!)")
            return f"{Colors.DIM}Waiting for {active}...{Colors.RESET}"
        if phase == 'awaiting_reveal':
            return f"{Colors.BOLD}Type {Colors.GREEN}reveal{Colors.RESET}{Colors.BOLD} to turn over the next card{Colors.RESET}"
        if phase == 'game_over':
            return f"{Colors.BOLD}Type {Colors.GREEN}scores{Colors.RESET}{Colors.BOLD} to reveal the final scores{Colors.RESET}"
        return f"{Colors.BOLD}Type {Colors.GREEN}start{Colors.RESET}{Colors.BOLD} to play again{Colors.RESET}"

    def render_scoreboard(self, standings: Iterable[Dict[str, Any]]) -> str:
        out = [f"{Colors.BOLD}{Colors.YELLOW}🏆 Final Scores (lower is better):{Colors.RESET}"]
        for s in standings:
            medal = "🥇" if s['rank'] == 1 else f"{s['rank']}."
            cards = describe_runs(s['hand']) or "no cards"
            line = f"  {medal} {s['name']}: {s['score']}  ({cards}, {s['tokens']} tokens)"
            if s['name'] == self.player_name:
                line = f"{Colors.BOLD}{line}{Colors.RESET}"
            out.append(line)
        return "\n".join(out)

    def render_lobby(self, names: List[str], min_players: int = 3, max_players: int = 7) -> str:
        out = [f"{Colors.BOLD}{Colors.CYAN}🪑 Seated ({len(names)}/{max_players}):{Colors.RESET}"]
        for name in names:
            you = " (you)" if name == self.player_name else ""
            out.append(f"  👤 {name}{you}")
        if len(names) < min_players:
            out.append(f"{Colors.DIM}Need at least {min_players} players to start{Colors.RESET}")
        return "\n".join(out)
