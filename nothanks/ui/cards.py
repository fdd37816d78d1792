"""
Card rendering utilities for No-Thanks-over-SSH terminal UI.
Handles ASCII art for the revealed card, the deck and the token pool.
"""

from typing import Iterable, List

from .colors import Colors

TOKEN_REPR = "🌑"
CARD_HEIGHT = 5


def card_lines(value: int) -> List[str]:
    """Format a single face-up card as ASCII art lines."""
    left = f"{value:<2}"
    right = f"{value:>2}"
    style = f"{Colors.BOLD}{Colors.BG_WHITE}{Colors.BLUE}"

    return [
        f"{style}╭────╮{Colors.RESET}",
        f"{style}│{left}  │{Colors.RESET}",
        f"{style}│    │{Colors.RESET}",
        f"{style}│  {right}│{Colors.RESET}",
        f"{style}╰────╯{Colors.RESET}",
    ]


def deck_lines(size: int) -> List[str]:
    """Face-down deck with the number of cards left underneath."""
    if size <= 0:
        return [" " * 6] * (CARD_HEIGHT - 1) + [f"{Colors.DIM}empty {Colors.RESET}"]
    style = f"{Colors.BOLD}{Colors.BG_BLUE}{Colors.RED}"
    return [
        f"{style}╭────╮{Colors.RESET}",
        f"{style}│ NO │{Colors.RESET}",
        f"{style}│THX!│{Colors.RESET}",
        f"{style}╰────╯{Colors.RESET}",
        f"{Colors.DIM}{size:>2} left{Colors.RESET}",
    ]


def empty_slot_lines() -> List[str]:
    style = Colors.GREY
    return [
        f"{style}┌╌╌╌╌┐{Colors.RESET}",
        f"{style}╎    ╎{Colors.RESET}",
        f"{style}╎    ╎{Colors.RESET}",
        f"{style}╎    ╎{Colors.RESET}",
        f"{style}└╌╌╌╌┘{Colors.RESET}",
    ]


def cards_horizontal(cards: Iterable[int]) -> str:
    """Render multiple cards side-by-side horizontally."""
    return blocks_horizontal([card_lines(card) for card in cards])


def blocks_horizontal(blocks: List[List[str]]) -> str:
    if not blocks:
        return ""
    height = max(len(block) for block in blocks)
    rows = []
    for line_idx in range(height):
        rows.append("  ".join(block[line_idx] if line_idx < len(block) else "" for block in blocks))
    return "\n".join(rows)


def token_str(count: int) -> str:
    if count <= 0:
        return f"{Colors.DIM}no tokens{Colors.RESET}"
    return TOKEN_REPR * count
