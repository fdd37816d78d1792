"""
Hand bookkeeping and scoring for No-Thanks-over-SSH.

Hands are kept as ascending lists. A run of consecutive cards only counts its
lowest card, so grouping runs is used both to score a hand and to print it
compactly ("5-7 10").
"""

import bisect
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, List, Sequence, Tuple


def add_card_to_hand(hand: List[int], card: int) -> List[int]:
    """Insert a card keeping the hand sorted. A card can only be owned once."""
    index = bisect.bisect_left(hand, card)
    if index < len(hand) and hand[index] == card:
        raise ValueError(f"Card {card} is already in the hand")
    hand.insert(index, card)
    return hand


class ConsecutiveRuns:
    """Lazy, restartable view of the runs of consecutive values in a sorted sequence."""

    def __init__(self, sorted_values: Iterable[int]):
        self._values = tuple(sorted_values)

    def __iter__(self) -> Iterator[Tuple[int, ...]]:
        run: List[int] = []
        for value in self._values:
            if run and value <= run[-1]:
                raise ValueError(f"Values must be strictly ascending, got {value} after {run[-1]}")
            if run and value != run[-1] + 1:
                yield tuple(run)
                run = []
            run.append(value)
        if run:
            yield tuple(run)

    def __repr__(self):
        return f"ConsecutiveRuns({list(self)!r})"


def group_consecutive_runs(sorted_values: Iterable[int]) -> ConsecutiveRuns:
    return ConsecutiveRuns(sorted_values)


def compute_score(hand: Iterable[int], tokens: int) -> int:
    """Sum of the lowest card of every run, minus tokens held. Lower is better."""
    return sum(run[0] for run in group_consecutive_runs(sorted(hand))) - tokens


def describe_runs(hand: Iterable[int]) -> str:
    """Compact text form of a hand, e.g. '5-7 10'."""
    parts = []
    for run in group_consecutive_runs(sorted(hand)):
        if len(run) == 1:
            parts.append(str(run[0]))
        else:
            parts.append(f"{run[0]}-{run[-1]}")
    return " ".join(parts)


@dataclass
class Standing:
    name: str
    seat: int
    score: int
    tokens: int
    hand: List[int] = field(default_factory=list)
    rank: int = 0

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'seat': self.seat,
            'score': self.score,
            'tokens': self.tokens,
            'hand': list(self.hand),
            'rank': self.rank,
        }


def rank_standings(players: Sequence[Any]) -> List[Standing]:
    """Order players by ascending score; equal scores share a rank (1, 1, 3...)."""
    standings = [
        Standing(p.name, seat, compute_score(p.hand, p.tokens), p.tokens, sorted(p.hand))
        for seat, p in enumerate(players)
    ]
    standings.sort(key=lambda s: s.score)

    previous_score = None
    for position, standing in enumerate(standings, start=1):
        if standing.score != previous_score:
            rank = position
            previous_score = standing.score
        standing.rank = rank
    return standings
