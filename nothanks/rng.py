"""Random helpers shared by the deck and the game engine."""

import random
from typing import Optional


def rand_int(max_value: int, min_value: int = 0, rng: Optional[random.Random] = None) -> int:
    """Uniform integer in the inclusive range [min_value, max_value]."""
    if max_value < min_value:
        raise ValueError(f"Empty range [{min_value}, {max_value}]")
    source = rng if rng is not None else random
    return source.randint(min_value, max_value)
