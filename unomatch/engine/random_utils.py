"""Injected sources of randomness: shufflers and randomizers."""

import random
from typing import Callable, List, Optional, Tuple

from unomatch.engine.card import Card

# Permutes the given list in place.
Shuffler = Callable[[List[Card]], None]
# Given n, returns an integer in [0, n).
Randomizer = Callable[[int], int]


def standard_shuffler(cards: List[Card]) -> None:
    random.shuffle(cards)


def standard_randomizer(n: int) -> int:
    return random.randrange(n)


def identity_shuffler(cards: List[Card]) -> None:
    """Leave the order untouched (deterministic deals)."""


def seeded(seed: Optional[int] = None) -> Tuple[Shuffler, Randomizer]:
    """Return a shuffler and a randomizer sharing one seeded generator."""
    rng = random.Random(seed)
    return rng.shuffle, rng.randrange
