"""Uniform random choice among filtered candidates."""
import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSelector:
    """Picks one item uniformly at random. No quality weighting."""

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        self.rng = rng or random.Random(seed)

    def pick(self, candidates: Sequence[T]) -> T:
        if not candidates:
            raise ValueError("cannot pick from an empty candidate set")
        return self.rng.choice(candidates)
