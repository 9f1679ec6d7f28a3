import random
from collections import Counter

import pytest

from app.utils.selector import RandomSelector


def test_pick_is_roughly_uniform():
    items = ["a", "b", "c", "d"]
    selector = RandomSelector(seed=1234)
    trials = 20000

    counts = Counter(selector.pick(items) for _ in range(trials))

    assert set(counts) == set(items)
    for item in items:
        assert abs(counts[item] / trials - 0.25) < 0.02


def test_same_seed_gives_same_sequence():
    items = list(range(10))
    first = RandomSelector(seed=42)
    second = RandomSelector(seed=42)

    assert [first.pick(items) for _ in range(20)] == [second.pick(items) for _ in range(20)]


def test_injected_generator_is_used():
    rng = random.Random()
    rng.choice = lambda seq: seq[-1]

    assert RandomSelector(rng=rng).pick([1, 2, 3]) == 3


def test_empty_set_is_an_error():
    with pytest.raises(ValueError):
        RandomSelector().pick([])
