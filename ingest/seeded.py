"""Deterministic pseudo-random floats driven by an explicit integer seed.

There is no generator state: the caller advances the seed (seed, seed + 1,
seed + i + 1000, ...) so the same ticker always yields the same stream.
Reproducibility matters here, statistical quality does not.
"""
import math
from itertools import count
from typing import Iterator


def seeded_random(seed: int) -> float:
    """Fractional part of sin(seed) * 10000, in [0, 1)."""
    x = math.sin(seed) * 10000
    return x - math.floor(x)


def ticker_seed(ticker: str) -> int:
    """Sum of the character codes of the ticker."""
    return sum(ord(ch) for ch in ticker)


def seeded_stream(seed: int, offset: int = 0) -> Iterator[float]:
    """Restartable infinite stream: seeded_random(seed + offset + k) for k = 0, 1, ..."""
    for k in count():
        yield seeded_random(seed + offset + k)
