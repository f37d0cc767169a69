"""
generator.py — Array Generator
===============================
Builds the input dataset for a run.

    generate_array(20)                 # 20 random bars, values in [10, 310)
    generate_array(20, seed=7)         # reproducible
    elements_from_values([5, 3, 8, 1]) # caller-supplied values

Generation is the only random part of the pipeline; step generation
over a given array is fully deterministic.
"""

import random
from typing import Iterable, List, Optional

from arrays.element import ArrayElement


DEFAULT_VALUE_RANGE = (10, 310)


def generate_array(
    n: int,
    low: int = DEFAULT_VALUE_RANGE[0],
    high: int = DEFAULT_VALUE_RANGE[1],
    seed: Optional[int] = None,
) -> List[ArrayElement]:
    """
    Return `n` elements with integer values drawn uniformly from [low, high).

    Args:
        n    : Number of elements, any int >= 1.
        low  : Inclusive lower bound, must be > 0.
        high : Exclusive upper bound, must be > low.
        seed : Optional seed. Without one every call gives a new array.
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"Array size must be an int, got {n!r}")
    if n < 1:
        raise ValueError(f"Array size must be >= 1, got {n}")
    if low <= 0 or high <= low:
        raise ValueError(f"Invalid value range [{low}, {high})")

    rng = random.Random(seed)
    return [ArrayElement(value=rng.randrange(low, high), index=i) for i in range(n)]


def elements_from_values(values: Iterable[float]) -> List[ArrayElement]:
    """Wrap plain numbers as elements (index = position). Bad values raise."""
    if isinstance(values, (str, bytes)) or not hasattr(values, "__iter__"):
        raise TypeError(f"Expected a list of numbers, got {type(values).__name__}")
    return [ArrayElement(value=v, index=i) for i, v in enumerate(values)]
