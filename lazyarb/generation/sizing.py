"""
Size scaling for generated structures.

Variable-length values (strings, lists, sets, dicts) take their length
from ``small_n``: an Exp(1) sample scaled by the size parameter and capped
at ``cap_factor * size``. The default cap factor is 16.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class SizePolicy:
    """Upper bound policy for small counts: ``n <= cap_factor * size``."""
    cap_factor: int = 16

    def __post_init__(self):
        if self.cap_factor < 0:
            raise ValueError(f"cap_factor must be >= 0, got {self.cap_factor}")

    def cap(self, size: int) -> int:
        return self.cap_factor * size


DEFAULT_SIZE_POLICY = SizePolicy()


class SmallN(int):
    """A small number >= 0, drawn with ``small_n``."""

    def __repr__(self):
        return f'SmallN({int(self)})'


def check_size(size: int) -> int:
    if size < 0:
        raise ValueError(f"size must be >= 0, got {size}")
    return size


def small_n(size: int, rng: np.random.Generator, policy: SizePolicy = DEFAULT_SIZE_POLICY) -> int:
    """Draw a count >= 0 scaled by ``size``; 0 when ``size`` is 0."""
    check_size(size)
    n = int(rng.exponential() * size)
    return min(n, policy.cap(size))
