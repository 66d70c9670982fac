"""Lazy streams of generated values."""

import functools
import itertools
from typing import Any, Optional

from lazyarb.generation.arbitrary import ArbitraryGenerator
from lazyarb.generation.sizing import check_size
from lazyarb.sequence.lazy_sequence import LazySequence


def arbitrary_sequence(
    tp: Any,
    size: int,
    generator: Optional[ArbitraryGenerator] = None,
    *,
    count: Optional[int] = None,
    infinite: bool = False,
) -> LazySequence:
    """
    A LazySequence of generated values of type ``tp``.

    Each value is generated when it is pulled. The length is ``count`` if
    given, unbounded if ``infinite``, otherwise ``small_n(size)``.

    Usage:
        >>> seq = arbitrary_sequence(int, 5, ArbitraryGenerator(seed=1), count=3)
        >>> len(list(seq))
        3
    """
    check_size(size)
    if generator is None:
        generator = ArbitraryGenerator()

    if infinite:
        if count is not None:
            raise ValueError("count and infinite are mutually exclusive")
        source = itertools.repeat(tp)
    else:
        if count is None:
            count = generator.count(size)
        elif count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        source = itertools.repeat(tp, count)

    seq = LazySequence()
    seq.push_map(source, functools.partial(_generate_sized, generator, size))
    return seq


def _generate_sized(generator, size, tp):
    return generator.generate(tp, size)
