"""
lazyarb: Lazy Sequences and Arbitrary Test Inputs
=================================================

Two independent utilities:

    - sequence: a pull-driven lazy sequence. Values are computed only when
      pulled, deferred steps run at most once, and arbitrarily long chains
      of deferred steps run in constant stack depth.
    - generation: random values of a requested type, scaled by a size
      parameter, drawn from an explicit numpy random source.

Usage:
    >>> import lazyarb
    >>> seq = lazyarb.LazySequence.create(
    ...     lambda s: s.push_map(range(3), lambda x: x * 2))
    >>> list(seq)
    [0, 2, 4]

    >>> gen = lazyarb.ArbitraryGenerator(seed=42)
    >>> values = gen.generate(list[int], size=8)
"""

__version__ = "0.1.0"

from lazyarb.sequence import DeferredComputation, LazySequence, SequenceStats, Thunk
from lazyarb.generation import (
    DEFAULT_SIZE_POLICY,
    ArbitraryGenerator,
    SizePolicy,
    SmallN,
    arbitrary,
    arbitrary_sequence,
    make_rng,
    register,
    small_n,
)

__all__ = [
    'DeferredComputation',
    'LazySequence',
    'SequenceStats',
    'Thunk',
    'DEFAULT_SIZE_POLICY',
    'ArbitraryGenerator',
    'SizePolicy',
    'SmallN',
    'arbitrary',
    'arbitrary_sequence',
    'make_rng',
    'register',
    'small_n',
]
