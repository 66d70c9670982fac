"""
Type-directed random value generation.

    ArbitraryGenerator  dispatches on a type annotation to build a value
    SizePolicy          caps variable lengths at cap_factor * size
    arbitrary_sequence  lazily generated values as a LazySequence
"""

from lazyarb.generation.sizing import DEFAULT_SIZE_POLICY, SizePolicy, SmallN, small_n
from lazyarb.generation.arbitrary import ArbitraryGenerator, arbitrary, make_rng, register
from lazyarb.generation.streams import arbitrary_sequence

__all__ = [
    'DEFAULT_SIZE_POLICY',
    'SizePolicy',
    'SmallN',
    'small_n',
    'ArbitraryGenerator',
    'arbitrary',
    'make_rng',
    'register',
    'arbitrary_sequence',
]
