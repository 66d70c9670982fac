"""
Lazy, self-extending sequences.

    LazySequence        ready buffer + pending queue, pulled on demand
    DeferredComputation single-shot unit of work queued on a sequence
    Thunk               environment + function, the default computation
"""

from lazyarb.sequence.deferred import DeferredComputation, Thunk
from lazyarb.sequence.lazy_sequence import LazySequence, SequenceStats

__all__ = [
    'DeferredComputation',
    'Thunk',
    'LazySequence',
    'SequenceStats',
]
