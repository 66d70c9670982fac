"""
Deferred Computations
=====================

A deferred computation is a single-shot unit of work queued on a
LazySequence. When the sequence forces it, the computation may push
ready values onto the sequence and/or enqueue further deferred
computations. It never runs twice.

Design
------
DeferredComputation is the abstract capability ("force me once, given a
sequence"). Thunk is the concrete variant used by push_thunk: it pairs a
captured environment with a function ``f(environment, sequence)`` and
releases both as soon as it is forced, so the environment is owned by
exactly one call.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Generic, Optional, TypeVar

if TYPE_CHECKING:
    from lazyarb.sequence.lazy_sequence import LazySequence

T = TypeVar('T')
E = TypeVar('E')


class DeferredComputation(ABC, Generic[T]):
    """A unit of deferred work that extends a LazySequence when forced."""

    @abstractmethod
    def force(self, sequence: 'LazySequence[T]') -> None:
        """Run the computation against ``sequence``. Consumes self."""


class Thunk(DeferredComputation[T], Generic[E, T]):
    """
    Captured environment plus a function of (environment, sequence).

    Usage:
        >>> from lazyarb.sequence import LazySequence
        >>> seq = LazySequence()
        >>> t = Thunk([4, 5], lambda env, s: s.push(env[0]))
        >>> t.force(seq)
        >>> seq.pull()
        4
        >>> t.consumed
        True
    """

    __slots__ = ('_environment', '_function')

    def __init__(self, environment: E, function: Callable[[E, 'LazySequence[T]'], Any]):
        if not callable(function):
            raise TypeError(f"Expected callable, got {type(function).__name__}")
        self._environment: Optional[E] = environment
        self._function: Optional[Callable] = function

    @property
    def consumed(self) -> bool:
        return self._function is None

    def force(self, sequence: 'LazySequence[T]') -> None:
        if self._function is None:
            raise RuntimeError("Thunk has already been forced")
        # Hand the environment over to the call and drop our references
        # before invoking, so the thunk is spent even if the call raises.
        function, environment = self._function, self._environment
        self._function = None
        self._environment = None
        function(environment, sequence)

    def __repr__(self):
        if self.consumed:
            return 'Thunk(<consumed>)'
        name = getattr(self._function, '__qualname__', repr(self._function))
        return f'Thunk({name})'
