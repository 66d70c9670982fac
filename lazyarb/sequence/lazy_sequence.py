"""
Lazy Sequence
=============

A self-extending sequence that defers computation of its elements until
they are pulled.

A LazySequence holds two FIFO queues:

    ready    values already computed, waiting to be delivered
    pending  deferred computations not yet run

Pulling drains ``ready`` head-first. When ``ready`` is empty the sequence
forces the head of ``pending``, which may push values and/or enqueue more
work, and re-checks. The pull loop is a trampoline: a logically recursive
chain (such as push_map re-scheduling itself) runs by queue re-entry, so
forcing N steps needs O(1) stack depth.

    >>> seq = LazySequence.create(lambda s: s.push_map(range(3), lambda x: x * 2))
    >>> list(seq)
    [0, 2, 4]

A LazySequence is meant for a single consumer. Pulling from several
threads at once is not supported; guard it with a lock if it must be
shared. To cancel, stop pulling; unforced work is dropped together with
the sequence.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Iterable, Iterator, Optional, TypeVar

from lazyarb.sequence.deferred import DeferredComputation, Thunk

T = TypeVar('T')
A = TypeVar('A')
E = TypeVar('E')

logger = logging.getLogger(__name__)

_EXHAUSTED = object()


@dataclass
class SequenceStats:
    """Counters for a single LazySequence."""
    forced: int = 0
    delivered: int = 0
    failed: int = 0


class LazySequence(Iterator[T]):
    """
    Pull-driven lazy sequence with a ready buffer and a pending queue.

    Usage:
        >>> def setup(seq):
        ...     seq.push(3)
        ...     seq.push_thunk([4, 5], lambda v, s: s.extend(v))
        >>> seq = LazySequence.create(setup)
        >>> seq.pull(), seq.pull(), seq.pull(), seq.pull()
        (3, 4, 5, None)
    """

    def __init__(self):
        self._ready: Deque[T] = deque()
        self._pending: Deque[DeferredComputation[T]] = deque()
        self.stats = SequenceStats()

    @classmethod
    def create(cls, setup: Callable[['LazySequence[T]'], Any]) -> 'LazySequence[T]':
        """Build an empty sequence and let ``setup`` seed it."""
        seq = cls()
        setup(seq)
        return seq

    @classmethod
    def from_iterable(cls, iterable: Iterable[T]) -> 'LazySequence[T]':
        """Lazily mirror ``iterable``, one element per forcing step."""
        seq = cls()
        seq.push_map(iterable, _identity)
        return seq

    # ---- Producers ----

    def push(self, value: T) -> None:
        """Append a ready value. Never forces anything."""
        self._ready.append(value)

    def extend(self, values: Iterable[T]) -> None:
        """Push every value of a finite iterable, eagerly."""
        self._ready.extend(values)

    def push_deferred(self, computation: DeferredComputation[T]) -> None:
        """Enqueue an already-built deferred computation."""
        self._pending.append(computation)

    def push_thunk(self, environment: E, function: Callable[[E, 'LazySequence[T]'], Any]) -> None:
        """
        Defer ``function(environment, self)`` until the pull loop reaches it.

        The function may push values and enqueue further thunks; anything it
        enqueues runs after the work already pending.
        """
        self._pending.append(Thunk(environment, function))

    def push_map(self, source: Iterable[A], function: Callable[[A], T]) -> None:
        """
        Lazily append ``function(a)`` for each ``a`` in ``source``.

        The source is iterated at most once, one element per forcing step,
        and may be infinite.
        """
        self.push_thunk((function, iter(source)), _map_step)

    # ---- Consumer ----

    def pull(self, default: Optional[T] = None) -> Optional[T]:
        """
        Return the next element, forcing pending work as needed.

        Returns ``default`` once both queues are empty. A chain that keeps
        enqueueing work without producing values makes this loop forever.
        """
        value = self._next_or(_EXHAUSTED)
        if value is _EXHAUSTED:
            return default
        return value

    def _next_or(self, missing):
        ready = self._ready
        pending = self._pending
        forced_here = False
        while not ready and pending:
            computation = pending.popleft()
            ready_mark = len(ready)
            pending_mark = len(pending)
            try:
                computation.force(self)
            except Exception as e:
                # Forcing only appends, so trimming the tails discards
                # everything the failed computation produced.
                while len(ready) > ready_mark:
                    ready.pop()
                while len(pending) > pending_mark:
                    pending.pop()
                self.stats.failed += 1
                logger.debug(f"Deferred computation failed: {e!r}")
                raise
            self.stats.forced += 1
            forced_here = True
        if ready:
            self.stats.delivered += 1
            return ready.popleft()
        if forced_here:
            logger.debug(f"Sequence exhausted after {self.stats.delivered} values")
        return missing

    def __iter__(self) -> 'LazySequence[T]':
        return self

    def __next__(self) -> T:
        value = self._next_or(_EXHAUSTED)
        if value is _EXHAUSTED:
            raise StopIteration
        return value

    # ---- Introspection ----

    @property
    def is_exhausted(self) -> bool:
        return not self._ready and not self._pending

    @property
    def ready_count(self) -> int:
        return len(self._ready)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def __repr__(self):
        return f'LazySequence(ready={len(self._ready)}, pending={len(self._pending)})'


def _identity(x):
    return x


def _map_step(environment, seq: LazySequence) -> None:
    """One push_map step: map a single source element, then re-schedule."""
    function, source = environment
    try:
        item = next(source)
    except StopIteration:
        return
    seq.push(function(item))
    seq.push_map(source, function)
