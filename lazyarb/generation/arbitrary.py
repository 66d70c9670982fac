"""
Arbitrary Value Generator
=========================

Type-directed random values for synthesizing test inputs. A value is
generated from a type annotation and a size parameter; the size scales
lengths of strings and containers via ``small_n``.

    >>> gen = ArbitraryGenerator(seed=7)
    >>> gen.generate(dict[str, list[int]], size=4)   # doctest: +SKIP
    {'q0Xb': [...], ...}

Supported annotations
---------------------
  bool, int, float, str, bytes, None, SmallN
  list[T], set[T], frozenset[T], dict[K, V]
  tuple[A, B, ...], tuple[T, ...]
  Union[...], Optional[T], A | B, Literal[...]
  Enum subclasses and dataclasses
  any class defining ``__arbitrary__(cls, size, generator)``
  any type registered with ``register(tp, factory)``

Randomness comes from an explicit numpy Generator, so a seed fully
determines the generated values.
"""

import dataclasses
import enum
import logging
import string
import types
from typing import (
    Any, Callable, Dict, Iterator, Literal, Optional, Union,
    get_args, get_origin, get_type_hints,
)

import numpy as np

from lazyarb.generation.sizing import DEFAULT_SIZE_POLICY, SizePolicy, SmallN, check_size, small_n

logger = logging.getLogger(__name__)

Factory = Callable[[int, 'ArbitraryGenerator'], Any]

_FACTORIES: Dict[Any, Factory] = {}


def register(tp: Any, factory: Optional[Factory] = None):
    """
    Register ``factory(size, generator)`` as the way to generate ``tp``.

    Usage:
        @register(Point)
        def _point(size, gen):
            return Point(gen.generate(int, size), gen.generate(int, size))
    """
    if factory is None:
        return lambda f: register(tp, f)
    _FACTORIES[tp] = factory
    logger.debug(f"Registered arbitrary factory for {tp!r}")
    return factory


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the random source used by ArbitraryGenerator."""
    return np.random.default_rng(seed)


class ArbitraryGenerator:
    """
    Generates random values of a requested type.

    Usage:
        >>> gen = ArbitraryGenerator(seed=0)
        >>> isinstance(gen.generate(list[int], size=10), list)
        True
    """

    INT_DTYPE = np.int64
    STRING_ALPHABET = string.ascii_letters + string.digits

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        *,
        seed: Optional[int] = None,
        size_policy: SizePolicy = DEFAULT_SIZE_POLICY,
        enable_logging: bool = False,
    ):
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")
        self.rng = rng if rng is not None else make_rng(seed)
        self.size_policy = size_policy
        self._factories: Dict[Any, Factory] = {}

        if enable_logging:
            logging.basicConfig(level=logging.DEBUG)

    def register(self, tp: Any, factory: Optional[Factory] = None):
        """Like the module-level ``register``, but only for this generator."""
        if factory is None:
            return lambda f: self.register(tp, f)
        self._factories[tp] = factory
        return factory

    # ---- Primitives used by factories ----

    def count(self, size: int) -> int:
        """A small count >= 0 bounded by this generator's size policy."""
        return small_n(size, self.rng, self.size_policy)

    def coin(self) -> bool:
        return bool(self.rng.random() < 0.5)

    def choice(self, options):
        if not options:
            raise ValueError("Cannot choose from an empty collection")
        return options[int(self.rng.integers(len(options)))]

    # ---- Generation ----

    def generate(self, tp: Any, size: int) -> Any:
        """Generate a value of type ``tp`` scaled by ``size``."""
        check_size(size)
        logger.debug("Generating %r at size %d", tp, size)
        return self._generate(tp, size)

    def iter_arbitrary(self, tp: Any, size: int) -> Iterator[Any]:
        """Endless stream of generated values."""
        check_size(size)
        return self._iter_generated(tp, size)

    def _iter_generated(self, tp, size):
        while True:
            yield self._generate(tp, size)

    def _generate(self, tp: Any, size: int) -> Any:
        if tp is None or tp is type(None):
            return None

        factory = self._lookup_factory(tp)
        if factory is not None:
            return factory(size, self)

        origin = get_origin(tp)
        if origin is not None:
            return self._generate_generic(tp, origin, get_args(tp), size)

        if isinstance(tp, type):
            hook = getattr(tp, '__arbitrary__', None)
            if hook is not None:
                return hook(size, self)
            if issubclass(tp, enum.Enum):
                return self.choice(list(tp))
            if dataclasses.is_dataclass(tp):
                return self._generate_dataclass(tp, size)

        raise TypeError(f"Cannot generate an arbitrary value of type {tp!r}")

    def _lookup_factory(self, tp: Any) -> Optional[Factory]:
        try:
            factory = self._factories.get(tp)
            if factory is None:
                factory = _FACTORIES.get(tp)
        except TypeError:
            # unhashable annotation
            return None
        return factory

    def _generate_generic(self, tp, origin, args, size):
        if origin is Union or origin is types.UnionType:
            return self._generate(self.choice(args), size)
        if origin is Literal:
            return self.choice(args)
        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                return tuple(self._generate(args[0], size) for _ in range(self.count(size)))
            return tuple(self._generate(arg, size) for arg in args)
        if not args:
            raise TypeError(f"Cannot generate {tp!r} without type arguments")
        if origin is list:
            return [self._generate(args[0], size) for _ in range(self.count(size))]
        if origin is set or origin is frozenset:
            return origin(self._generate(args[0], size) for _ in range(self.count(size)))
        if origin is dict:
            key_tp, value_tp = args
            return {
                self._generate(key_tp, size): self._generate(value_tp, size)
                for _ in range(self.count(size))
            }
        raise TypeError(f"Cannot generate an arbitrary value of type {tp!r}")

    def _generate_dataclass(self, tp, size):
        hints = get_type_hints(tp)
        kwargs = {
            f.name: self._generate(hints[f.name], size)
            for f in dataclasses.fields(tp)
            if f.init
        }
        return tp(**kwargs)


def arbitrary(tp: Any, size: int, rng: Optional[np.random.Generator] = None) -> Any:
    """Generate one value of type ``tp``; see ArbitraryGenerator."""
    return ArbitraryGenerator(rng).generate(tp, size)


# ---- Built-in factories ----

@register(bool)
def _arbitrary_bool(size, gen):
    return gen.coin()


@register(int)
def _arbitrary_int(size, gen):
    info = np.iinfo(gen.INT_DTYPE)
    return int(gen.rng.integers(info.min, info.max, endpoint=True, dtype=gen.INT_DTYPE))


@register(float)
def _arbitrary_float(size, gen):
    return float(gen.rng.random())


@register(str)
def _arbitrary_str(size, gen):
    alphabet = gen.STRING_ALPHABET
    indices = gen.rng.integers(len(alphabet), size=gen.count(size))
    return ''.join(alphabet[i] for i in indices)


@register(bytes)
def _arbitrary_bytes(size, gen):
    return gen.rng.bytes(gen.count(size))


@register(SmallN)
def _arbitrary_small_n(size, gen):
    return SmallN(gen.count(size))
