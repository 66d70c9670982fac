"""
Lazy Sequence Benchmarks
========================

Throughput of the pull loop and of generated streams.

Usage:
    pytest benchmarks/bench_lazy.py --benchmark-only
"""

import itertools
from typing import Dict, List

import pytest
from lazyarb import ArbitraryGenerator, LazySequence, arbitrary_sequence

N = 50_000


def drain(seq, n=None):
    if n is None:
        return sum(1 for _ in seq)
    return sum(1 for _ in itertools.islice(seq, n))


def test_pull_ready_values(benchmark):
    def run():
        seq = LazySequence()
        seq.extend(range(N))
        return drain(seq)

    assert benchmark(run) == N


def test_push_map_chain(benchmark):
    def run():
        return drain(LazySequence.from_iterable(range(N)))

    assert benchmark(run) == N


def test_push_map_infinite(benchmark):
    def run():
        seq = LazySequence()
        seq.push_map(itertools.count(), lambda x: x * x)
        return drain(seq, N)

    assert benchmark(run) == N


def test_plain_generator_baseline(benchmark):
    def run():
        return drain(x * x for x in range(N))

    assert benchmark(run) == N


@pytest.mark.parametrize('size', [1, 8, 32])
def test_generate_nested(benchmark, size):
    gen = ArbitraryGenerator(seed=0)
    benchmark(gen.generate, Dict[str, List[int]], size)


def test_arbitrary_stream(benchmark):
    def run():
        seq = arbitrary_sequence(int, 4, ArbitraryGenerator(seed=1), count=5_000)
        return drain(seq)

    assert benchmark(run) == 5_000
