"""
Tests for lazily generated streams.

Validates:
  - arbitrary_sequence length modes (small_n, explicit count, infinite)
  - values are generated only when pulled
  - generated values can be fed through push_map like any other source
"""

import itertools
from typing import List

import pytest
from lazyarb import ArbitraryGenerator, LazySequence, SizePolicy, arbitrary_sequence


class Token:
    pass


class TestArbitrarySequence:
    def setup_method(self):
        self.calls = []
        self.gen = ArbitraryGenerator(seed=17)
        self.gen.register(Token, self._make_token)

    def _make_token(self, size, gen):
        self.calls.append(size)
        return Token()

    def test_explicit_count(self):
        seq = arbitrary_sequence(int, 5, self.gen, count=3)
        values = list(seq)
        assert len(values) == 3
        assert all(type(v) is int for v in values)

    def test_generates_on_pull(self):
        seq = arbitrary_sequence(Token, 4, self.gen, count=5)
        assert self.calls == []
        assert isinstance(seq.pull(), Token)
        assert self.calls == [4]
        seq.pull()
        assert self.calls == [4, 4]

    def test_infinite(self):
        seq = arbitrary_sequence(Token, 2, self.gen, infinite=True)
        taken = list(itertools.islice(seq, 1000))
        assert len(taken) == 1000
        assert len(self.calls) == 1000
        assert not seq.is_exhausted

    def test_small_n_length(self):
        seq = arbitrary_sequence(bool, 3, self.gen)
        assert len(list(seq)) <= 48

    def test_size_zero_is_empty(self):
        seq = arbitrary_sequence(int, 0, self.gen)
        assert seq.pull() is None

    def test_follows_size_policy(self):
        gen = ArbitraryGenerator(seed=1, size_policy=SizePolicy(cap_factor=0))
        assert list(arbitrary_sequence(str, 10, gen)) == []

    def test_count_and_infinite_conflict(self):
        with pytest.raises(ValueError):
            arbitrary_sequence(int, 1, self.gen, count=2, infinite=True)

    def test_negative_count(self):
        with pytest.raises(ValueError):
            arbitrary_sequence(int, 1, self.gen, count=-1)

    def test_default_generator(self):
        seq = arbitrary_sequence(List[int], 2, count=2)
        assert all(isinstance(v, list) for v in seq)


class TestGeneratedSource:
    def test_push_map_over_generated_values(self):
        gen = ArbitraryGenerator(seed=5)
        seq = LazySequence()
        seq.push_map(gen.iter_arbitrary(str, 4), len)
        lengths = list(itertools.islice(seq, 200))
        assert all(0 <= n <= 64 for n in lengths)

    def test_same_seed_same_stream(self):
        a = arbitrary_sequence(float, 1, ArbitraryGenerator(seed=8), count=20)
        b = arbitrary_sequence(float, 1, ArbitraryGenerator(seed=8), count=20)
        assert list(a) == list(b)
