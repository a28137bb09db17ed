"""
Tests for the infinite and bounded iteration policies.
"""

from itertools import islice

import numpy as np
import pytest

from growsieve.iterators import BoundedIterator, InfiniteIterator
from growsieve.primes import primes_upto
from growsieve.state import SieveOverflowError, SieveState


class TestInfiniteIterator:
    """Grow-on-demand iteration."""

    def test_first_primes(self):
        it = InfiniteIterator(SieveState())
        assert list(islice(it, 10)) == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]
        assert it.position == 10

    def test_is_its_own_iterator(self):
        it = InfiniteIterator(SieveState())
        assert iter(it) is it

    def test_resumes_where_it_stopped(self):
        """Consuming N then M primes equals consuming N+M at once."""
        it = InfiniteIterator(SieveState())
        head = list(islice(it, 100))
        tail = list(islice(it, 900))
        fresh = list(islice(InfiniteIterator(SieveState()), 1000))
        assert head + tail == fresh

    def test_strictly_increasing(self):
        primes = list(islice(InfiniteIterator(SieveState()), 5000))
        assert all(a < b for a, b in zip(primes, primes[1:]))

    def test_yields_python_ints(self):
        it = InfiniteIterator(SieveState())
        assert all(type(p) is int for p in islice(it, 20))

    def test_size_follows_growth(self):
        """The sieve only grows as far as the consumer has pulled."""
        it = InfiniteIterator(SieveState())
        assert it.size == 0
        next(it)
        assert it.size == 16
        list(islice(it, 6))
        assert it.size == 32

    def test_uses_existing_state(self):
        """A pre-sized state answers without growing."""
        state = SieveState(capacity=1000)
        it = InfiniteIterator(state)
        list(islice(it, 168))
        assert state.limit == 1000

    def test_overflow_at_end_of_dtype(self):
        """A uint8 sieve runs out after the 54 primes below 256."""
        it = InfiniteIterator(SieveState(dtype=np.uint8))
        primes = list(islice(it, 54))
        assert primes[-1] == 251
        with pytest.raises(SieveOverflowError):
            next(it)


class TestBoundedIterator:
    """Grow-once iteration with an exclusive bound."""

    def test_primes_below_bound(self):
        it = BoundedIterator(SieveState(), 30)
        assert list(it) == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]

    def test_bound_is_exclusive(self):
        assert list(BoundedIterator(SieveState(), 29)) == [2, 3, 5, 7, 11, 13, 17, 19, 23]
        assert list(BoundedIterator(SieveState(), 3)) == [2]

    @pytest.mark.parametrize("bound", [0, 1, 2])
    def test_empty(self, bound):
        it = BoundedIterator(SieveState(), bound)
        assert it.count == 0
        assert it.exhausted
        assert list(it) == []

    def test_grows_once_to_bound(self):
        state = SieveState()
        it = BoundedIterator(state, 10000)
        assert state.limit == 10000
        list(it)
        assert state.limit == 10000

    def test_count_and_length_hint(self):
        it = BoundedIterator(SieveState(), 100)
        assert it.count == 25
        assert it.__length_hint__() == 25
        list(islice(it, 10))
        assert it.__length_hint__() == 15

    def test_stays_exhausted(self):
        """Once exhausted, further calls keep raising StopIteration."""
        it = BoundedIterator(SieveState(), 10)
        assert list(it) == [2, 3, 5, 7]
        assert it.exhausted
        for _ in range(3):
            with pytest.raises(StopIteration):
                next(it)
        assert list(it) == []

    def test_matches_reference(self):
        got = np.array(list(BoundedIterator(SieveState(), 100000)))
        assert np.array_equal(got, primes_upto(99999))

    def test_larger_existing_state(self):
        """A state already past the bound is sliced, not grown."""
        state = SieveState(capacity=1000)
        assert list(BoundedIterator(state, 20)) == [2, 3, 5, 7, 11, 13, 17, 19]
        assert state.limit == 1000

    def test_negative_bound(self):
        with pytest.raises(ValueError):
            BoundedIterator(SieveState(), -5)

    def test_overflow(self):
        with pytest.raises(SieveOverflowError):
            BoundedIterator(SieveState(dtype=np.uint8), 300)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
