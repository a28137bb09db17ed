"""
Public entry points.

    for prime in Sieve.infinite():
        ...

    for prime in Sieve.bounded(1_000_000):
        ...

Sieve.bounded(N) is inclusive: it yields every prime p <= N. The shift from
the inclusive public bound to the engine's exclusive bound happens here only.
"""

import numpy as np

from .iterators import BoundedIterator, InfiniteIterator
from .state import SieveState


class Sieve:
    """Constructors for the two iteration policies. Each call owns a fresh sieve."""

    @staticmethod
    def infinite(dtype=np.uint64, verbose: bool = False) -> InfiniteIterator:
        """
        All primes, in increasing order, computed lazily.

        Parameters
        ----------
        dtype : numpy dtype
            Unsigned index type. Iteration raises SieveOverflowError after
            the last prime representable in it.
        verbose : bool
            Print one line per sieve growth.

        Returns
        -------
        InfiniteIterator
        """
        return InfiniteIterator(SieveState(dtype=dtype, verbose=verbose))

    @staticmethod
    def bounded(limit: int, dtype=np.uint64, verbose: bool = False) -> BoundedIterator:
        """
        Primes p <= limit, in increasing order.

        Parameters
        ----------
        limit : int
            Inclusive upper bound. 0 and 1 give an empty sequence.
        dtype : numpy dtype
            Unsigned index type; limit must be representable in it.
        verbose : bool
            Print one line per sieve growth.

        Returns
        -------
        BoundedIterator
        """
        limit = int(limit)
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        return BoundedIterator(SieveState(dtype=dtype, verbose=verbose), limit + 1)


def nth_prime(k: int, dtype=np.uint64) -> int:
    """
    Return the k-th prime, 1-indexed (nth_prime(1) == 2).

    Parameters
    ----------
    k : int
        Position in the sequence of primes, k >= 1.
    dtype : numpy dtype
        Unsigned index type of the sieve used.

    Returns
    -------
    int
        The k-th prime.
    """
    if k < 1:
        raise IndexError(f"prime positions start at 1, got {k}")
    return SieveState(dtype=dtype).nth_prime_or_grow(k - 1)
