"""
Growable Sieve of Eratosthenes.

Responsibility: primality state for [0, limit) and its growth. No iteration
policy lives here; see iterators.py.

Growth never restarts from scratch. Extending from old_limit to new_limit
re-applies the already known primes to the new cells only, then sieves with
any prime discovered inside the new region whose square still falls below
new_limit. Total work over a sequence of doublings matches a single sieve
sized to the final limit, up to a constant factor.

Index dtype:
- Every sieve is tied to an unsigned numpy integer dtype (uint64 by default).
- limit may grow to iinfo(dtype).max + 1, so every index below limit fits.
- Asking for more raises SieveOverflowError.
"""

import time
from math import isqrt

import numpy as np

# Smallest limit reached by the doubling policy
MIN_GROWTH = 16

# Initial capacity of the prime cache buffer
MIN_PRIME_BUFFER = 16


class SieveOverflowError(OverflowError):
    """Requested limit is outside the range of the sieve's index dtype."""


def _unsigned_dtype(dtype) -> np.dtype:
    dtype = np.dtype(dtype)
    if dtype.kind != 'u':
        raise ValueError(f"unsigned integer dtype expected, got {dtype}")
    return dtype


class SieveState:
    """
    Primality knowledge for every integer in [0, limit).

    Parameters
    ----------
    capacity : int
        Initial limit. 0 creates an empty sieve.
    dtype : numpy dtype
        Unsigned integer type used for indices and the prime cache.
    verbose : bool
        Print one line per growth step.

    Notes
    -----
    A SieveState is owned by exactly one iterator. It is not thread safe.
    """

    def __init__(self, capacity: int = 0, dtype=np.uint64, verbose: bool = False):
        self.dtype = _unsigned_dtype(dtype)
        self.verbose = verbose
        self.max_limit = int(np.iinfo(self.dtype).max) + 1

        self._limit = 0
        self._composite = np.zeros(0, dtype=bool)
        self._buffer = np.zeros(MIN_PRIME_BUFFER, dtype=self.dtype)
        self._count = 0

        if capacity:
            self.grow_to(capacity)

    @property
    def limit(self) -> int:
        """Exclusive upper bound of the sieved range."""
        return self._limit

    @property
    def size(self) -> int:
        return self._limit

    def __len__(self) -> int:
        return self._limit

    @property
    def prime_count(self) -> int:
        """Number of primes below limit."""
        return self._count

    @property
    def primes(self) -> np.ndarray:
        """Read-only view of the primes found so far, increasing."""
        view = self._buffer[:self._count]
        view.flags.writeable = False
        return view

    @property
    def is_composite(self) -> np.ndarray:
        """Read-only view of the composite flags, length limit."""
        view = self._composite[:]
        view.flags.writeable = False
        return view

    def _check_limit(self, new_limit: int) -> None:
        if new_limit > self.max_limit:
            raise SieveOverflowError(
                f"limit {new_limit} exceeds the {self.dtype.name} range "
                f"(at most {self.max_limit})"
            )

    def _next_limit(self, limit: int) -> int:
        return min(max(limit * 2, MIN_GROWTH), self.max_limit)

    def _append_primes(self, found: np.ndarray) -> None:
        needed = self._count + len(found)
        if needed > len(self._buffer):
            buffer = np.zeros(max(needed, 2 * len(self._buffer)), dtype=self.dtype)
            buffer[:self._count] = self._buffer[:self._count]
            self._buffer = buffer
        self._buffer[self._count:needed] = found
        self._count = needed

    def grow_to(self, new_limit: int) -> None:
        """
        Extend the sieve so that limit == new_limit.

        No-op when new_limit <= limit; the sieve never shrinks.

        Parameters
        ----------
        new_limit : int
            New exclusive upper bound.

        Raises
        ------
        SieveOverflowError
            If new_limit is beyond the dtype range.
        """
        new_limit = int(new_limit)
        if new_limit <= self._limit:
            return
        self._check_limit(new_limit)

        t0 = time.time()
        old_limit = self._limit

        # Allocate the larger table before dropping the old one
        composite = np.zeros(new_limit, dtype=bool)
        composite[:old_limit] = self._composite
        composite[:2] = True

        root = isqrt(new_limit - 1)

        # Known primes only need to strike the new cells
        known = self._buffer[:self._count]
        n_known = int(np.searchsorted(known, root, side='right'))
        for p in known[:n_known]:
            p = int(p)
            first = -(-old_limit // p) * p
            composite[max(p * p, first)::p] = True

        # Primes found inside the new region that still sieve it.
        # Each candidate is final once every smaller prime has been applied.
        for p in range(max(old_limit, 2), root + 1):
            if not composite[p]:
                composite[p * p::p] = True

        found = np.flatnonzero(~composite[old_limit:]) + old_limit

        self._composite = composite
        self._append_primes(found)
        self._limit = new_limit

        if self.verbose:
            print(f"    Grew sieve {old_limit:,} -> {new_limit:,}: "
                  f"{len(found):,} new primes ({time.time() - t0:.3f}s)")

    def ensure_capacity(self, n: int) -> None:
        """Grow by doubling until limit >= n."""
        n = int(n)
        if n <= self._limit:
            return
        self._check_limit(n)

        target = self._limit
        while target < n:
            target = self._next_limit(target)
        self.grow_to(target)

    def nth_prime_or_grow(self, index: int) -> int:
        """
        Return the prime at zero-based position index.

        Doubles the sieve until that prime is known.

        Parameters
        ----------
        index : int
            Zero-based index into the sequence of primes (0 -> 2).

        Returns
        -------
        int
            The prime.

        Raises
        ------
        IndexError
            If index is negative.
        SieveOverflowError
            If the prime lies beyond the dtype range.
        """
        if index < 0:
            raise IndexError(f"prime index must be >= 0, got {index}")

        while self._count <= index:
            if self._limit >= self.max_limit:
                raise SieveOverflowError(
                    f"prime #{index} is beyond the {self.dtype.name} range: "
                    f"only {self._count} primes below {self.max_limit}"
                )
            self.grow_to(self._next_limit(self._limit))

        return int(self._buffer[index])

    def primes_below(self, bound: int) -> np.ndarray:
        """
        Return the primes p < bound, growing the sieve at most once.

        Parameters
        ----------
        bound : int
            Exclusive upper bound.

        Returns
        -------
        np.ndarray
            Read-only view into the prime cache (not a copy).
        """
        bound = int(bound)
        if bound < 0:
            raise ValueError(f"bound must be >= 0, got {bound}")
        if bound > self._limit:
            self.grow_to(bound)

        primes = self.primes
        if bound == self._limit:
            return primes
        return primes[:int(np.searchsorted(primes, bound, side='left'))]

    def is_prime(self, n: int) -> bool:
        """Primality of n, growing the sieve to cover it if needed."""
        n = int(n)
        if n < 0:
            raise ValueError(f"non-negative integer expected, got {n}")
        self.ensure_capacity(n + 1)
        return not self._composite[n]

    def __contains__(self, n: int) -> bool:
        return self.is_prime(n)

    def __repr__(self) -> str:
        return (f"SieveState(limit={self._limit}, primes={self._count}, "
                f"dtype={self.dtype.name})")
