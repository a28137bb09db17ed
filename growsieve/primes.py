"""
Fixed-size reference sieve.

Responsibility: a one-shot, non-growable Sieve of Eratosthenes used to check
the growable engine. Nothing here is used by the iterators themselves.
"""

import numpy as np


def prime_flags_upto(N: int) -> np.ndarray:
    """
    Return boolean array where flags[i] is True iff i is prime.

    Parameters
    ----------
    N : int
        Upper bound (inclusive). Negative N gives an empty array.

    Returns
    -------
    np.ndarray
        Boolean array of length N+1.
    """
    if N < 0:
        return np.zeros(0, dtype=bool)
    flags = np.ones(N + 1, dtype=bool)
    flags[:2] = False
    for p in range(2, int(N**0.5) + 1):
        if flags[p]:
            flags[p*p::p] = False
    return flags


def primes_upto(N: int, dtype=np.uint64) -> np.ndarray:
    """
    Return array of all primes <= N.

    Parameters
    ----------
    N : int
        Upper bound (inclusive).
    dtype : numpy dtype
        dtype of the returned array, matching the engine's prime cache.

    Returns
    -------
    np.ndarray
        Array of primes.
    """
    return np.flatnonzero(prime_flags_upto(N)).astype(dtype)


def prime_count_upto(N: int) -> int:
    """pi(N): number of primes <= N."""
    return int(np.count_nonzero(prime_flags_upto(N)))
