"""
Iteration policies over a SieveState.

Responsibility: termination and growth-triggering policy only. All sieve
mutation is delegated to the state.

- InfiniteIterator grows on demand, doubling the sieve whenever the cursor
  passes the last known prime.
- BoundedIterator sizes the sieve once at construction and stops at the bound.
"""

from .state import SieveState


class InfiniteIterator:
    """
    Unbounded, increasing sequence of primes.

    The cursor only moves forward; build a new iterator to start over.
    A call to __next__ that crosses the sieve frontier pays for the growth.
    """

    def __init__(self, state: SieveState):
        self._state = state
        self._position = 0

    @property
    def position(self) -> int:
        """Number of primes emitted so far."""
        return self._position

    @property
    def size(self) -> int:
        return self._state.size

    def __iter__(self):
        return self

    def __next__(self) -> int:
        prime = self._state.nth_prime_or_grow(self._position)
        self._position += 1
        return prime

    def __repr__(self) -> str:
        return f"InfiniteIterator(position={self._position}, state={self._state!r})"


class BoundedIterator:
    """
    Primes p < bound, in increasing order.

    The sieve is grown at most once, when the iterator is built. Once
    exhausted the iterator stays exhausted.

    Parameters
    ----------
    state : SieveState
        Sieve owned by this iterator.
    bound : int
        Exclusive upper bound.
    """

    def __init__(self, state: SieveState, bound: int):
        self._state = state
        self._bound = int(bound)
        self._primes = state.primes_below(self._bound)
        self._count = len(self._primes)
        self._position = 0

    @property
    def bound(self) -> int:
        return self._bound

    @property
    def count(self) -> int:
        """Total number of primes this iterator produces."""
        return self._count

    @property
    def exhausted(self) -> bool:
        return self._position >= self._count

    @property
    def size(self) -> int:
        return self._state.size

    def __iter__(self):
        return self

    def __next__(self) -> int:
        if self._position >= self._count:
            raise StopIteration
        prime = int(self._primes[self._position])
        self._position += 1
        return prime

    def __length_hint__(self) -> int:
        return self._count - self._position

    def __repr__(self) -> str:
        return (f"BoundedIterator(bound={self._bound}, "
                f"position={self._position}, count={self._count})")
