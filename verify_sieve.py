#!/usr/bin/env python3
"""
Verify the growable sieve against the fixed-size reference sieve.

Compares:
1. Prefixes of Sieve.infinite() with the reference primes
2. Sieve.bounded(N) with the reference primes <= N
3. Infinite and bounded iterators with each other
4. Composite flags after stepwise growth with a one-shot sieve

Usage:
    python verify_sieve.py
    python verify_sieve.py --config config/custom.yaml
"""

import argparse
import sys
import time
from itertools import islice

import numpy as np
import yaml

from growsieve.primes import prime_flags_upto, primes_upto
from growsieve.sieve import Sieve
from growsieve.state import SieveState


def verify_infinite_prefix(count: int, dtype, verbose: bool = True) -> bool:
    """First `count` primes of the infinite iterator match the reference."""
    if verbose:
        print(f"\n=== Infinite prefix, count={count:,} ===")

    t0 = time.time()
    it = Sieve.infinite(dtype=dtype)
    got = np.array(list(islice(it, count)), dtype=dtype)
    t_iter = time.time() - t0

    if count == 0:
        return True

    expected = primes_upto(int(got[-1]), dtype=dtype)[:count]
    ok = np.array_equal(got, expected)

    if verbose:
        print(f"  {count:,} primes in {t_iter:.3f}s, last={int(got[-1]):,}, sieve size={it.size:,}")
        print(f"  {'✓ match' if ok else '✗ MISMATCH'}")
    return ok


def verify_bounded(limit: int, dtype, verbose: bool = True) -> bool:
    """Sieve.bounded(limit) yields exactly the reference primes <= limit."""
    if verbose:
        print(f"\n=== Bounded, limit={limit:,} ===")

    t0 = time.time()
    got = np.array(list(Sieve.bounded(limit, dtype=dtype)), dtype=dtype)
    t_iter = time.time() - t0

    expected = primes_upto(limit, dtype=dtype)
    ok = np.array_equal(got, expected)

    if verbose:
        print(f"  {len(got):,} primes in {t_iter:.3f}s (expected {len(expected):,})")
        print(f"  {'✓ match' if ok else '✗ MISMATCH'}")
    return ok


def verify_cross_consistency(count: int, dtype, verbose: bool = True) -> bool:
    """Infinite and bounded iterators agree on the first `count` primes."""
    if count == 0:
        return True

    infinite = list(islice(Sieve.infinite(dtype=dtype), count))
    bounded = list(islice(Sieve.bounded(infinite[-1], dtype=dtype), count))
    ok = infinite == bounded

    if verbose:
        print(f"\n=== Cross-consistency, count={count:,} ===")
        print(f"  {'✓ match' if ok else '✗ MISMATCH'}")
    return ok


def verify_stepwise_growth(limit: int, dtype, verbose: bool = True, trace: bool = False) -> bool:
    """Doubling a sieve up to `limit` leaves the same flags as sieving once."""
    if verbose:
        print(f"\n=== Stepwise growth to {limit:,} ===")

    state = SieveState(dtype=dtype, verbose=trace)
    state.ensure_capacity(limit)
    flags = prime_flags_upto(state.limit - 1)

    ok = (np.array_equal(~state.is_composite, flags)
          and np.array_equal(state.primes, np.flatnonzero(flags)))

    if verbose:
        print(f"  limit={state.limit:,}, primes={state.prime_count:,}")
        print(f"  {'✓ match' if ok else '✗ MISMATCH'}")
    return ok


def main():
    parser = argparse.ArgumentParser(description='Verify growable sieve correctness')
    parser.add_argument('--config', type=str, default='config/default.yaml',
                        help='Path to config file')
    args = parser.parse_args()

    with open(args.config) as f:
        config = yaml.safe_load(f)

    dtype = np.dtype(config.get('dtype', 'uint64'))
    verbose = bool(config.get('verbose', False))
    counts = config.get('counts', [])
    bounds = config.get('bounds', [])

    print("Growable Sieve Verification")
    print(f"  dtype  = {dtype.name}")
    print(f"  counts = {counts}")
    print(f"  bounds = {bounds}")
    print("=" * 50)

    total_start = time.time()
    results = []

    for count in counts:
        results.append(verify_infinite_prefix(count, dtype))
        results.append(verify_cross_consistency(count, dtype))

    for limit in bounds:
        results.append(verify_bounded(limit, dtype))

    if bounds:
        results.append(verify_stepwise_growth(max(bounds), dtype, trace=verbose))

    print("\n" + "=" * 50)
    print(f"{sum(results)}/{len(results)} checks passed in {time.time() - total_start:.1f}s")
    if all(results):
        print("✓ All verifications passed!")
    else:
        print("✗ Some verifications failed!")
        sys.exit(1)


if __name__ == '__main__':
    main()
