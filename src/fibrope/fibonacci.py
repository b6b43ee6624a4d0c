"""fibonacci.py - Fibonacci numbers and interval tables for rope rebalancing"""

from __future__ import annotations


def fib(n: int) -> int:
    """Return the nth Fibonacci number, F(0) = 0, F(1) = 1, in O(n) time."""
    if n < 0:
        raise ValueError(f"Fibonacci index must be non-negative, got {n}")
    a, b = 0, 1
    for _ in range(n):
        a, b = b, a + b
    return a


def build_fib_list(length: int) -> list[int]:
    """Build the interval table used by the rebalancer.

    Entry k is F(k+2), so slot k of the rebalancer covers lengths in
    [F(k+2), F(k+3)). The table runs up to and including the first value
    that exceeds ``length``:

        build_fib_list(0) -> []
        build_fib_list(1) -> [1, 2]
        build_fib_list(8) -> [1, 2, 3, 5, 8, 13]
    """
    intervals: list[int] = []
    a, b = 0, 1
    while a <= length:
        if a > 0:
            intervals.append(b)
        a, b = b, a + b
    return intervals
