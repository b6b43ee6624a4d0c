"""fibrope - Ropes with Fibonacci-interval rebalancing"""

from .exceptions import (
    IndexOutOfBounds,
    IndexOutOfBoundsError,
    InvariantViolationError,
    RopeError,
)
from .fibonacci import build_fib_list, fib
from .node import RopeNode, concat, split_at
from .rope import Rope

__version__ = "0.1.0"

__all__ = [
    "Rope",
    "RopeNode",
    "RopeError",
    "IndexOutOfBounds",
    "IndexOutOfBoundsError",
    "InvariantViolationError",
    "build_fib_list",
    "concat",
    "fib",
    "split_at",
]
