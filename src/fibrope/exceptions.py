"""exceptions.py - Exception hierarchy for rope operations.

Defines exceptions for:
- Out-of-range indices and ranges passed to the rope façade
- Tree nodes that break the leaf/internal structural invariants
"""

from __future__ import annotations


class RopeError(Exception):
    """Base exception for all fibrope errors."""

    pass


class IndexOutOfBoundsError(RopeError, IndexError):
    """Raised when an index or range falls outside the represented string.

    Covers every failing ``at``, ``substring``, ``insert`` and ``delete``.
    The rope is left unchanged when this is raised.
    """

    def __init__(self, message: str, index: int | None = None, length: int | None = None):
        self.index = index
        self.length = length
        super().__init__(message)


# Short name used throughout the rope documentation
IndexOutOfBounds = IndexOutOfBoundsError


class InvariantViolationError(RopeError):
    """Raised when a node breaks one of the structural invariants.

    Examples:
        - A leaf whose weight differs from its fragment length
        - An internal node with a missing child or a non-empty fragment
        - An internal node whose weight is not the length of its left subtree
    """

    def __init__(self, node, reason: str):
        self.node = node
        self.reason = reason
        super().__init__(f"Invalid rope node {node!r}: {reason}")
