"""node.py - Rope tree nodes and the split/concat primitives

A RopeNode is either a leaf holding a byte fragment or an internal node
representing the concatenation of its two children:

        O  weight=4          |  internal node, weight = length of left subtree
       / \\                  |
  "some"  "text"             |  leaves, weight = len(fragment)

Traversals are iterative so that skewed trees (deep right or left spines
built by repeated edits) never hit the interpreter recursion limit.
"""

from __future__ import annotations

from typing import Iterator

from .config import get_config
from .exceptions import IndexOutOfBoundsError, InvariantViolationError
from .logger import get_logger
from .metrics import record_concat, record_split
from .utils import assumption

logger = get_logger(__name__)


class RopeNode:
    """Leaf or internal node of a rope tree.

    - Leaf: ``left`` and ``right`` are None, ``weight == len(fragment)``.
    - Internal: both children present, ``fragment == b""``, ``weight`` is the
      length of the string represented by the left subtree only.
    """

    __slots__ = ("weight", "left", "right", "fragment")

    def __init__(
        self,
        weight: int,
        left: RopeNode | None = None,
        right: RopeNode | None = None,
        fragment: bytes = b"",
    ) -> None:
        self.weight = weight
        self.left = left
        self.right = right
        self.fragment = fragment

    @classmethod
    def leaf(cls, fragment: bytes) -> RopeNode:
        assert assumption(fragment, bytes)
        node = cls(len(fragment), fragment=fragment)
        if get_config().check_invariants:
            node._check_shallow()
        return node

    @classmethod
    def concat(cls, left: RopeNode, right: RopeNode) -> RopeNode:
        """Build an internal node over ``left`` then ``right``; both are consumed."""
        assert assumption(left, RopeNode)
        assert assumption(right, RopeNode)
        node = cls(left.length(), left, right)
        if get_config().check_invariants:
            node._check_shallow()
        record_concat()
        return node

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"RopeNode.leaf({self.fragment!r})"
        return f"RopeNode(weight={self.weight}, internal)"

    # --- Reads ---

    def length(self) -> int:
        """Length of the represented string, following the right spine."""
        total = 0
        node = self
        while not node.is_leaf:
            total += node.weight
            node = node.right
        return total + node.weight

    def char_at(self, index: int) -> int:
        """Byte at ``index``, found by weight-directed descent."""
        node = self
        offset = index
        while not node.is_leaf:
            if offset < node.weight:
                node = node.left
            else:
                offset -= node.weight
                node = node.right
        if offset < 0 or offset >= node.weight:
            raise IndexOutOfBoundsError(
                "Error: string index out of bounds", index=index, length=self.length()
            )
        return node.fragment[offset]

    def substring(self, start: int, length: int) -> bytes:
        """Return ``length`` bytes beginning at ``start``.

        Bounds are the caller's responsibility; out-of-range requests are
        clipped the way bytes slicing clips.
        """
        pieces: list[bytes] = []
        stack: list[tuple[RopeNode, int, int]] = [(self, start, length)]
        while stack:
            node, start, length = stack.pop()
            if length <= 0:
                continue
            if node.is_leaf:
                pieces.append(node.fragment[start : start + length])
                continue
            w = node.weight
            if start < w:
                taken = min(length, w - start)
                # Right part is read from its own origin; pushed first so the
                # left part is emitted first.
                if start + length > w:
                    stack.append((node.right, 0, length - taken))
                stack.append((node.left, start, taken))
            else:
                stack.append((node.right, start - w, length))
        return b"".join(pieces)

    def iter_leaves(self) -> Iterator[RopeNode]:
        """Yield leaf references from left to right."""
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                yield node
            else:
                stack.append(node.right)
                stack.append(node.left)

    def collect_leaves(self) -> list[RopeNode]:
        """In-order list of leaf references; nothing is copied."""
        return list(self.iter_leaves())

    def materialize(self) -> bytes:
        return b"".join(leaf.fragment for leaf in self.iter_leaves())

    def depth(self) -> int:
        """Longest root-to-leaf edge count; 0 for a leaf."""
        deepest = 0
        stack = [(self, 0)]
        while stack:
            node, level = stack.pop()
            if node.is_leaf:
                if level > deepest:
                    deepest = level
            else:
                stack.append((node.left, level + 1))
                stack.append((node.right, level + 1))
        return deepest

    def clone(self) -> RopeNode:
        """Deep copy; the returned tree shares no node with this one."""
        root = RopeNode(self.weight, fragment=self.fragment)
        stack = [(self, root)]
        while stack:
            src, dst = stack.pop()
            if src.is_leaf:
                continue
            dst.left = RopeNode(src.left.weight, fragment=src.left.fragment)
            dst.right = RopeNode(src.right.weight, fragment=src.right.fragment)
            stack.append((src.left, dst.left))
            stack.append((src.right, dst.right))
        return root

    # --- Invariants ---

    def _check_shallow(self) -> None:
        if self.left is None and self.right is None:
            if self.weight != len(self.fragment):
                raise InvariantViolationError(
                    self, f"leaf weight {self.weight} != fragment length {len(self.fragment)}"
                )
        elif self.left is None or self.right is None:
            raise InvariantViolationError(self, "internal node with a single child")
        elif self.fragment:
            raise InvariantViolationError(self, "internal node carries a fragment")

    def validate(self) -> bool:
        """Check every invariant over the whole subtree.

        Returns True so it can be used as ``assert node.validate()``.
        """
        lengths: dict[int, int] = {}
        # Post-order: children are measured before their parent
        stack: list[tuple[RopeNode, bool]] = [(self, False)]
        while stack:
            node, visited = stack.pop()
            node._check_shallow()
            if node.is_leaf:
                lengths[id(node)] = node.weight
            elif visited:
                left_length = lengths[id(node.left)]
                if node.weight != left_length:
                    raise InvariantViolationError(
                        node, f"weight {node.weight} != left subtree length {left_length}"
                    )
                lengths[id(node)] = left_length + lengths[id(node.right)]
            else:
                if id(node.left) in lengths or id(node.right) in lengths:
                    raise InvariantViolationError(node, "subtree is shared within the tree")
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
        return True


def concat(left: RopeNode, right: RopeNode) -> RopeNode:
    return RopeNode.concat(left, right)


def split_at(node: RopeNode, index: int) -> tuple[RopeNode, RopeNode]:
    """Split ``node`` at ``index`` into two trees whose concatenation is the original.

    The input tree is consumed: its internal nodes are reused as parts of the
    two results, so callers must not keep references into it. Expects
    ``0 <= index <= node.length()``; the rope façade enforces the bounds.

    Each internal node on the descent path is handled as follows, with
    w = node.weight:
        index < w   split continues in the left child; the node becomes the
                    right result's root, (left-remainder . old right)
        index > w   split continues in the right child; the node stays on
                    the left result's side, (old left . right-prefix)
        index == w  clean cut, (left, right)
    """
    assert assumption(node, RopeNode)
    assert assumption(index, int)
    record_split()
    logger.debug("split_at index=%d", index)
    # Each hole is the (parent, attribute) still waiting for a subtree. The
    # holder's left and right receive the two results.
    holder = RopeNode(0)
    left_hole: tuple[RopeNode, str] = (holder, "left")
    right_hole: tuple[RopeNode, str] = (holder, "right")

    def fill(hole: tuple[RopeNode, str], subtree: RopeNode) -> None:
        owner, attr = hole
        setattr(owner, attr, subtree)

    while True:
        w = node.weight
        if node.is_leaf:
            fill(left_hole, RopeNode.leaf(node.fragment[:index]))
            fill(right_hole, RopeNode.leaf(node.fragment[index:w]))
            break
        if index < w:
            fill(right_hole, node)
            right_hole = (node, "left")
            child = node.left
            # Left remainder of the child split has w - index bytes
            node.weight = w - index
            node = child
        elif index > w:
            fill(left_hole, node)
            left_hole = (node, "right")
            node = node.right
            index -= w
        else:
            fill(left_hole, node.left)
            fill(right_hole, node.right)
            break

    return holder.left, holder.right
