"""rope.py - Rope façade: edit operations, balance detection and rebalancing"""

from __future__ import annotations

from typing import IO, Union

from .config import get_config
from .exceptions import IndexOutOfBoundsError
from .fibonacci import build_fib_list, fib
from .logger import get_logger
from .metrics import record_edit, record_index_error, record_rebalance
from .node import RopeNode, concat, split_at
from .utils import to_bytes

logger = get_logger(__name__)

RopeLike = Union["Rope", bytes, bytearray, memoryview, str]


class Rope:
    """
    Rope: a byte string stored as a binary tree of immutable fragments.

    - Concatenation, split, insert and delete run in time proportional to the
      tree depth; balance() keeps the depth within the Fibonacci bound.
    - Indices are zero-origin byte offsets, ranges are [start, start+length).
    - Every rope owns its tree: copies and inserted ropes are deep-cloned, so
      mutating one rope never affects another.
    - Not safe for concurrent mutation from several threads.

    Examples:

        X        |  root is None, represents the empty string

      "txt"      |  root is a leaf holding a fragment

        O        |
       / \\       |  root is an internal node joining "some" and "text"
    "some" "text"
    """

    __hash__ = None  # mutable

    def __init__(self, data: RopeLike | None = None) -> None:
        self.root: RopeNode | None
        if data is None:
            self.root = None
        elif isinstance(data, Rope):
            self.root = data.root.clone() if data.root is not None else None
        else:
            self.root = RopeNode.leaf(to_bytes(data))

    # --- Copying ---

    def copy(self) -> Rope:
        return Rope(self)

    def __copy__(self) -> Rope:
        return Rope(self)

    def __deepcopy__(self, memo) -> Rope:
        return Rope(self)

    # --- Reads ---

    def to_string(self) -> bytes:
        """Materialize the rope into one contiguous byte string."""
        if self.root is None:
            return b""
        return self.root.materialize()

    def length(self) -> int:
        if self.root is None:
            return 0
        return self.root.length()

    def depth(self) -> int:
        if self.root is None:
            return 0
        return self.root.depth()

    def at(self, index: int) -> int:
        """Byte value at ``index``."""
        length = self.length()
        if self.root is None or index < 0 or index >= length:
            raise self._out_of_bounds("at", index, length)
        return self.root.char_at(index)

    def substring(self, start: int, length: int) -> bytes:
        """Exactly ``length`` bytes beginning at ``start``."""
        actual = self.length()
        if start < 0 or length < 0 or start > actual or start + length > actual:
            raise self._out_of_bounds("substring", start, actual)
        if self.root is None or length == 0:
            return b""
        return self.root.substring(start, length)

    def write_to(self, stream: IO[bytes]) -> int:
        """Write the content to a binary stream leaf by leaf; returns bytes written."""
        written = 0
        if self.root is None:
            return written
        for leaf in self.root.iter_leaves():
            if leaf.fragment:
                stream.write(leaf.fragment)
                written += leaf.weight
        return written

    # --- Mutators ---

    def insert(self, index: int, data: RopeLike) -> None:
        """Insert ``data`` so that it begins at ``index``.

        ``data`` may be this rope itself: it is snapshot before the tree is split.
        """
        length = self.length()
        if index < 0 or index > length:
            raise self._out_of_bounds("insert", index, length)
        inserted = self._snapshot(data)
        left, right = split_at(self._root_or_empty(), index)
        self.root = concat(concat(left, inserted), right)
        record_edit("insert")

    def append(self, data: RopeLike) -> None:
        inserted = self._snapshot(data)
        if self.root is None:
            self.root = inserted
        else:
            self.root = concat(self.root, inserted)
        record_edit("append")

    def delete(self, start: int, length: int) -> None:
        """Remove ``length`` bytes beginning at ``start``."""
        actual = self.length()
        if start < 0 or length < 0 or start > actual or start + length > actual:
            raise self._out_of_bounds("delete", start, actual)
        if self.root is None:
            return
        head, rest = split_at(self.root, start)
        _discarded, tail = split_at(rest, length)
        self.root = concat(head, tail)
        record_edit("delete")

    # --- Balancing ---

    def is_balanced(self) -> bool:
        """True when length >= F(depth + 2); an empty rope is always balanced."""
        if self.root is None:
            return True
        length = self.root.length()
        if length == 0:
            return True
        return length >= fib(self.root.depth() + 2)

    def balance(self) -> None:
        """Rebuild the tree so it satisfies the Fibonacci depth bound.

        Leaves a balanced tree untouched. Otherwise each non-empty leaf is
        copied into the slot array: slot k holds a subtree whose length lies
        in [F(k+2), F(k+3)). A new leaf carries upward, absorbing every
        occupied slot it passes as its left neighbour, until it settles in
        an empty slot of the right size. Higher slots therefore hold earlier
        text, and the slots are joined from the lowest index upward.
        """
        if self.is_balanced():
            return
        before = self.root.depth()
        intervals = build_fib_list(self.root.length())
        top = len(intervals) - 1
        slots: list[RopeNode | None] = [None] * len(intervals)
        sizes = [0] * len(intervals)
        leaves = [leaf for leaf in self.root.iter_leaves() if leaf.weight > 0]

        for leaf in leaves:
            acc = RopeNode.leaf(leaf.fragment)
            size = leaf.weight
            k = 0
            while True:
                while k < top and size >= intervals[k + 1]:
                    if slots[k] is not None:
                        acc = concat(slots[k], acc)
                        size += sizes[k]
                        slots[k] = None
                    k += 1
                if slots[k] is None:
                    slots[k] = acc
                    sizes[k] = size
                    break
                acc = concat(slots[k], acc)
                size += sizes[k]
                slots[k] = None

        result: RopeNode | None = None
        for subtree in slots:
            if subtree is None:
                continue
            result = subtree if result is None else concat(subtree, result)

        if result.length() < fib(result.depth() + 2):
            logger.warning(
                "Slot merge left depth %d for %d leaves; regrouping pairwise",
                result.depth(),
                len(leaves),
            )
            result = _regroup(leaves)

        self.root = result
        after = result.depth()
        logger.info("Rebalanced rope: depth %d -> %d over %d leaves", before, after, len(leaves))
        record_rebalance(after)
        record_edit("balance")

    def validate(self) -> bool:
        """Deep structural check of the whole tree."""
        if self.root is None:
            return True
        return self.root.validate()

    # --- Helpers ---

    def _root_or_empty(self) -> RopeNode:
        if self.root is None:
            return RopeNode.leaf(b"")
        return self.root

    @staticmethod
    def _snapshot(data: RopeLike) -> RopeNode:
        if isinstance(data, Rope):
            if data.root is None:
                return RopeNode.leaf(b"")
            return data.root.clone()
        return RopeNode.leaf(to_bytes(data))

    @staticmethod
    def _out_of_bounds(operation: str, index: int, length: int) -> IndexOutOfBoundsError:
        record_index_error(operation)
        logger.debug("%s rejected: index %d, length %d", operation, index, length)
        return IndexOutOfBoundsError(
            f"Error: string index out of bounds ({operation} at {index}, length {length})",
            index=index,
            length=length,
        )

    # --- Python protocols ---

    def __len__(self) -> int:
        return self.length()

    def __bytes__(self) -> bytes:
        return self.to_string()

    def __str__(self) -> str:
        return self.to_string().decode(get_config().encoding, errors="replace")

    def __repr__(self) -> str:
        content = self.to_string()
        if len(content) > 40:
            return f"Rope({content[:40]!r}..., length={len(content)})"
        return f"Rope({content!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Rope):
            return self.to_string() == other.to_string()
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self.to_string() == bytes(other)
        return NotImplemented

    def __getitem__(self, key: int | slice) -> int | bytes:
        if isinstance(key, slice):
            start, stop, step = key.indices(self.length())
            if step != 1:
                raise ValueError("Rope slices do not support a step")
            return self.substring(start, max(0, stop - start))
        if key < 0:
            key += self.length()
        return self.at(key)

    def __iadd__(self, other: RopeLike) -> Rope:
        self.append(other)
        return self

    def __add__(self, other: RopeLike) -> Rope:
        if not isinstance(other, (Rope, bytes, bytearray, memoryview, str)):
            return NotImplemented
        result = self.copy()
        result.append(other)
        return result


def _regroup(leaves: list[RopeNode]) -> RopeNode:
    """Join leaf copies pairwise, level by level, into a tree of depth ceil(log2(n))."""
    level = [RopeNode.leaf(leaf.fragment) for leaf in leaves]
    while len(level) > 1:
        paired = [concat(level[i], level[i + 1]) for i in range(0, len(level) - 1, 2)]
        if len(level) % 2:
            paired.append(level[-1])
        level = paired
    return level[0]
