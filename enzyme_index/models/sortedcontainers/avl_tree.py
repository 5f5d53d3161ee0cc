"""
AVL Tree implementation for sorted, merge-on-insert storage.

Optimized for read-heavy workloads: sibling heights never differ by more
than one, so every search, insert and remove is O(log N) in the worst case.
"""

import logging
import math
from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass
from typing import Any

from enzyme_index.interfaces.sorted_container import E, SortedContainer
from enzyme_index.models.exceptions import EmptyTreeError

logger = logging.getLogger(__name__)


@dataclass
class Node:
    """Node in the AVL Tree. A leaf has height 0, an absent subtree -1."""

    entry: Any
    left: "Node | None" = None
    right: "Node | None" = None
    height: int = 0


def height(node: Node | None) -> int:
    """Return the cached height of a subtree, -1 if absent."""
    return -1 if node is None else node.height


class AvlTree(SortedContainer[E]):
    """
    AVL Tree implementation of SortedContainer.

    Properties maintained:
    1. In-order traversal is strictly increasing by key
    2. Every node caches height = 1 + max(height(left), height(right))
    3. Sibling subtree heights differ by at most ALLOWED_IMBALANCE

    Inserting an entry whose key is already present calls
    ``resident.merge(entry)`` and leaves the structure untouched.

    The recursive helpers return the (possibly new) root of the subtree they
    were handed; callers store it back into their own child slot. There are
    no parent pointers, so all rebalancing happens while the recursion
    unwinds.
    """

    ALLOWED_IMBALANCE = 1

    def __init__(self) -> None:
        self._root: Node | None = None

    @property
    def root(self) -> Node | None:
        return self._root

    def insert(self, entry: E) -> None:
        """Insert an entry, merging duplicates. O(log N)"""
        self._root = self._insert(entry, self._root)

    def get(self, key: str) -> E | None:
        """Retrieve the entry stored under key. O(log N)"""
        node = self._find_node(key)
        return node.entry if node else None

    def contains(self, key: str) -> bool:
        return self._contains(key, self._root)

    def remove(self, key: str) -> bool:
        """Remove the entry stored under key; no-op if absent. O(log N)"""
        removed, _ = self.instrumented_remove(key)
        return removed

    def instrumented_find(self, key: str) -> tuple[bool, int]:
        """
        Search for a key, counting recursive calls.

        Args:
            key: The key to search for.

        Returns:
            (found, steps) where steps counts every recursive call made,
            including the one that reaches an absent subtree.
        """
        return self._find(key, self._root)

    def instrumented_remove(self, key: str) -> tuple[bool, int]:
        """
        Remove a key, counting recursive calls.

        In the two-children case the descent that deletes the in-order
        successor from the right subtree is counted as well.

        Args:
            key: The key to remove.

        Returns:
            (removed, steps) where steps counts every recursive call made,
            including the one that reaches an absent subtree.
        """
        self._root, removed, steps = self._remove(key, self._root)
        if removed:
            logger.debug(f"Removed {key!r} in {steps} steps")
        return removed, steps

    def find_min(self) -> E:
        if self._root is None:
            raise EmptyTreeError("find_min")
        return self._find_min(self._root).entry

    def find_max(self) -> E:
        if self._root is None:
            raise EmptyTreeError("find_max")
        return self._find_max(self._root).entry

    def is_empty(self) -> bool:
        return self._root is None

    def height(self) -> int:
        """Return the height of the tree, -1 when empty."""
        return height(self._root)

    def node_count(self) -> int:
        return self._count(self._root)

    def average_depth(self) -> float:
        """
        Return the mean node depth, the root being at depth 0.

        The tree must not be empty; an empty tree raises ZeroDivisionError.
        """
        return self._depth_sum(self._root, 0) / self.node_count()

    def average_depth_ratio(self) -> float:
        """
        Return average_depth() / log2(node_count()).

        Compares the observed depth against a perfectly balanced tree. Needs
        at least two nodes; otherwise raises ZeroDivisionError.
        """
        return self.average_depth() / math.log2(self.node_count())

    def clear(self) -> None:
        """Release every node, children before parents."""
        self._make_empty(self._root)
        self._root = None

    def clone(self) -> "AvlTree[E]":
        """Return a deep copy that shares no nodes or entries with this tree."""
        copy = type(self)()
        copy._root = self._clone(self._root)
        return copy

    def __copy__(self) -> "AvlTree[E]":
        return self.clone()

    def __deepcopy__(self, memo: dict) -> "AvlTree[E]":
        return self.clone()

    def __len__(self) -> int:
        return self.node_count()

    def __contains__(self, key: str) -> bool:
        return self.contains(key)

    def __iter__(self) -> Iterator[E]:
        return self.iterator()

    def iterator(self, start: str | None = None, end: str | None = None) -> Iterator[E]:
        return _RangeIterator(self._root, start, end)

    def __aiter__(self) -> AsyncIterator[E]:
        return self.async_iterator()

    def async_iterator(
        self, start: str | None = None, end: str | None = None
    ) -> AsyncIterator[E]:
        return _AsyncRangeIterator(self._root, start, end)

    def _insert(self, entry: E, node: Node | None) -> Node:
        if node is None:
            # The tree owns its entries; later merges never reach the caller's object
            return Node(entry=entry.copy())

        if entry.key < node.entry.key:
            node.left = self._insert(entry, node.left)
        elif node.entry.key < entry.key:
            node.right = self._insert(entry, node.right)
        else:
            # Duplicate key: structure and heights are unchanged
            node.entry.merge(entry)
            return node

        return self._balance(node)

    def _remove(self, key: str, node: Node | None) -> tuple[Node | None, bool, int]:
        """Return (new subtree root, removed, recursive calls made)."""
        if node is None:
            return None, False, 1

        if key < node.entry.key:
            node.left, removed, steps = self._remove(key, node.left)
        elif node.entry.key < key:
            node.right, removed, steps = self._remove(key, node.right)
        elif node.left is not None and node.right is not None:
            # Two children: take over the successor's entry, then delete the successor
            node.entry = self._find_min(node.right).entry
            node.right, removed, steps = self._remove(node.entry.key, node.right)
        else:
            child = node.left if node.left is not None else node.right
            node.left = node.right = None
            return child, True, 1

        return self._balance(node), removed, steps + 1

    def _find_node(self, key: str) -> Node | None:
        """Find node by key."""
        current = self._root
        while current is not None:
            if key < current.entry.key:
                current = current.left
            elif current.entry.key < key:
                current = current.right
            else:
                return current
        return None

    def _contains(self, key: str, node: Node | None) -> bool:
        if node is None:
            return False
        if key < node.entry.key:
            return self._contains(key, node.left)
        if node.entry.key < key:
            return self._contains(key, node.right)
        return True

    def _find(self, key: str, node: Node | None) -> tuple[bool, int]:
        if node is None:
            return False, 1

        if key < node.entry.key:
            found, steps = self._find(key, node.left)
        elif node.entry.key < key:
            found, steps = self._find(key, node.right)
        else:
            return True, 1

        return found, steps + 1

    def _find_min(self, node: Node) -> Node:
        if node.left is None:
            return node
        return self._find_min(node.left)

    def _find_max(self, node: Node) -> Node:
        while node.right is not None:
            node = node.right
        return node

    def _count(self, node: Node | None) -> int:
        if node is None:
            return 0
        return self._count(node.left) + self._count(node.right) + 1

    def _depth_sum(self, node: Node | None, depth: int) -> int:
        if node is None:
            return 0
        return (
            self._depth_sum(node.left, depth + 1)
            + self._depth_sum(node.right, depth + 1)
            + depth
        )

    def _make_empty(self, node: Node | None) -> None:
        if node is None:
            return
        self._make_empty(node.left)
        self._make_empty(node.right)
        node.left = node.right = None

    def _clone(self, node: Node | None) -> Node | None:
        if node is None:
            return None
        return Node(
            entry=node.entry.copy(),
            left=self._clone(node.left),
            right=self._clone(node.right),
            height=node.height,
        )

    def _balance(self, node: Node) -> Node:
        """
        Restore the AVL property at node and refresh its height.

        Assumes both subtrees are balanced and their heights differ by at
        most ALLOWED_IMBALANCE + 1.
        """
        if height(node.left) - height(node.right) > self.ALLOWED_IMBALANCE:
            if height(node.left.left) >= height(node.left.right):
                node = self._rotate_with_left_child(node)
            else:
                node = self._double_with_left_child(node)
        elif height(node.right) - height(node.left) > self.ALLOWED_IMBALANCE:
            if height(node.right.right) >= height(node.right.left):
                node = self._rotate_with_right_child(node)
            else:
                node = self._double_with_right_child(node)

        node.height = max(height(node.left), height(node.right)) + 1
        return node

    def _rotate_with_left_child(self, k2: Node) -> Node:
        """Single rotation promoting the left child (left-left case)."""
        k1 = k2.left
        k2.left = k1.right
        k1.right = k2
        k2.height = max(height(k2.left), height(k2.right)) + 1
        k1.height = max(height(k1.left), k2.height) + 1
        return k1

    def _rotate_with_right_child(self, k1: Node) -> Node:
        """Single rotation promoting the right child (right-right case)."""
        k2 = k1.right
        k1.right = k2.left
        k2.left = k1
        k1.height = max(height(k1.left), height(k1.right)) + 1
        k2.height = max(height(k2.right), k1.height) + 1
        return k2

    def _double_with_left_child(self, k3: Node) -> Node:
        """
        Left-right case in one restructuring.

        The left child's right child k2 becomes the subtree root with k1 and
        k3 as its children; same shape as rotating k1 with its right child
        and then k3 with its left child.
        """
        k1 = k3.left
        k2 = k1.right
        k1.right = k2.left
        k3.left = k2.right
        k2.left = k1
        k2.right = k3
        k1.height = max(height(k1.left), height(k1.right)) + 1
        k3.height = max(height(k3.left), height(k3.right)) + 1
        k2.height = max(k1.height, k3.height) + 1
        return k2

    def _double_with_right_child(self, k1: Node) -> Node:
        """Right-left case in one restructuring, mirror of _double_with_left_child."""
        k3 = k1.right
        k2 = k3.left
        k3.left = k2.right
        k1.right = k2.left
        k2.left = k1
        k2.right = k3
        k1.height = max(height(k1.left), height(k1.right)) + 1
        k3.height = max(height(k3.left), height(k3.right)) + 1
        k2.height = max(k1.height, k3.height) + 1
        return k2


class _RangeIterator(Iterator[Any]):
    """
    In-order walk over the entries with start <= key < end.

    Holds the pending ancestors whose entries have not been yielded yet, so
    memory is bounded by tree height.
    """

    def __init__(self, root: Node | None, start: str | None, end: str | None) -> None:
        self._pending: list[Node] = []
        self._end = end
        self._descend(root, start)

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        if not self._pending:
            raise StopIteration

        node = self._pending.pop()
        if self._end is not None and not node.entry.key < self._end:
            # Every remaining node is larger still
            self._pending.clear()
            raise StopIteration

        self._descend(node.right, None)
        return node.entry

    def _descend(self, node: Node | None, start: str | None) -> None:
        """Queue node and its left spine, skipping subtrees entirely below start."""
        while node is not None:
            if start is not None and node.entry.key < start:
                node = node.right
                continue
            self._pending.append(node)
            node = node.left


class _AsyncRangeIterator(AsyncIterator[Any]):
    """Async iterator for range queries on AVL Tree (in-memory, no I/O)."""

    def __init__(self, root: Node | None, start: str | None, end: str | None) -> None:
        self._iterator = _RangeIterator(root, start, end)

    def __aiter__(self) -> "_AsyncRangeIterator":
        return self

    async def __anext__(self) -> Any:
        try:
            return next(self._iterator)
        except StopIteration:
            raise StopAsyncIteration from None
