"""
Invariant checking for AVL trees.

Used by the test suite and available to callers that want to validate a
tree after a batch of mutations.
"""

from typing import Any

from enzyme_index.models.exceptions import InvariantError
from enzyme_index.models.sortedcontainers.avl_tree import AvlTree, Node, height


def check_avl_invariants(tree: AvlTree) -> None:
    """
    Check every structural invariant of the tree.

    Raises:
        InvariantError: On the first violated invariant (cached height,
            balance, or strict key order).
    """
    _check(tree.root, None, None, tree.ALLOWED_IMBALANCE)


def _check(node: Node | None, low: Any, high: Any, allowed: int) -> int:
    """Validate the subtree and return its real height."""
    if node is None:
        return -1

    key = node.entry.key
    if low is not None and not low < key:
        raise InvariantError(f"Invariant failed: key {key!r} not greater than {low!r}")
    if high is not None and not key < high:
        raise InvariantError(f"Invariant failed: key {key!r} not less than {high!r}")

    left_height = _check(node.left, low, key, allowed)
    right_height = _check(node.right, key, high, allowed)

    expected = max(left_height, right_height) + 1
    if node.height != expected:
        raise InvariantError(
            f"Invariant failed: node {key!r} caches height {node.height}, actual {expected}"
        )
    if abs(height(node.left) - height(node.right)) > allowed:
        raise InvariantError(
            f"Invariant failed: node {key!r} unbalanced "
            f"(left={left_height}, right={right_height})"
        )
    return expected


def is_avl_balanced(tree: AvlTree) -> bool:
    """Return True if every invariant holds."""
    try:
        check_avl_invariants(tree)
    except InvariantError:
        return False
    return True
