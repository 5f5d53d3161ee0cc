"""
Data models for the enzyme index.
"""

from enzyme_index.models.exceptions import (
    DatabaseFormatError,
    EmptyTreeError,
    InvariantError,
    MergeKeyMismatchError,
)
from enzyme_index.models.invariants import check_avl_invariants, is_avl_balanced
from enzyme_index.models.sequence_map import SequenceMap
from enzyme_index.models.sortedcontainers import AvlTree

__all__ = [
    "AvlTree",
    "DatabaseFormatError",
    "EmptyTreeError",
    "InvariantError",
    "MergeKeyMismatchError",
    "SequenceMap",
    "check_avl_invariants",
    "is_avl_balanced",
]
