"""
AVL-tree index of restriction enzyme recognition sequences.

This package provides:
- insert(entry) - O(log N), merges acronyms of equal recognition sequences
- contains(key) / get(key) - O(log N) exact lookup
- remove(key) - O(log N), no-op for absent keys
- instrumented_find / instrumented_remove - the same, plus recursive step counts
- node_count(), average_depth(), average_depth_ratio() - shape statistics
"""

from enzyme_index.engine import QueryRunner, build_tree
from enzyme_index.models import AvlTree, EmptyTreeError, SequenceMap

__all__ = ["AvlTree", "EmptyTreeError", "QueryRunner", "SequenceMap", "build_tree"]
