"""
Sorted container implementations for the enzyme index.
"""

from enzyme_index.models.sortedcontainers.avl_tree import AvlTree, Node

__all__ = ["AvlTree", "Node"]
