"""
Abstract base classes and protocols for the enzyme index.
"""

from enzyme_index.interfaces.range_iterable import RangeIterable
from enzyme_index.interfaces.sorted_container import MergeableEntry, SortedContainer

__all__ = ["MergeableEntry", "RangeIterable", "SortedContainer"]
