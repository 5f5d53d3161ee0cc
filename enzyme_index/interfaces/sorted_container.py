"""
SortedContainer abstract base class for sorted, merge-on-insert containers.
"""

from abc import abstractmethod
from typing import Protocol, TypeVar

from enzyme_index.interfaces.range_iterable import RangeIterable


class MergeableEntry(Protocol):
    """Structural type of the values a SortedContainer stores."""

    @property
    def key(self) -> str: ...

    def merge(self, other: "MergeableEntry") -> None: ...

    def copy(self) -> "MergeableEntry": ...


E = TypeVar("E", bound=MergeableEntry)


class SortedContainer(RangeIterable[E]):
    """
    Abstract base class for sorted containers of mergeable entries.

    Entries are ordered by their ``key``. Inserting an entry whose key is
    already present merges it into the resident entry instead of adding a
    second node.

    Implementations:
    - AvlTree: Strictly height-balanced, O(log N) worst case
    """

    @abstractmethod
    def insert(self, entry: E) -> None:
        """
        Insert an entry, merging it into the resident one on equal keys.

        Args:
            entry: The entry to insert.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def get(self, key: str) -> E | None:
        """
        Retrieve the entry stored under a key.

        Args:
            key: The key to look up.

        Returns:
            The entry if found, None otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> bool:
        """
        Remove the entry stored under a key.

        Args:
            key: The key to remove.

        Returns:
            True if the key was found and removed, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def contains(self, key: str) -> bool:
        """
        Check if a key exists.

        Args:
            key: The key to check.

        Returns:
            True if the key exists, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def find_min(self) -> E:
        """
        Return the entry with the smallest key.

        Raises:
            EmptyTreeError: If the container is empty.
        """
        pass

    @abstractmethod
    def find_max(self) -> E:
        """
        Return the entry with the largest key.

        Raises:
            EmptyTreeError: If the container is empty.
        """
        pass

    @abstractmethod
    def is_empty(self) -> bool:
        pass

    @abstractmethod
    def node_count(self) -> int:
        """
        Return the number of stored entries.

        Returns:
            The count of entries in the container.

        Time complexity: O(N)
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry."""
        pass
