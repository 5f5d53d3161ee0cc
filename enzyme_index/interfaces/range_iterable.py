"""
RangeIterable protocol for containers that iterate entries in key order.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterator
from typing import Generic, TypeVar

E = TypeVar("E")


class RangeIterable(ABC, Generic[E]):
    """
    Protocol for data structures that support iteration over a range of keys.

    Implementations must support:
    - Full in-order iteration via __iter__
    - Range-bounded iteration via iterator(start, end)
    - Async iteration via __aiter__
    - Async range-bounded iteration via async_iterator(start, end)
    """

    @abstractmethod
    def __iter__(self) -> Iterator[E]:
        """Return an iterator over all entries in sorted order."""
        pass

    @abstractmethod
    def iterator(self, start: str | None = None, end: str | None = None) -> Iterator[E]:
        """
        Return an iterator over entries whose keys fall in the specified range.

        Args:
            start: Start key (inclusive). If None, starts from the beginning.
            end: End key (exclusive). If None, iterates to the end.

        Returns:
            Iterator yielding entries in sorted order.
        """
        pass

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[E]:
        """Return an async iterator over all entries in sorted order."""
        pass

    @abstractmethod
    def async_iterator(
        self, start: str | None = None, end: str | None = None
    ) -> AsyncIterator[E]:
        """
        Return an async iterator over entries in the specified range.

        Args:
            start: Start key (inclusive). If None, starts from the beginning.
            end: End key (exclusive). If None, iterates to the end.

        Returns:
            AsyncIterator yielding entries in sorted order.
        """
        pass
