"""
QueryRunner - Drive instrumented finds and removals from a stream of keys.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from enzyme_index.models.sequence_map import SequenceMap
from enzyme_index.models.sortedcontainers import AvlTree

logger = logging.getLogger(__name__)


def read_queries(file_path: str) -> list[str]:
    """
    Read one query key per line.

    Surrounding whitespace is stripped. A blank line stays in the result as
    an empty key, so it still counts towards batch sizes and shifts which
    keys a strided removal picks.

    Args:
        file_path: Path to the query file.

    Returns:
        The keys in file order.
    """
    with open(file_path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f]


@dataclass
class QueryStats:
    """
    Aggregate result of a batch of instrumented operations.

    Attributes:
        queries: Number of operations issued.
        hits: Number of operations that found their key.
        steps: Total recursive calls across all operations.
    """

    queries: int = 0
    hits: int = 0
    steps: int = 0

    @property
    def mean_steps(self) -> float:
        """Average recursive calls per operation, 0.0 for an empty batch."""
        if self.queries == 0:
            return 0.0
        return self.steps / self.queries

    def record(self, found: bool, steps: int) -> None:
        self.queries += 1
        self.hits += int(found)
        self.steps += steps


@dataclass
class TreeReport:
    """
    Shape statistics of a tree.

    Depth fields are None where they are undefined: average_depth for an
    empty tree, average_depth_ratio for fewer than two nodes.
    """

    node_count: int
    average_depth: float | None
    average_depth_ratio: float | None

    @classmethod
    def from_tree(cls, tree: AvlTree) -> "TreeReport":
        count = tree.node_count()
        average_depth = tree.average_depth() if count > 0 else None
        ratio = tree.average_depth_ratio() if count > 1 else None
        return cls(node_count=count, average_depth=average_depth, average_depth_ratio=ratio)


class QueryRunner:
    """
    Runs batches of lookups and removals against a tree.

    The tree is mutated in place by run_removes().
    """

    # Remove every other query key, starting with the first
    DEFAULT_REMOVE_STRIDE = 2

    def __init__(self, tree: AvlTree[SequenceMap]) -> None:
        self._tree = tree

    @property
    def tree(self) -> AvlTree[SequenceMap]:
        return self._tree

    def lookup(self, key: str) -> SequenceMap | None:
        return self._tree.get(key)

    def run_finds(self, keys: Iterable[str]) -> QueryStats:
        """
        Search for every key.

        Args:
            keys: Keys to search for.

        Returns:
            Hit count and recursive call totals.
        """
        stats = QueryStats()
        for key in keys:
            stats.record(*self._tree.instrumented_find(key))

        logger.debug(
            f"Find batch: {stats.hits}/{stats.queries} hits, "
            f"{stats.mean_steps:.2f} mean steps"
        )
        return stats

    def run_removes(self, keys: Iterable[str], stride: int = DEFAULT_REMOVE_STRIDE) -> QueryStats:
        """
        Remove every stride-th key, starting with the first.

        Args:
            keys: Candidate keys.
            stride: Distance between removed keys. Must be positive.

        Returns:
            Removal count and recursive call totals over the removals issued.
        """
        if stride <= 0:
            raise ValueError(f"stride must be positive, got {stride}")

        stats = QueryStats()
        for index, key in enumerate(keys):
            if index % stride == 0:
                stats.record(*self._tree.instrumented_remove(key))

        logger.debug(
            f"Remove batch: {stats.hits}/{stats.queries} removed, "
            f"{stats.mean_steps:.2f} mean steps"
        )
        return stats
