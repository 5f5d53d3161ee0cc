"""
Custom exceptions for the enzyme index.
"""


class EmptyTreeError(LookupError):
    """
    Raised when a min/max query is made against an empty tree.

    Searches and removals never raise this; they report "not found".
    """

    def __init__(self, operation: str):
        """
        Initialize empty tree error.

        Args:
            operation: Name of the operation that needed at least one node.
        """
        self.operation = operation
        super().__init__(f"{operation}() called on an empty tree")


class MergeKeyMismatchError(ValueError):
    """
    Raised when two entries with different keys are merged.

    This is a programming error: the tree only merges after it has
    established key equality.
    """

    def __init__(self, expected: str, actual: str):
        """
        Initialize merge error.

        Args:
            expected: Key of the resident entry.
            actual: Key of the entry being merged in.
        """
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Cannot merge entry with key {actual!r} into entry with key {expected!r}"
        )


class InvariantError(AssertionError):
    """Raised when an AVL tree invariant is violated."""


class DatabaseFormatError(ValueError):
    """
    Raised when a database record cannot be parsed.

    Fail-fast: the reader stops at the first malformed record.
    """

    def __init__(self, line_number: int, line: str):
        """
        Initialize format error.

        Args:
            line_number: 1-based line number in the database file.
            line: The offending line.
        """
        self.line_number = line_number
        self.line = line
        super().__init__(f"Malformed record at line {line_number}: {line!r}")
