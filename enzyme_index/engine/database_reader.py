"""
DatabaseReader - Stream (recognition sequence, enzyme acronym) pairs from a
REBASE-style flat-file database.
"""

import logging
from collections.abc import Iterator
from typing import TextIO

from enzyme_index.models.exceptions import DatabaseFormatError
from enzyme_index.models.sequence_map import SequenceMap
from enzyme_index.models.sortedcontainers import AvlTree

logger = logging.getLogger(__name__)

# Lines of free-text header preceding the first record
HEADER_LINES = 10


def parse_record(line: str, line_number: int = 0) -> tuple[str, list[str]]:
    """
    Split one database record into its acronym and recognition sequences.

    Record format::

        ACRONYM/SEQ1/SEQ2/.../SEQn//

    Empty fields are skipped and anything after the closing ``//`` is
    ignored.

    Args:
        line: The record line, with or without its newline.
        line_number: Position in the file, used in error messages.

    Returns:
        (enzyme_acronym, recognition_sequences)

    Raises:
        DatabaseFormatError: If the line has no separator or no acronym.
    """
    record = line.strip()
    acronym, sep, body = record.partition("/")
    if not sep or not acronym:
        raise DatabaseFormatError(line_number, line)

    body = body.split("//", 1)[0]
    sequences = [field for field in body.split("/") if field]
    return acronym, sequences


class DatabaseReader:
    """
    Reads an enzyme database file.

    Iterating yields one (recognition_sequence, enzyme_acronym) pair per
    sequence listed in a record, in file order. The same sequence usually
    appears under several enzymes; merging is left to the tree.

    Each iteration opens its own pass over the file. Used as a context
    manager, the reader hands out one pass and closes it on exit.
    """

    def __init__(self, file_path: str, header_lines: int = HEADER_LINES) -> None:
        """
        Initialize the reader.

        Args:
            file_path: Path to the database file.
            header_lines: Number of leading lines to skip.
        """
        if header_lines < 0:
            raise ValueError(f"header_lines must be >= 0, got {header_lines}")

        self.file_path = file_path
        self.header_lines = header_lines
        self._records: _RecordIterator | None = None

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return _RecordIterator(self.file_path, self.header_lines)

    def __enter__(self) -> Iterator[tuple[str, str]]:
        """Open the file and return its pair iterator, closed on exit."""
        self._records = _RecordIterator(self.file_path, self.header_lines)
        return self._records

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._records is not None:
            self._records.close()
            self._records = None

    def entries(self) -> Iterator[SequenceMap]:
        """Yield a single-acronym SequenceMap per pair."""
        for recognition_sequence, enzyme_acronym in self:
            yield SequenceMap.of(recognition_sequence, enzyme_acronym)


class _RecordIterator(Iterator[tuple[str, str]]):
    """Iterator over (recognition_sequence, enzyme_acronym) pairs."""

    def __init__(self, file_path: str, header_lines: int) -> None:
        self._file: TextIO | None = None
        self._file = open(file_path, "r", encoding="utf-8")
        self._line_number = 0
        self._pending: list[tuple[str, str]] = []

        for _ in range(header_lines):
            if not self._file.readline():
                break
            self._line_number += 1

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return self

    def __next__(self) -> tuple[str, str]:
        while not self._pending:
            if self._file is None:
                raise StopIteration

            line = self._file.readline()
            if not line:
                self.close()
                raise StopIteration

            self._line_number += 1
            if not line.strip():
                continue

            try:
                acronym, sequences = parse_record(line, self._line_number)
            except DatabaseFormatError:
                self.close()
                raise

            # Reversed so pop() hands them out in file order
            self._pending = [(sequence, acronym) for sequence in reversed(sequences)]

        return self._pending.pop()

    def close(self) -> None:
        if self._file:
            self._file.close()
            self._file = None

    def __del__(self) -> None:
        self.close()

    def __enter__(self) -> "_RecordIterator":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def build_tree(
    file_path: str,
    tree: AvlTree[SequenceMap] | None = None,
    header_lines: int = HEADER_LINES,
) -> AvlTree[SequenceMap]:
    """
    Load every record of a database file into a tree.

    Args:
        file_path: Path to the database file.
        tree: Tree to insert into. A new empty tree is created if omitted.
        header_lines: Number of leading lines to skip.

    Returns:
        The populated tree.
    """
    if tree is None:
        tree = AvlTree()

    pairs = 0
    for entry in DatabaseReader(file_path, header_lines).entries():
        tree.insert(entry)
        pairs += 1

    logger.info(f"Loaded {pairs} sequence records from {file_path}")
    return tree
