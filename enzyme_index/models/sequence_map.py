"""
SequenceMap - a recognition sequence and the enzymes that cut it.
"""

from dataclasses import dataclass, field
from functools import total_ordering

from enzyme_index.models.exceptions import MergeKeyMismatchError


@total_ordering
@dataclass(eq=False)
class SequenceMap:
    """
    Maps one recognition sequence to the enzyme acronyms that share it.

    Ordering and equality are defined on the recognition sequence only;
    two maps with the same sequence are never told apart by their acronyms.

    Attributes:
        recognition_sequence: The DNA motif used as the ordering key.
        enzyme_acronyms: Acronyms in the order they were merged in.
    """

    recognition_sequence: str
    enzyme_acronyms: list[str] = field(default_factory=list)

    @classmethod
    def of(cls, recognition_sequence: str, enzyme_acronym: str) -> "SequenceMap":
        """Create a map holding a single acronym."""
        return cls(recognition_sequence=recognition_sequence, enzyme_acronyms=[enzyme_acronym])

    @property
    def key(self) -> str:
        return self.recognition_sequence

    @property
    def labels(self) -> list[str]:
        return self.enzyme_acronyms

    def merge(self, other: "SequenceMap") -> None:
        """
        Append the other map's acronyms to this one.

        Args:
            other: A map with the same recognition sequence.

        Raises:
            MergeKeyMismatchError: If the recognition sequences differ.
        """
        if other.recognition_sequence != self.recognition_sequence:
            raise MergeKeyMismatchError(self.recognition_sequence, other.recognition_sequence)
        # Snapshot first so merging a map into itself doubles rather than loops
        self.enzyme_acronyms.extend(list(other.enzyme_acronyms))

    def copy(self) -> "SequenceMap":
        return SequenceMap(self.recognition_sequence, list(self.enzyme_acronyms))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SequenceMap):
            return NotImplemented
        return self.recognition_sequence == other.recognition_sequence

    def __lt__(self, other: "SequenceMap") -> bool:
        if not isinstance(other, SequenceMap):
            return NotImplemented
        return self.recognition_sequence < other.recognition_sequence

    def __hash__(self) -> int:
        return hash(self.recognition_sequence)

    def __str__(self) -> str:
        return " ".join([self.recognition_sequence, *self.enzyme_acronyms])
