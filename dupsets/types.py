"""Shared data structures for duplicate set refinement."""

from dataclasses import dataclass, field
from typing import Iterator, List, NamedTuple, Optional


# Pair orientation relative to the first-sequenced mate
FR = 'FR'
RF = 'RF'
ORIENTATIONS = (FR, RF)


class ReadEnd(NamedTuple):
    """One read end (pair or fragment) taking part in a duplicate set."""
    library_id: int
    reference_index: int
    coordinate: int
    orientation: str  # FR or RF, relative to read 1
    x: int  # Physical location on the flowcell
    y: int
    umi: Optional[str] = None  # Molecular identifier (RX), None if untagged
    tile: int = 0
    read_name: Optional[str] = None


@dataclass
class DuplicateSet:
    """Ordered reads believed to come from the same locus.

    optical_flags is empty until the set has been classified; afterwards it holds
    one flag per record, in record order.
    """
    records: List[ReadEnd]
    optical_flags: List[bool] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[ReadEnd]:
        return iter(self.records)

    def __getitem__(self, index):
        return self.records[index]

    @property
    def optical_count(self) -> int:
        return sum(1 for flag in self.optical_flags if flag)

    @property
    def umis(self) -> List[Optional[str]]:
        return [record.umi for record in self.records]
