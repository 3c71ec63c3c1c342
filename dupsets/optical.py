"""
Optical duplicate classification for duplicate sets.

The spatial test itself is supplied by the caller as an OpticalDuplicateFinder.
This module only decides what to hand it: FR and RF read ends are never compared
with each other, because orientation is fixed relative to the first-sequenced
mate and a mixed list would pair up reads that cannot be imaging artifacts of one
another.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from dupsets.exceptions import OpticalFinderError, UnexpectedOrientationError
from dupsets.metrics import DuplicateSetStats
from dupsets.types import FR, RF, ReadEnd


# Takes a non-empty, orientation-pure list of read ends and returns one flag per
# read end, True for optical duplicates
OpticalDuplicateFinder = Callable[[List[ReadEnd]], Sequence[bool]]

Partition = Tuple[List[int], List[ReadEnd]]


def partition_by_orientation(records: Sequence[ReadEnd]) -> List[Partition]:
    """
    Split read ends into orientation-pure lists.

    Returns a single partition with every read when only one orientation is
    present, otherwise the FR partition followed by the RF partition. Each
    partition carries the original indices of its reads.

    Raises:
        UnexpectedOrientationError: for any orientation other than FR or RF
    """
    fr_indices: List[int] = []
    rf_indices: List[int] = []
    for i, record in enumerate(records):
        if record.orientation == FR:
            fr_indices.append(i)
        elif record.orientation == RF:
            rf_indices.append(i)
        else:
            raise UnexpectedOrientationError(
                f"Found an unexpected orientation: {record.orientation!r}"
                + (f" (read {record.read_name})" if record.read_name else ""),
                orientation=record.orientation)

    if fr_indices and rf_indices:
        return [
            (fr_indices, [records[i] for i in fr_indices]),
            (rf_indices, [records[i] for i in rf_indices]),
        ]
    return [(list(range(len(records))), list(records))]


def merge_partition_flags(size: int, partitions: List[Partition],
                          flags: List[List[bool]]) -> List[bool]:
    """Put per-partition flags back at the original read positions."""
    merged = [False] * size
    for (indices, _), partition_flags in zip(partitions, flags):
        for index, flag in zip(indices, partition_flags):
            merged[index] = flag
    return merged


class OpticalDuplicateClassifier:
    """
    Runs the optical duplicate finder over duplicate sets.

    With finder=None optical detection is disabled and every read is reported as
    non-optical.
    """

    def __init__(self, finder: Optional[OpticalDuplicateFinder], stats: DuplicateSetStats):
        self.finder = finder
        self.stats = stats

    @property
    def enabled(self) -> bool:
        return self.finder is not None

    def classify_partition(self, records: List[ReadEnd]) -> List[bool]:
        """
        Call the finder once for an orientation-pure list and update the
        per-library optical duplicate count.
        """
        if not self.enabled or not records:
            return [False] * len(records)

        flags = [bool(flag) for flag in self.finder(records)]
        if len(flags) != len(records):
            raise OpticalFinderError(
                f"Optical duplicate finder returned {len(flags)} flags for {len(records)} reads")

        optical = sum(flags)
        if optical > 0:
            # A partition always comes from a single library
            self.stats.add_library_optical_duplicates(records[0].library_id, optical)
        return flags

    def classify(self, records: Sequence[ReadEnd]) -> List[bool]:
        """Optical duplicate flags for a duplicate set, in the set's order."""
        partitions = partition_by_orientation(records)
        if len(partitions) > 1:
            logging.debug(f"Mixed orientations in duplicate set of {len(records)}: "
                          f"{len(partitions[0][0])} FR, {len(partitions[1][0])} RF")

        flags = [self.classify_partition(partition) for _, partition in partitions]
        return merge_partition_flags(len(records), partitions, flags)


def track_optical_duplicates(records: Sequence[ReadEnd],
                             classifier: OpticalDuplicateClassifier,
                             stats: DuplicateSetStats) -> List[bool]:
    """
    Classify one duplicate set and record its size and optical count.

    Returns:
        Optical duplicate flag for each read, in the set's order
    """
    flags = classifier.classify(records)
    stats.record(len(records), sum(flags))
    return flags
