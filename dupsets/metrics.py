"""Histograms of duplicate set sizes and optical duplicate counts."""

import logging
from collections import Counter
from typing import Dict, List


class DuplicateSetStats:
    """
    Accumulates duplicate set statistics across a run.

    Histogram keys count duplicates, i.e. exclude the one read of each set that
    is kept as the representative:
    - duplicate_set_size_hist: (set size - 1)
    - non_optical_duplicate_set_size_hist: (set size - 1 - optical duplicates), when > 0
    - optical_duplicate_set_size_hist: optical duplicates in the set, when > 0
    - optical_duplicates_by_library: total optical duplicates per library id

    Not thread-safe; owned by a single iterator.
    """

    def __init__(self):
        self._duplicate_set_size: Counter = Counter()
        self._non_optical: Counter = Counter()
        self._optical: Counter = Counter()
        self._optical_by_library: Counter = Counter()

    def record(self, set_size: int, optical_count: int) -> None:
        """Record one (possibly UMI-split) duplicate set."""
        if set_size < 1:
            raise ValueError(f"Duplicate set size must be positive, got {set_size}")
        if optical_count < 0 or optical_count > set_size:
            raise ValueError(f"Invalid optical duplicate count {optical_count} "
                             f"for set of size {set_size}")

        duplicates = set_size - 1
        self._duplicate_set_size[duplicates] += 1
        if duplicates - optical_count > 0:
            self._non_optical[duplicates - optical_count] += 1
        if optical_count > 0:
            self._optical[optical_count] += 1

    def add_library_optical_duplicates(self, library_id: int, count: int) -> None:
        self._optical_by_library[library_id] += count

    def update(self, other: 'DuplicateSetStats') -> None:
        """Add all counts from another stats object into this one."""
        self._duplicate_set_size.update(other._duplicate_set_size)
        self._non_optical.update(other._non_optical)
        self._optical.update(other._optical)
        self._optical_by_library.update(other._optical_by_library)

    @property
    def duplicate_set_size_hist(self) -> Dict[int, int]:
        return dict(sorted(self._duplicate_set_size.items()))

    @property
    def non_optical_duplicate_set_size_hist(self) -> Dict[int, int]:
        return dict(sorted(self._non_optical.items()))

    @property
    def optical_duplicate_set_size_hist(self) -> Dict[int, int]:
        return dict(sorted(self._optical.items()))

    @property
    def optical_duplicates_by_library(self) -> Dict[int, int]:
        return dict(sorted(self._optical_by_library.items()))

    @property
    def total_duplicate_sets(self) -> int:
        return sum(self._duplicate_set_size.values())

    def optical_duplicates_for_library(self, library_id: int) -> int:
        """Optical duplicate total for one library (0 if none were seen)."""
        return self._optical_by_library.get(library_id, 0)

    def histogram_rows(self) -> List[Dict[str, int]]:
        """
        Combine the three set-size histograms into one table.

        One row per bin that appears in any histogram, in ascending bin order.
        """
        bins = sorted(set(self._duplicate_set_size) | set(self._non_optical) | set(self._optical))
        return [
            {
                'bin': b,
                'duplicate_sets': self._duplicate_set_size.get(b, 0),
                'non_optical_sets': self._non_optical.get(b, 0),
                'optical_sets': self._optical.get(b, 0),
            }
            for b in bins
        ]

    def log_summary(self) -> None:
        total_sets = self.total_duplicate_sets
        total_optical = sum(self._optical_by_library.values())
        logging.info(f"Processed {total_sets} duplicate sets, "
                     f"{total_optical} optical duplicates across "
                     f"{len(self._optical_by_library)} libraries")
        for library_id, count in self.optical_duplicates_by_library.items():
            logging.info(f"Library {library_id}: {count} optical duplicates")
        logging.debug(f"Duplicate set size histogram: {self.duplicate_set_size_hist}")
        logging.debug(f"Non-optical histogram: {self.non_optical_duplicate_set_size_hist}")
        logging.debug(f"Optical histogram: {self.optical_duplicate_set_size_hist}")
