"""Streaming UMI-aware duplicate set iterator."""

import logging
from collections import deque
from typing import Deque, Iterable, Iterator, List, Optional, Union

from tqdm import tqdm

from dupsets.config import DuplicateSetConfig
from dupsets.exceptions import DuplicateSetError
from dupsets.metrics import DuplicateSetStats
from dupsets.optical import (
    OpticalDuplicateClassifier,
    OpticalDuplicateFinder,
    track_optical_duplicates,
)
from dupsets.types import DuplicateSet, ReadEnd
from dupsets.umi import split_by_umi


_EMPTY = object()

SourceGroup = Union[DuplicateSet, Iterable[ReadEnd]]


class UmiAwareDuplicateSetIterator:
    """
    Wraps a source of position-based duplicate sets and yields them split by UMI.

    Each source set is processed as a whole on the first call to next() that needs
    it: split by UMI, each sub-set classified for optical duplicates and recorded
    in `stats`, and the sub-sets buffered. Following calls drain the buffer before
    the source is touched again. Sub-sets come back with optical_flags filled in.

    If processing a set fails, nothing from that set is emitted or counted and the
    error propagates from next().
    """

    def __init__(self, source: Iterable[SourceGroup],
                 optical_finder: Optional[OpticalDuplicateFinder] = None,
                 stats: Optional[DuplicateSetStats] = None,
                 config: Optional[DuplicateSetConfig] = None):
        self._source = source
        self._source_iter: Iterator[SourceGroup] = iter(source)
        self.optical_finder = optical_finder
        self.stats = stats if stats is not None else DuplicateSetStats()
        self.config = config if config is not None else DuplicateSetConfig()

        self._buffer: Deque[DuplicateSet] = deque()
        self._pending = _EMPTY  # Source set pulled by has_next() but not yet processed
        self._closed = False
        self._finished = False

        self.sets_read = 0
        self.sets_emitted = 0
        self._progress = tqdm(desc="Duplicate sets", unit=" sets",
                              disable=not self.config.show_progress)

    def __iter__(self) -> 'UmiAwareDuplicateSetIterator':
        return self

    def __enter__(self) -> 'UmiAwareDuplicateSetIterator':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def draining(self) -> bool:
        """True while sub-sets of the last source set are still buffered."""
        return bool(self._buffer)

    def has_next(self) -> bool:
        if self._closed:
            return False
        return bool(self._buffer) or self._peek_source()

    def __next__(self) -> DuplicateSet:
        if self._closed:
            raise StopIteration

        if not self._buffer:
            if not self._peek_source():
                self._finish()
                raise StopIteration
            group = self._pending
            self._pending = _EMPTY
            self._buffer.extend(self._process(group))

        self.sets_emitted += 1
        return self._buffer.popleft()

    def close(self) -> None:
        """Stop iteration and close the source if it supports closing."""
        if self._closed:
            return
        self._closed = True
        self._buffer.clear()
        self._pending = _EMPTY
        self._progress.close()

        for obj in (self._source, self._source_iter):
            close = getattr(obj, 'close', None)
            if callable(close):
                close()
                break

    def _peek_source(self) -> bool:
        if self._pending is _EMPTY:
            try:
                self._pending = next(self._source_iter)
            except StopIteration:
                return False
        return True

    def _finish(self) -> None:
        if self._finished:
            return
        self._finished = True
        self._progress.close()
        logging.debug(f"Read {self.sets_read} duplicate sets, emitted {self.sets_emitted}")
        if self.config.log_summary:
            self.stats.log_summary()

    def _process(self, group: SourceGroup) -> List[DuplicateSet]:
        duplicate_set = group if isinstance(group, DuplicateSet) else DuplicateSet(list(group))
        self.sets_read += 1
        self._progress.update(1)

        if len(duplicate_set) == 0:
            raise DuplicateSetError(f"Source produced an empty duplicate set (set {self.sets_read})")

        try:
            subsets = split_by_umi(duplicate_set) if self.config.umi_aware else [duplicate_set]

            # Stage counts so a failure part way through a set leaves stats untouched
            staged = DuplicateSetStats()
            classifier = OpticalDuplicateClassifier(self.optical_finder, staged)
            classified = []
            for subset in subsets:
                flags = track_optical_duplicates(subset.records, classifier, staged)
                classified.append(DuplicateSet(list(subset.records), flags))
        except DuplicateSetError as e:
            first = duplicate_set.records[0]
            logging.error(f"Failed to process duplicate set {self.sets_read} of {len(duplicate_set)} reads "
                          f"at {first.reference_index}:{first.coordinate}: {e}")
            raise

        self.stats.update(staged)
        return classified
