"""Tests for DuplicateSetStats histogram accounting."""

import logging

import pytest

from dupsets.metrics import DuplicateSetStats


def test_record_size_seven_with_two_optical():
    stats = DuplicateSetStats()
    stats.record(7, 2)

    assert stats.duplicate_set_size_hist == {6: 1}
    assert stats.non_optical_duplicate_set_size_hist == {4: 1}
    assert stats.optical_duplicate_set_size_hist == {2: 1}


def test_record_singleton_only_touches_size_histogram():
    stats = DuplicateSetStats()
    stats.record(1, 0)

    assert stats.duplicate_set_size_hist == {0: 1}
    assert stats.non_optical_duplicate_set_size_hist == {}
    assert stats.optical_duplicate_set_size_hist == {}


def test_record_all_duplicates_optical():
    """Set of 3 where both duplicates are optical has no non-optical entry."""
    stats = DuplicateSetStats()
    stats.record(3, 2)

    assert stats.duplicate_set_size_hist == {2: 1}
    assert stats.non_optical_duplicate_set_size_hist == {}
    assert stats.optical_duplicate_set_size_hist == {2: 1}


def test_record_accumulates():
    stats = DuplicateSetStats()
    for size, optical in [(2, 0), (2, 0), (5, 1), (1, 0)]:
        stats.record(size, optical)

    assert stats.duplicate_set_size_hist == {0: 1, 1: 2, 4: 1}
    assert stats.non_optical_duplicate_set_size_hist == {1: 2, 3: 1}
    assert stats.optical_duplicate_set_size_hist == {1: 1}
    assert stats.total_duplicate_sets == 4


@pytest.mark.parametrize("size,optical", [(0, 0), (2, -1), (2, 3)])
def test_record_rejects_invalid_counts(size, optical):
    with pytest.raises(ValueError):
        DuplicateSetStats().record(size, optical)


def test_accessors_return_copies():
    stats = DuplicateSetStats()
    stats.record(2, 0)
    hist = stats.duplicate_set_size_hist
    hist[1] = 100

    assert stats.duplicate_set_size_hist == {1: 1}


def test_library_optical_duplicates():
    stats = DuplicateSetStats()
    stats.add_library_optical_duplicates(2, 3)
    stats.add_library_optical_duplicates(1, 1)
    stats.add_library_optical_duplicates(2, 1)

    assert stats.optical_duplicates_by_library == {1: 1, 2: 4}
    assert stats.optical_duplicates_for_library(2) == 4
    assert stats.optical_duplicates_for_library(7) == 0


def test_update_merges_counts():
    first = DuplicateSetStats()
    first.record(3, 1)
    first.add_library_optical_duplicates(1, 1)
    second = DuplicateSetStats()
    second.record(3, 0)
    second.add_library_optical_duplicates(1, 2)

    first.update(second)

    assert first.duplicate_set_size_hist == {2: 2}
    assert first.non_optical_duplicate_set_size_hist == {1: 1, 2: 1}
    assert first.optical_duplicate_set_size_hist == {1: 1}
    assert first.optical_duplicates_by_library == {1: 3}


def test_histogram_rows():
    stats = DuplicateSetStats()
    stats.record(1, 0)
    stats.record(4, 1)

    assert stats.histogram_rows() == [
        {'bin': 0, 'duplicate_sets': 1, 'non_optical_sets': 0, 'optical_sets': 0},
        {'bin': 1, 'duplicate_sets': 0, 'non_optical_sets': 0, 'optical_sets': 1},
        {'bin': 2, 'duplicate_sets': 0, 'non_optical_sets': 1, 'optical_sets': 0},
        {'bin': 3, 'duplicate_sets': 1, 'non_optical_sets': 0, 'optical_sets': 0},
    ]


def test_log_summary(caplog):
    stats = DuplicateSetStats()
    stats.record(3, 1)
    stats.add_library_optical_duplicates(5, 1)

    with caplog.at_level(logging.INFO):
        stats.log_summary()

    assert "Processed 1 duplicate sets" in caplog.text
    assert "Library 5: 1 optical duplicates" in caplog.text
