"""
dupsets: UMI-aware refinement of duplicate read sets with optical duplicate tracking.

Splits position-based duplicate sets by molecular identifier, classifies optical
duplicates per read orientation and collects duplicate set size histograms.
"""

__version__ = "0.1.0"

from .exceptions import (
    DuplicateSetError,
    MalformedTagError,
    OpticalFinderError,
    UnexpectedOrientationError,
)
from .types import FR, RF, DuplicateSet, ReadEnd
from .umi import split_by_umi
from .optical import OpticalDuplicateClassifier, partition_by_orientation, track_optical_duplicates
from .metrics import DuplicateSetStats
from .config import DuplicateSetConfig, configure_logging
from .iterator import UmiAwareDuplicateSetIterator

__all__ = [
    "FR",
    "RF",
    "ReadEnd",
    "DuplicateSet",
    "DuplicateSetError",
    "MalformedTagError",
    "UnexpectedOrientationError",
    "OpticalFinderError",
    "split_by_umi",
    "partition_by_orientation",
    "OpticalDuplicateClassifier",
    "track_optical_duplicates",
    "DuplicateSetStats",
    "DuplicateSetConfig",
    "configure_logging",
    "UmiAwareDuplicateSetIterator",
    "__version__",
]
