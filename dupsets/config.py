"""Configuration for duplicate set refinement."""

import logging
from dataclasses import dataclass, fields
from typing import Any, Mapping


LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


@dataclass
class DuplicateSetConfig:
    """Configuration for UmiAwareDuplicateSetIterator.

    Attributes:
        umi_aware: Split duplicate sets by UMI before optical classification
        show_progress: Show a tqdm progress bar of duplicate sets read
        log_summary: Log histogram totals once the source is exhausted
    """
    umi_aware: bool = True
    show_progress: bool = False
    log_summary: bool = True

    @classmethod
    def from_args(cls, args) -> 'DuplicateSetConfig':
        """Create config from parsed command-line arguments.

        Missing attributes fall back to the defaults, so any namespace-like
        object can be passed.
        """
        return cls(
            umi_aware=getattr(args, 'umi_aware', cls.umi_aware),
            show_progress=getattr(args, 'show_progress', cls.show_progress),
            log_summary=getattr(args, 'log_summary', cls.log_summary),
        )

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> 'DuplicateSetConfig':
        """Create config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in values.items() if key in known})


def configure_logging(log_level: str = "INFO") -> None:
    """Set up standard logging the same way for every entry point."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=LOG_FORMAT
    )
