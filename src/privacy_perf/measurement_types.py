"""
Canonical enum definitions shared by measurers, the orchestrator and config.

Enum values are the strings used in reports and configuration, so they must
stay stable across releases.
"""

import logging
from enum import Enum


class MeasurementType(Enum):
    """Kinds of measurement a run can collect."""

    NETWORK = "network"
    TIMING = "timing"


class LoggingLevel(Enum):
    """
    User-facing verbosity levels.

    ``NONE`` still lets errors through; ``VERBOSE`` includes every recorded
    datapoint.
    """

    NONE = "none"
    INFO = "info"
    VERBOSE = "verbose"

    def to_logging_level(self) -> int:
        return _LOGGING_LEVELS[self]


_LOGGING_LEVELS = {
    LoggingLevel.NONE: logging.ERROR,
    LoggingLevel.INFO: logging.INFO,
    LoggingLevel.VERBOSE: logging.DEBUG,
}
