"""Run settings for the measurement orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from privacy_perf.measurement_types import LoggingLevel, MeasurementType

from .errors import ConfigurationError
from .runtime import env_float, env_list, env_seconds, env_str

DEFAULT_SECONDS = 30
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_SETTLE_SECONDS = 5
DEFAULT_TIMING_TIMEOUT_SECONDS = 10.0
MAX_TIMEOUT_SECONDS = 500
DEFAULT_MEASUREMENTS: Tuple[MeasurementType, ...] = (MeasurementType.NETWORK, MeasurementType.TIMING)


def _parse_measurements(raw_values: Tuple[str, ...]) -> Tuple[MeasurementType, ...]:
    choices = {member.value for member in MeasurementType}
    measurements = []
    for raw in raw_values:
        lowered = raw.lower()
        if lowered not in choices:
            raise ConfigurationError.unknown_choice("PERF_MEASUREMENTS", raw, choices)
        measurements.append(MeasurementType(lowered))
    return tuple(measurements)


def _parse_log_level(raw: str) -> LoggingLevel:
    choices = {member.value for member in LoggingLevel}
    lowered = raw.lower()
    if lowered not in choices:
        raise ConfigurationError.unknown_choice("PERF_LOG_LEVEL", raw, choices)
    return LoggingLevel(lowered)


@dataclass(frozen=True)
class RunSettings:
    """Timing and selection knobs for a single measurement run."""

    seconds: int = DEFAULT_SECONDS
    timeout: int = DEFAULT_TIMEOUT_SECONDS
    settle_seconds: int = DEFAULT_SETTLE_SECONDS
    timing_timeout: float = DEFAULT_TIMING_TIMEOUT_SECONDS
    measurements: Tuple[MeasurementType, ...] = DEFAULT_MEASUREMENTS
    log_level: LoggingLevel = LoggingLevel.INFO

    def __post_init__(self) -> None:
        if self.seconds <= 0:
            raise ConfigurationError.invalid_value("seconds", self.seconds, "Must be a positive integer")
        if self.timeout <= 0:
            raise ConfigurationError.invalid_value("timeout", self.timeout, "Must be a positive number")
        if self.timeout > MAX_TIMEOUT_SECONDS:
            raise ConfigurationError.invalid_value(
                "timeout",
                self.timeout,
                "Very high value; note this is seconds, not milliseconds",
            )
        if self.settle_seconds < 0:
            raise ConfigurationError.invalid_value("settle_seconds", self.settle_seconds, "Must be non-negative")
        if self.timing_timeout <= 0:
            raise ConfigurationError.invalid_value("timing_timeout", self.timing_timeout, "Must be positive")
        if not self.measurements:
            raise ConfigurationError.invalid_value(
                "measurements",
                self.measurements,
                "At least one measurement type is required",
            )

    @classmethod
    def from_env(cls) -> "RunSettings":
        """Build settings from ``PERF_*`` environment variables (or .env files)."""
        raw_measurements = env_list(
            "PERF_MEASUREMENTS",
            or_value=[member.value for member in DEFAULT_MEASUREMENTS],
        )
        return cls(
            seconds=env_seconds("PERF_SECONDS", DEFAULT_SECONDS),
            timeout=env_seconds("PERF_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
            settle_seconds=env_seconds("PERF_SETTLE_SECONDS", DEFAULT_SETTLE_SECONDS),
            timing_timeout=env_float("PERF_TIMING_TIMEOUT", DEFAULT_TIMING_TIMEOUT_SECONDS),
            measurements=_parse_measurements(raw_measurements or ()),
            log_level=_parse_log_level(env_str("PERF_LOG_LEVEL", LoggingLevel.INFO.value)),
        )


__all__ = ["RunSettings"]
