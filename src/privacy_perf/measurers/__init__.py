"""Measurer variants and the factory used by the run orchestrator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Type

from privacy_perf.measurement_types import MeasurementType

from .base import BaseMeasurer, MeasurerLifecycle
from .network import NetworkMeasurer
from .timing import TimingMeasurer

if TYPE_CHECKING:
    from playwright.async_api import BrowserContext

MEASURER_TYPES: Dict[MeasurementType, Type[BaseMeasurer]] = {
    MeasurementType.NETWORK: NetworkMeasurer,
    MeasurementType.TIMING: TimingMeasurer,
}


def create_measurer(
    measurement_type: MeasurementType,
    url: str,
    context: "BrowserContext",
    *,
    timing_timeout: float | None = None,
) -> BaseMeasurer:
    """Construct the measurer for *measurement_type* (not yet instrumented)."""
    if measurement_type is MeasurementType.TIMING and timing_timeout is not None:
        return TimingMeasurer(url, context, timing_timeout=timing_timeout)
    return MEASURER_TYPES[measurement_type](url, context)


__all__ = [
    "BaseMeasurer",
    "MEASURER_TYPES",
    "MeasurerLifecycle",
    "NetworkMeasurer",
    "TimingMeasurer",
    "create_measurer",
]
