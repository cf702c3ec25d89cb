"""
Report structures assembled by the run orchestrator.

The JSON produced here is consumed by downstream comparison tooling, so the
key names and nesting must not change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

import orjson

from privacy_perf.measurement_types import MeasurementType


@dataclass(frozen=True)
class MeasurementResult:
    """Result returned by a measurer's ``collect()``."""

    type: MeasurementType
    data: Any


@dataclass
class Report:
    """Combined report for a single measured URL."""

    url: str
    start: datetime
    end: datetime
    measurements: Dict[MeasurementType, Optional[MeasurementResult]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """
        Render the report as plain data.

        Every measurement kind is present; kinds that were not requested or
        whose measurer produced nothing are ``None``.
        """
        measurements: Dict[str, Any] = {}
        for measurement_type in MeasurementType:
            result = self.measurements.get(measurement_type)
            measurements[measurement_type.value] = None if result is None else result.data

        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "url": self.url,
            "measurements": measurements,
        }

    def to_json(self, *, indent: bool = False) -> bytes:
        option = orjson.OPT_INDENT_2 if indent else 0
        return orjson.dumps(self.to_dict(), option=option)


__all__ = ["MeasurementResult", "Report"]
