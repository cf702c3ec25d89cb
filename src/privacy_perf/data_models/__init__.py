"""Data models for network datapoints and run reports."""

from .datapoint import (
    WEBSOCKET_RESOURCE_TYPE,
    NavigationDatapoints,
    NetDatapoint,
    WebSocketPayload,
    now_ms,
    payload_size,
)
from .report import MeasurementResult, Report

__all__ = [
    "MeasurementResult",
    "NavigationDatapoints",
    "NetDatapoint",
    "Report",
    "WEBSOCKET_RESOURCE_TYPE",
    "WebSocketPayload",
    "now_ms",
    "payload_size",
]
