"""Network datapoint records produced by the page loggers."""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Union

WEBSOCKET_RESOURCE_TYPE = "websocket"

WebSocketPayload = Union[str, bytes]


def now_ms() -> float:
    """Current wall clock time in epoch milliseconds."""
    return time.time() * 1000


@dataclass(frozen=True)
class NetDatapoint:
    """A single request or response observed on the network."""

    size: int
    time: float
    type: str
    url: str

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError(f"Datapoint size must be non-negative (got {self.size})")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def for_websocket_frame(cls, url: str, payload: WebSocketPayload) -> "NetDatapoint":
        """Build a datapoint for a websocket frame detected right now."""
        return cls(
            size=payload_size(payload),
            time=now_ms(),
            type=WEBSOCKET_RESOURCE_TYPE,
            url=url,
        )


@dataclass(frozen=True)
class NavigationDatapoints:
    """Request/response pair recorded for a top level navigation."""

    request: NetDatapoint
    response: NetDatapoint

    def to_dict(self) -> Dict[str, Any]:
        return {"request": self.request.to_dict(), "response": self.response.to_dict()}


def payload_size(payload: WebSocketPayload) -> int:
    """Size in bytes of a websocket payload, text frames measured as UTF-8."""
    if isinstance(payload, str):
        return len(payload.encode("utf-8"))
    return len(payload)


__all__ = [
    "NavigationDatapoints",
    "NetDatapoint",
    "WEBSOCKET_RESOURCE_TYPE",
    "WebSocketPayload",
    "now_ms",
    "payload_size",
]
