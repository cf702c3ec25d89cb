"""Build datapoints from Playwright request/response objects."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from privacy_perf.data_models import NetDatapoint

if TYPE_CHECKING:
    from playwright.async_api import Request, Response


def _non_negative(value: Any) -> int:
    """Playwright reports unknown sizes as -1."""
    try:
        size = int(value)
    except (TypeError, ValueError):
        return 0
    return size if size > 0 else 0


def _timestamp(timing: Mapping[str, float], offset_key: str) -> float:
    """
    Convert a Playwright timing offset into epoch milliseconds.

    Offsets are relative to ``startTime``; -1 means the phase was not
    observed, in which case the request start time is used.
    """
    start_time = float(timing.get("startTime", 0) or 0)
    offset = timing.get(offset_key, -1)
    if offset is None or offset < 0:
        return start_time
    return start_time + float(offset)


async def build_request_datapoint(request: "Request") -> NetDatapoint:
    sizes = await request.sizes()
    return NetDatapoint(
        size=_non_negative(sizes.get("requestHeadersSize")) + _non_negative(sizes.get("requestBodySize")),
        time=_timestamp(request.timing, "requestStart"),
        type=request.resource_type,
        url=request.url,
    )


async def build_response_datapoint(response: "Response") -> NetDatapoint:
    request = response.request
    sizes = await request.sizes()
    return NetDatapoint(
        size=_non_negative(sizes.get("responseHeadersSize")) + _non_negative(sizes.get("responseBodySize")),
        time=_timestamp(request.timing, "responseEnd"),
        type=request.resource_type,
        url=response.url,
    )


__all__ = ["build_request_datapoint", "build_response_datapoint"]
