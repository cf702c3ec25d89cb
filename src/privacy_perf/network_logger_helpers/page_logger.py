"""Per-page network logging for one top level frame lifetime."""

from __future__ import annotations

import logging
import weakref
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from privacy_perf.data_models import NetDatapoint, WebSocketPayload, now_ms

from .datapoint_builder import build_request_datapoint, build_response_datapoint
from .redirect_chain import backfill_redirect_chain

if TYPE_CHECKING:
    from playwright.async_api import Request, Response

    from privacy_perf.network_logger import NetworkLogger

logger = logging.getLogger(__name__)


class PageNetworkLogger:
    """
    Accumulates request and response datapoints for a single page.

    The owning ``NetworkLogger`` is held through a weak reference and only
    queried for its closed state. Every write re-checks that state right
    before appending, since a close can land while a size lookup is awaited.
    """

    def __init__(self, owner: "NetworkLogger", page_url: str):
        self._owner_ref = weakref.ref(owner)
        self.page_url = page_url
        self.start_time = now_ms()
        self._requests: List[NetDatapoint] = []
        self._responses: List[NetDatapoint] = []
        self._seen_requests: "weakref.WeakKeyDictionary[Any, NetDatapoint]" = weakref.WeakKeyDictionary()
        self._seen_responses: "weakref.WeakKeyDictionary[Any, NetDatapoint]" = weakref.WeakKeyDictionary()

    @property
    def requests(self) -> List[NetDatapoint]:
        return list(self._requests)

    @property
    def responses(self) -> List[NetDatapoint]:
        return list(self._responses)

    def is_closed(self) -> bool:
        owner = self._owner_ref()
        if owner is None:
            return True
        return owner.is_closed()

    def has_request(self, request: "Request") -> bool:
        return request in self._seen_requests

    def _log_error_if_closed(self, kind: str, url: str) -> bool:
        if self.is_closed():
            logger.error('Tried to record "%s" but measurements are closed. url="%s"', kind, url)
            return True
        return False

    def add_websocket_request(self, url: str, payload: WebSocketPayload) -> Optional[NetDatapoint]:
        """Record a websocket frame sent by the page."""
        if self._log_error_if_closed("ws request", url):
            return None

        datapoint = NetDatapoint.for_websocket_frame(url, payload)
        self._requests.append(datapoint)
        logger.debug("Network (Sent) : %s", datapoint)
        return datapoint

    def add_websocket_response(self, url: str, payload: WebSocketPayload) -> Optional[NetDatapoint]:
        """Record a websocket frame received by the page."""
        if self._log_error_if_closed("ws response", url):
            return None

        datapoint = NetDatapoint.for_websocket_frame(url, payload)
        self._responses.append(datapoint)
        logger.debug("Network (Received) : %s", datapoint)
        return datapoint

    async def add_request(self, request: "Request") -> Optional[NetDatapoint]:
        """
        Record a request sent by the page.

        Args:
            request: Playwright request object

        Returns:
            The recorded datapoint (the earlier one if this request object was
            already recorded), or None when measurements are closed
        """
        if self._log_error_if_closed("request", request.url):
            return None
        existing = self._seen_requests.get(request)
        if existing is not None:
            return existing

        datapoint = await build_request_datapoint(request)

        if self._log_error_if_closed("request", request.url):
            return None
        existing = self._seen_requests.get(request)
        if existing is not None:
            return existing

        self._requests.append(datapoint)
        self._seen_requests[request] = datapoint
        logger.debug("Network (Sent) : %s", datapoint)
        return datapoint

    async def add_response(self, response: "Response") -> Optional[NetDatapoint]:
        """
        Record a response received by the page, then backfill any redirect
        hops that led to it.
        """
        if self._log_error_if_closed("response", response.url):
            return None
        existing = self._seen_responses.get(response)
        if existing is not None:
            return existing

        datapoint = await build_response_datapoint(response)

        if self._log_error_if_closed("response", response.url):
            return None
        existing = self._seen_responses.get(response)
        if existing is not None:
            return existing

        self._responses.append(datapoint)
        self._seen_responses[response] = datapoint
        logger.debug("Network (Received) : %s", datapoint)

        await backfill_redirect_chain(self, response.request)
        return datapoint

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meta": {
                "startTime": self.start_time,
                "url": self.page_url,
            },
            "requests": [datapoint.to_dict() for datapoint in self._requests],
            "responses": [datapoint.to_dict() for datapoint in self._responses],
        }


__all__ = ["PageNetworkLogger"]
