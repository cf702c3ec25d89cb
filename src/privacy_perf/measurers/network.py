"""Network measurer: HTTP and websocket traffic per top level page."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional
from urllib.parse import urljoin

from privacy_perf.data_models import MeasurementResult, NavigationDatapoints
from privacy_perf.measurement_types import MeasurementType
from privacy_perf.network_logger import NetworkLogger
from privacy_perf.url_utils import is_public_web_url

from .base import BaseMeasurer

if TYPE_CHECKING:
    from playwright.async_api import BrowserContext, Frame, Page, Request, Response, WebSocket

    from privacy_perf.network_logger_helpers import PageNetworkLogger


class NetworkMeasurer(BaseMeasurer):
    """Subscribes a ``NetworkLogger`` to the browser context's events."""

    def __init__(self, url: str, context: "BrowserContext"):
        super().__init__(url, context)
        self.network_logger = NetworkLogger()

    def measurement_type(self) -> MeasurementType:
        return MeasurementType.NETWORK

    def instrument(self) -> None:
        super().instrument()
        self._subscribe(self.context, "page", self._watch_page)
        for page in self.context.pages:
            self._watch_page(page)

    def _watch_page(self, page: "Page") -> None:
        def on_frame_navigated(frame: "Frame") -> None:
            self._handle_frame_navigated(page, frame)

        self._subscribe(page, "framenavigated", on_frame_navigated)

    def _handle_frame_navigated(self, page: "Page", frame: "Frame") -> None:
        # Sub-frame traffic is already attributed to the owning top level page.
        if frame is not page.main_frame:
            return

        frame_url = urljoin(page.url, frame.url)
        if not is_public_web_url(frame_url):
            self.log_verbose("Not recording network for non-public URL: %s", frame_url)
            return

        if self.network_logger.logger_for_page(page) is not None:
            self.log_verbose('Page already recorded, ignoring navigation to url="%s"', frame_url)
            return

        page_logger = self.network_logger.measurements_for_new_top_frame(page)
        if page_logger is not None:
            self._instrument_page_content(page_logger, page)

    def _instrument_page_content(self, page_logger: "PageNetworkLogger", page: "Page") -> None:
        async def on_request(request: "Request") -> None:
            await page_logger.add_request(request)

        async def on_response(response: "Response") -> None:
            await page_logger.add_response(response)

        def on_websocket(websocket: "WebSocket") -> None:
            ws_url = websocket.url

            def on_frame_sent(payload: Any) -> None:
                page_logger.add_websocket_request(ws_url, payload)

            def on_frame_received(payload: Any) -> None:
                page_logger.add_websocket_response(ws_url, payload)

            self._subscribe(websocket, "framesent", on_frame_sent)
            self._subscribe(websocket, "framereceived", on_frame_received)

        self._subscribe(page, "request", on_request)
        self._subscribe(page, "response", on_response)
        self._subscribe(page, "websocket", on_websocket)

    async def add_init_navigation_response(self, page: "Page", response: "Response") -> Optional[NavigationDatapoints]:
        """Record the initial navigation, whose request precedes page instrumentation."""
        return await self.network_logger.add_page_navigation(page, response)

    def close_if_open(self) -> bool:
        if not super().close_if_open():
            return False
        self.network_logger.close()
        return True

    async def collect(self) -> Optional[MeasurementResult]:
        self.close_if_open()
        return MeasurementResult(type=self.measurement_type(), data=self.network_logger.to_dict())


__all__ = ["NetworkMeasurer"]
