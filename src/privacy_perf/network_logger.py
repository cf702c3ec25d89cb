"""
Session-wide network logging.

A ``NetworkLogger`` owns one ``PageNetworkLogger`` per top level page seen
during a measurement run. It moves from open to closed exactly once; after
that no page may be added and no datapoint may be appended.
"""

from __future__ import annotations

import logging
import weakref
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from privacy_perf.data_models import NavigationDatapoints, now_ms
from privacy_perf.network_logger_helpers import PageNetworkLogger

if TYPE_CHECKING:
    from playwright.async_api import Page, Response

logger = logging.getLogger(__name__)


class NetworkLogger:
    """Collects network datapoints for every top level page in a session."""

    def __init__(self) -> None:
        self.start_time = now_ms()
        self.end_time: Optional[float] = None
        self._is_closed = False
        self._page_loggers: List[PageNetworkLogger] = []
        self._page_to_logger: "weakref.WeakKeyDictionary[Any, PageNetworkLogger]" = weakref.WeakKeyDictionary()

    def is_closed(self) -> bool:
        return self._is_closed

    def page_count(self) -> int:
        return len(self._page_loggers)

    def logger_for_page(self, page: "Page") -> Optional[PageNetworkLogger]:
        return self._page_to_logger.get(page)

    def measurements_for_new_top_frame(self, page: "Page") -> Optional[PageNetworkLogger]:
        """
        Start logging for a page whose top level frame just navigated.

        Args:
            page: Playwright page that navigated

        Returns:
            The new page logger, or None when measurements are closed
        """
        if self.is_closed():
            logger.error(
                'Trying to add measurements for new top frame but measurements have been closed. page url="%s"',
                page.url,
            )
            return None

        assert page not in self._page_to_logger, f'Page registered twice for network logging. page url="{page.url}"'

        page_logger = PageNetworkLogger(self, page.url)
        self._page_loggers.append(page_logger)
        self._page_to_logger[page] = page_logger
        logger.info('Recording network measurements for page url="%s"', page.url)
        return page_logger

    async def add_page_navigation(self, page: "Page", response: "Response") -> Optional[NavigationDatapoints]:
        """
        Record the request/response pair of a top level navigation.

        Returns None when measurements are closed (before or during the call)
        or when the page was never registered, which only means the
        navigation event raced page registration.
        """
        if self.is_closed():
            logger.error(
                'Trying to record top frame navigation, but measurements have been closed. page url="%s"',
                page.url,
            )
            return None

        page_logger = self._page_to_logger.get(page)
        if page_logger is None:
            logger.error('Page navigation for an unknown page. page url="%s"', page.url)
            return None

        request_datapoint = await page_logger.add_request(response.request)
        if request_datapoint is None:
            return None
        response_datapoint = await page_logger.add_response(response)
        if response_datapoint is None:
            return None

        return NavigationDatapoints(request=request_datapoint, response=response_datapoint)

    def close(self) -> bool:
        if self.is_closed():
            logger.error("Trying to close already closed network measurements")
            return False
        self.end_time = now_ms()
        self._is_closed = True
        logger.debug("Closing network measurements")
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meta": {
                "startTime": self.start_time,
                "endTime": self.end_time,
            },
            "pages": [page_logger.to_dict() for page_logger in self._page_loggers],
        }


__all__ = ["NetworkLogger"]
