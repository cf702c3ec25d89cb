"""Timing measurer: navigation timing and largest-contentful-paint per page."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from playwright.async_api import Error as PlaywrightError

from privacy_perf.data_models import MeasurementResult
from privacy_perf.measurement_types import MeasurementType
from privacy_perf.url_utils import is_public_web_url

from .base import BaseMeasurer

if TYPE_CHECKING:
    from playwright.async_api import BrowserContext, Page

DEFAULT_TIMING_TIMEOUT_SECONDS = 10.0

# Resolves once a largest-contentful-paint entry has been observed; buffered
# entries count, so this also works after the page finished loading.
PAGE_TIMING_SCRIPT = """
() => {
  return new Promise((resolve) => {
    const navEntry = window.performance.getEntriesByType("navigation")[0];
    const observer = new PerformanceObserver((list) => {
      const entries = list.getEntries();
      const lastLCPEntry = entries[entries.length - 1];
      observer.disconnect();
      resolve({
        navigation: navEntry ? navEntry.toJSON() : null,
        lcp: lastLCPEntry.toJSON(),
      });
    });
    observer.observe({type: "largest-contentful-paint", buffered: true});
  });
}
"""


class TimingMeasurer(BaseMeasurer):
    """Reads page timing from every open public page at collection time."""

    def __init__(
        self,
        url: str,
        context: "BrowserContext",
        *,
        timing_timeout: float = DEFAULT_TIMING_TIMEOUT_SECONDS,
    ):
        super().__init__(url, context)
        self.timing_timeout = timing_timeout

    def measurement_type(self) -> MeasurementType:
        return MeasurementType.TIMING

    async def _timing_for_page(self, page: "Page") -> Optional[Dict[str, Any]]:
        page_url = page.url
        self.log_info("Fetching timing information for page url=%s", page_url)
        try:
            page_data = await asyncio.wait_for(page.evaluate(PAGE_TIMING_SCRIPT), timeout=self.timing_timeout)
        except asyncio.TimeoutError:
            self.log_error("Timed out after %ss waiting for LCP on page url=%s", self.timing_timeout, page_url)
            return None
        except PlaywrightError as exc:
            self.log_error("Failed to read timing for page url=%s: %s", page_url, exc)
            return None
        return {"url": page_url, "data": page_data}

    async def collect(self) -> Optional[MeasurementResult]:
        if self.is_context_closed:
            self.log_info("Tried to collect results from a closed browser context")
            return None

        timing_measurements: List[Dict[str, Any]] = []
        for page in self.context.pages:
            if not is_public_web_url(page.url):
                self.log_verbose("Not fetching timing for non-public URL: %s", page.url)
                continue

            timing = await self._timing_for_page(page)
            if timing is not None:
                timing_measurements.append(timing)

        return MeasurementResult(type=self.measurement_type(), data=timing_measurements)


__all__ = ["DEFAULT_TIMING_TIMEOUT_SECONDS", "PAGE_TIMING_SCRIPT", "TimingMeasurer"]
