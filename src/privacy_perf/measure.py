"""
Run orchestration: instrument measurers, navigate, dwell, close, collect.

Measurers are instrumented before the first navigation so no event is
missed, and they are always closed, even when navigation fails.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Dict, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from privacy_perf.config import RunSettings
from privacy_perf.data_models import MeasurementResult, Report
from privacy_perf.exceptions import NavigationError
from privacy_perf.measurement_types import MeasurementType
from privacy_perf.measurers import BaseMeasurer, NetworkMeasurer, create_measurer

if TYPE_CHECKING:
    from playwright.async_api import BrowserContext, Page

logger = logging.getLogger(__name__)


def build_measurers(url: str, context: "BrowserContext", settings: RunSettings) -> Dict[MeasurementType, BaseMeasurer]:
    """Create and instrument one measurer per requested measurement type."""
    measurers: Dict[MeasurementType, BaseMeasurer] = {}
    for measurement_type in settings.measurements:
        measurer = create_measurer(measurement_type, url, context, timing_timeout=settings.timing_timeout)
        measurer.instrument()
        measurers[measurement_type] = measurer
    return measurers


async def _navigate(
    page: "Page",
    url: str,
    settings: RunSettings,
    measurers: Dict[MeasurementType, BaseMeasurer],
) -> bool:
    logger.info('Navigating to url="%s"', url)
    try:
        response = await page.goto(url, timeout=settings.timeout * 1000, wait_until="commit")
    except PlaywrightTimeoutError as exc:
        logger.error('Navigation to url="%s" timed out after %ss: %s', url, settings.timeout, exc)
        return False
    except PlaywrightError as exc:
        logger.error('Navigation to url="%s" failed: %s', url, exc)
        return False

    if response is None:
        raise NavigationError(f'Navigation to url="{url}" did not produce a response', url=url)

    logger.info('Arrived at url="%s"', page.url)
    network_measurer = measurers.get(MeasurementType.NETWORK)
    if isinstance(network_measurer, NetworkMeasurer):
        await network_measurer.add_init_navigation_response(page, response)
    return True


def close_measurers(measurers: Dict[MeasurementType, BaseMeasurer]) -> None:
    for measurer in measurers.values():
        measurer.close()


async def collect_measurements(
    measurers: Dict[MeasurementType, BaseMeasurer],
) -> Dict[MeasurementType, Optional[MeasurementResult]]:
    results: Dict[MeasurementType, Optional[MeasurementResult]] = {}
    for measurement_type, measurer in measurers.items():
        results[measurement_type] = await measurer.collect()
    return results


async def measure_url(
    context: "BrowserContext",
    url: str,
    settings: Optional[RunSettings] = None,
) -> Report:
    """
    Measure a single URL in an already launched browser context.

    Args:
        context: Playwright browser context to drive
        url: Page to measure
        settings: Run settings; read from the environment when omitted

    Returns:
        Combined report; measurement kinds that produced nothing are None

    Raises:
        NavigationError: If navigation finished without a response
    """
    settings = settings or RunSettings.from_env()
    measurers = build_measurers(url, context, settings)

    page = await context.new_page()
    start = datetime.now(timezone.utc)
    try:
        if await _navigate(page, url, settings, measurers):
            logger.info('Letting page load for "%s" seconds', settings.seconds)
            await asyncio.sleep(settings.seconds)
    finally:
        close_measurers(measurers)

    # Give pending size/timing lookups a chance to finish before collecting.
    await asyncio.sleep(settings.settle_seconds)

    results = await collect_measurements(measurers)
    await context.close()

    return Report(
        url=url,
        start=start,
        end=datetime.now(timezone.utc),
        measurements=results,
    )


__all__ = ["build_measurers", "close_measurers", "collect_measurements", "measure_url"]
