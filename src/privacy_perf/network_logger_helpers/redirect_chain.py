"""Redirect chain reconstruction for responses that ended a redirect sequence."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List

from privacy_perf.data_models import NetDatapoint

if TYPE_CHECKING:
    from playwright.async_api import Request

    from .page_logger import PageNetworkLogger

logger = logging.getLogger(__name__)


async def backfill_redirect_chain(page_logger: "PageNetworkLogger", final_request: "Request") -> List[NetDatapoint]:
    """
    Record every earlier hop of the redirect chain that ended in *final_request*.

    Some engines only emit events for the last hop of a redirect, so the
    chain is walked backwards through ``redirected_from``. Hops the page
    logger has already seen are not appended again.

    Args:
        page_logger: Page logger that recorded the final response
        final_request: Request of the response that ended the chain

    Returns:
        Datapoints appended while walking the chain, newest hop first
    """
    appended: List[NetDatapoint] = []
    current = final_request
    previous = current.redirected_from
    while previous is not None:
        if page_logger.has_request(previous):
            logger.debug("Redirect hop already recorded url=%s", previous.url)
        else:
            recorded_before = len(page_logger.requests)
            datapoint = await page_logger.add_request(previous)
            if datapoint is None:
                break
            # The hop may have been recorded live while its sizes were awaited.
            if len(page_logger.requests) > recorded_before:
                appended.append(datapoint)
        current = previous
        previous = current.redirected_from
    return appended


__all__ = ["backfill_redirect_chain"]
