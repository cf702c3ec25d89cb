"""Helpers for NetworkLogger: page loggers, datapoint construction, redirects."""

from .datapoint_builder import build_request_datapoint, build_response_datapoint
from .page_logger import PageNetworkLogger
from .redirect_chain import backfill_redirect_chain

__all__ = [
    "PageNetworkLogger",
    "backfill_redirect_chain",
    "build_request_datapoint",
    "build_response_datapoint",
]
