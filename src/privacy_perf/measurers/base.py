"""Shared lifecycle for measurers: instrument, close, collect."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Tuple

from privacy_perf.exceptions import InstrumentationError
from privacy_perf.measurement_types import MeasurementType

if TYPE_CHECKING:
    from playwright.async_api import BrowserContext

    from privacy_perf.data_models import MeasurementResult

logger = logging.getLogger(__name__)

Subscription = Tuple[Any, str, Callable[..., Any]]


@dataclass
class MeasurerLifecycle:
    """Lifecycle timestamps and flags common to every measurer."""

    instrumented_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    context_closed: bool = False

    @property
    def is_instrumented(self) -> bool:
        return self.instrumented_at is not None

    @property
    def is_closed(self) -> bool:
        return self.closed_at is not None


class BaseMeasurer:
    """
    Base class for measurers.

    Subclasses provide ``measurement_type()`` and ``collect()`` and extend
    ``instrument()`` to register their event handlers through
    ``_subscribe`` so the handlers are removed again on close.
    """

    def __init__(self, url: str, context: "BrowserContext"):
        self.url = url
        self.context = context
        self.lifecycle = MeasurerLifecycle()
        self._subscriptions: List[Subscription] = []

    def measurement_type(self) -> MeasurementType:
        raise NotImplementedError

    @property
    def is_context_closed(self) -> bool:
        return self.lifecycle.context_closed

    def _log(self, level: int, msg: str, *args: Any) -> None:
        logger.log(level, "MEASURER: %s : " + msg, self.measurement_type().value.upper(), *args)

    def log_info(self, msg: str, *args: Any) -> None:
        self._log(logging.INFO, msg, *args)

    def log_verbose(self, msg: str, *args: Any) -> None:
        self._log(logging.DEBUG, msg, *args)

    def log_error(self, msg: str, *args: Any) -> None:
        self._log(logging.ERROR, msg, *args)

    def _subscribe(self, emitter: Any, event: str, handler: Callable[..., Any]) -> None:
        emitter.on(event, handler)
        self._subscriptions.append((emitter, event, handler))

    def _unsubscribe_all(self) -> None:
        while self._subscriptions:
            emitter, event, handler = self._subscriptions.pop()
            emitter.remove_listener(event, handler)

    def _on_context_close(self, *_: Any) -> None:
        self.lifecycle.context_closed = True
        self.log_verbose("Browser context closed")

    def instrument(self) -> None:
        """
        Start observing the browser context.

        Raises:
            InstrumentationError: If this measurer was already instrumented
        """
        if self.lifecycle.instrumented_at is not None:
            raise InstrumentationError(
                "Trying to instrument a measurer instance after it was instrumented at "
                f'"{self.lifecycle.instrumented_at.isoformat()}"',
                measurement_type=self.measurement_type(),
            )
        self.lifecycle.instrumented_at = datetime.now(timezone.utc)
        # Not tracked by _subscribe: collect() after close() still needs the context state.
        self.context.on("close", self._on_context_close)

    def close(self) -> bool:
        if self.lifecycle.closed_at is not None:
            self.log_error(
                "Tried to close measurement, but it was already closed at %s",
                self.lifecycle.closed_at.isoformat(),
            )
            return False
        self.close_if_open()
        return True

    def close_if_open(self) -> bool:
        if self.lifecycle.closed_at is not None:
            return False
        self.lifecycle.closed_at = datetime.now(timezone.utc)
        self._unsubscribe_all()
        self.log_verbose("Ending measurement at %s", self.lifecycle.closed_at.isoformat())
        return True

    async def collect(self) -> Optional["MeasurementResult"]:
        raise NotImplementedError


__all__ = ["BaseMeasurer", "MeasurerLifecycle"]
