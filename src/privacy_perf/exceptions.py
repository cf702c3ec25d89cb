"""Exception classes for the measurement core.

Only the fatal conditions of a run are raised as exceptions: instrumenting a
measurer twice and a navigation that produced no response. Everything else
is logged and degrades to a partial report.

Exception classes support two patterns:
1. No-argument raise: raise NavigationError()
2. Contextual attributes: err = NavigationError(url="https://x.test/"); raise err
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application errors.

    Supports keyword arguments that are stored as attributes for debugging.
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = self.__class__.__doc__ or "Application error occurred"
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


class MeasurementError(ApplicationError):
    """Measurement call-order contract was violated."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Measurement call-order contract was violated"
        super().__init__(message, **kwargs)


class InstrumentationError(MeasurementError):
    """Measurer was instrumented more than once."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Measurer was instrumented more than once"
        super().__init__(message, **kwargs)


class NavigationError(MeasurementError):
    """Top level navigation did not produce a response."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Top level navigation did not produce a response"
        super().__init__(message, **kwargs)


__all__ = [
    "ApplicationError",
    "InstrumentationError",
    "MeasurementError",
    "NavigationError",
]
