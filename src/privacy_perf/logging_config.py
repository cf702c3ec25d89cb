"""
Centralized logging configuration for measurement runs.

Provides a single setup_logging function that configures the root logger
with:
- Console output on stdout at the level chosen by ``LoggingLevel``
- Optional file output (fresh file per run unless PERF_LOG_APPEND=1)
- Quieter third-party loggers
"""

import logging
import sys
import threading
from pathlib import Path
from typing import Optional, Union

from privacy_perf.config import env_bool, env_str
from privacy_perf.measurement_types import LoggingLevel

# Thread-safe lock for logging configuration
_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)

_TECHNICAL_FORMAT = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Union[LoggingLevel, str, None]) -> LoggingLevel:
    if isinstance(level, LoggingLevel):
        return level
    raw = level if level is not None else env_str("PERF_LOG_LEVEL", LoggingLevel.INFO.value)
    try:
        return LoggingLevel(str(raw).lower())
    except ValueError:
        _MODULE_LOGGER.warning("Unknown logging level %r, falling back to info", raw)
        return LoggingLevel.INFO


def _close_handlers(target: logging.Logger) -> None:
    for handler in list(target.handlers):
        try:
            handler.close()
        except OSError as exc:
            _MODULE_LOGGER.debug("Handler close failed for logger '%s': %s", target.name, exc)
        target.removeHandler(handler)


def _build_console_handler(level: int) -> logging.Handler:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(_TECHNICAL_FORMAT, _DATE_FORMAT))
    console_handler.setLevel(level)
    return console_handler


def _build_file_handler(log_file: Path, level: int) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_mode = "a" if env_bool("PERF_LOG_APPEND", or_value=False) else "w"
    file_handler = logging.FileHandler(log_file, mode=file_mode)
    file_handler.setFormatter(logging.Formatter(_TECHNICAL_FORMAT, _DATE_FORMAT))
    file_handler.setLevel(level)
    return file_handler


def _suppress_noisy_third_parties() -> None:
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("playwright").setLevel(logging.WARNING)


def setup_logging(
    level: Union[LoggingLevel, str, None] = None,
    log_file: Optional[Path] = None,
) -> LoggingLevel:
    """
    Configure logging for a measurement run.

    Args:
        level: Verbosity; defaults to PERF_LOG_LEVEL, then ``info``
        log_file: Optional path that receives the same records as the console

    Returns:
        The verbosity that was applied
    """
    resolved = _resolve_level(level)
    numeric_level = resolved.to_logging_level()

    with _config_lock:
        root_logger = logging.getLogger()
        _close_handlers(root_logger)

        root_logger.addHandler(_build_console_handler(numeric_level))
        if log_file is not None:
            root_logger.addHandler(_build_file_handler(Path(log_file), numeric_level))

        root_logger.setLevel(numeric_level)
        _suppress_noisy_third_parties()

    return resolved


__all__ = ["setup_logging"]
