"""
Typed lookups for ``PERF_*`` settings.

Values come from the process environment first, then from the first
``.env`` candidate file that defines them. Blank values count as unset.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence, Tuple, TypeVar

from .dotenv import read_dotenv
from .errors import ConfigurationError

T = TypeVar("T")

_TRUE_VALUES = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSE_VALUES = frozenset({"0", "false", "f", "no", "n", "off"})

_DOTENV_CANDIDATES: Tuple[Path, ...] = (Path(".env"), Path.home() / ".privacy_perf.env")

_dotenv_cache: Optional[Dict[str, str]] = None


def _dotenv_values() -> Dict[str, str]:
    global _dotenv_cache
    if _dotenv_cache is None:
        merged: Dict[str, str] = {}
        for candidate in _DOTENV_CANDIDATES:
            for key, value in read_dotenv(candidate).items():
                merged.setdefault(key, value)
        _dotenv_cache = merged
    return _dotenv_cache


def reset_default_values() -> None:
    """Drop cached ``.env`` values so the next lookup reads the files again."""
    global _dotenv_cache
    _dotenv_cache = None


def _lookup(name: str) -> Optional[str]:
    for raw in (os.environ.get(name), _dotenv_values().get(name)):
        if raw is not None and raw.strip():
            return raw.strip()
    return None


def _typed(name: str, default: Optional[T], parse: Callable[[str], T], expected: str) -> Optional[T]:
    raw = _lookup(name)
    if raw is None:
        return default
    try:
        return parse(raw)
    except ValueError as exc:
        raise ConfigurationError.malformed(name, raw, expected) from exc


def env_str(name: str, or_value: Optional[str] = None, *, required: bool = False) -> Optional[str]:
    raw = _lookup(name)
    if raw is None and required:
        raise ConfigurationError.not_set(name)
    return raw if raw is not None else or_value


def env_int(name: str, or_value: Optional[int] = None) -> Optional[int]:
    return _typed(name, or_value, int, "an integer")


def env_float(name: str, or_value: Optional[float] = None) -> Optional[float]:
    return _typed(name, or_value, float, "a number")


def _parse_bool(raw: str) -> bool:
    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(raw)


def env_bool(name: str, or_value: Optional[bool] = None) -> Optional[bool]:
    return _typed(name, or_value, _parse_bool, "a boolean")


def env_list(
    name: str,
    *,
    or_value: Optional[Sequence[str]] = None,
    separator: str = ",",
) -> Optional[Tuple[str, ...]]:
    """Split a delimited setting, dropping blank items and repeats (first wins)."""
    raw = _lookup(name)
    if raw is None:
        return None if or_value is None else tuple(or_value)

    items = (item.strip() for item in raw.split(separator))
    return tuple(dict.fromkeys(item for item in items if item))


def env_seconds(name: str, or_value: Optional[int] = None) -> Optional[int]:
    """Whole seconds; negative durations are rejected."""
    value = env_int(name, or_value)
    if value is not None and value < 0:
        raise ConfigurationError.invalid_value(name, value, "Must be non-negative")
    return value


__all__ = [
    "env_bool",
    "env_float",
    "env_int",
    "env_list",
    "env_seconds",
    "env_str",
    "reset_default_values",
]
