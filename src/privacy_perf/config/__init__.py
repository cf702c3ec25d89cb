"""Shared configuration helpers and run settings."""

from .errors import ConfigurationError
from .runtime import (
    env_bool,
    env_float,
    env_int,
    env_list,
    env_seconds,
    env_str,
    reset_default_values,
)
from .settings import RunSettings

__all__ = [
    "ConfigurationError",
    "RunSettings",
    "env_bool",
    "env_float",
    "env_int",
    "env_list",
    "env_seconds",
    "env_str",
    "reset_default_values",
]
