"""Configuration error type."""

from __future__ import annotations

from typing import Any, Iterable

from privacy_perf.exceptions import ApplicationError


class ConfigurationError(ApplicationError):
    """A setting is missing or could not be parsed."""

    @classmethod
    def not_set(cls, setting: str) -> "ConfigurationError":
        return cls(f"Required setting {setting!r} is not set", setting=setting)

    @classmethod
    def malformed(cls, setting: str, raw: str, expected: str) -> "ConfigurationError":
        return cls(f"Setting {setting!r} must be {expected} (got {raw!r})", setting=setting, raw=raw)

    @classmethod
    def invalid_value(cls, setting: str, value: Any, reason: str) -> "ConfigurationError":
        return cls(f"Invalid value for {setting}: {value!r}. {reason}", setting=setting, raw=value)

    @classmethod
    def unknown_choice(cls, setting: str, raw: str, choices: Iterable[str]) -> "ConfigurationError":
        allowed = ", ".join(sorted(choices))
        return cls(f"{setting} must be one of [{allowed}] (got {raw!r})", setting=setting, raw=raw)


__all__ = ["ConfigurationError"]
