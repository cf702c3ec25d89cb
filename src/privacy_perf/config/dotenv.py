"""Minimal reader for ``.env`` style files (``KEY=value`` per line)."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Tuple

from .errors import ConfigurationError

_EXPORT_PREFIX = "export "
_QUOTES = "\"'"


def _split_assignment(line: str) -> Optional[Tuple[str, str]]:
    line = line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, value = line.split("=", 1)
    if key.startswith(_EXPORT_PREFIX):
        key = key[len(_EXPORT_PREFIX) :]
    key = key.strip()
    if not key:
        return None
    return key, value.strip().strip(_QUOTES)


def read_dotenv(path: Path) -> Dict[str, str]:
    """
    Read assignments from *path*; a missing file yields no values.

    Raises:
        ConfigurationError: If the file exists but cannot be read
    """
    if not path.exists():
        return {}
    try:
        text = path.read_text()
    except OSError as exc:
        raise ConfigurationError(f"Failed to read settings from {path}", path=str(path)) from exc

    values: Dict[str, str] = {}
    for line in text.splitlines():
        assignment = _split_assignment(line)
        if assignment is not None:
            key, value = assignment
            values[key] = value
    return values


__all__ = ["read_dotenv"]
