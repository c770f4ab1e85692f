"""Environment parsing helpers for string and numeric settings."""

from __future__ import annotations

import os
from typing import Optional


def get_str(name: str, default: Optional[str] = None) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def get_int(name: str, default: int, *, minimum: Optional[int] = None) -> int:
    """Parse an integer env var, falling back to ``default`` when invalid."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if minimum is not None and value < minimum:
        return default
    return value


__all__ = ["get_int", "get_str"]
