"""Opt-in logging setup for applications that embed syllabix."""

from __future__ import annotations

import logging
from typing import Optional, Union

from .env import get_str

PACKAGE_LOGGER = "syllabix"
LOG_LEVEL_ENV = "SYLLABIX_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_CONFIGURED = False


def resolve_level(level: Union[str, int, None]) -> int:
    """Turn a level name or number into a ``logging`` level; ``WARNING`` if unknown."""

    if isinstance(level, int):
        return level
    text = (level or "").strip()
    if not text:
        return logging.WARNING
    if text.isdigit():
        return int(text)
    resolved = logging.getLevelName(text.upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def configure_logging(level: Optional[Union[str, int]] = None, *, force: bool = False) -> int:
    """Install a root handler and set the ``syllabix`` logger level.

    The level comes from ``level``, then ``SYLLABIX_LOG_LEVEL``, then
    ``WARNING``; per-word debug records stay hidden unless asked for. Only the
    first call has an effect unless ``force`` is set. Returns the level used.
    """

    global _CONFIGURED

    resolved = resolve_level(level if level is not None else get_str(LOG_LEVEL_ENV))
    if _CONFIGURED and not force:
        return logging.getLogger(PACKAGE_LOGGER).level or resolved

    logging.basicConfig(level=resolved, format=LOG_FORMAT, force=force)
    logging.getLogger(PACKAGE_LOGGER).setLevel(resolved)
    _CONFIGURED = True
    return resolved


__all__ = ["LOG_LEVEL_ENV", "configure_logging", "resolve_level"]
