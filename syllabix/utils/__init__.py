"""Shared helpers for logging, telemetry, caching and configuration."""

from .cache import BoundedLRUCache
from .env import get_int, get_str
from .logging_config import configure_logging
from .observability import get_logger
from .syllables import estimate_syllable_count
from .telemetry import StructuredTelemetry, TelemetryLogger

__all__ = [
    "BoundedLRUCache",
    "StructuredTelemetry",
    "TelemetryLogger",
    "configure_logging",
    "estimate_syllable_count",
    "get_int",
    "get_logger",
    "get_str",
]
