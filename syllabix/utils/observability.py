"""Structured logging, Prometheus metrics and OpenTelemetry spans for syllabix.

The metrics below are registered once on the default Prometheus registry and
shared by the core and service modules. Applications expose them with any
``prometheus_client`` exporter; nothing here starts a server.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence

from opentelemetry import trace
from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

TRACER_NAME = "syllabix"

# Single-word lookups are sub-millisecond once the dictionary is loaded.
WORD_LATENCY_BUCKETS = (0.00005, 0.0001, 0.00025, 0.0005, 0.001, 0.0025, 0.01, 0.05, 0.25)
TEXT_SIZE_BUCKETS = (1, 10, 50, 100, 250, 500, 1000, 2500, 5000)


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that appends bound and per-call context as JSON.

    ``logger.bind(component="...")`` returns a new adapter with extra context;
    a ``context={...}`` keyword on any log call adds fields for that record.
    """

    def bind(self, **context: Any) -> "StructuredLoggerAdapter":
        return StructuredLoggerAdapter(self.logger, {**self.extra, **context})

    def process(self, msg: str, kwargs: Dict[str, Any]):
        fields: Dict[str, Any] = dict(self.extra)
        extra_fields = kwargs.pop("context", None)
        if isinstance(extra_fields, Mapping):
            fields.update(extra_fields)
        if not fields:
            return msg, kwargs
        try:
            rendered = json.dumps(fields, sort_keys=True, default=str)
        except TypeError:
            # Non-string keys cannot be sorted against string ones.
            rendered = json.dumps({str(key): str(value) for key, value in fields.items()})
        return f"{msg} | {rendered}", kwargs


def get_logger(name: str, **context: Any) -> StructuredLoggerAdapter:
    """Return a :class:`StructuredLoggerAdapter` for ``name`` with bound ``context``."""

    return StructuredLoggerAdapter(logging.getLogger(name), context)


def _lookup_collector(registry: CollectorRegistry, name: str) -> Any:
    # Registration fails on a second import of the defining module (test
    # reloads); the collector registered the first time is returned instead.
    return registry._names_to_collectors.get(name)  # type: ignore[attr-defined]


def counter(
    name: str,
    documentation: str,
    labelnames: Sequence[str] = (),
    *,
    registry: CollectorRegistry = REGISTRY,
) -> Counter:
    """Register a Prometheus counter, reusing one already registered under ``name``."""

    try:
        return Counter(name, documentation, labelnames=tuple(labelnames), registry=registry)
    except ValueError:
        existing = _lookup_collector(registry, name)
        if existing is None:
            raise
        return existing


def histogram(
    name: str,
    documentation: str,
    labelnames: Sequence[str] = (),
    *,
    buckets: Sequence[float] = Histogram.DEFAULT_BUCKETS,
    registry: CollectorRegistry = REGISTRY,
) -> Histogram:
    """Register a Prometheus histogram, reusing one already registered under ``name``."""

    try:
        return Histogram(
            name,
            documentation,
            labelnames=tuple(labelnames),
            buckets=tuple(buckets),
            registry=registry,
        )
    except ValueError:
        existing = _lookup_collector(registry, name)
        if existing is None:
            raise
        return existing


WORDS_ROUTED = counter(
    "syllabix_words_routed_total",
    "Words analysed, labelled by the source that produced the result.",
    ["source"],
)
WORD_LATENCY = histogram(
    "syllabix_word_analysis_seconds",
    "Time spent producing syllable information for one uncached word.",
    buckets=WORD_LATENCY_BUCKETS,
)
SEARCH_REQUESTS = counter(
    "syllabix_search_requests_total",
    "Dictionary search requests, labelled by query kind.",
    ["query"],
)
TEXT_WORDS = histogram(
    "syllabix_text_words",
    "Words counted per free-text analysis.",
    buckets=TEXT_SIZE_BUCKETS,
)


@contextmanager
def start_span(name: str, attributes: Optional[Mapping[str, Any]] = None) -> Iterator[Any]:
    """Run the block inside a span on the ``syllabix`` tracer.

    Without a configured tracer provider the OpenTelemetry API hands out
    non-recording spans, so this is free when tracing is off.
    """

    tracer = trace.get_tracer(TRACER_NAME)
    with tracer.start_as_current_span(name) as span:
        set_span_attributes(span, attributes or {})
        yield span


def set_span_attributes(span: Any, attributes: Mapping[str, Any]) -> None:
    """Copy ``attributes`` onto ``span``, skipping ``None`` values."""

    if span is None:
        return
    for key, value in attributes.items():
        if value is not None:
            span.set_attribute(str(key), value)


def record_exception(span: Any, error: BaseException) -> None:
    """Mark ``span`` as failed with ``error``."""

    if span is None:
        return
    span.record_exception(error)
    span.set_attribute("error", True)


__all__ = [
    "SEARCH_REQUESTS",
    "StructuredLoggerAdapter",
    "TEXT_WORDS",
    "TRACER_NAME",
    "WORDS_ROUTED",
    "WORD_LATENCY",
    "counter",
    "get_logger",
    "histogram",
    "record_exception",
    "set_span_attributes",
    "start_span",
]
