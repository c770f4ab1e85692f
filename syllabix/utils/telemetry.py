"""Per-run telemetry for free-text analysis.

A :class:`StructuredTelemetry` instance describes the most recent run: phase
timings, counters such as ``words.cmu``/``words.fallback`` and free-form
annotations. Listeners see every event as it is recorded;
:class:`TelemetryLogger` is the listener that forwards them to logging.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, Iterable, Iterator, Optional, Tuple

from .observability import get_logger

TelemetryListener = Callable[[str, Dict[str, Any]], None]


@dataclass
class PhaseTiming:
    """Aggregated durations of one named phase."""

    count: int = 0
    total: float = 0.0
    minimum: float = 0.0
    maximum: float = 0.0

    def add(self, duration: float) -> None:
        if self.count == 0:
            self.minimum = self.maximum = duration
        else:
            self.minimum = min(self.minimum, duration)
            self.maximum = max(self.maximum, duration)
        self.count += 1
        self.total += duration

    @property
    def average(self) -> float:
        return self.total / self.count if self.count else 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            "count": self.count,
            "total": self.total,
            "min": self.minimum,
            "max": self.maximum,
            "avg": self.average,
        }


@dataclass
class _Run:
    trace_id: int = 0
    name: Optional[str] = None
    timings: Dict[str, PhaseTiming] = field(default_factory=dict)
    counters: Dict[str, float] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    events: Deque[Dict[str, Any]] = field(default_factory=deque)


class StructuredTelemetry:
    """Timings, counters and annotations for the current analysis run.

    :meth:`start_trace` discards the previous run. ``time_fn`` defaults to
    :func:`time.perf_counter`; tests pass a fake clock. At most
    ``max_events`` timing events are retained per run.
    """

    def __init__(
        self,
        time_fn: Optional[Callable[[], float]] = None,
        *,
        max_events: int = 128,
        listeners: Optional[Iterable[TelemetryListener]] = None,
    ) -> None:
        self._time_fn = time_fn or time.perf_counter
        self._max_events = max(1, int(max_events))
        self._lock = threading.RLock()
        self._run = self._new_run(0, None)
        self._listeners: Tuple[TelemetryListener, ...] = tuple(listeners or ())

    def _new_run(self, trace_id: int, name: Optional[str]) -> _Run:
        return _Run(trace_id=trace_id, name=name, events=deque(maxlen=self._max_events))

    def _emit(self, event_type: str, payload: Dict[str, Any]) -> None:
        for listener in self._listeners:
            try:
                listener(event_type, dict(payload))
            except Exception:
                # Listener failures never reach the analysis being observed.
                continue

    def now(self) -> float:
        return float(self._time_fn())

    def start_trace(self, name: str) -> int:
        """Begin a new run called ``name`` and return its id."""

        with self._lock:
            self._run = self._new_run(self._run.trace_id + 1, name)
            self._run.metadata["trace_name"] = name
            trace_id = self._run.trace_id
        self._emit("trace_started", {"trace_id": trace_id, "name": name})
        return trace_id

    def record_timing(
        self,
        name: str,
        duration: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        duration = max(0.0, float(duration))
        details = dict(metadata or {})
        with self._lock:
            self._run.timings.setdefault(name, PhaseTiming()).add(duration)
            event: Dict[str, Any] = {"name": name, "duration": duration}
            if details:
                event["metadata"] = details
            self._run.events.append(event)
        self._emit("timing", {"name": name, "duration": duration, "metadata": details})

    @contextmanager
    def timer(
        self,
        name: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Iterator[Dict[str, Any]]:
        """Time the block as phase ``name``.

        The yielded dict may be filled in by the block; it is stored with the
        timing event.
        """

        details: Dict[str, Any] = dict(metadata or {})
        self._emit("timer_started", {"name": name, "metadata": dict(details)})
        started = self.now()
        try:
            yield details
        finally:
            self.record_timing(name, self.now() - started, details)

    def increment(self, name: str, amount: float = 1.0) -> None:
        delta = float(amount)
        with self._lock:
            value = self._run.counters.get(name, 0.0) + delta
            self._run.counters[name] = value
        self._emit("counter", {"name": name, "delta": delta, "value": value})

    def annotate(self, key: str, value: Any) -> None:
        with self._lock:
            self._run.metadata[key] = value
        self._emit("metadata", {"key": key, "value": value})

    def snapshot(self) -> Dict[str, Any]:
        """Plain-dict copy of the current run."""

        with self._lock:
            run = self._run
            return {
                "trace_id": run.trace_id,
                "name": run.name,
                "timings": {name: timing.as_dict() for name, timing in run.timings.items()},
                "counters": dict(run.counters),
                "events": [dict(event) for event in run.events],
                "metadata": dict(run.metadata),
            }

    def add_listener(self, listener: TelemetryListener) -> None:
        with self._lock:
            self._listeners = self._listeners + (listener,)

    def remove_listener(self, listener: TelemetryListener) -> None:
        with self._lock:
            self._listeners = tuple(entry for entry in self._listeners if entry is not listener)


class TelemetryLogger:
    """Listener that logs each telemetry event as ``Telemetry <type>: <name>``."""

    def __init__(
        self,
        *,
        logger: Optional[logging.LoggerAdapter] = None,
        level: int = logging.INFO,
        level_map: Optional[Dict[str, int]] = None,
    ) -> None:
        self._logger = logger or get_logger(__name__).bind(component="telemetry")
        self._level = level
        self._level_map = dict(level_map or {})

    def __call__(self, event_type: str, payload: Dict[str, Any]) -> None:
        level = self._level_map.get(event_type, self._level)
        if not self._logger.isEnabledFor(level):
            return
        label = payload.get("name") or payload.get("key") or payload.get("trace_id") or "event"
        context = {"telemetry.event": event_type, **{str(k): v for k, v in payload.items()}}
        self._logger.log(level, f"Telemetry {event_type}: {label}", context=context)


__all__ = ["PhaseTiming", "StructuredTelemetry", "TelemetryListener", "TelemetryLogger"]
