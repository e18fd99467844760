"""Usage events emitted by the host session."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Mapping, Optional, Protocol

from .logging import get_logger

MAX_BUFFERED_EVENTS = 1000


@dataclass(frozen=True)
class Event:
    name: str
    properties: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class EventSink(Protocol):
    def track(self, name: str, properties: Mapping[str, Any] | None = None) -> None:
        ...


class LoggingEventSink:
    """Writes each event to the ``codeshift.telemetry`` logger at DEBUG."""

    def __init__(self) -> None:
        self.logger = get_logger("telemetry")

    def track(self, name: str, properties: Mapping[str, Any] | None = None) -> None:
        self.logger.debug("event %s %s", name, dict(properties or {}))


class MemoryEventSink:
    """Buffers the most recent events in memory."""

    def __init__(self, capacity: int = MAX_BUFFERED_EVENTS) -> None:
        self._events: Deque[Event] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def track(self, name: str, properties: Mapping[str, Any] | None = None) -> None:
        event = Event(name=name, properties=dict(properties or {}))
        with self._lock:
            self._events.append(event)

    def events(self, name: Optional[str] = None) -> List[Event]:
        with self._lock:
            items = list(self._events)
        if name is None:
            return items
        return [event for event in items if event.name == name]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


def track_language_detected(sink: EventSink, language: Optional[str], length: int) -> None:
    sink.track("language_detected", {"language": language, "length": length})


def track_conversion_completed(
    sink: EventSink,
    source: str,
    target: str,
    *,
    input_length: int,
    output_length: int,
    elapsed_ms: float,
) -> None:
    sink.track(
        "conversion_completed",
        {
            "source": source,
            "target": target,
            "input_length": input_length,
            "output_length": output_length,
            "elapsed_ms": round(elapsed_ms, 3),
        },
    )


def track_conversion_failed(
    sink: EventSink,
    source: str,
    target: str,
    *,
    error: BaseException,
    elapsed_ms: float,
) -> None:
    sink.track(
        "conversion_failed",
        {
            "source": source,
            "target": target,
            "error": type(error).__name__,
            "message": str(error),
            "elapsed_ms": round(elapsed_ms, 3),
        },
    )


def track_history_cleared(sink: EventSink, removed: int) -> None:
    sink.track("history_cleared", {"removed": removed})


__all__ = [
    "Event",
    "EventSink",
    "LoggingEventSink",
    "MAX_BUFFERED_EVENTS",
    "MemoryEventSink",
    "track_conversion_completed",
    "track_conversion_failed",
    "track_history_cleared",
    "track_language_detected",
]
