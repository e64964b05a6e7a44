"""Tracing and observability for prompt lifecycles.

This module provides event-based tracing with pluggable sinks and formatters.
Events are plain dataclasses; sinks decide what to do with them (log them,
write them to disk, ship them somewhere else).
"""

import logging
import threading
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Protocol

import uuid_utils as uuid


@dataclass
class BaseEvent:
    """Minimal event payload shared across all event types.

    Attributes:
        run_id: Identifier of the tracer that emitted the event.
        prompt_id: Identifier of the prompt the event is about.
        event: Event type (e.g., "create", "render", "error").
        timestamp: Unix timestamp of the event.
    """

    run_id: str
    prompt_id: Optional[str]
    event: str
    timestamp: float


class TraceSink(Protocol):
    """Protocol for trace event sinks."""
    def emit(self, event: BaseEvent) -> None:
        """Emit a trace event.

        Args:
            event: The event to emit.
        """
        ...


class EventFormatter(Protocol):
    """Protocol for formatting trace events into strings."""
    def format(self, event: BaseEvent) -> Optional[str]:
        """Format an event into a string representation.

        Args:
            event: The event to format.

        Returns:
            Formatted string, or None to skip the event.
        """
        ...


class DefaultFormatter:
    """Default formatter that creates a simple key=value representation."""
    def format(self, event: BaseEvent) -> Optional[str]:
        payload = {k: v for k, v in asdict(event).items() if v is not None}
        payload["event_type"] = event.__class__.__name__
        return _format_event(payload)


class ConsoleSink:
    """Lightweight default sink; logs a compact, readable line.

    Args:
        formatter: Optional formatter. Uses DefaultFormatter if not provided.
        level: Logging level used for emitted lines.
    """

    def __init__(
        self,
        formatter: Optional[EventFormatter] = None,
        level: int = logging.INFO,
    ) -> None:
        self.formatter = formatter or DefaultFormatter()
        self.level = level

    def emit(self, event: BaseEvent) -> None:
        logger = logging.getLogger("reden.tracing")
        summary = self.formatter.format(event)
        if summary:
            logger.log(self.level, summary)


class MemorySink:
    """Sink that keeps every event in a list. Handy for tests and debugging."""

    def __init__(self) -> None:
        self.events: List[BaseEvent] = []

    def emit(self, event: BaseEvent) -> None:
        self.events.append(event)


class Tracer:
    """Central tracing coordinator.

    Each tracer instance has a unique run_id for grouping related events.

    Args:
        sinks: List of sinks to emit events to. Defaults to empty list.
        run_id: Unique identifier for this run. Auto-generated if not provided.
    """
    def __init__(
        self,
        sinks: Optional[List[TraceSink]] = None,
        run_id: Optional[str] = None,
    ) -> None:
        self.sinks = sinks or []
        self.run_id = run_id or uuid.uuid7().hex

    def emit(self, event: BaseEvent) -> None:
        """Emit an event to all configured sinks.

        Failures in sinks are ignored so tracing can never break rendering.

        Args:
            event: Event to emit.
        """
        for sink in self.sinks:
            try:
                sink.emit(event)
            except Exception:
                logging.getLogger(__name__).debug(
                    "trace sink %r failed", sink, exc_info=True
                )
                continue


_lock = threading.Lock()
_default_tracer: Tracer = Tracer([ConsoleSink()])


def get_default_tracer() -> Tracer:
    """Get the default tracer instance.

    Returns:
        The global default tracer (initialized with ConsoleSink).
    """
    return _default_tracer


def set_default_tracer(tracer: Tracer) -> None:
    """Set the default tracer instance.

    Args:
        tracer: Tracer to use as the default.
    """
    global _default_tracer
    with _lock:
        _default_tracer = tracer


def _format_event(payload: Dict[str, Any]) -> str:
    parts = [
        f"{payload.pop('event_type', None)}::{payload.pop('event', None)}",
        f"prompt_id={payload.pop('prompt_id', None)}",
    ]
    for key in payload:
        parts.append(f"{key}={payload[key]}")
    return " ".join(parts)
