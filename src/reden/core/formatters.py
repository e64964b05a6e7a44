"""Formatters for prompt trace events."""

from typing import Optional

from reden.base.tracing import BaseEvent, DefaultFormatter
from reden.core.events import PromptEvent


class DefaultPromptFormatter:
    """Formatter for prompt events.

    Produces one compact line per event; other event types fall through to
    DefaultFormatter.

    Args:
        max_error_chars: Maximum characters kept from error messages (default: 160).
    """
    def __init__(self, *, max_error_chars: int = 160) -> None:
        self.max_error_chars = max_error_chars
        self._fallback = DefaultFormatter()

    def format(self, event: BaseEvent) -> Optional[str]:
        if not isinstance(event, PromptEvent):
            return self._fallback.format(event)
        parts = [f"Prompt::{event.event}", f"id={event.prompt_id}"]
        if event.delimiters and len(event.delimiters) == 2:
            open_tag, close_tag = event.delimiters
            parts.append(f"delimiters={open_tag}..{close_tag}")
        if event.param_keys:
            parts.append(f"params={','.join(event.param_keys)}")
        if event.prompt_hash:
            parts.append(f"hash={event.prompt_hash[:12]}")
        if event.rendered_chars is not None:
            parts.append(f"chars={event.rendered_chars}")
        if event.elapsed_ms is not None:
            parts.append(f"elapsed_ms={event.elapsed_ms:.2f}")
        if event.error:
            parts.append(f"error={_truncate(_one_line(event.error), self.max_error_chars)}")
        return " ".join(parts)


def _truncate(value: str, limit: int) -> str:
    if len(value) <= limit:
        return value
    if limit <= 3:
        return value[:limit]
    return value[: limit - 3] + "..."


def _one_line(value: str) -> str:
    return " ".join(value.splitlines())
