"""Event types for prompt tracing."""

from dataclasses import dataclass
from typing import ClassVar, List, Optional

from reden.base.tracing import BaseEvent


@dataclass
class PromptEvent(BaseEvent):
    """Event emitted over a prompt's lifecycle.

    Attributes:
        prompt_hash: Hash of template, params and active delimiters.
        delimiters: Active delimiters as ``[open, close]``.
        param_keys: Names of the parameters currently set.
        elapsed_ms: Render time in milliseconds ("render" and "error" events).
        rendered_chars: Length of the rendered text ("render" events).
        error: Error message ("error" events).
    """
    EVENT_CREATE: ClassVar[str] = "create"
    EVENT_RENDER: ClassVar[str] = "render"
    EVENT_ERROR: ClassVar[str] = "error"

    prompt_hash: Optional[str] = None
    delimiters: Optional[List[str]] = None
    param_keys: Optional[List[str]] = None
    elapsed_ms: Optional[float] = None
    rendered_chars: Optional[int] = None
    error: Optional[str] = None
