"""Default delimiter management.

Prompts resolve their delimiters once, at construction: an explicit
``config.delimiters`` wins, otherwise the default pair in effect at that
moment is copied in. Defaults live in a DelimiterRegistry; a single
process-scoped registry backs ``override_global_delimiters``.
"""

import logging
import threading
from typing import Optional

from reden.core.types import Delimiters, validate_delimiters

logger = logging.getLogger(__name__)

DEFAULT_DELIMITERS: Delimiters = ("[[", "]]")


class DelimiterRegistry:
    """Thread-safe holder for a default delimiter pair.

    Changing the registry only affects prompts constructed afterwards.

    Args:
        delimiters: Initial pair. Defaults to ``DEFAULT_DELIMITERS``.

    Example:
        >>> registry = DelimiterRegistry()
        >>> registry.set("<%", "%>")
        >>> registry.get()
        ('<%', '%>')
    """

    def __init__(self, delimiters: Optional[Delimiters] = None) -> None:
        self._initial = validate_delimiters(*(delimiters or DEFAULT_DELIMITERS))
        self._delimiters = self._initial
        self._lock = threading.Lock()

    def get(self) -> Delimiters:
        with self._lock:
            return self._delimiters

    def set(self, open_tag: str, close_tag: str) -> None:
        """Replace the default pair.

        Raises:
            ConfigurationError: If either tag is empty.
        """
        pair = validate_delimiters(open_tag, close_tag)
        with self._lock:
            self._delimiters = pair
        logger.debug("default delimiters set to %r", pair)

    def reset(self) -> None:
        """Restore the pair the registry was created with."""
        with self._lock:
            self._delimiters = self._initial


_global_registry = DelimiterRegistry()


def get_global_registry() -> DelimiterRegistry:
    """Get the process-scoped delimiter registry."""
    return _global_registry


def get_default_delimiters() -> Delimiters:
    """Get the delimiters new prompts currently inherit."""
    return _global_registry.get()


def override_global_delimiters(open_tag: str, close_tag: str) -> None:
    """Set the delimiters for ALL subsequently created prompts.

    Prompts that already exist keep their delimiters. Prefer
    ``Prompt.set_delimiters`` or ``PromptConfig(delimiters=...)`` when only
    one prompt needs different tags.

    Args:
        open_tag: The opening tag.
        close_tag: The closing tag.

    Raises:
        ConfigurationError: If either tag is empty.
    """
    _global_registry.set(open_tag, close_tag)


def reset_global_delimiters() -> None:
    """Restore the process default to ``DEFAULT_DELIMITERS``."""
    _global_registry.reset()
