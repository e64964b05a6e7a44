"""Identifier generation for prompts.

Every Prompt receives exactly one identifier at construction. Identifiers are
random (version 4) UUIDs rendered in the canonical 8-4-4-4-12 hyphenated form.
"""

from typing import Callable

import uuid_utils as uuid

IdGenerator = Callable[[], str]


def next_id() -> str:
    """Generate a new random identifier.

    ``uuid_utils`` draws its randomness from the operating system CSPRNG, so
    this is cheap, non-blocking and safe to call from multiple threads.

    Returns:
        A 36 character lower-case UUID4 string.

    Example:
        >>> len(next_id())
        36
    """
    return str(uuid.uuid4())
