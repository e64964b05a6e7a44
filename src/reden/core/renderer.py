"""Template rendering backends.

Prompts never interpolate templates themselves; they hand the template, the
parameter view, partials and the active delimiters to a TemplateRenderer.
The default renderer is backed by the chevron mustache engine.
"""

import threading
from typing import Any, Mapping, Optional, Protocol

import chevron
from chevron.tokenizer import tokenize

from reden.core.types import Delimiters


class RenderError(Exception):
    """Raised when a template cannot be rendered.

    Attributes:
        template: The template that failed to render, if known.
    """

    def __init__(self, message: str, *, template: Optional[str] = None) -> None:
        super().__init__(message)
        self.template = template


class TemplateRenderer(Protocol):
    """Protocol for logic-less template engines."""
    def render(
        self,
        template: str,
        view: Mapping[str, Any],
        partials: Mapping[str, str],
        delimiters: Delimiters,
    ) -> str:
        """Render ``template`` against ``view``.

        Args:
            template: Raw template text.
            view: Values for the template variables.
            partials: Named sub-templates available for inclusion.
            delimiters: Active ``(open, close)`` tag pair.

        Returns:
            The rendered string.

        Raises:
            RenderError: If the template cannot be rendered.
        """
        ...


class ChevronRenderer:
    """Mustache renderer backed by chevron.

    The template is tokenised with the active delimiters before rendering, so
    the same template text can be rendered with different tag pairs. Partials
    are only ever looked up in the supplied map, never on disk.

    Values are converted with Python's ``str()``, so ``True`` renders as
    ``True`` and ``1.0`` as ``1.0``, not ``true`` and ``1`` as in JavaScript
    mustache engines.

    Example:
        >>> ChevronRenderer().render("Hi [[name]]", {"name": "Red"}, {}, ("[[", "]]"))
        'Hi Red'
    """

    def render(
        self,
        template: str,
        view: Mapping[str, Any],
        partials: Mapping[str, str],
        delimiters: Delimiters,
    ) -> str:
        open_tag, close_tag = delimiters
        try:
            tokens = list(tokenize(template, def_ldel=open_tag, def_rdel=close_tag))
            return chevron.render(
                template=tokens,
                data=dict(view),
                partials_path=None,
                partials_dict=dict(partials),
                def_ldel=open_tag,
                def_rdel=close_tag,
            )
        except Exception as exc:
            raise RenderError(str(exc), template=template) from exc


_lock = threading.Lock()
_default_renderer: TemplateRenderer = ChevronRenderer()


def get_default_renderer() -> TemplateRenderer:
    """Get the renderer used by prompts that were not given one."""
    return _default_renderer


def set_default_renderer(renderer: TemplateRenderer) -> None:
    """Replace the process default renderer.

    Args:
        renderer: Renderer to use for prompts created without an explicit one.
    """
    global _default_renderer
    with _lock:
        _default_renderer = renderer
