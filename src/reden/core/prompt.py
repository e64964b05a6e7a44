"""Prompt templates and rendering.

This module provides the Prompt type: a template string, its parameters and
its delimiters, bundled with a stable identifier and a JSON round-trip.

Example:
    >>> p = create_prompt("Say hello, [[name]]", {"name": "Red"})
    >>> p.to_string()
    'Say hello, Red'
"""

import hashlib
import json
import logging
import time
from typing import Any, Dict, Mapping, Optional, Union

from reden.base.ids import IdGenerator, next_id
from reden.base.tokens import estimate_tokens as _estimate_tokens
from reden.base.tracing import Tracer, get_default_tracer
from reden.core.delimiters import DelimiterRegistry, get_default_delimiters, get_global_registry
from reden.core.events import PromptEvent
from reden.core.renderer import RenderError, TemplateRenderer, get_default_renderer
from reden.core.types import (
    Delimiters,
    PromptConfig,
    PromptTemplateParams,
    SerialisedPrompt,
    validate_delimiters,
)

logger = logging.getLogger(__name__)

ConfigLike = Union[PromptConfig, Dict[str, Any], None]


class Prompt:
    """A parameterised text template with identity.

    The identifier and template are fixed for the lifetime of the prompt.
    Parameters and active delimiters can be changed with ``set_params`` and
    ``set_delimiters``, both of which return the prompt for chaining.

    Args:
        template: Raw template text containing delimited variables.
        params: Values for the template variables.
        config: Construction config (a PromptConfig or an equivalent dict).
        default_delimiters: Pair used when ``config`` sets no delimiters.
            Falls back to the process default at construction time.
        renderer: Template renderer. Defaults to the process default renderer.
        id_generator: Callable producing the prompt identifier.
        tracer: Tracer for lifecycle events. Defaults to the default tracer.

    Raises:
        ConfigurationError: If the resolved delimiters are empty or the config
            is malformed.

    Example:
        >>> p = Prompt("Hi <%name%>", {"name": "Red"}, {"delimiters": ("<%", "%>")})
        >>> str(p)
        'Hi Red'
    """

    def __init__(
        self,
        template: str,
        params: Optional[PromptTemplateParams] = None,
        config: ConfigLike = None,
        *,
        default_delimiters: Optional[Delimiters] = None,
        renderer: Optional[TemplateRenderer] = None,
        id_generator: Optional[IdGenerator] = None,
        tracer: Optional[Tracer] = None,
    ) -> None:
        self._config = PromptConfig.coerce(config)
        if self._config.delimiters is not None:
            delimiters = self._config.delimiters
        else:
            delimiters = default_delimiters or get_default_delimiters()
        self._delimiters = validate_delimiters(*delimiters)
        self._id = (id_generator or next_id)()
        self._template = template
        self._params: PromptTemplateParams = params if params is not None else {}
        self._partials: Dict[str, str] = {}
        self._renderer = renderer or get_default_renderer()
        self._tracer = tracer
        self._emit(PromptEvent.EVENT_CREATE)

    @property
    def id(self) -> str:
        return self._id

    @property
    def template(self) -> str:
        return self._template

    @property
    def params(self) -> PromptTemplateParams:
        """The live parameter map. Change it through ``set_params``."""
        return self._params

    @property
    def config(self) -> PromptConfig:
        return self._config

    @property
    def delimiters(self) -> Delimiters:
        return self._delimiters

    def set_params(self, params: Mapping[str, Any], *, override: bool = False) -> "Prompt":
        """Update the template parameters.

        Args:
            params: New parameter values.
            override: If True, replace all parameters with ``params``. Otherwise
                shallow-merge ``params`` into the current values.

        Returns:
            This prompt.
        """
        if override:
            self._params = dict(params)
        else:
            self._params = {**self._params, **params}
        logger.debug("prompt %s params %s: %s", self._id,
                     "replaced" if override else "merged", sorted(params))
        return self

    def set_delimiters(self, open_tag: str, close_tag: str) -> "Prompt":
        """Override the template tags for this prompt.

        The construction config is left untouched, so ``to_object`` keeps
        reporting the delimiters the prompt was created with.

        Args:
            open_tag: The opening delimiter.
            close_tag: The closing delimiter.

        Returns:
            This prompt.

        Raises:
            ConfigurationError: If either delimiter is empty. The active
                delimiters are left unchanged.
        """
        self._delimiters = validate_delimiters(open_tag, close_tag)
        logger.debug("prompt %s delimiters set to %r", self._id, self._delimiters)
        return self

    def to_string(self) -> str:
        """Render the prompt as a ready-to-use string.

        Returns:
            The rendered prompt text.

        Raises:
            RenderError: If the renderer fails.
        """
        start = time.perf_counter()
        try:
            text = self._renderer.render(
                self._template, self._params, self._partials, self._delimiters
            )
        except Exception as exc:
            error = exc if isinstance(exc, RenderError) else RenderError(
                str(exc), template=self._template
            )
            self._emit(
                PromptEvent.EVENT_ERROR,
                elapsed_ms=_elapsed_ms(start),
                error=str(error),
            )
            if error is exc:
                raise
            raise error from exc
        self._emit(
            PromptEvent.EVENT_RENDER,
            elapsed_ms=_elapsed_ms(start),
            rendered_chars=len(text),
        )
        return text

    def to_object(self) -> Dict[str, Any]:
        """Return the prompt as a serialisable record.

        ``params`` and ``config`` are only present when non-empty.
        """
        output: Dict[str, Any] = {"id": self._id, "template": self._template}
        if self._params:
            output["params"] = dict(self._params)
        config = self._config.to_dict()
        if config:
            output["config"] = config
        return output

    def to_json(self) -> str:
        """Return ``to_object()`` encoded as compact JSON text.

        Raises:
            TypeError: If a parameter value is not JSON-encodable (anything
                outside str, numbers, bools, None, lists and string-keyed dicts).
        """
        return json.dumps(self.to_object(), separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def from_object(
        cls, data: Union[SerialisedPrompt, Mapping[str, Any]], **kwargs: Any
    ) -> "Prompt":
        """Create a new prompt from a serialised record.

        The new prompt gets a fresh identifier; the stored one is not reused.

        Args:
            data: A SerialisedPrompt or a dict of the same shape.
            **kwargs: Keyword arguments forwarded to the constructor.

        Raises:
            pydantic.ValidationError: If ``data`` is not a serialised prompt.
        """
        record = SerialisedPrompt.model_validate(data)
        return cls(record.template, record.params or {}, record.config, **kwargs)

    @classmethod
    def from_json(cls, text: Union[str, bytes], **kwargs: Any) -> "Prompt":
        """Create a new prompt from ``to_json()`` output."""
        return cls.from_object(json.loads(text), **kwargs)

    def hash(self) -> str:
        """Compute a hash of the template, params and active delimiters.

        Returns:
            Hexadecimal sha256 digest.
        """
        payload = {
            "template": self._template,
            "params": self._params,
            "delimiters": list(self._delimiters),
        }
        blob = json.dumps(payload, sort_keys=True, default=str)
        return hashlib.sha256(blob.encode("utf-8")).hexdigest()

    def estimate_tokens(self) -> int:
        """Render the prompt and estimate its token count."""
        return _estimate_tokens(self.to_string())

    def _emit(self, event: str, **fields: Any) -> None:
        tracer = self._tracer or get_default_tracer()
        tracer.emit(
            PromptEvent(
                run_id=tracer.run_id,
                prompt_id=self._id,
                event=event,
                timestamp=time.time(),
                prompt_hash=self.hash(),
                delimiters=list(self._delimiters),
                param_keys=sorted(self._params),
                **fields,
            )
        )

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        preview = self._template if len(self._template) <= 40 else self._template[:37] + "..."
        return f"Prompt(id={self._id!r}, template={preview!r}, delimiters={self._delimiters!r})"


class PromptFactory:
    """Creates prompts that share defaults.

    The factory threads an explicit default delimiter pair (or a registry) into
    every prompt it creates, instead of relying on process-wide state. The
    default is read at each ``create`` call; prompts never see later changes.

    Args:
        delimiters: Default pair for prompts whose config sets none. Wins over
            ``registry`` when given.
        registry: Registry to read the default pair from. Defaults to the
            process registry.
        renderer: Renderer handed to every prompt.
        id_generator: Identifier generator handed to every prompt.
        tracer: Tracer handed to every prompt.

    Raises:
        ConfigurationError: If ``delimiters`` contains an empty tag.

    Example:
        >>> factory = PromptFactory(("{{", "}}"))
        >>> factory.create("Hi {{name}}", {"name": "Red"}).to_string()
        'Hi Red'
    """

    def __init__(
        self,
        delimiters: Optional[Delimiters] = None,
        *,
        registry: Optional[DelimiterRegistry] = None,
        renderer: Optional[TemplateRenderer] = None,
        id_generator: Optional[IdGenerator] = None,
        tracer: Optional[Tracer] = None,
    ) -> None:
        self.delimiters = validate_delimiters(*delimiters) if delimiters is not None else None
        self.registry = registry or get_global_registry()
        self.renderer = renderer
        self.id_generator = id_generator
        self.tracer = tracer

    def create(
        self,
        template: str,
        params: Optional[PromptTemplateParams] = None,
        config: ConfigLike = None,
    ) -> Prompt:
        """Create a prompt with this factory's defaults."""
        return Prompt(template, params, config, **self._prompt_kwargs())

    def from_object(self, data: Union[SerialisedPrompt, Mapping[str, Any]]) -> Prompt:
        """Rebuild a serialised prompt with this factory's defaults."""
        return Prompt.from_object(data, **self._prompt_kwargs())

    def from_json(self, text: Union[str, bytes]) -> Prompt:
        return Prompt.from_json(text, **self._prompt_kwargs())

    def _prompt_kwargs(self) -> Dict[str, Any]:
        return {
            "default_delimiters": self.delimiters or self.registry.get(),
            "renderer": self.renderer,
            "id_generator": self.id_generator,
            "tracer": self.tracer,
        }


def create_prompt(
    template: str,
    params: Optional[PromptTemplateParams] = None,
    config: ConfigLike = None,
) -> Prompt:
    """Create a prompt using the process-wide defaults.

    Args:
        template: The raw prompt text including delimited variables.
        params: Optional values for the template variables.
        config: Optional prompt config.

    Returns:
        A Prompt.

    Raises:
        ConfigurationError: If the resolved delimiters are invalid.
    """
    return Prompt(template, params, config)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000
