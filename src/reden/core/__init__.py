from reden.core.delimiters import (
    DEFAULT_DELIMITERS,
    DelimiterRegistry,
    get_default_delimiters,
    get_global_registry,
    override_global_delimiters,
    reset_global_delimiters,
)
from reden.core.events import PromptEvent
from reden.core.formatters import DefaultPromptFormatter
from reden.core.prompt import Prompt, PromptFactory, create_prompt
from reden.core.renderer import (
    ChevronRenderer,
    RenderError,
    TemplateRenderer,
    get_default_renderer,
    set_default_renderer,
)
from reden.core.types import (
    ConfigurationError,
    Delimiters,
    PromptConfig,
    PromptTemplateParams,
    SerialisedPrompt,
    TemplateValue,
)

__all__ = [
    # Prompt
    "Prompt",
    "PromptFactory",
    "create_prompt",
    # Delimiters
    "DEFAULT_DELIMITERS",
    "DelimiterRegistry",
    "get_default_delimiters",
    "get_global_registry",
    "override_global_delimiters",
    "reset_global_delimiters",
    # Rendering
    "ChevronRenderer",
    "TemplateRenderer",
    "get_default_renderer",
    "set_default_renderer",
    # Errors
    "ConfigurationError",
    "RenderError",
    # Events
    "PromptEvent",
    "DefaultPromptFormatter",
    # Types
    "Delimiters",
    "PromptConfig",
    "PromptTemplateParams",
    "SerialisedPrompt",
    "TemplateValue",
]
