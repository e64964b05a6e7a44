"""Type definitions for prompts.

This module defines the template value types, the per-prompt configuration
model, the serialised wire shape, and the error types raised by prompts.
"""

from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, ValidationError
from typing_extensions import TypeAliasType

Delimiters = Tuple[str, str]

TemplateValue = TypeAliasType(
    "TemplateValue",
    "Union[str, int, float, bool, None, List[TemplateValue], Dict[str, TemplateValue]]",
)

PromptTemplateParams = Dict[str, TemplateValue]


class ConfigurationError(ValueError):
    """Raised when a prompt is given an unusable configuration.

    The most common cause is an empty opening or closing delimiter.
    """


def validate_delimiters(open_tag: str, close_tag: str) -> Delimiters:
    """Check that both delimiters are non-empty strings.

    Args:
        open_tag: Opening delimiter.
        close_tag: Closing delimiter.

    Returns:
        The validated ``(open_tag, close_tag)`` pair.

    Raises:
        ConfigurationError: If either delimiter is empty or not a string.
    """
    for name, tag in (("open", open_tag), ("close", close_tag)):
        if not isinstance(tag, str) or len(tag) < 1:
            raise ConfigurationError(
                f"Invalid delimiters: {name} tag must be a non-empty string, got {tag!r}"
            )
    return (open_tag, close_tag)


class PromptConfig(BaseModel):
    """Construction-time configuration for a prompt.

    Attributes:
        delimiters: Optional ``(open, close)`` tag pair. When unset the prompt
            inherits the default delimiters in effect at construction.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    delimiters: Optional[Delimiters] = None

    @classmethod
    def coerce(cls, config: Union["PromptConfig", Dict[str, Any], None]) -> "PromptConfig":
        """Build a PromptConfig from a dict, an instance or None.

        Raises:
            ConfigurationError: If the dict does not describe a valid config.
        """
        if config is None:
            return cls()
        if isinstance(config, cls):
            return config
        try:
            return cls.model_validate(config)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid prompt config: {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        """Dump the fields that were actually set, JSON-ready."""
        return self.model_dump(mode="json", exclude_none=True)


class SerialisedPrompt(BaseModel):
    """Stored representation of a prompt.

    Attributes:
        id: Identifier of the prompt that was serialised.
        template: The raw prompt template, possibly empty.
        params: Template parameters, omitted when empty.
        config: Prompt configuration, omitted when empty.
    """
    id: str
    template: str
    params: Optional[PromptTemplateParams] = None
    config: Optional[PromptConfig] = None
