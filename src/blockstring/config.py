"""Options accepted by the tag processor factories."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ProcessorConfigError
from .tags import TagFunction, default_concatenate

__all__ = ["ProcessorConfig", "build_config"]


class ProcessorConfig(BaseModel):
    """Recognised options for :class:`~blockstring.processor.TagProcessor`.

    Attributes
    ----------
    tag_function:
        Called as ``tag_function(index, literals, values)`` for every literal
        segment. Passing ``None`` selects :func:`~blockstring.tags.default_concatenate`.
    post_processor:
        Optional callable applied to the concatenated string. When omitted the
        string is returned unchanged.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    tag_function: TagFunction = Field(
        default=default_concatenate,
        description="Per-segment transformation producing one output fragment.",
    )
    post_processor: Callable[[str], Any] | None = Field(
        default=None,
        description="Applied to the final string; identity when unset.",
    )

    @field_validator("tag_function", mode="before")
    @classmethod
    def _default_tag_function(cls, value: Any) -> Any:
        return default_concatenate if value is None else value

    def post_process(self, result: str) -> Any:
        if self.post_processor is None:
            return result
        return self.post_processor(result)


def build_config(**options: Any) -> ProcessorConfig:
    """Validate ``options`` into a :class:`ProcessorConfig`.

    Raises :class:`~blockstring.errors.ProcessorConfigError` instead of the
    underlying pydantic error so callers only deal with this package's errors.
    """

    try:
        return ProcessorConfig(**options)
    except ValidationError as exc:
        raise ProcessorConfigError(f"invalid processor options: {exc}") from exc
