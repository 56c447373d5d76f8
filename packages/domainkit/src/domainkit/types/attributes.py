# domainkit/types/attributes.py
from __future__ import annotations

from typing import Any, Callable, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import require_name

__all__ = ("AttributeValidation", "AttributeDefinition")


class AttributeValidation(BaseModel):
    """Declarative constraints on an attribute value (never evaluated here)."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    min: float | None = None
    max: float | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    enum: list[Any] | None = None
    custom: Callable[[Any], bool | str] | None = None


class AttributeDefinition(BaseModel):
    """
    A structured property definition attached to a component.

    Used both for attributes declared inline in a parent component's metadata
    (``persona(attributes=[...])``) and for attribute-level declarations.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    name: str
    type: str | None = None
    description: str | None = None
    required: bool | None = None
    default_value: Any = None
    immutable: bool | None = None
    validation: AttributeValidation | None = None
    examples: list[Any] = Field(default_factory=list)
    value_object: bool | None = None
    equality: Literal["structural", "reference"] | None = None
    tags: set[str] = Field(default_factory=set)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_name(v, kind="attribute")

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, v):
        # Accept a Python type as a convenience; store its name.
        if isinstance(v, type):
            return v.__name__
        return v
