# domainkit/types/logic.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import BaseMetadata, require_name
from .enums import LogicExecutionStrategy, LogicType

__all__ = ("LogicReference", "LogicExample", "LogicMetadata")


class LogicReference(BaseModel):
    """A piece of logic composed into another (by name or class)."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    logic: Any
    condition: str | None = None


class LogicExample(BaseModel):
    input: Any = None
    output: Any = None
    description: str | None = None


class LogicMetadata(BaseMetadata):
    """Any executable business-logic declaration, whatever decorator produced it."""

    name: str
    type: LogicType
    inputs: dict[str, str] = Field(default_factory=dict)
    outputs: dict[str, str] = Field(default_factory=dict)
    pure: bool = False
    idempotent: bool = False
    cacheable: bool = False
    retryable: bool = False
    invokes: list[str] = Field(default_factory=list)
    requires: list[str] = Field(default_factory=list)
    timeout: str | None = None
    context: str | None = None
    aggregate_type: str | None = None
    applies_to: list[str] = Field(default_factory=list)
    composed_of: list[LogicReference] = Field(default_factory=list)
    strategy: LogicExecutionStrategy | None = None
    rule_type: str | None = None
    policy_type: str | None = None
    expectation_id: str | None = None
    examples: list[LogicExample] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_name(v, kind="logic")
