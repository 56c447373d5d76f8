# domainkit/types/behaviors.py
from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .base import BaseMetadata, require_name
from .enums import BehaviorContractType, BehaviorExecutionMode

__all__ = ("BehaviorContract", "BehaviorMetadata")


class BehaviorContract(BaseModel):
    type: BehaviorContractType
    inputs: dict[str, str] = Field(default_factory=dict)
    outputs: dict[str, str] = Field(default_factory=dict)
    sla: dict[str, str] = Field(default_factory=dict)


class BehaviorMetadata(BaseMetadata):
    """An implementation strategy fulfilling an expectation."""

    name: str
    expectation_id: str | None = None
    context: str | None = None
    invokes: str | None = None
    contract: BehaviorContract | None = None
    execution_mode: BehaviorExecutionMode | None = None
    tests: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_name(v, kind="behavior")
