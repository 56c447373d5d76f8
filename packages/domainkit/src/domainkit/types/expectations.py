# domainkit/types/expectations.py
from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from domainkit.identity.formats import is_valid_expectation_id

from .base import BaseMetadata
from .enums import ExpectationPriority

__all__ = ("Scenario", "ExpectationMetadata")


class Scenario(BaseModel):
    given: str | None = None
    when: str | None = None
    then: str | None = None


class ExpectationMetadata(BaseMetadata):
    """A bilateral contract: one stakeholder role expects, another provides."""

    expecting_stakeholder: str
    providing_stakeholder: str
    description: str
    expectation_id: str | None = None
    priority: ExpectationPriority | None = None
    milestone: str | None = None
    scenario: Scenario | None = None
    critical_path: bool = True
    journey_slug: str | None = None
    milestone_id: str | None = None
    behaviors: list[str] = Field(default_factory=list)

    @field_validator("expecting_stakeholder", "providing_stakeholder")
    @classmethod
    def validate_stakeholder(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("expectation stakeholders are required")
        return v.strip()

    @field_validator("expectation_id")
    @classmethod
    def validate_expectation_id(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if not is_valid_expectation_id(v):
            raise ValueError(f"expectation_id {v!r} must look like 'PO-EXP-001'")
        return v
