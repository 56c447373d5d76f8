# domainkit/types/journeys.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .attributes import AttributeDefinition
from .base import BaseMetadata, require_name

__all__ = (
    "StepReference",
    "MilestoneReference",
    "JourneyReference",
    "StakeholderInteraction",
    "StepMetadata",
    "MilestoneMetadata",
    "JourneyMetadata",
)


class StepReference(BaseModel):
    """Places a step (class or name) at a given order inside a milestone."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    step: Any
    order: int
    optional: bool = False


class MilestoneReference(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    milestone: Any
    order: int
    prerequisites: list[str] = Field(default_factory=list)


class JourneyReference(BaseModel):
    """A detour: another journey entered after a milestone of this one."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    journey: Any
    order: int
    triggered_after: Any = None
    triggered_by: str | None = None
    rejoins_at: int | str | None = None
    label: str | None = None


class StakeholderInteraction(BaseModel):
    from_role: str
    to_role: str
    interaction: str
    milestone: str | None = None


class StepMetadata(BaseMetadata):
    name: str
    order: int | None = None
    actor: str | None = None
    expectations: list[str] = Field(default_factory=list)
    optional: bool = False
    alternatives: list[str] = Field(default_factory=list)
    reusable: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_name(v, kind="step")


class MilestoneMetadata(BaseMetadata):
    name: str
    stakeholder: str
    order: int | None = None
    prerequisites: list[str] = Field(default_factory=list)
    business_event: str | None = None
    stateful: bool = True
    reusable: bool = False
    journeys: list[str] = Field(default_factory=list)
    steps: list[StepReference] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_name(v, kind="milestone")

    @field_validator("stakeholder")
    @classmethod
    def validate_stakeholder(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("milestone stakeholder is required")
        return v.strip()


class JourneyMetadata(BaseMetadata):
    name: str
    slug: str
    primary_stakeholder: str
    milestones: list[MilestoneReference] = Field(default_factory=list)
    detours: list[JourneyReference] = Field(default_factory=list)
    is_detour: bool = False
    critical_path: bool = False
    context: str | None = None
    participating_stakeholders: list[str] = Field(default_factory=list)
    outcomes: list[str] = Field(default_factory=list)
    triggering_event: str | None = None
    stakeholder_interactions: list[StakeholderInteraction] = Field(default_factory=list)
    attributes: list[AttributeDefinition] = Field(default_factory=list)

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("journey slug is required")
        return v.strip()
