# domainkit/types/stakeholders.py
from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from .attributes import AttributeDefinition
from .base import BaseMetadata
from .enums import ContextRelationshipType, PersonaType

__all__ = ("PersonaMetadata", "StakeholderMetadata", "BoundedContextMetadata")


class PersonaMetadata(BaseMetadata):
    type: PersonaType
    demographics: dict[str, Any] = Field(default_factory=dict)
    characteristics: dict[str, Any] = Field(default_factory=dict)
    motivations: list[str] = Field(default_factory=list)
    pain_points: list[str] = Field(default_factory=list)
    quote: str | None = None
    attributes: list[AttributeDefinition] = Field(default_factory=list)


class StakeholderMetadata(BaseMetadata):
    """A persona playing a role inside one bounded context."""

    persona: str
    role: str
    context: str
    goals: list[str] = Field(default_factory=list)
    responsibilities: list[str] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)
    relationships: dict[str, str | list[str]] = Field(default_factory=dict)
    attributes: list[AttributeDefinition] = Field(default_factory=list)

    @field_validator("role", "context", "persona")
    @classmethod
    def validate_required(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("stakeholder persona, role and context are required")
        return v.strip()


class BoundedContextMetadata(BaseMetadata):
    name: str
    owner: str | None = None
    relationships: dict[str, ContextRelationshipType] = Field(default_factory=dict)
    vocabulary: dict[str, str] = Field(default_factory=dict)
    attributes: list[AttributeDefinition] = Field(default_factory=list)
