# domainkit/types/events.py
from __future__ import annotations

from pydantic import Field, field_validator

from .base import BaseMetadata

__all__ = ("DomainEventMetadata", "EventHandlerMetadata")


class DomainEventMetadata(BaseMetadata):
    """Declaration of a domain event.

    ``event_type`` may be left empty; the event registry derives it from the
    component's class name (``OrderPlacedEvent`` -> ``order.placed``).
    """

    event_type: str | None = None
    context: str | None = None
    aggregate_type: str | None = None
    schema_fields: dict[str, str] = Field(default_factory=dict)


class EventHandlerMetadata(BaseMetadata):
    event_type: str | None = None
    priority: int = 0
    is_async: bool = False
    idempotent: bool = True
    retryable: bool = True
    context: str | None = None

    @field_validator("priority", mode="before")
    @classmethod
    def default_priority(cls, v):
        return 0 if v is None else v
