"""Reference resolution helpers for domainkit declarations."""

from .references import (
    merge_references,
    resolve_behavior_name,
    resolve_context_name,
    resolve_event_type,
    resolve_expectation_id,
    resolve_journey_slug,
    resolve_milestone_name,
    resolve_persona_name,
    resolve_stakeholder_role,
    resolve_stakeholder_roles,
)

__all__ = [
    "merge_references",
    "resolve_behavior_name",
    "resolve_context_name",
    "resolve_event_type",
    "resolve_expectation_id",
    "resolve_journey_slug",
    "resolve_milestone_name",
    "resolve_persona_name",
    "resolve_stakeholder_role",
    "resolve_stakeholder_roles",
]
