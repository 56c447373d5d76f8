# domainkit/resolve/references.py
"""
Turn class-or-string references into the string keys registries join on.

Declarations may name a collaborator by string or by passing its class. A
class resolves through the metadata its own decorator attached, then through
the registry that decorator wrote to. Registries themselves only ever see the
resulting strings.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from domainkit.components import get_metadata
from domainkit.exceptions import UnresolvedReferenceError
from domainkit.identity import component_label, derive_event_type, journey_slug

if TYPE_CHECKING:
    from domainkit.registry import RegistrySet

logger = logging.getLogger(__name__)

__all__ = [
    "resolve_stakeholder_role",
    "resolve_stakeholder_roles",
    "resolve_persona_name",
    "resolve_context_name",
    "resolve_event_type",
    "resolve_journey_slug",
    "resolve_milestone_name",
    "resolve_behavior_name",
    "resolve_expectation_id",
    "merge_references",
]


def _undeclared(kind: str, ref: Any) -> UnresolvedReferenceError:
    return UnresolvedReferenceError(
        f"{component_label(ref)} is not a declared {kind}; decorate it before referencing it"
    )


def resolve_stakeholder_role(ref: Any, registries: RegistrySet | None = None) -> str | None:
    """Role of a stakeholder class, or ``ref`` itself when it is a string."""
    if ref is None or isinstance(ref, str):
        return ref
    metadata = get_metadata(ref, "stakeholder")
    if metadata is not None:
        return metadata.role
    if registries is not None:
        entry = registries.stakeholders.get_by_component(ref)
        if entry is not None:
            return entry.metadata.role
    raise _undeclared("stakeholder", ref)


def resolve_stakeholder_roles(refs: Iterable[Any], registries: RegistrySet | None = None) -> list[str]:
    return [role for role in (resolve_stakeholder_role(r, registries) for r in refs) if role]


def resolve_persona_name(ref: Any) -> str | None:
    if ref is None or isinstance(ref, str):
        return ref
    metadata = get_metadata(ref, "persona")
    if metadata is None:
        raise _undeclared("persona", ref)
    return metadata.name


def resolve_context_name(ref: Any) -> str | None:
    if ref is None or isinstance(ref, str):
        return ref
    metadata = get_metadata(ref, "bounded_context")
    if metadata is None:
        raise _undeclared("bounded context", ref)
    return metadata.name


def resolve_event_type(ref: Any, registries: RegistrySet | None = None) -> str | None:
    """Event type for a string or event class; undecorated classes fall back to name derivation."""
    if ref is None:
        return None
    if not isinstance(ref, str):
        metadata = get_metadata(ref, "domain_event")
        if metadata is not None and metadata.event_type:
            return metadata.event_type
    if registries is not None:
        return registries.events.resolve_event_type(ref)
    if isinstance(ref, str):
        return ref
    return derive_event_type(component_label(ref))


def resolve_journey_slug(ref: Any) -> str | None:
    if ref is None:
        return None
    if isinstance(ref, str):
        return journey_slug(ref)
    metadata = get_metadata(ref, "journey")
    if metadata is not None:
        return metadata.slug
    return journey_slug(ref)


def resolve_milestone_name(ref: Any) -> str | None:
    if ref is None or isinstance(ref, str):
        return ref
    metadata = get_metadata(ref, "milestone")
    return metadata.name if metadata is not None else component_label(ref)


def resolve_behavior_name(ref: Any) -> str | None:
    if ref is None or isinstance(ref, str):
        return ref
    metadata = get_metadata(ref, "behavior")
    return metadata.name if metadata is not None else component_label(ref)


def resolve_expectation_id(ref: Any) -> str | None:
    if ref is None or isinstance(ref, str):
        return ref
    metadata = get_metadata(ref, "expectation")
    if metadata is None or not metadata.expectation_id:
        raise _undeclared("expectation", ref)
    return metadata.expectation_id


def merge_references(single: Any = None, many: Iterable[Any] | None = None) -> list[Any]:
    """Combine a singular and a plural option (``behavior=`` / ``behaviors=``), dropping repeats."""
    merged: list[Any] = []
    for ref in ([single] if single is not None else []) + list(many or ()):
        if not any(ref is seen or ref == seen for seen in merged):
            merged.append(ref)
    return merged
