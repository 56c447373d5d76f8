# domainkit/registry/journeys.py
"""Journeys: ordered milestone paths with optional detours into other journeys."""

import logging
from typing import Any, Literal, Union

from ..identity import component_label
from ..types import JourneyMetadata, JourneyReference, MilestoneReference
from .base import BaseRegistry, add_to_index, remove_from_index
from .records import RegistryEntry

logger = logging.getLogger(__name__)

JourneyEntry = RegistryEntry[JourneyMetadata]
PathStep = tuple[Literal["milestone", "detour"], Union[MilestoneReference, JourneyReference]]


class JourneyRegistry(BaseRegistry[JourneyEntry]):
    """Journeys keyed by slug; a repeated slug warns and replaces the previous journey."""

    kind = "journey"
    _indices = ("_by_slug", "_by_name", "_by_stakeholder")

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._by_slug: dict[str, JourneyEntry] = {}
        self._by_name: dict[str, JourneyEntry] = {}
        self._by_stakeholder: dict[str, list[str]] = {}

    def register(self, metadata: JourneyMetadata, component: Any) -> JourneyEntry:
        slug = metadata.slug
        entry = RegistryEntry(metadata=metadata, component=component)
        with self._lock:
            previous = self._by_slug.get(slug)
            if previous is not None:
                self._warn_duplicate(slug)
                if self._by_name.get(previous.metadata.name) is previous:
                    del self._by_name[previous.metadata.name]
                remove_from_index(self._by_stakeholder, previous.metadata.primary_stakeholder, slug)
            self._by_slug[slug] = entry
            self._by_name[metadata.name] = entry
            if metadata.primary_stakeholder:
                add_to_index(self._by_stakeholder, metadata.primary_stakeholder, slug)
        return entry

    # --- lookups ---

    def get_by_slug(self, slug: str) -> JourneyEntry | None:
        return self._by_slug.get(slug)

    def get_by_name(self, name: str) -> JourneyEntry | None:
        return self._by_name.get(name)

    def get_by_component(self, component: Any) -> JourneyEntry | None:
        return next((e for e in self.get_all() if e.component is component), None)

    def get_by_stakeholder(self, role: str) -> list[JourneyEntry]:
        with self._lock:
            return [self._by_slug[s] for s in self._by_stakeholder.get(role, []) if s in self._by_slug]

    def get_by_context(self, context: str) -> list[JourneyEntry]:
        return self.filter(lambda e: e.metadata.context == context)

    def get_critical(self) -> list[JourneyEntry]:
        return self.filter(lambda e: e.metadata.critical_path is True)

    def get_detours(self, slug: str) -> list[JourneyReference] | None:
        entry = self._by_slug.get(slug)
        return list(entry.metadata.detours) if entry is not None else None

    def get_main_path(self, slug: str) -> list[MilestoneReference] | None:
        """Milestone references of a journey sorted by order, detours excluded."""
        entry = self._by_slug.get(slug)
        if entry is None:
            return None
        return sorted(entry.metadata.milestones, key=lambda m: m.order)

    def get_full_path(self, slug: str) -> list[PathStep] | None:
        """Milestones and detours interleaved by order (milestones first on a tie)."""
        entry = self._by_slug.get(slug)
        if entry is None:
            return None
        path: list[PathStep] = [("milestone", m) for m in entry.metadata.milestones]
        path.extend(("detour", d) for d in entry.metadata.detours)
        return sorted(path, key=lambda step: step[1].order)

    def _find_journey(self, ref: Any) -> JourneyEntry | None:
        if isinstance(ref, str):
            return self._by_slug.get(ref) or self._by_name.get(ref)
        return self.get_by_component(ref)

    def validate_detour_graph(self, slug: str) -> dict[str, Any]:
        """
        Check a journey's detours.

        Errors: unknown journey, duplicate detour orders. Warnings: detour
        journeys not registered yet or not flagged ``is_detour``, and detours
        ordered outside the journey's milestone range.
        """
        errors: list[str] = []
        warnings: list[str] = []
        entry = self._by_slug.get(slug)
        if entry is None:
            errors.append(f"Journey {slug!r} not found in registry")
            return {"valid": False, "errors": errors, "warnings": warnings}

        detours = entry.metadata.detours
        if not detours:
            return {"valid": True, "errors": errors, "warnings": warnings}

        for detour in detours:
            label = component_label(detour.journey)
            target = self._find_journey(detour.journey)
            if target is None:
                warnings.append(
                    f"Detour {detour.label or label!r} references journey {label!r} which is not registered yet"
                )
            elif not target.metadata.is_detour:
                warnings.append(
                    f"Journey {target.metadata.name!r} is used as a detour but is not marked is_detour=True"
                )

        orders = [d.order for d in detours]
        if len(orders) != len(set(orders)):
            errors.append("Duplicate detour orders detected")

        milestone_orders = [m.order for m in entry.metadata.milestones]
        if milestone_orders:
            low, high = min(milestone_orders), max(milestone_orders)
            for detour in detours:
                if not low <= detour.order <= high:
                    warnings.append(
                        f"Detour {detour.label or 'unnamed'!r} order {detour.order} falls outside "
                        f"milestone range [{low}, {high}]"
                    )

        return {"valid": not errors, "errors": errors, "warnings": warnings}

    def get_detour_journeys(self) -> list[JourneyEntry]:
        return self.filter(lambda e: e.metadata.is_detour is True)

    def get_journeys_using_detour(self, detour_slug: str) -> list[JourneyEntry]:
        target = self._by_slug.get(detour_slug)
        if target is None:
            return []

        def _uses(entry: JourneyEntry) -> bool:
            for detour in entry.metadata.detours:
                if isinstance(detour.journey, str):
                    if detour.journey in (detour_slug, target.metadata.name):
                        return True
                elif detour.journey is target.component:
                    return True
            return False

        return self.filter(_uses)

    # --- enumeration ---

    def get_all(self) -> list[JourneyEntry]:
        with self._lock:
            return list(self._by_slug.values())

    def get_all_slugs(self) -> list[str]:
        with self._lock:
            return list(self._by_slug.keys())

    def get_all_stakeholders(self) -> list[str]:
        with self._lock:
            return list(self._by_stakeholder.keys())

    def get_stats(self) -> dict[str, Any]:
        by_context: dict[str, int] = {}
        for entry in self.get_all():
            if entry.metadata.context:
                by_context[entry.metadata.context] = by_context.get(entry.metadata.context, 0) + 1
        with self._lock:
            by_stakeholder = {role: len(slugs) for role, slugs in self._by_stakeholder.items()}
        return {
            "total_journeys": self.count(),
            "critical_journeys": len(self.get_critical()),
            "by_stakeholder": by_stakeholder,
            "by_context": by_context,
        }


__all__ = ["JourneyRegistry", "JourneyEntry", "PathStep"]
