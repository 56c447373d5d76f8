# domainkit/registry/milestones.py
"""Milestone registry with journey/stakeholder indices and prerequisite tracking."""

import logging
import sys
from typing import Any

from ..types import MilestoneMetadata
from .base import BaseRegistry, add_to_index, reaches_cycle, remove_from_index
from .records import RegistryEntry

logger = logging.getLogger(__name__)

MilestoneEntry = RegistryEntry[MilestoneMetadata]


class MilestoneRegistry(BaseRegistry[MilestoneEntry]):
    """
    Index of milestones by name, ID, journey and stakeholder role.

    Names are the primary key. Registering a name twice is a recoverable
    warning (the same milestone legitimately shows up in several declaration
    passes); the later registration replaces the earlier one in every index.
    """

    kind = "milestone"
    _indices = ("_by_name", "_by_id", "_by_journey", "_by_stakeholder")

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._by_name: dict[str, MilestoneEntry] = {}
        self._by_id: dict[str, MilestoneEntry] = {}
        self._by_journey: dict[str, list[str]] = {}
        self._by_stakeholder: dict[str, list[str]] = {}

    # --- registration ---

    def register(self, metadata: MilestoneMetadata, component: Any, journey_slug: str | None = None) -> MilestoneEntry:
        name = metadata.name
        entry = RegistryEntry(metadata=metadata, component=component)

        with self._lock:
            previous = self._by_name.get(name)
            if previous is not None:
                self._warn_duplicate(name, "Intentional if the milestone is reused across journeys.")
                self._unindex(previous)

            self._by_name[name] = entry
            if metadata.id:
                self._by_id[metadata.id] = entry
            if journey_slug:
                add_to_index(self._by_journey, journey_slug, name)
            for slug in metadata.journeys:
                add_to_index(self._by_journey, slug, name)
            add_to_index(self._by_stakeholder, metadata.stakeholder, name)

        return entry

    def _unindex(self, entry: MilestoneEntry) -> None:
        # Journey membership is kept: the replacement shares the name and a
        # reused milestone must stay listed in every journey it joined.
        metadata = entry.metadata
        if metadata.id and self._by_id.get(metadata.id) is entry:
            del self._by_id[metadata.id]
        remove_from_index(self._by_stakeholder, metadata.stakeholder, metadata.name)

    # --- lookups ---

    def get_by_name(self, name: str) -> MilestoneEntry | None:
        return self._by_name.get(name)

    def get_by_id(self, milestone_id: str) -> MilestoneEntry | None:
        return self._by_id.get(milestone_id)

    def _resolve_names(self, names: list[str]) -> list[MilestoneEntry]:
        return [self._by_name[n] for n in names if n in self._by_name]

    def get_by_journey(self, slug: str) -> list[MilestoneEntry]:
        """Milestones of a journey, ascending by order; unordered ones last in registration order."""
        with self._lock:
            entries = self._resolve_names(self._by_journey.get(slug, []))

        def _key(entry: MilestoneEntry) -> int:
            order = entry.metadata.order
            return sys.maxsize if order is None else order

        return sorted(entries, key=_key)

    def get_by_stakeholder(self, role: str) -> list[MilestoneEntry]:
        with self._lock:
            return self._resolve_names(self._by_stakeholder.get(role, []))

    def get_prerequisites(self, name: str) -> list[MilestoneEntry]:
        """Resolve one level of prerequisites; undeclared names are dropped."""
        with self._lock:
            entry = self._by_name.get(name)
            if entry is None:
                return []
            return self._resolve_names(entry.metadata.prerequisites)

    def has_circular_dependency(self, name: str) -> bool:
        """
        True if ``name`` reaches a cycle through the prerequisite graph.

        Iterative depth-first search (see :func:`reaches_cycle`), so chains of
        any length are safe. Advisory: nothing calls this during registration
        and registry state is never modified.
        """
        with self._lock:
            graph = {n: list(e.metadata.prerequisites) for n, e in self._by_name.items()}
        return reaches_cycle(graph, name)

    def get_reusable(self) -> list[MilestoneEntry]:
        return self.filter(lambda e: e.metadata.reusable is True)

    def get_stateful(self) -> list[MilestoneEntry]:
        return self.filter(lambda e: e.metadata.stateful is not False)

    def get_all(self) -> list[MilestoneEntry]:
        with self._lock:
            return list(self._by_name.values())

    def get_all_journey_slugs(self) -> list[str]:
        with self._lock:
            return list(self._by_journey.keys())

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            by_journey = {slug: len(names) for slug, names in self._by_journey.items()}
            by_stakeholder = {role: len(names) for role, names in self._by_stakeholder.items()}
            total = len(self._by_name)
        return {
            "total_milestones": total,
            "reusable_milestones": len(self.get_reusable()),
            "stateful_milestones": len(self.get_stateful()),
            "by_journey": by_journey,
            "by_stakeholder": by_stakeholder,
        }


__all__ = ["MilestoneRegistry", "MilestoneEntry"]
