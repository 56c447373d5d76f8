# domainkit/registry/contexts.py
"""Bounded contexts, their declared relationships and vocabulary."""

import logging
from typing import Any

from slugify import slugify

from ..types import BoundedContextMetadata, ContextRelationshipType
from .base import BaseRegistry
from .records import RegistryEntry

logger = logging.getLogger(__name__)

BoundedContextEntry = RegistryEntry[BoundedContextMetadata]


class BoundedContextRegistry(BaseRegistry[BoundedContextEntry]):
    kind = "bounded_context"
    _indices = ("_by_name",)

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._by_name: dict[str, BoundedContextEntry] = {}

    def register(self, metadata: BoundedContextMetadata, component: Any) -> BoundedContextEntry:
        if metadata.id is None:
            metadata = metadata.model_copy(update={"id": slugify(metadata.name)})
        entry = RegistryEntry(metadata=metadata, component=component)
        with self._lock:
            if metadata.name in self._by_name:
                self._warn_duplicate(metadata.name, "This may indicate duplicate context definitions.")
            self._by_name[metadata.name] = entry
        return entry

    def get(self, name: str) -> BoundedContextEntry | None:
        return self._by_name.get(name)

    def has(self, name: str) -> bool:
        return name in self._by_name

    def get_by_owner(self, owner: str) -> list[BoundedContextEntry]:
        return self.filter(lambda e: e.metadata.owner == owner)

    def get_by_tag(self, tag: str) -> list[BoundedContextEntry]:
        return self.filter(lambda e: tag in e.metadata.tags)

    def get_related_contexts(
        self,
        name: str,
        relationship_type: ContextRelationshipType | str | None = None,
    ) -> list[tuple[str, ContextRelationshipType]]:
        """``(context_name, relationship_type)`` pairs declared by ``name``; optionally filtered."""
        entry = self._by_name.get(name)
        if entry is None:
            return []
        pairs = list(entry.metadata.relationships.items())
        if relationship_type is not None:
            wanted = ContextRelationshipType(relationship_type)
            pairs = [(n, t) for n, t in pairs if t == wanted]
        return pairs

    def get_related_names(self, name: str) -> list[str]:
        return [n for n, _ in self.get_related_contexts(name)]

    def get_upstream_contexts(self, name: str) -> list[str]:
        return [n for n, _ in self.get_related_contexts(name, ContextRelationshipType.UPSTREAM)]

    def get_downstream_contexts(self, name: str) -> list[str]:
        return [n for n, _ in self.get_related_contexts(name, ContextRelationshipType.DOWNSTREAM)]

    def get_vocabulary(self, name: str) -> dict[str, str] | None:
        entry = self._by_name.get(name)
        return dict(entry.metadata.vocabulary) if entry is not None else None

    def get_names(self) -> list[str]:
        with self._lock:
            return list(self._by_name.keys())

    def get_all(self) -> list[BoundedContextEntry]:
        with self._lock:
            return list(self._by_name.values())

    def get_stats(self) -> dict[str, Any]:
        return {
            "total_contexts": self.count(),
            "total_relationships": sum(len(e.metadata.relationships) for e in self.get_all()),
        }


__all__ = ["BoundedContextRegistry", "BoundedContextEntry"]
