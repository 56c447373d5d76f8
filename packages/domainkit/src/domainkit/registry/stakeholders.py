# domainkit/registry/stakeholders.py
"""Personas and the stakeholder roles they play inside bounded contexts."""

import logging
from typing import Any

from slugify import slugify

from ..identity import component_label, stakeholder_id
from ..types import PersonaMetadata, PersonaType, StakeholderMetadata
from .base import BaseRegistry
from .records import RegistryEntry

logger = logging.getLogger(__name__)

PersonaEntry = RegistryEntry[PersonaMetadata]
StakeholderEntry = RegistryEntry[StakeholderMetadata]


class PersonaRegistry(BaseRegistry[PersonaEntry]):
    """Personas keyed by name (the class name when none is declared)."""

    kind = "persona"
    _indices = ("_by_name",)

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._by_name: dict[str, PersonaEntry] = {}

    def register(self, metadata: PersonaMetadata, component: Any) -> PersonaEntry:
        name = metadata.name or component_label(component)
        update: dict[str, Any] = {}
        if metadata.name is None:
            update["name"] = name
        if metadata.id is None:
            update["id"] = slugify(name)
        if update:
            metadata = metadata.model_copy(update=update)
        entry = RegistryEntry(metadata=metadata, component=component)

        with self._lock:
            if name in self._by_name:
                self._warn_duplicate(name, "This may indicate duplicate persona definitions.")
            self._by_name[name] = entry
        return entry

    def get(self, name: str) -> PersonaEntry | None:
        return self._by_name.get(name)

    def has(self, name: str) -> bool:
        return name in self._by_name

    def get_by_type(self, type: PersonaType | str) -> list[PersonaEntry]:
        persona_type = PersonaType(type)
        return self.filter(lambda e: e.metadata.type == persona_type)

    def get_by_tag(self, tag: str) -> list[PersonaEntry]:
        return self.filter(lambda e: tag in e.metadata.tags)

    def get_names(self) -> list[str]:
        with self._lock:
            return list(self._by_name.keys())

    def get_all(self) -> list[PersonaEntry]:
        with self._lock:
            return list(self._by_name.values())

    def get_stats(self) -> dict[str, Any]:
        by_type: dict[str, int] = {}
        for entry in self.get_all():
            key = PersonaType(entry.metadata.type).value
            by_type[key] = by_type.get(key, 0) + 1
        return {"total_personas": self.count(), "by_type": by_type}


class StakeholderRegistry(BaseRegistry[StakeholderEntry]):
    """
    Stakeholders keyed by ID (``"{context}:{role}"`` unless declared).

    The role -> context lookup here is what expectation validation joins on.
    """

    kind = "stakeholder"
    _indices = ("_by_id",)

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._by_id: dict[str, StakeholderEntry] = {}

    def register(self, metadata: StakeholderMetadata, component: Any) -> StakeholderEntry:
        if metadata.id is None:
            metadata = metadata.model_copy(update={"id": stakeholder_id(metadata.context, metadata.role)})
        entry = RegistryEntry(metadata=metadata, component=component)

        with self._lock:
            if metadata.id in self._by_id:
                self._warn_duplicate(metadata.id, "This may indicate duplicate stakeholder definitions.")
            self._by_id[metadata.id] = entry
        return entry

    def get(self, stakeholder_id: str) -> StakeholderEntry | None:
        return self._by_id.get(stakeholder_id)

    def has(self, stakeholder_id: str) -> bool:
        return stakeholder_id in self._by_id

    def get_by_persona(self, persona: str) -> list[StakeholderEntry]:
        return self.filter(lambda e: e.metadata.persona == persona)

    def get_by_context(self, context: str) -> list[StakeholderEntry]:
        return self.filter(lambda e: e.metadata.context == context)

    def get_by_role(self, role: str) -> list[StakeholderEntry]:
        return self.filter(lambda e: e.metadata.role == role)

    def get_by_tag(self, tag: str) -> list[StakeholderEntry]:
        return self.filter(lambda e: tag in e.metadata.tags)

    def get_by_component(self, component: Any) -> StakeholderEntry | None:
        return next((e for e in self.get_all() if e.component is component), None)

    def context_for_role(self, role: str) -> str | None:
        """Bounded context of the first stakeholder registered with ``role``."""
        matches = self.get_by_role(role)
        if len(matches) > 1:
            contexts = {e.metadata.context for e in matches}
            if len(contexts) > 1:
                logger.debug("[STAKEHOLDER] role %r exists in several contexts %s; using the first", role, sorted(contexts))
        return matches[0].metadata.context if matches else None

    def get_ids(self) -> list[str]:
        with self._lock:
            return list(self._by_id.keys())

    def get_all(self) -> list[StakeholderEntry]:
        with self._lock:
            return list(self._by_id.values())

    def get_stats(self) -> dict[str, Any]:
        by_context: dict[str, int] = {}
        for entry in self.get_all():
            by_context[entry.metadata.context] = by_context.get(entry.metadata.context, 0) + 1
        return {"total_stakeholders": self.count(), "by_context": by_context}


__all__ = ["PersonaRegistry", "StakeholderRegistry", "PersonaEntry", "StakeholderEntry"]
