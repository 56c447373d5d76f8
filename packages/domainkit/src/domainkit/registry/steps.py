# domainkit/registry/steps.py
"""Step registry: ordered steps grouped under a parent milestone or behavior."""

import logging
from typing import Any

from ..exceptions import MissingFieldError, StepOrderConflictError, UnresolvedReferenceError
from ..identity import component_label
from ..types import StepMetadata
from .base import BaseRegistry, add_to_index
from .records import ParentKind, StepEntry

logger = logging.getLogger(__name__)

StepRegistryEntry = StepEntry[StepMetadata]


class StepRegistry(BaseRegistry[StepRegistryEntry]):
    """
    Steps indexed by parent, name and actor.

    Order collisions under one parent are authoring mistakes and raise
    :class:`StepOrderConflictError`, unlike the warn-and-replace policy of the
    name-keyed registries.

    Reusable step classes first register under themselves as a placeholder
    parent (``parent_kind="standalone"``). A composing milestone then calls
    :meth:`attach` to re-register the same metadata under itself at a
    specific order.
    """

    kind = "step"
    _indices = ("_by_parent", "_by_name", "_by_actor")

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._by_parent: dict[Any, list[StepRegistryEntry]] = {}
        self._by_name: dict[str, list[StepRegistryEntry]] = {}
        self._by_actor: dict[str, list[StepRegistryEntry]] = {}

    # --- registration ---

    def register(self, metadata: StepMetadata, parent: Any, parent_kind: ParentKind) -> StepRegistryEntry:
        """
        Append a step under ``parent``.

        :raises MissingFieldError: a non-standalone step has no ``order``.
        :raises StepOrderConflictError: another step under ``parent`` already uses ``order``.
        """
        if parent_kind != "standalone" and metadata.order is None:
            raise MissingFieldError(
                f"Step {metadata.name!r} under {component_label(parent)} must define an order"
            )
        entry = StepEntry(metadata=metadata, parent=parent, parent_kind=parent_kind)

        with self._lock:
            siblings = self._by_parent.get(parent, [])
            if metadata.order is not None:
                clash = next((s for s in siblings if s.order == metadata.order), None)
                if clash is not None:
                    raise StepOrderConflictError(
                        f"Step {metadata.name!r} uses order {metadata.order} already taken by "
                        f"{clash.name!r} in {component_label(parent)}"
                    )
            add_to_index(self._by_parent, parent, entry, unique=False)
            add_to_index(self._by_name, metadata.name, entry, unique=False)
            if metadata.actor:
                add_to_index(self._by_actor, metadata.actor, entry, unique=False)

        logger.debug("[STEP] %s registered under %s (%s)", metadata.name, component_label(parent), parent_kind)
        return entry

    def register_standalone(self, metadata: StepMetadata, component: Any) -> StepRegistryEntry:
        """Register a reusable step under itself until a milestone composes it."""
        return self.register(metadata, component, "standalone")

    def get_standalone(self, component: Any) -> StepRegistryEntry | None:
        with self._lock:
            for entry in self._by_parent.get(component, []):
                if entry.parent_kind == "standalone":
                    return entry
        return None

    def attach(
        self,
        step_component: Any,
        parent: Any,
        *,
        order: int,
        parent_kind: ParentKind = "milestone",
        optional: bool | None = None,
    ) -> StepRegistryEntry:
        """
        Compose a standalone step into ``parent`` at ``order``.

        :raises UnresolvedReferenceError: ``step_component`` is a string or was never registered.
        """
        if isinstance(step_component, str):
            raise UnresolvedReferenceError(
                f"String step references are not supported; pass the step class instead: {step_component!r}"
            )
        standalone = self.get_standalone(step_component)
        if standalone is None:
            raise UnresolvedReferenceError(
                f"{component_label(step_component)} is not a registered step; declare it with @step first"
            )
        update: dict[str, Any] = {"order": order}
        if optional is not None:
            update["optional"] = optional
        return self.register(standalone.metadata.model_copy(update=update), parent, parent_kind)

    # --- lookups ---

    def _composed(self) -> list[StepRegistryEntry]:
        return [e for entries in self._by_parent.values() for e in entries if e.parent_kind != "standalone"]

    def get_by_parent(self, parent: Any) -> list[StepRegistryEntry]:
        """Steps under ``parent`` sorted ascending by order."""
        with self._lock:
            entries = list(self._by_parent.get(parent, []))
        return sorted(entries, key=lambda e: (e.order is None, e.order or 0))

    def get_by_name(self, name: str) -> list[StepRegistryEntry]:
        with self._lock:
            return list(self._by_name.get(name, []))

    def get_by_actor(self, actor: str) -> list[StepRegistryEntry]:
        with self._lock:
            return list(self._by_actor.get(actor, []))

    def get_optional(self) -> list[StepRegistryEntry]:
        return self.filter(lambda e: e.metadata.optional is True)

    def get_required(self) -> list[StepRegistryEntry]:
        return self.filter(lambda e: e.metadata.optional is not True)

    def get_with_alternatives(self) -> list[StepRegistryEntry]:
        return self.filter(lambda e: bool(e.metadata.alternatives))

    def validate_ordering(self, parent: Any) -> dict[str, Any]:
        """Report missing orders, duplicates, gaps and a start other than 1 (advisory)."""
        entries = self.get_by_parent(parent)
        issues: list[str] = []
        if not entries:
            return {"valid": True, "issues": issues}

        missing = [e.name for e in entries if e.order is None]
        if missing:
            issues.append(f"Steps missing order: {', '.join(missing)}")
            return {"valid": False, "issues": issues}

        orders = [e.order for e in entries]
        duplicates = sorted({o for o in orders if orders.count(o) > 1})
        if duplicates:
            issues.append(f"Duplicate step orders found: {', '.join(map(str, duplicates))}")

        unique_orders = sorted(set(orders))
        for prev, cur in zip(unique_orders, unique_orders[1:]):
            if cur - prev > 1:
                issues.append(f"Gap in step ordering: {prev} -> {cur}")
        if unique_orders[0] != 1:
            issues.append(f"Step ordering should start at 1, but starts at {unique_orders[0]}")

        return {"valid": not issues, "issues": issues}

    def get_all(self) -> list[StepRegistryEntry]:
        with self._lock:
            return [e for entries in self._by_parent.values() for e in entries]

    def get_all_actors(self) -> list[str]:
        with self._lock:
            return list(self._by_actor.keys())

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            by_actor = {actor: len(entries) for actor, entries in self._by_actor.items()}
            composed = len(self._composed())
        return {
            "total_steps": self.count(),
            "composed_steps": composed,
            "optional_steps": len(self.get_optional()),
            "required_steps": len(self.get_required()),
            "steps_with_alternatives": len(self.get_with_alternatives()),
            "by_actor": by_actor,
        }


__all__ = ["StepRegistry", "StepRegistryEntry"]
