# domainkit/registry/behaviors.py
"""Behaviors: implementation strategies fulfilling expectations."""

import logging
from typing import Any

from ..types import BehaviorContractType, BehaviorExecutionMode, BehaviorMetadata
from .base import BaseRegistry, add_to_index, remove_from_index
from .records import RegistryEntry

logger = logging.getLogger(__name__)

BehaviorEntry = RegistryEntry[BehaviorMetadata]


class BehaviorRegistry(BaseRegistry[BehaviorEntry]):
    """
    Behaviors keyed by name.

    A behavior without ``expectation_id`` is reusable. One declared inside an
    expectation before the expectation's ID is known is linked later with
    :meth:`resolve`.
    """

    kind = "behavior"
    _indices = ("_by_name", "_by_context", "_by_expectation", "_by_mode", "_by_contract_type")

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._by_name: dict[str, BehaviorEntry] = {}
        self._by_context: dict[str, list[str]] = {}
        self._by_expectation: dict[str, list[str]] = {}
        self._by_mode: dict[BehaviorExecutionMode, list[str]] = {}
        self._by_contract_type: dict[BehaviorContractType, list[str]] = {}

    def register(self, metadata: BehaviorMetadata, component: Any) -> BehaviorEntry:
        entry = RegistryEntry(metadata=metadata, component=component)
        with self._lock:
            previous = self._by_name.get(metadata.name)
            if previous is not None:
                self._warn_duplicate(metadata.name)
                self._unindex(previous)
            self._by_name[metadata.name] = entry
            self._index(entry)
        return entry

    def _index(self, entry: BehaviorEntry) -> None:
        metadata = entry.metadata
        if metadata.context:
            add_to_index(self._by_context, metadata.context, metadata.name)
        if metadata.expectation_id:
            add_to_index(self._by_expectation, metadata.expectation_id, metadata.name)
        if metadata.execution_mode:
            add_to_index(self._by_mode, metadata.execution_mode, metadata.name)
        if metadata.contract is not None:
            add_to_index(self._by_contract_type, metadata.contract.type, metadata.name)

    def _unindex(self, entry: BehaviorEntry) -> None:
        metadata = entry.metadata
        if metadata.context:
            remove_from_index(self._by_context, metadata.context, metadata.name)
        if metadata.expectation_id:
            remove_from_index(self._by_expectation, metadata.expectation_id, metadata.name)
        if metadata.execution_mode:
            remove_from_index(self._by_mode, metadata.execution_mode, metadata.name)
        if metadata.contract is not None:
            remove_from_index(self._by_contract_type, metadata.contract.type, metadata.name)

    def resolve(self, name: str, *, expectation_id: str) -> BehaviorEntry | None:
        """Give a behavior without an expectation the ``expectation_id`` of its owner."""
        with self._lock:
            entry = self._by_name.get(name)
            if entry is None:
                logger.warning("[BEHAVIOR] cannot link %r to %s: behavior not registered", name, expectation_id)
                return None
            if entry.metadata.expectation_id:
                return entry
            resolved = RegistryEntry(
                metadata=entry.metadata.model_copy(update={"expectation_id": expectation_id}),
                component=entry.component,
            )
            self._by_name[name] = resolved
            add_to_index(self._by_expectation, expectation_id, name)
        return resolved

    # --- lookups ---

    def _lookup(self, names: list[str]) -> list[BehaviorEntry]:
        return [self._by_name[n] for n in names if n in self._by_name]

    def get_by_name(self, name: str) -> BehaviorEntry | None:
        return self._by_name.get(name)

    def get_by_context(self, context: str) -> list[BehaviorEntry]:
        with self._lock:
            return self._lookup(list(self._by_context.get(context, [])))

    def get_by_expectation(self, expectation_id: str) -> list[BehaviorEntry]:
        with self._lock:
            return self._lookup(list(self._by_expectation.get(expectation_id, [])))

    def get_by_execution_mode(self, mode: BehaviorExecutionMode | str) -> list[BehaviorEntry]:
        with self._lock:
            return self._lookup(list(self._by_mode.get(BehaviorExecutionMode(mode), [])))

    def get_by_contract_type(self, type: BehaviorContractType | str) -> list[BehaviorEntry]:
        with self._lock:
            return self._lookup(list(self._by_contract_type.get(BehaviorContractType(type), [])))

    def get_reusable(self) -> list[BehaviorEntry]:
        return self.filter(lambda e: not e.metadata.expectation_id)

    def get_expectation_specific(self) -> list[BehaviorEntry]:
        return self.filter(lambda e: bool(e.metadata.expectation_id))

    def get_all(self) -> list[BehaviorEntry]:
        with self._lock:
            return list(self._by_name.values())

    def get_all_contexts(self) -> list[str]:
        with self._lock:
            return list(self._by_context.keys())

    def get_all_execution_modes(self) -> list[BehaviorExecutionMode]:
        with self._lock:
            return list(self._by_mode.keys())

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            by_context = {c: len(n) for c, n in self._by_context.items()}
            by_mode = {m.value: len(n) for m, n in self._by_mode.items()}
        return {
            "total_behaviors": self.count(),
            "reusable_behaviors": len(self.get_reusable()),
            "expectation_specific": len(self.get_expectation_specific()),
            "by_context": by_context,
            "by_execution_mode": by_mode,
        }


__all__ = ["BehaviorRegistry", "BehaviorEntry"]
