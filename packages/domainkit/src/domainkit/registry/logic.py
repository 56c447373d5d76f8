# domainkit/registry/logic.py
"""Central index of executable-logic declarations (rules, policies, handlers, ...)."""

import logging
from typing import Any, Callable, Mapping

from ..exceptions import LogicTypeConflictError
from ..identity import component_label
from ..types import LogicMetadata, LogicType
from .base import BaseRegistry, add_to_index, reaches_cycle, remove_from_index
from .records import RegistryEntry

logger = logging.getLogger(__name__)

LogicEntry = RegistryEntry[LogicMetadata]
LogicKey = tuple[LogicType, str]


class LogicRegistry(BaseRegistry[LogicEntry]):
    """
    Logic entries keyed by ``(type, name)``.

    Any name collision is logged as a warning. Within one type the later
    registration replaces the earlier; across types both entries are kept and
    :meth:`get_by_name` returns the most recent unless a ``type`` is given.
    A component's logic type is fixed by its first registration.
    """

    kind = "logic"
    _indices = ("_entries", "_by_name", "_by_type", "_by_context", "_type_of_component")

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._entries: dict[LogicKey, LogicEntry] = {}
        self._by_name: dict[str, list[LogicKey]] = {}
        self._by_type: dict[LogicType, list[str]] = {}
        self._by_context: dict[str, list[LogicKey]] = {}
        self._type_of_component: dict[Any, LogicType] = {}

    # --- registration ---

    def register(self, metadata: LogicMetadata, component: Any) -> LogicEntry:
        """
        :raises LogicTypeConflictError: ``component`` was already registered with another type.
        """
        logic_type = LogicType(metadata.type)
        key: LogicKey = (logic_type, metadata.name)
        entry = RegistryEntry(metadata=metadata, component=component)

        with self._lock:
            fixed = self._type_of_component.get(component)
            if fixed is not None and fixed != logic_type:
                raise LogicTypeConflictError(
                    f"{component_label(component)} is registered as {fixed.value!r} logic; "
                    f"cannot re-register it as {logic_type.value!r}"
                )

            existing_keys = self._by_name.get(metadata.name, [])
            if key in existing_keys:
                self._warn_duplicate(metadata.name, f"(type {logic_type.value})")
                previous = self._entries[key]
                if previous.metadata.context:
                    remove_from_index(self._by_context, previous.metadata.context, key)
            elif existing_keys:
                others = ", ".join(k[0].value for k in existing_keys)
                logger.warning(
                    "[LOGIC] name %r is shared by logic of type(s) %s and %s; use distinct names",
                    metadata.name,
                    others,
                    logic_type.value,
                )

            self._entries[key] = entry
            # Most recent registration last so get_by_name() prefers it.
            if key in existing_keys:
                existing_keys.remove(key)
            add_to_index(self._by_name, metadata.name, key)
            add_to_index(self._by_type, logic_type, metadata.name)
            if metadata.context:
                add_to_index(self._by_context, metadata.context, key)
            self._type_of_component.setdefault(component, logic_type)

        return entry

    # --- lookups ---

    def get_by_name(self, name: str, type: LogicType | str | None = None) -> LogicEntry | None:
        with self._lock:
            if type is not None:
                return self._entries.get((LogicType(type), name))
            keys = self._by_name.get(name)
            return self._entries[keys[-1]] if keys else None

    def get_by_type(self, type: LogicType | str) -> list[LogicEntry]:
        logic_type = LogicType(type)
        with self._lock:
            return [self._entries[(logic_type, n)] for n in self._by_type.get(logic_type, [])]

    def get_by_context(self, context: str) -> list[LogicEntry]:
        with self._lock:
            return [self._entries[k] for k in self._by_context.get(context, []) if k in self._entries]

    def query(self, predicate: Callable[[LogicEntry], bool]) -> list[LogicEntry]:
        """Global query, e.g. ``query(lambda e: e.metadata.pure and e.metadata.cacheable)``."""
        return self.filter(predicate)

    def find_compatible(
        self,
        inputs: Mapping[str, str] | None = None,
        outputs: Mapping[str, str] | None = None,
    ) -> list[LogicEntry]:
        """Logic whose declared inputs/outputs agree with every given name -> type pair."""

        def _matches(declared: Mapping[str, str], wanted: Mapping[str, str] | None) -> bool:
            if not wanted or not declared:
                return True
            return all(declared.get(k) == v for k, v in wanted.items())

        return self.filter(
            lambda e: _matches(e.metadata.inputs, inputs) and _matches(e.metadata.outputs, outputs)
        )

    # --- call graph ---

    @staticmethod
    def _dependencies_of(metadata: LogicMetadata) -> list[str]:
        """``invokes`` plus string ``composed_of`` references, first occurrence kept."""
        deps: list[str] = []
        for dep in [*metadata.invokes, *(ref.logic for ref in metadata.composed_of)]:
            if isinstance(dep, str) and dep not in deps:
                deps.append(dep)
        return deps

    def get_dependencies(self, name: str, type: LogicType | str | None = None) -> list[str]:
        """Names this logic invokes; without ``type`` every entry sharing ``name`` contributes."""
        with self._lock:
            if type is not None:
                entry = self._entries.get((LogicType(type), name))
                entries = [entry] if entry is not None else []
            else:
                entries = [self._entries[k] for k in self._by_name.get(name, [])]
        deps: list[str] = []
        for entry in entries:
            for dep in self._dependencies_of(entry.metadata):
                if dep not in deps:
                    deps.append(dep)
        return deps

    def get_dependents(self, name: str) -> list[LogicEntry]:
        """Entries whose own dependencies include ``name``."""
        return self.filter(lambda e: name in self._dependencies_of(e.metadata))

    def has_cyclic_dependency(self, name: str) -> bool:
        """
        Whether a walk from ``name`` through the call graph reaches a cycle.

        Names are graph nodes, so entries of different types that share a name
        pool their edges. Recursive invocation is legitimate for logic, so this
        is informational only and never consulted on registration.
        """
        with self._lock:
            names = list(self._by_name)
        return reaches_cycle({n: self.get_dependencies(n) for n in names}, name)

    # --- enumeration ---

    def get_all(self) -> list[LogicEntry]:
        with self._lock:
            return list(self._entries.values())

    def get_all_types(self) -> list[LogicType]:
        with self._lock:
            return [t for t, names in self._by_type.items() if names]

    def get_all_contexts(self) -> list[str]:
        with self._lock:
            return list(self._by_context.keys())

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            return {
                "total_logic": len(self._entries),
                "by_type": {t.value: len(names) for t, names in self._by_type.items()},
                "by_context": {c: len(keys) for c, keys in self._by_context.items()},
            }


__all__ = ["LogicRegistry", "LogicEntry"]
