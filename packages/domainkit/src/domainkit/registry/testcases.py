# domainkit/registry/testcases.py
"""
Test registry: stable test IDs, coverage queries and deferred linkage.

A test declared before the behavior (or expectation) that owns it has no
expectation ID yet. It is kept :class:`Unresolved` in a bucket keyed by its
owning component until :meth:`TestRegistry.resolve` drains that bucket and
assigns ``{expectation_id}-TEST-{N}``. The transition is one-way.
"""

import logging
from typing import Any, Iterable

from ..identity import component_label, format_test_id
from ..types import TestMetadata, TestType
from .base import BaseRegistry, add_to_index
from .records import Resolved, TestEntry, Unresolved

logger = logging.getLogger(__name__)

TestRegistryEntry = TestEntry[TestMetadata]


class TestRegistry(BaseRegistry[TestRegistryEntry]):
    __test__ = False

    kind = "test"
    _indices = ("_entries", "_by_id", "_by_expectation", "_by_behavior", "_counters", "_unresolved")

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        # Registration order; resolved entries are swapped in place.
        self._entries: list[TestRegistryEntry] = []
        self._by_id: dict[str, TestRegistryEntry] = {}
        self._by_expectation: dict[str, list[str]] = {}
        self._by_behavior: dict[str, list[str]] = {}
        self._counters: dict[str, int] = {}
        self._unresolved: dict[Any, list[TestRegistryEntry]] = {}

    # --- ids ---

    def _next_test_id(self, expectation_id: str) -> str:
        """Next free ``{expectation_id}-TEST-{N}``; numbers taken by explicit IDs are skipped."""
        counter = self._counters.get(expectation_id, 0)
        while True:
            counter += 1
            test_id = format_test_id(expectation_id, counter, padding=self.settings.test_id_padding)
            if test_id not in self._by_id:
                break
        self._counters[expectation_id] = counter
        return test_id

    def _index(self, entry: TestRegistryEntry) -> None:
        test_id = entry.test_id
        metadata = entry.metadata
        self._by_id[test_id] = entry
        if metadata.expectation_id:
            add_to_index(self._by_expectation, metadata.expectation_id, test_id)
        if metadata.behavior_id:
            add_to_index(self._by_behavior, metadata.behavior_id, test_id)

    # --- registration ---

    def register(self, metadata: TestMetadata, component: Any) -> TestRegistryEntry:
        """
        Register a test.

        An explicit ``test_id`` is kept as-is. Otherwise a test with an
        ``expectation_id`` gets the next ID for that expectation, and a test
        with neither waits in the unresolved bucket of ``component``.
        """
        with self._lock:
            if metadata.test_id:
                test_id = metadata.test_id
            elif metadata.expectation_id:
                test_id = self._next_test_id(metadata.expectation_id)
            else:
                test_id = None

            if test_id is None:
                entry = TestEntry(metadata=metadata, component=component, state=Unresolved())
                self._unresolved.setdefault(component, []).append(entry)
                self._entries.append(entry)
                logger.debug(
                    "[TEST] %s has no expectation yet; waiting for %s to be linked",
                    metadata.name,
                    component_label(component),
                )
                return entry

            if test_id in self._by_id:
                self._warn_duplicate(test_id)
                previous = self._by_id[test_id]
                self._entries = [e for e in self._entries if e is not previous]

            entry = TestEntry(
                metadata=metadata.model_copy(update={"test_id": test_id}),
                component=component,
                state=Resolved(test_id),
            )
            self._entries.append(entry)
            self._index(entry)

        return entry

    def resolve(self, component: Any, *, expectation_id: str | None, behavior_id: str | None = None) -> list[str]:
        """
        Link every unresolved test of ``component`` to ``expectation_id``.

        Returns the newly assigned test IDs in registration order. Without an
        expectation ID nothing can be assigned and the bucket is left intact.
        """
        if not expectation_id:
            logger.debug("[TEST] %s linked without an expectation; tests stay unresolved", component_label(component))
            return []

        assigned: list[str] = []
        with self._lock:
            pending = self._unresolved.pop(component, [])
            for entry in pending:
                update: dict[str, Any] = {"expectation_id": entry.metadata.expectation_id or expectation_id}
                if behavior_id and not entry.metadata.behavior_id:
                    update["behavior_id"] = behavior_id
                test_id = self._next_test_id(update["expectation_id"])
                update["test_id"] = test_id
                resolved = TestEntry(
                    metadata=entry.metadata.model_copy(update=update),
                    component=entry.component,
                    state=Resolved(test_id),
                )
                self._entries = [resolved if e is entry else e for e in self._entries]
                self._index(resolved)
                assigned.append(test_id)

        if assigned:
            logger.debug("[TEST] resolved %s for %s", ", ".join(assigned), component_label(component))
        return assigned

    # --- lookups ---

    def _lookup(self, ids: Iterable[str]) -> list[TestRegistryEntry]:
        return [self._by_id[i] for i in ids if i in self._by_id]

    def get_by_id(self, test_id: str) -> TestRegistryEntry | None:
        return self._by_id.get(test_id)

    def get_by_expectation(self, expectation_id: str) -> list[TestRegistryEntry]:
        with self._lock:
            return self._lookup(list(self._by_expectation.get(expectation_id, [])))

    def get_by_behavior(self, behavior_id: str) -> list[TestRegistryEntry]:
        with self._lock:
            return self._lookup(list(self._by_behavior.get(behavior_id, [])))

    def get_by_type(self, type: TestType | str) -> list[TestRegistryEntry]:
        test_type = TestType(type)
        return self.filter(lambda e: e.metadata.type == test_type)

    def get_by_component(self, component: Any) -> list[TestRegistryEntry]:
        return self.filter(lambda e: e.component is component)

    def get_unresolved(self) -> list[TestRegistryEntry]:
        return self.filter(lambda e: not e.is_resolved)

    def get_all_test_ids(self) -> list[str]:
        with self._lock:
            return list(self._by_id.keys())

    # --- coverage ---

    def get_covered_expectations(self) -> list[str]:
        with self._lock:
            return [eid for eid, ids in self._by_expectation.items() if ids]

    def has_tests(self, expectation_id: str) -> bool:
        return bool(self._by_expectation.get(expectation_id))

    def get_coverage(self, all_expectation_ids: Iterable[str] | None = None) -> dict[str, Any]:
        """Share of expectations with at least one test; defaults to the covered set itself."""
        covered = self.get_covered_expectations()
        if all_expectation_ids is None:
            total = len(covered)
            covered_count = len(covered)
        else:
            wanted = list(dict.fromkeys(all_expectation_ids))
            total = len(wanted)
            covered_count = sum(1 for eid in wanted if self.has_tests(eid))
        percentage = round(covered_count / total * 100, 2) if total else 0.0
        return {
            "total_tests": len(self._by_id),
            "total_expectations": total,
            "covered_expectations": covered_count,
            "coverage_percentage": percentage,
            "by_type": self._count_by_type(),
        }

    def get_gaps(self, all_expectation_ids: Iterable[str]) -> list[str]:
        """Expectation IDs that have no test, in the given order."""
        return [eid for eid in all_expectation_ids if not self.has_tests(eid)]

    # --- enumeration ---

    def _count_by_type(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for entry in self.get_all():
            key = TestType(entry.metadata.type).value
            counts[key] = counts.get(key, 0) + 1
        return counts

    def get_all(self) -> list[TestRegistryEntry]:
        with self._lock:
            return list(self._entries)

    def get_stats(self) -> dict[str, Any]:
        by_framework: dict[str, int] = {}
        for entry in self.get_all():
            framework = entry.metadata.framework or "unknown"
            by_framework[framework] = by_framework.get(framework, 0) + 1
        return {
            "total_tests": self.count(),
            "resolved_tests": len(self._by_id),
            "unresolved_tests": len(self.get_unresolved()),
            "total_expectations": len(self.get_covered_expectations()),
            "by_type": self._count_by_type(),
            "by_framework": by_framework,
        }


__all__ = ["TestRegistry", "TestRegistryEntry"]
