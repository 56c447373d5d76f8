# domainkit/registry/registry_set.py
"""One instance of every registry, constructed explicitly and passed around."""

import logging
from collections.abc import Iterable, Mapping
from threading import RLock
from typing import Any

from ..conf import Settings
from ..identity import component_label
from ..types import BehaviorMetadata, ExpectationMetadata
from .attributes import AttributeRegistry
from .base import BaseRegistry
from .behaviors import BehaviorEntry, BehaviorRegistry
from .contexts import BoundedContextRegistry
from .events import EventRegistry
from .expectations import ContextValidation, ExpectationRegistry
from .journeys import JourneyRegistry
from .logic import LogicRegistry
from .milestones import MilestoneRegistry
from .stakeholders import PersonaRegistry, StakeholderRegistry
from .steps import StepRegistry
from .testcases import TestRegistry

logger = logging.getLogger(__name__)


class RegistrySet:
    """
    Container owning one registry per component kind.

    Build one per application (or per test) instead of relying on module
    globals; ``clear()`` and a fresh ``RegistrySet()`` are equivalent
    isolation boundaries. Registries never reference each other; joins across
    them (stakeholder -> context, behavior -> tests) happen here, on string
    keys, at call time.
    """

    def __init__(self, settings: Settings | Mapping[str, Any] | None = None) -> None:
        if settings is None:
            settings = Settings()
        elif not isinstance(settings, Settings):
            settings = Settings(settings)
        self.settings: Settings = settings
        self._lock = RLock()

        opts = {"settings": settings}
        self.milestones = MilestoneRegistry(**opts)
        self.steps = StepRegistry(**opts)
        self.logic = LogicRegistry(**opts)
        self.events = EventRegistry(**opts)
        self.attributes = AttributeRegistry(**opts)
        self.tests = TestRegistry(**opts)
        self.expectations = ExpectationRegistry(**opts)
        self.behaviors = BehaviorRegistry(**opts)
        self.journeys = JourneyRegistry(**opts)
        self.personas = PersonaRegistry(**opts)
        self.stakeholders = StakeholderRegistry(**opts)
        self.contexts = BoundedContextRegistry(**opts)

    # --- container ---

    def items(self) -> dict[str, BaseRegistry[Any]]:
        return {
            "milestones": self.milestones,
            "steps": self.steps,
            "logic": self.logic,
            "events": self.events,
            "attributes": self.attributes,
            "tests": self.tests,
            "expectations": self.expectations,
            "behaviors": self.behaviors,
            "journeys": self.journeys,
            "personas": self.personas,
            "stakeholders": self.stakeholders,
            "contexts": self.contexts,
        }

    def registry(self, kind: str) -> BaseRegistry[Any]:
        key = str(kind).strip()
        if not key:
            raise ValueError("registry kind must be a non-empty string")
        try:
            return self.items()[key]
        except KeyError:
            raise KeyError(f"unknown registry kind {key!r}; expected one of {self.kinds()}") from None

    def kinds(self) -> tuple[str, ...]:
        return tuple(sorted(self.items().keys()))

    def clear(self) -> None:
        with self._lock:
            for registry in self.items().values():
                registry.clear()
        logger.debug("[REGISTRIES] all registries cleared")

    def get_stats(self) -> dict[str, dict[str, Any]]:
        return {kind: registry.get_stats() for kind, registry in self.items().items()}

    # --- cross-registry joins ---

    def link_behavior(
        self,
        metadata: BehaviorMetadata,
        component: Any,
        tests: Iterable[Any] = (),
    ) -> tuple[BehaviorEntry, list[str]]:
        """
        Register a behavior and resolve the tests it references.

        Tests declared inline on ``component`` and every test component in
        ``tests`` are linked to the behavior's expectation. Returns the entry
        and the test IDs assigned by this call.
        """
        with self._lock:
            entry = self.behaviors.register(metadata, component)
            assigned: list[str] = []
            for owner in (component, *tests):
                assigned.extend(
                    self.tests.resolve(owner, expectation_id=metadata.expectation_id, behavior_id=metadata.name)
                )
        if assigned:
            logger.debug("[BEHAVIOR] %s linked tests %s", component_label(component), ", ".join(assigned))
        return entry, assigned

    def adopt_behavior(self, name: str, expectation_id: str) -> list[str]:
        """
        Link a registered behavior that has no expectation yet to ``expectation_id``.

        Its waiting tests (inline, or named in ``metadata.tests``) are resolved
        as well. Behaviors that already belong to an expectation are left
        alone. Returns the test IDs assigned.
        """
        with self._lock:
            entry = self.behaviors.get_by_name(name)
            if entry is None or entry.metadata.expectation_id:
                return []
            resolved = self.behaviors.resolve(name, expectation_id=expectation_id)
            owners: list[Any] = [resolved.component]
            for test in self.tests.get_unresolved():
                if test.name in resolved.metadata.tests and not any(test.component is o for o in owners):
                    owners.append(test.component)
            assigned: list[str] = []
            for owner in owners:
                assigned.extend(self.tests.resolve(owner, expectation_id=expectation_id, behavior_id=name))
        return assigned

    def resolve_context(self, role: str) -> str | None:
        return self.stakeholders.context_for_role(role)

    def validate_expectation(self, metadata: ExpectationMetadata) -> ContextValidation:
        """Classify ``metadata`` as same-context, cross-context or unknown via stakeholder roles."""
        return self.expectations.validate_context_relationship(
            metadata,
            resolve_context=self.resolve_context,
            related_contexts=self.contexts.get_related_names,
        )

    def behavior_coverage(self) -> dict[str, int]:
        """Number of tests per registered behavior name."""
        return {entry.metadata.name: len(self.tests.get_by_behavior(entry.metadata.name)) for entry in self.behaviors.get_all()}

    def expectation_coverage(self) -> dict[str, Any]:
        """Test coverage over every registered expectation ID."""
        ids = self.expectations.get_all_ids()
        coverage = self.tests.get_coverage(ids)
        coverage["gaps"] = self.tests.get_gaps(ids)
        return coverage


__all__ = ["RegistrySet"]
