"""Registry entries.

Registries never store bare metadata: every record is wrapped together with
the component handle that declared it. Entries are immutable; a registry that
needs to change an entry (test resolution, behavior linkage) replaces it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar, Union

from ..identity import component_label

M = TypeVar("M")

ParentKind = Literal["milestone", "behavior", "standalone"]


@dataclass(frozen=True, slots=True)
class RegistryEntry(Generic[M]):
    """Immutable (metadata, component) pair."""

    metadata: M
    component: Any

    @property
    def name(self) -> str | None:
        return getattr(self.metadata, "name", None)

    @property
    def label(self) -> str:
        return component_label(self.component)


@dataclass(frozen=True, slots=True)
class StepEntry(Generic[M]):
    metadata: M
    parent: Any
    parent_kind: ParentKind

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def order(self) -> int | None:
        return self.metadata.order


# ----------------------------------------------------------------------------
# Test resolution state
# ----------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class Unresolved:
    """No expectation known yet; waiting for a behavior/expectation to link it."""


@dataclass(frozen=True, slots=True)
class Resolved:
    test_id: str


ResolutionState = Union[Unresolved, Resolved]


@dataclass(frozen=True, slots=True)
class TestEntry(Generic[M]):
    __test__ = False

    metadata: M
    component: Any
    state: ResolutionState

    @property
    def test_id(self) -> str | None:
        return self.state.test_id if isinstance(self.state, Resolved) else None

    @property
    def is_resolved(self) -> bool:
        return isinstance(self.state, Resolved)

    @property
    def name(self) -> str:
        return self.metadata.name


__all__ = [
    "RegistryEntry",
    "StepEntry",
    "TestEntry",
    "ParentKind",
    "Unresolved",
    "Resolved",
    "ResolutionState",
]
