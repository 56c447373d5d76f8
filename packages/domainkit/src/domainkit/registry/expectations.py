# domainkit/registry/expectations.py
"""Expectation registry: bilateral stakeholder contracts and their IDs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Literal

from ..identity import expectation_prefix, format_expectation_id
from ..types import ExpectationMetadata
from .base import BaseRegistry, add_to_index
from .records import RegistryEntry

logger = logging.getLogger(__name__)

ExpectationEntry = RegistryEntry[ExpectationMetadata]
ContextKind = Literal["same-context", "cross-context", "unknown"]


@dataclass(frozen=True, slots=True)
class ContextValidation:
    """Outcome of checking the bounded contexts on both sides of an expectation."""

    valid: bool
    kind: ContextKind
    expecting_context: str | None = None
    providing_context: str | None = None
    warning: str | None = None
    error: str | None = None


class ExpectationRegistry(BaseRegistry[ExpectationEntry]):
    """
    Expectations indexed by ID, stakeholder roles, journey and milestone.

    The bounded context of an expectation is never stored: it is derived from
    the two stakeholder roles at query time (see
    :meth:`validate_context_relationship`).
    """

    kind = "expectation"
    _indices = (
        "_entries",
        "_by_id",
        "_by_expecting",
        "_by_providing",
        "_by_journey",
        "_by_milestone",
        "_counters",
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._entries: list[ExpectationEntry] = []
        self._by_id: dict[str, ExpectationEntry] = {}
        self._by_expecting: dict[str, list[ExpectationEntry]] = {}
        self._by_providing: dict[str, list[ExpectationEntry]] = {}
        self._by_journey: dict[str, list[ExpectationEntry]] = {}
        self._by_milestone: dict[str, list[ExpectationEntry]] = {}
        self._counters: dict[str, int] = {}

    # --- ids ---

    def next_expectation_id(self, journey_slug: str) -> str:
        """Next ``{PREFIX}-EXP-{nnn}`` for a journey; the counter is kept per prefix."""
        prefix = expectation_prefix(journey_slug)
        with self._lock:
            counter = self._counters.get(prefix, 0) + 1
            self._counters[prefix] = counter
        padding = self.settings.expectation_id_padding
        return format_expectation_id(prefix, counter, padding=padding)

    # --- registration ---

    def register(self, metadata: ExpectationMetadata, component: Any) -> ExpectationEntry:
        entry = RegistryEntry(metadata=metadata, component=component)

        with self._lock:
            expectation_id = metadata.expectation_id
            if expectation_id:
                previous = self._by_id.get(expectation_id)
                if previous is not None:
                    self._warn_duplicate(expectation_id)
                    self._unindex(previous)
                self._by_id[expectation_id] = entry

            self._entries.append(entry)
            add_to_index(self._by_expecting, metadata.expecting_stakeholder, entry, unique=False)
            add_to_index(self._by_providing, metadata.providing_stakeholder, entry, unique=False)
            if metadata.journey_slug:
                add_to_index(self._by_journey, metadata.journey_slug, entry, unique=False)
            if metadata.milestone:
                add_to_index(self._by_milestone, metadata.milestone, entry, unique=False)

        return entry

    def _unindex(self, entry: ExpectationEntry) -> None:
        # Entries are pydantic-backed and compared by value; drop by identity.
        def _drop(index: dict[str, list[ExpectationEntry]], key: str | None) -> None:
            if key is None or key not in index:
                return
            index[key] = [e for e in index[key] if e is not entry]
            if not index[key]:
                del index[key]

        metadata = entry.metadata
        self._entries = [e for e in self._entries if e is not entry]
        _drop(self._by_expecting, metadata.expecting_stakeholder)
        _drop(self._by_providing, metadata.providing_stakeholder)
        _drop(self._by_journey, metadata.journey_slug)
        _drop(self._by_milestone, metadata.milestone)

    # --- context ---

    def validate_context_relationship(
        self,
        metadata: ExpectationMetadata,
        *,
        resolve_context: Callable[[str], str | None],
        related_contexts: Callable[[str], Iterable[str]],
    ) -> ContextValidation:
        """
        Classify an expectation by the bounded contexts of its two stakeholders.

        ``resolve_context`` maps a stakeholder role to its context name and
        ``related_contexts`` lists the contexts a context declares a
        relationship with. A cross-context expectation is valid when either
        side declares a relationship with the other. Unresolvable roles give an
        ``unknown`` result that is valid but carries a warning.
        """
        expecting = resolve_context(metadata.expecting_stakeholder)
        providing = resolve_context(metadata.providing_stakeholder)

        if expecting is None or providing is None:
            missing = [
                role
                for role, ctx in (
                    (metadata.expecting_stakeholder, expecting),
                    (metadata.providing_stakeholder, providing),
                )
                if ctx is None
            ]
            return ContextValidation(
                valid=True,
                kind="unknown",
                expecting_context=expecting,
                providing_context=providing,
                warning=f"Cannot determine bounded context for stakeholder(s): {', '.join(missing)}",
            )

        if expecting == providing:
            return ContextValidation(
                valid=True,
                kind="same-context",
                expecting_context=expecting,
                providing_context=providing,
            )

        related = providing in set(related_contexts(expecting)) or expecting in set(related_contexts(providing))
        return ContextValidation(
            valid=related,
            kind="cross-context",
            expecting_context=expecting,
            providing_context=providing,
            error=None
            if related
            else (
                f"No relationship declared between bounded contexts {expecting!r} and {providing!r}; "
                f"add one to either context's relationships"
            ),
        )

    # --- lookups ---

    def get_by_id(self, expectation_id: str) -> ExpectationEntry | None:
        return self._by_id.get(expectation_id)

    def get_by_expecting(self, role: str) -> list[ExpectationEntry]:
        with self._lock:
            return list(self._by_expecting.get(role, []))

    def get_by_providing(self, role: str) -> list[ExpectationEntry]:
        with self._lock:
            return list(self._by_providing.get(role, []))

    def get_by_journey(self, slug: str) -> list[ExpectationEntry]:
        with self._lock:
            return list(self._by_journey.get(slug, []))

    def get_by_milestone(self, milestone: str) -> list[ExpectationEntry]:
        with self._lock:
            return list(self._by_milestone.get(milestone, []))

    def get_critical_path(self) -> list[ExpectationEntry]:
        return self.filter(lambda e: e.metadata.critical_path is not False)

    def get_all_ids(self) -> list[str]:
        with self._lock:
            return list(self._by_id.keys())

    def get_all(self) -> list[ExpectationEntry]:
        with self._lock:
            return list(self._entries)

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            by_expecting = {role: len(e) for role, e in self._by_expecting.items()}
            by_providing = {role: len(e) for role, e in self._by_providing.items()}
            by_journey = {slug: len(e) for slug, e in self._by_journey.items()}
        return {
            "total_expectations": self.count(),
            "critical_path": len(self.get_critical_path()),
            "by_expecting_stakeholder": by_expecting,
            "by_providing_stakeholder": by_providing,
            "by_journey": by_journey,
        }


__all__ = ["ExpectationRegistry", "ExpectationEntry", "ContextValidation"]
