# domainkit/registry/events.py
"""Domain events and their subscribed handlers, joined on the ``event_type`` string."""

import logging
from typing import Any

from ..exceptions import MissingFieldError
from ..identity import component_label, derive_event_type
from ..types import DomainEventMetadata, EventHandlerMetadata
from .base import BaseRegistry, add_to_index, remove_from_index
from .records import RegistryEntry

logger = logging.getLogger(__name__)

EventEntry = RegistryEntry[DomainEventMetadata]
HandlerEntry = RegistryEntry[EventHandlerMetadata]


class EventRegistry(BaseRegistry[EventEntry]):
    """
    Events keyed by type, handlers grouped per event type.

    Handler lists are kept ordered by descending ``priority``; handlers with
    equal priority stay in registration order.
    """

    kind = "event"
    _indices = (
        "_events_by_type",
        "_events_by_name",
        "_events_by_context",
        "_events_by_aggregate",
        "_handlers_by_type",
        "_handlers_by_name",
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._events_by_type: dict[str, EventEntry] = {}
        self._events_by_name: dict[str, EventEntry] = {}
        self._events_by_context: dict[str, list[str]] = {}
        self._events_by_aggregate: dict[str, list[str]] = {}
        self._handlers_by_type: dict[str, list[HandlerEntry]] = {}
        self._handlers_by_name: dict[str, HandlerEntry] = {}

    # --- registration ---

    def register_event(self, metadata: DomainEventMetadata, component: Any) -> EventEntry:
        """Register an event; a missing ``event_type`` is derived from the component name."""
        if not metadata.event_type:
            metadata = metadata.model_copy(update={"event_type": derive_event_type(component_label(component))})
        event_type = metadata.event_type
        entry = RegistryEntry(metadata=metadata, component=component)

        with self._lock:
            previous = self._events_by_type.get(event_type)
            if previous is not None:
                self._warn_duplicate(event_type, f"({previous.label} -> {entry.label})")
                self._unindex_event(previous)

            self._events_by_type[event_type] = entry
            self._events_by_name[entry.label] = entry
            if metadata.context:
                add_to_index(self._events_by_context, metadata.context, event_type)
            if metadata.aggregate_type:
                add_to_index(self._events_by_aggregate, metadata.aggregate_type, event_type)

        return entry

    def _unindex_event(self, entry: EventEntry) -> None:
        metadata = entry.metadata
        if self._events_by_name.get(entry.label) is entry:
            del self._events_by_name[entry.label]
        if metadata.context:
            remove_from_index(self._events_by_context, metadata.context, metadata.event_type)
        if metadata.aggregate_type:
            remove_from_index(self._events_by_aggregate, metadata.aggregate_type, metadata.event_type)

    def register_handler(self, metadata: EventHandlerMetadata, component: Any) -> HandlerEntry:
        """
        Subscribe a handler to ``metadata.event_type``.

        :raises MissingFieldError: the handler has no event type.
        """
        event_type = metadata.event_type
        if not event_type:
            raise MissingFieldError(f"Event handler {component_label(component)} must declare an event_type")
        entry = RegistryEntry(metadata=metadata, component=component)

        with self._lock:
            handlers = self._handlers_by_type.setdefault(event_type, [])
            handlers.append(entry)
            # list.sort is stable: equal priorities keep registration order.
            handlers.sort(key=lambda h: h.metadata.priority, reverse=True)
            self._handlers_by_name[entry.label] = entry

        logger.debug("[EVENT] %s subscribed to %s (priority=%s)", entry.label, event_type, metadata.priority)
        return entry

    # --- lookups ---

    def get_event(self, event_type: str) -> EventEntry | None:
        return self._events_by_type.get(event_type)

    def get_event_by_name(self, name: str) -> EventEntry | None:
        """Look up an event by its class name."""
        return self._events_by_name.get(name)

    def resolve_event_type(self, ref: Any) -> str:
        """
        Canonical event type for ``ref``.

        Strings are returned as-is unless they name a registered event class.
        Classes resolve through an ``event_type`` class attribute, then their
        registration, then derivation from the class name.
        """
        if isinstance(ref, str):
            entry = self._events_by_name.get(ref)
            return entry.metadata.event_type if entry is not None else ref

        declared = getattr(ref, "event_type", None)
        if isinstance(declared, str) and declared:
            return declared
        entry = self._events_by_name.get(component_label(ref))
        if entry is not None and entry.component is ref:
            return entry.metadata.event_type
        return derive_event_type(component_label(ref))

    def get_by_context(self, context: str) -> list[EventEntry]:
        with self._lock:
            types = list(self._events_by_context.get(context, []))
        return [self._events_by_type[t] for t in types if t in self._events_by_type]

    def get_by_aggregate(self, aggregate_type: str) -> list[EventEntry]:
        with self._lock:
            types = list(self._events_by_aggregate.get(aggregate_type, []))
        return [self._events_by_type[t] for t in types if t in self._events_by_type]

    def get_handlers(self, event_type: str) -> list[HandlerEntry]:
        """Handlers for ``event_type``, highest priority first."""
        with self._lock:
            return list(self._handlers_by_type.get(event_type, []))

    def get_handler_by_name(self, name: str) -> HandlerEntry | None:
        return self._handlers_by_name.get(name)

    def has_event(self, event_type: str) -> bool:
        return event_type in self._events_by_type

    def has_handlers_for(self, event_type: str) -> bool:
        return bool(self._handlers_by_type.get(event_type))

    def get_event_handler_map(self) -> dict[str, int]:
        with self._lock:
            return {t: len(handlers) for t, handlers in self._handlers_by_type.items()}

    # --- enumeration ---

    def get_all(self) -> list[EventEntry]:
        with self._lock:
            return list(self._events_by_type.values())

    def get_all_handlers(self) -> list[HandlerEntry]:
        with self._lock:
            return [h for handlers in self._handlers_by_type.values() for h in handlers]

    def get_all_event_types(self) -> list[str]:
        with self._lock:
            return list(self._events_by_type.keys())

    def get_all_contexts(self) -> list[str]:
        with self._lock:
            return list(self._events_by_context.keys())

    def get_all_aggregates(self) -> list[str]:
        with self._lock:
            return list(self._events_by_aggregate.keys())

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            event_types = list(self._events_by_type.keys())
            with_handlers = sum(1 for t in event_types if self.has_handlers_for(t))
            return {
                "total_events": len(event_types),
                "total_handlers": len(self.get_all_handlers()),
                "by_context": {c: len(ts) for c, ts in self._events_by_context.items()},
                "by_aggregate": {a: len(ts) for a, ts in self._events_by_aggregate.items()},
                "events_with_handlers": with_handlers,
                "events_without_handlers": len(event_types) - with_handlers,
            }


__all__ = ["EventRegistry", "EventEntry", "HandlerEntry"]
