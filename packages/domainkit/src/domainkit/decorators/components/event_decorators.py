# domainkit/decorators/components/event_decorators.py
"""
Domain event and event handler decorators.

- ``domain_event``: the event type defaults to a class-level ``event_type``
  attribute, otherwise it is derived from the class name
  (``OrderPlacedEvent`` -> ``order.placed``).
- ``event_handler``: subscribes to ``event=`` (class or type string) or
  ``event_type=``. Handlers are also registered as ``event-handler`` logic.
"""
import logging
from typing import Any, Type

from domainkit.decorators.base import BaseDecorator
from domainkit.exceptions import MissingFieldError
from domainkit.identity import component_label, derive_event_type
from domainkit.registry import RegistrySet
from domainkit.resolve import resolve_context_name, resolve_event_type
from domainkit.types import DomainEventMetadata, EventHandlerMetadata, LogicMetadata, LogicType

__all__ = ("DomainEventDecorator", "EventHandlerDecorator")

logger = logging.getLogger(__name__)


class DomainEventDecorator(BaseDecorator):
    """
    Usage
    -----
        @domain_event(registries, context=OrderingContext, aggregate_type=Order)
        class OrderPlacedEvent: ...
    """

    kind = "domain_event"
    metadata_model = DomainEventMetadata
    log_category = "events"

    def build_metadata(
        self, cls: Type[Any], registries: RegistrySet, options: dict[str, Any]
    ) -> DomainEventMetadata:
        if not options.get("event_type"):
            declared = getattr(cls, "event_type", None)
            options["event_type"] = declared if isinstance(declared, str) and declared else derive_event_type(cls.__name__)
        if "context" in options:
            options["context"] = resolve_context_name(options["context"])
        if options.get("aggregate_type") is not None:
            options["aggregate_type"] = component_label(options["aggregate_type"])
        return super().build_metadata(cls, registries, options)

    def register(self, registries: RegistrySet, cls: Type[Any], metadata: DomainEventMetadata) -> None:
        registries.events.register_event(metadata, cls)

    def span_attributes(self, cls: Type[Any], metadata: DomainEventMetadata) -> dict[str, Any]:
        return {"domainkit.event_type": metadata.event_type}

    def describe(self, cls: Type[Any], metadata: DomainEventMetadata) -> str:
        return f"{cls.__name__} ({metadata.event_type})"


class EventHandlerDecorator(BaseDecorator):
    """
    Usage
    -----
        @event_handler(registries, event=OrderPlacedEvent, priority=10)
        class SendConfirmationEmail: ...
    """

    kind = "event_handler"
    metadata_model = EventHandlerMetadata
    log_category = "handlers"

    def build_metadata(
        self, cls: Type[Any], registries: RegistrySet, options: dict[str, Any]
    ) -> EventHandlerMetadata:
        ref = options.pop("event", None) or options.get("event_type")
        if ref is None:
            raise MissingFieldError(f"@event_handler on {cls.__qualname__}: event or event_type is required")
        options["event_type"] = resolve_event_type(ref, registries)
        if "context" in options:
            options["context"] = resolve_context_name(options["context"])
        return super().build_metadata(cls, registries, options)

    def register(self, registries: RegistrySet, cls: Type[Any], metadata: EventHandlerMetadata) -> None:
        registries.events.register_handler(metadata, cls)
        registries.logic.register(
            LogicMetadata(
                name=metadata.name or cls.__name__,
                type=LogicType.EVENT_HANDLER,
                description=metadata.description,
                context=metadata.context,
                idempotent=metadata.idempotent,
                retryable=metadata.retryable,
                tags=metadata.tags,
                source_location=metadata.source_location,
            ),
            cls,
        )

    def span_attributes(self, cls: Type[Any], metadata: EventHandlerMetadata) -> dict[str, Any]:
        return {"domainkit.event_type": metadata.event_type, "domainkit.priority": metadata.priority}
