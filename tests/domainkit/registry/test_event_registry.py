import logging

import pytest

from domainkit.exceptions import MissingFieldError
from domainkit.registry import EventRegistry
from domainkit.types import DomainEventMetadata, EventHandlerMetadata


class OrderPlacedEvent: ...


class PaymentCaptured: ...


class Shipped:
    event_type = "fulfilment.shipped"


def _handler(name, priority, event_type="order.placed"):
    component = type(name, (), {})
    return EventHandlerMetadata(name=name, event_type=event_type, priority=priority), component


def test_handlers_sorted_by_descending_priority_stable_on_ties():
    reg = EventRegistry()
    for name, priority in (("H1", 1), ("H2", 5), ("H3", 5)):
        metadata, component = _handler(name, priority)
        reg.register_handler(metadata, component)

    assert [h.label for h in reg.get_handlers("order.placed")] == ["H2", "H3", "H1"]


def test_handler_priority_defaults_to_zero():
    reg = EventRegistry()
    metadata, component = _handler("Late", None)
    reg.register_handler(metadata, component)
    metadata, component = _handler("Early", 3)
    reg.register_handler(metadata, component)

    assert [h.metadata.priority for h in reg.get_handlers("order.placed")] == [3, 0]


def test_handler_without_event_type_raises():
    reg = EventRegistry()
    with pytest.raises(MissingFieldError):
        reg.register_handler(EventHandlerMetadata(name="orphan"), object)


def test_event_type_is_derived_from_class_name():
    reg = EventRegistry()
    entry = reg.register_event(DomainEventMetadata(), OrderPlacedEvent)

    assert entry.metadata.event_type == "order.placed"
    assert reg.get_event("order.placed") is entry
    assert reg.get_event_by_name("OrderPlacedEvent") is entry
    assert reg.has_event("order.placed")


def test_duplicate_event_type_warns_and_overwrites(caplog):
    reg = EventRegistry()
    reg.register_event(DomainEventMetadata(event_type="payment.captured", context="Billing"), OrderPlacedEvent)
    with caplog.at_level(logging.WARNING):
        reg.register_event(DomainEventMetadata(event_type="payment.captured"), PaymentCaptured)

    assert "already registered" in caplog.text
    assert reg.get_event("payment.captured").component is PaymentCaptured
    assert reg.get_event_by_name("OrderPlacedEvent") is None
    assert reg.get_by_context("Billing") == []


def test_resolve_event_type_handles_strings_and_classes():
    reg = EventRegistry()
    reg.register_event(DomainEventMetadata(event_type="orders.created"), OrderPlacedEvent)

    assert reg.resolve_event_type("order.cancelled") == "order.cancelled"
    assert reg.resolve_event_type("OrderPlacedEvent") == "orders.created"
    assert reg.resolve_event_type(OrderPlacedEvent) == "orders.created"
    assert reg.resolve_event_type(Shipped) == "fulfilment.shipped"
    assert reg.resolve_event_type(PaymentCaptured) == "payment.captured"


def test_context_aggregate_and_handler_map():
    reg = EventRegistry()
    reg.register_event(DomainEventMetadata(context="Ordering", aggregate_type="Order"), OrderPlacedEvent)
    reg.register_event(DomainEventMetadata(context="Billing"), PaymentCaptured)
    metadata, component = _handler("Notify", 1)
    reg.register_handler(metadata, component)

    assert [e.label for e in reg.get_by_context("Ordering")] == ["OrderPlacedEvent"]
    assert [e.label for e in reg.get_by_aggregate("Order")] == ["OrderPlacedEvent"]
    assert reg.get_event_handler_map() == {"order.placed": 1}
    assert reg.get_handler_by_name("Notify").metadata.priority == 1
    assert reg.has_handlers_for("payment.captured") is False

    stats = reg.get_stats()
    assert stats["total_events"] == 2
    assert stats["total_handlers"] == 1
    assert stats["events_with_handlers"] == 1
    assert stats["events_without_handlers"] == 1


def test_clear_drops_events_and_handlers():
    reg = EventRegistry()
    reg.register_event(DomainEventMetadata(), OrderPlacedEvent)
    metadata, component = _handler("Notify", 1)
    reg.register_handler(metadata, component)

    reg.clear()

    assert reg.get_all() == []
    assert reg.get_handlers("order.placed") == []
    assert reg.get_handler_by_name("Notify") is None
    assert reg.get_stats()["total_events"] == 0
