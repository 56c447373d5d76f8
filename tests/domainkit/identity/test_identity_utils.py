import pytest

from domainkit.identity import component_label, derive_event_type, journey_slug, split_segments, stakeholder_id


@pytest.mark.parametrize(
    "name, expected",
    [
        ("OrderPlacedEvent", "order.placed"),
        ("OrderPlaced", "order.placed"),
        ("HTTPRequestReceived", "http.request.received"),
        ("Event", "event"),
        ("PaymentCapturedEvent", "payment.captured"),
    ],
)
def test_derive_event_type(name, expected):
    assert derive_event_type(name) == expected


def test_derive_event_type_rejects_empty_names():
    with pytest.raises(ValueError):
        derive_event_type("  ")


def test_journey_slug_from_class_and_string():
    class PlaceOrderJourney: ...

    class Journey: ...

    assert journey_slug(PlaceOrderJourney) == "place-order"
    assert journey_slug(Journey) == "journey"
    assert journey_slug("Place Order") == "place-order"


def test_split_segments():
    assert split_segments("PlaceOrderJourney") == ["Place", "Order", "Journey"]
    assert split_segments("Special_Response-Custom") == ["Special", "Response", "Custom"]
    assert split_segments("") == []


def test_labels_and_stakeholder_ids():
    class Buyer: ...

    assert component_label(Buyer) == "Buyer"
    assert component_label("Buyer") == "Buyer"
    assert stakeholder_id("Order Management", "Key Account Buyer") == "order-management:key-account-buyer"
