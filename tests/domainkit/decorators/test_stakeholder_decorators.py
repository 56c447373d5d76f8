import pytest

from domainkit import decorators as dk
from domainkit.components import get_metadata
from domainkit.exceptions import MetadataValidationError, UnresolvedReferenceError
from domainkit.types import AttributeDefinition, ContextRelationshipType


def test_persona_stakeholder_and_context_link_up(registries):
    @dk.bounded_context(registries, name="Payments")
    class PaymentsContext: ...

    @dk.bounded_context(
        registries,
        name="Order Management",
        owner="team-orders",
        relationships={PaymentsContext: "downstream"},
    )
    class OrderingContext: ...

    @dk.persona(registries, type="human", motivations=["fast checkout"])
    class Shopper: ...

    @dk.stakeholder(registries, persona=Shopper, role="Buyer", context=OrderingContext, goals=["pay once"])
    class BuyerStakeholder: ...

    assert registries.contexts.get("Order Management").metadata.id == "order-management"
    assert registries.contexts.get_related_contexts("Order Management") == [
        ("Payments", ContextRelationshipType.DOWNSTREAM)
    ]
    assert registries.personas.get("Shopper").metadata.id == "shopper"

    entry = registries.stakeholders.get("order-management:buyer")
    assert entry.component is BuyerStakeholder
    assert entry.metadata.persona == "Shopper"
    assert entry.metadata.context == "Order Management"
    assert get_metadata(BuyerStakeholder, "stakeholder").id == "order-management:buyer"
    assert registries.resolve_context("Buyer") == "Order Management"


def test_stakeholder_with_undeclared_persona_class_raises(registries):
    class Ghost: ...

    with pytest.raises(UnresolvedReferenceError):

        @dk.stakeholder(registries, persona=Ghost, role="Buyer", context="Ordering")
        class BuyerStakeholder: ...


def test_inline_and_stacked_attributes_merge(registries):
    @dk.attribute(registries, name="age", required=True)
    @dk.attribute(registries, name="loyalty_tier", type=str, default_value="bronze")
    @dk.persona(
        registries,
        type="human",
        attributes=[AttributeDefinition(name="age", required=False), {"name": "email", "type": "str"}],
    )
    class Shopper: ...

    merged = {a.name: a for a in registries.attributes.query(Shopper)}

    assert set(merged) == {"age", "email", "loyalty_tier"}
    assert merged["age"].required is True
    assert merged["loyalty_tier"].type == "str"
    assert [a.name for a in get_metadata(Shopper, "attribute")] == ["loyalty_tier", "age"]
    assert registries.attributes.get_stats()["inline_attributes"] == 2
    assert registries.attributes.get_stats()["decorator_attributes"] == 2


def test_attribute_requires_a_name(registries):
    with pytest.raises(MetadataValidationError):

        @dk.attribute(registries, type="str")
        class Nameless: ...


def test_journey_and_stakeholder_inline_attributes(registries):
    @dk.stakeholder(
        registries,
        persona="Shopper",
        role="Buyer",
        context="Ordering",
        attributes=[{"name": "credit_limit", "type": "Decimal"}],
    )
    class BuyerStakeholder: ...

    @dk.journey(registries, primary_stakeholder=BuyerStakeholder, attributes=[{"name": "channel"}])
    class PlaceOrderJourney: ...

    assert [a.name for a in registries.attributes.get_inline(BuyerStakeholder)] == ["credit_limit"]
    assert [a.name for a in registries.attributes.query(PlaceOrderJourney)] == ["channel"]
    assert set(registries.attributes.query_by_name_pattern("Stakeholder$")) == {BuyerStakeholder}
