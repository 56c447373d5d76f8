import logging

from domainkit.registry import BoundedContextRegistry, PersonaRegistry, StakeholderRegistry
from domainkit.types import BoundedContextMetadata, PersonaMetadata, StakeholderMetadata


class Shopper: ...


class BuyerStakeholder: ...


class OrderingContext: ...


def test_persona_defaults_name_and_id_from_component():
    reg = PersonaRegistry()
    entry = reg.register(PersonaMetadata(type="human", tags={"retail"}), Shopper)

    assert entry.metadata.name == "Shopper"
    assert entry.metadata.id == "shopper"
    assert reg.has("Shopper")
    assert [e.name for e in reg.get_by_type("human")] == ["Shopper"]
    assert [e.name for e in reg.get_by_tag("retail")] == ["Shopper"]
    assert reg.get_stats() == {"total_personas": 1, "by_type": {"human": 1}}


def test_duplicate_persona_warns(caplog):
    reg = PersonaRegistry()
    reg.register(PersonaMetadata(name="Shopper", type="human"), Shopper)
    with caplog.at_level(logging.WARNING):
        reg.register(PersonaMetadata(name="Shopper", type="organization"), object())

    assert "duplicate persona" in caplog.text
    assert reg.get_names() == ["Shopper"]
    assert reg.get("Shopper").metadata.type == "organization"


def test_stakeholder_id_and_role_lookups():
    reg = StakeholderRegistry()
    entry = reg.register(
        StakeholderMetadata(persona="Shopper", role="Buyer", context="Order Management"), BuyerStakeholder
    )

    assert entry.metadata.id == "order-management:buyer"
    assert reg.get("order-management:buyer") is entry
    assert reg.get_by_component(BuyerStakeholder) is entry
    assert reg.context_for_role("Buyer") == "Order Management"
    assert reg.context_for_role("Nobody") is None
    assert [e.metadata.role for e in reg.get_by_persona("Shopper")] == ["Buyer"]
    assert [e.metadata.role for e in reg.get_by_context("Order Management")] == ["Buyer"]


def test_first_registered_context_wins_for_a_shared_role():
    reg = StakeholderRegistry()
    reg.register(StakeholderMetadata(persona="Shopper", role="Buyer", context="Ordering"), object())
    reg.register(StakeholderMetadata(persona="Shopper", role="Buyer", context="Returns"), object())

    assert reg.context_for_role("Buyer") == "Ordering"
    assert reg.get_ids() == ["ordering:buyer", "returns:buyer"]


def test_context_relationships_and_vocabulary():
    reg = BoundedContextRegistry()
    reg.register(
        BoundedContextMetadata(
            name="Ordering",
            owner="team-orders",
            relationships={"Payments": "downstream", "Catalog": "upstream"},
            vocabulary={"cart": "Items a buyer intends to purchase"},
        ),
        OrderingContext,
    )

    entry = reg.get("Ordering")
    assert entry.metadata.id == "ordering"
    assert reg.get_related_names("Ordering") == ["Payments", "Catalog"]
    assert reg.get_upstream_contexts("Ordering") == ["Catalog"]
    assert reg.get_downstream_contexts("Ordering") == ["Payments"]
    assert reg.get_related_contexts("Ordering", "partnership") == []
    assert reg.get_related_names("Unknown") == []
    assert reg.get_vocabulary("Ordering") == {"cart": "Items a buyer intends to purchase"}
    assert reg.get_vocabulary("Unknown") is None
    assert [e.name for e in reg.get_by_owner("team-orders")] == ["Ordering"]
    assert reg.get_stats()["total_relationships"] == 2


def test_clear_empties_all_three():
    personas, stakeholders, contexts = PersonaRegistry(), StakeholderRegistry(), BoundedContextRegistry()
    personas.register(PersonaMetadata(type="human"), Shopper)
    stakeholders.register(StakeholderMetadata(persona="Shopper", role="Buyer", context="Ordering"), object())
    contexts.register(BoundedContextMetadata(name="Ordering"), OrderingContext)

    for reg in (personas, stakeholders, contexts):
        reg.clear()
        assert reg.get_all() == []
        assert reg.count() == 0
