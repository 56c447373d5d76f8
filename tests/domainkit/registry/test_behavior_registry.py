import logging

from domainkit.registry import BehaviorRegistry
from domainkit.types import BehaviorContract, BehaviorMetadata


class ValidateCart: ...


class ReserveStock: ...


def test_indices_by_context_mode_and_contract():
    reg = BehaviorRegistry()
    reg.register(
        BehaviorMetadata(
            name="validate-cart",
            context="Ordering",
            execution_mode="immediate",
            contract=BehaviorContract(type="sync", inputs={"cart": "Cart"}),
        ),
        ValidateCart,
    )
    reg.register(BehaviorMetadata(name="reserve-stock", expectation_id="PO-EXP-001", execution_mode="deferred"), ReserveStock)

    assert [e.name for e in reg.get_by_context("Ordering")] == ["validate-cart"]
    assert [e.name for e in reg.get_by_execution_mode("deferred")] == ["reserve-stock"]
    assert [e.name for e in reg.get_by_contract_type("sync")] == ["validate-cart"]
    assert [e.name for e in reg.get_by_expectation("PO-EXP-001")] == ["reserve-stock"]
    assert [e.name for e in reg.get_reusable()] == ["validate-cart"]
    assert [e.name for e in reg.get_expectation_specific()] == ["reserve-stock"]

    stats = reg.get_stats()
    assert stats["total_behaviors"] == 2
    assert stats["by_execution_mode"] == {"immediate": 1, "deferred": 1}


def test_resolve_links_an_unowned_behavior_once():
    reg = BehaviorRegistry()
    reg.register(BehaviorMetadata(name="validate-cart"), ValidateCart)

    linked = reg.resolve("validate-cart", expectation_id="PO-EXP-001")
    again = reg.resolve("validate-cart", expectation_id="PO-EXP-002")

    assert linked.metadata.expectation_id == "PO-EXP-001"
    assert again is linked
    assert [e.name for e in reg.get_by_expectation("PO-EXP-001")] == ["validate-cart"]
    assert reg.get_by_expectation("PO-EXP-002") == []


def test_resolve_unknown_behavior_warns(caplog):
    with caplog.at_level(logging.WARNING):
        assert BehaviorRegistry().resolve("ghost", expectation_id="PO-EXP-001") is None

    assert "behavior not registered" in caplog.text


def test_duplicate_name_warns_and_unindexes_previous(caplog):
    reg = BehaviorRegistry()
    reg.register(BehaviorMetadata(name="validate-cart", context="Ordering"), ValidateCart)
    with caplog.at_level(logging.WARNING):
        reg.register(BehaviorMetadata(name="validate-cart", context="Checkout"), ReserveStock)

    assert "already registered" in caplog.text
    assert reg.get_by_context("Ordering") == []
    assert reg.get_by_name("validate-cart").component is ReserveStock
    assert reg.get_all_contexts() == ["Checkout"]

    reg.clear()
    assert reg.get_all() == []
    assert reg.get_all_execution_modes() == []
