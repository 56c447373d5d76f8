import logging

import pytest

from domainkit.exceptions import LogicTypeConflictError
from domainkit.registry import LogicRegistry
from domainkit.types import LogicMetadata, LogicReference, LogicType


class CartTotal: ...


class LoyaltyDiscount: ...


class OrderMustHaveLines: ...


def test_same_name_different_type_keeps_both(caplog):
    reg = LogicRegistry()
    reg.register(LogicMetadata(name="pricing", type="rule"), CartTotal)
    with caplog.at_level(logging.WARNING):
        reg.register(LogicMetadata(name="pricing", type="policy"), LoyaltyDiscount)

    assert "shared by logic of type" in caplog.text
    assert reg.get_by_name("pricing", "rule").component is CartTotal
    assert reg.get_by_name("pricing", LogicType.POLICY).component is LoyaltyDiscount
    # Without a type the latest registration wins.
    assert reg.get_by_name("pricing").component is LoyaltyDiscount
    assert reg.count() == 2


def test_same_name_same_type_overwrites(caplog):
    reg = LogicRegistry()
    reg.register(LogicMetadata(name="pricing", type="rule", context="Ordering"), CartTotal)
    with caplog.at_level(logging.WARNING):
        reg.register(LogicMetadata(name="pricing", type="rule"), LoyaltyDiscount)

    assert "already registered" in caplog.text
    assert reg.count() == 1
    assert reg.get_by_context("Ordering") == []


def test_component_type_is_immutable():
    reg = LogicRegistry()
    reg.register(LogicMetadata(name="lines", type="rule"), OrderMustHaveLines)

    with pytest.raises(LogicTypeConflictError):
        reg.register(LogicMetadata(name="lines", type="policy"), OrderMustHaveLines)


def test_dependencies_and_dependents():
    reg = LogicRegistry()
    reg.register(
        LogicMetadata(
            name="checkout",
            type="orchestration",
            invokes=["total"],
            composed_of=[LogicReference(logic="discount"), LogicReference(logic=CartTotal)],
        ),
        object(),
    )
    reg.register(LogicMetadata(name="total", type="calculation"), CartTotal)

    assert reg.get_dependencies("checkout") == ["total", "discount"]
    assert [e.name for e in reg.get_dependents("total")] == ["checkout"]
    assert reg.get_dependencies("missing") == []


def test_cyclic_dependency_is_advisory():
    reg = LogicRegistry()
    reg.register(LogicMetadata(name="a", type="rule", invokes=["b"]), object())
    reg.register(LogicMetadata(name="b", type="rule", invokes=["a"]), object())
    reg.register(LogicMetadata(name="c", type="rule", invokes=["a"]), object())
    reg.register(LogicMetadata(name="d", type="rule"), object())

    assert reg.has_cyclic_dependency("a") is True
    assert reg.has_cyclic_dependency("c") is True
    assert reg.has_cyclic_dependency("d") is False


def test_query_and_find_compatible():
    reg = LogicRegistry()
    reg.register(
        LogicMetadata(name="total", type="calculation", pure=True, inputs={"cart": "Cart"}, outputs={"total": "Money"}),
        CartTotal,
    )
    reg.register(LogicMetadata(name="discount", type="policy", inputs={"cart": "Order"}), LoyaltyDiscount)

    assert [e.name for e in reg.query(lambda e: e.metadata.pure)] == ["total"]
    assert [e.name for e in reg.find_compatible(inputs={"cart": "Cart"})] == ["total"]
    assert [e.name for e in reg.find_compatible(outputs={"total": "Money"})] == ["total", "discount"]


def test_type_and_context_indices_and_stats():
    reg = LogicRegistry()
    reg.register(LogicMetadata(name="a", type="rule", context="Ordering"), object())
    reg.register(LogicMetadata(name="b", type="rule", context="Billing"), object())
    reg.register(LogicMetadata(name="c", type="policy", context="Ordering"), object())

    assert [e.name for e in reg.get_by_type("rule")] == ["a", "b"]
    assert [e.name for e in reg.get_by_context("Ordering")] == ["a", "c"]
    assert set(reg.get_all_types()) == {LogicType.RULE, LogicType.POLICY}
    assert set(reg.get_all_contexts()) == {"Ordering", "Billing"}

    stats = reg.get_stats()
    assert stats["total_logic"] == 3

    reg.clear()
    assert reg.get_stats()["total_logic"] == 0
    assert reg.get_by_name("a") is None


def test_dependents_see_every_entry_sharing_a_name():
    reg = LogicRegistry()
    reg.register(LogicMetadata(name="pricing", type="rule", invokes=["tax"]), OrderMustHaveLines)
    reg.register(LogicMetadata(name="pricing", type="policy"), LoyaltyDiscount)

    dependents = reg.get_dependents("tax")
    assert [(e.name, e.metadata.type) for e in dependents] == [("pricing", LogicType.RULE)]
    assert reg.get_dependencies("pricing") == ["tax"]
    assert reg.get_dependencies("pricing", "policy") == []


def test_cycle_through_an_older_entry_with_a_shared_name():
    reg = LogicRegistry()
    reg.register(LogicMetadata(name="pricing", type="rule", invokes=["tax"]), OrderMustHaveLines)
    reg.register(LogicMetadata(name="pricing", type="policy"), LoyaltyDiscount)
    reg.register(LogicMetadata(name="tax", type="calculation", invokes=["pricing"]), CartTotal)

    assert reg.has_cyclic_dependency("tax") is True


def test_long_invocation_chain_does_not_exhaust_the_stack():
    reg = LogicRegistry()
    for i in range(5000):
        reg.register(LogicMetadata(name=f"l{i}", type="calculation", invokes=[f"l{i + 1}"]), object())

    assert reg.has_cyclic_dependency("l0") is False
