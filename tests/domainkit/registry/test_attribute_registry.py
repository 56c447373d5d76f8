from domainkit.registry import AttributeRegistry
from domainkit.types import AttributeDefinition


class Buyer: ...


class BuyerProfile: ...


class Seller: ...


def test_decorator_attribute_wins_on_name_collision():
    reg = AttributeRegistry()
    reg.register_inline(Buyer, [AttributeDefinition(name="age", required=False)])
    reg.register_decorator(Buyer, AttributeDefinition(name="age", required=True))

    merged = reg.query(Buyer)

    assert len(merged) == 1
    assert merged[0].name == "age"
    assert merged[0].required is True


def test_merge_is_independent_of_registration_order():
    reg = AttributeRegistry()
    reg.register_decorator(Buyer, AttributeDefinition(name="age", required=True))
    reg.register_inline(Buyer, [AttributeDefinition(name="age", required=False), AttributeDefinition(name="email")])

    merged = {a.name: a for a in reg.query(Buyer)}

    assert merged["age"].required is True
    assert "email" in merged
    # Sources are stored apart.
    assert [a.required for a in reg.get_inline(Buyer)] == [False, None]


def test_register_inline_replaces_and_add_inline_appends():
    reg = AttributeRegistry()
    reg.register_inline(Buyer, [AttributeDefinition(name="a")])
    reg.register_inline(Buyer, [AttributeDefinition(name="b")])
    reg.add_inline(Buyer, AttributeDefinition(name="c"))

    assert [a.name for a in reg.get_inline(Buyer)] == ["b", "c"]


def test_query_by_name_pattern_matches_component_labels():
    reg = AttributeRegistry()
    reg.register_inline(Buyer, [AttributeDefinition(name="email")])
    reg.register_decorator(BuyerProfile, AttributeDefinition(name="avatar"))
    reg.register_inline(Seller, [AttributeDefinition(name="iban")])

    found = reg.query_by_name_pattern(r"^Buyer")

    assert set(found) == {Buyer, BuyerProfile}
    assert [a.name for a in found[BuyerProfile]] == ["avatar"]


def test_presence_checks_count_and_clear():
    reg = AttributeRegistry()
    reg.register_inline(Buyer, [AttributeDefinition(name="email")])
    reg.register_decorator(Seller, AttributeDefinition(name="iban"))

    assert reg.has_inline(Buyer) and not reg.has_decorator(Buyer)
    assert reg.has_decorator(Seller) and not reg.has_inline(Seller)
    assert set(reg.components()) == {Buyer, Seller}
    assert reg.count() == 2

    reg.clear()

    assert reg.count() == 0
    assert reg.query(Buyer) == []
    assert reg.get_stats()["total_components"] == 0
