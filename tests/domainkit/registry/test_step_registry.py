import pytest

from domainkit.exceptions import MissingFieldError, StepOrderConflictError, UnresolvedReferenceError
from domainkit.registry import StepRegistry
from domainkit.types import StepMetadata


class Checkout: ...


class Refund: ...


class ValidateCart: ...


def test_order_collision_under_one_parent_raises():
    reg = StepRegistry()
    reg.register(StepMetadata(name="validate", order=1), Checkout, "milestone")

    with pytest.raises(StepOrderConflictError):
        reg.register(StepMetadata(name="reserve", order=1), Checkout, "milestone")

    assert [e.name for e in reg.get_by_parent(Checkout)] == ["validate"]


def test_same_order_under_different_parents_is_fine():
    reg = StepRegistry()
    reg.register(StepMetadata(name="validate", order=1), Checkout, "milestone")
    reg.register(StepMetadata(name="validate", order=1), Refund, "milestone")

    assert len(reg.get_by_name("validate")) == 2


def test_non_standalone_step_requires_order():
    reg = StepRegistry()
    with pytest.raises(MissingFieldError):
        reg.register(StepMetadata(name="validate"), Checkout, "milestone")


def test_get_by_parent_is_ascending():
    reg = StepRegistry()
    reg.register(StepMetadata(name="third", order=3), Checkout, "milestone")
    reg.register(StepMetadata(name="first", order=1), Checkout, "milestone")
    reg.register(StepMetadata(name="second", order=2), Checkout, "milestone")

    assert [e.order for e in reg.get_by_parent(Checkout)] == [1, 2, 3]


def test_attach_reregisters_standalone_step_with_order():
    reg = StepRegistry()
    reg.register_standalone(StepMetadata(name="ValidateCart", actor="Buyer", reusable=True), ValidateCart)

    entry = reg.attach(ValidateCart, Checkout, order=2, optional=True)

    assert entry.parent is Checkout
    assert entry.order == 2
    assert entry.metadata.optional is True
    assert entry.metadata.actor == "Buyer"
    assert reg.get_standalone(ValidateCart).order is None
    assert reg.get_stats()["composed_steps"] == 1


def test_attach_rejects_string_and_unknown_references():
    reg = StepRegistry()
    with pytest.raises(UnresolvedReferenceError):
        reg.attach("ValidateCart", Checkout, order=1)
    with pytest.raises(UnresolvedReferenceError):
        reg.attach(ValidateCart, Checkout, order=1)


def test_validate_ordering_reports_gaps_and_start():
    reg = StepRegistry()
    reg.register(StepMetadata(name="a", order=2), Checkout, "milestone")
    reg.register(StepMetadata(name="b", order=4), Checkout, "milestone")

    report = reg.validate_ordering(Checkout)

    assert report["valid"] is False
    assert "Gap in step ordering: 2 -> 4" in report["issues"]
    assert "Step ordering should start at 1, but starts at 2" in report["issues"]
    assert reg.validate_ordering(Refund) == {"valid": True, "issues": []}


def test_actor_optional_and_alternative_queries():
    reg = StepRegistry()
    reg.register(StepMetadata(name="a", order=1, actor="Buyer"), Checkout, "milestone")
    reg.register(StepMetadata(name="b", order=2, optional=True, alternatives=["c"]), Checkout, "milestone")

    assert [e.name for e in reg.get_by_actor("Buyer")] == ["a"]
    assert [e.name for e in reg.get_optional()] == ["b"]
    assert [e.name for e in reg.get_required()] == ["a"]
    assert [e.name for e in reg.get_with_alternatives()] == ["b"]
    assert reg.get_all_actors() == ["Buyer"]


def test_clear_empties_every_index():
    reg = StepRegistry()
    reg.register(StepMetadata(name="a", order=1, actor="Buyer"), Checkout, "milestone")

    reg.clear()

    assert reg.get_all() == []
    assert reg.get_by_name("a") == []
    assert reg.get_all_actors() == []
    assert reg.get_stats()["total_steps"] == 0
    # Order 1 is free again.
    reg.register(StepMetadata(name="a", order=1), Checkout, "milestone")
