import logging

import pytest

from domainkit import decorators as dk
from domainkit.components import get_metadata
from domainkit.exceptions import MetadataValidationError
from domainkit.types import StakeholderMetadata


def test_class_level_test_resolved_when_behavior_references_it(registries):
    @dk.test_case(registries, type="unit", framework="pytest")
    class RejectsEmptyCart: ...

    entry = registries.tests.get_by_component(RejectsEmptyCart)[0]
    assert entry.test_id is None
    assert entry.metadata.file is None or entry.metadata.file.endswith(".py")

    @dk.behavior(registries, expectation="PO-EXP-001", tests=[RejectsEmptyCart])
    class ValidateCartBehavior: ...

    resolved = registries.tests.get_by_id("PO-EXP-001-TEST-1")
    assert resolved is not None
    assert resolved.component is RejectsEmptyCart
    assert resolved.metadata.behavior_id == "ValidateCartBehavior"
    assert registries.tests.get_unresolved() == []
    assert registries.behaviors.get_by_expectation("PO-EXP-001")[0].component is ValidateCartBehavior


def test_test_with_expectation_is_resolved_immediately(registries):
    @dk.test_case(registries, type="e2e", expectation="PO-EXP-002")
    class CheckoutHappyPath: ...

    assert get_metadata(CheckoutHappyPath, "test").test_id == "PO-EXP-002-TEST-1"


def test_inline_tests_inherit_behavior_expectation(registries):
    @dk.behavior(registries, expectation="PO-EXP-001")
    class ValidateCartBehavior:
        @dk.test_case(registries, type="unit")
        def rejects_empty_cart(self): ...

        @dk.test_case(registries, type="integration")
        def reserves_stock(self): ...

    tests = registries.tests.get_by_expectation("PO-EXP-001")
    assert [t.test_id for t in tests] == ["PO-EXP-001-TEST-1", "PO-EXP-001-TEST-2"]
    assert {t.metadata.behavior_id for t in tests} == {"ValidateCartBehavior"}
    assert get_metadata(ValidateCartBehavior, "behavior").tests == ["rejects_empty_cart", "reserves_stock"]
    assert registries.behavior_coverage() == {"ValidateCartBehavior": 2}


def test_inline_steps_in_behavior(registries):
    @dk.behavior(registries)
    class ValidateCartBehavior:
        @dk.step(registries, order=1)
        def load_cart(self): ...

    steps = registries.steps.get_by_parent(ValidateCartBehavior)
    assert [(s.name, s.parent_kind) for s in steps] == [("load_cart", "behavior")]


def test_expectation_generates_id_and_adopts_listed_behaviors(registries):
    @dk.behavior(registries)
    class ReserveStockBehavior:
        @dk.test_case(registries, type="unit")
        def holds_items(self): ...

    assert registries.tests.get_unresolved()[0].name == "holds_items"

    @dk.expectation(
        registries,
        expecting_stakeholder="Buyer",
        providing_stakeholder="Warehouse",
        journey="po",
        behaviors=[ReserveStockBehavior],
    )
    class StockReserved:
        """Stock is reserved before payment.

        Longer explanation that is not part of the description.
        """

    metadata = get_metadata(StockReserved, "expectation")
    assert metadata.expectation_id == "PO-EXP-001"
    assert metadata.description == "Stock is reserved before payment."
    assert metadata.behaviors == ["ReserveStockBehavior"]
    assert registries.behaviors.get_by_name("ReserveStockBehavior").metadata.expectation_id == "PO-EXP-001"
    assert registries.tests.get_by_id("PO-EXP-001-TEST-1").name == "holds_items"

    @dk.expectation(
        registries,
        expecting_stakeholder="Buyer",
        providing_stakeholder="Payments",
        description="Card is charged once",
        journey="po",
    )
    class ChargedOnce: ...

    assert get_metadata(ChargedOnce, "expectation").expectation_id == "PO-EXP-002"


def test_inline_behaviors_take_the_expectation_id(registries):
    @dk.expectation(
        registries,
        expecting_stakeholder="Buyer",
        providing_stakeholder="Warehouse",
        description="Confirmation is sent",
        expectation_id="PO-EXP-007",
    )
    class ConfirmationSent:
        @dk.behavior(registries)
        def send_email(self): ...

    assert [b.name for b in registries.behaviors.get_by_expectation("PO-EXP-007")] == ["send_email"]
    assert get_metadata(ConfirmationSent, "expectation").behaviors == ["send_email"]


def test_inline_expectations_inherit_milestone_and_journey(registries):
    @dk.milestone(registries, stakeholder="Buyer", journey="po")
    class CartCheckedOut:
        @dk.expectation(
            registries,
            expecting_stakeholder="Buyer",
            providing_stakeholder="Warehouse",
            description="Stock is reserved",
        )
        def stock_reserved(self): ...

    [entry] = registries.expectations.get_by_milestone("CartCheckedOut")
    assert entry.metadata.name == "stock_reserved"
    assert entry.metadata.journey_slug == "po"
    assert entry.metadata.expectation_id == "PO-EXP-001"


def test_expectation_stakeholder_classes_resolve_to_roles(registries):
    @dk.bounded_context(registries, name="Ordering", relationships={"Fulfilment": "downstream"})
    class OrderingContext: ...

    @dk.bounded_context(registries, name="Fulfilment")
    class FulfilmentContext: ...

    @dk.stakeholder(registries, persona="Shopper", role="Buyer", context=OrderingContext)
    class BuyerStakeholder: ...

    @dk.stakeholder(registries, persona="Picker", role="Warehouse", context=FulfilmentContext)
    class WarehouseStakeholder: ...

    @dk.expectation(
        registries,
        expecting_stakeholder=BuyerStakeholder,
        providing_stakeholder=WarehouseStakeholder,
        description="Stock is reserved",
        expectation_id="PO-EXP-001",
    )
    class StockReserved: ...

    entry = registries.expectations.get_by_id("PO-EXP-001")
    assert entry.metadata.expecting_stakeholder == "Buyer"
    assert entry.metadata.providing_stakeholder == "Warehouse"
    result = registries.validate_expectation(entry.metadata)
    assert result.valid is True
    assert result.kind == "cross-context"


def test_context_problems_are_logged_not_raised(registries, caplog):
    registries.stakeholders.register(
        StakeholderMetadata(persona="Shopper", role="Buyer", context="Ordering"), object()
    )
    registries.stakeholders.register(
        StakeholderMetadata(persona="Clerk", role="Accountant", context="Billing"), object()
    )

    with caplog.at_level(logging.WARNING):

        @dk.expectation(
            registries,
            expecting_stakeholder="Buyer",
            providing_stakeholder="Accountant",
            description="Invoice is issued",
            expectation_id="PO-EXP-001",
        )
        class InvoiceIssued: ...

        @dk.expectation(
            registries,
            expecting_stakeholder="Buyer",
            providing_stakeholder="Ghost",
            description="Someone answers",
            expectation_id="PO-EXP-002",
        )
        class SomeoneAnswers: ...

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert any("No relationship declared" in r.getMessage() for r in errors)
    assert any("Ghost" in r.getMessage() for r in warnings)
    assert registries.expectations.count() == 2


def test_expectation_requires_a_description(registries):
    with pytest.raises(MetadataValidationError):

        @dk.expectation(registries, expecting_stakeholder="Buyer", providing_stakeholder="Warehouse")
        class Undocumented: ...
