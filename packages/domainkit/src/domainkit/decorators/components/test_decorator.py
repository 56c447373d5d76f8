# domainkit/decorators/components/test_decorator.py
"""
Test decorator.

- Class form: a test class. With ``expectation=`` (or ``test_id=``) it is
  resolved on the spot; otherwise it waits until a behavior lists it in
  ``tests=[...]``.
- Member form: an inline test inside a behavior. It is bucketed under the
  behavior class and inherits the behavior's expectation and name.
"""
import logging
from typing import Any, Type

from domainkit.components import collect_pending
from domainkit.decorators.base import BaseDecorator, source_location
from domainkit.identity import component_label
from domainkit.registry import RegistrySet
from domainkit.registry.testcases import TestRegistryEntry
from domainkit.resolve import resolve_behavior_name, resolve_expectation_id
from domainkit.types import TestMetadata

__all__ = ("TestDecorator", "register_member_tests")

logger = logging.getLogger(__name__)


def _normalise(options: dict[str, Any]) -> dict[str, Any]:
    if "expectation" in options:
        options["expectation_id"] = resolve_expectation_id(options.pop("expectation"))
    if "behavior" in options:
        options["behavior_id"] = resolve_behavior_name(options.pop("behavior"))
    return options


def register_member_tests(registries: RegistrySet, owner: Type[Any]) -> list[TestRegistryEntry]:
    """Register the inline ``@test_case`` members of ``owner``, bucketed under ``owner``."""
    entries: list[TestRegistryEntry] = []
    for decl in collect_pending(owner, TestDecorator.kind):
        options = _normalise(dict(decl.options))
        options.setdefault("name", decl.member)
        metadata = BaseDecorator.validate(
            TestMetadata, f"@test_case {component_label(owner)}.{decl.member}", **options
        )
        entries.append(registries.tests.register(metadata, owner))
    return entries


class TestDecorator(BaseDecorator):
    """
    Usage
    -----
        @test_case(registries, type="unit")
        class RejectsEmptyCartTest: ...

        @behavior(registries, expectation="PO-EXP-001", tests=[RejectsEmptyCartTest])
        class ValidateCartBehavior:
            @test_case(registries, type="integration")
            def reserves_stock(self): ...
    """

    __test__ = False

    kind = "test"
    metadata_model = TestMetadata
    log_category = "tests"
    supports_members = True

    def build_metadata(self, cls: Type[Any], registries: RegistrySet, options: dict[str, Any]) -> TestMetadata:
        options = _normalise(options)
        if "file" not in options:
            location = source_location(cls)
            options["file"] = location.file_path if location else None
        return super().build_metadata(cls, registries, options)

    def register(self, registries: RegistrySet, cls: Type[Any], metadata: TestMetadata) -> None:
        entry = registries.tests.register(metadata, cls)
        if entry.test_id is not None:
            # Reflect the generated ID on the class record.
            self.attach(cls, entry.metadata)

    def span_attributes(self, cls: Type[Any], metadata: TestMetadata) -> dict[str, Any]:
        return {"domainkit.expectation_id": metadata.expectation_id}
