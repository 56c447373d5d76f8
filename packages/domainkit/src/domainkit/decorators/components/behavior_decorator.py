# domainkit/decorators/components/behavior_decorator.py
"""
Behavior decorator.

- Registers the behavior and resolves the tests it references: inline
  ``@test_case`` members plus any test classes passed in ``tests=[...]``.
- Inline ``@step`` members are registered with ``parent_kind="behavior"``.
- Member form: an inline behavior inside an expectation class, which
  inherits that expectation's ID.
"""
import logging
from typing import Any, Type

from domainkit.components import collect_pending, get_metadata
from domainkit.decorators.base import BaseDecorator
from domainkit.identity import component_label
from domainkit.registry import RegistrySet
from domainkit.resolve import resolve_context_name, resolve_expectation_id
from domainkit.types import BehaviorMetadata

from .step_decorator import register_member_steps
from .test_decorator import TestDecorator, register_member_tests

__all__ = ("BehaviorDecorator", "register_member_behaviors", "referenced_test_components")

logger = logging.getLogger(__name__)


def _test_name(ref: Any) -> str:
    if isinstance(ref, str):
        return ref
    metadata = get_metadata(ref, TestDecorator.kind)
    return metadata.name if metadata is not None else component_label(ref)


def _normalise(options: dict[str, Any]) -> dict[str, Any]:
    if "expectation" in options:
        options["expectation_id"] = resolve_expectation_id(options.pop("expectation"))
    if "context" in options:
        options["context"] = resolve_context_name(options["context"])
    if "tests" in options:
        options["tests"] = [_test_name(t) for t in options["tests"] or ()]
    return options


def referenced_test_components(registries: RegistrySet, metadata: BehaviorMetadata) -> list[Any]:
    """Unresolved class-level tests named in ``metadata.tests``."""
    wanted = set(metadata.tests)
    components: list[Any] = []
    for entry in registries.tests.get_unresolved():
        if entry.name not in wanted or get_metadata(entry.component, TestDecorator.kind) is None:
            continue
        if not any(entry.component is c for c in components):
            components.append(entry.component)
    return components


def register_member_behaviors(registries: RegistrySet, owner: Type[Any], expectation_id: str | None) -> list[str]:
    """Register inline ``@behavior`` members of ``owner`` against ``expectation_id``."""
    names: list[str] = []
    for decl in collect_pending(owner, BehaviorDecorator.kind):
        options = _normalise(dict(decl.options))
        options.setdefault("name", decl.member)
        if expectation_id and not options.get("expectation_id"):
            options["expectation_id"] = expectation_id
        metadata = BaseDecorator.validate(
            BehaviorMetadata, f"@behavior {component_label(owner)}.{decl.member}", **options
        )
        registries.link_behavior(
            metadata,
            getattr(owner, decl.member),
            tests=referenced_test_components(registries, metadata),
        )
        names.append(metadata.name)
    return names


class BehaviorDecorator(BaseDecorator):
    """
    Usage
    -----
        @behavior(registries, expectation="PO-EXP-001", context=OrderingContext, tests=[RejectsEmptyCartTest])
        class ValidateCartBehavior: ...
    """

    kind = "behavior"
    metadata_model = BehaviorMetadata
    log_category = "behaviors"
    supports_members = True

    def build_metadata(self, cls: Type[Any], registries: RegistrySet, options: dict[str, Any]) -> BehaviorMetadata:
        return super().build_metadata(cls, registries, _normalise(options))

    def bind_extras(self, cls: Type[Any], metadata: BehaviorMetadata, registries: RegistrySet) -> BehaviorMetadata:
        register_member_steps(registries, cls, "behavior")
        inline = register_member_tests(registries, cls)
        if not inline:
            return metadata
        names = list(metadata.tests)
        names.extend(e.name for e in inline if e.name not in names)
        return metadata.model_copy(update={"tests": names})

    def register(self, registries: RegistrySet, cls: Type[Any], metadata: BehaviorMetadata) -> None:
        registries.link_behavior(metadata, cls, tests=referenced_test_components(registries, metadata))

    def span_attributes(self, cls: Type[Any], metadata: BehaviorMetadata) -> dict[str, Any]:
        return {"domainkit.expectation_id": metadata.expectation_id}
