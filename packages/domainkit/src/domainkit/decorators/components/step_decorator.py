# domainkit/decorators/components/step_decorator.py
"""
Step decorator.

- Class form: declares a reusable step, registered under itself until a
  milestone composes it (``steps=[StepReference(step=Cls, order=n)]``).
- Member form: an inline step inside a milestone or behavior; ``order`` is
  required and the owner registers it.
"""
import logging
from typing import Any, Type

from domainkit.components import PendingDeclaration, collect_pending
from domainkit.decorators.base import BaseDecorator
from domainkit.identity import component_label
from domainkit.registry import RegistrySet
from domainkit.registry.records import ParentKind
from domainkit.resolve import resolve_expectation_id, resolve_stakeholder_role
from domainkit.types import StepMetadata

__all__ = ("StepDecorator", "register_member_steps")

logger = logging.getLogger(__name__)


def _normalise(options: dict[str, Any], registries: RegistrySet) -> dict[str, Any]:
    if "actor" in options:
        options["actor"] = resolve_stakeholder_role(options["actor"], registries)
    if "expectations" in options:
        options["expectations"] = [resolve_expectation_id(e) for e in options["expectations"] or ()]
    return options


def register_member_steps(
    registries: RegistrySet,
    owner: Type[Any],
    parent_kind: ParentKind,
) -> list[StepMetadata]:
    """Register every inline ``@step`` member of ``owner`` under it."""
    registered: list[StepMetadata] = []
    decl: PendingDeclaration
    for decl in collect_pending(owner, StepDecorator.kind):
        options = _normalise(dict(decl.options), registries)
        options.setdefault("name", decl.member)
        metadata = BaseDecorator.validate(
            StepMetadata, f"@step {component_label(owner)}.{decl.member}", **options
        )
        registries.steps.register(metadata, owner, parent_kind)
        registered.append(metadata)
    return registered


class StepDecorator(BaseDecorator):
    """
    Usage
    -----
        @step(registries, actor=BuyerStakeholder)
        class ValidateCart: ...

        @milestone(registries, stakeholder="Buyer", steps=[StepReference(step=ValidateCart, order=1)])
        class CartCheckedOut:
            @step(registries, order=2)
            def reserve_stock(self): ...
    """

    kind = "step"
    metadata_model = StepMetadata
    log_category = "steps"
    supports_members = True

    def build_metadata(self, cls: Type[Any], registries: RegistrySet, options: dict[str, Any]) -> StepMetadata:
        options.setdefault("reusable", True)
        return super().build_metadata(cls, registries, _normalise(options, registries))

    def register(self, registries: RegistrySet, cls: Type[Any], metadata: StepMetadata) -> None:
        registries.steps.register_standalone(metadata, cls)
