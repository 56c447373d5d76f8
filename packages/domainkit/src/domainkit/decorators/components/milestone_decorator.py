# domainkit/decorators/components/milestone_decorator.py
"""
Milestone decorator.

- Class form: a standalone milestone, reusable unless told otherwise. It may
  link itself to journeys (``journey=`` / ``journeys=``) and compose reusable
  step classes (``steps=[StepReference(...)]``). Inline ``@step`` and
  ``@expectation`` members are registered under it.
- Member form: an inline milestone inside a journey class. ``order`` is
  required and is checked when the member is declared.
"""
import logging
from typing import Any, Type

from domainkit.components import PendingDeclaration, collect_pending
from domainkit.decorators.base import BaseDecorator
from domainkit.exceptions import MissingFieldError
from domainkit.identity import component_label
from domainkit.registry import RegistrySet
from domainkit.resolve import (
    merge_references,
    resolve_event_type,
    resolve_journey_slug,
    resolve_milestone_name,
    resolve_stakeholder_role,
)
from domainkit.types import MilestoneMetadata, StepReference

from .expectation_decorator import register_member_expectations
from .step_decorator import register_member_steps

__all__ = ("MilestoneDecorator", "register_member_milestones")

logger = logging.getLogger(__name__)


def _normalise(options: dict[str, Any], registries: RegistrySet) -> dict[str, Any]:
    if "stakeholder" in options:
        options["stakeholder"] = resolve_stakeholder_role(options["stakeholder"], registries)
    if "prerequisites" in options:
        options["prerequisites"] = [resolve_milestone_name(p) for p in options["prerequisites"] or ()]
    if "business_event" in options:
        options["business_event"] = resolve_event_type(options["business_event"], registries)
    journeys = merge_references(options.pop("journey", None), options.pop("journeys", None))
    if journeys:
        options["journeys"] = [resolve_journey_slug(j) for j in journeys]
    return options


def _compose_steps(registries: RegistrySet, owner: Any, steps: list[StepReference]) -> None:
    # attach() rejects string references and undecorated classes.
    for ref in steps:
        registries.steps.attach(ref.step, owner, order=ref.order, parent_kind="milestone", optional=ref.optional)


def register_member_milestones(registries: RegistrySet, owner: Type[Any], journey_slug: str) -> list[MilestoneMetadata]:
    """Register inline ``@milestone`` members of a journey class, in declaration order."""
    registered: list[MilestoneMetadata] = []
    decl: PendingDeclaration
    for decl in collect_pending(owner, MilestoneDecorator.kind):
        options = _normalise(dict(decl.options), registries)
        options.setdefault("name", decl.member)
        options.setdefault("reusable", False)
        journeys = list(options.get("journeys") or [])
        if journey_slug not in journeys:
            journeys.insert(0, journey_slug)
        options["journeys"] = journeys
        metadata = BaseDecorator.validate(
            MilestoneMetadata, f"@milestone {component_label(owner)}.{decl.member}", **options
        )
        member = getattr(owner, decl.member)
        _compose_steps(registries, member, metadata.steps)
        registries.milestones.register(metadata, member, journey_slug=journey_slug)
        registered.append(metadata)
    return registered


class MilestoneDecorator(BaseDecorator):
    """
    Usage
    -----
        @milestone(registries, stakeholder=BuyerStakeholder, journey=PlaceOrderJourney, order=1)
        class CartCheckedOut:
            @step(registries, order=1)
            def validate_cart(self): ...

        class PlaceOrderJourney:
            @milestone(registries, stakeholder="Buyer", order=2)
            def payment_captured(self): ...
    """

    kind = "milestone"
    metadata_model = MilestoneMetadata
    log_category = "milestones"
    supports_members = True

    def build_metadata(self, cls: Type[Any], registries: RegistrySet, options: dict[str, Any]) -> MilestoneMetadata:
        options.setdefault("reusable", True)
        return super().build_metadata(cls, registries, _normalise(options, registries))

    def declare_member(self, func: Any, options: dict[str, Any]) -> Any:
        if options.get("order") is None:
            raise MissingFieldError(f"@milestone {func.__qualname__}: order is required for inline milestones")
        return super().declare_member(func, options)

    def bind_extras(self, cls: Type[Any], metadata: MilestoneMetadata, registries: RegistrySet) -> None:
        _compose_steps(registries, cls, metadata.steps)
        register_member_steps(registries, cls, "milestone")
        register_member_expectations(
            registries,
            cls,
            milestone=metadata.name,
            journey_slug=metadata.journeys[0] if metadata.journeys else None,
        )
        return None

    def register(self, registries: RegistrySet, cls: Type[Any], metadata: MilestoneMetadata) -> None:
        journey_slug = metadata.journeys[0] if metadata.journeys else None
        registries.milestones.register(metadata, cls, journey_slug=journey_slug)

    def span_attributes(self, cls: Type[Any], metadata: MilestoneMetadata) -> dict[str, Any]:
        return {
            "domainkit.stakeholder": metadata.stakeholder,
            "domainkit.journey": list(metadata.journeys),
        }
