# domainkit/decorators/components/journey_decorator.py
"""
Journey decorator.

- Slug defaults to the class name minus ``Journey``, kebab-cased.
- Milestone and detour references keep their order; milestone classes are
  stored by name, detour journeys as given (class or slug).
- Inline ``@milestone`` members are registered against this journey and added
  to its milestone list.
"""
import logging
from typing import Any, Type

from domainkit.decorators.base import BaseDecorator
from domainkit.identity import journey_slug
from domainkit.registry import RegistrySet
from domainkit.resolve import (
    resolve_context_name,
    resolve_event_type,
    resolve_milestone_name,
    resolve_stakeholder_role,
    resolve_stakeholder_roles,
)
from domainkit.types import JourneyMetadata, MilestoneReference

from .attribute_decorator import register_inline_attributes
from .milestone_decorator import register_member_milestones

__all__ = ("JourneyDecorator",)

logger = logging.getLogger(__name__)


def _milestone_ref(ref: Any) -> Any:
    if isinstance(ref, MilestoneReference):
        return ref.model_copy(update={"milestone": resolve_milestone_name(ref.milestone)})
    if isinstance(ref, dict):
        return {**ref, "milestone": resolve_milestone_name(ref.get("milestone"))}
    return ref


class JourneyDecorator(BaseDecorator):
    """
    Usage
    -----
        @journey(registries, primary_stakeholder=BuyerStakeholder, context=OrderingContext)
        class PlaceOrderJourney:
            @milestone(registries, stakeholder="Buyer", order=1)
            def cart_checked_out(self): ...
    """

    kind = "journey"
    metadata_model = JourneyMetadata
    log_category = "journeys"

    def build_metadata(self, cls: Type[Any], registries: RegistrySet, options: dict[str, Any]) -> JourneyMetadata:
        options.setdefault("slug", journey_slug(cls))
        if "primary_stakeholder" in options:
            options["primary_stakeholder"] = resolve_stakeholder_role(options["primary_stakeholder"], registries)
        if "participating_stakeholders" in options:
            options["participating_stakeholders"] = resolve_stakeholder_roles(
                options["participating_stakeholders"] or (), registries
            )
        if "context" in options:
            options["context"] = resolve_context_name(options["context"])
        if "triggering_event" in options:
            options["triggering_event"] = resolve_event_type(options["triggering_event"], registries)
        if "milestones" in options:
            options["milestones"] = [_milestone_ref(m) for m in options["milestones"] or ()]
        return super().build_metadata(cls, registries, options)

    def bind_extras(self, cls: Type[Any], metadata: JourneyMetadata, registries: RegistrySet) -> JourneyMetadata:
        register_inline_attributes(registries, cls, metadata.attributes)
        inline = register_member_milestones(registries, cls, metadata.slug)
        if not inline:
            return metadata
        refs = list(metadata.milestones)
        refs.extend(
            MilestoneReference(milestone=m.name, order=m.order, prerequisites=list(m.prerequisites)) for m in inline
        )
        return metadata.model_copy(update={"milestones": refs})

    def register(self, registries: RegistrySet, cls: Type[Any], metadata: JourneyMetadata) -> None:
        registries.journeys.register(metadata, cls)

    def span_attributes(self, cls: Type[Any], metadata: JourneyMetadata) -> dict[str, Any]:
        return {"domainkit.journey": metadata.slug, "domainkit.member_count": len(metadata.milestones)}
