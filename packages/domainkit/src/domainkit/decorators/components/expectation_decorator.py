# domainkit/decorators/components/expectation_decorator.py
"""
Expectation decorator.

- Resolves both stakeholder references to roles and, when no
  ``expectation_id`` is given but a journey is, generates the next
  ``{PREFIX}-EXP-{nnn}`` for that journey.
- After registration the bounded contexts of both stakeholders are checked;
  problems are logged, never raised.
- Behaviors listed in ``behaviors=[...]`` that have no expectation yet are
  linked to this one. Inline ``@behavior`` members inherit its ID.
- Member form: an inline expectation inside a milestone, inheriting the
  milestone's name and journey.
"""
import logging
from typing import Any, Type

from domainkit.components import collect_pending
from domainkit.decorators.base import BaseDecorator
from domainkit.identity import component_label
from domainkit.registry import RegistrySet
from domainkit.resolve import (
    merge_references,
    resolve_behavior_name,
    resolve_journey_slug,
    resolve_milestone_name,
    resolve_stakeholder_role,
)
from domainkit.types import ExpectationMetadata

from .behavior_decorator import register_member_behaviors

__all__ = ("ExpectationDecorator", "register_member_expectations")

logger = logging.getLogger(__name__)


def _normalise(options: dict[str, Any], registries: RegistrySet) -> dict[str, Any]:
    for key in ("expecting_stakeholder", "providing_stakeholder"):
        if key in options:
            options[key] = resolve_stakeholder_role(options[key], registries)
    behaviors = merge_references(options.pop("behavior", None), options.pop("behaviors", None))
    options["behaviors"] = [resolve_behavior_name(b) for b in behaviors]
    if "milestone" in options:
        options["milestone"] = resolve_milestone_name(options["milestone"])
    if "journey" in options:
        options["journey_slug"] = resolve_journey_slug(options.pop("journey"))
    if not options.get("expectation_id") and options.get("journey_slug"):
        options["expectation_id"] = registries.expectations.next_expectation_id(options["journey_slug"])
    return options


def _register(registries: RegistrySet, metadata: ExpectationMetadata, component: Any) -> None:
    registries.expectations.register(metadata, component)
    label = metadata.expectation_id or component_label(component)

    validation = registries.validate_expectation(metadata)
    if validation.warning:
        logger.warning("[EXPECTATIONS] %s: %s", label, validation.warning)
    if not validation.valid and validation.error:
        logger.error("[EXPECTATIONS] %s: %s", label, validation.error)

    if metadata.expectation_id:
        for name in metadata.behaviors:
            registries.adopt_behavior(name, metadata.expectation_id)


def register_member_expectations(
    registries: RegistrySet,
    owner: Type[Any],
    *,
    milestone: str | None,
    journey_slug: str | None,
) -> list[ExpectationMetadata]:
    """Register inline ``@expectation`` members of a milestone class."""
    registered: list[ExpectationMetadata] = []
    for decl in collect_pending(owner, ExpectationDecorator.kind):
        options = dict(decl.options)
        options.setdefault("milestone", milestone)
        if "journey" not in options:
            options.setdefault("journey_slug", journey_slug)
        options.setdefault("name", decl.member)
        options = _normalise(options, registries)
        metadata = BaseDecorator.validate(
            ExpectationMetadata, f"@expectation {component_label(owner)}.{decl.member}", **options
        )
        _register(registries, metadata, getattr(owner, decl.member))
        registered.append(metadata)
    return registered


class ExpectationDecorator(BaseDecorator):
    """
    Usage
    -----
        @expectation(
            registries,
            expecting_stakeholder=BuyerStakeholder,
            providing_stakeholder="Warehouse",
            description="Stock is reserved before payment",
            journey=PlaceOrderJourney,
            behaviors=[ReserveStockBehavior],
        )
        class StockReserved: ...
    """

    kind = "expectation"
    metadata_model = ExpectationMetadata
    log_category = "expectations"
    supports_members = True

    def build_metadata(self, cls: Type[Any], registries: RegistrySet, options: dict[str, Any]) -> ExpectationMetadata:
        if "description" not in options and cls.__doc__:
            options["description"] = cls.__doc__.strip().splitlines()[0]
        return super().build_metadata(cls, registries, _normalise(options, registries))

    def bind_extras(
        self, cls: Type[Any], metadata: ExpectationMetadata, registries: RegistrySet
    ) -> ExpectationMetadata:
        inline = register_member_behaviors(registries, cls, metadata.expectation_id)
        if not inline:
            return metadata
        names = list(metadata.behaviors)
        names.extend(n for n in inline if n not in names)
        return metadata.model_copy(update={"behaviors": names})

    def register(self, registries: RegistrySet, cls: Type[Any], metadata: ExpectationMetadata) -> None:
        _register(registries, metadata, cls)

    def span_attributes(self, cls: Type[Any], metadata: ExpectationMetadata) -> dict[str, Any]:
        return {
            "domainkit.expectation_id": metadata.expectation_id,
            "domainkit.journey": metadata.journey_slug,
        }

    def describe(self, cls: Type[Any], metadata: ExpectationMetadata) -> str:
        return metadata.expectation_id or cls.__name__
