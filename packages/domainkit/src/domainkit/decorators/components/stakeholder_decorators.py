# domainkit/decorators/components/stakeholder_decorators.py
"""
Persona, stakeholder and bounded context decorators.

A persona is *who*, a bounded context is *where*, a stakeholder is a persona
playing a role inside one context. Stakeholder IDs default to
``"{context-slug}:{role-slug}"``. Inline ``attributes=[...]`` are registered
with the attribute registry for all three.
"""
import logging
from typing import Any, Type

from slugify import slugify

from domainkit.decorators.base import BaseDecorator
from domainkit.identity import stakeholder_id
from domainkit.registry import RegistrySet
from domainkit.resolve import resolve_context_name, resolve_persona_name
from domainkit.types import BoundedContextMetadata, PersonaMetadata, StakeholderMetadata

from .attribute_decorator import register_inline_attributes

__all__ = ("PersonaDecorator", "StakeholderDecorator", "BoundedContextDecorator")

logger = logging.getLogger(__name__)


class PersonaDecorator(BaseDecorator):
    """
    Usage
    -----
        @persona(registries, type="human", motivations=["fast checkout"])
        class Shopper: ...
    """

    kind = "persona"
    metadata_model = PersonaMetadata
    log_category = "personas"

    def build_metadata(self, cls: Type[Any], registries: RegistrySet, options: dict[str, Any]) -> PersonaMetadata:
        options.setdefault("id", slugify(options.get("name") or cls.__name__))
        return super().build_metadata(cls, registries, options)

    def register(self, registries: RegistrySet, cls: Type[Any], metadata: PersonaMetadata) -> None:
        registries.personas.register(metadata, cls)
        register_inline_attributes(registries, cls, metadata.attributes)


class StakeholderDecorator(BaseDecorator):
    """
    Usage
    -----
        @stakeholder(registries, persona=Shopper, role="Buyer", context=OrderingContext)
        class BuyerStakeholder: ...
    """

    kind = "stakeholder"
    metadata_model = StakeholderMetadata
    log_category = "stakeholders"

    def build_metadata(self, cls: Type[Any], registries: RegistrySet, options: dict[str, Any]) -> StakeholderMetadata:
        if "persona" in options:
            options["persona"] = resolve_persona_name(options["persona"])
        if "context" in options:
            options["context"] = resolve_context_name(options["context"])
        if options.get("context") and options.get("role"):
            options.setdefault("id", stakeholder_id(options["context"], options["role"]))
        return super().build_metadata(cls, registries, options)

    def register(self, registries: RegistrySet, cls: Type[Any], metadata: StakeholderMetadata) -> None:
        registries.stakeholders.register(metadata, cls)
        register_inline_attributes(registries, cls, metadata.attributes)

    def span_attributes(self, cls: Type[Any], metadata: StakeholderMetadata) -> dict[str, Any]:
        return {"domainkit.stakeholder": metadata.role}

    def describe(self, cls: Type[Any], metadata: StakeholderMetadata) -> str:
        return metadata.id or cls.__name__


class BoundedContextDecorator(BaseDecorator):
    """
    Usage
    -----
        @bounded_context(registries, name="Ordering", relationships={PaymentsContext: "downstream"})
        class OrderingContext: ...
    """

    kind = "bounded_context"
    metadata_model = BoundedContextMetadata
    log_category = "contexts"

    def build_metadata(
        self, cls: Type[Any], registries: RegistrySet, options: dict[str, Any]
    ) -> BoundedContextMetadata:
        if options.get("relationships"):
            options["relationships"] = {
                resolve_context_name(other): kind for other, kind in options["relationships"].items()
            }
        options.setdefault("id", slugify(options.get("name") or cls.__name__))
        return super().build_metadata(cls, registries, options)

    def register(self, registries: RegistrySet, cls: Type[Any], metadata: BoundedContextMetadata) -> None:
        registries.contexts.register(metadata, cls)
        register_inline_attributes(registries, cls, metadata.attributes)
