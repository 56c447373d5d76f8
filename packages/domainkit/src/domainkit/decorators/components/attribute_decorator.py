# domainkit/decorators/components/attribute_decorator.py
"""
Attribute decorator.

Stackable: every application adds one decorator-level attribute to the class.
Decorator-level attributes override inline ones (``attributes=[...]`` on a
persona, stakeholder, context or journey) of the same name when queried.
"""
import logging
from typing import Any, Iterable, Type

from domainkit.components import append_metadata
from domainkit.decorators.base import BaseDecorator
from domainkit.registry import RegistrySet
from domainkit.types import AttributeDefinition

__all__ = ("AttributeDecorator", "register_inline_attributes")

logger = logging.getLogger(__name__)


def register_inline_attributes(
    registries: RegistrySet, component: Any, attributes: Iterable[AttributeDefinition]
) -> None:
    attributes = list(attributes)
    if attributes:
        registries.attributes.register_inline(component, attributes)


class AttributeDecorator(BaseDecorator):
    """
    Usage
    -----
        @attribute(registries, name="email", type=str, required=True)
        @attribute(registries, name="loyalty_tier", default_value="bronze")
        class Buyer: ...
    """

    kind = "attribute"
    metadata_model = AttributeDefinition
    log_category = "attributes"

    def build_metadata(self, cls: Type[Any], registries: RegistrySet, options: dict[str, Any]) -> AttributeDefinition:
        # No default name: an attribute is never named after its class.
        return AttributeDefinition(**options)

    def attach(self, cls: Type[Any], metadata: AttributeDefinition) -> None:
        append_metadata(cls, self.kind, metadata)

    def register(self, registries: RegistrySet, cls: Type[Any], metadata: AttributeDefinition) -> None:
        registries.attributes.register_decorator(cls, metadata)

    def describe(self, cls: Type[Any], metadata: AttributeDefinition) -> str:
        return f"{cls.__name__}.{metadata.name}"
