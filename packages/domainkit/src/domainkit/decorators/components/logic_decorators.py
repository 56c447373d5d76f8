# domainkit/decorators/components/logic_decorators.py
"""
Logic decorators.

``logic`` takes an explicit ``type=``; ``rule``, ``policy`` and
``specification`` fix it. All of them attach their record under the
``"logic"`` key and write to the single logic registry, keyed by
``(type, name)``.
"""
import logging
from typing import Any, Type

from domainkit.components import get_metadata
from domainkit.decorators.base import BaseDecorator
from domainkit.exceptions import MissingFieldError
from domainkit.identity import component_label
from domainkit.registry import RegistrySet
from domainkit.resolve import resolve_context_name, resolve_expectation_id
from domainkit.types import LogicMetadata, LogicType

__all__ = ("LogicDecorator", "RuleDecorator", "PolicyDecorator", "SpecificationDecorator")

logger = logging.getLogger(__name__)


def logic_name(ref: Any) -> str:
    """Name of a logic class (its record if decorated, else its class name) or the string itself."""
    if isinstance(ref, str):
        return ref
    metadata = get_metadata(ref, LogicDecorator.kind)
    return metadata.name if metadata is not None else component_label(ref)


class LogicDecorator(BaseDecorator):
    """
    Usage
    -----
        @logic(registries, type="calculation", inputs={"cart": "Cart"}, outputs={"total": "Money"})
        class CartTotal: ...
    """

    kind = "logic"
    metadata_model = LogicMetadata
    log_category = "logic"
    logic_type: LogicType | None = None

    def build_metadata(self, cls: Type[Any], registries: RegistrySet, options: dict[str, Any]) -> LogicMetadata:
        if self.logic_type is not None:
            options["type"] = self.logic_type
        elif "type" not in options:
            raise MissingFieldError(f"@{self.kind} on {cls.__qualname__}: type is required")
        if "invokes" in options:
            options["invokes"] = [logic_name(i) for i in options["invokes"] or ()]
        if "requires" in options:
            options["requires"] = [logic_name(r) for r in options["requires"] or ()]
        if "applies_to" in options:
            options["applies_to"] = [component_label(a) for a in options["applies_to"] or ()]
        if "aggregate_type" in options and options["aggregate_type"] is not None:
            options["aggregate_type"] = component_label(options["aggregate_type"])
        if "context" in options:
            options["context"] = resolve_context_name(options["context"])
        if "expectation" in options:
            options["expectation_id"] = resolve_expectation_id(options.pop("expectation"))
        return super().build_metadata(cls, registries, options)

    def register(self, registries: RegistrySet, cls: Type[Any], metadata: LogicMetadata) -> None:
        registries.logic.register(metadata, cls)

    def span_attributes(self, cls: Type[Any], metadata: LogicMetadata) -> dict[str, Any]:
        return {"domainkit.logic_type": LogicType(metadata.type).value}


class RuleDecorator(LogicDecorator):
    """
    Usage
    -----
        @rule(registries, rule_type="invariant", applies_to=[Order])
        class OrderMustHaveLines: ...
    """

    log_category = "rules"
    logic_type = LogicType.RULE


class PolicyDecorator(LogicDecorator):
    """
    Usage
    -----
        @policy(registries, policy_type="pricing", invokes=[CartTotal])
        class LoyaltyDiscount: ...
    """

    log_category = "policies"
    logic_type = LogicType.POLICY


class SpecificationDecorator(LogicDecorator):
    """
    Usage
    -----
        @specification(registries, applies_to=[Customer], pure=True)
        class IsPremiumCustomer: ...
    """

    log_category = "specifications"
    logic_type = LogicType.SPECIFICATION
