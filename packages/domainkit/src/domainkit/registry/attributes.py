# domainkit/registry/attributes.py
"""Per-component attribute definitions from two independent sources."""

import logging
import re
from typing import Any

from ..identity import component_label
from ..types import AttributeDefinition
from .base import BaseRegistry

logger = logging.getLogger(__name__)


class AttributeRegistry(BaseRegistry[AttributeDefinition]):
    """
    Inline attributes (declared inside a parent's own metadata) and
    decorator attributes (one ``@attribute`` each) live in separate maps.

    Nothing is merged at write time. :meth:`query` builds the merged view on
    read: inline first, then decorator attributes overlaid by name, so either
    source may be registered first.
    """

    kind = "attribute"
    _indices = ("_inline", "_decorator")

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._inline: dict[Any, list[AttributeDefinition]] = {}
        self._decorator: dict[Any, list[AttributeDefinition]] = {}

    # --- registration ---

    def register_inline(self, component: Any, attributes: list[AttributeDefinition]) -> None:
        """Replace the inline attributes of ``component``."""
        with self._lock:
            self._inline[component] = list(attributes)

    def add_inline(self, component: Any, attribute: AttributeDefinition) -> None:
        with self._lock:
            self._inline.setdefault(component, []).append(attribute)

    def register_decorator(self, component: Any, attribute: AttributeDefinition) -> None:
        with self._lock:
            self._decorator.setdefault(component, []).append(attribute)

    # --- lookups ---

    def get_inline(self, component: Any) -> list[AttributeDefinition]:
        with self._lock:
            return list(self._inline.get(component, []))

    def get_decorator(self, component: Any) -> list[AttributeDefinition]:
        with self._lock:
            return list(self._decorator.get(component, []))

    def query(self, component: Any) -> list[AttributeDefinition]:
        """Merged attributes of ``component``; a decorator attribute wins on a name clash."""
        merged: dict[str, AttributeDefinition] = {}
        for attr in self.get_inline(component):
            merged[attr.name] = attr
        for attr in self.get_decorator(component):
            merged[attr.name] = attr
        return list(merged.values())

    def query_by_name_pattern(self, pattern: str | re.Pattern[str]) -> dict[Any, list[AttributeDefinition]]:
        """Merged attributes for every component whose label matches ``pattern`` (``re.search``)."""
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        return {c: self.query(c) for c in self.components() if regex.search(component_label(c))}

    def has_inline(self, component: Any) -> bool:
        return bool(self._inline.get(component))

    def has_decorator(self, component: Any) -> bool:
        return bool(self._decorator.get(component))

    def components(self) -> list[Any]:
        """Every component with attributes from either source, each once."""
        with self._lock:
            seen = list(self._inline.keys())
            seen.extend(c for c in self._decorator.keys() if c not in self._inline)
        return seen

    def get_all_inline(self) -> dict[Any, list[AttributeDefinition]]:
        with self._lock:
            return {c: list(attrs) for c, attrs in self._inline.items()}

    def get_all_decorator(self) -> dict[Any, list[AttributeDefinition]]:
        with self._lock:
            return {c: list(attrs) for c, attrs in self._decorator.items()}

    # --- enumeration ---

    def get_all(self) -> list[AttributeDefinition]:
        return [attr for c in self.components() for attr in self.query(c)]

    def count(self) -> int:
        """Number of components with attributes."""
        return len(self.components())

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            inline = sum(len(a) for a in self._inline.values())
            decorator = sum(len(a) for a in self._decorator.values())
        return {
            "total_components": self.count(),
            "inline_attributes": inline,
            "decorator_attributes": decorator,
            "merged_attributes": len(self.get_all()),
        }


__all__ = ["AttributeRegistry"]
