# domainkit/identity/utils.py
"""
Naming helpers shared by the registries and decorators.

- Segment-aware splitting of class names (`split_segments`)
- Event type derivation from an event class name (`derive_event_type`)
- Journey slug derivation (`journey_slug`)
- Display labels for component handles (`component_label`)

Pure functions; no registry state lives here.
"""

import logging
import re
from typing import Any

from slugify import slugify

__all__ = [
    "split_segments",
    "derive_event_type",
    "journey_slug",
    "component_label",
    "stakeholder_id",
]

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[0-9a-z])([A-Z])")
_NON_ALNUM_SEP_RE = re.compile(r"[\W_\-]+")

_EVENT_SUFFIX_RE = re.compile(r"Event$")
_LOWER_UPPER_RE = re.compile(r"([a-z])([A-Z])")
_ACRONYM_RE = re.compile(r"([A-Z])([A-Z][a-z])")


def split_segments(name: str) -> list[str]:
    """Split a class name into segments by CamelCase boundaries and `_`/`-`/non-alnum.

    Examples:
        "PlaceOrderJourney" -> ["Place", "Order", "Journey"]
        "Special_Response-Custom" -> ["Special", "Response", "Custom"]
    """
    if not name:
        return []
    s = _CAMEL_BOUNDARY_RE.sub(r" \1", name)
    s = re.sub(r"[\-_]+", " ", s)
    return [p for p in _NON_ALNUM_SEP_RE.split(s) if p]


def derive_event_type(name: str) -> str:
    """Derive a dot-delimited event type from an event class name.

    The trailing ``Event`` suffix is removed, camelCase boundaries become
    separators (acronyms stay together) and the result is lowercased:

        "OrderPlacedEvent"     -> "order.placed"
        "HTTPRequestReceived"  -> "http.request.received"
    """
    raw = (name or "").strip()
    if not raw:
        raise ValueError("cannot derive an event type from an empty name")
    s = _EVENT_SUFFIX_RE.sub("", raw) or raw
    s = _LOWER_UPPER_RE.sub(r"\1-\2", s)
    s = _ACRONYM_RE.sub(r"\1-\2", s)
    s = s.lower()
    return re.sub(r"-+", ".", s)


def journey_slug(value: Any) -> str:
    """Return the slug for a journey name or journey class.

    Strings are slugified as-is; classes have a trailing ``Journey`` segment
    dropped first (``PlaceOrderJourney`` -> ``place-order``).
    """
    if isinstance(value, str):
        return slugify(value)
    segments = split_segments(getattr(value, "__name__", str(value)))
    if len(segments) > 1 and segments[-1] == "Journey":
        segments = segments[:-1]
    return slugify(" ".join(segments))


def component_label(component: Any) -> str:
    """Human-readable label for a component handle (class name or ``str()``)."""
    if isinstance(component, str):
        return component
    return getattr(component, "__name__", None) or str(component)


def stakeholder_id(context: str, role: str) -> str:
    """``"{context-slug}:{role-slug}"``, e.g. ``("Order Management", "Buyer")`` -> ``"order-management:buyer"``."""
    return f"{slugify(context)}:{slugify(role)}"
