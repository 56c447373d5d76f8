"""
OpenTelemetry spans for declaration processing.

Only the OpenTelemetry *API* is used: without a configured SDK every span is a
no-op, so applications opt in by installing a tracer provider of their own.
Span names are dot paths built with :class:`SpanPath`, e.g.
``domainkit.decorator.apply.milestone``.
"""

import logging
from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

from opentelemetry import trace
from opentelemetry.trace import Span, SpanKind, Tracer

logger = logging.getLogger(__name__)

TRACER_NAME = "domainkit"

_SCALARS = (bool, str, int, float)


@dataclass(frozen=True)
class SpanPath:
    """Dot-joined span name.

        SpanPath.from_str("domainkit.decorator").child("apply", "step")
        -> domainkit.decorator.apply.step
    """

    parts: tuple[str, ...]

    def __str__(self) -> str:
        return ".".join(self.parts)

    @classmethod
    def from_str(cls, name: str) -> "SpanPath":
        return cls(tuple(p for p in (name or "").strip().split(".") if p))

    def child(self, *segments: str) -> "SpanPath":
        return SpanPath(self.parts + tuple(s for s in segments if s))


def get_tracer(name: str | None = None) -> Tracer:
    return trace.get_tracer(name or TRACER_NAME)


def coerce_attribute(value: Any) -> Any:
    """Map a metadata value onto an OpenTelemetry attribute value, or ``None`` to skip it.

    Enums become their value, sets become sorted lists, and sequences keep
    only their scalar members. Anything else (classes, dicts, models) is
    dropped.
    """
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, (set, frozenset)):
        value = sorted(value, key=str)
    if isinstance(value, (list, tuple)):
        items = [coerce_attribute(v) for v in value]
        items = [v for v in items if isinstance(v, _SCALARS)]
        # OpenTelemetry requires homogeneous sequences
        if items and len({type(v) for v in items}) == 1:
            return items
    return None


def _set_attributes(span: Span, attrs: Mapping[str, Any] | None) -> None:
    for key, value in (attrs or {}).items():
        coerced = coerce_attribute(value)
        if coerced is None:
            logger.debug("span attribute %s skipped (%s)", key, type(value).__name__)
            continue
        span.set_attribute(key, coerced)


@contextmanager
def declaration_span(name: str | SpanPath, *, attributes: Mapping[str, Any] | None = None) -> Iterator[Span]:
    """Span around one declaration.

    An exception escaping the block is recorded on the span by the tracer.

        with declaration_span("domainkit.decorator.apply.step", attributes={"domainkit.kind": "step"}):
            ...
    """
    with get_tracer().start_as_current_span(str(name), kind=SpanKind.INTERNAL) as span:
        _set_attributes(span, attributes)
        yield span


__all__ = [
    "TRACER_NAME",
    "SpanPath",
    "coerce_attribute",
    "declaration_span",
    "get_tracer",
]
