# domainkit/tracing/__init__.py
from .tracing import TRACER_NAME, SpanPath, coerce_attribute, declaration_span, get_tracer

__all__ = [
    "TRACER_NAME",
    "SpanPath",
    "coerce_attribute",
    "declaration_span",
    "get_tracer",
]
