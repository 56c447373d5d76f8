# domainkit/decorators/base.py


"""
Core base decorator (class-based, no factories).

This module defines `BaseDecorator`, a callable class that implements the
dual-form decorator pattern used by every domainkit declaration. Decorators
never reach for global state: the `RegistrySet` to write into is always the
first argument.

Usage
-----
    @milestone(registries, stakeholder="Buyer", order=1)
    class CartCheckedOut: ...

    # explicit builder call, same effect
    milestone(registries, CartCheckedOut, stakeholder="Buyer", order=1)

    class PlaceOrder:
        @milestone(registries, stakeholder="Buyer", order=1)   # member form
        def cart_checked_out(self): ...

Key behaviors
-------------
- Options are normalised into a pydantic metadata record by `build_metadata()`.
  Class references (stakeholders, events, journeys, ...) are resolved to the
  string keys registries join on. A `pydantic.ValidationError` surfaces as
  `MetadataValidationError`.
- The record is attached to the class (`domainkit.components.meta`) and handed
  to `register()`, which writes it to the appropriate registry.
- Member (method-level) declarations cannot register on their own: the owning
  class does not exist yet. They are queued and collected by the class-level
  decorator of the owner (`supports_members`).
- A single trace span is emitted after successful registration.
"""

import inspect
import logging
from typing import Any, Callable, Optional, Type, TypeVar, cast

from pydantic import BaseModel, ValidationError

from domainkit.components import mark_pending, set_metadata
from domainkit.conf import TRACE_LEVELS
from domainkit.exceptions import MetadataValidationError
from domainkit.registry import RegistrySet
from domainkit.tracing import SpanPath, declaration_span
from domainkit.types import SourceLocation

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SPAN_ROOT = SpanPath.from_str("domainkit.decorator")


def _filter_trace_attrs(attrs: dict[str, Any], level: str | None) -> dict[str, Any]:
    level = (level or "info").strip().lower()
    if level not in TRACE_LEVELS:
        level = "info"
    if level == "debug":
        return attrs
    base_keys = {
        "domainkit.decorator", "domainkit.class", "domainkit.kind",
        "domainkit.name", "domainkit.member_count",
        # helpful snapshots when present
        "domainkit.journey", "domainkit.stakeholder", "domainkit.event_type",
        "domainkit.expectation_id",
    }
    if level == "info":
        return {k: v for k, v in attrs.items() if k in base_keys or not k.startswith("domainkit.")}
    minimal_keys = {"domainkit.decorator", "domainkit.class", "domainkit.kind", "domainkit.name"}
    return {k: v for k, v in attrs.items() if k in minimal_keys or not k.startswith("domainkit.")}


def source_location(obj: Any) -> SourceLocation | None:
    """Best-effort declaration site; classes built dynamically have none."""
    try:
        path = inspect.getsourcefile(obj)
        _, line = inspect.getsourcelines(obj)
    except (OSError, TypeError):
        return None
    if path is None:
        return None
    return SourceLocation(file_path=path, line=line)


class BaseDecorator:
    """Class-based decorator implementing the dual-form decorator pattern.

    Subclasses set ``kind`` (the metadata key on the class) and may override:
      • ``build_metadata(self, cls, registries, options) -> BaseModel``
      • ``bind_extras(self, cls, metadata, registries) -> BaseModel | None``
      • ``attach(self, cls, metadata) -> None``
      • ``register(self, registries, cls, metadata) -> None``
      • ``declare_member(self, func, options) -> func`` (when ``supports_members``)
      • ``span_attributes(self, cls, metadata) -> dict``
    """

    kind: str = "component"
    metadata_model: type[BaseModel] | None = None
    log_category: str | None = None
    supports_members: bool = False

    # ---------------- public API: dual-form decorator ----------------
    def __call__(
        self,
        registries: RegistrySet,
        _target: Optional[T] = None,
        **options: Any,
    ) -> T | Callable[[T], T]:
        """Support both forms:

            @decorator(registries, **options)
            class Foo: ...

            decorator(registries, Foo, **options)
        """
        if not isinstance(registries, RegistrySet):
            raise TypeError(
                f"@{self.kind} expects a RegistrySet as its first argument, got {type(registries).__name__}"
            )

        def _apply(target: T) -> T:
            if inspect.isclass(target):
                return cast(T, self.apply_class(registries, cast(Type[Any], target), options))
            if callable(target):
                if not self.supports_members:
                    raise TypeError(f"@{self.kind} can only decorate classes")
                return self.declare_member(target, options)
            raise TypeError(f"@{self.kind} cannot decorate {target!r}")

        # IMPORTANT: return the applied target for the builder-call form, or the
        # decorator function when used as @decorator(registries, ...)
        if _target is not None:
            return _apply(_target)
        return _apply

    def apply_class(self, registries: RegistrySet, cls: Type[Any], options: dict[str, Any]) -> Type[Any]:
        fqcn = f"{cls.__module__}.{cls.__qualname__}"

        # 1) Normalise options into a metadata record
        try:
            metadata = self.build_metadata(cls, registries, dict(options))
        except ValidationError as exc:
            raise MetadataValidationError(f"@{self.kind} on {fqcn}: {exc}") from exc

        # 2) Collect member declarations / bind extra metadata
        metadata = self.bind_extras(cls, metadata, registries) or metadata

        # 3) Attach to the class, then register
        self.attach(cls, metadata)
        self.register(registries, cls, metadata)

        # 4) Emit a single trace span *after* successful registration
        span_attrs_raw = {
            "domainkit.decorator": self.__class__.__name__,
            "domainkit.class": fqcn,
            "domainkit.kind": self.kind,
            "domainkit.name": getattr(metadata, "name", None),
            **self.span_attributes(cls, metadata),
        }
        span_attrs = {k: v for k, v in span_attrs_raw.items() if v is not None}
        span_attrs = _filter_trace_attrs(span_attrs, registries.settings.trace_level)
        with declaration_span(_SPAN_ROOT.child("apply", self.kind), attributes=span_attrs):
            label = str(self.log_category or self.kind).upper()
            logger.info("[%s] ✅ discovered `%s`", label, self.describe(cls, metadata))

        return cls

    # ---------------- hooks / extension points ----------------
    def build_metadata(self, cls: Type[Any], registries: RegistrySet, options: dict[str, Any]) -> BaseModel:
        """Default: feed the options to ``metadata_model``, naming the record after the class."""
        if self.metadata_model is None:  # pragma: no cover - subclasses set it
            raise NotImplementedError(f"{self.__class__.__name__} must define metadata_model")
        options.setdefault("name", cls.__name__)
        options.setdefault("source_location", source_location(cls))
        return self.metadata_model(**options)

    def bind_extras(self, cls: Type[Any], metadata: BaseModel, registries: RegistrySet) -> BaseModel | None:
        """Optional hook for inline attributes and member declarations."""
        return None

    def attach(self, cls: Type[Any], metadata: BaseModel) -> None:
        set_metadata(cls, self.kind, metadata)

    def register(self, registries: RegistrySet, cls: Type[Any], metadata: BaseModel) -> None:  # pragma: no cover
        raise NotImplementedError

    def declare_member(self, func: T, options: dict[str, Any]) -> T:
        """Queue a member declaration for the owning class's decorator."""
        return mark_pending(func, self.kind, options)

    def span_attributes(self, cls: Type[Any], metadata: BaseModel) -> dict[str, Any]:
        return {}

    def describe(self, cls: Type[Any], metadata: BaseModel) -> str:
        return getattr(metadata, "name", None) or cls.__name__

    # ---------------- shared helpers ----------------
    @staticmethod
    def validate(model: type[BaseModel], where: str, **fields: Any) -> BaseModel:
        """Build ``model`` outside the class path, surfacing pydantic errors the same way."""
        try:
            return model(**fields)
        except ValidationError as exc:
            raise MetadataValidationError(f"{where}: {exc}") from exc


__all__ = ["BaseDecorator", "source_location"]
