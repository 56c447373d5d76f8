# domainkit/components/meta.py
"""
Attach metadata records to classes and read them back.

Class-level declarations store their record on the class itself (one record
per kind). Method-level declarations cannot register on their own because the
owning class does not exist yet when the method decorator runs; they are
queued on the function as :class:`PendingDeclaration` objects and collected by
the owning class's decorator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "PendingDeclaration",
    "set_metadata",
    "get_metadata",
    "has_metadata",
    "append_metadata",
    "mark_pending",
    "collect_pending",
]

_META_ATTR = "__domainkit_meta__"
_PENDING_ATTR = "__domainkit_pending__"


@dataclass(slots=True)
class PendingDeclaration:
    """A method-level declaration waiting for its owning class."""

    kind: str
    member: str
    options: dict[str, Any] = field(default_factory=dict)


def _own_store(component: Any) -> dict[str, Any]:
    # Use the class's own __dict__ so subclasses never see a parent's records.
    store = vars(component).get(_META_ATTR)
    if store is None:
        store = {}
        setattr(component, _META_ATTR, store)
    return store


def set_metadata(component: Any, kind: str, value: Any) -> None:
    _own_store(component)[kind] = value


def get_metadata(component: Any, kind: str, default: Any = None) -> Any:
    try:
        store = vars(component).get(_META_ATTR) or {}
    except TypeError:
        return default
    return store.get(kind, default)


def has_metadata(component: Any, kind: str) -> bool:
    return get_metadata(component, kind) is not None


def append_metadata(component: Any, kind: str, value: Any) -> list[Any]:
    store = _own_store(component)
    records = store.setdefault(kind, [])
    records.append(value)
    return records


def mark_pending(func: Any, kind: str, options: dict[str, Any]) -> Any:
    pending = getattr(func, _PENDING_ATTR, None)
    if pending is None:
        pending = []
        setattr(func, _PENDING_ATTR, pending)
    pending.append(PendingDeclaration(kind=kind, member=func.__name__, options=dict(options)))
    return func


def collect_pending(cls: type, kind: str) -> list[PendingDeclaration]:
    """Pop every pending declaration of ``kind`` from ``cls``'s own members, in definition order."""
    collected: list[PendingDeclaration] = []
    for value in vars(cls).values():
        func = getattr(value, "__func__", value)
        pending = getattr(func, _PENDING_ATTR, None)
        if not pending:
            continue
        matched = [p for p in pending if p.kind == kind]
        if not matched:
            continue
        pending[:] = [p for p in pending if p.kind != kind]
        collected.extend(matched)
    return collected
