from .meta import (
    PendingDeclaration,
    append_metadata,
    collect_pending,
    get_metadata,
    has_metadata,
    mark_pending,
    set_metadata,
)

__all__ = [
    "PendingDeclaration",
    "append_metadata",
    "collect_pending",
    "get_metadata",
    "has_metadata",
    "mark_pending",
    "set_metadata",
]
