# domainkit/types/base.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ("SourceLocation", "BaseMetadata")


class SourceLocation(BaseModel):
    """Where a declaration was made. Informational only."""

    file_path: str
    line: int
    column: int = 0


class BaseMetadata(BaseModel):
    """
    Fields shared by every metadata record.

    Records are plain structured values; registries own the entries that wrap
    them. Unknown keys are kept so callers can carry extension data.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = None
    name: str | None = None
    description: str | None = None
    tags: set[str] = Field(default_factory=set)
    source_location: SourceLocation | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v):
        if v is None:
            return set()
        if isinstance(v, str):
            return {v}
        return set(v)


def require_name(value: str | None, *, kind: str) -> str:
    """Shared validator body: names are trimmed and must not be empty."""
    if value is None or not str(value).strip():
        raise ValueError(f"{kind} name cannot be empty")
    return str(value).strip()
