# domainkit/types/testcases.py
from __future__ import annotations

from pydantic import field_validator

from .base import BaseMetadata, require_name
from .enums import TestStatus, TestType

__all__ = ("TestMetadata",)


class TestMetadata(BaseMetadata):
    """A test linked (possibly later) to an expectation and/or behavior."""

    __test__ = False

    name: str
    type: TestType
    test_id: str | None = None
    expectation_id: str | None = None
    behavior_id: str | None = None
    framework: str | None = None
    status: TestStatus | None = None
    file: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_name(v, kind="test")
