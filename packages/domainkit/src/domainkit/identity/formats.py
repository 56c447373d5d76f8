# domainkit/identity/formats.py
"""Identifier formats that downstream tooling relies on verbatim."""

import re

from domainkit.exceptions import MetadataValidationError

__all__ = [
    "EXPECTATION_ID_RE",
    "is_valid_expectation_id",
    "expectation_prefix",
    "format_expectation_id",
    "format_test_id",
]

EXPECTATION_ID_RE = re.compile(r"^[A-Z]{2,}-EXP-\d{3,}$")


def is_valid_expectation_id(value: str) -> bool:
    """True for IDs like ``PO-EXP-001``; lowercase or short counters are rejected."""
    return isinstance(value, str) and EXPECTATION_ID_RE.match(value) is not None


def expectation_prefix(journey_slug: str) -> str:
    """Uppercase letters of a journey slug, used as the expectation ID prefix.

    ``"po"`` -> ``"PO"``, ``"place-order"`` -> ``"PLACEORDER"``.
    """
    prefix = re.sub(r"[^A-Z]", "", (journey_slug or "").upper())
    if len(prefix) < 2:
        raise MetadataValidationError(
            f"journey slug {journey_slug!r} yields fewer than two letters for an expectation ID prefix"
        )
    return prefix


def format_expectation_id(prefix: str, sequence: int, *, padding: int = 3) -> str:
    return f"{prefix}-EXP-{str(sequence).zfill(max(padding, 3))}"


def format_test_id(expectation_id: str, sequence: int, *, padding: int = 0) -> str:
    """``{expectation_id}-TEST-{N}``; ``padding`` zero-fills N when > 0."""
    counter = str(sequence).zfill(padding) if padding > 0 else str(sequence)
    return f"{expectation_id}-TEST-{counter}"
