from .formats import (
    EXPECTATION_ID_RE,
    expectation_prefix,
    format_expectation_id,
    format_test_id,
    is_valid_expectation_id,
)
from .utils import component_label, derive_event_type, journey_slug, split_segments, stakeholder_id

__all__ = [
    "EXPECTATION_ID_RE",
    "is_valid_expectation_id",
    "expectation_prefix",
    "format_expectation_id",
    "format_test_id",
    "component_label",
    "stakeholder_id",
    "derive_event_type",
    "journey_slug",
    "split_segments",
]
