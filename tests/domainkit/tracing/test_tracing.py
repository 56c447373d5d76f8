import pytest

from domainkit.tracing import SpanPath, coerce_attribute, declaration_span
from domainkit.types import LogicType


def test_span_path_building():
    root = SpanPath.from_str("domainkit.decorator")

    assert str(root.child("apply", "", "step")) == "domainkit.decorator.apply.step"
    assert SpanPath.from_str("  ").parts == ()
    assert str(SpanPath.from_str("a..b")) == "a.b"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("po", "po"),
        (3, 3),
        (True, True),
        (LogicType.RULE, "rule"),
        ({"b", "a"}, ["a", "b"]),
        (("x", 1), None),
        ([object()], None),
        ({"k": "v"}, None),
        (None, None),
    ],
)
def test_coerce_attribute(value, expected):
    assert coerce_attribute(value) == expected


def test_declaration_span_is_a_noop_without_an_sdk():
    with declaration_span(SpanPath.from_str("domainkit.test"), attributes={"domainkit.kind": "step", "skip": object()}):
        pass

    with pytest.raises(RuntimeError):
        with declaration_span("domainkit.test"):
            raise RuntimeError("boom")
