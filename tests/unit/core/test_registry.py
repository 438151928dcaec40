"""Unit tests for core/registry.py"""

import pytest

from mdxdoc.core.models import DocNode, NodeType
from mdxdoc.core.registry import COMPONENTS, by_node_type, by_tag, text_body_tags


def test_lookup_by_tag_and_type():
    """Both directions find the same component."""
    for component in COMPONENTS:
        assert by_tag(component.tag) is component
        assert by_node_type(component.node_type) is component


def test_lookup_is_case_sensitive():
    """Tag names are matched exactly."""
    assert by_tag("callout") is None
    assert by_tag("Youtube") is None


def test_node_types_are_known():
    """Every registered node type is a NodeType value."""
    known = {t.value for t in NodeType}
    assert {c.node_type for c in COMPONENTS} <= known


def test_text_body_tags():
    """Only components with a body attribute keep a raw text body."""
    assert text_body_tags() == {"CodePlayground"}


def test_read_attrs_defaults():
    """Missing attributes take their defaults."""
    assert by_tag("YouTube").read_attrs([]) == {"id": ""}
    assert by_tag("CodePlayground").read_attrs([]) == {"language": "javascript", "code": ""}


def test_read_attrs_non_literal_uses_default():
    """A bare or {expression} attribute (value None) falls back to the default."""
    assert by_tag("Callout").read_attrs([("type", None)]) == {"type": "info"}


def test_read_attrs_invalid_choice_coerced():
    """A callout type outside the allowed set becomes the default."""
    assert by_tag("Callout").read_attrs([("type", "danger")]) == {"type": "info"}
    assert by_tag("Callout").read_attrs([("type", "tip")]) == {"type": "tip"}


def test_read_attrs_ignores_unknown_attributes():
    """Attributes the component does not declare are dropped."""
    assert by_tag("YouTube").read_attrs([("id", "x"), ("autoplay", "1")]) == {"id": "x"}


def test_read_attrs_body_wins_over_tag_attribute():
    """The body attribute always comes from the tag body."""
    attrs = by_tag("CodePlayground").read_attrs([("code", "ignored"), ("language", "python")], "print(1)")
    assert attrs == {"language": "python", "code": "print(1)"}


def test_tag_attrs_skip_body_and_fill_defaults():
    """tag_attrs writes every declared attribute except the body one, as strings."""
    node = DocNode(type="codePlayground", attrs={"code": "x"})
    assert by_tag("CodePlayground").tag_attrs(node) == [("language", "javascript")]


def test_body():
    """body returns the body attribute, or '' for components without one."""
    node = DocNode(type="codePlayground", attrs={"code": "x = 1"})
    assert by_tag("CodePlayground").body(node) == "x = 1"
    assert by_tag("YouTube").body(DocNode(type="youtube")) == ""


def test_create_container_gets_empty_paragraph():
    """A new callout holds one empty paragraph to type into."""
    node = by_node_type("callout").create()
    assert node.to_json() == {
        "type": "callout",
        "attrs": {"type": "info"},
        "content": [{"type": "paragraph"}],
    }


def test_create_atomic_with_overrides():
    """A new atomic node has no content and the given attributes over the defaults."""
    node = by_node_type("codePlayground").create(language="python")
    assert node.content is None
    assert node.attrs == {"language": "python", "code": ""}


def test_create_rejects_invalid_choice():
    """create refuses a value outside the allowed choices."""
    with pytest.raises(ValueError, match="callout.type"):
        by_node_type("callout").create(type="danger")
