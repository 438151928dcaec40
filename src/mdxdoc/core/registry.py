"""Component registry: the closed set of MDX component tags and their node shapes

Both conversion directions read this table; nothing else names a component tag.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from mdxdoc.core.models import DocNode, NodeType, block


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Component:
    """A custom block: tag name <-> node type, attribute defaults, and nesting.

    atomic     -- the node has no children; all state lives in attrs
    body_attr  -- attr filled from the tag's text body instead of a tag attribute
    choices    -- attr name -> allowed values; anything else falls back to the default
    """
    tag: str
    node_type: str
    attrs: dict[str, Any] = field(default_factory=dict)
    atomic: bool = True
    body_attr: Optional[str] = None
    choices: dict[str, tuple[str, ...]] = field(default_factory=dict)

    def read_attrs(self, pairs: Iterable[tuple[str, Optional[str]]], body: str = "") -> dict[str, Any]:
        """Build node attrs from tag attribute pairs; missing or non-literal values get defaults."""
        found = {name: value for name, value in pairs if value is not None}
        attrs = {}
        for name, default in self.attrs.items():
            if name == self.body_attr:
                attrs[name] = body
                continue
            value = found.get(name)
            if value is None:
                value = default
            elif name in self.choices and value not in self.choices[name]:
                logger.debug("<%s %s=%r> not one of %s; using %r", self.tag, name, value, self.choices[name], default)
                value = default
            attrs[name] = value
        return attrs

    def tag_attrs(self, node: DocNode) -> list[tuple[str, str]]:
        """Return the (name, value) pairs written on the tag for node, defaults filled in."""
        return [
            (name, str(node.attr(name, default)))
            for name, default in self.attrs.items()
            if name != self.body_attr
        ]

    def body(self, node: DocNode) -> str:
        return str(node.attr(self.body_attr, "")) if self.body_attr else ""

    def create(self, **attrs: Any) -> DocNode:
        """Return a freshly inserted node: defaults, overrides, and an empty paragraph for containers."""
        values = {**self.attrs, **{k: v for k, v in attrs.items() if v is not None}}
        for name, allowed in self.choices.items():
            if values[name] not in allowed:
                raise ValueError(f"{self.node_type}.{name} must be one of {', '.join(allowed)}; got {values[name]!r}")
        content = None if self.atomic else [block(NodeType.paragraph.value)]
        return block(self.node_type, content, values)


CALLOUT_TYPES = ("info", "warning", "tip")

COMPONENTS: tuple[Component, ...] = (
    Component("BlogPostPreview", NodeType.blog_post_preview.value, {"id": ""}),
    Component("YouTube",         NodeType.youtube.value,           {"id": ""}),
    Component(
        "Callout", NodeType.callout.value, {"type": "info"},
        atomic=False, choices={"type": CALLOUT_TYPES},
    ),
    Component(
        "CodePlayground", NodeType.code_playground.value, {"language": "javascript", "code": ""},
        body_attr="code",
    ),
)

_BY_TAG:  dict[str, Component] = {c.tag: c for c in COMPONENTS}
_BY_TYPE: dict[str, Component] = {c.node_type: c for c in COMPONENTS}


def by_tag(tag: str) -> Optional[Component]:
    """Look up a component by its (case-sensitive) tag name."""
    return _BY_TAG.get(tag)


def by_node_type(node_type: str) -> Optional[Component]:
    return _BY_TYPE.get(node_type)


def text_body_tags() -> frozenset[str]:
    """Tags whose body is raw text rather than markdown blocks."""
    return frozenset(c.tag for c in COMPONENTS if c.body_attr)
