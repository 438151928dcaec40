"""Editor document tree -> MDX-like markdown serialization"""

import re
from typing import Any, Callable, Mapping, Optional, Union

from mdxdoc.core.models import DocNode, Mark, MarkType, NodeType
from mdxdoc.core.registry import Component, by_node_type


MARK_WRAPPERS: dict[str, Callable[[str, Mark], str]] = {
    MarkType.bold.value:   lambda text, mark: f"**{text}**",
    MarkType.italic.value: lambda text, mark: f"*{text}*",
    MarkType.code.value:   lambda text, mark: f"`{text}`",
    MarkType.link.value:   lambda text, mark: f"[{text}]({(mark.attrs or {}).get('href') or ''})",
    MarkType.strike.value: lambda text, mark: f"~~{text}~~",
}

LIST_TYPES = {NodeType.bullet_list.value, NodeType.ordered_list.value}

_BACKTICKS_RE = re.compile(r"`{3,}")


# --- inline content ---

def serialize_marks(text: str, marks: Optional[list[Mark]]) -> str:
    """Wrap text in each mark's syntax in order; the first mark ends up innermost."""
    for mark in marks or []:
        wrap = MARK_WRAPPERS.get(mark.type)
        if wrap:
            text = wrap(text, mark)
    return text


def serialize_inline(content: Optional[list[DocNode]]) -> str:
    parts = []
    for node in content or []:
        if node.type == NodeType.text.value:
            parts.append(serialize_marks(node.text or "", node.marks))
        elif node.type == NodeType.hard_break.value:
            parts.append("\n")
    return "".join(parts)


# --- blocks ---

def _serialize_blocks(nodes: list[DocNode]) -> list[str]:
    """Serialize sibling blocks; a list right after a list of the same kind switches marker."""
    parts = []
    alt = False
    prev = None
    for node in nodes:
        if node.type in LIST_TYPES:
            alt = prev is not None and prev.type == node.type and not alt
            parts.append(_list(node, alt))
        else:
            parts.append(serialize_node(node))
        prev = node
    return parts


def _join_blocks(nodes: list[DocNode]) -> str:
    return "\n\n".join(_serialize_blocks(nodes))


def _int_attr(node: DocNode, name: str, default: int) -> int:
    try:
        return max(int(node.attr(name, default)), 1)
    except (TypeError, ValueError):
        return default


def _heading(node: DocNode) -> str:
    return f"{'#' * _int_attr(node, 'level', 1)} {serialize_inline(node.content)}"


def _code_block(node: DocNode) -> str:
    language = node.attr("language", "")
    code = (node.children[0].text or "") if node.children else ""
    # a fence must be longer than any backtick run inside the code
    fence = "`" * max([3] + [len(run) + 1 for run in _BACKTICKS_RE.findall(code)])
    return f"{fence}{language}\n{code}\n{fence}"


def _blockquote(node: DocNode) -> str:
    return "\n".join(f"> {line}" for line in _join_blocks(node.children).split("\n"))


def _list_item(item: DocNode, marker: str) -> str:
    """Prefix an item with its marker and indent its continuation lines to match."""
    lines = serialize_node(item).split("\n")
    pad = " " * len(marker)
    return "\n".join([marker + lines[0]] + [pad + line if line else line for line in lines[1:]])


def _bullet_list(node: DocNode, alt: bool = False) -> str:
    marker = "* " if alt else "- "
    return "\n".join(_list_item(item, marker) for item in node.children)


def _ordered_list(node: DocNode, alt: bool = False) -> str:
    delim = ")" if alt else "."
    return "\n".join(_list_item(item, f"{i}{delim} ") for i, item in enumerate(node.children, 1))


def _list(node: DocNode, alt: bool = False) -> str:
    """Serialize a list; alt picks the other marker so adjacent lists stay separate."""
    if node.type == NodeType.ordered_list.value:
        return _ordered_list(node, alt)
    return _bullet_list(node, alt)


def _list_item_body(node: DocNode) -> str:
    """Blocks of one list item; a nested list follows its paragraph directly."""
    parts = []
    for i, (child, text) in enumerate(zip(node.children, _serialize_blocks(node.children))):
        if i:
            parts.append("\n" if child.type in LIST_TYPES else "\n\n")
        parts.append(text)
    return "".join(parts)


def _image(node: DocNode) -> str:
    alt, src, title = node.attr("alt", ""), node.attr("src", ""), node.attr("title")
    if title:
        escaped = str(title).replace('"', '\\"')
        return f'![{alt}]({src} "{escaped}")'
    return f"![{alt}]({src})"


def _tag_attr(name: str, value: str) -> str:
    if '"' in value and "'" not in value:
        return f"{name}='{value}'"
    return f'{name}="{value}"'


def serialize_component(node: DocNode, component: Component) -> str:
    """Write a registered component node back as its tag."""
    attrs = " ".join(_tag_attr(name, value) for name, value in component.tag_attrs(node))
    opening = f"<{component.tag} {attrs}" if attrs else f"<{component.tag}"
    closing = f"</{component.tag}>"
    if component.body_attr:
        return f"{opening}>\n{component.body(node)}\n{closing}"
    if component.atomic:
        return f"{opening} />"
    return f"{opening}>\n{_join_blocks(node.children)}\n{closing}"


BLOCK_SERIALIZERS: dict[str, Callable[[DocNode], str]] = {
    NodeType.doc.value:             lambda node: _join_blocks(node.children),
    NodeType.paragraph.value:       lambda node: serialize_inline(node.content),
    NodeType.heading.value:         _heading,
    NodeType.code_block.value:      _code_block,
    NodeType.blockquote.value:      _blockquote,
    NodeType.bullet_list.value:     _bullet_list,
    NodeType.ordered_list.value:    _ordered_list,
    NodeType.list_item.value:       _list_item_body,
    NodeType.horizontal_rule.value: lambda node: "---",
    NodeType.image.value:           _image,
    NodeType.text.value:            lambda node: serialize_inline([node]),
    NodeType.hard_break.value:      lambda node: "\n",
}


def serialize_node(node: DocNode) -> str:
    """Serialize one node; unknown types keep only their children's output."""
    handler = BLOCK_SERIALIZERS.get(node.type)
    if handler:
        return handler(node)
    component = by_node_type(node.type)
    if component:
        return serialize_component(node, component)
    return _join_blocks(node.children) if node.content else ""


def doc_to_mdx(doc: Union[DocNode, Mapping[str, Any]]) -> str:
    """Serialize an editor document to MDX-like text ("" unless the root is a doc)."""
    if isinstance(doc, Mapping):
        doc = DocNode.from_json(dict(doc))
    if doc is None or doc.type != NodeType.doc.value:
        return ""
    return serialize_node(doc).strip()
