"""Markdown syntax tree -> editor document tree conversion"""

import logging
from typing import Callable

from markdown_it.tree import SyntaxTreeNode

from mdxdoc.core.markdown import DEFAULT_PRESET, parse_markdown
from mdxdoc.core.models import DocNode, Mark, MarkType, NodeType, block, empty_doc, text_node
from mdxdoc.core.registry import by_tag
from mdxdoc.core.utils.tokens import heading_level, text_content


logger = logging.getLogger(__name__)

Marks = tuple[Mark, ...]

WRAPPING_MARKS: dict[str, MarkType] = {
    'strong': MarkType.bold,
    'em':     MarkType.italic,
    's':      MarkType.strike,
}


# --- inline content ---

def add_mark(marks: Marks, mark: Mark) -> Marks:
    """Return marks with mark appended; a mark type already present is not added twice."""
    if any(m.type == mark.type for m in marks):
        return marks
    return marks + (mark,)


def _text(value: str, marks: Marks) -> DocNode:
    # marks arrive outermost first; text nodes list the innermost wrapper first
    return text_node(value, list(reversed(marks)))


def _merge_text(nodes: list[DocNode]) -> list[DocNode]:
    """Join adjacent text runs that carry the same marks."""
    merged: list[DocNode] = []
    for node in nodes:
        prev = merged[-1] if merged else None
        if (prev is not None and prev.type == node.type == NodeType.text.value
                and (prev.marks or []) == (node.marks or [])):
            merged[-1] = text_node(prev.text + node.text, prev.marks)
        else:
            merged.append(node)
    return merged


def _inline_node(node: SyntaxTreeNode, marks: Marks) -> list[DocNode]:
    kind = node.type
    if kind == 'text':
        return [_text(node.content, marks)] if node.content else []
    if kind in WRAPPING_MARKS:
        return _inline_nodes(node.children, add_mark(marks, Mark(type=WRAPPING_MARKS[kind].value)))
    if kind == 'link':
        link = Mark(type=MarkType.link.value, attrs={'href': str(node.attrGet('href') or '')})
        return _inline_nodes(node.children, add_mark(marks, link))
    if kind == 'code_inline':
        return [_text(node.content, add_mark(marks, Mark(type=MarkType.code.value)))]
    if kind == 'softbreak':
        return [_text('\n', marks)]
    if kind == 'hardbreak':
        return [DocNode(type=NodeType.hard_break.value)]
    # html_inline, nested images (alt text) and the like: keep their raw value as plain text
    if isinstance(node.content, str) and node.content:
        return [text_node(node.content)]
    return []


def _inline_nodes(nodes: list[SyntaxTreeNode], marks: Marks) -> list[DocNode]:
    result: list[DocNode] = []
    for node in nodes:
        result.extend(_inline_node(node, marks))
    return result


def convert_inline(nodes: list[SyntaxTreeNode], marks: Marks = ()) -> list[DocNode]:
    """Map phrasing nodes to a flat list of text/hardBreak nodes carrying marks."""
    return _merge_text(_inline_nodes(nodes, marks))


def _inline_children(node: SyntaxTreeNode) -> list[SyntaxTreeNode]:
    """Children of the inline token under a paragraph/heading node."""
    return [c for inline in node.children if inline.type == 'inline' for c in inline.children]


# --- blocks ---

def _blocks(node: SyntaxTreeNode) -> list[DocNode]:
    result: list[DocNode] = []
    for child in node.children:
        result.extend(convert_node(child))
    return result


def _is_blank(nodes: list[DocNode]) -> bool:
    return all(n.type == NodeType.text.value and not (n.text or '').strip() for n in nodes)


def _image(node: SyntaxTreeNode) -> DocNode:
    return block(NodeType.image.value, attrs={
        'src':   str(node.attrGet('src') or ''),
        'alt':   node.content or '',
        'title': node.attrGet('title') or None,
    })


def _paragraph(node: SyntaxTreeNode) -> list[DocNode]:
    """Convert a paragraph; images inside it become sibling image blocks."""
    result: list[DocNode] = []
    run: list[SyntaxTreeNode] = []
    has_image = False

    def flush() -> None:
        content = convert_inline(run)
        if content and not (has_image and _is_blank(content)):
            result.append(block(NodeType.paragraph.value, content))
        run.clear()

    for child in _inline_children(node):
        if child.type == 'image':
            has_image = True
            flush()
            result.append(_image(child))
        else:
            run.append(child)
    flush()
    return result or [block(NodeType.paragraph.value)]


def _heading(node: SyntaxTreeNode) -> list[DocNode]:
    return [block(
        NodeType.heading.value,
        convert_inline(_inline_children(node)),
        {'level': heading_level(node) or 1},
    )]


def _code(node: SyntaxTreeNode) -> list[DocNode]:
    info = node.info.strip() if node.type == 'fence' else ''
    code = node.content[:-1] if node.content.endswith('\n') else node.content
    return [DocNode(
        type=NodeType.code_block.value,
        attrs={'language': info.split()[0] if info else ''},
        content=[text_node(code)],
    )]


def _container(type_: NodeType) -> Callable[[SyntaxTreeNode], list[DocNode]]:
    """Handler for nodes whose children are blocks; an empty one gets an empty paragraph."""
    def handler(node: SyntaxTreeNode) -> list[DocNode]:
        return [block(type_.value, _blocks(node) or [block(NodeType.paragraph.value)])]
    return handler


def _list(type_: NodeType) -> Callable[[SyntaxTreeNode], list[DocNode]]:
    def handler(node: SyntaxTreeNode) -> list[DocNode]:
        return [block(type_.value, _blocks(node))]
    return handler


def _component(node: SyntaxTreeNode) -> list[DocNode]:
    """Convert a component tag through the registry; unknown tags leave a visible placeholder."""
    name = node.meta.get('name', '')
    component = by_tag(name)
    if component is None:
        logger.debug("Unknown component <%s>; keeping a placeholder", name)
        return [block(NodeType.paragraph.value, [text_node(f"<{name} />")])]

    body = text_content(node) if component.body_attr else ''
    attrs = component.read_attrs(node.meta.get('attributes', []), body)
    if component.atomic:
        return [block(component.node_type, attrs=attrs)]
    return [block(component.node_type, _blocks(node) or [block(NodeType.paragraph.value)], attrs)]


def _raw_html(node: SyntaxTreeNode) -> list[DocNode]:
    """Keep a raw HTML block (lowercase tags, comments) as paragraph text."""
    raw = node.content.rstrip('\n')
    return [block(NodeType.paragraph.value, [text_node(raw)])] if raw.strip() else []


def _root(node: SyntaxTreeNode) -> list[DocNode]:
    return [block(NodeType.doc.value, _blocks(node))]


BLOCK_HANDLERS: dict[str, Callable[[SyntaxTreeNode], list[DocNode]]] = {
    'root':         _root,
    'paragraph':    _paragraph,
    'heading':      _heading,
    'fence':        _code,
    'code_block':   _code,
    'blockquote':   _container(NodeType.blockquote),
    'bullet_list':  _list(NodeType.bullet_list),
    'ordered_list': _list(NodeType.ordered_list),
    'list_item':    _container(NodeType.list_item),
    'hr':           lambda node: [block(NodeType.horizontal_rule.value)],
    'image':        lambda node: [_image(node)],
    'jsx_flow':     _component,
    'html_block':   _raw_html,
}


def convert_node(node: SyntaxTreeNode) -> list[DocNode]:
    """Convert one syntax tree node to zero or more document nodes (unsupported -> [])."""
    handler = BLOCK_HANDLERS.get(node.type)
    return handler(node) if handler else []


def mdx_to_doc(text: str, preset: str = DEFAULT_PRESET) -> DocNode:
    """Parse MDX-like text into an editor document.

    Never raises for string input: blank text gives a single empty paragraph and
    a parser failure gives one paragraph holding the raw text unchanged.
    """
    if not text or not text.strip():
        return empty_doc()
    try:
        doc = convert_node(parse_markdown(text, preset))[0]
    except Exception:
        logger.warning("Failed to parse MDX; keeping the raw text as one paragraph", exc_info=True)
        return block(NodeType.doc.value, [block(NodeType.paragraph.value, [text_node(text)])])
    return doc if doc.content else empty_doc()
