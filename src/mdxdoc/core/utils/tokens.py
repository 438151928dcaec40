"""Shared markdown-it syntax tree utilities"""

from markdown_it.tree import SyntaxTreeNode


def heading_level(node: SyntaxTreeNode) -> int | None:
    """Return the heading level (1-6) for a heading node, else None."""
    if node.type == 'heading' and node.tag and node.tag[0] == 'h' and node.tag[1:].isdigit():
        return int(node.tag[1:])
    return None


def text_content(node: SyntaxTreeNode) -> str:
    """Concatenate the raw text of every text-bearing descendant of node."""
    if node.type in ('text', 'jsx_text', 'code_inline', 'fence', 'code_block'):
        return node.content
    if node.type == 'softbreak':
        return '\n'
    return ''.join(text_content(child) for child in node.children)
