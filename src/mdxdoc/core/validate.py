"""Structural checks for editor documents"""

from mdxdoc.core.models import DocNode, NodeType
from mdxdoc.core.registry import by_node_type


INLINE_TYPES = {NodeType.text.value, NodeType.hard_break.value}


def _check(node: DocNode, path: str, problems: list[str]) -> None:
    kind = node.type
    children = node.children

    if kind == NodeType.doc.value:
        problems.append(f"{path}: nested doc node")
    elif kind == NodeType.heading.value:
        level = node.attr("level")
        if not isinstance(level, int) or isinstance(level, bool) or level < 1:
            problems.append(f"{path}: heading level must be an integer >= 1, got {level!r}")
    elif kind == NodeType.code_block.value:
        if not isinstance(node.attr("language", ""), str):
            problems.append(f"{path}: codeBlock language must be a string")
        if len(children) != 1 or children[0].type != NodeType.text.value:
            problems.append(f"{path}: codeBlock must hold exactly one text node")
    elif kind == NodeType.text.value:
        types = [m.type for m in node.marks or []]
        if len(types) != len(set(types)):
            problems.append(f"{path}: duplicate marks {types}")

    component = by_node_type(kind)
    if component is not None:
        if component.atomic and children:
            problems.append(f"{path}: {kind} is atomic and cannot have children")
        if not component.atomic and not children:
            problems.append(f"{path}: {kind} needs at least one block child")
        for name, allowed in component.choices.items():
            if node.attr(name, component.attrs[name]) not in allowed:
                problems.append(f"{path}: {kind}.{name} must be one of {', '.join(allowed)}")

    for i, child in enumerate(children):
        _check(child, f"{path}.{child.type}[{i}]", problems)


def validate_doc(doc: DocNode) -> list[str]:
    """Return a list of invariant violations in doc (empty when the document is well formed)."""
    if doc.type != NodeType.doc.value:
        return [f"root must be a doc node, got {doc.type!r}"]
    problems: list[str] = []
    if not doc.children:
        problems.append("doc: needs at least one block child")
    for i, child in enumerate(doc.children):
        path = f"doc.{child.type}[{i}]"
        if child.type in INLINE_TYPES:
            problems.append(f"{path}: inline node at the document root")
        _check(child, path, problems)
    return problems
