"""Editor document tree models and the staging contract for converted files"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel


class NodeType(str, Enum):
    """Node types the converter produces and the serializer understands"""
    doc = "doc"
    paragraph = "paragraph"
    heading = "heading"
    text = "text"
    code_block = "codeBlock"
    blockquote = "blockquote"
    bullet_list = "bulletList"
    ordered_list = "orderedList"
    list_item = "listItem"
    horizontal_rule = "horizontalRule"
    image = "image"
    hard_break = "hardBreak"
    blog_post_preview = "blogPostPreview"
    youtube = "youtube"
    callout = "callout"
    code_playground = "codePlayground"


class MarkType(str, Enum):
    """Inline decorations attached to text runs"""
    bold = "bold"
    italic = "italic"
    code = "code"
    link = "link"
    strike = "strike"


class Mark(BaseModel):
    type: str
    attrs: Optional[dict[str, Any]] = None

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        if self.attrs is not None:
            data["attrs"] = dict(self.attrs)
        return data


class DocNode(BaseModel):
    """One node of the editor document tree (TipTap/ProseMirror JSON shape).

    `type` is kept as a plain string so documents written by a newer editor
    with unknown node types still load; the known set is NodeType.
    """
    type: str
    attrs:   Optional[dict[str, Any]] = None
    content: Optional[list["DocNode"]] = None
    text:    Optional[str] = None
    marks:   Optional[list[Mark]] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "DocNode":
        return cls.model_validate(data)

    def to_json(self) -> dict[str, Any]:
        """Return the editor JSON form, omitting unset fields but keeping None-valued attrs."""
        data: dict[str, Any] = {"type": self.type}
        if self.attrs is not None:
            data["attrs"] = dict(self.attrs)
        if self.content is not None:
            data["content"] = [c.to_json() for c in self.content]
        if self.text is not None:
            data["text"] = self.text
        if self.marks:
            data["marks"] = [m.to_json() for m in self.marks]
        return data

    def attr(self, name: str, default: Any = None) -> Any:
        """Return attrs[name], or default when the attribute is missing or None."""
        value = (self.attrs or {}).get(name)
        return default if value is None else value

    @property
    def children(self) -> list["DocNode"]:
        return self.content or []


DocNode.model_rebuild()


def text_node(text: str, marks: Optional[list[Mark]] = None) -> DocNode:
    return DocNode(type=NodeType.text.value, text=text, marks=marks or None)


def block(type_: str, content: Optional[list[DocNode]] = None, attrs: Optional[dict[str, Any]] = None) -> DocNode:
    """Build a block node; an empty content list is left unset like the editor does."""
    return DocNode(type=type_, attrs=attrs, content=content or None)


def empty_doc() -> DocNode:
    """The minimal document the editor can render: one empty paragraph."""
    return block(NodeType.doc.value, [block(NodeType.paragraph.value)])


class StagedDoc(BaseModel):
    """Staging contract: a converted source file written by parse, read by serialize."""
    slug: str
    path: str
    frontmatter: dict[str, Any] = {}
    source_hash: str = ""      # sha256 of the source file at parse time
    doc: DocNode

    def to_json(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", exclude={"doc"})    # frontmatter may hold dates
        data["doc"] = self.doc.to_json()
        return data


@dataclass
class ParsedDoc:
    """Internal parse result for one source file; not persisted."""
    path:         Path
    slug:         str
    raw_markdown: str          # full file content (includes frontmatter)
    markdown:     str          # body only (frontmatter stripped)
    hash:         str
    frontmatter:  dict[str, Any]
    doc:          DocNode
