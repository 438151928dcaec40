"""markdown-it block rule for MDX component tags (<Name attr="v" />, <Name>...</Name>)"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock


_TAG_NAME_RE  = re.compile(r"[A-Z][\w.:-]*")
_ATTR_NAME_RE = re.compile(r"[A-Za-z_$][\w$.:-]*")
_FENCE_RE     = re.compile(r"`{3,}|~{3,}")


class MdxSyntaxError(ValueError):
    """Raised for component markup MDX itself would reject (e.g. an unclosed tag)."""


@dataclass(frozen=True)
class JsxTag:
    name: str
    attributes: tuple[tuple[str, Optional[str]], ...]
    self_closing: bool
    end: int        # index just past the closing '>'


def _skip_ws(src: str, pos: int) -> int:
    while pos < len(src) and src[pos] in " \t":
        pos += 1
    return pos


def _skip_expression(src: str, pos: int) -> Optional[int]:
    """Return the index past the balanced {...} starting at pos, or None."""
    depth = 0
    quote = None
    for i in range(pos, len(src)):
        ch = src[i]
        if quote:
            if ch == quote and src[i - 1] != "\\":
                quote = None
        elif ch in "\"'`":
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
    return None


def scan_tag(src: str, pos: int = 0) -> Optional[JsxTag]:
    """Scan an opening or self-closing component tag at src[pos].

    Attribute values are the string literal, or None for bare attributes and
    {expression} values (which are not literals). Spread attributes are skipped.
    """
    if not src.startswith("<", pos):
        return None
    m = _TAG_NAME_RE.match(src, pos + 1)
    if not m:
        return None
    name = m.group()
    attrs: list[tuple[str, Optional[str]]] = []
    i = m.end()
    while True:
        j = _skip_ws(src, i)
        if src.startswith("/>", j):
            return JsxTag(name, tuple(attrs), True, j + 2)
        if src.startswith(">", j):
            return JsxTag(name, tuple(attrs), False, j + 1)
        if j == i:
            return None
        if src.startswith("{", j):
            end = _skip_expression(src, j)
            if end is None:
                return None
            i = end
            continue
        am = _ATTR_NAME_RE.match(src, j)
        if not am:
            return None
        k = _skip_ws(src, am.end())
        if not src.startswith("=", k):
            attrs.append((am.group(), None))
            i = am.end()
            continue
        k = _skip_ws(src, k + 1)
        if k < len(src) and src[k] in "\"'":
            close = src.find(src[k], k + 1)
            if close < 0:
                return None
            attrs.append((am.group(), src[k + 1:close]))
            i = close + 1
        elif src.startswith("{", k):
            end = _skip_expression(src, k)
            if end is None:
                return None
            attrs.append((am.group(), None))
            i = end
        else:
            return None


def _closing_re(name: str) -> re.Pattern:
    return re.compile(rf"</{re.escape(name)}\s*>")


def _line_text(state: StateBlock, line: int) -> str:
    return state.src[state.bMarks[line] + state.tShift[line]:state.eMarks[line]]


def _find_close(state: StateBlock, tag: JsxTag, start: int, end: int, fences: bool = True) -> Optional[int]:
    """Return the line holding the matching </Name>, honouring same-name nesting.

    With fences set, lines inside fenced code are skipped, so an example of
    the tag in a fence neither opens nor closes anything.
    """
    closing = _closing_re(tag.name)
    depth = 0
    fence = None
    for line in range(start + 1, end):
        if state.sCount[line] < state.blkIndent and not state.isEmpty(line):
            return None
        text = _line_text(state, line).rstrip()
        m = _FENCE_RE.match(text) if fences else None
        if fence:
            if m and m.group()[0] == fence[0] and len(m.group()) >= len(fence) and m.end() == len(text):
                fence = None
            continue
        if m:
            fence = m.group()
            continue
        if closing.fullmatch(text):
            if depth == 0:
                return line
            depth -= 1
            continue
        inner = scan_tag(text)
        if inner and inner.name == tag.name and not inner.self_closing and not text[inner.end:].strip():
            depth += 1
    return None


def _open(state: StateBlock, tag: JsxTag, raw: str, start: int, end: int, nesting: int):
    token = state.push("jsx_flow_open" if nesting else "jsx_flow", "", nesting)
    token.info = tag.name
    token.markup = raw
    token.map = [start, end]
    token.meta = {"name": tag.name, "attributes": list(tag.attributes)}
    return token


def _push_inline(state: StateBlock, content: str, line: int) -> None:
    token = state.push("paragraph_open", "p", 1)
    token.map = [line, line + 1]
    token = state.push("inline", "", 0)
    token.content = content
    token.map = [line, line + 1]
    token.children = []
    state.push("paragraph_close", "p", -1)


def jsx_plugin(md: MarkdownIt, text_tags: Iterable[str] = ()) -> None:
    """Register the component-tag block rule on md.

    text_tags -- component names whose body is kept verbatim as a jsx_text token
    instead of being parsed as markdown blocks.
    """
    text_tags = frozenset(text_tags)

    def jsx_flow(state: StateBlock, startLine: int, endLine: int, silent: bool) -> bool:
        if state.sCount[startLine] - state.blkIndent >= 4:
            return False
        text = _line_text(state, startLine)
        tag = scan_tag(text)
        if tag is None:
            return False
        raw, rest = text[:tag.end], text[tag.end:].strip()

        if tag.self_closing:
            if rest:
                return False
            if not silent:
                _open(state, tag, raw, startLine, startLine + 1, 0)
                state.line = startLine + 1
            return True

        # single line: <Name>body</Name>
        if rest:
            m = re.fullmatch(rf"(.*?){_closing_re(tag.name).pattern}", rest, re.DOTALL)
            if not m:
                return False
            if silent:
                return True
            _open(state, tag, raw, startLine, startLine + 1, 1)
            inner = m.group(1)
            if tag.name in text_tags:
                state.push("jsx_text", "", 0).content = inner
            elif inner.strip():
                _push_inline(state, inner.strip(), startLine)
            state.push("jsx_flow_close", "", -1)
            state.line = startLine + 1
            return True

        if silent:
            return True
        close_line = _find_close(state, tag, startLine, endLine, fences=tag.name not in text_tags)
        if close_line is None:
            raise MdxSyntaxError(f"Expected a closing tag for <{tag.name}> (line {startLine + 1})")

        _open(state, tag, raw, startLine, close_line + 1, 1)
        if tag.name in text_tags:
            token = state.push("jsx_text", "", 0)
            token.content = state.getLines(startLine + 1, close_line, state.blkIndent, False)
            token.map = [startLine + 1, close_line]
        else:
            old_parent, old_line_max = state.parentType, state.lineMax
            state.parentType = "jsx"
            state.lineMax = close_line
            state.md.block.tokenize(state, startLine + 1, close_line)
            state.parentType, state.lineMax = old_parent, old_line_max
        state.push("jsx_flow_close", "", -1)
        state.line = close_line + 1
        return True

    md.block.ruler.before(
        "html_block", "jsx_flow", jsx_flow,
        {"alt": ["paragraph", "reference", "blockquote", "list"]},
    )
