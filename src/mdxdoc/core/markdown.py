"""Markdown parsing: markdown-it configured for MDX component tags"""

from functools import lru_cache

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from mdxdoc.core.jsx import jsx_plugin
from mdxdoc.core.registry import text_body_tags


DEFAULT_PRESET = "gfm-like"


@lru_cache(maxsize=None)
def make_parser(preset: str = DEFAULT_PRESET) -> MarkdownIt:
    """Build (once per preset) a MarkdownIt instance with the component-tag rule."""
    md = MarkdownIt(preset, options_update={"linkify": False, "html": True})
    md.enable("strikethrough", ignoreInvalid=True)
    # no table node in the editor; pipe rows stay paragraph text
    md.disable("table", ignoreInvalid=True)
    jsx_plugin(md, text_tags=text_body_tags())
    return md


def parse_markdown(text: str, preset: str = DEFAULT_PRESET) -> SyntaxTreeNode:
    """Parse text into a markdown syntax tree."""
    return SyntaxTreeNode(make_parser(preset).parse(text))
