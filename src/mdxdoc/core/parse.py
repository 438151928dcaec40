"""File discovery, frontmatter extraction, and MDX -> document conversion for source files"""

import hashlib
import logging
import re
from pathlib import Path
from typing import Any

import yaml

from mdxdoc.core.convert import mdx_to_doc
from mdxdoc.core.markdown import DEFAULT_PRESET
from mdxdoc.core.models import ParsedDoc


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
MD_EXTENSIONS = {'.md', '.mdx'}


def slugify(text: str) -> str:
    """Lowercase text and collapse anything that is not a word character into single hyphens."""
    text = re.sub(r'[^\w\s-]', '', text.lower())
    return re.sub(r'[\s_-]+', '-', text).strip('-')


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def discover_files(path: Path, suffixes: set[str] = MD_EXTENSIONS) -> list[Path]:
    """Return sorted files with the given suffixes under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in suffixes else []
    return sorted(p for p in path.rglob('*') if p.suffix in suffixes)


def parse_text(raw: str, path: Path, parser_config: str = DEFAULT_PRESET) -> ParsedDoc:
    """Convert raw file content (frontmatter + MDX body) into a ParsedDoc."""
    frontmatter, body = _strip_frontmatter(raw)
    slug = str(frontmatter.get('slug') or slugify(path.stem))
    return ParsedDoc(
        path=path,
        slug=slug,
        raw_markdown=raw,
        markdown=body,
        hash=hashlib.sha256(raw.encode('utf-8')).hexdigest(),
        frontmatter=frontmatter,
        doc=mdx_to_doc(body, parser_config),
    )


def parse_file(path: Path, parser_config: str = DEFAULT_PRESET) -> ParsedDoc:
    """Parse a single .md/.mdx file into a ParsedDoc with its editor document."""
    logger.debug("Parsing %s with preset %s", path, parser_config)
    return parse_text(path.read_text(encoding='utf-8'), path, parser_config)
