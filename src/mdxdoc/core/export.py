"""Export: rebuild MDX files (frontmatter + serialized body) from staged documents"""

import logging
from pathlib import Path
from typing import Any

import yaml

from mdxdoc.core.models import StagedDoc
from mdxdoc.core.serialize import doc_to_mdx


logger = logging.getLogger(__name__)


def build_mdx(frontmatter: dict[str, Any], body: str) -> str:
    """Return body with a YAML frontmatter block prepended (no block when frontmatter is empty)."""
    if not frontmatter:
        return f"{body}\n" if body else ""
    header = yaml.dump(frontmatter, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{header}---\n\n{body}\n" if body else f"---\n{header}---\n"


def write_doc(staged: StagedDoc, output_dir: Path, fmt: str = 'mdx') -> Path:
    """Serialize a staged document and write it to output_dir / <slug>.<fmt>."""
    output_dir.mkdir(parents=True, exist_ok=True)
    out_file = output_dir / f"{staged.slug}.{fmt}"
    out_file.write_text(build_mdx(staged.frontmatter, doc_to_mdx(staged.doc)), encoding='utf-8')
    logger.debug("Wrote %s", out_file)
    return out_file
