"""Pipeline step functions: parse, serialize, and round-trip check orchestration"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from mdxdoc.core.convert import mdx_to_doc
from mdxdoc.core.export import write_doc
from mdxdoc.core.models import StagedDoc
from mdxdoc.core.parse import discover_files, parse_file
from mdxdoc.core.serialize import doc_to_mdx
from mdxdoc.core.utils.diff import unified_diff
from mdxdoc.core.validate import validate_doc


logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Round-trip outcome for one source file."""
    path: Path
    stable: bool
    problems: list[str] = field(default_factory=list)    # document invariant violations
    diff: list[str] = field(default_factory=list)        # first vs second serialization

    @property
    def ok(self) -> bool:
        return self.stable and not self.problems


def run_parse(
    path: str,
    parser_config: str,
    output_dir: Path,
    indent: int = 2,
    ) -> list[tuple[Path, Path]]:
    """Convert .md/.mdx files under path to StagedDoc JSON. Returns (source_path, json_file) pairs."""
    output_dir.mkdir(parents=True, exist_ok=True)
    results = []
    for p in discover_files(Path(path)):
        try:
            parsed = parse_file(p, parser_config)
            staged = StagedDoc(
                slug=parsed.slug, path=str(p), frontmatter=parsed.frontmatter,
                source_hash=parsed.hash, doc=parsed.doc,
            )
            out_file = output_dir / f"{staged.slug}.json"
            out_file.write_text(
                json.dumps(staged.to_json(), indent=indent or None, ensure_ascii=False), encoding='utf-8'
            )
            results.append((p, out_file))
        except Exception as e:
            raise RuntimeError(f"Failed to parse {p}: {e}") from e
    return results


def run_serialize(
    path: str,
    output_dir: Path,
    fmt: str = 'mdx',
    ) -> list[tuple[Path, Path]]:
    """Write StagedDoc JSON files under path back to MDX. Returns (json_file, mdx_file) pairs."""
    results = []
    for p in discover_files(Path(path), {'.json'}):
        try:
            staged = StagedDoc.model_validate_json(p.read_text(encoding='utf-8'))
            results.append((p, write_doc(staged, output_dir, fmt)))
        except Exception as e:
            raise RuntimeError(f"Failed to serialize {p}: {e}") from e
    return results


def check_file(p: Path, parser_config: str) -> CheckResult:
    """Parse, serialize, re-parse and re-serialize one file; the text and tree must not drift."""
    parsed = parse_file(p, parser_config)
    first = doc_to_mdx(parsed.doc)
    reparsed = mdx_to_doc(first, parser_config)
    second = doc_to_mdx(reparsed)
    stable = first == second and reparsed.to_json() == parsed.doc.to_json()
    if not stable:
        logger.info("Round trip of %s is not stable", p)
    return CheckResult(
        path=p,
        stable=stable,
        problems=validate_doc(parsed.doc),
        diff=unified_diff(first, second, from_label=f"a/{p.name}", to_label=f"b/{p.name}"),
    )


def run_check(path: str, parser_config: str) -> list[CheckResult]:
    """Round-trip every .md/.mdx file under path."""
    results = []
    for p in discover_files(Path(path)):
        try:
            results.append(check_file(p, parser_config))
        except Exception as e:
            raise RuntimeError(f"Failed to check {p}: {e}") from e
    return results
