"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdxdoc.config import Settings, load_config
from mdxdoc.core.pipeline import run_check, run_parse, run_serialize
from mdxdoc.core.registry import COMPONENTS, by_node_type
from mdxdoc.logging_utils import configure_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and apply its log level."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    configure_logging(settings.log_level)
    return settings


def _parse_attrs(pairs: list[str]) -> dict[str, str]:
    attrs = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            _fail(f"Invalid --attr {pair!r}; expected name=value")
        attrs[name] = value
    return attrs


def parse_cmd(
    path: Annotated[str, typer.Argument(help="File or directory of .md/.mdx sources")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    indent: Annotated[Optional[int], typer.Option("--indent", help="JSON indent; 0 = compact")] = None,
    ):
    """Convert MDX sources to editor document JSON."""
    settings = _settings(overrides={"output_dir": out, "parser_config": parser, "json_indent": indent})
    output_dir = Path(settings.output_dir)
    try:
        results = run_parse(path, settings.parser_config, output_dir, settings.json_indent)
    except RuntimeError as e:
        _fail(str(e))
    for src, out_file in results:
        typer.echo(f"  {src} -> {out_file}")
    typer.echo(f"Parsed {len(results)} document(s) to {output_dir}/")


def serialize_cmd(
    path: Annotated[str, typer.Argument(help="File or directory of document JSON files")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    ):
    """Write editor document JSON back to MDX."""
    settings = _settings(overrides={"output_dir": out})
    output_dir = Path(settings.output_dir)
    try:
        results = run_serialize(path, output_dir)
    except RuntimeError as e:
        _fail(str(e))
    for src, out_file in results:
        typer.echo(f"  {src} -> {out_file}")
    typer.echo(f"Serialized {len(results)} document(s) to {output_dir}/")


def check_cmd(
    path: Annotated[str, typer.Argument(help="File or directory of .md/.mdx sources")],
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    diff: Annotated[bool, typer.Option("--diff", help="Print a diff for unstable documents")] = False,
    ):
    """Check that open -> save -> open leaves every document unchanged."""
    settings = _settings(overrides={"parser_config": parser})
    try:
        results = run_check(path, settings.parser_config)
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo("No .md/.mdx files found.")
        raise typer.Exit(1)

    for r in results:
        status = "ok" if r.ok else ("unstable" if not r.stable else "invalid")
        typer.echo(f"  {status}: {r.path}")
        for problem in r.problems:
            typer.echo(f"    {problem}")
        if diff and r.diff:
            typer.echo("".join(r.diff).rstrip("\n"))

    bad = [r for r in results if not r.ok]
    typer.echo(f"Checked {len(results)} document(s) - {len(results) - len(bad)} ok, {len(bad)} failing")
    if bad:
        raise typer.Exit(1)


def new_cmd(
    node_type: Annotated[str, typer.Argument(help="Component node type, e.g. callout or youtube")],
    attr: Annotated[Optional[list[str]], typer.Option("--attr", help="Attribute as name=value; repeatable")] = None,
    ):
    """Print the JSON of a freshly inserted component node."""
    settings = _settings()
    component = by_node_type(node_type)
    if component is None:
        _fail(f"Unknown component {node_type!r}; expected one of {', '.join(c.node_type for c in COMPONENTS)}")
    try:
        node = component.create(**_parse_attrs(attr or []))
    except ValueError as e:
        _fail(str(e))
    typer.echo(json.dumps(node.to_json(), indent=settings.json_indent or None, ensure_ascii=False))
