"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdxdoc.cli.commands import check_cmd, new_cmd, parse_cmd, serialize_cmd


app = typer.Typer(name="mdxdoc", no_args_is_help=True, help="MDX <-> editor document conversion")

app.command(name="parse")(parse_cmd)
app.command(name="serialize")(serialize_cmd)
app.command(name="check")(check_cmd)
app.command(name="new")(new_cmd)
