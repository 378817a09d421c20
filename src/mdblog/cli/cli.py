"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdblog.cli.commands import audit_cmd, build_cmd, toc_cmd


app = typer.Typer(name="mdblog", no_args_is_help=True, help="Markdown blog static site builder")

app.command(name="build")(build_cmd)
app.command(name="audit")(audit_cmd)
app.command(name="toc")(toc_cmd)
