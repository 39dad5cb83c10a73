"""CLI entrypoint: Typer app definition and command registration"""

from typing import Annotated, Optional
from pathlib import Path

import typer

from mdblog.cli.commands import build_cmd, lint_cmd, list_cmd, render_cmd, show_cmd
from mdblog.logging import configure_logging


app = typer.Typer(name="mdblog", no_args_is_help=True, help="Static blog content store, linter, and page renderer")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log errors to the console")] = False,
    log_file: Annotated[Optional[Path], typer.Option("--log-file", help="Also write logs to this file")] = None,
    ):
    configure_logging(verbose=verbose, quiet=quiet, log_file=log_file)


app.command(name="list")(list_cmd)
app.command(name="show")(show_cmd)
app.command(name="lint")(lint_cmd)
app.command(name="render")(render_cmd)
app.command(name="build")(build_cmd)
