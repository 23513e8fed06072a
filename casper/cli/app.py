"""The casper typer app, its consoles, and options shared by every command."""

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="casper",
    help="Resolve game-reference YAML data into a cross-referenced manifest.",
    no_args_is_help=True,
)

# Results go to stdout; logs and error reports go to stderr
console = Console()
err_console = Console(stderr=True)

_json_mode = False


def get_json_mode() -> bool:
    """Whether --json was passed to this invocation."""
    return _json_mode


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Route casper's loggers through rich on stderr.

    WARNING by default (one line per failed record), INFO with --verbose,
    DEBUG with --debug.
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    logging.getLogger("casper").setLevel(level)


def _print_version(value: bool) -> None:
    if not value:
        return
    from .. import __version__

    print(f"casper {__version__}")
    raise typer.Exit()


@app.callback()
def main_callback(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print one JSON document instead of rich text"),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log load and resolution progress")
    ] = False,
    debug: Annotated[
        bool, typer.Option("--debug", help="Log component order and every pass")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit",
            callback=_print_version,
            is_eager=True,
        ),
    ] = False,
):
    """Casper: entity resolution for game-reference data."""
    global _json_mode
    _json_mode = json_output
    setup_logging(verbose=verbose, debug=debug)


# Import commands to register them with the app
from .commands import (  # noqa: E402, F401
    build,
    get,
    order,
    config_cmd,
)
