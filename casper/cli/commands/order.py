"""Order command: show the component processing order."""

import typer

from ...components import build_registry
from ...resolution import ConfigurationError
from ..app import app, console, get_json_mode
from ..utils import Output, ExitCode


def _flags(descriptor) -> str:
    flags = []
    if descriptor.hoist:
        flags.append("hoist")
    if descriptor.sink:
        flags.append("sink")
    if descriptor.suppress_type:
        flags.append("no-type")
    return ", ".join(flags)


@app.command("order")
def order_command():
    """Show the order built-in components are processed in."""
    out = Output(console=console, json_mode=get_json_mode())

    try:
        components = build_registry().order()
    except ConfigurationError as e:
        out.error(str(e), exit_code=ExitCode.CONFIGURATION_ERROR)
        raise typer.Exit(out.finish())

    out.table(
        "Component order",
        ["#", "Component", "Requires", "Waits for", "Flags"],
        [
            [
                str(i),
                d.key,
                ", ".join(d.requires),
                ", ".join(d.wait_for),
                _flags(d),
            ]
            for i, d in enumerate(components, 1)
        ],
        key="components",
    )
    raise typer.Exit(out.finish())
