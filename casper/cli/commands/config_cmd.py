"""Config command for viewing casper configuration."""

import typer

from ..app import app, console, get_json_mode
from ..utils import Output
from ...config import get_config, config_file_path


@app.command("config")
def config_command(
    action: str = typer.Argument("show", help="Action: show"),
):
    """View the resolved casper configuration.

    Values come from ./casper.yaml (or $CASPER_CONFIG), overridden by
    CASPER_* environment variables.

    Examples:
        casper config show
        casper --json config show
    """
    if action != "show":
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show")
        raise typer.Exit(1)

    out = Output(console=console, json_mode=get_json_mode())
    config = get_config()
    path = config_file_path()

    if out.json_mode:
        out.set_data("config", config.to_dict())
        out.set_data("config_file", str(path))
        raise typer.Exit(out.finish())

    console.print()
    console.print("[bold]Casper Configuration[/bold]")
    console.print()
    console.print(f"  data_dirs     = {', '.join(config.data_dirs)}")
    console.print(f"  error_logs    = {config.error_logs}")
    console.print(f"  brief_length  = {config.brief_length}")
    console.print(f"  strict_fields = {config.strict_fields}")
    console.print()
    found = "" if path.exists() else " [dim](not found, using defaults)[/dim]"
    console.print(f"[dim]Config file: {path}[/dim]{found}")
    raise typer.Exit(out.finish())
