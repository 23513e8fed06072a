"""Get command: print one resolved entity."""

import json
from pathlib import Path

import typer

from ...catalog import Casper
from ...config import get_config
from ..app import app, console, get_json_mode
from ..utils import Output, ExitCode


def _load_catalog(manifest: Path | None) -> Casper:
    if manifest is not None:
        return Casper.from_json(manifest.read_text())
    config = get_config()
    return Casper.parse(config.data_dirs, **config.builder_options())


@app.command("get")
def get_command(
    parts: list[str] = typer.Argument(
        ..., help="Entity id, or its dot-separated parts (weapon longsword)"
    ),
    manifest: Path | None = typer.Option(
        None, "--manifest", "-m", help="Read a catalog written by 'casper build -o'"
    ),
):
    """
    Print a resolved entity as JSON.

    Without --manifest the configured data directories are resolved first.

    EXAMPLES:
        casper get weapon.longsword
        casper get weapon longsword -m manifest.json
    """
    out = Output(console=console, json_mode=get_json_mode())
    entity_id = ".".join(parts)

    if manifest is not None and not manifest.exists():
        out.error(f"Manifest not found: {manifest}", exit_code=ExitCode.NOT_FOUND)
        raise typer.Exit(out.finish())

    try:
        catalog = _load_catalog(manifest)
    except ValueError as e:
        out.error(str(e), exit_code=ExitCode.RESOLUTION_ERROR)
        raise typer.Exit(out.finish())

    entity = catalog.get(entity_id)
    if entity is None:
        out.error(f"No entity with id {entity_id}", exit_code=ExitCode.NOT_FOUND)
        raise typer.Exit(out.finish())

    if out.json_mode:
        out.set_data("id", entity_id)
        out.set_data("entity", entity)
    else:
        console.print_json(json.dumps(entity, ensure_ascii=False))
    raise typer.Exit(out.finish())
