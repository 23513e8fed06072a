"""Build command: load data directories and resolve them into a manifest."""

from collections import Counter
from pathlib import Path

import typer

from ...catalog import Casper
from ...config import get_config
from ...loader import build_manifest
from ...resolution import ConfigurationError
from ..app import app, console, err_console, get_json_mode
from ..utils import Output, ExitCode


@app.command("build")
def build_command(
    data_dirs: list[Path] | None = typer.Argument(
        None, help="Data directories or files (default: configured data_dirs)"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the resolved catalog (manifest + hash) as JSON"
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Reject records with root fields no component handles"
    ),
    fail_on_error: bool = typer.Option(
        False, "--fail-on-error", help="Exit with code 1 if any record failed"
    ),
):
    """
    Resolve every record under the data directories.

    Failed records are left out of the manifest and reported; the rest of
    the data still resolves.

    EXIT CODES:
        0 = Success (errors are reported but tolerated)
        1 = Records failed and --fail-on-error was given
        2 = The component registry is invalid
        3 = A data directory does not exist

    EXAMPLES:
        casper build ./data -o manifest.json
        casper build ./core ./homebrew --strict --fail-on-error
    """
    out = Output(console=console, err_console=err_console, json_mode=get_json_mode())
    config = get_config()

    dirs = list(data_dirs) if data_dirs else [Path(d) for d in config.data_dirs]
    missing = [d for d in dirs if not d.exists()]
    if missing:
        for d in missing:
            out.error(f"Data directory not found: {d}", exit_code=ExitCode.NOT_FOUND)
        raise typer.Exit(out.finish())

    options = config.builder_options()
    if strict:
        options["strict_fields"] = True

    try:
        result = build_manifest(dirs, **options)
    except ConfigurationError as e:
        out.error(f"Invalid component registry: {e}", exit_code=ExitCode.CONFIGURATION_ERROR)
        raise typer.Exit(out.finish())

    catalog = Casper.from_result(result)
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(catalog.to_json(indent=2) + "\n")

    out.success(
        f"Resolved {len(result.manifest)} entities "
        f"({len(result.errors)} with errors), version {catalog.hash[:12]}",
        entities=len(result.manifest),
        failed=len(result.errors),
        hash=catalog.hash,
    )
    if output is not None:
        out.success(f"Wrote {output}", output=str(output))

    types = Counter(
        entity["type"] for entity in result.manifest.entities() if entity.has("type")
    )
    out.table(
        "Entity types",
        ["Type", "Count"],
        [[t, str(n)] for t, n in sorted(types.items())],
        key="types",
    )

    # The report file is rewritten on every build, even when it is empty
    if config.error_logs == "stderr":
        out.error_report(result.errors)
    else:
        result.errors.write(config.error_logs)
        out.set_data("error_log", config.error_logs)
        if result.errors:
            out.warning(f"{len(result.errors)} entities with errors, see {config.error_logs}")

    if result.errors and fail_on_error:
        out.error(
            f"{len(result.errors)} entities failed to resolve",
            exit_code=ExitCode.RESOLUTION_ERROR,
        )
    raise typer.Exit(out.finish())
