"""Output handling shared by the casper commands.

Every command writes through an Output instance, which renders either:
- rich text for a terminal (default), with error reports on stderr
- a single JSON document on stdout (--json), for scripts and CI

Example:
    out = Output(console=console, json_mode=get_json_mode())
    out.success("Resolved 120 entities", entities=120)
    raise typer.Exit(out.finish())
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr
from rich.console import Console
from rich.table import Table

from ..core.models import ErrorReport


class ExitCode:
    """Process exit codes.

        0 = Success
        1 = Records failed to resolve (only with --fail-on-error)
        2 = Invalid component registry (dependency cycle, unknown dependency)
        3 = Data directory, manifest file or entity not found
    """

    SUCCESS = 0
    RESOLUTION_ERROR = 1
    CONFIGURATION_ERROR = 2
    NOT_FOUND = 3


class Output(BaseModel):
    """Collects a command's results and renders them once, in either mode.

    Human mode prints as it goes. JSON mode accumulates everything into one
    payload that ``finish()`` prints, so stdout stays machine-readable.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    console: Console
    err_console: Console | None = None
    json_mode: bool = False

    _payload: dict[str, Any] = PrivateAttr(default_factory=dict)
    _exit_code: int = PrivateAttr(default=ExitCode.SUCCESS)

    def model_post_init(self, __context: Any) -> None:
        self._payload = {"status": "success", "warnings": [], "errors": []}

    @property
    def exit_code(self) -> int:
        return self._exit_code

    def success(self, message: str, **data: Any) -> None:
        """Report a result; ``data`` only appears in JSON mode."""
        if self.json_mode:
            self._payload.update(data)
        else:
            self.console.print(f"[green]✓[/green] {message}")

    def warning(self, message: str) -> None:
        if self.json_mode:
            self._payload["warnings"].append(message)
        else:
            self.console.print(f"[yellow]⚠[/yellow] {message}")

    def error(self, message: str, *, exit_code: int = ExitCode.RESOLUTION_ERROR) -> None:
        """Report a failure; the last error's exit code wins."""
        self._exit_code = exit_code
        self._payload["status"] = "error"
        if self.json_mode:
            self._payload["errors"].append(message)
        else:
            self.console.print(f"[red]✗[/red] {message}")

    def table(self, title: str, columns: list[str], rows: list[list[str]], *, key: str) -> None:
        """Print a table, or store its rows under ``key`` as a list of dicts."""
        if self.json_mode:
            self._payload[key] = [dict(zip(columns, row)) for row in rows]
            return

        table = Table(title=title, show_header=True, header_style="bold")
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*row)
        self.console.print(table)

    def error_report(self, report: ErrorReport) -> None:
        """Show every issue of a build, one row per issue, on stderr."""
        if self.json_mode:
            self._payload["error_report"] = report.to_dict()
            return
        if not report:
            return

        table = Table(title="Resolution errors", show_header=True, header_style="bold")
        for column in ("Entity", "Kind", "Component", "Message"):
            table.add_column(column)
        for key, issue in report.issues():
            table.add_row(key, issue.kind.value, issue.component or "", issue.message)
        (self.err_console or self.console).print(table)

    def set_data(self, key: str, value: Any) -> None:
        """Add a value to the JSON payload."""
        self._payload[key] = value

    def finish(self) -> int:
        """Print the JSON payload (JSON mode) and return the exit code."""
        if self.json_mode:
            self._payload["exit_code"] = self._exit_code
            print(json.dumps(self._payload, indent=2, default=str, ensure_ascii=False))
        return self._exit_code
