"""Console output helpers for the CLI."""

import json
from typing import Any

from rich.console import Console
from rich.markup import escape


class OutputFormatter:
    """Formats CLI output as styled text or JSON.

    Informational messages are suppressed in quiet mode and in JSON mode;
    errors always go to stderr.
    """

    def __init__(self, json_output: bool = False, quiet: bool = False):
        self.json_output = json_output
        self.quiet = quiet
        # soft_wrap keeps long paths on one line
        self.console = Console(highlight=False, soft_wrap=True)
        self.err_console = Console(stderr=True, highlight=False, soft_wrap=True)

    def _should_print(self) -> bool:
        return not self.quiet and not self.json_output

    def info(self, message: str) -> None:
        if self._should_print():
            self.console.print(message, markup=False)

    def success(self, message: str) -> None:
        if self._should_print():
            self.console.print(f"[green]✓[/green] {escape(message)}")

    def warning(self, message: str) -> None:
        if not self.json_output:
            self.err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self.err_console.print(f"[red]Error:[/red] {escape(message)}")

    def output_json(self, data: Any) -> None:
        self.console.print_json(json.dumps(data, default=str))
