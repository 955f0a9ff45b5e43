"""Terminal and JSON output for the CLI."""

from __future__ import annotations

import contextlib
import functools
import json
from typing import Any, Callable, Iterator, TypeVar

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gdrivecli.errors import GDriveCliError
from gdrivecli.models import RemoteEntry
from gdrivecli.util.size import format_size

F = TypeVar("F", bound=Callable[..., Any])


class OutputFormatter:
    def __init__(self, json_output: bool = False) -> None:
        self.json_output = json_output
        self.console = Console(highlight=False)
        self.err_console = Console(stderr=True, highlight=False)

    def output_json(self, data: Any) -> None:
        click.echo(json.dumps(data, indent=2))

    def error(self, message: str) -> None:
        self.err_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)

    def warning(self, message: str) -> None:
        self.err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}", soft_wrap=True)

    def success(self, message: str) -> None:
        if not self.json_output:
            self.console.print(f"[green]✓[/green] {escape(message)}")

    def info(self, message: str) -> None:
        if not self.json_output:
            self.console.print(message)

    @contextlib.contextmanager
    def status(self, message: str) -> Iterator[None]:
        """Spinner while a remote call runs; silent in JSON mode."""
        if self.json_output:
            yield
            return
        with self.err_console.status(message):
            yield

    def details(self, title: str, rows: list[tuple[str, Any]]) -> None:
        self.console.print(f"\n[bold]{escape(title)}[/bold]")
        for label, value in rows:
            self.console.print(f"{label}: {escape(str(value))}", soft_wrap=True)

    def entries_table(self, entries: list[RemoteEntry], title: str) -> None:
        table = Table(title=title)
        table.add_column("Name", style="cyan", no_wrap=False)
        table.add_column("Type", style="magenta")
        table.add_column("Size", style="green", justify="right")
        table.add_column("Modified", style="blue")
        table.add_column("ID", style="dim")

        for entry in entries:
            size = "" if entry.is_folder else format_size(entry.size)
            modified = (
                entry.modified_time.strftime("%Y-%m-%d %H:%M")
                if entry.modified_time
                else ""
            )
            table.add_row(escape(entry.name), entry.kind, size, modified, entry.file_id)

        self.console.print(table)
        self.console.print(f"[dim]Total: {len(entries)} item(s)[/dim]")


def handle_errors(func: F) -> F:
    """Turn gdrivecli errors into a one-line message and exit status 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except GDriveCliError as exc:
            OutputFormatter().error(str(exc))
            click.get_current_context().exit(1)

    return wrapper  # type: ignore[return-value]
