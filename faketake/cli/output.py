"""Console output for the faketake CLI."""

import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()
console_err = Console(stderr=True)


def print_json(data: Any) -> None:
    """Print data as JSON on stdout."""
    console.print_json(json.dumps(data, default=str))


def _yes_no(value: Any) -> str:
    if value is True:
        return "[green]yes[/green]"
    if value is False:
        return "[red]no[/red]"
    return escape(str(value))


def print_status(info: dict[str, Any]) -> None:
    """Print network and container state as a two-column table.

    Booleans render as yes/no; keys are shown with spaces instead of
    underscores (``network_exists`` -> ``network exists``).
    """
    table = Table(title="faketake status", show_header=False)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value")

    for key, value in info.items():
        table.add_row(key.replace("_", " "), _yes_no(value))

    console.print(table)


# Docker stderr can contain square brackets, which rich would read as markup
def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str) -> None:
    console_err.print(f"[red]✗[/red] {escape(message)}")


def print_warning(message: str) -> None:
    console.print(f"[yellow]⚠[/yellow] {escape(message)}")


def print_info(message: str) -> None:
    console.print(f"[blue]ℹ[/blue] {escape(message)}")
