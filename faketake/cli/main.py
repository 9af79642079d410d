"""Main CLI entry point for faketake."""

import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from faketake import __version__
from faketake.cli import config, run
from faketake.cli.output import console, console_err
from faketake.config import Settings, get_settings
from faketake.exceptions import FaketakeError
from faketake.logging_config import get_logger, setup_logging

app = typer.Typer(
    name="faketake",
    help="faketake - run datadog/fakeintake on an isolated Docker network",
    add_completion=True,
    rich_markup_mode="rich",
    no_args_is_help=False,
)

logger = get_logger(__name__)


class CLIState:
    """Global CLI state."""

    output_format: str = "table"
    verbose: bool = False
    quiet: bool = False
    settings: Optional[Settings] = None


state = CLIState()


def version_callback(value: bool) -> None:
    """Callback for --version flag."""
    if value:
        console.print(f"faketake version: {__version__}")
        console.print(f"Python: {sys.version.split()[0]}")
        raise typer.Exit(0)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version information and exit",
        callback=version_callback,
        is_eager=True,
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    output: str = typer.Option(
        "table",
        "--output",
        "-o",
        help="Output format: table, json",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log warnings and errors",
    ),
) -> None:
    """
    faketake - fakeintake on its own network

    Creates the [bold]zorknet[/bold] network, runs the [bold]faketake[/bold]
    container in the foreground and removes the network on Ctrl+C.
    Without a subcommand this is the same as [bold]faketake up[/bold].
    """
    if output not in ["table", "json"]:
        console_err.print(f"[red]Error:[/red] Invalid output format: {output}")
        console_err.print("Valid formats: table, json")
        raise typer.Exit(1)

    state.output_format = output
    state.verbose = verbose
    state.quiet = quiet

    try:
        state.settings = get_settings(config_path=config_path, reload=True)
    except ValidationError as e:
        console_err.print(f"[red]Error:[/red] Invalid configuration:\n{e}")
        raise typer.Exit(1)

    if verbose:
        setup_logging("DEBUG", state.settings)
    elif quiet:
        setup_logging("WARNING", state.settings)
    else:
        setup_logging(settings=state.settings)

    ctx.obj = state

    if ctx.invoked_subcommand is None:
        run.start()


def handle_error(error: Exception) -> int:
    """Print a user-friendly message for an error.

    Args:
        error: Exception to handle

    Returns:
        Exit code for the error
    """
    if isinstance(error, FaketakeError):
        console_err.print(f"\n[red]Error:[/red] {error.message}")

        if state.verbose and error.context:
            console_err.print("\n[yellow]Context:[/yellow]")
            for key, value in error.context.items():
                console_err.print(f"  {key}: {value}")
        return error.exit_code

    console_err.print(f"\n[red]Unexpected Error:[/red] {str(error)}")

    if state.verbose:
        import traceback

        console_err.print("\n[yellow]Traceback:[/yellow]")
        console_err.print(traceback.format_exc())

    return 1


app.command("up")(run.up)
app.command("down")(run.down)
app.command("status")(run.status)
app.add_typer(config.app, name="config", help="Configuration management")


def main_cli() -> None:
    """Entry point for CLI application with error handling."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)
    except Exception as e:
        sys.exit(handle_error(e))


if __name__ == "__main__":
    main_cli()
