"""Configuration management CLI commands."""

import json
from typing import Optional

import typer
import yaml
from rich.syntax import Syntax
from rich.table import Table

from faketake.cli.output import console, print_error, print_info
from faketake.config import Settings, get_settings
from faketake.logging_config import get_logger

app = typer.Typer(help="Configuration management", no_args_is_help=True)
logger = get_logger(__name__)

SECTIONS = ("network", "container", "cleanup", "docker", "logging")


@app.command("show")
def show_config(
    section: Optional[str] = typer.Option(
        None,
        "--section",
        "-s",
        help="Show specific section: network, container, cleanup, docker, logging",
    ),
    format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table, yaml, json",
    ),
) -> None:
    """
    Show current configuration.

    Displays all faketake settings or a specific section.
    """
    if section and section not in SECTIONS:
        print_error(f"Unknown section: {section}")
        print_info(f"Available sections: {', '.join(SECTIONS)}")
        raise typer.Exit(1)

    try:
        settings = get_settings()
    except Exception as e:
        logger.exception("config_load_failed")
        print_error(f"Failed to load configuration: {str(e)}")
        raise typer.Exit(1)

    config_dict = settings_to_dict(settings)
    if section:
        config_dict = {section: config_dict[section]}

    if format == "yaml":
        config_yaml = yaml.dump(config_dict, default_flow_style=False, sort_keys=False)
        console.print(Syntax(config_yaml, "yaml", theme="monokai"))
    elif format == "json":
        console.print(Syntax(json.dumps(config_dict, indent=2), "json", theme="monokai"))
    else:
        _show_config_table(config_dict)


def _show_config_table(config_dict: dict) -> None:
    """Display configuration in table format."""
    console.rule("faketake configuration", style="cyan")
    console.print()

    for section_name, values in config_dict.items():
        table = Table(
            title=f"{section_name.capitalize()} Settings",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("Setting", style="cyan", no_wrap=True)
        table.add_column("Value", style="white")

        for key, value in values.items():
            table.add_row(key, "default" if value is None else str(value))

        console.print(table)
        console.print()


def settings_to_dict(settings: Settings) -> dict:
    """Convert settings object to the nested YAML layout."""
    return {
        "network": {
            "name": settings.network_name,
            "driver": settings.network_driver,
        },
        "container": {
            "name": settings.container_name,
            "image": settings.image,
        },
        "cleanup": {
            "on_exit": settings.cleanup_on_exit,
            "timeout_seconds": settings.cleanup_timeout_seconds,
            "stop_timeout_seconds": settings.stop_timeout_seconds,
        },
        "docker": {
            "binary": settings.docker_binary,
        },
        "logging": {
            "level": settings.log_level,
            "format": settings.log_format,
        },
    }
