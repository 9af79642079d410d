"""CLI module for faketake."""

from faketake.cli import config, run
from faketake.cli.main import app, main_cli

__all__ = [
    "app",
    "main_cli",
    "config",
    "run",
]
