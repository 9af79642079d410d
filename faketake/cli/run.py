"""Lifecycle commands: run the container, tear down, inspect."""

import asyncio
from typing import Optional

import typer

from faketake.cli.output import (
    print_error,
    print_info,
    print_json,
    print_status,
    print_success,
    print_warning,
)
from faketake.config import Settings, get_settings
from faketake.docker.exceptions import DockerNetworkException
from faketake.docker.runtime import DockerRuntime
from faketake.exceptions import CleanupError, FaketakeError
from faketake.lifecycle import run_lifecycle
from faketake.logging_config import get_logger

logger = get_logger(__name__)


def _runtime(settings: Settings) -> DockerRuntime:
    return DockerRuntime(
        docker_binary=settings.docker_binary,
        network_driver=settings.network_driver,
    )


def start(cleanup_on_exit: Optional[bool] = None) -> None:
    """Run the lifecycle coordinator and exit with its status."""
    settings = get_settings()

    logger.debug(
        "lifecycle_starting",
        network=settings.network_name,
        container=settings.container_name,
        image=settings.image,
    )

    try:
        exit_code = run_lifecycle(settings, cleanup_on_exit=cleanup_on_exit)
    except FaketakeError as e:
        print_error(e.message)
        raise typer.Exit(e.exit_code)

    if exit_code != 0:
        raise typer.Exit(exit_code)


def up(
    cleanup_on_exit: Optional[bool] = typer.Option(
        None,
        "--cleanup-on-exit/--keep-network",
        help="Remove the network when the container exits on its own (default: keep it)",
    ),
) -> None:
    """
    Create the network and run the container in the foreground.

    Press Ctrl+C to stop the container and remove the network.
    """
    start(cleanup_on_exit)


def down() -> None:
    """
    Remove the network left behind by a previous run.
    """
    settings = get_settings()
    runtime = _runtime(settings)

    try:
        asyncio.run(runtime.remove_network(settings.network_name))
    except DockerNetworkException as e:
        error = CleanupError(settings.network_name, e.context.get("details", e.message))
        print_error(error.message)
        raise typer.Exit(error.exit_code)
    except FaketakeError as e:
        print_error(e.message)
        raise typer.Exit(e.exit_code)

    print_success(f"Removed network {settings.network_name}")


def status(ctx: typer.Context) -> None:
    """
    Show whether the network exists and the container is running.
    """
    settings = get_settings()
    runtime = _runtime(settings)

    async def _status() -> dict:
        return {
            "network": settings.network_name,
            "network_exists": await runtime.network_exists(settings.network_name),
            "container": settings.container_name,
            "container_running": await runtime.container_running(settings.container_name),
        }

    try:
        info = asyncio.run(_status())
    except FaketakeError as e:
        print_error(e.message)
        raise typer.Exit(e.exit_code)

    output_format = getattr(ctx.obj, "output_format", "table")
    if output_format == "json":
        print_json(info)
        return

    print_status(info)
    if info["network_exists"] and not info["container_running"]:
        print_warning(f"Network {settings.network_name} is left over from a previous run")
        print_info("Run 'faketake down' to remove it")
