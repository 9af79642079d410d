"""Async subprocess helper for short-lived Docker CLI calls."""

import asyncio

import structlog

from faketake.docker.exceptions import DockerUnavailableError

logger = structlog.get_logger(__name__)

_DAEMON_UNREACHABLE_MARKERS = (
    "cannot connect to the docker daemon",
    "is the docker daemon running",
    "error during connect",
)


def is_daemon_unreachable(stderr: str) -> bool:
    """Check whether docker stderr output reports an unreachable daemon."""
    lowered = stderr.lower()
    return any(marker in lowered for marker in _DAEMON_UNREACHABLE_MARKERS)


async def run_docker(command: list[str]) -> tuple[int, str, str]:
    """
    Run a Docker CLI command to completion and capture its output.

    Args:
        command: Full argument vector, starting with the docker binary

    Returns:
        Tuple of (return_code, stdout, stderr)

    Raises:
        DockerUnavailableError: If the binary is missing or the daemon is unreachable
    """
    logger.debug("docker_command", command=" ".join(command))

    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise DockerUnavailableError(
            f"Docker CLI not found: {command[0]}", binary=command[0]
        ) from e

    try:
        stdout, stderr = await process.communicate()
    except asyncio.CancelledError:
        # Timed out or cancelled by the caller: the child must not outlive us
        logger.warning("docker_command_cancelled", command=" ".join(command))
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
            await process.wait()
        raise

    returncode = process.returncode or 0
    out = stdout.decode("utf-8", errors="replace") if stdout else ""
    err = stderr.decode("utf-8", errors="replace") if stderr else ""

    if returncode != 0 and is_daemon_unreachable(err):
        raise DockerUnavailableError(
            f"Docker daemon unreachable: {err.strip()}", binary=command[0]
        )

    return returncode, out, err
