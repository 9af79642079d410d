"""Foreground Docker container runs.

The container's stdout and stderr are inherited from this process, so its
output passes through untouched. The run is an awaitable that can be
cancelled: cancellation forwards SIGINT to the ``docker run`` client, which
proxies it to the container, and escalates to a kill after the stop timeout.
"""

import asyncio
import signal
from typing import Optional

import structlog

from faketake.docker.command import run_docker
from faketake.docker.config import ContainerConfig
from faketake.docker.exceptions import DockerUnavailableError

logger = structlog.get_logger(__name__)

# docker run exits with these codes when the container itself never ran
DOCKER_RUN_ERROR_CODES = {125, 126, 127}


class DockerContainer:
    """
    Docker container wrapper for a single blocking foreground run.

    Usage:
        config = ContainerConfig(
            image="datadog/fakeintake",
            name="faketake",
            network="zorknet",
        )
        container = DockerContainer(config)
        returncode = await container.run()
    """

    def __init__(self, config: ContainerConfig, docker_binary: str = "docker"):
        """
        Initialize Docker container wrapper.

        Args:
            config: Container configuration
            docker_binary: Docker CLI executable
        """
        self.config = config
        self.docker_binary = docker_binary
        self._process: Optional[asyncio.subprocess.Process] = None

    async def run(self) -> int:
        """
        Run the container in the foreground until it exits.

        Returns:
            The exit code of ``docker run`` (the container's exit code, or
            125-127 when docker could not start it)

        Raises:
            DockerUnavailableError: If the docker CLI cannot be executed
            asyncio.CancelledError: If the run was cancelled; the container
                has been interrupted and the client reaped before re-raising
        """
        command = self.config.to_docker_run_args(self.docker_binary)

        logger.info(
            "container_run_started",
            container_name=self.config.name,
            image=self.config.image,
            network=self.config.network,
            command=" ".join(command),
        )

        try:
            # Own session: terminal Ctrl+C reaches only us; we forward it on cancel
            self._process = await asyncio.create_subprocess_exec(
                *command,
                start_new_session=True,
            )
        except FileNotFoundError as e:
            raise DockerUnavailableError(
                f"Docker CLI not found: {self.docker_binary}",
                binary=self.docker_binary,
            ) from e

        try:
            returncode = await self._process.wait()
        except asyncio.CancelledError:
            logger.info("container_run_cancelled", container_name=self.config.name)
            await self._interrupt()
            raise

        logger.info(
            "container_exited",
            container_name=self.config.name,
            returncode=returncode,
        )
        return returncode

    async def _interrupt(self) -> None:
        """Interrupt the docker client and wait for it, killing it after the timeout."""
        process = self._process
        if process is None or process.returncode is not None:
            return

        try:
            process.send_signal(signal.SIGINT)
        except ProcessLookupError:
            return

        try:
            await asyncio.wait_for(process.wait(), timeout=self.config.stop_timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(
                "killing_container_client",
                container_name=self.config.name,
                timeout=self.config.stop_timeout_seconds,
            )
            try:
                process.kill()
            except ProcessLookupError:
                return
            await process.wait()

    async def is_running(self) -> bool:
        """
        Check if a container with this name is currently running.

        Returns:
            True if container is running, False otherwise
        """
        returncode, stdout, _ = await run_docker(
            [
                self.docker_binary,
                "inspect",
                "-f",
                "{{.State.Running}}",
                self.config.name,
            ]
        )
        is_running = returncode == 0 and stdout.strip() == "true"

        logger.debug(
            "container_running_check",
            container_name=self.config.name,
            is_running=is_running,
        )
        return is_running
