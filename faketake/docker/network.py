"""Docker network lifecycle operations."""

import structlog

from faketake.docker.command import run_docker
from faketake.docker.config import NetworkConfig
from faketake.docker.exceptions import (
    DockerNetworkException,
    NetworkAlreadyExistsError,
)

logger = structlog.get_logger(__name__)


class DockerNetwork:
    """
    A named Docker network managed through the docker CLI.

    Usage:
        network = DockerNetwork(NetworkConfig(name="zorknet"))
        await network.create()
        ...
        await network.remove()
    """

    def __init__(self, config: NetworkConfig, docker_binary: str = "docker"):
        self.config = config
        self.docker_binary = docker_binary
        self.network_id: str | None = None

    @property
    def name(self) -> str:
        return self.config.name

    async def create(self) -> str:
        """
        Create the network.

        Returns:
            The network ID reported by docker

        Raises:
            NetworkAlreadyExistsError: If a network with this name already exists
            DockerNetworkException: If creation fails for any other reason
            DockerUnavailableError: If docker cannot be reached
        """
        logger.info("creating_network", network=self.name, driver=self.config.driver)

        returncode, stdout, stderr = await run_docker(
            self.config.to_docker_create_args(self.docker_binary)
        )

        if returncode != 0:
            if "already exists" in stderr:
                raise NetworkAlreadyExistsError(self.name)
            raise DockerNetworkException(
                f"Failed to create network {self.name}: {stderr.strip() or 'Unknown error'}",
                network=self.name,
            )

        self.network_id = stdout.strip()
        logger.info(
            "network_created",
            network=self.name,
            network_id=self.network_id[:12],
        )
        return self.network_id

    async def remove(self) -> None:
        """
        Remove the network.

        Raises:
            DockerNetworkException: If the network is in use or does not exist
            DockerUnavailableError: If docker cannot be reached
        """
        logger.info("removing_network", network=self.name)

        returncode, _, stderr = await run_docker(
            [self.docker_binary, "network", "rm", self.name]
        )

        if returncode != 0:
            details = stderr.strip() or "Unknown error"
            raise DockerNetworkException(
                f"Failed to remove network {self.name}: {details}",
                network=self.name,
                details=details,
            )

        self.network_id = None
        logger.info("network_removed", network=self.name)

    async def exists(self) -> bool:
        """Check whether a network with this name exists."""
        returncode, _, _ = await run_docker(
            [self.docker_binary, "network", "inspect", self.name]
        )
        return returncode == 0
