"""Docker network and container configuration models."""

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class NetworkConfig:
    """Docker network configuration."""

    name: str
    driver: Optional[str] = None

    def to_docker_create_args(self, docker_binary: str = "docker") -> List[str]:
        """Convert to docker network create command arguments."""
        args = [docker_binary, "network", "create"]
        if self.driver:
            args.extend(["--driver", self.driver])
        args.append(self.name)
        return args


@dataclass
class ContainerConfig:
    """Docker container configuration for a foreground run.

    The container is attached to a single named network and, by default,
    removed by the runtime as soon as its process ends.
    """

    image: str
    name: str
    network: str

    # Container behavior
    auto_remove: bool = True

    # Grace period after an interrupt before the docker client is killed
    stop_timeout_seconds: float = 10.0

    def to_docker_run_args(self, docker_binary: str = "docker") -> List[str]:
        """Convert configuration to docker run command arguments.

        Returns:
            List of command-line arguments for docker run
        """
        args = [docker_binary, "run"]

        if self.auto_remove:
            args.append("--rm")

        args.extend(["--network", self.network])
        args.extend(["--name", self.name])

        args.append(self.image)

        return args
