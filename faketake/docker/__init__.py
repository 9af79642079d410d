"""Docker runtime access for faketake.

Everything goes through the docker CLI with asyncio subprocesses.

Key components:
- DockerNetwork: create / remove / inspect a named network
- DockerContainer: cancellable foreground container run
- DockerRuntime: the runtime collaborator the lifecycle coordinator uses
"""

from faketake.docker.config import ContainerConfig, NetworkConfig
from faketake.docker.container import DockerContainer
from faketake.docker.exceptions import (
    ContainerRunException,
    DockerException,
    DockerNetworkException,
    DockerUnavailableError,
    NetworkAlreadyExistsError,
)
from faketake.docker.network import DockerNetwork
from faketake.docker.runtime import ContainerRuntime, DockerRuntime

__all__ = [
    # Core classes
    "DockerContainer",
    "DockerNetwork",
    "DockerRuntime",
    "ContainerRuntime",
    # Configuration models
    "ContainerConfig",
    "NetworkConfig",
    # Exceptions
    "DockerException",
    "DockerUnavailableError",
    "DockerNetworkException",
    "NetworkAlreadyExistsError",
    "ContainerRunException",
]
