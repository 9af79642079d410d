"""Docker-specific exceptions for faketake."""

from typing import Optional

from faketake.exceptions import FaketakeError


class DockerException(FaketakeError):
    """Base exception for Docker operations."""

    pass


class DockerUnavailableError(DockerException):
    """Raised when the Docker CLI is missing or the daemon is unreachable."""

    pass


class DockerNetworkException(DockerException):
    """Raised when a network operation fails."""

    pass


class NetworkAlreadyExistsError(DockerNetworkException):
    """Raised when a network with the requested name already exists."""

    def __init__(self, network: str) -> None:
        super().__init__(f"Network already exists: {network}", network=network)


class ContainerRunException(DockerException):
    """Raised when the container fails to start or exits non-zero."""

    def __init__(self, container: str, returncode: Optional[int], details: str = "") -> None:
        message = f"Container {container} exited with code {returncode}"
        if details:
            message = f"{message}: {details}"
        super().__init__(
            message,
            exit_code=returncode or 1,
            container=container,
            returncode=returncode,
        )
        self.returncode = returncode
