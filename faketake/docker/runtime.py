"""Container runtime collaborator used by the lifecycle coordinator."""

from typing import Optional, Protocol

from faketake.docker.config import ContainerConfig, NetworkConfig
from faketake.docker.container import DockerContainer
from faketake.docker.network import DockerNetwork


class ContainerRuntime(Protocol):
    """The three runtime operations the coordinator depends on."""

    async def create_network(self, name: str) -> None: ...

    async def run_container(self, config: ContainerConfig) -> int: ...

    async def remove_network(self, name: str) -> None: ...


class DockerRuntime:
    """ContainerRuntime backed by the docker CLI."""

    def __init__(self, docker_binary: str = "docker", network_driver: Optional[str] = None):
        self.docker_binary = docker_binary
        self.network_driver = network_driver

    def _network(self, name: str) -> DockerNetwork:
        return DockerNetwork(
            NetworkConfig(name=name, driver=self.network_driver),
            docker_binary=self.docker_binary,
        )

    async def create_network(self, name: str) -> None:
        await self._network(name).create()

    async def run_container(self, config: ContainerConfig) -> int:
        return await DockerContainer(config, docker_binary=self.docker_binary).run()

    async def remove_network(self, name: str) -> None:
        await self._network(name).remove()

    async def network_exists(self, name: str) -> bool:
        return await self._network(name).exists()

    async def container_running(self, name: str) -> bool:
        # image/network are not used by the inspect call
        config = ContainerConfig(image="", name=name, network="")
        return await DockerContainer(config, docker_binary=self.docker_binary).is_running()
