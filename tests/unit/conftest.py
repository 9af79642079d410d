"""Shared fixtures for faketake unit tests."""

import asyncio
from typing import Callable, Iterable, Optional

import pytest

import faketake.config
from faketake.config import Settings
from faketake.docker.config import ContainerConfig
from faketake.docker.exceptions import (
    DockerNetworkException,
    NetworkAlreadyExistsError,
)


class FakeRuntime:
    """In-memory ContainerRuntime.

    ``exit_code=None`` makes run_container block until cancelled, anything
    else makes the container exit immediately with that code. ``on_run`` is
    called once the container has "started".
    """

    def __init__(
        self,
        existing_networks: Iterable[str] = (),
        exit_code: Optional[int] = None,
        on_run: Optional[Callable[[], None]] = None,
        remove_error: Optional[Exception] = None,
        remove_delay: float = 0,
        run_error: Optional[Exception] = None,
    ):
        self.networks = set(existing_networks)
        self.exit_code = exit_code
        self.on_run = on_run
        self.remove_error = remove_error
        self.remove_delay = remove_delay
        self.run_error = run_error
        self.calls: list[tuple[str, str]] = []
        self.started: list[ContainerConfig] = []
        self.run_cancelled = False

    async def create_network(self, name: str) -> None:
        self.calls.append(("create_network", name))
        if name in self.networks:
            raise NetworkAlreadyExistsError(name)
        self.networks.add(name)

    async def run_container(self, config: ContainerConfig) -> int:
        self.calls.append(("run_container", config.name))
        assert config.network in self.networks
        self.started.append(config)

        if self.run_error is not None:
            raise self.run_error
        if self.on_run is not None:
            self.on_run()
        if self.exit_code is not None:
            return self.exit_code

        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.run_cancelled = True
            raise
        return 0

    async def remove_network(self, name: str) -> None:
        self.calls.append(("remove_network", name))
        if self.remove_delay:
            await asyncio.sleep(self.remove_delay)
        if self.remove_error is not None:
            raise self.remove_error
        if name not in self.networks:
            raise DockerNetworkException(f"network {name} not found", network=name)
        self.networks.discard(name)

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep user config files and FAKETAKE_* variables out of tests."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    for key in [
        "FAKETAKE_NETWORK_NAME",
        "FAKETAKE_CONTAINER_NAME",
        "FAKETAKE_IMAGE",
        "FAKETAKE_DOCKER_BINARY",
        "FAKETAKE_CLEANUP_ON_EXIT",
        "FAKETAKE_LOG_LEVEL",
        "FAKETAKE_LOG_FORMAT",
    ]:
        monkeypatch.delenv(key, raising=False)

    faketake.config.reset_settings()
    yield
    faketake.config.reset_settings()


@pytest.fixture
def test_settings():
    """Default settings with short timeouts."""
    return Settings(cleanup_timeout_seconds=1.0, stop_timeout_seconds=0.1)


@pytest.fixture
def runtime_factory():
    """Build FakeRuntime instances."""
    return FakeRuntime
