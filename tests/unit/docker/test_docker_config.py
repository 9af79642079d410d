"""Tests for Docker configuration models."""

from faketake.docker.config import ContainerConfig, NetworkConfig


class TestContainerConfig:
    """docker run argument rendering."""

    def test_foreground_run_args(self):
        config = ContainerConfig(image="datadog/fakeintake", name="faketake", network="zorknet")

        assert config.to_docker_run_args() == [
            "docker",
            "run",
            "--rm",
            "--network",
            "zorknet",
            "--name",
            "faketake",
            "datadog/fakeintake",
        ]

    def test_without_auto_remove(self):
        config = ContainerConfig(
            image="datadog/fakeintake",
            name="faketake",
            network="zorknet",
            auto_remove=False,
        )

        args = config.to_docker_run_args()

        assert "--rm" not in args
        assert "--detach" not in args

    def test_custom_binary(self):
        config = ContainerConfig(image="img", name="c", network="n")

        assert config.to_docker_run_args("podman")[0] == "podman"


class TestNetworkConfig:
    """docker network create argument rendering."""

    def test_default_driver(self):
        assert NetworkConfig(name="zorknet").to_docker_create_args() == [
            "docker",
            "network",
            "create",
            "zorknet",
        ]

    def test_explicit_driver(self):
        args = NetworkConfig(name="zorknet", driver="bridge").to_docker_create_args()

        assert args == ["docker", "network", "create", "--driver", "bridge", "zorknet"]
