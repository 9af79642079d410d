"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from faketake.config import Settings, get_settings, load_yaml_config, reset_settings
from faketake.exceptions import CleanupError, FaketakeError


class TestSettingsDefaults:
    """Defaults match the fixed setup."""

    def test_defaults(self):
        settings = Settings()

        assert settings.network_name == "zorknet"
        assert settings.container_name == "faketake"
        assert settings.image == "datadog/fakeintake"
        assert settings.docker_binary == "docker"
        assert settings.network_driver is None
        assert settings.cleanup_on_exit is False
        assert settings.log_level == "INFO"
        assert settings.log_format == "text"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("FAKETAKE_NETWORK_NAME", "othernet")
        monkeypatch.setenv("FAKETAKE_CLEANUP_ON_EXIT", "true")

        settings = Settings()

        assert settings.network_name == "othernet"
        assert settings.cleanup_on_exit is True

    @pytest.mark.parametrize("name", ["", "-leading-dash", "has space", "bad/slash"])
    def test_invalid_network_name(self, name):
        with pytest.raises(ValidationError):
            Settings(network_name=name)

    def test_cleanup_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(cleanup_timeout_seconds=0)

    def test_blank_image_rejected(self):
        with pytest.raises(ValidationError):
            Settings(image="   ")


class TestYamlConfig:
    """YAML configuration file."""

    def test_missing_file(self, tmp_path):
        assert load_yaml_config(tmp_path / "missing.yaml") == {}

    def test_flatten_sections(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "network:\n"
            "  name: yamlnet\n"
            "  driver: bridge\n"
            "container:\n"
            "  image: example/fakeintake:latest\n"
            "cleanup:\n"
            "  on_exit: true\n"
            "  timeout_seconds: 3\n"
            "logging:\n"
            "  format: json\n"
        )

        assert load_yaml_config(config_file) == {
            "network_name": "yamlnet",
            "network_driver": "bridge",
            "image": "example/fakeintake:latest",
            "cleanup_on_exit": True,
            "cleanup_timeout_seconds": 3,
            "log_format": "json",
        }

    def test_invalid_yaml_warns(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("network: [unclosed\n")

        with pytest.warns(UserWarning):
            assert load_yaml_config(config_file) == {}

    def test_get_settings_reads_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("network:\n  name: yamlnet\n")

        settings = get_settings(config_path=config_file, reload=True)

        assert settings.network_name == "yamlnet"

    def test_env_beats_yaml(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("network:\n  name: yamlnet\n")
        monkeypatch.setenv("FAKETAKE_NETWORK_NAME", "envnet")

        settings = get_settings(config_path=config_file, reload=True)

        assert settings.network_name == "envnet"

    def test_default_location(self, tmp_path):
        # HOME points at tmp_path for every test
        config_dir = tmp_path / ".faketake"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("container:\n  name: homecontainer\n")

        assert Settings().container_name == "homecontainer"


class TestSettingsCache:
    """Global settings instance."""

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_reset(self):
        first = get_settings()
        reset_settings()

        assert get_settings() is not first


class TestExceptions:
    """Error types."""

    def test_to_dict(self):
        error = FaketakeError("boom", exit_code=4, network="zorknet")

        assert error.to_dict() == {
            "error_type": "FaketakeError",
            "message": "boom",
            "exit_code": 4,
            "context": {"network": "zorknet"},
        }

    def test_cleanup_error(self):
        error = CleanupError("zorknet", "has active endpoints")

        assert error.message == "Failed to remove network zorknet: has active endpoints"
        assert error.exit_code == 1
