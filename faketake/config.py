"""Configuration management using pydantic-settings."""

import re
from pathlib import Path
from typing import Any, Literal, Tuple, Type

import yaml
from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

# Docker object names: alphanumeric start, then [a-zA-Z0-9_.-]
_DOCKER_NAME_RE = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9_.-]*$")

# YAML section -> {key: settings field}
_YAML_SECTIONS: dict[str, dict[str, str]] = {
    "network": {"name": "network_name", "driver": "network_driver"},
    "container": {"name": "container_name", "image": "image"},
    "cleanup": {
        "on_exit": "cleanup_on_exit",
        "timeout_seconds": "cleanup_timeout_seconds",
        "stop_timeout_seconds": "stop_timeout_seconds",
    },
    "docker": {"binary": "docker_binary"},
    "logging": {"level": "log_level", "format": "log_format"},
}


def load_yaml_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Priority:
    1. Explicitly provided config_path
    2. ~/.faketake/config.yaml (default location)
    3. Empty dict if no file exists

    Args:
        config_path: Optional path to config file

    Returns:
        Dictionary of configuration values (flattened from nested YAML)
    """
    if config_path is None:
        config_path = Path.home() / ".faketake" / "config.yaml"

    if not config_path.exists():
        return {}

    try:
        with open(config_path) as f:
            yaml_data = yaml.safe_load(f) or {}

        flattened = {}

        for section, keys in _YAML_SECTIONS.items():
            values = yaml_data.get(section)
            if not isinstance(values, dict):
                continue
            for key, field_name in keys.items():
                if key in values:
                    flattened[field_name] = values[key]

        return flattened

    except Exception as e:
        import warnings

        warnings.warn(f"Failed to load config from {config_path}: {e}")
        return {}


_config_path: Path | None = None


class YamlSettingsSource(PydanticBaseSettingsSource):
    """
    Custom settings source that loads configuration from YAML file.

    This allows YAML config to be loaded with proper priority in the settings chain.
    """

    def get_field_value(self, field: Any, field_name: str) -> Tuple[Any, str, bool]:
        """Not used since we override __call__."""
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        return load_yaml_config(_config_path)


class Settings(BaseSettings):
    """
    faketake configuration settings.

    The defaults reproduce the fixed setup: network ``zorknet``, container
    ``faketake`` running ``datadog/fakeintake``, network left in place when the
    container exits on its own.

    Configuration priority (highest to lowest):
    1. Environment variables (e.g., FAKETAKE_NETWORK_NAME=othernet)
    2. YAML configuration file (~/.faketake/config.yaml)
    3. Default values defined in this class
    """

    model_config = SettingsConfigDict(
        env_prefix="FAKETAKE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    network_name: str = Field(default="zorknet", description="Isolated network name")
    network_driver: str | None = Field(
        default=None,
        description="Network driver (runtime default when unset)",
    )

    container_name: str = Field(default="faketake", description="Container name")
    image: str = Field(default="datadog/fakeintake", description="Container image")

    docker_binary: str = Field(default="docker", description="Docker CLI executable")

    cleanup_on_exit: bool = Field(
        default=False,
        description="Also remove the network when the container exits on its own",
    )
    cleanup_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Upper bound on network removal during interrupt cleanup",
    )
    stop_timeout_seconds: float = Field(
        default=10.0,
        ge=0,
        description="Grace period for the container after an interrupt",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text", description="Log format"
    )

    @field_validator("network_name", "container_name")
    @classmethod
    def validate_docker_name(cls, v: str) -> str:
        """Ensure names are valid Docker object names."""
        if not _DOCKER_NAME_RE.match(v):
            raise ValueError(
                "must start with a letter or digit and contain only "
                "letters, digits, '_', '.' or '-'"
            )
        return v

    @field_validator("image", "docker_binary")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty or whitespace-only values."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize settings sources priority.

        Priority order (highest to lowest):
        1. Explicit kwargs (init_settings) - for testing and programmatic config
        2. Environment variables
        3. YAML configuration file
        4. .env file
        5. Field defaults
        """
        return (
            init_settings,
            env_settings,
            YamlSettingsSource(settings_cls),
            dotenv_settings,
        )


_settings: Settings | None = None


def get_settings(config_path: Path | None = None, reload: bool = False) -> Settings:
    """
    Get global settings instance.

    Args:
        config_path: Optional path to YAML config file (defaults to ~/.faketake/config.yaml)
        reload: If True, force reload settings (useful for testing)

    Returns:
        Settings instance with merged configuration
    """
    global _settings, _config_path
    if _settings is None or reload:
        _config_path = config_path

        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings, _config_path
    _settings = None
    _config_path = None
