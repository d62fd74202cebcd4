"""Configuration types with environment variable support.

All settings can be configured via environment variables with the ROUTESYNC_ prefix.
Example: ROUTESYNC_INGRESS_HOST=apps.example.com sets the ingress host.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from routesync.ingress.naming import DEFAULT_SERVICE_PORT, RouteNaming
from routesync.registry.registry import RegistrySelection
from routesync.registry.types import RegistryType


def load_config_from_file(path: str | Path) -> dict[str, Any]:
    """Read routesync settings from a ``.yaml``, ``.yml`` or ``.toml`` file.

    An empty YAML document reads as an empty mapping.

    Raises:
        FileNotFoundError: The file is missing.
        ValueError: The file is not UTF-8, fails to parse, has an unknown
            suffix, or does not hold a mapping at the top level.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Settings file does not exist: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"Settings file {path} is not valid UTF-8: {e}") from e

    try:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text) or {}
        elif path.suffix == ".toml":
            data = tomllib.loads(text)
        else:
            raise ValueError(f"Settings file {path} must end in .yaml, .yml or .toml")
    except yaml.YAMLError as e:
        raise ValueError(f"Could not parse YAML settings in {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Could not parse TOML settings in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping at the top level: {path}")
    return data


class RoutesyncSettings(BaseSettings):
    """Operator settings.

    All settings can be overridden via environment variables:
    - ROUTESYNC_INGRESS_HOST: Host attached to workload rules
    - ROUTESYNC_DEFAULT_SERVICE_PORT: Port of the base route
    - ROUTESYNC_REGISTRY_TYPE: Registry type used for image builds
    - etc.
    """

    model_config = SettingsConfigDict(
        env_prefix="ROUTESYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    ingress_host: str = Field(
        default="",
        description="Host attached to every workload rule on the ingress.",
    )
    default_service_port: int = Field(
        default=DEFAULT_SERVICE_PORT,
        ge=1,
        le=65535,
        description="Service port targeted by the base route of each workload.",
    )
    service_suffix: str = Field(
        default="",
        description="Suffix appended to the workload name to form the service name.",
    )
    inbound_suffix: str = Field(
        default="-inbound",
        description="Suffix appended to the workload name for inbound route prefixes.",
    )
    registry_type: str = Field(
        default=RegistryType.DOCKER_HUB.value,
        description="Registry type used to resolve image build configuration.",
    )
    repository: str = Field(
        default="",
        description="Repository the built images are pushed to.",
    )
    image: str = Field(
        default="",
        description="Image name (with tag) the build produces.",
    )
    log_level: str = Field(
        default="info",
        description="Log level: debug, info, warning or error.",
    )

    @classmethod
    def from_file(cls, path: str | Path, **overrides: Any) -> RoutesyncSettings:
        """Create settings from a YAML or TOML file.

        A non-empty top-level ``routesync`` section is used when present,
        otherwise the whole file. Explicit overrides take precedence over
        file values.

        Raises:
            ValueError: If the file or its ``routesync`` section is not a mapping.
        """
        data = load_config_from_file(path)
        section = data.get("routesync") or data
        if not isinstance(section, dict):
            raise ValueError(f"Config file must contain a mapping under 'routesync': {path}")
        values = dict(section)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def route_naming(self) -> RouteNaming:
        """Naming conventions derived from these settings."""
        return RouteNaming(
            service_suffix=self.service_suffix,
            inbound_suffix=self.inbound_suffix,
            default_port=self.default_service_port,
        )

    def selection(self) -> RegistrySelection:
        """Registry selection described by these settings."""
        return RegistrySelection(
            registry_type=self.registry_type,
            repository=self.repository,
            image=self.image,
        )

    def to_env_dict(self) -> dict[str, str]:
        """Export current configuration as environment variable dictionary."""
        return {
            "ROUTESYNC_INGRESS_HOST": self.ingress_host,
            "ROUTESYNC_DEFAULT_SERVICE_PORT": str(self.default_service_port),
            "ROUTESYNC_SERVICE_SUFFIX": self.service_suffix,
            "ROUTESYNC_INBOUND_SUFFIX": self.inbound_suffix,
            "ROUTESYNC_REGISTRY_TYPE": self.registry_type,
            "ROUTESYNC_REPOSITORY": self.repository,
            "ROUTESYNC_IMAGE": self.image,
            "ROUTESYNC_LOG_LEVEL": self.log_level,
        }


_settings: RoutesyncSettings | None = None


def get_settings() -> RoutesyncSettings:
    """Get the global settings instance.

    Returns a cached instance of RoutesyncSettings that reads from environment variables.
    The instance is created once and cached for the lifetime of the process.

    To reload settings (e.g., in tests), call clear_settings() first.
    """
    global _settings
    if _settings is None:
        _settings = RoutesyncSettings()
    return _settings


def clear_settings() -> None:
    """Clear the cached settings.

    Call this to force reloading of environment variables on next get_settings() call.
    Useful for testing.
    """
    global _settings
    _settings = None
