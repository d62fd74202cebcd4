"""Registry configuration types.

A RegistryConfig describes how an image build pushes to a container
registry: the build arguments plus the volumes carrying the registry
credentials into the build container.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RegistryType(str, Enum):
    """Registry types with a built-in configuration factory."""

    DOCKER_HUB = "DOCKER_HUB"
    AMAZON_ECR = "AMAZON_ECR"
    GCR = "GCR"
    QUAY = "QUAY"
    HTTP = "HTTP"
    HTTPS = "HTTPS"


def registry_key(registry_type: str) -> str:
    """Normalize a registry type to its plain string key."""
    if isinstance(registry_type, Enum):
        return str(registry_type.value)
    return str(registry_type)


@dataclass(frozen=True)
class VolumeMount:
    """Where a volume is mounted inside the build container."""

    name: str
    mount_path: str
    read_only: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "mountPath": self.mount_path, "readOnly": self.read_only}


@dataclass(frozen=True)
class Volume:
    """A volume backed by either a secret or a config map."""

    name: str
    secret_name: str | None = None
    config_map_name: str | None = None

    def __post_init__(self) -> None:
        if (self.secret_name is None) == (self.config_map_name is None):
            raise ValueError(
                f"Volume {self.name!r} requires exactly one of secret_name or config_map_name"
            )

    def to_dict(self) -> dict[str, Any]:
        if self.secret_name is not None:
            return {"name": self.name, "secret": {"secretName": self.secret_name}}
        return {"name": self.name, "configMap": {"name": self.config_map_name}}


@dataclass
class RegistryConfig:
    """Build configuration for one registry type."""

    registry_type: str
    args: list[str] = field(default_factory=list)
    volume_mounts: list[VolumeMount] = field(default_factory=list)
    volumes: list[Volume] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "registry_type": registry_key(self.registry_type),
            "args": list(self.args),
            "volume_mounts": [m.to_dict() for m in self.volume_mounts],
            "volumes": [v.to_dict() for v in self.volumes],
        }


ConfigFactory = Callable[[str, str], RegistryConfig]
"""Builds a RegistryConfig from (repository, image)."""
