"""Routesync Registry Module.

Selects the image build configuration for a container registry type.

Usage:
    from routesync.registry import default_registry

    registry = default_registry()
    selection = registry.select("DOCKER_HUB", "myorg", "app:1.0")
    config = registry.resolve(selection)
    print(config.args)
"""

from routesync.registry.builtins import BUILTIN_FACTORIES
from routesync.registry.registry import (
    ConfigRegistry,
    RegistryBuilder,
    RegistrySelection,
    clear_default_registry,
    default_registry,
)
from routesync.registry.types import (
    ConfigFactory,
    RegistryConfig,
    RegistryType,
    Volume,
    VolumeMount,
    registry_key,
)

__all__ = [
    # Registry
    "ConfigRegistry",
    "RegistryBuilder",
    "RegistrySelection",
    "default_registry",
    "clear_default_registry",
    "BUILTIN_FACTORIES",
    # Types
    "ConfigFactory",
    "RegistryConfig",
    "RegistryType",
    "Volume",
    "VolumeMount",
    "registry_key",
]
