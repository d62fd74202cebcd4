"""Routesync Registry Configuration Resolver.

Maps a registry type to the factory producing its build configuration.

The table is assembled once during startup with a RegistryBuilder and then
frozen into a read-only ConfigRegistry. Each request describes what it needs
with its own RegistrySelection, so concurrent workers never observe one
another's selection.

Example:
    builder = RegistryBuilder()
    builder.register(RegistryType.DOCKER_HUB, docker_hub_config)
    registry = builder.build()

    selection = registry.select(RegistryType.DOCKER_HUB, "myorg", "app:1.0")
    config = registry.resolve(selection)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

import structlog

from routesync.errors import AlreadyRegisteredError, ConfigNotFoundError
from routesync.registry.types import ConfigFactory, RegistryConfig, registry_key

logger = structlog.get_logger()


@dataclass(frozen=True)
class RegistrySelection:
    """The registry type, repository and image requested by one caller."""

    registry_type: str
    repository: str
    image: str


class RegistryBuilder:
    """Collects factories during startup.

    The first factory registered for a type wins. Later registrations for
    the same type are rejected with a warning, or raise
    AlreadyRegisteredError when the builder is strict.
    """

    def __init__(self, strict: bool = False) -> None:
        """Initialize the builder.

        Args:
            strict: Raise on duplicate registrations instead of logging.
        """
        self.strict = strict
        self._factories: dict[str, ConfigFactory] = {}
        self.rejected: list[str] = []

    def register(self, registry_type: str, factory: ConfigFactory) -> bool:
        """Register ``factory`` for ``registry_type``.

        Args:
            registry_type: Registry type key.
            factory: Callable producing the configuration.

        Returns:
            True if registered, False if the type already had a factory.

        Raises:
            AlreadyRegisteredError: On a duplicate when the builder is strict.
        """
        key = registry_key(registry_type)
        if key in self._factories:
            if self.strict:
                raise AlreadyRegisteredError(key)
            logger.warning("registry_type_duplicate", registry_type=key)
            self.rejected.append(key)
            return False

        self._factories[key] = factory
        return True

    def register_all(self, factories: Iterable[tuple[str, ConfigFactory]]) -> None:
        """Register several (registry_type, factory) pairs in order."""
        for registry_type, factory in factories:
            self.register(registry_type, factory)

    def build(self) -> ConfigRegistry:
        """Freeze the registered factories into a ConfigRegistry."""
        return ConfigRegistry(dict(self._factories))


class ConfigRegistry:
    """Read-only table of configuration factories.

    Safe to share between concurrent workers: the table never changes after
    construction and every resolve works from the caller's selection.
    """

    def __init__(self, factories: Mapping[str, ConfigFactory]) -> None:
        self._factories: Mapping[str, ConfigFactory] = MappingProxyType(
            {registry_key(k): v for k, v in factories.items()}
        )

    @property
    def factories(self) -> Mapping[str, ConfigFactory]:
        """Read-only view of the registered factories."""
        return self._factories

    def types(self) -> list[str]:
        """List registered registry types in registration order."""
        return list(self._factories)

    def select(self, registry_type: str, repository: str, image: str) -> RegistrySelection:
        """Describe a configuration request.

        The type is not checked here; an unknown type fails on resolve().
        """
        return RegistrySelection(
            registry_type=registry_key(registry_type),
            repository=repository,
            image=image,
        )

    def resolve(self, selection: RegistrySelection) -> RegistryConfig:
        """Produce the configuration for ``selection``.

        Raises:
            ConfigNotFoundError: If no factory is registered for the type.
        """
        key = registry_key(selection.registry_type)
        factory = self._factories.get(key)
        if factory is None:
            raise ConfigNotFoundError(key)
        return factory(selection.repository, selection.image)

    def __contains__(self, registry_type: object) -> bool:
        if not isinstance(registry_type, str):
            return False
        return registry_key(registry_type) in self._factories

    def __len__(self) -> int:
        return len(self._factories)


_default_registry: ConfigRegistry | None = None


def default_registry() -> ConfigRegistry:
    """Get the process-wide registry holding the built-in factories.

    Built on first use and cached for the lifetime of the process.
    To rebuild it (e.g., in tests), call clear_default_registry() first.
    """
    global _default_registry
    if _default_registry is None:
        from routesync.registry.builtins import BUILTIN_FACTORIES

        builder = RegistryBuilder()
        builder.register_all(BUILTIN_FACTORIES.items())
        _default_registry = builder.build()
    return _default_registry


def clear_default_registry() -> None:
    """Clear the cached default registry."""
    global _default_registry
    _default_registry = None
