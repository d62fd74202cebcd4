"""Routesync exception hierarchy."""

from __future__ import annotations


class RoutesyncError(Exception):
    """Base for all routesync errors."""


class ConfigNotFoundError(RoutesyncError, LookupError):
    """No configuration factory is registered for the requested registry type."""

    def __init__(self, registry_type: str) -> None:
        self.registry_type = registry_type
        super().__init__(f"No registry configuration registered for type: {registry_type}")


class AlreadyRegisteredError(RoutesyncError):
    """A factory is already registered for the registry type.

    Only raised by strict registry builders; the default builder logs a
    warning and keeps the first factory.
    """

    def __init__(self, registry_type: str) -> None:
        self.registry_type = registry_type
        super().__init__(f"Registry type already registered: {registry_type}")
