"""Routesync core settings."""

from routesync.core.config import (
    RoutesyncSettings,
    clear_settings,
    get_settings,
    load_config_from_file,
)

__all__ = [
    "RoutesyncSettings",
    "clear_settings",
    "get_settings",
    "load_config_from_file",
]
