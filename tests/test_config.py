"""Tests for configuration loading from environment variables and files."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from routesync.core.config import (
    RoutesyncSettings,
    clear_settings,
    get_settings,
    load_config_from_file,
)
from routesync.ingress import RouteNaming
from routesync.registry import RegistrySelection


@pytest.fixture(autouse=True)
def clean_settings():
    clear_settings()
    yield
    clear_settings()


class TestRoutesyncSettings:
    """Test RoutesyncSettings."""

    def test_default_values(self) -> None:
        """Test default values."""
        with patch.dict(os.environ, {}, clear=True):
            settings = RoutesyncSettings(_env_file=None)
        assert settings.ingress_host == ""
        assert settings.default_service_port == 8290
        assert settings.service_suffix == ""
        assert settings.inbound_suffix == "-inbound"
        assert settings.registry_type == "DOCKER_HUB"
        assert settings.log_level == "info"

    def test_env_override_ingress_host(self) -> None:
        """Test ROUTESYNC_INGRESS_HOST env var."""
        with patch.dict(os.environ, {"ROUTESYNC_INGRESS_HOST": "apps.example.com"}):
            settings = RoutesyncSettings()
            assert settings.ingress_host == "apps.example.com"

    def test_env_override_default_port(self) -> None:
        """Test ROUTESYNC_DEFAULT_SERVICE_PORT env var."""
        with patch.dict(os.environ, {"ROUTESYNC_DEFAULT_SERVICE_PORT": "9000"}):
            settings = RoutesyncSettings()
            assert settings.default_service_port == 9000

    def test_invalid_port_rejected(self) -> None:
        """Test out of range ports fail validation."""
        with pytest.raises(ValueError):
            RoutesyncSettings(default_service_port=70000)

    def test_route_naming(self) -> None:
        """Test naming derived from settings."""
        settings = RoutesyncSettings(
            service_suffix="-service", inbound_suffix="-in", default_service_port=9000
        )
        assert settings.route_naming() == RouteNaming(
            service_suffix="-service", inbound_suffix="-in", default_port=9000
        )

    def test_selection(self) -> None:
        """Test registry selection derived from settings."""
        settings = RoutesyncSettings(registry_type="GCR", repository="proj", image="app:1")
        assert settings.selection() == RegistrySelection("GCR", "proj", "app:1")

    def test_to_env_dict(self) -> None:
        """Test exporting settings as environment variables."""
        settings = RoutesyncSettings(ingress_host="h", registry_type="QUAY")
        env = settings.to_env_dict()
        assert env["ROUTESYNC_INGRESS_HOST"] == "h"
        assert env["ROUTESYNC_REGISTRY_TYPE"] == "QUAY"
        assert env["ROUTESYNC_DEFAULT_SERVICE_PORT"] == str(settings.default_service_port)


class TestSettingsFiles:
    """Test loading settings from files."""

    def test_load_yaml(self, tmp_path) -> None:
        """Test YAML configuration."""
        path = tmp_path / "routesync.yaml"
        path.write_text("routesync:\n  ingress_host: apps.example.com\n  registry_type: GCR\n")

        settings = RoutesyncSettings.from_file(path)

        assert settings.ingress_host == "apps.example.com"
        assert settings.registry_type == "GCR"

    def test_load_toml(self, tmp_path) -> None:
        """Test TOML configuration without a section."""
        path = tmp_path / "routesync.toml"
        path.write_text('ingress_host = "apps.example.com"\ndefault_service_port = 9000\n')

        settings = RoutesyncSettings.from_file(path)

        assert settings.ingress_host == "apps.example.com"
        assert settings.default_service_port == 9000

    def test_overrides_take_precedence(self, tmp_path) -> None:
        """Test explicit overrides beat file values."""
        path = tmp_path / "routesync.yaml"
        path.write_text("ingress_host: file.example.com\n")

        settings = RoutesyncSettings.from_file(path, ingress_host="cli.example.com", image=None)

        assert settings.ingress_host == "cli.example.com"

    def test_missing_file(self, tmp_path) -> None:
        """Test missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config_from_file(tmp_path / "missing.yaml")

    def test_unsupported_format(self, tmp_path) -> None:
        """Test unsupported suffixes raise ValueError."""
        path = tmp_path / "routesync.ini"
        path.write_text("[routesync]\n")
        with pytest.raises(ValueError, match="must end in .yaml"):
            load_config_from_file(path)

    def test_invalid_yaml(self, tmp_path) -> None:
        """Test invalid YAML raises ValueError."""
        path = tmp_path / "routesync.yaml"
        path.write_text("routesync: [unclosed\n")
        with pytest.raises(ValueError, match="Could not parse YAML"):
            load_config_from_file(path)

    def test_empty_yaml(self, tmp_path) -> None:
        """Test empty YAML yields an empty dictionary."""
        path = tmp_path / "routesync.yaml"
        path.write_text("")
        assert load_config_from_file(path) == {}

    def test_empty_section_uses_defaults(self, tmp_path) -> None:
        """Test an empty routesync section falls back to the whole file."""
        path = tmp_path / "routesync.yaml"
        path.write_text("routesync:\n")

        settings = RoutesyncSettings.from_file(path, ingress_host="cli.example.com")

        assert settings.ingress_host == "cli.example.com"
        assert settings.default_service_port == 8290

    def test_top_level_list_rejected(self, tmp_path) -> None:
        """Test a YAML list at the top level raises ValueError."""
        path = tmp_path / "routesync.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="must contain a mapping"):
            RoutesyncSettings.from_file(path)

    def test_section_list_rejected(self, tmp_path) -> None:
        """Test a routesync section that is not a mapping raises ValueError."""
        path = tmp_path / "routesync.yaml"
        path.write_text("routesync:\n  - a\n")
        with pytest.raises(ValueError, match="must contain a mapping"):
            RoutesyncSettings.from_file(path)


class TestGetSettings:
    """Test the cached settings instance."""

    def test_cached(self) -> None:
        """Test get_settings returns the same instance."""
        assert get_settings() is get_settings()

    def test_clear_reloads_env(self) -> None:
        """Test clear_settings picks up new environment values."""
        first = get_settings()
        with patch.dict(os.environ, {"ROUTESYNC_INGRESS_HOST": "reloaded.example.com"}):
            clear_settings()
            second = get_settings()
        assert second is not first
        assert second.ingress_host == "reloaded.example.com"
