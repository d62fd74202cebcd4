"""Resource naming conventions for exposed workloads."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_SERVICE_PORT = 8290
INGRESS_NAME = "ei-operator-ingress"
CONFIG_MAP_NAME = "ei-operator-config"


@dataclass(frozen=True)
class RouteNaming:
    """Naming rules applied when deriving service names and routes."""

    service_suffix: str = ""
    """Appended to the workload name to form the primary service name."""

    inbound_suffix: str = "-inbound"
    """Appended to the workload name to form the inbound route prefix."""

    default_port: int = DEFAULT_SERVICE_PORT
    """Port the base route targets on the primary service."""


DEFAULT_NAMING = RouteNaming()


def service_name(name: str, naming: RouteNaming = DEFAULT_NAMING) -> str:
    return name + naming.service_suffix


def inbound_service_name(name: str, naming: RouteNaming = DEFAULT_NAMING) -> str:
    return name + naming.inbound_suffix


def deployment_name(name: str) -> str:
    return name + "-deployment"


def labels_for_workload(name: str) -> dict[str, str]:
    """Labels selecting the resources that belong to a workload."""
    return {"app": "integration", "integration_cr": name}


def ingress_name() -> str:
    return INGRESS_NAME


def config_map_name() -> str:
    return CONFIG_MAP_NAME
