"""Routesync Route Builder.

Derives the ingress paths that expose one workload.

Every workload gets a base path routed to its primary service on the
default port, followed by one path per inbound port in the order the
ports were declared.

Example:
    rule = build_routes(WorkloadSpec(name="svc1", inbound_ports=[8080]))
    # rule.paths[0].path == "/svc1(/|$)(.*)"              -> svc1:8290
    # rule.paths[1].path == "/svc1-inbound/8080(/|$)(.*)" -> svc1:8080
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from routesync.ingress.naming import (
    DEFAULT_NAMING,
    RouteNaming,
    inbound_service_name,
    service_name,
)
from routesync.ingress.rules import RoutePath, RouteRule

PATH_SUFFIX = "(/|$)(.*)"


@dataclass(frozen=True)
class WorkloadSpec:
    """The exposure state requested for a workload."""

    name: str
    """Workload name; service and route names derive from it."""

    inbound_ports: tuple[int, ...] = field(default_factory=tuple)
    """Inbound endpoint ports. Order is kept and duplicates are allowed."""

    def __post_init__(self) -> None:
        if not isinstance(self.inbound_ports, tuple):
            object.__setattr__(self, "inbound_ports", tuple(self.inbound_ports))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WorkloadSpec:
        """Create a workload from dictionary.

        Accepts both ``inbound_ports`` and the resource-style ``inboundPorts``.
        """
        ports = data.get("inbound_ports", data.get("inboundPorts")) or []
        return cls(name=data["name"], inbound_ports=tuple(int(p) for p in ports))


def build_routes(
    workload: WorkloadSpec,
    naming: RouteNaming = DEFAULT_NAMING,
) -> RouteRule:
    """Build the rule exposing ``workload``.

    The returned rule has no host; the caller attaches one on merge.

    Args:
        workload: The workload to expose.
        naming: Naming conventions for services and route prefixes.

    Returns:
        RouteRule with the base path first, then one path per inbound port.
    """
    primary = service_name(workload.name, naming)
    paths = [
        RoutePath(
            path="/" + primary + PATH_SUFFIX,
            service_name=primary,
            service_port=naming.default_port,
        )
    ]

    inbound = inbound_service_name(workload.name, naming)
    for port in workload.inbound_ports:
        paths.append(
            RoutePath(
                path="/" + inbound + "/" + str(port) + PATH_SUFFIX,
                service_name=primary,
                service_port=port,
            )
        )

    return RouteRule(paths=tuple(paths))
