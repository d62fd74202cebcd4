"""Routesync Ingress Module.

Computes the ingress rules that expose a workload and merges them into
the rules already stored on the managed ingress resource.

Usage:
    from routesync.ingress import WorkloadSpec, ensure_workload_routes

    rules, changed = ensure_workload_routes(
        current_rules,
        WorkloadSpec(name="svc1", inbound_ports=[8080]),
        host="apps.example.com",
    )
    if changed:
        # write rules back to the ingress
        pass
"""

from routesync.ingress.builder import PATH_SUFFIX, WorkloadSpec, build_routes
from routesync.ingress.merge import ensure_workload_routes, merge_rule
from routesync.ingress.naming import (
    DEFAULT_NAMING,
    DEFAULT_SERVICE_PORT,
    RouteNaming,
    config_map_name,
    deployment_name,
    inbound_service_name,
    ingress_name,
    labels_for_workload,
    service_name,
)
from routesync.ingress.rules import (
    RouteCollection,
    RoutePath,
    RouteRule,
    rules_from_list,
    rules_to_list,
)

__all__ = [
    # Builder
    "PATH_SUFFIX",
    "WorkloadSpec",
    "build_routes",
    # Merge
    "merge_rule",
    "ensure_workload_routes",
    # Naming
    "DEFAULT_NAMING",
    "DEFAULT_SERVICE_PORT",
    "RouteNaming",
    "service_name",
    "inbound_service_name",
    "deployment_name",
    "labels_for_workload",
    "ingress_name",
    "config_map_name",
    # Rules
    "RoutePath",
    "RouteRule",
    "RouteCollection",
    "rules_from_list",
    "rules_to_list",
]
