"""Routesync Ingress Rule Types.

Value types describing the rules stored on the managed ingress resource.

Types:
- RoutePath: One URL pattern routed to a service port
- RouteRule: A host plus an ordered list of RoutePath entries

Equality is structural and order-sensitive: two rules with the same host
and the same paths in a different order are different rules.

Example:
    rule = RouteRule(
        host="apps.example.com",
        paths=[RoutePath(path="/svc1(/|$)(.*)", service_name="svc1", service_port=8290)],
    )
    data = rule.to_dict()
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class RoutePath:
    """A single URL pattern routed to a backend service port.

    Example:
        >>> RoutePath("/svc1(/|$)(.*)", "svc1", 8290).service_port
        8290
    """

    path: str
    """URL pattern matched by the ingress controller."""

    service_name: str
    """Name of the backend service."""

    service_port: int
    """Port on the backend service."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RoutePath):
            return NotImplemented
        return (
            self.path == other.path
            and self.service_name == other.service_name
            and self.service_port == other.service_port
        )

    def __hash__(self) -> int:
        return hash((self.path, self.service_name, self.service_port))

    def to_dict(self) -> dict[str, Any]:
        """Convert path to the ingress backend dictionary layout."""
        return {
            "path": self.path,
            "backend": {
                "serviceName": self.service_name,
                "servicePort": self.service_port,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RoutePath:
        """Create path from dictionary.

        Raises:
            KeyError: If the path or backend fields are missing.
            ValueError: If the service port is not an integer.
        """
        backend = data["backend"]
        return cls(
            path=data["path"],
            service_name=backend["serviceName"],
            service_port=int(backend["servicePort"]),
        )


@dataclass(frozen=True)
class RouteRule:
    """A host and the ordered paths served under it.

    Rules built for a workload leave ``host`` empty; the host is attached
    when the rule is merged into the ingress.
    """

    host: str = ""
    paths: tuple[RoutePath, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Paths are always stored as a tuple
        if not isinstance(self.paths, tuple):
            object.__setattr__(self, "paths", tuple(self.paths))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RouteRule):
            return NotImplemented
        if self.host != other.host:
            return False
        if len(self.paths) != len(other.paths):
            return False
        return all(a == b for a, b in zip(self.paths, other.paths))

    def __hash__(self) -> int:
        return hash((self.host, self.paths))

    def with_host(self, host: str) -> RouteRule:
        """Return a copy of this rule bound to ``host``."""
        return replace(self, host=host)

    def to_dict(self) -> dict[str, Any]:
        """Convert rule to the ingress rule dictionary layout."""
        return {
            "host": self.host,
            "http": {"paths": [p.to_dict() for p in self.paths]},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RouteRule:
        """Create rule from dictionary.

        A missing ``http`` section yields a rule without paths and a missing
        or null host yields the empty host.
        """
        http = data.get("http") or {}
        return cls(
            host=data.get("host") or "",
            paths=tuple(RoutePath.from_dict(p) for p in http.get("paths", [])),
        )


RouteCollection = list[RouteRule]
"""Ordered rules of one ingress resource."""


def rules_from_list(data: list[dict[str, Any]]) -> RouteCollection:
    """Create a rule collection from its list-of-dicts representation."""
    return [RouteRule.from_dict(item) for item in data]


def rules_to_list(rules: RouteCollection) -> list[dict[str, Any]]:
    """Convert a rule collection to a list of dictionaries."""
    return [rule.to_dict() for rule in rules]
