"""Routesync Rule Merging.

Merges the rule built for a workload into the rules already present on the
ingress. Reconciliation runs repeatedly for an unchanged desired state, so
merging is idempotent: once a rule is present, merging it again leaves the
collection untouched.

Merging is strictly additive. Rules left behind by renamed or deleted
workloads are never removed or updated here.
"""

from __future__ import annotations

import structlog

from routesync.ingress.builder import WorkloadSpec, build_routes
from routesync.ingress.naming import DEFAULT_NAMING, RouteNaming
from routesync.ingress.rules import RouteCollection, RouteRule

logger = structlog.get_logger()


def merge_rule(
    existing: RouteCollection,
    candidate: RouteRule,
    host: str,
) -> tuple[RouteCollection, bool]:
    """Merge ``candidate`` bound to ``host`` into ``existing``.

    Args:
        existing: Rules currently on the ingress, in order.
        candidate: Rule built for a workload; its host is replaced by ``host``.
        host: Host the rule is served under.

    Returns:
        Tuple of (rules, already_present). When an equal rule is already
        present the original ``existing`` list is returned as is. Otherwise
        a new list with the rule appended is returned and ``existing`` is
        left unmodified.
    """
    rule = candidate.with_host(host)

    already_present = False
    for current in existing:
        if current == rule:
            already_present = True
            break

    if already_present:
        return existing, True
    return [*existing, rule], False


def ensure_workload_routes(
    existing: RouteCollection,
    workload: WorkloadSpec,
    host: str,
    naming: RouteNaming = DEFAULT_NAMING,
) -> tuple[RouteCollection, bool]:
    """Build the rule for ``workload`` and merge it into ``existing``.

    Returns:
        Tuple of (rules, changed) where ``changed`` tells the caller the
        ingress must be written back.
    """
    rules, already_present = merge_rule(existing, build_routes(workload, naming), host)
    if already_present:
        logger.debug("ingress_rule_present", workload=workload.name, host=host)
    else:
        logger.info(
            "ingress_rule_added",
            workload=workload.name,
            host=host,
            rules=len(rules),
        )
    return rules, not already_present
