"""Cascade resolver: splits eligible schemes into gateways, cascaded groups and independents.

A gateway is a scheme flagged ``is_gateway`` whose award unlocks at least
one other currently-eligible scheme. Gateways are walked highest value first;
that order decides which gateway owns a dependent reachable from several.
Ties on value fall back to catalogue order, then id, so the output never
depends on how the inputs were ordered.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from src.schemas.catalogue import DependencyEdge, EntitlementDefinition
from src.schemas.entitlements import CascadedGroup, CascadeResult, EntitlementResult

logger = logging.getLogger(__name__)


def resolve_cascade(
    eligible_results: Sequence[EntitlementResult],
    definitions: Sequence[EntitlementDefinition],
    dependency_edges: Sequence[DependencyEdge],
) -> CascadeResult:
    """Place every eligible scheme exactly once.

    1. Adjacency ``gateway -> dependents`` from edges whose ends are both
       eligible and whose source is flagged as a gateway.
    2. Only gateways with at least one dependent are realized.
    3. Realized gateways are sorted by high value, descending.
    4. Each gateway is emitted (unless already placed) and claims its
       still-unplaced dependents into its cascaded group.
    5. Everything left over is independent.
    """
    results = {r.id: r for r in eligible_results}
    defs = {d.id: d for d in definitions}
    position = {d.id: i for i, d in enumerate(definitions)}

    def order(entitlement_id: str) -> tuple[int, int, str]:
        return (
            -results[entitlement_id].estimated_annual_value.high,
            position.get(entitlement_id, len(position)),
            entitlement_id,
        )

    # 1. Adjacency restricted to the eligible set
    dependents: dict[str, set[str]] = {}
    for edge in dependency_edges:
        if edge.from_id not in defs or edge.to not in defs:
            logger.debug("Ignoring dependency edge with unknown id: %s -> %s", edge.from_id, edge.to)
            continue
        if edge.from_id not in results or edge.to not in results:
            continue
        if not defs[edge.from_id].is_gateway or edge.from_id == edge.to:
            continue
        dependents.setdefault(edge.from_id, set()).add(edge.to)

    # 2-3. Realized gateways by ownership priority
    gateway_order = sorted((g for g, deps in dependents.items() if deps), key=order)

    placed: set[str] = set()
    gateways: list[EntitlementResult] = []
    groups: list[CascadedGroup] = []

    # 4. Walk gateways
    for gateway_id in gateway_order:
        if gateway_id not in placed:
            gateways.append(results[gateway_id])
            placed.add(gateway_id)

        claimed = [d for d in sorted(dependents[gateway_id], key=order) if d not in placed]
        placed.update(claimed)
        if claimed:
            groups.append(CascadedGroup(
                gateway_id=gateway_id,
                gateway_name=results[gateway_id].name,
                entitlements=tuple(results[d] for d in claimed),
            ))

    # 5. Independents
    independent = [results[i] for i in sorted(results, key=order) if i not in placed]

    return CascadeResult(
        gateway_entitlements=tuple(gateways),
        cascaded_entitlements=tuple(groups),
        independent_entitlements=tuple(independent),
    )
