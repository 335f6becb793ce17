"""Bundle orchestrator: person + situations -> EntitlementBundle.

Pure composition of the engine stages. The only I/O is the optional
external valuation fetched by ``resolve_entitlements`` before the pure
``build_bundle`` runs.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from src.bundle.action_plan import build_action_plan
from src.bundle.cascade import resolve_cascade
from src.bundle.conflicts import resolve_conflicts
from src.bundle.guidance import format_application_method, timeline, what_you_need, why_this_matters
from src.calculators.value import estimate_value
from src.catalogue.loader import CatalogueIndex, available_entitlements, get_catalogue, relevant_entitlement_ids
from src.catalogue.rates import RateTable, get_rates
from src.eligibility.defaults import apply_homeless_defaults
from src.eligibility.engine import check_eligibility
from src.integrations.valuation import COUNCIL_TAX_REDUCTION_IDS, fetch_valuation
from src.schemas.entitlements import EntitlementBundle, EntitlementResult, ValueRange
from src.schemas.person import PersonData
from src.schemas.valuation import ExternalValuation

logger = logging.getLogger(__name__)


def build_bundle(
    person: PersonData,
    situations: Sequence[str],
    valuation: ExternalValuation | None = None,
    catalogue: CatalogueIndex | None = None,
    rates: RateTable | None = None,
) -> EntitlementBundle:
    """Resolve every entitlement for one person.

    Deterministic for the same inputs. Zero eligible schemes gives an empty
    bundle, not an error.
    """
    index = catalogue or get_catalogue()
    rate_table = rates or get_rates()
    subject = apply_homeless_defaults(person)

    # ── Candidates & eligibility ─────────────────────────────────────
    candidate_ids = relevant_entitlement_ids(situations, index)
    candidates = available_entitlements(candidate_ids, index, subject.nation)
    eligible = check_eligibility(candidates, subject, situations, rate_table)

    eligible_ids = {r.id for r in eligible}
    names = {d.id: d.name for d in index.entitlements}

    # ── Entitlement results ──────────────────────────────────────────
    results: list[EntitlementResult] = []
    for eligibility in eligible:
        definition = index.by_id[eligibility.id]
        council_tax_detail = None
        if valuation is not None and definition.id in COUNCIL_TAX_REDUCTION_IDS:
            council_tax_detail = valuation.council_tax_detail
        results.append(EntitlementResult(
            id=definition.id,
            name=definition.name,
            plain_description=definition.short_description,
            estimated_annual_value=estimate_value(definition, subject, valuation, rate_table),
            confidence=eligibility.confidence,
            difficulty=definition.claiming_difficulty,
            application_method=format_application_method(definition.application_method),
            application_url=definition.application_url,
            what_you_need=what_you_need(definition.id),
            timeline=timeline(definition.id),
            council_tax_detail=council_tax_detail,
        ))

    # ── Graph resolution ─────────────────────────────────────────────
    cascade = resolve_cascade(results, index.entitlements, index.dependency_edges)

    # Gateway notes name the gateway that owns each dependent; values are
    # unchanged, so resolving again places every scheme the same way.
    owners = {e.id: group.gateway_id for group in cascade.cascaded_entitlements for e in group.entitlements}
    results = [
        r.model_copy(update={
            "why_this_matters": why_this_matters(
                index.by_id[r.id], index.dependency_edges, eligible_ids, names, owners,
            ),
        })
        for r in results
    ]
    cascade = resolve_cascade(results, index.entitlements, index.dependency_edges)

    conflicts = resolve_conflicts(eligible_ids, index.conflict_edges, subject, valuation, names, rate_table)

    placed = cascade.all_entitlements()
    total = ValueRange(
        low=sum(e.estimated_annual_value.low for e in placed),
        high=sum(e.estimated_annual_value.high for e in placed),
    )

    action_plan = build_action_plan(
        cascade,
        situations,
        index.time_critical_situations,
        index.dependency_edges,
    )

    logger.info(
        "Bundle resolved: %d eligible, %d gateway(s), %d conflict(s)",
        len(placed),
        len(cascade.gateway_entitlements),
        len(conflicts),
    )

    return EntitlementBundle(
        total_estimated_annual_value=total,
        nation=subject.nation,
        rates_tax_year=rate_table.tax_year,
        gateway_entitlements=cascade.gateway_entitlements,
        cascaded_entitlements=cascade.cascaded_entitlements,
        independent_entitlements=cascade.independent_entitlements,
        conflicts=tuple(conflicts),
        action_plan=tuple(action_plan),
    )


async def resolve_entitlements(person: PersonData, situations: Sequence[str]) -> EntitlementBundle:
    """Fetch external figures (best effort), then build the bundle."""
    valuation = await fetch_valuation(person)
    return build_bundle(person, situations, valuation)
