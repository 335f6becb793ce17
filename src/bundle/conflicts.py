"""Conflict resolver: guidance for eligible schemes that cannot both be claimed.

Most pairs carry their own resolution text in the catalogue. A few well-known
pairs need a real recommendation and are registered in CONFLICT_RESOLVERS,
keyed by the unordered id pair so edge direction never matters.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Mapping, Sequence

from src.calculators.income import band_at_most, to_pounds
from src.catalogue.rates import MissingRateError, RateTable, get_rates
from src.models.enums import IncomeBand
from src.schemas.catalogue import ConflictEdge
from src.schemas.entitlements import ConflictResolution
from src.schemas.person import PersonData
from src.schemas.valuation import ExternalValuation

logger = logging.getLogger(__name__)

ConflictResolver = Callable[[PersonData, ExternalValuation | None, RateTable], ConflictResolution]


def _pair(a: str, b: str) -> frozenset[str]:
    return frozenset((a, b))


def _age(person: PersonData) -> int:
    return person.age if person.age is not None else 0


# ── Tax-Free Childcare vs Universal Credit childcare element ────────────────

_TFC_UC_REASONING = (
    "You can only use one of these. The Universal Credit childcare element refunds 85% of "
    "childcare costs, which usually suits lower incomes. Tax-Free Childcare adds 20% to what "
    "you pay in, up to £2,000 per child per year."
)


def _tfc_vs_uc(person: PersonData, valuation: ExternalValuation | None, rates: RateTable) -> ConflictResolution:
    """Compare precise figures when available, otherwise go by income band."""
    recommendation: str
    value_difference: int | None = None

    uc_childcare = valuation.uc_childcare_element if valuation is not None else None
    if uc_childcare is not None:
        young_children = sum(1 for c in person.children if c.age < 12)
        tfc_cap = to_pounds(rates.get("tax_free_childcare_max_per_child") * max(1, young_children))
        value_difference = abs(uc_childcare - tfc_cap)
        if uc_childcare >= tfc_cap:
            recommendation = (
                f"The Universal Credit childcare element (£{uc_childcare:,} a year) is worth more than "
                f"Tax-Free Childcare (up to £{tfc_cap:,} a year)."
            )
        else:
            recommendation = (
                f"Tax-Free Childcare (up to £{tfc_cap:,} a year) is worth more than the "
                f"Universal Credit childcare element (£{uc_childcare:,} a year)."
            )
    elif band_at_most(person.income_band, IncomeBand.UNDER_25000):
        recommendation = (
            "The Universal Credit childcare element is likely better at your income level: "
            "it covers 85% of childcare costs."
        )
    else:
        recommendation = "Tax-Free Childcare (20% government top-up) may be better at your income level. Check both."

    return ConflictResolution(
        option_a="Tax-Free Childcare",
        option_a_id="tax_free_childcare",
        option_b="Universal Credit childcare element",
        option_b_id="universal_credit",
        recommendation=recommendation,
        reasoning=_TFC_UC_REASONING,
        value_difference=value_difference,
    )


# ── Age-dependent pairs ─────────────────────────────────────────────────────


def _pc_vs_uc(person: PersonData, valuation: ExternalValuation | None, rates: RateTable) -> ConflictResolution:
    if _age(person) >= rates.state_pension_age:
        recommendation = "At your age, Pension Credit is the right route, not Universal Credit."
    else:
        recommendation = "At your age, Universal Credit is the right route, not Pension Credit."
    return ConflictResolution(
        option_a="Pension Credit",
        option_a_id="pension_credit",
        option_b="Universal Credit",
        option_b_id="universal_credit",
        recommendation=recommendation,
        reasoning=(
            "These depend on age and cannot both be claimed. Under State Pension age you claim "
            "Universal Credit; over it, Pension Credit. Mixed-age couples generally claim Universal Credit."
        ),
    )


def _pip_vs_aa(person: PersonData, valuation: ExternalValuation | None, rates: RateTable) -> ConflictResolution:
    if _age(person) >= rates.state_pension_age:
        recommendation = "At your age, Attendance Allowance is the right route."
    else:
        recommendation = "At your age, Personal Independence Payment (PIP) is the right route."
    return ConflictResolution(
        option_a="Personal Independence Payment",
        option_a_id="pip",
        option_b="Attendance Allowance",
        option_b_id="attendance_allowance",
        recommendation=recommendation,
        reasoning=(
            "These depend on age. Under State Pension age you claim PIP; over it, Attendance "
            "Allowance. Neither is means-tested."
        ),
    )


# ── Carer's Allowance vs State Pension ──────────────────────────────────────


def _ca_vs_sp(person: PersonData, valuation: ExternalValuation | None, rates: RateTable) -> ConflictResolution:
    """Always claim Carer's Allowance, even when State Pension is paid instead."""
    return ConflictResolution(
        option_a="Carer's Allowance",
        option_a_id="carers_allowance",
        option_b="State Pension",
        option_b_id="state_pension",
        recommendation=(
            "Claim Carer's Allowance even if your State Pension is higher. The underlying "
            "entitlement unlocks carer premiums and other help."
        ),
        reasoning=(
            "You cannot be paid both, but having an underlying entitlement to Carer's Allowance "
            "unlocks Carer's Credit, the Universal Credit or Pension Credit carer addition and "
            "council tax discounts."
        ),
    )


CONFLICT_RESOLVERS: dict[frozenset[str], ConflictResolver] = {
    _pair("tax_free_childcare", "universal_credit"): _tfc_vs_uc,
    _pair("pension_credit", "universal_credit"): _pc_vs_uc,
    _pair("pip", "attendance_allowance"): _pip_vs_aa,
    _pair("carers_allowance", "state_pension"): _ca_vs_sp,
}


def _generic(edge: ConflictEdge, names: Mapping[str, str]) -> ConflictResolution:
    first, second = sorted(edge.between)
    return ConflictResolution(
        option_a=names.get(first, first),
        option_a_id=first,
        option_b=names.get(second, second),
        option_b_id=second,
        recommendation=edge.resolution,
        reasoning=edge.resolution,
    )


def resolve_conflicts(
    eligible_ids: Collection[str],
    conflict_edges: Sequence[ConflictEdge],
    person: PersonData,
    valuation: ExternalValuation | None = None,
    names: Mapping[str, str] | None = None,
    rates: RateTable | None = None,
) -> list[ConflictResolution]:
    """One resolution per conflicting pair whose members are both eligible.

    Pairs are matched unordered, and a pair listed more than once in the
    catalogue is resolved once, from its first edge.
    """
    rate_table = rates or get_rates()
    labels = names or {}
    seen: set[frozenset[str]] = set()
    resolutions: list[ConflictResolution] = []

    for edge in conflict_edges:
        key = _pair(*edge.between)
        if key in seen or len(key) != 2:
            continue
        if not all(i in eligible_ids for i in key):
            continue
        seen.add(key)

        resolver = CONFLICT_RESOLVERS.get(key)
        if resolver is None:
            resolutions.append(_generic(edge, labels))
            continue
        try:
            resolutions.append(resolver(person, valuation, rate_table))
        except MissingRateError as exc:
            logger.warning("Rate %s missing, using catalogue text for conflict %s", exc.args[0], sorted(key))
            resolutions.append(_generic(edge, labels))

    return resolutions
