"""Annual value estimation for an eligible scheme.

Resolution order:
  1. a positive precise figure from an external valuation service (low == high)
  2. a scheme-specific heuristic over the rate table
  3. the catalogue's static range
  4. zero

Heuristics work in Decimal and round to whole pounds (half up) once, at the
end. A heuristic that needs a rate missing from the table is skipped and the
catalogue range is used instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal

from src.calculators.income import to_pounds, weekly_income
from src.catalogue.rates import MissingRateError, RateTable, get_rates
from src.models.enums import EmploymentStatus
from src.schemas.catalogue import EntitlementDefinition
from src.schemas.entitlements import ValueRange
from src.schemas.person import PersonData
from src.schemas.valuation import ExternalValuation

logger = logging.getLogger(__name__)

Heuristic = Callable[[PersonData, RateTable], tuple[Decimal, Decimal] | None]

WEEKS = Decimal("52")
MONTHS = Decimal("12")

# Income-gap multipliers for means-tested top-ups
GAP_LOW = Decimal("0.5")
GAP_HIGH = Decimal("1.0")

# Funded early-years weeks and the share of the hourly rate used for the low end
_CHILDCARE_WEEKS = Decimal("38")
_CHILDCARE_LOW_SHARE = Decimal("0.7")

# Assumed monthly housing costs when none were given
_DEFAULT_RENT = Decimal("500")
_DEFAULT_MORTGAGE = Decimal("800")

_FULL_NI_YEARS = 35
_MIN_NI_YEARS = 10


def _range(low: Decimal, high: Decimal) -> ValueRange:
    """Round both ends and keep them ordered."""
    a, b = to_pounds(low), to_pounds(high)
    return ValueRange(low=min(a, b), high=max(a, b))


# ── Heuristics ──────────────────────────────────────────────────────────────


def _attendance_allowance(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    return (
        rates.get("attendance_allowance_lower_weekly") * WEEKS,
        rates.get("attendance_allowance_higher_weekly") * WEEKS,
    )


def _pension_credit(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    """Gap between weekly income and the guarantee, annualised."""
    key = "pension_credit_couple_weekly" if person.is_couple else "pension_credit_single_weekly"
    gap = max(Decimal("0"), rates.get(key) - weekly_income(person))
    return gap * GAP_LOW * WEEKS, gap * GAP_HIGH * WEEKS


def _carers_allowance(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    annual = rates.get("carers_allowance_weekly") * WEEKS
    return annual, annual


def _child_benefit(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal] | None:
    n = len(person.children)
    if n == 0:
        return None
    annual = rates.get("child_benefit_first_child_weekly") * WEEKS
    annual += (n - 1) * rates.get("child_benefit_additional_child_weekly") * WEEKS
    return annual, annual


def _universal_credit(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    """Standard allowance plus child, carer and LCWRA elements.

    Low end is six months' worth to allow for the earnings taper.
    """
    age = person.age if person.age is not None else 30
    household = "couple" if person.is_couple else "single"
    bracket = "25_plus" if age >= 25 else "under_25"
    monthly = rates.get(f"uc_standard_allowance_{household}_{bracket}_monthly")

    n = len(person.children)
    if n >= 1:
        monthly += rates.get("uc_child_element_first_monthly")
    if n >= 2:
        monthly += (n - 1) * rates.get("uc_child_element_subsequent_monthly")
    if person.is_carer and (person.carer_hours_per_week or 0) >= 35:
        monthly += rates.get("uc_carer_element_monthly")
    if person.employment_status == EmploymentStatus.SICK_DISABLED:
        monthly += rates.get("uc_lcwra_element_monthly")

    return monthly * 6, monthly * MONTHS


def _marriage_allowance(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    annual = rates.get("marriage_allowance_annual_value")
    return annual, annual + rates.get("marriage_allowance_max_backdate_value")


def _warm_home_discount(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    amount = rates.get("warm_home_discount_amount")
    return amount, amount


def _pip(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    return (
        rates.get("pip_daily_living_standard_weekly") * WEEKS,
        (rates.get("pip_daily_living_enhanced_weekly") + rates.get("pip_mobility_enhanced_weekly")) * WEEKS,
    )


def _dla_child(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    return (
        rates.get("dla_care_lowest_weekly") * WEEKS,
        (rates.get("dla_care_highest_weekly") + rates.get("dla_mobility_higher_weekly")) * WEEKS,
    )


def _healthy_start(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    annual = rates.get("healthy_start_weekly") * WEEKS
    return annual, annual


def _free_school_meals(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    per_child = rates.get("free_school_meals_estimated_annual_value")
    school_age = sum(1 for c in person.children if 4 <= c.age <= 16)
    return per_child, per_child * max(1, school_age)


def _prescriptions(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    charge = rates.get("nhs_prescription_charge")
    return charge * 4, charge * 12


def _dental(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    return rates.get("nhs_dental_band_1"), rates.get("nhs_dental_band_3")


def _sight_tests(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    cost = rates.get("nhs_sight_test_cost")
    return cost, cost * 2


def _childcare_hours(hours: int) -> Heuristic:
    def estimate(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
        full = hours * _CHILDCARE_WEEKS * rates.get("free_childcare_hourly_rate")
        return full * _CHILDCARE_LOW_SHARE, full

    return estimate


def _sure_start(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    grant = rates.get("sure_start_maternity_grant")
    return grant, grant


def _maternity_allowance(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    weeks = rates.get("maternity_allowance_weeks")
    return (
        rates.get("maternity_allowance_lower_weekly") * weeks,
        rates.get("maternity_allowance_standard_weekly") * weeks,
    )


def _bereavement_support(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    """First-year value: lump sum plus twelve monthly payments."""
    return (
        rates.get("bereavement_support_lower_lump_sum") + rates.get("bereavement_support_lower_monthly") * MONTHS,
        rates.get("bereavement_support_higher_lump_sum") + rates.get("bereavement_support_higher_monthly") * MONTHS,
    )


def _winter_fuel(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    return rates.get("winter_fuel_payment_under_80"), rates.get("winter_fuel_payment_80_plus")


def _cold_weather(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    per_period = rates.get("cold_weather_payment_per_period")
    return per_period, per_period * 6


def _state_pension(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    """Full new State Pension, pro-rated by qualifying years when known."""
    full = rates.get("state_pension_full_new_weekly") * WEEKS
    years = person.ni_contribution_years
    if years is None:
        return full * _MIN_NI_YEARS / _FULL_NI_YEARS, full
    share = full * min(years, _FULL_NI_YEARS) / _FULL_NI_YEARS
    return share, share


def _housing_benefit(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    rent = person.monthly_housing_cost or _DEFAULT_RENT
    return rent * 6, rent * MONTHS


def _mortgage_interest(person: PersonData, rates: RateTable) -> tuple[Decimal, Decimal]:
    mortgage = person.monthly_housing_cost or _DEFAULT_MORTGAGE
    return mortgage * Decimal("0.3") * MONTHS, mortgage * Decimal("0.6") * MONTHS


VALUE_HEURISTICS: dict[str, Heuristic] = {
    "attendance_allowance": _attendance_allowance,
    "pension_age_disability_payment": _attendance_allowance,
    "pension_credit": _pension_credit,
    "carers_allowance": _carers_allowance,
    "child_benefit": _child_benefit,
    "universal_credit": _universal_credit,
    "marriage_allowance": _marriage_allowance,
    "warm_home_discount": _warm_home_discount,
    "pip": _pip,
    "adult_disability_payment": _pip,
    "dla_child": _dla_child,
    "healthy_start": _healthy_start,
    "free_school_meals": _free_school_meals,
    "free_nhs_prescriptions": _prescriptions,
    "free_nhs_dental": _dental,
    "free_nhs_sight_tests": _sight_tests,
    "free_childcare_15hrs_universal": _childcare_hours(15),
    "free_childcare_30hrs": _childcare_hours(30),
    "sure_start_maternity_grant": _sure_start,
    "maternity_allowance": _maternity_allowance,
    "bereavement_support_payment": _bereavement_support,
    "winter_fuel_payment": _winter_fuel,
    "cold_weather_payment": _cold_weather,
    "state_pension": _state_pension,
    "housing_benefit_legacy": _housing_benefit,
    "support_mortgage_interest": _mortgage_interest,
}


# ── Public API ──────────────────────────────────────────────────────────────


def estimate_value(
    definition: EntitlementDefinition,
    person: PersonData,
    valuation: ExternalValuation | None = None,
    rates: RateTable | None = None,
) -> ValueRange:
    """Estimated annual value of one scheme for this person."""
    if valuation is not None:
        precise = valuation.precise_figure(definition.id)
        if precise is not None:
            return ValueRange(low=precise, high=precise)

    heuristic = VALUE_HEURISTICS.get(definition.id)
    if heuristic is not None:
        try:
            estimate = heuristic(person, rates or get_rates())
        except MissingRateError as exc:
            logger.warning("Rate %s missing, using catalogue range for %s", exc.args[0], definition.id)
            estimate = None
        if estimate is not None:
            return _range(*estimate)

    if definition.estimated_annual_value_range is not None:
        low, high = definition.estimated_annual_value_range
        return ValueRange(low=min(low, high), high=max(low, high))

    return ValueRange(low=0, high=0)
