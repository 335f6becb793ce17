"""Per-scheme eligibility rule functions.

Each function takes the person record, the life situations they reported and
the rate table, and returns an EligibilityResult. Rules are deliberately
coarse screening checks, not entitlement decisions: they say whether a scheme
is worth showing and how confident we are.

Unknown values never fail a rule by themselves. Each rule states its default:
pension-age checks read a missing age as 0, working-age checks as 30, and
missing income or capital counts as zero.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from decimal import Decimal

from src.calculators.income import band_at_most, band_rank, weekly_income
from src.catalogue.rates import RateTable
from src.models.enums import (
    ConfidenceTier,
    DisabilityBenefitLevel,
    EmploymentStatus,
    HousingTenure,
    IncomeBand,
    Nation,
    RelationshipStatus,
)
from src.schemas.entitlements import EligibilityResult
from src.schemas.person import PersonData

RuleCheck = Callable[[PersonData, Sequence[str], RateTable], EligibilityResult]

LIKELY = ConfidenceTier.LIKELY
POSSIBLE = ConfidenceTier.POSSIBLE
WORTH_CHECKING = ConfidenceTier.WORTH_CHECKING

_PENSION_AGE_DEFAULT = 0
_WORKING_AGE_DEFAULT = 30

# Disability benefits that make the cared-for person a qualifying person for Carer's Allowance
_CA_QUALIFYING_BENEFITS = frozenset({
    DisabilityBenefitLevel.DLA_MIDDLE_CARE,
    DisabilityBenefitLevel.DLA_HIGHER_CARE,
    DisabilityBenefitLevel.PIP_DAILY_LIVING_STANDARD,
    DisabilityBenefitLevel.PIP_DAILY_LIVING_ENHANCED,
    DisabilityBenefitLevel.ATTENDANCE_ALLOWANCE_LOWER,
    DisabilityBenefitLevel.ATTENDANCE_ALLOWANCE_HIGHER,
})

_HIGHER_MOBILITY = frozenset({
    DisabilityBenefitLevel.DLA_HIGHER_MOBILITY,
    DisabilityBenefitLevel.PIP_MOBILITY_ENHANCED,
})

_RENTING = frozenset({HousingTenure.RENT_SOCIAL, HousingTenure.RENT_PRIVATE})

# Nations where NHS prescriptions are free for everyone
_FREE_PRESCRIPTION_NATIONS = frozenset({Nation.SCOTLAND, Nation.WALES, Nation.NORTHERN_IRELAND})


def _result(
    scheme_id: str,
    eligible: bool,
    confidence: ConfidenceTier,
    reason: str | None = None,
) -> EligibilityResult:
    return EligibilityResult(id=scheme_id, eligible=eligible, confidence=confidence, reason=reason)


def _pension_age(person: PersonData) -> int:
    return person.age if person.age is not None else _PENSION_AGE_DEFAULT


def _working_age(person: PersonData) -> int:
    return person.age if person.age is not None else _WORKING_AGE_DEFAULT


def _is_unemployed(person: PersonData) -> bool:
    return person.employment_status == EmploymentStatus.UNEMPLOYED or bool(person.recently_redundant)


def _is_working(person: PersonData) -> bool:
    return person.employment_status in (EmploymentStatus.EMPLOYED, EmploymentStatus.SELF_EMPLOYED)


def _capital(person: PersonData) -> Decimal:
    return person.household_capital or Decimal("0")


def _expecting(person: PersonData) -> bool:
    return bool(person.is_pregnant or person.expecting_first_child)


# ── Pension-age care (Attendance Allowance / Pension Age Disability Payment) ──


def _pension_age_care(scheme_id: str) -> RuleCheck:
    """Care-needs rule for people over State Pension age.

    The scheme can be claimed by the subject or by the person they care for,
    so both are checked. Age >= SPA, missing subject age reads as 0. An
    unanswered daily-living question cannot rule the subject out, so it is
    worth checking; only an explicit "no" excludes.
    """

    def check(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
        spa = rates.state_pension_age
        cared_for = person.cared_for_person
        if cared_for is not None and cared_for.age >= spa and cared_for.needs_help_daily_living:
            return _result(scheme_id, True, POSSIBLE, "The person you care for is over State Pension age and needs help")
        if _pension_age(person) >= spa:
            if person.needs_help_with_daily_living:
                return _result(scheme_id, True, POSSIBLE, "Over State Pension age and needs help with daily living")
            if person.needs_help_with_daily_living is None:
                if person.has_disability_or_health_condition:
                    return _result(scheme_id, True, WORTH_CHECKING, "Health condition over State Pension age")
                return _result(scheme_id, True, WORTH_CHECKING, "Over State Pension age; depends on your care needs")
        return _result(scheme_id, False, WORTH_CHECKING)

    return check


# ── Pension Credit ──────────────────────────────────────────────────────────


def check_pension_credit(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    """Cared-for person >= SPA, or subject >= SPA with weekly income under the guarantee.

    Weekly income below the threshold is likely; below 120% of it is possible.
    """
    spa = rates.state_pension_age
    cared_for = person.cared_for_person
    if cared_for is not None and cared_for.age >= spa:
        return _result("pension_credit", True, POSSIBLE, "The person you care for is over State Pension age")

    if _pension_age(person) >= spa:
        key = "pension_credit_couple_weekly" if person.is_couple else "pension_credit_single_weekly"
        threshold = rates.get(key)
        income = weekly_income(person)
        if income < threshold:
            return _result("pension_credit", True, LIKELY, "Weekly income below the Pension Credit guarantee")
        if income < threshold * Decimal("1.2"):
            return _result("pension_credit", True, POSSIBLE, "Weekly income close to the Pension Credit guarantee")
    return _result("pension_credit", False, LIKELY)


# ── Universal Credit ────────────────────────────────────────────────────────


def check_universal_credit(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    """18 <= age < SPA (default 30), capital < limit, income band gated."""
    age = _working_age(person)
    if age < 18 or age >= rates.state_pension_age:
        return _result("universal_credit", False, LIKELY, "Universal Credit is for working-age adults")
    if _capital(person) >= rates.get("uc_capital_upper_limit"):
        return _result("universal_credit", False, LIKELY, "Savings above the Universal Credit capital limit")
    if band_at_most(person.income_band, IncomeBand.UNDER_25000):
        return _result("universal_credit", True, LIKELY, "Low household income")
    if person.income_band == IncomeBand.UNDER_50270:
        return _result("universal_credit", True, POSSIBLE, "Moderate household income")
    return _result("universal_credit", False, LIKELY)


# ── Carers ──────────────────────────────────────────────────────────────────


def check_carers_allowance(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    """Carer for >= 35 hours a week; likely when the cared-for person gets a qualifying benefit.

    20 to 34 hours for someone who needs daily help is worth checking, since
    informal carers often underestimate their hours.
    """
    if not person.is_carer:
        return _result("carers_allowance", False, LIKELY)
    hours = person.carer_hours_per_week or 0
    cared_for = person.cared_for_person
    if hours >= 35:
        if cared_for is not None and cared_for.disability_benefit in _CA_QUALIFYING_BENEFITS:
            return _result("carers_allowance", True, LIKELY, "35+ hours caring for someone on a qualifying benefit")
        return _result("carers_allowance", True, POSSIBLE, "35+ hours caring a week")
    if hours >= 20 and cared_for is not None and cared_for.needs_help_daily_living:
        return _result("carers_allowance", True, WORTH_CHECKING, "Caring hours close to the 35-hour threshold")
    return _result("carers_allowance", False, LIKELY)


def check_carers_credit(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if not person.is_carer:
        return _result("carers_credit", False, LIKELY)
    if (person.carer_hours_per_week or 0) >= 20:
        return _result("carers_credit", True, LIKELY, "Caring 20+ hours a week")
    if person.cared_for_person is not None and person.cared_for_person.needs_help_daily_living:
        return _result("carers_credit", True, WORTH_CHECKING)
    return _result("carers_credit", False, LIKELY)


# ── Children & pregnancy ────────────────────────────────────────────────────


def check_child_benefit(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if person.children:
        return _result("child_benefit", True, LIKELY, "Responsible for a child")
    if person.is_pregnant:
        return _result("child_benefit", True, LIKELY, "Claimable once the baby is born")
    return _result("child_benefit", False, LIKELY)


def check_free_school_meals(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    """A child aged 4 to 16 inclusive; lowest two income bands are likely."""
    if not any(4 <= c.age <= 16 for c in person.children):
        return _result("free_school_meals", False, LIKELY)
    if band_at_most(person.income_band, IncomeBand.UNDER_12570):
        return _result("free_school_meals", True, LIKELY, "School-age child and a very low income")
    return _result("free_school_meals", True, POSSIBLE, "School-age child")


def check_tax_free_childcare(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    """A child under 12 (or a baby on the way) and the subject is in work."""
    if not any(c.age < 12 for c in person.children) and not _expecting(person):
        return _result("tax_free_childcare", False, LIKELY)
    if _is_working(person):
        return _result("tax_free_childcare", True, POSSIBLE, "Working parent of a young child")
    return _result("tax_free_childcare", False, LIKELY)


def check_free_childcare_15hrs(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if any(3 <= c.age <= 4 for c in person.children):
        return _result("free_childcare_15hrs_universal", True, LIKELY, "Child aged 3 or 4")
    return _result("free_childcare_15hrs_universal", False, LIKELY)


def check_free_childcare_30hrs(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    """Child under 5 (age 0 covers the 9-month start) and the subject is in work."""
    if any(c.age < 5 for c in person.children) and _is_working(person):
        return _result("free_childcare_30hrs", True, POSSIBLE, "Working parent of a pre-school child")
    return _result("free_childcare_30hrs", False, LIKELY)


def check_dla_child(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if any(c.has_additional_needs and c.age < 16 for c in person.children):
        return _result("dla_child", True, POSSIBLE, "Child under 16 with additional needs")
    return _result("dla_child", False, LIKELY)


def check_ehcp_assessment(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if any(c.has_additional_needs for c in person.children):
        return _result("ehcp_assessment", True, LIKELY, "Child with additional needs")
    return _result("ehcp_assessment", False, LIKELY)


def check_healthy_start(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if not person.is_pregnant and not any(c.age < 4 for c in person.children):
        return _result("healthy_start", False, LIKELY)
    if band_at_most(person.income_band, IncomeBand.UNDER_16000):
        return _result("healthy_start", True, LIKELY, "Pregnant or child under 4 on a low income")
    return _result("healthy_start", True, POSSIBLE, "Pregnant or child under 4")


def check_maternity_allowance(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    """Employed people usually get Statutory Maternity Pay instead, so only worth checking."""
    if not _expecting(person):
        return _result("maternity_allowance", False, LIKELY)
    if person.employment_status == EmploymentStatus.EMPLOYED:
        return _result("maternity_allowance", True, WORTH_CHECKING, "Fallback if you cannot get Statutory Maternity Pay")
    return _result("maternity_allowance", True, POSSIBLE, "Pregnant and not employed")


def check_sure_start_grant(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    """Pregnant or a baby under 1, no older children, and a low income."""
    baby_due_or_born = bool(person.is_pregnant) or any(c.age == 0 for c in person.children)
    first_child = bool(person.expecting_first_child) or all(c.age == 0 for c in person.children)
    if not baby_due_or_born or not first_child:
        return _result("sure_start_maternity_grant", False, LIKELY)
    if band_at_most(person.income_band, IncomeBand.UNDER_16000) or _is_unemployed(person):
        return _result("sure_start_maternity_grant", True, POSSIBLE, "First baby on a low income")
    return _result("sure_start_maternity_grant", False, WORTH_CHECKING)


# ── Council tax ─────────────────────────────────────────────────────────────


def check_council_tax_reduction_full(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    """Pension-age scheme: age >= SPA, missing age reads as 0."""
    if _pension_age(person) < rates.state_pension_age:
        return _result("council_tax_reduction_full", False, LIKELY)
    return _result("council_tax_reduction_full", True, POSSIBLE, "Over State Pension age")


def check_council_tax_support_working_age(
    person: PersonData, situations: Sequence[str], rates: RateTable,
) -> EligibilityResult:
    """Working-age scheme: age < SPA, missing age reads as 30.

    Every council runs its own scheme, so the best we can say is possible.
    """
    if _working_age(person) >= rates.state_pension_age:
        return _result("council_tax_support_working_age", False, LIKELY)
    return _result("council_tax_support_working_age", True, POSSIBLE, "Local scheme for working-age households")


def _national_council_tax_reduction(scheme_id: str) -> RuleCheck:
    """Scotland and Wales run one national scheme for all ages."""

    def check(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
        if _pension_age(person) >= rates.state_pension_age:
            return _result(scheme_id, True, POSSIBLE, "Over State Pension age")
        if band_at_most(person.income_band, IncomeBand.UNDER_25000) or _is_unemployed(person):
            return _result(scheme_id, True, POSSIBLE, "Low household income")
        return _result(scheme_id, False, WORTH_CHECKING)

    return check


def check_single_person_discount(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if person.relationship_status in (RelationshipStatus.SINGLE, RelationshipStatus.WIDOWED):
        return _result("council_tax_single_person_discount", True, LIKELY, "Only adult in the home")
    return _result("council_tax_single_person_discount", False, LIKELY)


def check_council_tax_disability_reduction(
    person: PersonData, situations: Sequence[str], rates: RateTable,
) -> EligibilityResult:
    if person.has_disability_or_health_condition or any(c.has_additional_needs for c in person.children):
        return _result("council_tax_disability_reduction", True, POSSIBLE, "Disabled resident in the home")
    return _result("council_tax_disability_reduction", False, LIKELY)


# ── Energy ──────────────────────────────────────────────────────────────────


def check_warm_home_discount(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if _pension_age(person) >= rates.state_pension_age:
        return _result("warm_home_discount", True, POSSIBLE, "Over State Pension age")
    if band_at_most(person.income_band, IncomeBand.UNDER_16000):
        return _result("warm_home_discount", True, POSSIBLE, "Low household income")
    return _result("warm_home_discount", False, WORTH_CHECKING)


def check_winter_fuel_payment(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    """Paid to everyone over SPA, but recovered through tax above £35,000 income."""
    if _pension_age(person) < rates.state_pension_age:
        return _result("winter_fuel_payment", False, LIKELY)
    rank = band_rank(person.income_band)
    if rank is not None and rank > band_rank(IncomeBand.UNDER_50270):
        return _result("winter_fuel_payment", True, WORTH_CHECKING, "Paid but recovered through tax on higher incomes")
    return _result("winter_fuel_payment", True, LIKELY, "Over State Pension age")


def check_cold_weather_payment(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if band_at_most(person.income_band, IncomeBand.UNDER_16000):
        return _result("cold_weather_payment", True, POSSIBLE, "Paid automatically with qualifying benefits")
    return _result("cold_weather_payment", False, WORTH_CHECKING)


def check_social_tariff(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if band_at_most(person.income_band, IncomeBand.UNDER_25000):
        return _result("social_tariff_broadband", True, POSSIBLE, "Low household income")
    return _result("social_tariff_broadband", False, WORTH_CHECKING)


# ── Disability & mobility ───────────────────────────────────────────────────


def _working_age_disability(scheme_id: str) -> RuleCheck:
    """16 <= age < SPA (default 30) with a disability or long-term condition."""

    def check(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
        age = _working_age(person)
        if age < 16 or age >= rates.state_pension_age:
            return _result(scheme_id, False, LIKELY)
        if person.has_disability_or_health_condition:
            return _result(scheme_id, True, POSSIBLE, "Working-age adult with a health condition")
        return _result(scheme_id, False, LIKELY)

    return check


def check_blue_badge(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if person.disability_benefit_received in _HIGHER_MOBILITY:
        return _result("blue_badge", True, LIKELY, "Automatic with the higher mobility rate")
    if person.mobility_difficulty:
        return _result("blue_badge", True, POSSIBLE, "Difficulty getting around")
    return _result("blue_badge", False, LIKELY)


def check_motability_scheme(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if person.disability_benefit_received in _HIGHER_MOBILITY:
        return _result("motability_scheme", True, LIKELY, "Higher mobility rate in payment")
    return _result("motability_scheme", False, LIKELY)


def check_vehicle_tax_exemption(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    """Full exemption on the higher mobility rate, 50% off on the PIP standard rate."""
    if person.disability_benefit_received in _HIGHER_MOBILITY:
        return _result("vehicle_excise_duty_exemption", True, LIKELY, "Higher mobility rate in payment")
    if person.disability_benefit_received == DisabilityBenefitLevel.PIP_MOBILITY_STANDARD:
        return _result("vehicle_excise_duty_exemption", True, POSSIBLE, "50% reduction on the standard mobility rate")
    return _result("vehicle_excise_duty_exemption", False, LIKELY)


def check_concessionary_bus_travel(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if _pension_age(person) >= rates.state_pension_age:
        return _result("concessionary_bus_travel", True, LIKELY, "Over State Pension age")
    if person.mobility_difficulty or (
        person.disability_benefit_received not in (None, DisabilityBenefitLevel.NONE)
    ):
        return _result("concessionary_bus_travel", True, POSSIBLE, "Disabled person's bus pass")
    return _result("concessionary_bus_travel", False, LIKELY)


# ── Bereavement & pensions ──────────────────────────────────────────────────


def check_bereavement_support(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if person.is_bereaved and person.deceased_relationship == "partner":
        return _result("bereavement_support_payment", True, POSSIBLE, "Your partner has died")
    if person.relationship_status == RelationshipStatus.WIDOWED:
        return _result("bereavement_support_payment", True, POSSIBLE, "Widowed")
    return _result("bereavement_support_payment", False, LIKELY)


def check_ni_voluntary_contributions(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    """50 <= age < SPA (default 30)."""
    age = _working_age(person)
    if 50 <= age < rates.state_pension_age:
        return _result("ni_voluntary_contributions", True, WORTH_CHECKING, "Gaps in your record could reduce your State Pension")
    return _result("ni_voluntary_contributions", False, LIKELY)


def check_state_pension(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if _pension_age(person) >= rates.state_pension_age:
        return _result("state_pension", True, LIKELY, "Over State Pension age")
    return _result("state_pension", False, LIKELY)


def check_marriage_allowance(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if person.relationship_status not in (RelationshipStatus.COUPLE_MARRIED, RelationshipStatus.COUPLE_CIVIL_PARTNER):
        return _result("marriage_allowance", False, LIKELY)
    return _result("marriage_allowance", True, POSSIBLE, "Married or in a civil partnership")


# ── Health costs ────────────────────────────────────────────────────────────


def check_free_prescriptions(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    """Free for all outside England; in England 60+, pregnancy, exemptions or low income."""
    if person.nation in _FREE_PRESCRIPTION_NATIONS:
        return _result("free_nhs_prescriptions", True, LIKELY, "Prescriptions are free where you live")
    if _pension_age(person) >= 60 or person.is_pregnant or person.has_medical_exemption:
        return _result("free_nhs_prescriptions", True, LIKELY, "Exempt from prescription charges")
    if band_at_most(person.income_band, IncomeBand.UNDER_16000) or _is_unemployed(person):
        return _result("free_nhs_prescriptions", True, POSSIBLE, "Low income")
    return _result("free_nhs_prescriptions", False, LIKELY)


def check_free_dental(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if person.is_pregnant or any(c.age == 0 for c in person.children):
        return _result("free_nhs_dental", True, LIKELY, "Pregnant or had a baby in the last year")
    if band_at_most(person.income_band, IncomeBand.UNDER_16000) or _is_unemployed(person):
        return _result("free_nhs_dental", True, POSSIBLE, "Low income")
    return _result("free_nhs_dental", False, LIKELY)


def check_free_sight_tests(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if _pension_age(person) >= 60:
        return _result("free_nhs_sight_tests", True, LIKELY, "Aged 60 or over")
    if band_at_most(person.income_band, IncomeBand.UNDER_16000) or _is_unemployed(person):
        return _result("free_nhs_sight_tests", True, POSSIBLE, "Low income")
    return _result("free_nhs_sight_tests", False, LIKELY)


def check_nhs_low_income_scheme(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    """Capital under the scheme limit (unknown counts as zero) and a low income."""
    if _capital(person) >= rates.get("nhs_low_income_capital_limit"):
        return _result("nhs_low_income_scheme", False, LIKELY)
    if band_at_most(person.income_band, IncomeBand.UNDER_25000) or _is_unemployed(person):
        return _result("nhs_low_income_scheme", True, POSSIBLE, "Low income")
    return _result("nhs_low_income_scheme", False, WORTH_CHECKING)


# ── Housing & work ──────────────────────────────────────────────────────────


def check_housing_benefit(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    """Pension-age renters only; working-age rent help goes through Universal Credit."""
    if _pension_age(person) < rates.state_pension_age or person.housing_tenure not in _RENTING:
        return _result("housing_benefit_legacy", False, LIKELY)
    if band_at_most(person.income_band, IncomeBand.UNDER_16000):
        return _result("housing_benefit_legacy", True, LIKELY, "Pension-age renter on a low income")
    return _result("housing_benefit_legacy", True, POSSIBLE, "Pension-age renter")


def check_support_mortgage_interest(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    if person.housing_tenure != HousingTenure.MORTGAGE:
        return _result("support_mortgage_interest", False, LIKELY)
    if _is_unemployed(person) or band_at_most(person.income_band, IncomeBand.UNDER_16000):
        return _result("support_mortgage_interest", True, POSSIBLE, "Mortgage and a low income")
    return _result("support_mortgage_interest", False, WORTH_CHECKING)


def check_new_style_jsa(person: PersonData, situations: Sequence[str], rates: RateTable) -> EligibilityResult:
    """18 <= age < SPA (default 30), out of work, not known to lack NI contributions."""
    age = _working_age(person)
    if age < 18 or age >= rates.state_pension_age or not _is_unemployed(person):
        return _result("jobseekers_allowance_new_style", False, LIKELY)
    if person.ni_contribution_years == 0:
        return _result("jobseekers_allowance_new_style", False, LIKELY, "Needs recent National Insurance contributions")
    return _result("jobseekers_allowance_new_style", True, POSSIBLE, "Recently out of work")


# ── Registry ────────────────────────────────────────────────────────────────

RULE_CHECKS: dict[str, RuleCheck] = {
    "attendance_allowance": _pension_age_care("attendance_allowance"),
    "pension_age_disability_payment": _pension_age_care("pension_age_disability_payment"),
    "pension_credit": check_pension_credit,
    "universal_credit": check_universal_credit,
    "carers_allowance": check_carers_allowance,
    "carers_credit": check_carers_credit,
    "child_benefit": check_child_benefit,
    "free_school_meals": check_free_school_meals,
    "tax_free_childcare": check_tax_free_childcare,
    "free_childcare_15hrs_universal": check_free_childcare_15hrs,
    "free_childcare_30hrs": check_free_childcare_30hrs,
    "dla_child": check_dla_child,
    "ehcp_assessment": check_ehcp_assessment,
    "healthy_start": check_healthy_start,
    "maternity_allowance": check_maternity_allowance,
    "sure_start_maternity_grant": check_sure_start_grant,
    "council_tax_reduction_full": check_council_tax_reduction_full,
    "council_tax_support_working_age": check_council_tax_support_working_age,
    "council_tax_reduction_scotland": _national_council_tax_reduction("council_tax_reduction_scotland"),
    "council_tax_reduction_wales": _national_council_tax_reduction("council_tax_reduction_wales"),
    "council_tax_single_person_discount": check_single_person_discount,
    "council_tax_disability_reduction": check_council_tax_disability_reduction,
    "warm_home_discount": check_warm_home_discount,
    "winter_fuel_payment": check_winter_fuel_payment,
    "cold_weather_payment": check_cold_weather_payment,
    "social_tariff_broadband": check_social_tariff,
    "pip": _working_age_disability("pip"),
    "adult_disability_payment": _working_age_disability("adult_disability_payment"),
    "blue_badge": check_blue_badge,
    "motability_scheme": check_motability_scheme,
    "vehicle_excise_duty_exemption": check_vehicle_tax_exemption,
    "concessionary_bus_travel": check_concessionary_bus_travel,
    "bereavement_support_payment": check_bereavement_support,
    "ni_voluntary_contributions": check_ni_voluntary_contributions,
    "state_pension": check_state_pension,
    "marriage_allowance": check_marriage_allowance,
    "free_nhs_prescriptions": check_free_prescriptions,
    "free_nhs_dental": check_free_dental,
    "free_nhs_sight_tests": check_free_sight_tests,
    "nhs_low_income_scheme": check_nhs_low_income_scheme,
    "housing_benefit_legacy": check_housing_benefit,
    "support_mortgage_interest": check_support_mortgage_interest,
    "jobseekers_allowance_new_style": check_new_style_jsa,
}
