"""Tests for the annual value estimator.

Expected figures are worked by hand from the bundled 2025-26 rate table.
"""

from __future__ import annotations

from decimal import Decimal

from src.calculators.value import estimate_value
from src.catalogue.loader import get_catalogue
from src.catalogue.rates import get_rates, rate_table_from_mapping
from src.models.enums import EmploymentStatus, RelationshipStatus
from src.schemas.catalogue import EntitlementDefinition
from src.schemas.person import ChildData, PersonData
from src.schemas.valuation import ExternalValuation

RATES = get_rates()


def _value(scheme_id: str, person: PersonData, valuation: ExternalValuation | None = None):
    return estimate_value(get_catalogue().get(scheme_id), person, valuation, RATES)


class TestFlatRates:
    def test_attendance_allowance(self) -> None:
        # 73.90 x 52 = 3842.80, 110.40 x 52 = 5740.80
        value = _value("attendance_allowance", PersonData(age=80))
        assert (value.low, value.high) == (3843, 5741)

    def test_carers_allowance(self) -> None:
        # 83.30 x 52 = 4331.60
        value = _value("carers_allowance", PersonData())
        assert (value.low, value.high) == (4332, 4332)


class TestChildBenefit:
    def test_one_child(self) -> None:
        value = _value("child_benefit", PersonData(children=(ChildData(age=2),)))
        assert value.low == value.high == 1355

    def test_additional_children_at_lower_rate(self) -> None:
        # (26.05 + 17.25) x 52 = 2251.60
        kids = (ChildData(age=2), ChildData(age=5))
        assert _value("child_benefit", PersonData(children=kids)).high == 2252

    def test_no_children_uses_catalogue_range(self) -> None:
        definition = get_catalogue().get("child_benefit")
        value = estimate_value(definition, PersonData(is_pregnant=True), None, RATES)
        assert (value.low, value.high) == definition.estimated_annual_value_range


class TestMeansTested:
    def test_pension_credit_income_gap(self) -> None:
        # gap 227.10 a week: low 227.10 x 0.5 x 52 = 5904.60, high 227.10 x 52 = 11809.20
        value = _value("pension_credit", PersonData(age=70, gross_annual_income=Decimal("0")))
        assert (value.low, value.high) == (5905, 11809)

    def test_pension_credit_couple_gap_ignores_partner_income(self) -> None:
        # gap 346.60 a week: low 346.60 x 0.5 x 52 = 9011.60, high 346.60 x 52 = 18023.20
        person = PersonData(
            age=70,
            relationship_status=RelationshipStatus.COUPLE_MARRIED,
            gross_annual_income=Decimal("0"),
            partner_gross_annual_income=Decimal("30000"),
        )
        value = _value("pension_credit", person)
        assert (value.low, value.high) == (9012, 18023)

    def test_pension_credit_gap_never_negative(self) -> None:
        value = _value("pension_credit", PersonData(age=70, gross_annual_income=Decimal("50000")))
        assert (value.low, value.high) == (0, 0)

    def test_universal_credit_single_adult(self) -> None:
        # 400.14 x 6 = 2400.84, 400.14 x 12 = 4801.68
        value = _value("universal_credit", PersonData(age=30))
        assert (value.low, value.high) == (2401, 4802)

    def test_universal_credit_under_25_couple_with_children(self) -> None:
        person = PersonData(
            age=22,
            relationship_status=RelationshipStatus.COUPLE_COHABITING,
            children=(ChildData(age=1), ChildData(age=3)),
        )
        # (497.55 + 339.00 + 292.81) x 12 = 13552.32
        assert _value("universal_credit", person).high == 13552

    def test_universal_credit_lcwra_element(self) -> None:
        person = PersonData(age=30, employment_status=EmploymentStatus.SICK_DISABLED)
        # (400.14 + 423.27) x 12 = 9880.92
        assert _value("universal_credit", person).high == 9881


class TestOtherHeuristics:
    def test_funded_childcare_rounds_half_up(self) -> None:
        # 15 x 38 x 5.50 = 3135.00; low share 0.7 = 2194.50
        value = _value("free_childcare_15hrs_universal", PersonData(children=(ChildData(age=3),)))
        assert (value.low, value.high) == (2195, 3135)

    def test_state_pension_pro_rated(self) -> None:
        # 230.25 x 52 = 11973; 20 of 35 years = 6841.71
        value = _value("state_pension", PersonData(age=70, ni_contribution_years=20))
        assert value.low == value.high == 6842

    def test_state_pension_capped_at_full_record(self) -> None:
        value = _value("state_pension", PersonData(age=70, ni_contribution_years=45))
        assert value.high == 11973

    def test_free_school_meals_per_child(self) -> None:
        kids = (ChildData(age=6), ChildData(age=9), ChildData(age=2))
        value = _value("free_school_meals", PersonData(children=kids))
        assert (value.low, value.high) == (500, 1000)


class TestResolutionOrder:
    def test_precise_figure_wins(self) -> None:
        valuation = ExternalValuation(figures={"universal_credit": 9000})
        value = _value("universal_credit", PersonData(age=30), valuation)
        assert (value.low, value.high) == (9000, 9000)

    def test_zero_precise_figure_ignored(self) -> None:
        valuation = ExternalValuation(figures={"universal_credit": 0})
        value = _value("universal_credit", PersonData(age=30), valuation)
        assert (value.low, value.high) == (2401, 4802)

    def test_missing_rate_falls_back_to_catalogue_range(self) -> None:
        sparse = rate_table_from_mapping({"tax_year": "2025-26", "rates": {}})
        definition = get_catalogue().get("universal_credit")
        value = estimate_value(definition, PersonData(age=30), None, sparse)
        assert (value.low, value.high) == definition.estimated_annual_value_range

    def test_no_heuristic_and_no_range_is_zero(self) -> None:
        definition = EntitlementDefinition(id="mystery", name="Mystery", short_description="", admin_body="dwp")
        value = estimate_value(definition, PersonData(), None, RATES)
        assert (value.low, value.high) == (0, 0)

    def test_low_never_exceeds_high(self) -> None:
        person = PersonData(
            age=40,
            children=(ChildData(age=4),),
            is_carer=True,
            carer_hours_per_week=40,
            ni_contribution_years=12,
        )
        for definition in get_catalogue().entitlements:
            value = estimate_value(definition, person, None, RATES)
            assert 0 <= value.low <= value.high, definition.id
