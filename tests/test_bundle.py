"""End-to-end tests for the bundle orchestrator, run against the bundled catalogue."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import AsyncMock, patch

import pytest

from src.bundle.builder import build_bundle, resolve_entitlements
from src.models.enums import (
    ActionPriority,
    ConfidenceTier,
    EmploymentStatus,
    HousingTenure,
    IncomeBand,
    Nation,
    RelationshipStatus,
)
from src.schemas.person import ChildData, PersonData
from src.schemas.valuation import BreakdownLine, CouncilTaxDetail, ExternalValuation


def _find(bundle, entitlement_id: str):
    for entitlement in bundle.all_entitlements():
        if entitlement.id == entitlement_id:
            return entitlement
    pytest.fail(f"{entitlement_id} not in bundle")


class TestLostJob:
    """Scenario A: single, 35, unemployed, renting privately, lowest income band, no children or disability."""

    @pytest.fixture()
    def bundle(self):
        person = PersonData(
            age=35,
            postcode="M1 1AE",
            relationship_status=RelationshipStatus.SINGLE,
            employment_status=EmploymentStatus.UNEMPLOYED,
            income_band=IncomeBand.UNDER_7400,
            housing_tenure=HousingTenure.RENT_PRIVATE,
            children=(),
            has_disability_or_health_condition=False,
        )
        return build_bundle(person, ["lost_job"])

    def test_universal_credit_is_the_gateway(self, bundle) -> None:
        assert bundle.gateway_entitlements[0].id == "universal_credit"

    def test_council_tax_support_cascades_from_uc(self, bundle) -> None:
        group = next(g for g in bundle.cascaded_entitlements if g.gateway_id == "universal_credit")
        assert "council_tax_support_working_age" in [e.id for e in group.entitlements]

    def test_positive_total(self, bundle) -> None:
        assert bundle.total_estimated_annual_value.high > 0

    def test_new_style_jsa_independent(self, bundle) -> None:
        assert "jobseekers_allowance_new_style" in [e.id for e in bundle.independent_entitlements]

    def test_urgent_plan(self, bundle) -> None:
        assert bundle.action_plan[0].week == "This week"
        assert bundle.action_plan[0].actions[0].priority == ActionPriority.CRITICAL

    def test_no_pension_age_schemes(self, bundle) -> None:
        assert "pension_credit" not in bundle.entitlement_ids()

    def test_gateway_explains_what_it_unlocks(self, bundle) -> None:
        uc = _find(bundle, "universal_credit")
        assert uc.why_this_matters is not None
        assert "Council Tax Support" in uc.why_this_matters

    def test_guidance_attached(self, bundle) -> None:
        uc = _find(bundle, "universal_credit")
        assert uc.application_method == "Online at GOV.UK"
        assert "National Insurance number" in uc.what_you_need
        assert uc.timeline.startswith("5-week wait")


class TestRetiredLowIncome:
    """Scenario B: single, 70, retired, under £12,570, owns home outright."""

    @pytest.fixture()
    def bundle(self):
        person = PersonData(
            age=70,
            relationship_status=RelationshipStatus.SINGLE,
            employment_status=EmploymentStatus.RETIRED,
            income_band=IncomeBand.UNDER_12570,
            housing_tenure=HousingTenure.OWN_OUTRIGHT,
        )
        return build_bundle(person, ["retirement_low_income"])

    def test_pension_credit_is_a_likely_gateway(self, bundle) -> None:
        gateway_ids = [e.id for e in bundle.gateway_entitlements]
        assert gateway_ids[0] == "pension_credit"
        assert _find(bundle, "pension_credit").confidence == ConfidenceTier.LIKELY

    def test_attendance_allowance_present_without_care_answer(self, bundle) -> None:
        assert "attendance_allowance" in bundle.entitlement_ids()
        assert _find(bundle, "attendance_allowance").confidence == ConfidenceTier.WORTH_CHECKING

    def test_no_working_age_schemes(self, bundle) -> None:
        ids = bundle.entitlement_ids()
        assert "universal_credit" not in ids
        assert "ni_voluntary_contributions" not in ids
        assert "housing_benefit_legacy" not in ids

    def test_council_tax_reduction_cascades_from_pension_credit(self, bundle) -> None:
        group = next(g for g in bundle.cascaded_entitlements if g.gateway_id == "pension_credit")
        assert "council_tax_reduction_full" in [e.id for e in group.entitlements]

    def test_routine_plan(self, bundle) -> None:
        assert bundle.action_plan[0].week == "Week 1"

    def test_warm_home_discount_is_automatic(self, bundle) -> None:
        after_pc = next(s for s in bundle.action_plan if s.week == "After Pension Credit is awarded")
        actions = {a.entitlement_id: a.action for a in after_pc.actions}
        assert actions["warm_home_discount"].startswith("Check Warm Home Discount is applied automatically")


class TestNewBabyLowIncome:
    """Scenario C: 30, employed, under £16,000, a three-year-old, new baby."""

    @pytest.fixture()
    def bundle(self):
        person = PersonData(
            age=30,
            employment_status=EmploymentStatus.EMPLOYED,
            income_band=IncomeBand.UNDER_16000,
            children=(ChildData(age=3),),
        )
        return build_bundle(person, ["new_baby"])

    def test_single_childcare_conflict(self, bundle) -> None:
        assert len(bundle.conflicts) == 1
        conflict = bundle.conflicts[0]
        assert {conflict.option_a_id, conflict.option_b_id} == {"tax_free_childcare", "universal_credit"}
        assert "Universal Credit childcare element" in conflict.recommendation

    def test_both_childcare_options_listed(self, bundle) -> None:
        ids = bundle.entitlement_ids()
        assert "tax_free_childcare" in ids
        assert "universal_credit" in ids
        assert "free_childcare_15hrs_universal" in ids
        assert "child_benefit" in ids


class TestHighEarnerNoKids:
    """Scenario D: high earner, no children, new_baby situation: nothing applies."""

    PERSON = PersonData(
        age=40,
        employment_status=EmploymentStatus.EMPLOYED,
        income_band=IncomeBand.OVER_125140,
        relationship_status=RelationshipStatus.COUPLE_COHABITING,
        housing_tenure=HousingTenure.MORTGAGE,
    )

    @pytest.mark.parametrize("situations", [[], ["new_baby"], ["moon_landing"]])
    def test_empty_bundle(self, situations: list[str]) -> None:
        bundle = build_bundle(self.PERSON, situations)
        assert bundle.entitlement_ids() == []
        assert bundle.gateway_entitlements == ()
        assert bundle.cascaded_entitlements == ()
        assert bundle.independent_entitlements == ()
        assert bundle.conflicts == ()
        assert bundle.action_plan == ()
        assert (bundle.total_estimated_annual_value.low, bundle.total_estimated_annual_value.high) == (0, 0)


class TestBundleProperties:
    PERSON = PersonData(
        age=45,
        employment_status=EmploymentStatus.SELF_EMPLOYED,
        income_band=IncomeBand.UNDER_16000,
        relationship_status=RelationshipStatus.SINGLE,
        housing_tenure=HousingTenure.RENT_PRIVATE,
        children=(ChildData(age=7), ChildData(age=2)),
        is_carer=True,
        carer_hours_per_week=40,
        has_disability_or_health_condition=True,
    )
    SITUATIONS = ["separation", "struggling_financially", "health_condition"]

    def test_idempotent(self) -> None:
        assert build_bundle(self.PERSON, self.SITUATIONS) == build_bundle(self.PERSON, self.SITUATIONS)

    def test_totals_cover_each_entitlement_once(self) -> None:
        bundle = build_bundle(self.PERSON, self.SITUATIONS)
        ids = bundle.entitlement_ids()
        assert len(ids) == len(set(ids))
        entitlements = bundle.all_entitlements()
        assert bundle.total_estimated_annual_value.low == sum(e.estimated_annual_value.low for e in entitlements)
        assert bundle.total_estimated_annual_value.high == sum(e.estimated_annual_value.high for e in entitlements)

    def test_rates_year_surfaced(self) -> None:
        assert build_bundle(self.PERSON, self.SITUATIONS).rates_tax_year == "2025-26"

    def test_json_serialisable(self) -> None:
        dumped = build_bundle(self.PERSON, self.SITUATIONS).model_dump(mode="json")
        assert isinstance(dumped["total_estimated_annual_value"]["high"], int)


class TestNationAndDefaults:
    def test_scotland_gets_national_council_tax_scheme(self) -> None:
        person = PersonData(
            age=35,
            nation=Nation.SCOTLAND,
            employment_status=EmploymentStatus.UNEMPLOYED,
            income_band=IncomeBand.UNDER_7400,
        )
        ids = build_bundle(person, ["lost_job"]).entitlement_ids()
        assert "council_tax_reduction_scotland" in ids
        assert "council_tax_support_working_age" not in ids

    def test_homeless_defaults_do_not_touch_input(self) -> None:
        person = PersonData(age=28, housing_tenure=HousingTenure.HOMELESS)
        bundle = build_bundle(person, ["lost_job"])
        assert "universal_credit" in bundle.entitlement_ids()
        assert person.employment_status is None
        assert person.income_band is None


class TestExternalValuation:
    PERSON = PersonData(
        age=35,
        employment_status=EmploymentStatus.UNEMPLOYED,
        income_band=IncomeBand.UNDER_7400,
        gross_annual_income=Decimal("0"),
    )

    def test_precise_figures_and_council_detail(self) -> None:
        detail = CouncilTaxDetail(
            council_name="Leeds City Council",
            breakdown=(BreakdownLine(label="Maximum reduction", amount=1450.0),),
        )
        valuation = ExternalValuation(
            figures={"universal_credit": 9100, "council_tax_support_working_age": 1450},
            council_tax_detail=detail,
        )
        bundle = build_bundle(self.PERSON, ["lost_job"], valuation)

        uc = _find(bundle, "universal_credit")
        assert (uc.estimated_annual_value.low, uc.estimated_annual_value.high) == (9100, 9100)
        cts = _find(bundle, "council_tax_support_working_age")
        assert cts.estimated_annual_value.high == 1450
        assert cts.council_tax_detail == detail
        assert uc.council_tax_detail is None

    @pytest.mark.asyncio()
    async def test_resolve_entitlements_fetches_valuation(self) -> None:
        valuation = ExternalValuation(figures={"universal_credit": 7000})
        with patch("src.bundle.builder.fetch_valuation", new=AsyncMock(return_value=valuation)) as fetch:
            bundle = await resolve_entitlements(self.PERSON, ["lost_job"])
        fetch.assert_awaited_once_with(self.PERSON)
        assert _find(bundle, "universal_credit").estimated_annual_value.high == 7000

    @pytest.mark.asyncio()
    async def test_resolve_entitlements_without_valuation(self) -> None:
        with patch("src.bundle.builder.fetch_valuation", new=AsyncMock(return_value=None)):
            bundle = await resolve_entitlements(self.PERSON, ["lost_job"])
        assert bundle == build_bundle(self.PERSON, ["lost_job"])
