"""Tests for the conflict resolver."""

from __future__ import annotations

from src.bundle.conflicts import CONFLICT_RESOLVERS, resolve_conflicts
from src.catalogue.rates import get_rates, rate_table_from_mapping
from src.models.enums import IncomeBand
from src.schemas.catalogue import ConflictEdge
from src.schemas.person import ChildData, PersonData
from src.schemas.valuation import ExternalValuation, UcBreakdown

RATES = get_rates()

TFC_UC = ConflictEdge(between=("tax_free_childcare", "universal_credit"), resolution="Pick one.")
UC_TFC = ConflictEdge(between=("universal_credit", "tax_free_childcare"), resolution="Pick one.")
PC_UC = ConflictEdge(between=("pension_credit", "universal_credit"), resolution="Age decides.")
PIP_AA = ConflictEdge(between=("pip", "attendance_allowance"), resolution="Age decides.")
CA_SP = ConflictEdge(between=("carers_allowance", "state_pension"), resolution="Overlap.")
GENERIC = ConflictEdge(between=("motability_scheme", "vehicle_excise_duty_exemption"), resolution="Only one car.")


def _resolve(edges, eligible, person=None, valuation=None, rates=RATES):
    return resolve_conflicts(eligible, edges, person or PersonData(), valuation, {}, rates)


class TestGating:
    def test_both_members_must_be_eligible(self) -> None:
        assert _resolve([TFC_UC], {"tax_free_childcare"}) == []
        assert _resolve([TFC_UC], set()) == []

    def test_pair_resolved(self) -> None:
        assert len(_resolve([TFC_UC], {"tax_free_childcare", "universal_credit"})) == 1

    def test_duplicate_pair_emitted_once(self) -> None:
        eligible = {"tax_free_childcare", "universal_credit"}
        assert len(_resolve([TFC_UC, UC_TFC, TFC_UC], eligible)) == 1


class TestSymmetry:
    def test_swapped_edge_same_resolution(self) -> None:
        eligible = {"tax_free_childcare", "universal_credit"}
        person = PersonData(income_band=IncomeBand.UNDER_16000)
        assert _resolve([TFC_UC], eligible, person) == _resolve([UC_TFC], eligible, person)

    def test_generic_pair_sorted_by_id(self) -> None:
        swapped = ConflictEdge(between=("vehicle_excise_duty_exemption", "motability_scheme"), resolution="Only one car.")
        eligible = {"motability_scheme", "vehicle_excise_duty_exemption"}
        assert _resolve([GENERIC], eligible) == _resolve([swapped], eligible)

    def test_registry_keys_are_unordered_pairs(self) -> None:
        assert all(len(key) == 2 for key in CONFLICT_RESOLVERS)


class TestTaxFreeChildcare:
    eligible = {"tax_free_childcare", "universal_credit"}

    def test_low_income_recommends_uc(self) -> None:
        person = PersonData(income_band=IncomeBand.UNDER_25000)
        (resolution,) = _resolve([TFC_UC], self.eligible, person)
        assert "Universal Credit childcare element is likely better" in resolution.recommendation
        assert resolution.option_b == "Universal Credit childcare element"
        assert resolution.value_difference is None

    def test_higher_income_recommends_tfc(self) -> None:
        person = PersonData(income_band=IncomeBand.UNDER_50270)
        (resolution,) = _resolve([TFC_UC], self.eligible, person)
        assert resolution.recommendation.startswith("Tax-Free Childcare")

    def test_unknown_income_recommends_tfc(self) -> None:
        (resolution,) = _resolve([TFC_UC], self.eligible, PersonData())
        assert resolution.recommendation.startswith("Tax-Free Childcare")

    def test_precise_uc_childcare_beats_cap(self) -> None:
        valuation = ExternalValuation(uc_breakdown=UcBreakdown(childcare_element=6000))
        person = PersonData(income_band=IncomeBand.UNDER_50270, children=(ChildData(age=2),))
        (resolution,) = _resolve([TFC_UC], self.eligible, person, valuation)
        assert "£6,000" in resolution.recommendation
        assert "£2,000" in resolution.recommendation
        assert resolution.recommendation.startswith("The Universal Credit childcare element")
        assert resolution.value_difference == 4000

    def test_cap_scales_with_children_under_twelve(self) -> None:
        valuation = ExternalValuation(uc_breakdown=UcBreakdown(childcare_element=3000))
        kids = (ChildData(age=2), ChildData(age=5), ChildData(age=14))
        person = PersonData(income_band=IncomeBand.UNDER_16000, children=kids)
        (resolution,) = _resolve([TFC_UC], self.eligible, person, valuation)
        assert resolution.recommendation.startswith("Tax-Free Childcare")
        assert resolution.value_difference == 1000

    def test_zero_uc_childcare_falls_back_to_band(self) -> None:
        valuation = ExternalValuation(uc_breakdown=UcBreakdown(childcare_element=0))
        person = PersonData(income_band=IncomeBand.UNDER_12570)
        (resolution,) = _resolve([TFC_UC], self.eligible, person, valuation)
        assert resolution.value_difference is None
        assert "likely better" in resolution.recommendation


class TestAgeDependentPairs:
    def test_pension_credit_at_spa(self) -> None:
        (resolution,) = _resolve([PC_UC], {"pension_credit", "universal_credit"}, PersonData(age=66))
        assert "Pension Credit is the right route" in resolution.recommendation

    def test_universal_credit_below_spa(self) -> None:
        (resolution,) = _resolve([PC_UC], {"pension_credit", "universal_credit"}, PersonData(age=65))
        assert "Universal Credit is the right route" in resolution.recommendation

    def test_attendance_allowance_at_spa(self) -> None:
        (resolution,) = _resolve([PIP_AA], {"pip", "attendance_allowance"}, PersonData(age=70))
        assert "Attendance Allowance is the right route" in resolution.recommendation

    def test_pip_below_spa(self) -> None:
        (resolution,) = _resolve([PIP_AA], {"pip", "attendance_allowance"}, PersonData(age=40))
        assert "(PIP)" in resolution.recommendation


class TestCarersAllowanceVsStatePension:
    def test_always_carers_allowance(self) -> None:
        (resolution,) = _resolve([CA_SP], {"carers_allowance", "state_pension"}, PersonData(age=70))
        assert resolution.recommendation.startswith("Claim Carer's Allowance")


class TestGeneric:
    def test_catalogue_text_used_verbatim(self) -> None:
        names = {"motability_scheme": "Motability Scheme"}
        (resolution,) = resolve_conflicts(
            {"motability_scheme", "vehicle_excise_duty_exemption"}, [GENERIC], PersonData(), None, names, RATES,
        )
        assert resolution.recommendation == "Only one car."
        assert resolution.option_a == "Motability Scheme"
        assert resolution.option_b == "vehicle_excise_duty_exemption"

    def test_missing_rate_falls_back_to_catalogue_text(self) -> None:
        sparse = rate_table_from_mapping({"tax_year": "2025-26", "rates": {}})
        (resolution,) = _resolve([PC_UC], {"pension_credit", "universal_credit"}, PersonData(age=70), rates=sparse)
        assert resolution.recommendation == "Age decides."
