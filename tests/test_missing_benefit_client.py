"""Tests for the MissingBenefit client and answer mapping."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from src.integrations.missing_benefit.client import MissingBenefitClient, map_person_to_answers
from src.models.enums import (
    DisabilityBenefitLevel,
    EmploymentStatus,
    HousingTenure,
    IncomeBand,
    RelationshipStatus,
)
from src.schemas.person import ChildData, PersonData

URL = "https://missing-benefit.test/api/calculate"

CTR_PAYLOAD = {
    "totalAnnual": 1450,
    "benefits": [
        {
            "id": "council-tax-reduction",
            "name": "Council Tax Reduction",
            "eligible": True,
            "monthlyAmount": 120.83,
            "annualAmount": 1450.0,
            "breakdown": [
                {"label": "Your council", "amount": 0, "isHeading": True},
                {"label": "Maximum reduction", "amount": 1450.0},
            ],
            "councilName": "Leeds City Council",
            "applyUrl": "https://www.leeds.gov.uk/council-tax",
            "confidenceScore": 80,
        },
    ],
}


def _make_response(payload: dict) -> MagicMock:
    resp = MagicMock()
    resp.status_code = 200
    resp.json.return_value = payload
    resp.raise_for_status = MagicMock()
    return resp


def _client(api_key: str = "") -> MissingBenefitClient:
    client = MissingBenefitClient()
    client._url = URL
    client._api_key = api_key
    return client


def _patched_http(mock_client_cls: MagicMock, post: AsyncMock) -> AsyncMock:
    mock_http = AsyncMock()
    mock_http.post = post
    mock_client_cls.return_value.__aenter__ = AsyncMock(return_value=mock_http)
    mock_client_cls.return_value.__aexit__ = AsyncMock(return_value=False)
    return mock_http


class TestAnswerMapping:
    def test_full_record(self) -> None:
        person = PersonData(
            age=40,
            postcode="LS1 4DY",
            relationship_status=RelationshipStatus.COUPLE_MARRIED,
            housing_tenure=HousingTenure.RENT_SOCIAL,
            employment_status=EmploymentStatus.SICK_DISABLED,
            income_band=IncomeBand.UNDER_16000,
            household_capital=Decimal("8000"),
            children=(ChildData(age=5), ChildData(age=8)),
            has_disability_or_health_condition=True,
            disability_benefit_received=DisabilityBenefitLevel.PIP_DAILY_LIVING_STANDARD,
            is_carer=True,
            carer_hours_per_week=35,
            council_tax_band="B",
        )
        payload = map_person_to_answers(person, today=date(2026, 1, 10)).to_payload()
        assert payload == {
            "dateOfBirth": {"day": "1", "month": "6", "year": "1986"},
            "postcode": "LS1 4DY",
            "immigrationStatus": "uk-irish",
            "relationshipStatus": "couple",
            "housingStatus": "renting-social",
            "employmentStatus": "unable-to-work",
            "monthlyEarnings": 1190,
            "savingsAmount": "6000-16000",
            "hasChildren": "yes",
            "numberOfChildren": 2,
            "hasHealthCondition": "yes",
            "receivingDisabilityBenefit": "pip",
            "isCarer": "yes",
            "caringHoursPerWeek": "35-or-more",
            "councilTaxBand": "B",
        }

    def test_sparse_record_omits_unknowns(self) -> None:
        payload = map_person_to_answers(PersonData()).to_payload()
        assert payload == {
            "immigrationStatus": "uk-irish",
            "hasChildren": "no",
            "receivingDisabilityBenefit": "none",
        }

    def test_savings_bands(self) -> None:
        low = map_person_to_answers(PersonData(household_capital=Decimal("5999")))
        high = map_person_to_answers(PersonData(household_capital=Decimal("16001")))
        assert low.savings_amount == "under-6000"
        assert high.savings_amount == "over-16000"

    def test_attendance_allowance_label(self) -> None:
        person = PersonData(disability_benefit_received=DisabilityBenefitLevel.ATTENDANCE_ALLOWANCE_LOWER)
        assert map_person_to_answers(person).receiving_disability_benefit == "attendance-allowance"


class TestCalculate:
    @pytest.mark.asyncio()
    async def test_parses_council_tax_result(self) -> None:
        with patch("httpx.AsyncClient") as mock_client_cls:
            mock_http = _patched_http(mock_client_cls, AsyncMock(return_value=_make_response(CTR_PAYLOAD)))
            result = await _client().calculate(PersonData(age=40))

        assert result is not None
        ctr = result.find("council-tax-reduction")
        assert ctr is not None
        assert ctr.annual_amount == 1450.0
        assert ctr.council_name == "Leeds City Council"
        assert ctr.breakdown[0].is_heading is True

        body = mock_http.post.call_args.kwargs["json"]
        assert body["skipDataCheck"] is True
        assert body["answers"]["immigrationStatus"] == "uk-irish"
        assert mock_http.post.call_args.kwargs["headers"] == {}

    @pytest.mark.asyncio()
    async def test_sends_bearer_key(self) -> None:
        with patch("httpx.AsyncClient") as mock_client_cls:
            mock_http = _patched_http(mock_client_cls, AsyncMock(return_value=_make_response(CTR_PAYLOAD)))
            await _client(api_key="secret").calculate(PersonData())
        assert mock_http.post.call_args.kwargs["headers"] == {"Authorization": "Bearer secret"}

    @pytest.mark.asyncio()
    async def test_find_unknown_benefit(self) -> None:
        with patch("httpx.AsyncClient") as mock_client_cls:
            _patched_http(mock_client_cls, AsyncMock(return_value=_make_response({"benefits": []})))
            result = await _client().calculate(PersonData())
        assert result is not None
        assert result.find("council-tax-reduction") is None


class TestFailOpen:
    @pytest.mark.asyncio()
    async def test_timeout(self) -> None:
        with patch("httpx.AsyncClient") as mock_client_cls:
            _patched_http(mock_client_cls, AsyncMock(side_effect=httpx.ReadTimeout("slow")))
            assert await _client().calculate(PersonData()) is None

    @pytest.mark.asyncio()
    async def test_http_error_status(self) -> None:
        request = httpx.Request("POST", URL)
        response = httpx.Response(401, request=request)
        resp = _make_response({})
        resp.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError("unauthorised", request=request, response=response),
        )
        with patch("httpx.AsyncClient") as mock_client_cls:
            _patched_http(mock_client_cls, AsyncMock(return_value=resp))
            assert await _client().calculate(PersonData()) is None

    @pytest.mark.asyncio()
    async def test_malformed_payload(self) -> None:
        with patch("httpx.AsyncClient") as mock_client_cls:
            _patched_http(mock_client_cls, AsyncMock(return_value=_make_response({"benefits": "nope"})))
            assert await _client().calculate(PersonData()) is None


class TestBypassMode:
    @pytest.mark.asyncio()
    async def test_no_url_skips_http(self) -> None:
        client = _client()
        client._url = ""
        with patch("httpx.AsyncClient") as mock_client_cls:
            assert await client.calculate(PersonData()) is None
            mock_client_cls.assert_not_called()
