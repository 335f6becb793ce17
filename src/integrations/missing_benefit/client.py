"""Async httpx client for the MissingBenefit calculate proxy.

Used for a council-specific Council Tax Reduction figure, which depends on
local scheme rules the rate table cannot capture.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

import httpx
from pydantic import ValidationError

from src.calculators.income import monthly_earnings_for_band
from src.config import settings
from src.integrations.missing_benefit.schemas import (
    DateOfBirth,
    MissingBenefitAnswers,
    MissingBenefitResponse,
)
from src.models.enums import DisabilityBenefitLevel, EmploymentStatus, HousingTenure
from src.schemas.person import PersonData

logger = logging.getLogger(__name__)

COUNCIL_TAX_REDUCTION = "council-tax-reduction"

_HOUSING_STATUS: dict[HousingTenure, str] = {
    HousingTenure.RENT_SOCIAL: "renting-social",
    HousingTenure.RENT_PRIVATE: "renting-private",
    HousingTenure.MORTGAGE: "homeowner-mortgage",
    HousingTenure.OWN_OUTRIGHT: "homeowner-outright",
    HousingTenure.LIVING_WITH_FAMILY: "living-with-others",
    HousingTenure.HOMELESS: "homeless",
}

_EMPLOYMENT_STATUS: dict[EmploymentStatus, str] = {
    EmploymentStatus.EMPLOYED: "employed-full-time",
    EmploymentStatus.SELF_EMPLOYED: "self-employed",
    EmploymentStatus.UNEMPLOYED: "unemployed",
    EmploymentStatus.RETIRED: "retired",
    EmploymentStatus.STUDENT: "student",
    EmploymentStatus.CARER_FULLTIME: "carer-full-time",
    EmploymentStatus.SICK_DISABLED: "unable-to-work",
}


def _savings_band(capital: Decimal | None) -> str | None:
    if capital is None:
        return None
    if capital < 6000:
        return "under-6000"
    if capital <= 16000:
        return "6000-16000"
    return "over-16000"


def _disability_benefit(level: DisabilityBenefitLevel | None) -> str:
    if level is None or level is DisabilityBenefitLevel.NONE:
        return "none"
    if level.value.startswith("pip"):
        return "pip"
    if level.value.startswith("dla"):
        return "dla"
    return "attendance-allowance"


def _yes_no(flag: bool | None) -> str | None:
    if flag is None:
        return None
    return "yes" if flag else "no"


def map_person_to_answers(person: PersonData, today: date | None = None) -> MissingBenefitAnswers:
    """Translate the person record into calculator answers.

    Date of birth is estimated as 1 June of the birth year. Immigration
    status is not collected and is sent as UK/Irish.
    """
    dob = None
    if person.age is not None:
        year = (today or date.today()).year - person.age
        dob = DateOfBirth(day="1", month="6", year=str(year))

    relationship = None
    if person.relationship_status is not None:
        relationship = "couple" if person.relationship_status.is_couple else "single"

    hours = person.carer_hours_per_week
    return MissingBenefitAnswers(
        date_of_birth=dob,
        postcode=person.postcode or None,
        immigration_status="uk-irish",
        relationship_status=relationship,
        housing_status=_HOUSING_STATUS.get(person.housing_tenure) if person.housing_tenure else None,
        employment_status=_EMPLOYMENT_STATUS.get(person.employment_status) if person.employment_status else None,
        monthly_earnings=monthly_earnings_for_band(person.income_band),
        savings_amount=_savings_band(person.household_capital),
        has_children="yes" if person.children else "no",
        number_of_children=len(person.children) or None,
        has_health_condition=_yes_no(person.has_disability_or_health_condition),
        receiving_disability_benefit=_disability_benefit(person.disability_benefit_received),
        is_carer=_yes_no(person.is_carer),
        caring_hours_per_week=None if hours is None else ("35-or-more" if hours >= 35 else "under-35"),
        council_tax_band=person.council_tax_band or None,
    )


class MissingBenefitClient:
    """Thin async wrapper around POST {missing_benefit_api_url}.

    With no URL configured the client is disabled and makes no request.
    Any failure returns None so the engine falls back to its heuristics.
    """

    def __init__(self) -> None:
        self._url = settings.valuation.missing_benefit_api_url
        self._api_key = settings.valuation.missing_benefit_api_key
        self._timeout = httpx.Timeout(settings.valuation.timeout_seconds)

    @property
    def _bypass_mode(self) -> bool:
        return not self._url

    async def calculate(self, person: PersonData) -> MissingBenefitResponse | None:
        if self._bypass_mode:
            logger.debug("MissingBenefit valuation disabled (no URL configured)")
            return None

        headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}
        body = {"answers": map_person_to_answers(person).to_payload(), "skipDataCheck": True}

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._url, json=body, headers=headers)
                response.raise_for_status()
                payload = response.json()
            result = MissingBenefitResponse.model_validate(payload)

        except httpx.TimeoutException:
            logger.warning("MissingBenefit API timeout")
            return None

        except httpx.HTTPStatusError as exc:
            logger.warning("MissingBenefit API HTTP error %s", exc.response.status_code)
            return None

        except httpx.HTTPError as exc:
            logger.warning("MissingBenefit API request failed: %s", type(exc).__name__)
            return None

        except (ValueError, ValidationError):
            logger.warning("MissingBenefit API returned an unexpected payload")
            return None

        logger.debug("MissingBenefit returned %d benefit(s)", len(result.benefits))
        return result


# Module-level singleton
missing_benefit_client = MissingBenefitClient()
