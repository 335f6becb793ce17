"""Async httpx client for the PolicyEngine UK household calculate API.

One request describes the whole household; the benefit unit and household
variables we want back are requested by sending them with a null value for
the period.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

import httpx
from pydantic import ValidationError

from src.calculators.income import to_pounds
from src.config import settings
from src.integrations.policyengine.schemas import PolicyEngineFigures, PolicyEngineResponse
from src.models.enums import HousingTenure
from src.schemas.person import PersonData
from src.schemas.valuation import UcBreakdown

logger = logging.getLogger(__name__)

_DEFAULT_AGE = 35

_BENUNIT_OUTPUTS = (
    "universal_credit",
    "pension_credit",
    "child_benefit",
    "housing_benefit",
    "uc_standard_allowance",
    "uc_child_element",
    "uc_housing_costs_element",
    "uc_carer_element",
    "uc_LCWRA_element",
    "uc_childcare_element",
)
_HOUSEHOLD_OUTPUTS = ("council_tax_benefit",)

# UcBreakdown field -> PolicyEngine variable
_UC_ELEMENTS = {
    "standard_allowance": "uc_standard_allowance",
    "child_element": "uc_child_element",
    "housing_element": "uc_housing_costs_element",
    "carer_element": "uc_carer_element",
    "disability_element": "uc_LCWRA_element",
    "childcare_element": "uc_childcare_element",
}


class PolicyEngineClient:
    """Thin async wrapper around POST {policyengine_api_url}.

    Fails open: any timeout, HTTP error or unexpected payload returns None
    and the engine falls back to its own heuristics.
    """

    def __init__(self) -> None:
        self._url = settings.valuation.policyengine_api_url
        self._enabled = settings.valuation.policyengine_enabled
        self._period = str(settings.valuation.policyengine_year)
        self._timeout = httpx.Timeout(settings.valuation.timeout_seconds)

    def build_household(self, person: PersonData) -> dict[str, Any]:
        """Map the person record onto a PolicyEngine household."""
        period = self._period
        age = person.age if person.age is not None else _DEFAULT_AGE

        people: dict[str, dict[str, Any]] = {
            "you": {
                "age": {period: age},
                "employment_income": {period: float(person.gross_annual_income or 0)},
            },
        }
        adults = ["you"]
        if person.is_couple:
            # Partner age is not collected; assume the same as the subject
            people["partner"] = {
                "age": {period: age},
                "employment_income": {period: float(person.partner_gross_annual_income or 0)},
            }
            adults.append("partner")

        children: list[str] = []
        for i, child in enumerate(person.children):
            child_id = f"child_{i}"
            people[child_id] = {"age": {period: child.age}}
            children.append(child_id)

        members = [*adults, *children]
        benunit: dict[str, Any] = {"members": members, "adults": adults, "children": children}
        benunit.update({var: {period: None} for var in _BENUNIT_OUTPUTS})

        household: dict[str, Any] = {"members": members}
        household.update({var: {period: None} for var in _HOUSEHOLD_OUTPUTS})
        if person.housing_tenure in (HousingTenure.RENT_PRIVATE, HousingTenure.RENT_SOCIAL):
            household["rent"] = {period: float((person.monthly_housing_cost or 0) * 12)}

        return {
            "people": people,
            "benunits": {"benunit": benunit},
            "households": {"household": household},
            "families": {"family": {"members": members, "adults": adults, "children": children}},
        }

    async def calculate(self, person: PersonData) -> PolicyEngineFigures | None:
        """Run one household calculation. Returns None when disabled or on any failure."""
        if not self._enabled or not self._url:
            logger.debug("PolicyEngine valuation disabled")
            return None

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._url, json={"household": self.build_household(person)})
                response.raise_for_status()
                payload = response.json()
            parsed = PolicyEngineResponse.model_validate(payload)

        except httpx.TimeoutException:
            logger.warning("PolicyEngine API timeout")
            return None

        except httpx.HTTPStatusError as exc:
            logger.warning("PolicyEngine API HTTP error %s", exc.response.status_code)
            return None

        except httpx.HTTPError as exc:
            logger.warning("PolicyEngine API request failed: %s", type(exc).__name__)
            return None

        except (ValueError, ValidationError):
            logger.warning("PolicyEngine API returned an unexpected payload")
            return None

        return self._parse_response(parsed)

    def _read(self, table: dict[str, Any], variable: str) -> int | None:
        entry = table.get(variable)
        if not isinstance(entry, dict):
            return None
        value = entry.get(self._period)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            return None
        return to_pounds(Decimal(str(value)))

    def _parse_response(self, response: PolicyEngineResponse) -> PolicyEngineFigures:
        benunit = response.result.benunits.get("benunit", {})
        household = response.result.households.get("household", {})

        elements = {field: self._read(benunit, var) for field, var in _UC_ELEMENTS.items()}
        breakdown = UcBreakdown(**elements) if any(v is not None for v in elements.values()) else None

        return PolicyEngineFigures(
            universal_credit=self._read(benunit, "universal_credit"),
            pension_credit=self._read(benunit, "pension_credit"),
            child_benefit=self._read(benunit, "child_benefit"),
            housing_benefit=self._read(benunit, "housing_benefit"),
            council_tax_benefit=self._read(household, "council_tax_benefit"),
            uc_breakdown=breakdown,
        )


# Module-level singleton
policyengine_client = PolicyEngineClient()
