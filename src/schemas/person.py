"""Pydantic schemas for the person record fed into the entitlement engine.

Built by the conversation layer from the user's answers. Every field except
``children`` is optional: ``None`` means "not known yet", never "no".
The engine treats the record as read-only input.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import (
    DisabilityBenefitLevel,
    EmploymentStatus,
    HousingTenure,
    IncomeBand,
    Nation,
    RelationshipStatus,
)


class ChildData(BaseModel):
    """A dependent child in the household."""

    model_config = ConfigDict(frozen=True)

    age: int = Field(ge=0)
    has_additional_needs: bool = False
    disability_benefit: DisabilityBenefitLevel = DisabilityBenefitLevel.NONE
    in_education: bool = False


class CaredForPerson(BaseModel):
    """Someone the subject looks after (e.g. an elderly parent)."""

    model_config = ConfigDict(frozen=True)

    relationship: str
    age: int = Field(ge=0)
    disability_benefit: DisabilityBenefitLevel = DisabilityBenefitLevel.NONE
    needs_help_daily_living: bool = False


class PersonData(BaseModel):
    """Self-reported facts about the subject and their household."""

    model_config = ConfigDict(frozen=True)

    # Identity & location
    age: int | None = Field(default=None, ge=0)
    nation: Nation | None = None
    postcode: str | None = None
    local_authority: str | None = None

    # Household
    relationship_status: RelationshipStatus | None = None
    children: tuple[ChildData, ...] = ()

    # Employment & income
    employment_status: EmploymentStatus | None = None
    gross_annual_income: Decimal | None = None
    income_band: IncomeBand | None = None
    partner_gross_annual_income: Decimal | None = None
    household_capital: Decimal | None = None
    recently_redundant: bool | None = None
    ni_contribution_years: int | None = None

    # Housing
    housing_tenure: HousingTenure | None = None
    monthly_housing_cost: Decimal | None = None
    council_tax_band: str | None = None

    # Health & disability
    has_disability_or_health_condition: bool | None = None
    disability_benefit_received: DisabilityBenefitLevel | None = None
    needs_help_with_daily_living: bool | None = None
    mobility_difficulty: bool | None = None
    has_medical_exemption: bool | None = None

    # Caring
    is_carer: bool | None = None
    carer_hours_per_week: int | None = Field(default=None, ge=0)
    cared_for_person: CaredForPerson | None = None

    # Life events
    is_pregnant: bool | None = None
    expecting_first_child: bool | None = None
    is_bereaved: bool | None = None
    deceased_relationship: str | None = None

    @property
    def is_couple(self) -> bool:
        """Married, civil partners or cohabiting. Unknown status counts as single."""
        return self.relationship_status is not None and self.relationship_status.is_couple
