"""Pydantic schemas for the MissingBenefit calculate proxy.

Field names on the wire are camelCase; models use aliases so Python code
stays snake_case.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DateOfBirth(BaseModel):
    day: str
    month: str
    year: str


class MissingBenefitAnswers(BaseModel):
    """Questionnaire answers sent to the calculator. Unset fields are omitted."""

    model_config = ConfigDict(populate_by_name=True)

    date_of_birth: DateOfBirth | None = Field(default=None, alias="dateOfBirth")
    postcode: str | None = None
    immigration_status: str | None = Field(default=None, alias="immigrationStatus")
    relationship_status: str | None = Field(default=None, alias="relationshipStatus")
    housing_status: str | None = Field(default=None, alias="housingStatus")
    employment_status: str | None = Field(default=None, alias="employmentStatus")
    monthly_earnings: int | None = Field(default=None, alias="monthlyEarnings")
    savings_amount: str | None = Field(default=None, alias="savingsAmount")
    has_children: str | None = Field(default=None, alias="hasChildren")
    number_of_children: int | None = Field(default=None, alias="numberOfChildren")
    has_health_condition: str | None = Field(default=None, alias="hasHealthCondition")
    receiving_disability_benefit: str | None = Field(default=None, alias="receivingDisabilityBenefit")
    is_carer: str | None = Field(default=None, alias="isCarer")
    caring_hours_per_week: str | None = Field(default=None, alias="caringHoursPerWeek")
    council_tax_band: str | None = Field(default=None, alias="councilTaxBand")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class MissingBenefitBreakdownLine(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    label: str
    amount: float = 0
    is_heading: bool = Field(default=False, alias="isHeading")


class MissingBenefitResult(BaseModel):
    """One benefit in the calculator response."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    eligible: bool = False
    monthly_amount: float = Field(default=0, alias="monthlyAmount")
    annual_amount: float = Field(default=0, alias="annualAmount")
    breakdown: list[MissingBenefitBreakdownLine] = Field(default_factory=list)
    apply_url: str | None = Field(default=None, alias="applyUrl")
    council_name: str | None = Field(default=None, alias="councilName")
    confidence_score: int | None = Field(default=None, alias="confidenceScore")


class MissingBenefitResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_annual: float = Field(default=0, alias="totalAnnual")
    benefits: list[MissingBenefitResult] = Field(default_factory=list)

    def find(self, benefit_id: str) -> MissingBenefitResult | None:
        for benefit in self.benefits:
            if benefit.id == benefit_id:
                return benefit
        return None
