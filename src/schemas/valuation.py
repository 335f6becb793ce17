"""Pydantic schemas for precise figures supplied by external valuation services.

A valuation is sparse: a scheme missing from ``figures`` (or carrying a
zero/negative amount) means "not provided", never "entitled to nothing".
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UcBreakdown(BaseModel):
    """Annual Universal Credit elements, as calculated by PolicyEngine."""

    model_config = ConfigDict(frozen=True)

    standard_allowance: int | None = None
    child_element: int | None = None
    housing_element: int | None = None
    carer_element: int | None = None
    disability_element: int | None = None
    childcare_element: int | None = None


class BreakdownLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    amount: float


class CouncilTaxDetail(BaseModel):
    """Council-specific Council Tax Reduction detail (MissingBenefit)."""

    model_config = ConfigDict(frozen=True)

    council_name: str | None = None
    breakdown: tuple[BreakdownLine, ...] = ()
    apply_url: str | None = None
    confidence_score: int | None = None


class ExternalValuation(BaseModel):
    """Merged result of the optional valuation services for one household."""

    model_config = ConfigDict(frozen=True)

    figures: dict[str, int] = Field(default_factory=dict)  # scheme id → annual £
    uc_breakdown: UcBreakdown | None = None
    council_tax_detail: CouncilTaxDetail | None = None

    def precise_figure(self, scheme_id: str) -> int | None:
        """Positive annual figure for a scheme, or None if not provided."""
        value = self.figures.get(scheme_id)
        if value is None or value <= 0:
            return None
        return value

    @property
    def uc_childcare_element(self) -> int | None:
        if self.uc_breakdown is None:
            return None
        value = self.uc_breakdown.childcare_element
        if value is None or value <= 0:
            return None
        return value
