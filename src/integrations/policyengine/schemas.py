"""Pydantic schemas for the PolicyEngine UK household calculate API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from src.schemas.valuation import UcBreakdown

# variable name -> {period: value}; member lists are echoed back alongside
VariableTable = dict[str, Any]


class PolicyEngineResult(BaseModel):
    benunits: dict[str, VariableTable] = Field(default_factory=dict)
    households: dict[str, VariableTable] = Field(default_factory=dict)


class PolicyEngineResponse(BaseModel):
    """Envelope returned by POST /uk/calculate."""

    status: str | None = None
    result: PolicyEngineResult


class PolicyEngineFigures(BaseModel):
    """Annual amounts (whole pounds) read from one household calculation.

    A variable that came back missing, zero or negative is None.
    """

    universal_credit: int | None = None
    pension_credit: int | None = None
    child_benefit: int | None = None
    housing_benefit: int | None = None
    council_tax_benefit: int | None = None
    uc_breakdown: UcBreakdown | None = None
