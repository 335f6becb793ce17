"""Defaults inferred from the person record before the rules run."""

from __future__ import annotations

from decimal import Decimal

from src.models.enums import EmploymentStatus, HousingTenure, IncomeBand
from src.schemas.person import PersonData


def apply_homeless_defaults(person: PersonData) -> PersonData:
    """Fill in employment and income for someone who is homeless.

    Missing employment status becomes unemployed; a missing income band
    becomes the lowest band with zero income. Returns a copy, the caller's
    record is left untouched. Anyone else is returned as-is.
    """
    if person.housing_tenure != HousingTenure.HOMELESS:
        return person

    updates: dict[str, object] = {}
    if person.employment_status is None:
        updates["employment_status"] = EmploymentStatus.UNEMPLOYED
    if person.income_band is None:
        updates["income_band"] = IncomeBand.UNDER_7400
        if person.gross_annual_income is None:
            updates["gross_annual_income"] = Decimal("0")

    if not updates:
        return person
    return person.model_copy(update=updates)
