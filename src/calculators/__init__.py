"""Calculators: income helpers and annual value estimation."""

from src.calculators.income import band_at_most, band_rank, monthly_earnings_for_band, weekly_income
from src.calculators.value import VALUE_HEURISTICS, estimate_value

__all__ = [
    "band_at_most",
    "band_rank",
    "monthly_earnings_for_band",
    "weekly_income",
    "VALUE_HEURISTICS",
    "estimate_value",
]
