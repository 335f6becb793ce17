"""Income helpers shared by the eligibility rules, value heuristics and integrations.

Band comparisons use the declaration order of IncomeBand. A missing band or
``prefer_not_to_say`` is never "at most" anything, so band-gated rules stay
conservative when income is unknown.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from src.models.enums import IncomeBand
from src.schemas.person import PersonData

_ORDERED_BANDS: tuple[IncomeBand, ...] = tuple(b for b in IncomeBand if b is not IncomeBand.PREFER_NOT_TO_SAY)

# Monthly gross earnings assumed for each band (roughly the band midpoint)
BAND_MONTHLY_EARNINGS: dict[IncomeBand, int] = {
    IncomeBand.UNDER_7400: 308,
    IncomeBand.UNDER_12570: 833,
    IncomeBand.UNDER_16000: 1190,
    IncomeBand.UNDER_25000: 1708,
    IncomeBand.UNDER_50270: 3136,
    IncomeBand.UNDER_60000: 5000,
    IncomeBand.UNDER_100000: 6667,
    IncomeBand.UNDER_125140: 9375,
    IncomeBand.OVER_125140: 12500,
}

WEEKS_PER_YEAR = Decimal("52")


def band_rank(band: IncomeBand | None) -> int | None:
    """Position of a band in ascending order, or None when undisclosed."""
    if band is None or band is IncomeBand.PREFER_NOT_TO_SAY:
        return None
    return _ORDERED_BANDS.index(band)


def band_at_most(band: IncomeBand | None, ceiling: IncomeBand) -> bool:
    """True when ``band`` is known and no higher than ``ceiling``."""
    rank = band_rank(band)
    ceiling_rank = band_rank(ceiling)
    if rank is None or ceiling_rank is None:
        return False
    return rank <= ceiling_rank


def monthly_earnings_for_band(band: IncomeBand | None) -> int | None:
    if band is None:
        return None
    return BAND_MONTHLY_EARNINGS.get(band)


def weekly_income(person: PersonData) -> Decimal:
    """The subject's gross income per week, unrounded.

    A partner's income is not added. Unknown income counts as zero.
    """
    return (person.gross_annual_income or Decimal("0")) / WEEKS_PER_YEAR


def to_pounds(value: Decimal) -> int:
    """Round to whole pounds, half up."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
