"""External valuation service: runs both calculators and merges their figures.

PolicyEngine supplies the headline national figures and the Universal Credit
element breakdown. MissingBenefit supplies the council-specific Council Tax
Reduction figure, which overrides PolicyEngine's generic one.
"""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal

from src.calculators.income import to_pounds
from src.integrations.missing_benefit.client import COUNCIL_TAX_REDUCTION, missing_benefit_client
from src.integrations.missing_benefit.schemas import MissingBenefitResponse
from src.integrations.policyengine.client import policyengine_client
from src.integrations.policyengine.schemas import PolicyEngineFigures
from src.schemas.person import PersonData
from src.schemas.valuation import BreakdownLine, CouncilTaxDetail, ExternalValuation

logger = logging.getLogger(__name__)

COUNCIL_TAX_REDUCTION_IDS = (
    "council_tax_reduction_full",
    "council_tax_support_working_age",
    "council_tax_reduction_scotland",
    "council_tax_reduction_wales",
)

# scheme id -> PolicyEngineFigures field
_POLICYENGINE_FIELDS: dict[str, str] = {
    "universal_credit": "universal_credit",
    "pension_credit": "pension_credit",
    "child_benefit": "child_benefit",
    "housing_benefit_legacy": "housing_benefit",
    **{scheme_id: "council_tax_benefit" for scheme_id in COUNCIL_TAX_REDUCTION_IDS},
}


def merge_valuation(
    policyengine: PolicyEngineFigures | None,
    missing_benefit: MissingBenefitResponse | None,
) -> ExternalValuation | None:
    """Combine both service results. Returns None when neither produced anything."""
    figures: dict[str, int] = {}
    uc_breakdown = None
    council_tax_detail = None

    if policyengine is not None:
        for scheme_id, field in _POLICYENGINE_FIELDS.items():
            value = getattr(policyengine, field)
            if value is not None and value > 0:
                figures[scheme_id] = value
        uc_breakdown = policyengine.uc_breakdown

    if missing_benefit is not None:
        ctr = missing_benefit.find(COUNCIL_TAX_REDUCTION)
        if ctr is not None and ctr.eligible and ctr.annual_amount > 0:
            amount = to_pounds(Decimal(str(ctr.annual_amount)))
            for scheme_id in COUNCIL_TAX_REDUCTION_IDS:
                figures[scheme_id] = amount
            council_tax_detail = CouncilTaxDetail(
                council_name=ctr.council_name,
                breakdown=tuple(
                    BreakdownLine(label=line.label, amount=line.amount)
                    for line in ctr.breakdown
                    if not line.is_heading
                ),
                apply_url=ctr.apply_url,
                confidence_score=ctr.confidence_score,
            )

    if not figures and uc_breakdown is None and council_tax_detail is None:
        return None
    return ExternalValuation(figures=figures, uc_breakdown=uc_breakdown, council_tax_detail=council_tax_detail)


async def fetch_valuation(person: PersonData) -> ExternalValuation | None:
    """Query both services concurrently. Never raises; failures are logged and ignored."""
    pe_result, mb_result = await asyncio.gather(
        policyengine_client.calculate(person),
        missing_benefit_client.calculate(person),
        return_exceptions=True,
    )

    if isinstance(pe_result, Exception):
        logger.warning("PolicyEngine valuation failed: %s", type(pe_result).__name__)
        pe_result = None
    if isinstance(mb_result, Exception):
        logger.warning("MissingBenefit valuation failed: %s", type(mb_result).__name__)
        mb_result = None

    valuation = merge_valuation(pe_result, mb_result)
    if valuation is not None:
        logger.info("External valuation: %d precise figure(s)", len(valuation.figures))
    return valuation
