"""Eligibility engine: runs the per-scheme rules over a candidate list.

Pure Python. No I/O, no network. Schemes without a registered rule are
kept at worth_checking: if a situation put them on the list, it is better
to show them and let the user check than to hide them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from src.catalogue.rates import MissingRateError, RateTable, get_rates
from src.eligibility.rules import RULE_CHECKS
from src.models.enums import ConfidenceTier
from src.schemas.catalogue import EntitlementDefinition
from src.schemas.entitlements import EligibilityResult
from src.schemas.person import PersonData

logger = logging.getLogger(__name__)


def check_single(
    definition: EntitlementDefinition,
    person: PersonData,
    situations: Sequence[str],
    rates: RateTable,
) -> EligibilityResult:
    check_fn = RULE_CHECKS.get(definition.id)
    if check_fn is None:
        return EligibilityResult(id=definition.id, eligible=True, confidence=ConfidenceTier.WORTH_CHECKING)
    try:
        return check_fn(person, situations, rates)
    except MissingRateError as exc:
        # Same treatment as a scheme with no rule
        logger.warning("Rate %s missing, cannot evaluate %s", exc.args[0], definition.id)
        return EligibilityResult(id=definition.id, eligible=True, confidence=ConfidenceTier.WORTH_CHECKING)


def check_eligibility(
    entitlements: Iterable[EntitlementDefinition],
    person: PersonData,
    situations: Sequence[str],
    rates: RateTable | None = None,
) -> list[EligibilityResult]:
    """Evaluate every candidate scheme and return only the eligible results.

    Output order follows the input order. Schemes that cannot both be claimed
    are not filtered here; the conflict resolver handles them.
    """
    rate_table = rates or get_rates()
    results = [check_single(d, person, situations, rate_table) for d in entitlements]
    eligible = [r for r in results if r.eligible]
    logger.debug("Eligibility: %d of %d candidate schemes eligible", len(eligible), len(results))
    return eligible
