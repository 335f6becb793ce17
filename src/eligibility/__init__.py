"""Eligibility engine: rule-based screening of benefit schemes."""

from src.eligibility.defaults import apply_homeless_defaults
from src.eligibility.engine import check_eligibility
from src.eligibility.rules import RULE_CHECKS

__all__ = [
    "check_eligibility",
    "apply_homeless_defaults",
    "RULE_CHECKS",
]
