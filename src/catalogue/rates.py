"""Benefit rate table: loading, lookup and update validation.

Rates are stored as a flat ``key -> number`` table in ``data/benefit_rates.json``
tagged with the tax year they apply to. Values are parsed straight to
Decimal so annualisation never goes through binary floats.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, Field

from src.catalogue.loader import CatalogueError
from src.config import settings

logger = logging.getLogger(__name__)

_TAX_YEAR_RE = re.compile(r"^(\d{4})-(\d{2})$")

# Relative change thresholds for validate_rates
_WARN_CHANGE = Decimal("0.10")
_ERROR_CHANGE = Decimal("0.50")


class MissingRateError(KeyError):
    """A rate key the caller needs is not in the table."""


@dataclass(frozen=True)
class RateTable:
    tax_year: str
    effective_from: str | None
    rates: Mapping[str, Decimal]

    def get(self, key: str) -> Decimal:
        try:
            return self.rates[key]
        except KeyError:
            raise MissingRateError(key) from None

    def __contains__(self, key: object) -> bool:
        return key in self.rates

    @property
    def state_pension_age(self) -> int:
        return int(self.get("state_pension_age"))


def rate_table_from_mapping(raw: Mapping[str, object]) -> RateTable:
    """Build a RateTable from the decoded rate file contents."""
    rates = raw.get("rates")
    tax_year = raw.get("tax_year")
    if not isinstance(rates, Mapping) or not isinstance(tax_year, str):
        msg = "Rate table must contain a 'tax_year' string and a 'rates' object"
        raise CatalogueError(msg)

    flat: dict[str, Decimal] = {}
    for key, value in _flatten(rates).items():
        flat[key] = Decimal(str(value))

    effective_from = raw.get("effective_from")
    return RateTable(
        tax_year=tax_year,
        effective_from=str(effective_from) if effective_from else None,
        rates=MappingProxyType(flat),
    )


def load_rates(path: Path) -> RateTable:
    """Read a rate file from disk.

    Raises:
        CatalogueError: the file is unreadable or malformed.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"), parse_float=Decimal)
    except (OSError, json.JSONDecodeError) as exc:
        msg = f"Cannot load rate table from {path}: {exc}"
        raise CatalogueError(msg) from exc

    table = rate_table_from_mapping(raw)
    logger.info("Loaded %d benefit rates for tax year %s", len(table.rates), table.tax_year)
    return table


@lru_cache(maxsize=1)
def get_rates() -> RateTable:
    """Process-wide rate table, loaded on first use."""
    return load_rates(settings.rates_path)


# ---------------------------------------------------------------------------
# Update validation
# ---------------------------------------------------------------------------


class RateValidationResult(BaseModel):
    """Outcome of comparing a proposed rate table against the current one."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _flatten(obj: Mapping[str, object], prefix: str = "") -> dict[str, object]:
    """Dot-joined paths to every numeric leaf; strings and lists are ignored."""
    result: dict[str, object] = {}
    for key, value in obj.items():
        full_key = f"{prefix}.{key}" if prefix else key
        if _is_number(value):
            result[full_key] = value
        elif isinstance(value, Mapping):
            result.update(_flatten(value, full_key))
    return result


def _validate_tax_year(tax_year: str) -> list[str]:
    match = _TAX_YEAR_RE.match(tax_year)
    if not match:
        return [f'tax_year format invalid: "{tax_year}" (expected YYYY-YY)']
    start, end = int(match.group(1)), int(match.group(2))
    if end != (start + 1) % 100:
        return [f"tax_year years don't match: {tax_year}"]
    return []


def validate_rates(
    new_rates: Mapping[str, object],
    old_rates: Mapping[str, object],
    tax_year: str,
) -> RateValidationResult:
    """Sanity-check a proposed rate table before it replaces the current one.

    Errors: malformed tax year, a key that disappeared, a non-positive value,
    or a change of more than 50%. Warnings: a new key, or a change of more
    than 10%.
    """
    errors = _validate_tax_year(tax_year)
    warnings: list[str] = []

    new_flat = {k: Decimal(str(v)) for k, v in _flatten(new_rates).items()}
    old_flat = {k: Decimal(str(v)) for k, v in _flatten(old_rates).items()}

    for key in old_flat:
        if key not in new_flat:
            errors.append(f"Missing key: {key} (was in old rates but not in new)")
    for key in new_flat:
        if key not in old_flat:
            warnings.append(f"New key: {key} (not in old rates)")

    for key, new_val in new_flat.items():
        if new_val <= 0:
            errors.append(f"{key}: value is {new_val} (must be positive)")

        old_val = old_flat.get(key)
        if old_val is None or old_val <= 0:
            continue
        change = abs((new_val - old_val) / old_val)
        pct = f"{change * 100:.1f}%"
        if change > _ERROR_CHANGE:
            errors.append(f"{key}: changed by {pct} ({old_val} -> {new_val}), exceeds 50% threshold")
        elif change > _WARN_CHANGE:
            warnings.append(f"{key}: changed by {pct} ({old_val} -> {new_val})")

    if errors:
        logger.warning("Rate validation failed for %s with %d error(s)", tax_year, len(errors))
    return RateValidationResult(valid=not errors, errors=errors, warnings=warnings)
