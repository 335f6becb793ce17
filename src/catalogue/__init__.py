"""Static scheme catalogue and benefit rate table."""

from src.catalogue.loader import (
    CatalogueError,
    CatalogueIndex,
    available_entitlements,
    get_catalogue,
    load_catalogue,
    relevant_entitlement_ids,
)
from src.catalogue.rates import MissingRateError, RateTable, get_rates, load_rates, validate_rates

__all__ = [
    "CatalogueError",
    "CatalogueIndex",
    "available_entitlements",
    "get_catalogue",
    "load_catalogue",
    "relevant_entitlement_ids",
    "MissingRateError",
    "RateTable",
    "get_rates",
    "load_rates",
    "validate_rates",
]
