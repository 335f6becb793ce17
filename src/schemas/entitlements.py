"""Pydantic schemas for eligibility results and the entitlement bundle.

Pure data classes with no business logic. The bundle is the single output
handed to the presentation layer and dumps to plain JSON with
``model_dump(mode="json")``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator

from src.models.enums import ActionPriority, ClaimingDifficulty, ConfidenceTier, Nation
from src.schemas.valuation import CouncilTaxDetail


class EligibilityResult(BaseModel):
    """Outcome of one scheme's eligibility rule."""

    model_config = ConfigDict(frozen=True)

    id: str
    eligible: bool
    confidence: ConfidenceTier
    reason: str | None = None


class ValueRange(BaseModel):
    """Estimated annual value in whole pounds."""

    model_config = ConfigDict(frozen=True)

    low: int = 0
    high: int = 0

    @model_validator(mode="after")
    def check_order(self) -> ValueRange:
        if self.low > self.high:
            msg = f"low ({self.low}) must not exceed high ({self.high})"
            raise ValueError(msg)
        return self


class EntitlementResult(BaseModel):
    """One eligible scheme, valued and annotated for display."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    plain_description: str
    estimated_annual_value: ValueRange
    confidence: ConfidenceTier
    difficulty: ClaimingDifficulty
    application_method: str
    application_url: str | None = None
    what_you_need: tuple[str, ...] = ()
    timeline: str = ""
    why_this_matters: str | None = None
    council_tax_detail: CouncilTaxDetail | None = None


class CascadedGroup(BaseModel):
    """Entitlements that become claimable once a gateway is awarded."""

    model_config = ConfigDict(frozen=True)

    gateway_id: str
    gateway_name: str
    entitlements: tuple[EntitlementResult, ...]


class CascadeResult(BaseModel):
    """Partition of the eligible set into gateway / cascaded / independent."""

    model_config = ConfigDict(frozen=True)

    gateway_entitlements: tuple[EntitlementResult, ...] = ()
    cascaded_entitlements: tuple[CascadedGroup, ...] = ()
    independent_entitlements: tuple[EntitlementResult, ...] = ()

    def all_entitlements(self) -> list[EntitlementResult]:
        """Every placed entitlement exactly once: gateways, cascaded, independent."""
        cascaded = [e for group in self.cascaded_entitlements for e in group.entitlements]
        return [*self.gateway_entitlements, *cascaded, *self.independent_entitlements]


class ConflictResolution(BaseModel):
    """Guidance for two eligible schemes that cannot both be claimed."""

    model_config = ConfigDict(frozen=True)

    option_a: str
    option_a_id: str
    option_b: str
    option_b_id: str
    recommendation: str
    reasoning: str
    value_difference: int | None = None


class ActionItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    entitlement_id: str
    entitlement_name: str
    action: str
    priority: ActionPriority


class ActionPlanStep(BaseModel):
    """One time-phase of the claim plan (e.g. "Week 1")."""

    model_config = ConfigDict(frozen=True)

    week: str
    actions: tuple[ActionItem, ...]


class EntitlementBundle(BaseModel):
    """Full resolution output for one person."""

    model_config = ConfigDict(frozen=True)

    total_estimated_annual_value: ValueRange
    nation: Nation | None = None
    rates_tax_year: str | None = None
    gateway_entitlements: tuple[EntitlementResult, ...] = ()
    cascaded_entitlements: tuple[CascadedGroup, ...] = ()
    independent_entitlements: tuple[EntitlementResult, ...] = ()
    conflicts: tuple[ConflictResolution, ...] = ()
    action_plan: tuple[ActionPlanStep, ...] = ()

    def all_entitlements(self) -> list[EntitlementResult]:
        cascaded = [e for group in self.cascaded_entitlements for e in group.entitlements]
        return [*self.gateway_entitlements, *cascaded, *self.independent_entitlements]

    def entitlement_ids(self) -> list[str]:
        return [e.id for e in self.all_entitlements()]
