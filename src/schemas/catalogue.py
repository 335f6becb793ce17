"""Pydantic schemas for the static scheme catalogue (``src/data/entitlements.json``).

Loaded once at process start and never mutated.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import ClaimingDifficulty, DependencyType, Nation


class EntitlementDefinition(BaseModel):
    """A single scheme in the catalogue."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    short_description: str
    admin_body: str
    application_method: tuple[str, ...] = ()
    application_url: str | None = None
    estimated_annual_value_range: tuple[int, int] | None = None
    claiming_difficulty: ClaimingDifficulty = ClaimingDifficulty.MODERATE
    is_gateway: bool = False
    available_in: tuple[Nation, ...] | None = None  # None = every nation

    def is_available_in(self, nation: Nation) -> bool:
        return self.available_in is None or nation in self.available_in


class DependencyEdge(BaseModel):
    """Directed edge: eligibility for ``from`` unlocks or strengthens ``to``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_id: str = Field(alias="from")
    to: str
    type: DependencyType
    note: str | None = None
    auto: bool = False       # awarded automatically once the gateway is in payment
    critical: bool = False


class ConflictEdge(BaseModel):
    """Undirected pair of schemes that cannot both be claimed in practice."""

    model_config = ConfigDict(frozen=True)

    between: tuple[str, str]
    type: str = "mutual_exclusion"
    resolution: str


class SituationDefinition(BaseModel):
    """Life situation mapped to the schemes worth screening for it."""

    model_config = ConfigDict(frozen=True)

    id: str
    primary_entitlements: tuple[str, ...] = ()
    secondary_entitlements: tuple[str, ...] = ()
    time_critical: bool = False


class EntitlementCatalogue(BaseModel):
    """Raw catalogue file contents."""

    model_config = ConfigDict(frozen=True)

    entitlements: tuple[EntitlementDefinition, ...]
    dependency_edges: tuple[DependencyEdge, ...] = ()
    conflict_edges: tuple[ConflictEdge, ...] = ()
    situations: tuple[SituationDefinition, ...] = ()
