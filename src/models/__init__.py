"""Domain enums shared by the schemas and the engine."""

from __future__ import annotations

from src.models.enums import (
    ActionPriority,
    ClaimingDifficulty,
    ConfidenceTier,
    DependencyType,
    DisabilityBenefitLevel,
    EmploymentStatus,
    HousingTenure,
    IncomeBand,
    Nation,
    RelationshipStatus,
)

__all__ = [
    "ActionPriority",
    "ClaimingDifficulty",
    "ConfidenceTier",
    "DependencyType",
    "DisabilityBenefitLevel",
    "EmploymentStatus",
    "HousingTenure",
    "IncomeBand",
    "Nation",
    "RelationshipStatus",
]
