"""Domain enums used across the catalogue, person data and bundle schemas.

All enums use str mixin so they serialize to plain JSON strings.
"""

from __future__ import annotations

from enum import Enum


class Nation(str, Enum):
    """UK nation; drives catalogue availability filtering."""

    ENGLAND = "england"
    SCOTLAND = "scotland"
    WALES = "wales"
    NORTHERN_IRELAND = "northern_ireland"


class HousingTenure(str, Enum):
    OWN_OUTRIGHT = "own_outright"
    MORTGAGE = "mortgage"
    RENT_SOCIAL = "rent_social"
    RENT_PRIVATE = "rent_private"
    LIVING_WITH_FAMILY = "living_with_family"
    HOMELESS = "homeless"


class EmploymentStatus(str, Enum):
    EMPLOYED = "employed"
    SELF_EMPLOYED = "self_employed"
    UNEMPLOYED = "unemployed"
    RETIRED = "retired"
    STUDENT = "student"
    CARER_FULLTIME = "carer_fulltime"
    SICK_DISABLED = "sick_disabled"


class RelationshipStatus(str, Enum):
    SINGLE = "single"
    COUPLE_MARRIED = "couple_married"
    COUPLE_CIVIL_PARTNER = "couple_civil_partner"
    COUPLE_COHABITING = "couple_cohabiting"
    SEPARATED = "separated"
    WIDOWED = "widowed"

    @property
    def is_couple(self) -> bool:
        return self.value.startswith("couple")


class DisabilityBenefitLevel(str, Enum):
    """Disability benefit already in payment (to the subject, a child or a cared-for person)."""

    NONE = "none"
    DLA_LOWER_CARE = "dla_lower_care"
    DLA_MIDDLE_CARE = "dla_middle_care"
    DLA_HIGHER_CARE = "dla_higher_care"
    DLA_LOWER_MOBILITY = "dla_lower_mobility"
    DLA_HIGHER_MOBILITY = "dla_higher_mobility"
    PIP_DAILY_LIVING_STANDARD = "pip_daily_living_standard"
    PIP_DAILY_LIVING_ENHANCED = "pip_daily_living_enhanced"
    PIP_MOBILITY_STANDARD = "pip_mobility_standard"
    PIP_MOBILITY_ENHANCED = "pip_mobility_enhanced"
    ATTENDANCE_ALLOWANCE_LOWER = "attendance_allowance_lower"
    ATTENDANCE_ALLOWANCE_HIGHER = "attendance_allowance_higher"


class IncomeBand(str, Enum):
    """Self-reported gross household income band.

    Declaration order is ascending; PREFER_NOT_TO_SAY sits outside the ordering.
    """

    UNDER_7400 = "under_7400"
    UNDER_12570 = "under_12570"
    UNDER_16000 = "under_16000"
    UNDER_25000 = "under_25000"
    UNDER_50270 = "under_50270"
    UNDER_60000 = "under_60000"
    UNDER_100000 = "under_100000"
    UNDER_125140 = "under_125140"
    OVER_125140 = "over_125140"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"


class ConfidenceTier(str, Enum):
    """How directly a deterministic rule maps onto the real scheme criteria."""

    LIKELY = "likely"
    POSSIBLE = "possible"
    WORTH_CHECKING = "worth_checking"

    @property
    def rank(self) -> int:
        """Higher is more certain: likely=3, possible=2, worth_checking=1."""
        return {"likely": 3, "possible": 2, "worth_checking": 1}[self.value]


class ClaimingDifficulty(str, Enum):
    AUTOMATIC = "automatic"
    EASY = "easy"
    MODERATE = "moderate"
    COMPLEX = "complex"
    ADVERSARIAL = "adversarial"


class ActionPriority(str, Enum):
    CRITICAL = "critical"
    IMPORTANT = "important"
    WHEN_READY = "when_ready"


class DependencyType(str, Enum):
    """Relationship carried by a catalogue dependency edge."""

    GATEWAY = "gateway"
    STRENGTHENS = "strengthens"
    QUALIFIES = "qualifies"
    ENABLES_FOR_CARER = "enables_for_carer"
    TRIGGERS = "triggers"
