"""OpportunityRecord - Catalog entry for one funding program.

Records are produced upstream (ingestion, curation) and are immutable once
loaded into a catalog snapshot.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class GeographyScope(str, Enum):
    NATIONAL = "national"
    REGIONAL = "regional"
    STATE = "state"
    COUNTY = "county"


class FundingGoal(str, Enum):
    """Closed set of funding purposes shared by records and profiles."""

    IRRIGATION = "irrigation"
    EQUIPMENT = "equipment"
    LAND_DEVELOPMENT = "land_development"
    CATTLE = "cattle"
    CONSERVATION = "conservation"
    OPERATING = "operating"


class ApplicantType(str, Enum):
    INDIVIDUAL = "individual"
    SMALL_BUSINESS = "small_business"
    FARM = "farm"
    RANCH = "ranch"
    COOPERATIVE = "cooperative"


class TypicalApplicant(str, Enum):
    SMALL_FARM = "small_farm"
    INSTITUTION = "institution"
    MIXED = "mixed"


class EligibilityConfidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DeadlineType(str, Enum):
    FIXED = "fixed"
    ROLLING = "rolling"


class OpportunityRecord(BaseModel):
    """Normalized funding opportunity as curated for small farm operators.

    The eligibility classification fields (``small_farm_friendly``,
    ``institution_only``, ``typical_applicant``, ``eligibility_confidence``)
    drive the admission gate. An institution-only record can never be
    constructed as small-farm-friendly.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Identity
    id: str = Field(..., min_length=1, description="Unique catalog identifier")
    title: str = Field(..., min_length=1, description="Program title")
    sponsor: str = Field(..., description="Sponsoring organization")
    apply_url: str = Field(..., alias="applyUrl", description="Application URL")

    # Summary
    summary_short: str = Field(default="", alias="summaryShort")
    description: str = Field(default="", alias="descriptionClean")

    # Geography
    geography_scope: GeographyScope = Field(..., alias="geographyScope")
    states_included: tuple[str, ...] = Field(
        default=(), alias="statesIncluded", description="Empty implies nationwide reach"
    )

    # Matching attributes
    purpose_tags: tuple[FundingGoal, ...] = Field(..., alias="purposeTags", min_length=1)
    applicant_types: tuple[ApplicantType, ...] = Field(..., alias="applicantTypes", min_length=1)
    max_employees: int = Field(default=0, alias="maxEmployees", ge=0, description="0 = no limit")

    # Eligibility classification
    small_farm_friendly: bool = Field(..., alias="smallFarmFriendly")
    institution_only: bool = Field(..., alias="institutionOnly")
    typical_applicant: TypicalApplicant = Field(..., alias="typicalApplicant")
    eligibility_confidence: EligibilityConfidence = Field(..., alias="eligibilityConfidence")

    # Funding
    funding_min: Optional[float] = Field(None, alias="fundingMin")
    funding_max: Optional[float] = Field(None, alias="fundingMax")
    funding_display: str = Field(default="Varies", alias="fundingDisplay")

    # Deadline
    deadline_type: DeadlineType = Field(..., alias="deadlineType")
    deadline_date: Optional[date] = Field(None, alias="deadlineDate")
    deadline_display: str = Field(default="", alias="deadlineDisplay")

    # Supporting data
    requirements_bullets: tuple[str, ...] = Field(default=(), alias="requirementsBullets")
    quality_score: int = Field(default=0, alias="qualityScore", ge=0, le=100)
    source: str = Field(default="manual")
    last_verified: Optional[date] = Field(None, alias="lastVerified")

    @field_validator("apply_url")
    @classmethod
    def url_scheme(cls, v: str) -> str:
        if not v.startswith("http"):
            raise ValueError(f"applyUrl must be an http(s) URL, got {v!r}")
        return v

    @field_validator("states_included")
    @classmethod
    def normalize_states(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(state.strip().upper() for state in v)

    @model_validator(mode="after")
    def check_invariants(self) -> "OpportunityRecord":
        if self.institution_only and self.small_farm_friendly:
            raise ValueError(
                f"{self.id}: institutionOnly records cannot be smallFarmFriendly"
            )
        if self.deadline_type is DeadlineType.ROLLING and self.deadline_date is not None:
            raise ValueError(f"{self.id}: rolling deadlines must not carry a deadlineDate")
        if self.deadline_type is DeadlineType.FIXED and self.deadline_date is None:
            raise ValueError(f"{self.id}: fixed deadlines require a deadlineDate")
        if (
            self.funding_min is not None
            and self.funding_max is not None
            and self.funding_min > self.funding_max
        ):
            raise ValueError(f"{self.id}: fundingMin exceeds fundingMax")
        return self

    @property
    def is_small_farm_eligible(self) -> bool:
        """Static admission check used when building catalog snapshots."""
        return self.small_farm_friendly and not self.institution_only

