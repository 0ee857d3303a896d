"""ApplicantProfile - Structured description of the operation being matched."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .opportunity import FundingGoal


class FarmType(str, Enum):
    CROP = "crop"
    CATTLE = "cattle"
    MIXED = "mixed"
    SPECIALTY = "specialty"


class OperatorType(str, Enum):
    INDIVIDUAL = "individual"
    SMALL_BUSINESS = "small_business"


class AcresBand(str, Enum):
    UNDER_50 = "under_50"
    FROM_50_TO_100 = "50_100"
    FROM_100_TO_500 = "100_500"
    FROM_500_TO_1000 = "500_1000"
    OVER_1000 = "over_1000"


class ApplicantProfile(BaseModel):
    """Applicant profile as produced by onboarding.

    Read-only to the matching engine. An empty ``goals`` list is accepted and
    simply yields no purpose matches.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[str] = Field(None, description="Profile identifier, if persisted")

    # Location
    state: str = Field(..., min_length=2, max_length=2, description="2-letter state code")
    county: Optional[str] = Field(None, description="Optional county / sub-region")

    # Operation
    farm_type: FarmType = Field(..., alias="farmType")
    acres_band: Optional[AcresBand] = Field(None, alias="acresBand")
    operator_type: OperatorType = Field(..., alias="operatorType")
    employee_count: int = Field(..., alias="employeeCount", ge=0)

    # Funding goals (multi-select)
    goals: tuple[FundingGoal, ...] = Field(default=())

    @field_validator("state")
    @classmethod
    def upper_state(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("goals")
    @classmethod
    def dedupe_goals(cls, v: tuple[FundingGoal, ...]) -> tuple[FundingGoal, ...]:
        return tuple(dict.fromkeys(v))
