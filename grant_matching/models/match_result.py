"""Match and query result models.

Constructed fresh for every engine call; never cached or persisted.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .opportunity import FundingGoal, OpportunityRecord
from .profile import FarmType


class GateResult(BaseModel):
    """Outcome of the small-farm admission gate."""

    model_config = ConfigDict(frozen=True)

    eligible: bool
    reason: Optional[str] = None


class FilterResult(BaseModel):
    """Outcome of a single hard filter, or of the whole chain."""

    model_config = ConfigDict(frozen=True)

    passes: bool
    reason: Optional[str] = None
    filter_name: Optional[str] = Field(None, description="Filter that produced the result")


class ScoreBreakdown(BaseModel):
    """Additive score with the human-readable reasons behind it."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    reasons: list[str] = Field(default_factory=list)
    matched_goals: list[FundingGoal] = Field(default_factory=list)


class MatchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    grant: OpportunityRecord
    score: int = Field(..., ge=0, le=100)
    match_reasons: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ProfileSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: str
    farm_type: FarmType
    goals: list[FundingGoal]


class FilterDiagnostics(BaseModel):
    model_config = ConfigDict(frozen=True)

    applied_filters: list[str]
    grants_before_filter: int
    grants_after_filter: int


class QueryResult(BaseModel):
    """Ranked, annotated result set for one profile.

    ``exclusion_reasons`` counts why candidates were dropped. It is kept for
    observability and is left out of serialized output.
    """

    model_config = ConfigDict(frozen=True)

    grants: list[MatchResult]
    total: int = Field(..., description="Matches before truncation")
    profile: ProfileSummary
    filters: FilterDiagnostics
    exclusion_reasons: dict[str, int] = Field(default_factory=dict, exclude=True)


class GrantDetail(BaseModel):
    """A single record evaluated against a single profile."""

    model_config = ConfigDict(frozen=True)

    grant: OpportunityRecord
    match: MatchResult
