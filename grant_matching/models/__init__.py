"""Shared Pydantic models for the matching engine."""

from .opportunity import (
    ApplicantType,
    DeadlineType,
    EligibilityConfidence,
    FundingGoal,
    GeographyScope,
    OpportunityRecord,
    TypicalApplicant,
)
from .profile import AcresBand, ApplicantProfile, FarmType, OperatorType
from .match_result import (
    FilterDiagnostics,
    FilterResult,
    GateResult,
    GrantDetail,
    MatchResult,
    ProfileSummary,
    QueryResult,
    ScoreBreakdown,
)

__all__ = [
    "AcresBand",
    "ApplicantProfile",
    "ApplicantType",
    "DeadlineType",
    "EligibilityConfidence",
    "FarmType",
    "FilterDiagnostics",
    "FilterResult",
    "FundingGoal",
    "GateResult",
    "GeographyScope",
    "GrantDetail",
    "MatchResult",
    "OperatorType",
    "OpportunityRecord",
    "ProfileSummary",
    "QueryResult",
    "ScoreBreakdown",
    "TypicalApplicant",
]
