"""Deterministic additive scoring engine for matched opportunities.

Components (default points, see ScoringWeights):
- Purpose match: +20 per overlapping goal, max 60
- Geography specificity: state +15 > regional +10 > national +5
- Small farm design: +8
- Eligibility confidence: high +7, medium +3, low +0
- Data quality: 0-10, proportional to quality_score

The low-confidence penalty is NOT part of the score; the orchestrator applies
it after clamping via apply_confidence_penalty().
"""

from ..eligibility.filters import matching_goals
from ..models import (
    ApplicantProfile,
    EligibilityConfidence,
    FundingGoal,
    GeographyScope,
    OpportunityRecord,
    ScoreBreakdown,
    TypicalApplicant,
)
from .weights import DEFAULT_WEIGHTS, ScoringWeights

GOAL_LABELS: dict[FundingGoal, str] = {
    FundingGoal.IRRIGATION: "irrigation/water systems",
    FundingGoal.EQUIPMENT: "equipment purchases",
    FundingGoal.LAND_DEVELOPMENT: "land development",
    FundingGoal.CATTLE: "livestock/cattle",
    FundingGoal.CONSERVATION: "conservation practices",
    FundingGoal.OPERATING: "operating expenses",
}


def score_opportunity(
    record: OpportunityRecord,
    profile: ApplicantProfile,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> ScoreBreakdown:
    """Score a record that already passed the gate and the hard filters.

    Args:
        record: Catalog record
        profile: Applicant profile
        weights: Scoring weights configuration

    Returns:
        ScoreBreakdown with the clamped 0-100 score and match reasons
    """

    score = 0
    reasons: list[str] = []

    # === PURPOSE MATCH ===
    goals = matching_goals(record, profile)
    score += min(weights.purpose_points_cap, len(goals) * weights.purpose_points_per_goal)

    if goals:
        labels = [GOAL_LABELS.get(goal, goal.value) for goal in goals[:2]]
        reasons.append(f"Funds {' and '.join(labels)}")

    # === GEOGRAPHY ===
    state_listed = profile.state in record.states_included
    if record.geography_scope is GeographyScope.STATE and state_listed:
        score += weights.state_geography_bonus
        reasons.append(f"For {profile.state} farmers")
    elif record.geography_scope is GeographyScope.REGIONAL and state_listed:
        score += weights.regional_geography_bonus
        reasons.append("Regional program for your area")
    elif record.geography_scope is GeographyScope.NATIONAL:
        score += weights.national_geography_bonus

    # === SMALL FARM DESIGN ===
    if record.typical_applicant is TypicalApplicant.SMALL_FARM:
        score += weights.small_farm_design_bonus
        reasons.append("Designed for small farms")

    # === CONFIDENCE ===
    if record.eligibility_confidence is EligibilityConfidence.HIGH:
        score += weights.high_confidence_bonus
    elif record.eligibility_confidence is EligibilityConfidence.MEDIUM:
        score += weights.medium_confidence_bonus

    # === DATA QUALITY ===
    score += quality_bonus(record.quality_score, weights)

    return ScoreBreakdown(
        score=min(100, max(0, score)),
        reasons=reasons,
        matched_goals=goals,
    )


def quality_bonus(quality_score: int, weights: ScoringWeights = DEFAULT_WEIGHTS) -> int:
    """Quality bonus proportional to quality_score, rounded half up."""
    # integer form of floor(q / 100 * max + 0.5)
    return (quality_score * weights.quality_bonus_max * 2 + 100) // 200


def apply_confidence_penalty(
    score: int,
    record: OpportunityRecord,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> int:
    """Deprioritize low-confidence records; floored at 0."""
    if record.eligibility_confidence is EligibilityConfidence.LOW:
        return max(0, score - weights.low_confidence_penalty)
    return score
