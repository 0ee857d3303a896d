"""Post-hoc caveats attached to surviving matches."""

from datetime import date

from ..models import ApplicantProfile, DeadlineType, EligibilityConfidence, OpportunityRecord
from ..scorer.weights import DEFAULT_WEIGHTS, ScoringWeights

MATCHING_FUNDS_WARNING = "May require matching funds"
VERIFY_ELIGIBILITY_WARNING = "Verify eligibility requirements"


def days_until_deadline(record: OpportunityRecord, today: date) -> int | None:
    """Whole calendar days until a fixed deadline; None when there is none."""
    if record.deadline_type is not DeadlineType.FIXED or record.deadline_date is None:
        return None
    return (record.deadline_date - today).days


def generate_warnings(
    record: OpportunityRecord,
    profile: ApplicantProfile,
    today: date,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[str]:
    """Build the warning list for one match, in display order."""

    warnings: list[str] = []

    days = days_until_deadline(record, today)
    if days is not None and 0 < days <= weights.deadline_warning_days:
        warnings.append(f"Deadline in {days} days")

    if any("matching" in bullet.lower() for bullet in record.requirements_bullets):
        warnings.append(MATCHING_FUNDS_WARNING)

    if record.eligibility_confidence is EligibilityConfidence.LOW:
        warnings.append(VERIFY_ELIGIBILITY_WARNING)

    return warnings
