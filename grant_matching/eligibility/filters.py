"""Hard filter chain for (record, profile) pairs.

Five pass/fail predicates, ordered cheapest and most discriminating first:
1. Geography
2. Submission window (deadline)
3. Applicant-size ceiling (employee count)
4. Purpose overlap
5. Applicant-type compatibility

The chain stops at the first failure; there is no partial credit.
"""

from datetime import date
from typing import Callable

from ..models import (
    ApplicantProfile,
    ApplicantType,
    DeadlineType,
    FarmType,
    FilterResult,
    FundingGoal,
    GeographyScope,
    OpportunityRecord,
)

HardFilter = Callable[[OpportunityRecord, ApplicantProfile, date], FilterResult]

# Operation types that also qualify the applicant as a farm / ranch
FARM_OPERATION_TYPES = {FarmType.CROP, FarmType.MIXED, FarmType.SPECIALTY}
RANCH_OPERATION_TYPES = {FarmType.CATTLE, FarmType.MIXED}


def check_geography(record: OpportunityRecord, profile: ApplicantProfile, today: date) -> FilterResult:
    """Check if the record is geographically accessible to the applicant."""

    # National programs are always accessible
    if record.geography_scope is GeographyScope.NATIONAL:
        return FilterResult(passes=True, filter_name="geography")

    if record.states_included:
        if profile.state in record.states_included:
            return FilterResult(passes=True, filter_name="geography")

        shown = ", ".join(record.states_included[:3])
        suffix = "..." if len(record.states_included) > 3 else ""
        return FilterResult(
            passes=False,
            reason=f"Only in: {shown}{suffix}",
            filter_name="geography",
        )

    # No state list on a non-national record: data-quality fallback, let it through
    return FilterResult(passes=True, filter_name="geography")


def check_deadline(record: OpportunityRecord, profile: ApplicantProfile, today: date) -> FilterResult:
    """Check that the submission window has not closed (day resolution)."""

    if record.deadline_type is DeadlineType.ROLLING or record.deadline_date is None:
        return FilterResult(passes=True, filter_name="deadline")

    if record.deadline_date < today:
        return FilterResult(
            passes=False,
            reason=f"Deadline passed: {record.deadline_display or record.deadline_date.isoformat()}",
            filter_name="deadline",
        )

    return FilterResult(passes=True, filter_name="deadline")


def check_employee_count(record: OpportunityRecord, profile: ApplicantProfile, today: date) -> FilterResult:
    """Check the applicant headcount against the record's ceiling (0 = no limit)."""

    if record.max_employees == 0 or profile.employee_count <= record.max_employees:
        return FilterResult(passes=True, filter_name="employee_count")

    return FilterResult(
        passes=False,
        reason=f"Requires {record.max_employees} or fewer employees",
        filter_name="employee_count",
    )


def check_purpose_match(record: OpportunityRecord, profile: ApplicantProfile, today: date) -> FilterResult:
    """Require at least one overlapping funding purpose."""

    if not matching_goals(record, profile):
        return FilterResult(
            passes=False,
            reason="No matching funding purposes",
            filter_name="purpose",
        )

    return FilterResult(passes=True, filter_name="purpose")


def check_applicant_type(record: OpportunityRecord, profile: ApplicantProfile, today: date) -> FilterResult:
    """Check that the record accepts at least one applicant type the profile implies."""

    user_types = derive_applicant_types(profile)

    if not any(applicant_type in user_types for applicant_type in record.applicant_types):
        return FilterResult(
            passes=False,
            reason=f"Not available for {profile.operator_type.value} operators",
            filter_name="applicant_type",
        )

    return FilterResult(passes=True, filter_name="applicant_type")


HARD_FILTERS: tuple[HardFilter, ...] = (
    check_geography,
    check_deadline,
    check_employee_count,
    check_purpose_match,
    check_applicant_type,
)


def run_hard_filters(
    record: OpportunityRecord,
    profile: ApplicantProfile,
    today: date,
) -> FilterResult:
    """Run the filter chain, short-circuiting on the first failure.

    Args:
        record: Catalog record that already passed the admission gate
        profile: Applicant profile
        today: Current calendar date used by the deadline filter

    Returns:
        The first failing FilterResult, or a passing result
    """

    for hard_filter in HARD_FILTERS:
        result = hard_filter(record, profile, today)
        if not result.passes:
            return result

    return FilterResult(passes=True)


def matching_goals(record: OpportunityRecord, profile: ApplicantProfile) -> list[FundingGoal]:
    """Record purpose tags that the profile also declares, in record order."""
    return [tag for tag in record.purpose_tags if tag in profile.goals]


def derive_applicant_types(profile: ApplicantProfile) -> set[ApplicantType]:
    """Map the profile's legal form and operation type onto applicant types."""
    user_types = {ApplicantType(profile.operator_type.value)}

    if profile.farm_type in FARM_OPERATION_TYPES:
        user_types.add(ApplicantType.FARM)
    if profile.farm_type in RANCH_OPERATION_TYPES:
        user_types.add(ApplicantType.RANCH)

    return user_types
