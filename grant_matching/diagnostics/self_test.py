"""Scripted-profile self-test harness.

Runs realistic small-operator profiles through the matching engine and checks,
for each one:
- no institution-only grant is returned
- every returned grant is small-farm-friendly
- at least ``min_matches`` grants match

Needs nothing beyond the engine's catalog provider, so it runs offline
against the packaged seed catalog.
"""

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ..models import AcresBand, ApplicantProfile, FarmType, FundingGoal, OperatorType

if TYPE_CHECKING:
    from ..matching.engine import MatchingEngine

logger = logging.getLogger(__name__)

TOP_GRANTS_SHOWN = 5

SCRIPTED_PROFILES: dict[str, ApplicantProfile] = {
    "CA Cattle Ranch": ApplicantProfile(
        id="self-test-ca-cattle",
        state="CA",
        county="Fresno",
        farm_type=FarmType.CATTLE,
        acres_band=AcresBand.FROM_100_TO_500,
        operator_type=OperatorType.INDIVIDUAL,
        employee_count=3,
        goals=(FundingGoal.CATTLE, FundingGoal.IRRIGATION, FundingGoal.CONSERVATION),
    ),
    "CA Mixed Farm": ApplicantProfile(
        id="self-test-ca-mixed",
        state="CA",
        county="Sonoma",
        farm_type=FarmType.MIXED,
        acres_band=AcresBand.FROM_50_TO_100,
        operator_type=OperatorType.SMALL_BUSINESS,
        employee_count=5,
        goals=(FundingGoal.EQUIPMENT, FundingGoal.IRRIGATION, FundingGoal.CONSERVATION),
    ),
    "TX Small Ranch": ApplicantProfile(
        id="self-test-tx-ranch",
        state="TX",
        farm_type=FarmType.CATTLE,
        acres_band=AcresBand.FROM_500_TO_1000,
        operator_type=OperatorType.INDIVIDUAL,
        employee_count=2,
        goals=(FundingGoal.CATTLE, FundingGoal.LAND_DEVELOPMENT, FundingGoal.EQUIPMENT),
    ),
}


class SelfTestProfileResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    profile: str
    match_count: int
    top_grants: list[str]
    has_institution_grants: bool
    all_small_farm_friendly: bool
    meets_min_matches: bool
    passed: bool


class SelfTestReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    passed: bool
    results: list[SelfTestProfileResult]


def run_self_tests(engine: "MatchingEngine", min_matches: int = 10) -> SelfTestReport:
    """Run every scripted profile and collect per-profile verdicts."""

    results: list[SelfTestProfileResult] = []
    for name, profile in SCRIPTED_PROFILES.items():
        query = engine.find_matches(profile)
        grants = [match.grant for match in query.grants]
        match_count = len(grants)

        has_institution = any(grant.institution_only for grant in grants)
        all_friendly = all(grant.small_farm_friendly for grant in grants)
        meets_min = match_count >= min_matches
        passed = not has_institution and all_friendly and meets_min

        results.append(
            SelfTestProfileResult(
                profile=name,
                match_count=match_count,
                top_grants=[grant.title for grant in grants[:TOP_GRANTS_SHOWN]],
                has_institution_grants=has_institution,
                all_small_farm_friendly=all_friendly,
                meets_min_matches=meets_min,
                passed=passed,
            )
        )

        if passed:
            logger.info("self_test profile=%r result=pass matches=%d", name, match_count)
        else:
            logger.error(
                "self_test profile=%r result=fail matches=%d institution_grants=%s all_friendly=%s",
                name,
                match_count,
                has_institution,
                all_friendly,
            )

    return SelfTestReport(passed=all(result.passed for result in results), results=results)
