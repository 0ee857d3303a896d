"""Pytest configuration and fixtures."""

from datetime import date

import pytest

from grant_matching.catalog import SeedCatalogProvider, StaticCatalogProvider
from grant_matching.matching import MatchingEngine
from grant_matching.models import (
    ApplicantProfile,
    ApplicantType,
    DeadlineType,
    EligibilityConfidence,
    FarmType,
    FundingGoal,
    GeographyScope,
    OperatorType,
    OpportunityRecord,
    TypicalApplicant,
)

# Fixed calendar date so deadline-dependent results stay reproducible
TODAY = date(2026, 10, 19)


def build_record(**overrides) -> OpportunityRecord:
    """National, rolling, high-confidence small-farm record; override any field."""
    data = dict(
        id="test-grant-001",
        title="Test Grant",
        sponsor="Test Sponsor",
        apply_url="https://example.org/apply",
        summary_short="A test program",
        geography_scope=GeographyScope.NATIONAL,
        states_included=(),
        purpose_tags=(FundingGoal.IRRIGATION,),
        applicant_types=(ApplicantType.INDIVIDUAL, ApplicantType.FARM, ApplicantType.RANCH),
        max_employees=0,
        small_farm_friendly=True,
        institution_only=False,
        typical_applicant=TypicalApplicant.SMALL_FARM,
        eligibility_confidence=EligibilityConfidence.HIGH,
        deadline_type=DeadlineType.ROLLING,
        deadline_date=None,
        deadline_display="Rolling",
        requirements_bullets=(),
        quality_score=90,
        source="test",
    )
    data.update(overrides)
    return OpportunityRecord(**data)


def build_profile(**overrides) -> ApplicantProfile:
    """Small CA cattle operation; override any field."""
    data = dict(
        state="CA",
        farm_type=FarmType.CATTLE,
        operator_type=OperatorType.INDIVIDUAL,
        employee_count=3,
        goals=(FundingGoal.CATTLE, FundingGoal.IRRIGATION, FundingGoal.CONSERVATION),
    )
    data.update(overrides)
    return ApplicantProfile(**data)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def make_record():
    """Factory fixture: make_record(**overrides) -> OpportunityRecord."""
    return build_record


@pytest.fixture
def make_profile():
    """Factory fixture: make_profile(**overrides) -> ApplicantProfile."""
    return build_profile


@pytest.fixture
def profile():
    return build_profile()


@pytest.fixture
def make_engine():
    """Factory fixture building an engine over in-memory records with a fixed today."""

    def _make(records, **kwargs):
        return MatchingEngine(StaticCatalogProvider(records), today=lambda: TODAY, **kwargs)

    return _make


@pytest.fixture(scope="session")
def seed_provider():
    """Packaged seed catalog, loaded once per session."""
    provider = SeedCatalogProvider()
    provider.snapshot()
    return provider


@pytest.fixture
def seed_engine(seed_provider):
    return MatchingEngine(seed_provider, today=lambda: TODAY)
