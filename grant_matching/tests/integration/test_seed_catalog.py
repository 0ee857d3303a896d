"""End-to-end checks against the packaged seed catalog (today fixed at 2026-10-19)."""

from grant_matching.diagnostics import SCRIPTED_PROFILES
from grant_matching.eligibility.gate import INSTITUTION_ONLY_REASON


def _ids(result):
    return [match.grant.id for match in result.grants]


def test_seed_self_test_passes(seed_engine):
    """Scripted profiles pass against the seed catalog."""
    report = seed_engine.run_self_tests()

    assert report.passed is True
    assert {result.profile: result.match_count for result in report.results} == {
        "CA Cattle Ranch": 14,
        "CA Mixed Farm": 12,
        "TX Small Ranch": 11,
    }


def test_ca_cattle_operation(seed_engine):
    """Ranking for a small California cattle operation."""
    result = seed_engine.find_matches(SCRIPTED_PROFILES["CA Cattle Ranch"])
    scores = {match.grant.id: match.score for match in result.grants}

    assert result.total >= 10
    assert not any(match.grant.institution_only for match in result.grants)
    # Multi-purpose national cost-share beats a single-overlap national loan
    assert scores["usda-eqip-001"] == 90
    assert scores["usda-fsa-microloans-001"] == 50
    assert _ids(result)[:5] == [
        "sare-western-001",
        "usda-eqip-001",
        "sare-farmer-rancher-001",
        "ca-cdfa-sweep-001",
        "ca-cdfa-ammp-001",
    ]


def test_seed_gated_records_never_returned(seed_engine):
    """Institution-only and unfriendly seed records never surface."""
    gated = {"usda-afri-001", "usda-scbgp-001", "usda-bfrdp-001", "usda-rcpp-001"}

    for profile in SCRIPTED_PROFILES.values():
        result = seed_engine.find_matches(profile)
        assert gated.isdisjoint(_ids(result))
        assert result.exclusion_reasons["Not small-farm-friendly"] == 4


def test_expired_fixed_deadlines_excluded(seed_engine):
    """Programs whose deadline passed are filtered out with a reason."""
    profile = SCRIPTED_PROFILES["CA Mixed Farm"]

    assert "usda-vapg-001" not in _ids(seed_engine.find_matches(profile))
    detail = seed_engine.get_detail_for_profile("usda-vapg-001", profile)
    assert detail.match.warnings == ["Deadline passed: April 2026 (typical)"]


def test_upcoming_deadline_warning(seed_engine):
    """A deadline 13 days out is flagged."""
    result = seed_engine.find_matches(SCRIPTED_PROFILES["CA Cattle Ranch"])
    western = next(match for match in result.grants if match.grant.id == "sare-western-001")

    assert western.warnings == ["Deadline in 13 days"]
    assert "Regional program for your area" in western.match_reasons


def test_low_confidence_seed_record(seed_engine):
    """The low-confidence seed record ranks last with both warnings."""
    result = seed_engine.find_matches(SCRIPTED_PROFILES["CA Cattle Ranch"])
    minigrant = next(match for match in result.grants if match.grant.id == "ca-rcd-minigrant-001")

    assert minigrant.score == 41
    assert minigrant.warnings == ["May require matching funds", "Verify eligibility requirements"]
    assert _ids(result)[-1] == "ca-rcd-minigrant-001"


def test_institution_detail(seed_engine):
    detail = seed_engine.get_detail_for_profile("usda-afri-001", SCRIPTED_PROFILES["CA Cattle Ranch"])

    assert detail.match.score == 0
    assert detail.match.warnings == [INSTITUTION_ONLY_REASON]


def test_seed_health(seed_engine):
    """Health counters over the seed catalog."""
    health = seed_engine.get_health()

    assert health.catalog_size == 28
    assert health.eligible_count == 24
    assert health.institution_only_count == 3
    assert health.confidence_counts["low"] == 1
    assert health.state_coverage_counts["CA"] > health.state_coverage_counts["WY"]
