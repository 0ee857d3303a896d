"""Tests for the ranker/limiter."""

from grant_matching.matching import rank_and_limit
from grant_matching.models import MatchResult


def _matches(make_record, scores):
    return [
        MatchResult(grant=make_record(id=f"grant-{i}"), score=score)
        for i, score in enumerate(scores)
    ]


def test_sorts_by_score_descending(make_record):
    """Highest score first."""
    ranked = rank_and_limit(_matches(make_record, [30, 90, 50]), min_score=25, limit=20)
    assert [m.score for m in ranked.grants] == [90, 50, 30]


def test_ties_keep_catalog_order(make_record):
    """Equal scores keep their catalog order."""
    ranked = rank_and_limit(_matches(make_record, [40, 70, 40, 70]), min_score=0, limit=20)
    assert [m.grant.id for m in ranked.grants] == ["grant-1", "grant-3", "grant-0", "grant-2"]


def test_min_score_cutoff_is_inclusive(make_record):
    """A score equal to min_score is kept."""
    ranked = rank_and_limit(_matches(make_record, [24, 25, 26]), min_score=25, limit=20)

    assert [m.score for m in ranked.grants] == [26, 25]
    assert ranked.below_threshold == 1


def test_total_counts_before_truncation(make_record):
    """total counts every kept match, not just those returned."""
    ranked = rank_and_limit(_matches(make_record, [50] * 8), min_score=25, limit=3)

    assert len(ranked.grants) == 3
    assert ranked.total == 8


def test_hard_ceiling_beats_requested_limit(make_record):
    """A large limit is capped at max_results."""
    ranked = rank_and_limit(_matches(make_record, [50] * 30), min_score=25, limit=100, max_results=20)

    assert len(ranked.grants) == 20
    assert ranked.total == 30


def test_non_positive_limit_returns_nothing(make_record):
    """limit=0 returns an empty list but keeps the total."""
    ranked = rank_and_limit(_matches(make_record, [50, 60]), min_score=25, limit=0)

    assert ranked.grants == []
    assert ranked.total == 2


def test_oversized_max_results_still_capped(make_record):
    """A caller-supplied max_results above the ceiling does not raise the cap."""
    ranked = rank_and_limit(_matches(make_record, [50] * 30), min_score=25, limit=50, max_results=50)

    assert len(ranked.grants) == 20
