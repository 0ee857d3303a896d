"""Ranker/limiter for scored matches."""

from typing import NamedTuple

from ..models import MatchResult
from ..scorer.weights import MAX_RESULTS_CEILING


class RankedMatches(NamedTuple):
    """Outcome of ranking: kept matches plus counts for diagnostics."""

    grants: list[MatchResult]
    total: int
    below_threshold: int


def rank_and_limit(
    matches: list[MatchResult],
    min_score: int,
    limit: int,
    max_results: int = MAX_RESULTS_CEILING,
) -> RankedMatches:
    """Apply the score cutoff, sort and truncate.

    Sorting is stable, so ties keep catalog order. The result size never
    exceeds ``max_results`` whatever ``limit`` asks for, and
    ``max_results`` itself is clamped to MAX_RESULTS_CEILING.

    Args:
        matches: Scored matches in catalog order
        min_score: Minimum score a match needs to be kept
        limit: Requested result size
        max_results: Hard ceiling on the result size

    Returns:
        RankedMatches with ``total`` counted before truncation
    """

    kept = [match for match in matches if match.score >= min_score]
    kept.sort(key=lambda match: match.score, reverse=True)

    size = max(0, min(limit, max_results, MAX_RESULTS_CEILING))
    return RankedMatches(
        grants=kept[:size],
        total=len(kept),
        below_threshold=len(matches) - len(kept),
    )
