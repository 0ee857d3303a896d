"""Query orchestration: ranking, warnings and the matching engine."""

from .engine import MatchingEngine
from .ranker import RankedMatches, rank_and_limit
from .warnings import generate_warnings

__all__ = [
    "MatchingEngine",
    "RankedMatches",
    "rank_and_limit",
    "generate_warnings",
]
