"""Deterministic scoring engine for grant matches."""

from .engine import GOAL_LABELS, apply_confidence_penalty, quality_bonus, score_opportunity
from .weights import DEFAULT_WEIGHTS, MAX_RESULTS_CEILING, ScoringWeights, load_weights, save_weights

__all__ = [
    "score_opportunity",
    "apply_confidence_penalty",
    "quality_bonus",
    "GOAL_LABELS",
    "DEFAULT_WEIGHTS",
    "MAX_RESULTS_CEILING",
    "load_weights",
    "save_weights",
    "ScoringWeights",
]
