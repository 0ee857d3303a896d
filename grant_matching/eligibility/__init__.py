"""Eligibility gate and hard filter chain."""

from .gate import check_small_farm_eligibility
from .filters import HARD_FILTERS, derive_applicant_types, matching_goals, run_hard_filters

__all__ = [
    "check_small_farm_eligibility",
    "run_hard_filters",
    "derive_applicant_types",
    "matching_goals",
    "HARD_FILTERS",
]
