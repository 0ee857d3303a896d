"""Catalog health counters and the scripted self-test harness."""

from .health import US_STATE_CODES, CatalogHealth, compute_health
from .self_test import (
    SCRIPTED_PROFILES,
    SelfTestProfileResult,
    SelfTestReport,
    run_self_tests,
)

__all__ = [
    "CatalogHealth",
    "compute_health",
    "US_STATE_CODES",
    "SCRIPTED_PROFILES",
    "SelfTestProfileResult",
    "SelfTestReport",
    "run_self_tests",
]
