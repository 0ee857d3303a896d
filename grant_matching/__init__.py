"""Deterministic grant matching and eligibility engine for small farms."""

from .catalog import load_seed_catalog
from .matching import MatchingEngine
from .models import ApplicantProfile, OpportunityRecord

__all__ = ["MatchingEngine", "ApplicantProfile", "OpportunityRecord", "load_seed_catalog"]
