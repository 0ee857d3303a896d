"""Catalog health counters."""

from collections import Counter
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..catalog import CatalogSnapshot
from ..models import EligibilityConfidence, GeographyScope

# 50 states, DC and the inhabited territories
US_STATE_CODES: tuple[str, ...] = (
    "AK", "AL", "AR", "AS", "AZ", "CA", "CO", "CT", "DC", "DE",
    "FL", "GA", "GU", "HI", "IA", "ID", "IL", "IN", "KS", "KY",
    "LA", "MA", "MD", "ME", "MI", "MN", "MO", "MP", "MS", "MT",
    "NC", "ND", "NE", "NH", "NJ", "NM", "NV", "NY", "OH", "OK",
    "OR", "PA", "PR", "RI", "SC", "SD", "TN", "TX", "UT", "VA",
    "VI", "VT", "WA", "WI", "WV", "WY",
)


class CatalogHealth(BaseModel):
    """Counters describing one catalog snapshot."""

    model_config = ConfigDict(frozen=True)

    catalog_size: int
    eligible_count: int = Field(..., description="Small-farm-friendly and not institution-only")
    small_farm_friendly_count: int
    institution_only_count: int
    high_confidence_count: int = Field(..., description="Eligible records with high confidence")
    confidence_counts: dict[str, int]
    by_typical_applicant: dict[str, int]
    by_source: dict[str, int]
    purpose_tags_in_use: list[str]
    state_coverage_counts: dict[str, int] = Field(
        ..., description="Eligible records reachable per state; national records count everywhere"
    )
    covered_states: list[str]
    loaded_at: datetime


def compute_health(snapshot: CatalogSnapshot) -> CatalogHealth:
    """Summarize a snapshot for monitoring and the CLI."""

    records = snapshot.records
    eligible = snapshot.small_farm_eligible

    confidence = Counter(record.eligibility_confidence.value for record in records)

    coverage: Counter[str] = Counter({code: 0 for code in US_STATE_CODES})
    for record in eligible:
        if record.geography_scope is GeographyScope.NATIONAL:
            for code in US_STATE_CODES:
                coverage[code] += 1
        else:
            for code in record.states_included:
                coverage[code] += 1

    return CatalogHealth(
        catalog_size=len(records),
        eligible_count=len(eligible),
        small_farm_friendly_count=sum(1 for record in records if record.small_farm_friendly),
        institution_only_count=sum(1 for record in records if record.institution_only),
        high_confidence_count=sum(
            1 for record in eligible if record.eligibility_confidence is EligibilityConfidence.HIGH
        ),
        confidence_counts={tier.value: confidence.get(tier.value, 0) for tier in EligibilityConfidence},
        by_typical_applicant=dict(Counter(record.typical_applicant.value for record in records)),
        by_source=dict(Counter(record.source for record in records)),
        purpose_tags_in_use=sorted({tag.value for record in eligible for tag in record.purpose_tags}),
        state_coverage_counts=dict(sorted(coverage.items())),
        covered_states=sorted(code for code, count in coverage.items() if count > 0),
        loaded_at=snapshot.loaded_at,
    )
