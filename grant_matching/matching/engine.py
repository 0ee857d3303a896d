"""Query orchestrator for grant matching.

Pipeline per candidate record:
1. Small-farm admission gate (pre-applied on the snapshot, re-checked here)
2. Hard filter chain (first failure excludes the record)
3. Additive score, then the low-confidence penalty
4. Warnings for the survivors

Survivors go through the minimum-score cutoff, are sorted by score and
truncated. Rejections are data, never exceptions.
"""

import logging
from collections import Counter
from datetime import date
from typing import Callable, Optional

from ..catalog import CatalogProvider
from ..diagnostics.health import CatalogHealth, compute_health
from ..diagnostics.self_test import SelfTestReport, run_self_tests
from ..eligibility import check_small_farm_eligibility, run_hard_filters
from ..models import (
    ApplicantProfile,
    FilterDiagnostics,
    GrantDetail,
    MatchResult,
    OpportunityRecord,
    ProfileSummary,
    QueryResult,
)
from ..scorer import DEFAULT_WEIGHTS, ScoringWeights, apply_confidence_penalty, score_opportunity
from .ranker import rank_and_limit
from .warnings import generate_warnings

logger = logging.getLogger(__name__)

GATE_EXCLUSION = "Not small-farm-friendly"
BELOW_MIN_SCORE_EXCLUSION = "Below minimum score"
SMALL_FARM_FILTER_DESCRIPTION = "Small-farm-only filter: applied"


class MatchingEngine:
    """Deterministic matcher over a provider's published catalog snapshot.

    Args:
        provider: Supplies the current catalog snapshot
        weights: Scoring and ranking constants
        today: Zero-argument callable returning the current date
    """

    def __init__(
        self,
        provider: CatalogProvider,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self.provider = provider
        self.weights = weights
        self._today = today or date.today

    def today(self) -> date:
        return self._today()

    def find_matches(
        self,
        profile: ApplicantProfile,
        limit: int = 20,
        min_score: Optional[int] = None,
    ) -> QueryResult:
        """Find, score and rank the grants that fit a profile.

        Args:
            profile: Applicant profile
            limit: Requested result size, capped at ``weights.max_results``
            min_score: Score cutoff; defaults to ``weights.min_score``

        Returns:
            QueryResult with ranked matches and filtering diagnostics
        """

        if min_score is None:
            min_score = self.weights.min_score

        # One snapshot for the whole query, even if a refresh lands meanwhile
        snapshot = self.provider.snapshot()
        today = self.today()
        exclusions: Counter[str] = Counter()

        candidates = snapshot.small_farm_eligible
        excluded_at_load = len(snapshot) - len(candidates)
        if excluded_at_load:
            exclusions[GATE_EXCLUSION] += excluded_at_load

        scored: list[MatchResult] = []
        for record in candidates:
            match = self._evaluate(record, profile, today, exclusions)
            if match is not None:
                scored.append(match)

        ranked = rank_and_limit(scored, min_score, limit, self.weights.max_results)
        if ranked.below_threshold:
            exclusions[BELOW_MIN_SCORE_EXCLUSION] += ranked.below_threshold

        logger.info(
            "find_matches state=%s farm_type=%s candidates=%d matched=%d returned=%d",
            profile.state,
            profile.farm_type.value,
            len(candidates),
            ranked.total,
            len(ranked.grants),
        )
        logger.debug("find_matches exclusions=%s", dict(exclusions))

        return QueryResult(
            grants=ranked.grants,
            total=ranked.total,
            profile=ProfileSummary(
                state=profile.state,
                farm_type=profile.farm_type,
                goals=list(profile.goals),
            ),
            filters=FilterDiagnostics(
                applied_filters=self._describe_filters(profile),
                grants_before_filter=len(snapshot),
                grants_after_filter=ranked.total,
            ),
            exclusion_reasons=dict(exclusions),
        )

    def _evaluate(
        self,
        record: OpportunityRecord,
        profile: ApplicantProfile,
        today: date,
        exclusions: Counter,
    ) -> Optional[MatchResult]:
        gate = check_small_farm_eligibility(record)
        if not gate.eligible:
            # Snapshot pre-gating drifted from the gate
            exclusions[GATE_EXCLUSION] += 1
            logger.debug("excluded grant=%s reason=%s", record.id, gate.reason)
            return None

        filter_result = run_hard_filters(record, profile, today)
        if not filter_result.passes:
            exclusions[filter_result.reason or "Filter failed"] += 1
            logger.debug(
                "excluded grant=%s filter=%s reason=%s",
                record.id,
                filter_result.filter_name,
                filter_result.reason,
            )
            return None

        return self._score_match(record, profile, today)

    def _score_match(
        self,
        record: OpportunityRecord,
        profile: ApplicantProfile,
        today: date,
        penalize: bool = True,
    ) -> MatchResult:
        breakdown = score_opportunity(record, profile, self.weights)
        score = breakdown.score
        if penalize:
            score = apply_confidence_penalty(score, record, self.weights)
        return MatchResult(
            grant=record,
            score=score,
            match_reasons=breakdown.reasons,
            warnings=generate_warnings(record, profile, today, self.weights),
        )

    @staticmethod
    def _describe_filters(profile: ApplicantProfile) -> list[str]:
        return [
            f"State: {profile.state}",
            f"Farm type: {profile.farm_type.value}",
            f"Goals: {', '.join(goal.value for goal in profile.goals)}",
            SMALL_FARM_FILTER_DESCRIPTION,
        ]

    def get_by_id(self, grant_id: str) -> Optional[OpportunityRecord]:
        """Look up a catalog record; None when it does not exist."""
        return self.provider.snapshot().get(grant_id)

    def get_detail_for_profile(
        self,
        grant_id: str,
        profile: ApplicantProfile,
    ) -> Optional[GrantDetail]:
        """Evaluate exactly one record against one profile.

        An ineligible record comes back with a zero score, no reasons and a
        single warning naming why it was rejected. The gate reason wins over
        a filter reason. An eligible record gets its raw score: neither the
        low-confidence penalty nor the score cutoff is applied.
        """

        record = self.get_by_id(grant_id)
        if record is None:
            return None

        gate = check_small_farm_eligibility(record)
        if not gate.eligible:
            return GrantDetail(grant=record, match=self._rejected(record, gate.reason))

        today = self.today()
        filter_result = run_hard_filters(record, profile, today)
        if not filter_result.passes:
            return GrantDetail(grant=record, match=self._rejected(record, filter_result.reason))

        return GrantDetail(grant=record, match=self._score_match(record, profile, today, penalize=False))

    @staticmethod
    def _rejected(record: OpportunityRecord, reason: Optional[str]) -> MatchResult:
        return MatchResult(
            grant=record,
            score=0,
            match_reasons=[],
            warnings=[reason] if reason else [],
        )

    def get_health(self) -> CatalogHealth:
        """Catalog health counters for the current snapshot."""
        return compute_health(self.provider.snapshot())

    def run_self_tests(self, min_matches: int = 10) -> SelfTestReport:
        """Run the scripted profiles through this engine."""
        return run_self_tests(self, min_matches=min_matches)
