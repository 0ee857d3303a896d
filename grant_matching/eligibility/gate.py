"""Small-farm admission gate.

Applied before any filtering or scoring. Institution-only programs NEVER pass,
regardless of any other field on the record.
"""

from ..models import GateResult, OpportunityRecord

INSTITUTION_ONLY_REASON = "Institution-only program (universities, NGOs, municipalities)"
NOT_SMALL_FARM_REASON = "Not accessible to small farm operators"


def check_small_farm_eligibility(record: OpportunityRecord) -> GateResult:
    """Check if a record may be shown to small farm operators at all.

    Args:
        record: Catalog record to check

    Returns:
        GateResult with the rejection reason when ineligible
    """

    # HARD BLOCK: evaluated first, unconditionally
    if record.institution_only:
        return GateResult(eligible=False, reason=INSTITUTION_ONLY_REASON)

    if not record.small_farm_friendly:
        return GateResult(eligible=False, reason=NOT_SMALL_FARM_REASON)

    return GateResult(eligible=True)
