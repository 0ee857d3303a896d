"""Immutable catalog snapshot.

A snapshot is built once per load and shared by every query that runs
against it. Nothing mutates it after construction; a refresh publishes a new
snapshot instead.
"""

from datetime import datetime, timezone
from typing import Iterable, Iterator, Optional

from ..eligibility.gate import check_small_farm_eligibility
from ..models import OpportunityRecord


class CatalogValidationError(ValueError):
    """Raised when a catalog fails structural validation at load time."""


class CatalogSnapshot:
    """Read-only view over one loaded record set.

    Attributes:
        records: All records in catalog order.
        small_farm_eligible: Records passing the admission gate, in catalog order.
        loaded_at: When the snapshot was built.
        source: Free-form description of where the records came from.
    """

    __slots__ = ("records", "small_farm_eligible", "loaded_at", "source", "_by_id")

    def __init__(
        self,
        records: Iterable[OpportunityRecord],
        source: str = "static",
        loaded_at: Optional[datetime] = None,
    ) -> None:
        records = tuple(records)

        by_id: dict[str, OpportunityRecord] = {}
        for record in records:
            if record.id in by_id:
                raise CatalogValidationError(f"Duplicate grant id in catalog: {record.id}")
            by_id[record.id] = record

        self.records: tuple[OpportunityRecord, ...] = records
        self.small_farm_eligible: tuple[OpportunityRecord, ...] = tuple(
            record for record in records if check_small_farm_eligibility(record).eligible
        )
        self.loaded_at = loaded_at or datetime.now(timezone.utc)
        self.source = source
        self._by_id = by_id

    def get(self, grant_id: str) -> Optional[OpportunityRecord]:
        """Look up a record by id; None when absent."""
        return self._by_id.get(grant_id)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[OpportunityRecord]:
        return iter(self.records)

    def __contains__(self, grant_id: object) -> bool:
        return grant_id in self._by_id

    def __repr__(self) -> str:
        return (
            f"CatalogSnapshot(source={self.source!r}, records={len(self.records)}, "
            f"eligible={len(self.small_farm_eligible)})"
        )
