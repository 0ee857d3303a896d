"""Catalog providers.

The engine never owns catalog data; it asks a provider for the currently
published snapshot. Providers load and validate records up front (fail fast)
and publish each new snapshot with a single reference swap, so queries that
already hold a snapshot keep a consistent view.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable, Optional

import httpx
import yaml
from pydantic import ValidationError
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..models import OpportunityRecord
from .snapshot import CatalogSnapshot, CatalogValidationError

logger = logging.getLogger(__name__)

SEED_CATALOG_PATH = Path(__file__).parent / "data" / "seed_catalog.yaml"

# 10s connect, 30s read
CATALOG_TIMEOUT = httpx.Timeout(30.0, connect=10.0)


def parse_records(payload: Any) -> list[OpportunityRecord]:
    """Validate a raw catalog payload into records.

    Accepts either a list of record dicts or a mapping with a ``grants`` list.

    Raises:
        CatalogValidationError: If the payload shape or any record is invalid
    """

    if isinstance(payload, dict):
        payload = payload.get("grants")

    if not isinstance(payload, list):
        raise CatalogValidationError("Catalog payload must be a list of grants or {'grants': [...]}")

    records: list[OpportunityRecord] = []
    for index, raw in enumerate(payload):
        try:
            records.append(OpportunityRecord.model_validate(raw))
        except ValidationError as exc:
            grant_id = raw.get("id", "?") if isinstance(raw, dict) else "?"
            raise CatalogValidationError(f"Grant {index} ({grant_id}): {exc}") from exc

    return records


class CatalogProvider(ABC):
    """Supplies the published catalog snapshot."""

    def __init__(self) -> None:
        self._snapshot: Optional[CatalogSnapshot] = None

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Where this provider reads records from."""
        pass

    @abstractmethod
    def load_records(self) -> list[OpportunityRecord]:
        """Load and validate the full record set.

        Raises on any failure; never returns a partial catalog.
        """
        pass

    def snapshot(self) -> CatalogSnapshot:
        """Return the published snapshot, loading it on first use."""
        if self._snapshot is None:
            self.refresh()
        return self._snapshot

    def refresh(self) -> CatalogSnapshot:
        """Load a new snapshot and publish it atomically."""
        snapshot = CatalogSnapshot(self.load_records(), source=self.source_name)
        self._snapshot = snapshot
        logger.info(
            "Catalog loaded source=%s grants=%d eligible=%d",
            snapshot.source,
            len(snapshot),
            len(snapshot.small_farm_eligible),
        )
        return snapshot


class StaticCatalogProvider(CatalogProvider):
    """In-memory provider, mainly for fixtures and embedding."""

    def __init__(self, records: Iterable[OpportunityRecord]) -> None:
        super().__init__()
        self._records = list(records)

    @property
    def source_name(self) -> str:
        return "static"

    def load_records(self) -> list[OpportunityRecord]:
        return list(self._records)

    def replace(self, records: Iterable[OpportunityRecord]) -> CatalogSnapshot:
        """Swap in a new record set and publish it."""
        self._records = list(records)
        return self.refresh()


class FileCatalogProvider(CatalogProvider):
    """Reads a JSON or YAML catalog file."""

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)

    @property
    def source_name(self) -> str:
        return f"file:{self.path.name}"

    def load_records(self) -> list[OpportunityRecord]:
        if not self.path.exists():
            raise FileNotFoundError(f"Catalog file not found: {self.path}")

        if self.path.suffix == ".json":
            with open(self.path, "r") as f:
                payload = json.load(f)
        elif self.path.suffix in (".yaml", ".yml"):
            with open(self.path, "r") as f:
                payload = yaml.safe_load(f)
        else:
            raise ValueError(f"Unsupported catalog format: {self.path.suffix}. Use .json, .yaml, or .yml")

        return parse_records(payload)


class SeedCatalogProvider(FileCatalogProvider):
    """The curated seed catalog shipped with the package."""

    def __init__(self) -> None:
        super().__init__(SEED_CATALOG_PATH)

    @property
    def source_name(self) -> str:
        return "seed"


class HttpCatalogProvider(CatalogProvider):
    """Fetches a normalized JSON catalog from an HTTP endpoint.

    The first load propagates failures. Later refreshes that fail after all
    retries are logged and the previously published snapshot stays in place.
    """

    def __init__(self, url: str, timeout: httpx.Timeout = CATALOG_TIMEOUT) -> None:
        super().__init__()
        self.url = url
        self.timeout = timeout

    @property
    def source_name(self) -> str:
        return f"http:{self.url}"

    def load_records(self) -> list[OpportunityRecord]:
        return parse_records(self._fetch_with_retry())

    def refresh(self) -> CatalogSnapshot:
        if self._snapshot is None:
            return super().refresh()

        try:
            return super().refresh()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error(
                "Catalog refresh failed source=%s error=%s; keeping %d grants loaded at %s",
                self.source_name,
                exc,
                len(self._snapshot),
                self._snapshot.loaded_at.isoformat(),
                exc_info=True,
            )
            return self._snapshot

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(httpx.HTTPError),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    def _fetch_with_retry(self) -> Any:
        with httpx.Client(timeout=self.timeout) as client:
            response = client.get(self.url, headers={"Accept": "application/json"})
            response.raise_for_status()
            return response.json()


def load_seed_catalog() -> CatalogSnapshot:
    """Load the packaged seed catalog as a fresh snapshot."""
    return SeedCatalogProvider().snapshot()
