"""Scheduled catalog refresh with APScheduler.

Each run asks the provider to publish a new snapshot. A failed run leaves the
previously published snapshot untouched.
"""

import logging
import time

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .provider import CatalogProvider

logger = logging.getLogger(__name__)

JOB_ID = "refresh_catalog"


class CatalogRefresher:
    """Refreshes a provider's catalog on a fixed interval in a background thread."""

    def __init__(self, provider: CatalogProvider, interval_minutes: int = 60) -> None:
        if interval_minutes < 1:
            raise ValueError(f"interval_minutes must be >= 1, got {interval_minutes}")
        self.provider = provider
        self.interval_minutes = interval_minutes
        self._scheduler = BackgroundScheduler()

    def refresh_once(self) -> None:
        """Run a single refresh (also the scheduled job body)."""
        start = time.monotonic()
        try:
            snapshot = self.provider.refresh()
        except Exception as exc:
            logger.error(
                "catalog_refresh source=%s result=failure error=%s duration_ms=%.0f",
                self.provider.source_name,
                exc,
                (time.monotonic() - start) * 1000,
                exc_info=True,
            )
            raise
        logger.info(
            "catalog_refresh source=%s result=success count=%d duration_ms=%.0f",
            self.provider.source_name,
            len(snapshot),
            (time.monotonic() - start) * 1000,
        )

    def start(self) -> None:
        self._scheduler.add_job(
            self.refresh_once,
            trigger=IntervalTrigger(minutes=self.interval_minutes),
            id=JOB_ID,
            name="Refresh grant catalog",
            replace_existing=True,
            max_instances=1,  # Prevent overlapping refreshes
        )
        self._scheduler.start()
        logger.info("Catalog refresher started (every %d minutes)", self.interval_minutes)

    def shutdown(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("Catalog refresher stopped")

    @property
    def running(self) -> bool:
        return self._scheduler.running
