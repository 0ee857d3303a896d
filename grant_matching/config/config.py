"""Configuration management for the matching engine."""

import logging
from typing import Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..catalog import (
    CatalogProvider,
    CatalogRefresher,
    FileCatalogProvider,
    HttpCatalogProvider,
    SeedCatalogProvider,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application configuration from environment variables.

    Every variable is optional; with nothing set the engine runs against the
    packaged seed catalog with default scoring weights.
    """

    # Catalog source (URL wins over path; neither means the seed catalog)
    catalog_path: Optional[str] = None
    catalog_url: Optional[str] = None
    catalog_refresh_minutes: int = 60

    # Scoring
    weights_path: Optional[str] = None

    # Operations
    log_level: str = "INFO"
    self_test_min_matches: int = 10

    model_config = SettingsConfigDict(
        env_prefix="GRANT_MATCHING_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return level

    @field_validator("catalog_refresh_minutes", "self_test_min_matches")
    @classmethod
    def non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"must be >= 0, got {v}")
        return v

    @field_validator("catalog_url")
    @classmethod
    def http_url(cls, v: Optional[str]) -> Optional[str]:
        if v and not v.startswith(("http://", "https://")):
            raise ValueError(f"catalog_url must be an http(s) URL, got {v!r}")
        return v or None


def validate_config() -> Settings:
    """Load and validate configuration from environment.

    Raises ValueError with a message listing ALL invalid variables (not just
    the first one).
    """
    try:
        return Settings()
    except ValidationError as exc:
        problems = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"])
            problems.append(f"GRANT_MATCHING_{field.upper()}: {error['msg']}")
        raise ValueError(
            f"Invalid environment configuration: {'; '.join(problems)}. "
            "Please fix them in your .env file or environment."
        ) from exc


def load_config() -> Settings:
    """Load configuration from environment (startup entry point)."""
    return validate_config()


def build_provider(settings: Settings) -> CatalogProvider:
    """Pick the catalog provider the settings ask for."""
    if settings.catalog_url:
        logger.info("Using HTTP catalog %s", settings.catalog_url)
        return HttpCatalogProvider(settings.catalog_url)
    if settings.catalog_path:
        logger.info("Using catalog file %s", settings.catalog_path)
        return FileCatalogProvider(settings.catalog_path)
    logger.info("Using packaged seed catalog")
    return SeedCatalogProvider()


def build_refresher(settings: Settings, provider: CatalogProvider) -> Optional[CatalogRefresher]:
    """Scheduled refresher for the provider (used by `watch`); None when refresh is disabled (0 minutes)."""
    if settings.catalog_refresh_minutes == 0:
        return None
    return CatalogRefresher(provider, interval_minutes=settings.catalog_refresh_minutes)
