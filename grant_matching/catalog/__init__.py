"""Catalog snapshot and providers."""

from .snapshot import CatalogSnapshot, CatalogValidationError
from .provider import (
    CatalogProvider,
    FileCatalogProvider,
    HttpCatalogProvider,
    SeedCatalogProvider,
    StaticCatalogProvider,
    load_seed_catalog,
    parse_records,
)
from .refresher import CatalogRefresher

__all__ = [
    "CatalogSnapshot",
    "CatalogValidationError",
    "CatalogProvider",
    "StaticCatalogProvider",
    "FileCatalogProvider",
    "SeedCatalogProvider",
    "HttpCatalogProvider",
    "CatalogRefresher",
    "load_seed_catalog",
    "parse_records",
]
