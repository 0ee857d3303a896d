"""Environment configuration."""

from .config import Settings, build_provider, build_refresher, load_config, validate_config

__all__ = ["Settings", "build_provider", "build_refresher", "load_config", "validate_config"]
