"""Named scoring and ranking constants, loadable from JSON or YAML.

Every ranking constant lives here so tuning never touches control flow.
"""

import json
import yaml
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator

# Upper bound on results per query, whatever a weights file says
MAX_RESULTS_CEILING = 20


class ScoringWeights(BaseModel):
    """Additive scoring points, penalties and ranking limits.

    All point values are non-negative integers. The purpose-match component
    earns ``purpose_points_per_goal`` per overlapping goal up to
    ``purpose_points_cap``.
    """

    model_config = ConfigDict(frozen=True)

    # Purpose match
    purpose_points_per_goal: int = 20
    purpose_points_cap: int = 60

    # Geography specificity: state > regional > national
    state_geography_bonus: int = 15
    regional_geography_bonus: int = 10
    national_geography_bonus: int = 5

    # Record design / confidence / quality
    small_farm_design_bonus: int = 8
    high_confidence_bonus: int = 7
    medium_confidence_bonus: int = 3
    quality_bonus_max: int = 10

    # Applied by the orchestrator after clamping
    low_confidence_penalty: int = 20

    # Ranking
    min_score: int = 25
    max_results: int = 20

    # Warnings
    deadline_warning_days: int = 30

    version: str = "1.0"

    @field_validator(
        "purpose_points_per_goal",
        "purpose_points_cap",
        "state_geography_bonus",
        "regional_geography_bonus",
        "national_geography_bonus",
        "small_farm_design_bonus",
        "high_confidence_bonus",
        "medium_confidence_bonus",
        "quality_bonus_max",
        "low_confidence_penalty",
        "min_score",
        "deadline_warning_days",
    )
    @classmethod
    def non_negative(cls, v: int) -> int:
        """Ensure point values are not negative."""
        if v < 0:
            raise ValueError(f"Weight must be >= 0, got {v}")
        return v

    @field_validator("max_results")
    @classmethod
    def bounded_ceiling(cls, v: int) -> int:
        if not 1 <= v <= MAX_RESULTS_CEILING:
            raise ValueError(f"max_results must be between 1 and {MAX_RESULTS_CEILING}, got {v}")
        return v

    def to_dict(self) -> dict:
        """Plain dict of every weight."""
        return self.model_dump()


DEFAULT_WEIGHTS = ScoringWeights()


def _format_for(path: Path) -> str:
    if path.suffix == ".json":
        return "json"
    if path.suffix in (".yaml", ".yml"):
        return "yaml"
    raise ValueError(f"Unsupported file format: {path.suffix}. Use .json, .yaml, or .yml")


def load_weights(filepath: Optional[str] = None) -> ScoringWeights:
    """Read scoring weights from a JSON or YAML file.

    Keys the file leaves out keep their defaults; no path means
    DEFAULT_WEIGHTS.

    Raises:
        FileNotFoundError: The file does not exist
        ValueError: Unsupported suffix
        pydantic.ValidationError: A weight is out of range
    """

    if not filepath:
        return DEFAULT_WEIGHTS

    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Weights file not found: {filepath}")

    fmt = _format_for(path)
    with path.open("r") as fh:
        data = json.load(fh) if fmt == "json" else yaml.safe_load(fh)

    return ScoringWeights(**(data or {}))


def save_weights(weights: ScoringWeights, filepath: str) -> None:
    """Write weights back out; the suffix picks JSON or YAML."""

    path = Path(filepath)
    fmt = _format_for(path)
    with path.open("w") as fh:
        if fmt == "json":
            json.dump(weights.to_dict(), fh, indent=2)
        else:
            yaml.safe_dump(weights.to_dict(), fh, sort_keys=False)
