"""
Plan request files.

A plan request is a YAML (or JSON) document:

    profile:
      experience_level: Intermediate
      fitness_goal: Hypertrophy
      equipment_profile: {location: gym}
    weekly_schedule:
      - {day: Monday, can_train: true, external_load: none}
      ...  # exactly 7 days, Monday first
    prior_feedback: {sensation: Good, energy_level: 7}   # optional
    next_cycle_config: {overload_factor: 1.05}          # optional

JSON is a subset of YAML, so yaml.safe_load reads both.
"""

from dataclasses import dataclass
from pathlib import Path

import yaml

from ..core.models import NextCycleConfig, PriorFeedback, ProfileData, WeeklyScheduleEntry
from .serializers import (
    ValidationError,
    dict_to_next_cycle_config,
    dict_to_prior_feedback,
    dict_to_profile,
    dict_to_schedule,
    validate_mapping,
)


@dataclass(frozen=True)
class PlanRequest:
    """Validated inputs for one plan_mesocycle() call."""

    profile: ProfileData
    weekly_schedule: list[WeeklyScheduleEntry]
    prior_feedback: PriorFeedback | None = None
    next_cycle_config: NextCycleConfig | None = None


def parse_plan_request(data: object) -> PlanRequest:
    """
    Validate a decoded plan request document.

    Args:
        data: Decoded YAML/JSON document

    Returns:
        PlanRequest

    Raises:
        ValidationError: If a required section is missing or malformed
    """
    data = validate_mapping(data, "plan request")
    for key in ("profile", "weekly_schedule"):
        if key not in data:
            raise ValidationError(f"Missing required section: {key!r}")

    return PlanRequest(
        profile=dict_to_profile(data["profile"]),
        weekly_schedule=dict_to_schedule(data["weekly_schedule"]),
        prior_feedback=dict_to_prior_feedback(data.get("prior_feedback")),
        next_cycle_config=dict_to_next_cycle_config(data.get("next_cycle_config")),
    )


def load_plan_request(path: str | Path) -> PlanRequest:
    """
    Load a plan request from a YAML or JSON file.

    Args:
        path: Path to the request file

    Returns:
        PlanRequest

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the file cannot be parsed or is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Plan request not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in {path}: {e}") from e

    return parse_plan_request(data)
