"""
JSON serialization for planning data models.

Handles conversion between dataclasses and JSON-compatible dicts.
Enum members are written as their string values.
"""

import json
from typing import Any

from ..core.models import (
    Mesocycle,
    Microcycle,
    NextCycleConfig,
    PlannedSession,
    PriorFeedback,
    ProfileData,
    ScheduleValidationError,
    SessionContent,
    SessionContext,
    WeeklyScheduleEntry,
)
from ..core.normalization import (
    normalize_next_cycle_config,
    normalize_prior_feedback,
    normalize_profile,
    normalize_weekly_schedule,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_mapping(data: Any, name: str) -> dict[str, Any]:
    """
    Validate that a value is a mapping.

    Args:
        data: Value to validate
        name: Name for error message

    Returns:
        The value if valid

    Raises:
        ValidationError: If value is not a dict
    """
    if not isinstance(data, dict):
        raise ValidationError(f"{name} must be a mapping, got {type(data).__name__}")
    return data


def context_to_dict(context: SessionContext) -> dict[str, Any]:
    data: dict[str, Any] = {"external_fatigue": context.external_fatigue.value}
    if context.note:
        data["note"] = context.note
    if context.low_load:
        data["low_load"] = True
    if context.low_load_pivot:
        data["low_load_pivot"] = True
    if context.exclude_axial:
        data["exclude_axial"] = True
    if context.max_rpe is not None:
        data["max_rpe"] = context.max_rpe
    if context.focus:
        data["focus"] = list(context.focus)
    if context.adjustment_applied:
        data["adjustment_applied"] = context.adjustment_applied
    return data


def content_to_dict(content: SessionContent) -> dict[str, Any]:
    """
    Convert SessionContent to JSON-compatible dict.

    Muscle groups are sorted so the output is stable across runs.
    """
    guard = content.safe_specialization
    return {
        "muscle_groups": sorted(content.muscle_groups),
        "pattern_focus": content.pattern_focus,
        "core": {
            "included": content.core.included,
            "timing": content.core.timing,
            "focus": content.core.focus,
        },
        "cardio": {
            "included": content.cardio.included,
            "type": content.cardio.type,
            "duration_minutes": content.cardio.duration_minutes,
        },
        "safe_specialization": {
            "user_declared_focus": guard.user_declared_focus,
            "is_user_focus_session": guard.is_user_focus_session,
            "level": guard.level.value,
            "cap_extra_volume_pct": guard.cap_extra_volume_pct,
            "enforce_priority_start": guard.enforce_priority_start,
            "allowed_extra_isolations": guard.allowed_extra_isolations,
            "require_48h_rest_for_focus": guard.require_48h_rest_for_focus,
            "allow_intensity_techniques": guard.allow_intensity_techniques,
        },
    }


def planned_session_to_dict(session: PlannedSession) -> dict[str, Any]:
    """
    Convert PlannedSession to JSON-compatible dict.

    Rest days carry only the calendar fields.

    Args:
        session: PlannedSession to convert

    Returns:
        Dict representation
    """
    scheduled = session.scheduled
    data: dict[str, Any] = {
        "day_index": session.day_index,
        "day_of_week": scheduled.day_of_week,
        "session_focus": scheduled.session_focus,
        "structure_type": scheduled.structure_type.value,
        "is_rest_day": scheduled.is_rest_day,
        "context": context_to_dict(scheduled.context),
    }
    if session.intensity is not None:
        data["base_rpe"] = session.base_rpe
        data["target_rpe"] = session.intensity.target_rpe
        data["structure_category"] = session.intensity.structure_category.value
        data["target_rir"] = session.target_rir
    if session.content is not None:
        data["content"] = content_to_dict(session.content)
    return data


def microcycle_to_dict(micro: Microcycle) -> dict[str, Any]:
    return {
        "week_number": micro.week_number,
        "phase": micro.phase,
        "notes": micro.notes,
        "intensity_modifier": micro.intensity_modifier,
        "volume_modifier": micro.volume_modifier,
        "weekly_sets_per_muscle": micro.weekly_sets_per_muscle,
        "sessions": [planned_session_to_dict(s) for s in micro.sessions],
    }


def mesocycle_to_dict(mesocycle: Mesocycle) -> dict[str, Any]:
    """
    Convert Mesocycle to JSON-compatible dict.

    Args:
        mesocycle: Mesocycle to convert

    Returns:
        Dict representation (json.dumps-safe)
    """
    return {
        "objective": mesocycle.objective.value,
        "objective_reason": mesocycle.objective_reason,
        "split_type": mesocycle.split_type.value,
        "split_reason": mesocycle.split_reason,
        "volume_tier": mesocycle.volume_tier,
        "systemic_stress": mesocycle.systemic_stress,
        "overload_factor": mesocycle.overload_factor,
        "duration_weeks": mesocycle.duration_weeks,
        "training_days_per_week": mesocycle.training_days_per_week,
        "microcycles": [microcycle_to_dict(m) for m in mesocycle.microcycles],
    }


def mesocycle_to_json(mesocycle: Mesocycle) -> str:
    """Serialize a mesocycle to an indented JSON document."""
    return json.dumps(mesocycle_to_dict(mesocycle), indent=2, ensure_ascii=False)


def next_cycle_config_to_dict(config: NextCycleConfig) -> dict[str, Any]:
    return {
        "focus_suggestion": config.focus_suggestion,
        "overload_factor": config.overload_factor,
        "previous_adherence": config.previous_adherence,
    }


def dict_to_profile(data: dict[str, Any]) -> ProfileData:
    """
    Convert dict to ProfileData.

    Unknown goals and levels fall back to the documented defaults.

    Args:
        data: Dict representation (snake_case or camelCase keys)

    Returns:
        ProfileData instance

    Raises:
        ValidationError: If data is not a mapping
    """
    validate_mapping(data, "profile")
    try:
        return normalize_profile(data)
    except ValueError as e:
        raise ValidationError(f"Invalid profile: {e}") from e


def dict_to_schedule(data: Any) -> list[WeeklyScheduleEntry]:
    """
    Convert a list of day dicts to schedule entries.

    Args:
        data: List of 7 day dicts, Monday first

    Returns:
        List of WeeklyScheduleEntry

    Raises:
        ValidationError: If the schedule is not exactly 7 day mappings
    """
    try:
        return normalize_weekly_schedule(data)
    except ScheduleValidationError as e:
        raise ValidationError(str(e)) from e


def dict_to_prior_feedback(data: dict[str, Any] | None) -> PriorFeedback | None:
    """
    Convert dict to PriorFeedback.

    Raises:
        ValidationError: If data is present but not a mapping
    """
    if data is None:
        return None
    validate_mapping(data, "prior_feedback")
    return normalize_prior_feedback(data)


def dict_to_next_cycle_config(data: dict[str, Any] | None) -> NextCycleConfig | None:
    """
    Convert dict to NextCycleConfig.

    Raises:
        ValidationError: If data is present but not a mapping
    """
    if data is None:
        return None
    validate_mapping(data, "next_cycle_config")
    return normalize_next_cycle_config(data)
