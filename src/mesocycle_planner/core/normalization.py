"""
Input normalization for the planning pipeline.

Profiles arrive from onboarding forms and older app versions with
Spanish, English, and legacy spellings for the same value.  Everything
is mapped to the canonical enums here, once, so the planning modules
never repeat keyword or default handling.

Only the weekly schedule can be rejected: a schedule that is not
exactly seven days raises ScheduleValidationError.  Every other field
falls back to a documented default.
"""

import math
from collections.abc import Mapping, Sequence
from typing import Any

from .config import DAYS_PER_WEEK
from .models import (
    DayOfWeek,
    EquipmentProfile,
    Experience,
    ExternalLoad,
    Goal,
    NextCycleConfig,
    PriorFeedback,
    ProfileData,
    ScheduleValidationError,
    WeeklyScheduleEntry,
)

# Keys are compared after _key(): lower-case, spaces and dashes as "_"
GOAL_ALIASES: dict[str, Goal] = {
    "hypertrophy": Goal.HYPERTROPHY,
    "hipertrofia": Goal.HYPERTROPHY,
    "ganancia_muscular": Goal.HYPERTROPHY,
    "muscle_gain": Goal.HYPERTROPHY,
    "strength": Goal.STRENGTH,
    "fuerza": Goal.STRENGTH,
    "fuerza_maxima": Goal.STRENGTH,
    "endurance": Goal.ENDURANCE,
    "resistencia": Goal.ENDURANCE,
    "fatloss": Goal.FAT_LOSS,
    "fat_loss": Goal.FAT_LOSS,
    "perdida_grasa": Goal.FAT_LOSS,
    "pérdida_grasa": Goal.FAT_LOSS,
    "generalhealth": Goal.GENERAL_HEALTH,
    "general_health": Goal.GENERAL_HEALTH,
    "salud": Goal.GENERAL_HEALTH,
    "salud_general": Goal.GENERAL_HEALTH,
}

EXPERIENCE_ALIASES: dict[str, Experience] = {
    "beginner": Experience.BEGINNER,
    "novice": Experience.BEGINNER,
    "principiante": Experience.BEGINNER,
    "intermediate": Experience.INTERMEDIATE,
    "intermedio": Experience.INTERMEDIATE,
    "advanced": Experience.ADVANCED,
    "avanzado": Experience.ADVANCED,
}

LOAD_ALIASES: dict[str, ExternalLoad] = {
    "none": ExternalLoad.NONE,
    "low": ExternalLoad.LOW,
    "light": ExternalLoad.LOW,
    "medium": ExternalLoad.MEDIUM,
    "moderate": ExternalLoad.MEDIUM,
    "high": ExternalLoad.HIGH,
    "heavy": ExternalLoad.HIGH,
    "extreme": ExternalLoad.HIGH,
}

DEFAULT_GOAL = Goal.HYPERTROPHY


def _key(value: Any) -> str:
    return str(value).strip().lower().replace(" ", "_").replace("-", "_")


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return _key(value) in ("true", "yes", "1", "si", "sí")
    return bool(value)


def _as_float(value: Any) -> float | None:
    """Parse a number; non-numeric, nan and infinite values are None."""
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return result if math.isfinite(result) else None


def normalize_goal(value: Any) -> Goal:
    """
    Map a free-form goal to the canonical Goal.

    Args:
        value: Goal enum, English/Spanish label, or None

    Returns:
        Canonical goal; unknown or empty values fall back to Hypertrophy
    """
    if isinstance(value, Goal):
        return value
    if value is None:
        return DEFAULT_GOAL
    return GOAL_ALIASES.get(_key(value), DEFAULT_GOAL)


def normalize_experience(value: Any) -> Experience | None:
    """Map a free-form experience level; None when unrecognised."""
    if isinstance(value, Experience):
        return value
    if value is None:
        return None
    return EXPERIENCE_ALIASES.get(_key(value))


def normalize_external_load(value: Any) -> ExternalLoad:
    """Map a load label to ExternalLoad; missing or unknown is NONE."""
    if isinstance(value, ExternalLoad):
        return value
    if value is None:
        return ExternalLoad.NONE
    return LOAD_ALIASES.get(_key(value), ExternalLoad.NONE)


def normalize_equipment(value: Any) -> EquipmentProfile | None:
    """
    Build an EquipmentProfile from a mapping.

    Unknown locations are treated as a gym, the unconstrained case.
    """
    if value is None or isinstance(value, EquipmentProfile):
        return value
    if not isinstance(value, Mapping):
        return None
    location = "home" if _key(value.get("location", "gym")) in ("home", "casa") else "gym"
    return EquipmentProfile(
        location=location,
        bodyweight_only=_as_bool(value.get("bodyweight_only", value.get("bodyweightOnly", False))),
        has_barbell=_as_bool(value.get("has_barbell", value.get("hasBarbell", False))),
        has_machines=_as_bool(value.get("has_machines", value.get("hasMachines", False))),
    )


def normalize_schedule_entry(value: Any, index: int) -> WeeklyScheduleEntry:
    """Convert one schedule entry; the day label defaults to its position."""
    if isinstance(value, WeeklyScheduleEntry):
        return value
    if not isinstance(value, Mapping):
        raise ScheduleValidationError(
            f"Schedule entry {index} must be a mapping, got {type(value).__name__}"
        )
    day = value.get("day") or DayOfWeek.from_index(index).value
    return WeeklyScheduleEntry(
        day=str(day),
        can_train=_as_bool(value.get("can_train", value.get("canTrain", False))),
        external_load=normalize_external_load(
            value.get("external_load", value.get("externalLoad"))
        ),
    )


def normalize_weekly_schedule(value: Any) -> list[WeeklyScheduleEntry]:
    """
    Validate and convert a Monday-first weekly schedule.

    Args:
        value: Sequence of WeeklyScheduleEntry objects or mappings

    Returns:
        List of exactly 7 entries in the given order

    Raises:
        ScheduleValidationError: If value is not a list of 7 entries
    """
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise ScheduleValidationError(
            f"weekly_schedule must be a list of {DAYS_PER_WEEK} days, "
            f"got {type(value).__name__}"
        )
    if len(value) != DAYS_PER_WEEK:
        raise ScheduleValidationError(
            f"weekly_schedule must contain exactly {DAYS_PER_WEEK} days, got {len(value)}"
        )
    return [normalize_schedule_entry(entry, i) for i, entry in enumerate(value)]


def normalize_profile(value: Any) -> ProfileData:
    """
    Build ProfileData from a mapping (snake_case or camelCase keys).

    An out-of-range training_days_per_week is clamped to 0-7.
    """
    if isinstance(value, ProfileData):
        return value
    if not isinstance(value, Mapping):
        value = {}

    def pick(snake: str, camel: str, default: Any = None) -> Any:
        return value.get(snake, value.get(camel, default))

    days = _as_float(pick("training_days_per_week", "trainingDaysPerWeek", 3))
    declared = pick("user_declared_focus", "userDeclaredFocus")
    return ProfileData(
        experience_level=normalize_experience(pick("experience_level", "experienceLevel")),
        fitness_goal=normalize_goal(pick("fitness_goal", "fitnessGoal")),
        user_declared_focus=(str(declared).strip() or None) if declared else None,
        equipment_profile=normalize_equipment(pick("equipment_profile", "equipmentProfile")),
        training_days_per_week=max(0, min(7, int(days))) if days is not None else 3,
    )


def normalize_prior_feedback(value: Any) -> PriorFeedback | None:
    """Build PriorFeedback from a mapping; non-numeric scores become None."""
    if value is None or isinstance(value, PriorFeedback):
        return value
    if not isinstance(value, Mapping):
        return None
    sensation = value.get("sensation")
    return PriorFeedback(
        sensation=str(sensation) if sensation is not None else None,
        energy_level=_as_float(value.get("energy_level", value.get("energyLevel"))),
        soreness_level=_as_float(value.get("soreness_level", value.get("sorenessLevel"))),
        joint_pain=_as_float(value.get("joint_pain", value.get("jointPain"))),
    )


def normalize_next_cycle_config(value: Any) -> NextCycleConfig | None:
    """Build NextCycleConfig from a mapping; a non-positive factor resets to 1.0."""
    if value is None or isinstance(value, NextCycleConfig):
        return value
    if not isinstance(value, Mapping):
        return None
    factor = _as_float(value.get("overload_factor", value.get("overloadFactor")))
    adherence = _as_float(value.get("previous_adherence", value.get("previousAdherence")))
    suggestion = value.get("focus_suggestion", value.get("focusSuggestion"))
    return NextCycleConfig(
        focus_suggestion=str(suggestion) if suggestion is not None else None,
        overload_factor=factor if factor is not None and factor > 0 else 1.0,
        previous_adherence=max(0, int(adherence)) if adherence is not None else 0,
    )
