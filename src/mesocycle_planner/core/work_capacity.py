"""
Work capacity: systemic stress and weekly volume targets.

Physical work outside the gym (a construction shift, a long hike)
draws on the same recovery budget as training.  The weekly schedule's
external loads are scored and used to temper the set-volume target.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from .config import (
    HOME_BODYWEIGHT_FACTOR,
    HOME_BODYWEIGHT_FLOOR,
    HOME_NO_TOOLS_FACTOR,
    HOME_NO_TOOLS_FLOOR,
    LOAD_SCORE_MAX,
    SYSTEMIC_STRESS_THRESHOLD,
    SYSTEMIC_STRESS_VOLUME_FACTOR,
    VOLUME_BASE_ADVANCED,
    VOLUME_BASE_BEGINNER,
    VOLUME_BASE_INTERMEDIATE,
    VOLUME_BASE_UNKNOWN,
    round_half_up,
)
from .models import EquipmentProfile, Experience, WeeklyScheduleEntry
from .normalization import normalize_schedule_entry

BASE_VOLUME: dict[Experience | None, int] = {
    Experience.BEGINNER: VOLUME_BASE_BEGINNER,
    Experience.INTERMEDIATE: VOLUME_BASE_INTERMEDIATE,
    Experience.ADVANCED: VOLUME_BASE_ADVANCED,
    None: VOLUME_BASE_UNKNOWN,
}


def calculate_systemic_stress(weekly_schedule: Sequence[Any] | None) -> int:
    """
    Sum the external-load scores of a week.

    none=0, low=1, medium=2, high=3 per day.

    Args:
        weekly_schedule: Schedule entries or raw day mappings; anything but
            a list/tuple scores 0, and entries of any other type are skipped

    Returns:
        Total stress score (0-21 for a 7-day week)
    """
    if not isinstance(weekly_schedule, (list, tuple)):
        return 0
    entries = [
        normalize_schedule_entry(entry, i) if isinstance(entry, Mapping) else entry
        for i, entry in enumerate(weekly_schedule)
    ]
    return sum(
        min(LOAD_SCORE_MAX, entry.external_load.score)
        for entry in entries
        if isinstance(entry, WeeklyScheduleEntry)
    )


def _equipment_adjusted_base(base: int, equipment: EquipmentProfile | None) -> int:
    if equipment is None or not equipment.is_home:
        return base
    if equipment.bodyweight_only:
        return max(HOME_BODYWEIGHT_FLOOR, int(round_half_up(base * HOME_BODYWEIGHT_FACTOR)))
    if not equipment.has_barbell and not equipment.has_machines:
        return max(HOME_NO_TOOLS_FLOOR, int(round_half_up(base * HOME_NO_TOOLS_FACTOR)))
    return base


def determine_volume_tier(
    experience: Experience | None,
    systemic_stress: int,
    equipment: EquipmentProfile | None = None,
) -> int:
    """
    Weekly set target per muscle group.

    Base by experience (10 / 14 / 18, unknown 14), reduced for home
    training with limited equipment, then cut by 20% when the week's
    systemic stress is above the threshold (roughly four heavy days).

    Args:
        experience: Normalized experience level, None if unknown
        systemic_stress: Output of calculate_systemic_stress()
        equipment: Equipment profile, None for an unconstrained gym

    Returns:
        Weekly sets per muscle group
    """
    base = _equipment_adjusted_base(BASE_VOLUME.get(experience, VOLUME_BASE_UNKNOWN), equipment)
    if systemic_stress > SYSTEMIC_STRESS_THRESHOLD:
        return int(base * SYSTEMIC_STRESS_VOLUME_FACTOR)
    return base
