"""
Microcycle progression across a mesocycle.

A 4-week block follows adaptation → accumulation → intensification →
deload.  Each week's modifiers are applied on top of the base session
RPE (additive) and the weekly volume tier (multiplicative).
"""

from .config import round_half_up
from .load_balancer import clamp_rpe
from .models import MicrocycleProgression

WEEK_PROGRESSIONS: dict[int, MicrocycleProgression] = {
    1: MicrocycleProgression(
        focus="Adaptation & Technique",
        notes="Introduction: prioritise movement quality and motor learning.",
        intensity_modifier=-1.0,
        volume_modifier=0.8,
    ),
    2: MicrocycleProgression(
        focus="Volume Accumulation",
        notes="Loading: add weight or reps while keeping good technique.",
        intensity_modifier=0.0,
        volume_modifier=1.0,
    ),
    3: MicrocycleProgression(
        focus="Intensification",
        notes="Peak: controlled intensification, aim for safe personal records.",
        intensity_modifier=1.0,
        volume_modifier=0.9,
    ),
    4: MicrocycleProgression(
        focus="Deload",
        notes="Recovery: cut load by 30% and volume by 50% to allow supercompensation.",
        intensity_modifier=-2.0,
        volume_modifier=0.5,
    ),
}

MAINTENANCE = MicrocycleProgression(
    focus="Maintenance",
    notes="Standard week.",
    intensity_modifier=0.0,
    volume_modifier=1.0,
)


def create_microcycle_progression(week_number: int) -> MicrocycleProgression:
    """
    Progression modifiers for a week of the mesocycle.

    Args:
        week_number: 1-based week index

    Returns:
        The week's MicrocycleProgression; Maintenance outside weeks 1-4
    """
    return WEEK_PROGRESSIONS.get(week_number, MAINTENANCE)


def apply_intensity_modifier(
    base_rpe: float,
    progression: MicrocycleProgression,
    max_rpe: float | None = None,
) -> float:
    """Week RPE: base + modifier, clamped to [5, 10], then capped at ``max_rpe``."""
    rpe = clamp_rpe(base_rpe + progression.intensity_modifier)
    if max_rpe is not None:
        rpe = clamp_rpe(min(rpe, max_rpe))
    return rpe


def apply_volume_modifier(
    weekly_sets: int,
    progression: MicrocycleProgression,
    overload_factor: float = 1.0,
) -> int:
    """Week set target: sets × volume modifier × overload factor, at least 1."""
    return max(1, int(round_half_up(weekly_sets * progression.volume_modifier * overload_factor)))
