"""
Load balancing: per-session intensity targets.

Sets the target RPE for a session from the user's level and the
physical load they carry outside the gym that day.
"""

from .config import (
    HIGH_LOAD_SCORE,
    HYPERTROPHY_RPE,
    MEDIUM_LOAD_SCORE,
    NEURAL_STRENGTH_RPE,
    RPE_BASE_ADVANCED,
    RPE_BASE_BEGINNER,
    RPE_BASE_INTERMEDIATE,
    RPE_BASE_UNKNOWN,
    RPE_HIGH_LOAD_PENALTY,
    RPE_MAX,
    RPE_MEDIUM_LOAD_PENALTY,
    RPE_MIN,
    RPE_OVERLOAD_BONUS,
    RPE_OVERLOAD_CAP,
    round_half_up,
)
from .focus import is_overload_candidate
from .models import Experience, ExternalLoad, SessionIntensity, StructureCategory

BASE_RPE: dict[Experience | None, float] = {
    Experience.BEGINNER: RPE_BASE_BEGINNER,
    Experience.INTERMEDIATE: RPE_BASE_INTERMEDIATE,
    Experience.ADVANCED: RPE_BASE_ADVANCED,
    None: RPE_BASE_UNKNOWN,
}


def clamp_rpe(rpe: float) -> float:
    """Clamp to [5, 10] and round to one decimal."""
    return round_half_up(max(RPE_MIN, min(RPE_MAX, rpe)), 1)


def set_session_intensity(
    experience: Experience | None,
    external_load: ExternalLoad,
    session_focus: str | None,
) -> float:
    """
    Target RPE for one session.

    Base by level (7 / 8 / 9, unknown 7.5).  A high-load day takes 1.5
    off, a medium day 0.5.  On a rested day (none/low) a leg, back, or
    strength session gets +0.5, never above 9.5.

    Args:
        experience: Normalized experience level, None if unknown
        external_load: The day's outside-the-gym load
        session_focus: Session focus name

    Returns:
        Target RPE in [5.0, 10.0], one decimal
    """
    rpe = BASE_RPE.get(experience, RPE_BASE_UNKNOWN)
    score = external_load.score

    if score >= HIGH_LOAD_SCORE:
        rpe -= RPE_HIGH_LOAD_PENALTY
    elif score == MEDIUM_LOAD_SCORE:
        rpe -= RPE_MEDIUM_LOAD_PENALTY
    elif is_overload_candidate(session_focus):
        rpe = min(RPE_OVERLOAD_CAP, rpe + RPE_OVERLOAD_BONUS)

    return clamp_rpe(rpe)


def determine_session_structure_type(rpe: float) -> StructureCategory:
    """Neural strength from RPE 8.5, standard hypertrophy from 7, metabolic below."""
    if rpe >= NEURAL_STRENGTH_RPE:
        return StructureCategory.NEURAL_STRENGTH
    if rpe >= HYPERTROPHY_RPE:
        return StructureCategory.HYPERTROPHY_STANDARD
    return StructureCategory.METABOLIC_VOLUME


def build_session_intensity(rpe: float) -> SessionIntensity:
    rpe = clamp_rpe(rpe)
    return SessionIntensity(target_rpe=rpe, structure_category=determine_session_structure_type(rpe))


def rpe_to_rir(rpe: float) -> float:
    """Reps in reserve implied by an RPE (RPE 8 → 2 RIR)."""
    return max(0.0, round_half_up(RPE_MAX - rpe, 1))
