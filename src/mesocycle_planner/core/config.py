"""
Configuration constants for the mesocycle planning model.

All adjustable parameters are centralized here for easy tuning.
Banners follow the order of the planning pipeline.
"""

from typing import Final

# =============================================================================
# EXTERNAL LOAD SCORING
# =============================================================================

LOAD_SCORE_MAX: Final[int] = 3  # "extreme" days count the same as "high"
HIGH_LOAD_SCORE: Final[int] = 3  # Score at which a day counts as high load
MEDIUM_LOAD_SCORE: Final[int] = 2

# =============================================================================
# VOLUME TIER
# =============================================================================

VOLUME_BASE_BEGINNER: Final[int] = 10  # Weekly sets per muscle group
VOLUME_BASE_INTERMEDIATE: Final[int] = 14
VOLUME_BASE_ADVANCED: Final[int] = 18
VOLUME_BASE_UNKNOWN: Final[int] = 14

HOME_BODYWEIGHT_FACTOR: Final[float] = 0.90  # Bodyweight-only home training
HOME_BODYWEIGHT_FLOOR: Final[int] = 6
HOME_NO_TOOLS_FACTOR: Final[float] = 0.95  # Home without barbell or machines
HOME_NO_TOOLS_FLOOR: Final[int] = 7

# Roughly four heavy outside-gym days in one week
SYSTEMIC_STRESS_THRESHOLD: Final[int] = 12
SYSTEMIC_STRESS_VOLUME_FACTOR: Final[float] = 0.80

# =============================================================================
# SESSION INTENSITY
# =============================================================================

RPE_BASE_BEGINNER: Final[float] = 7.0  # RIR 3
RPE_BASE_INTERMEDIATE: Final[float] = 8.0  # RIR 2
RPE_BASE_ADVANCED: Final[float] = 9.0  # RIR 1
RPE_BASE_UNKNOWN: Final[float] = 7.5

RPE_HIGH_LOAD_PENALTY: Final[float] = 1.5
RPE_MEDIUM_LOAD_PENALTY: Final[float] = 0.5
RPE_OVERLOAD_BONUS: Final[float] = 0.5  # Rested day + leg/back/strength focus
RPE_OVERLOAD_CAP: Final[float] = 9.5

RPE_MIN: Final[float] = 5.0
RPE_MAX: Final[float] = 10.0

NEURAL_STRENGTH_RPE: Final[float] = 8.5  # At or above: Neural_Strength
HYPERTROPHY_RPE: Final[float] = 7.0  # At or above: Hypertrophy_Standard

ACTIVE_DELOAD_MAX_RPE: Final[float] = 7.0  # Ceiling during an active-deload phase

# =============================================================================
# WEEKLY TEMPLATES
# =============================================================================

SIX_DAY_FORCED_REST: Final[tuple[int, ...]] = (2, 6)  # 2-1-3-1 template
SIX_DAY_LOAD_SLOTS: Final[int] = 5
FIVE_DAY_LOAD_SLOTS: Final[int] = 4
FIVE_DAY_HOME_LOAD_SLOTS: Final[int] = 2

LOW_LOAD_PIVOT_MAX_RPE: Final[float] = 6.0
LOW_LOAD_MAX_RPE: Final[float] = 5.0
LOW_LOAD_FOCUS: Final[tuple[str, ...]] = ("mobility", "core", "metabolic_flush")

FATIGUE_SWAP_NOTE: Final[str] = "Fatigue Management Swap"

# =============================================================================
# SAFE SPECIALIZATION
# =============================================================================

SPECIALIZATION_CAP_BEGINNER: Final[float] = 0.10
SPECIALIZATION_CAP_INTERMEDIATE: Final[float] = 0.20
EXTRA_ISOLATIONS_BEGINNER: Final[int] = 0
EXTRA_ISOLATIONS_INTERMEDIATE: Final[int] = 2
EXTRA_ISOLATIONS_ADVANCED: Final[int] = 3

CARDIO_LISS_MINUTES: Final[int] = 20  # Leg days
CARDIO_HIIT_MINUTES: Final[int] = 15  # Everything else

# =============================================================================
# MESOCYCLE HORIZON
# =============================================================================

DEFAULT_MESOCYCLE_WEEKS: Final[int] = 4
MIN_MESOCYCLE_WEEKS: Final[int] = 1
MAX_MESOCYCLE_WEEKS: Final[int] = 12
DAYS_PER_WEEK: Final[int] = 7

# =============================================================================
# CYCLE EVALUATION
# =============================================================================

TARGET_AVG_RPE: Final[float] = 7.5
OVERLOAD_FACTOR_AGGRESSIVE: Final[float] = 1.15
OVERLOAD_FACTOR_MODERATE: Final[float] = 1.05
OVERLOAD_FACTOR_DECREASE: Final[float] = 0.90
DIFFICULTY_EASY_FACTOR: Final[float] = 1.10  # difficulty_score == 1
DIFFICULTY_HARD_FACTOR: Final[float] = 0.85  # difficulty_score == 5

REHAB_FOCUS_SUGGESTION: Final[str] = "Rehab/Prehab"
OVERLOAD_FOCUS_SUGGESTION: Final[str] = "Progressive Overload"


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round half away from zero for non-negative values.

    The built-in round() sends halves to the even neighbour
    (round(4.5) == 4), which would make a 9-set tier at 0.5 volume
    come out as 4 sets instead of 5.

    Args:
        value: Value to round (planning values are never negative)
        digits: Number of decimal places

    Returns:
        Rounded value
    """
    factor = 10 ** digits
    return int(value * factor + 0.5 + 1e-9) / factor
