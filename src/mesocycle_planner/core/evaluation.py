"""
End-of-cycle evaluation.

Turns the RPEs the user reported during a mesocycle and their closing
questionnaire into the carry-over config for the next one.  The
resulting NextCycleConfig feeds resolve_objective() (focus suggestion)
and scales the next block's weekly volume (overload factor).
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Literal

from .config import (
    DIFFICULTY_EASY_FACTOR,
    DIFFICULTY_HARD_FACTOR,
    OVERLOAD_FACTOR_AGGRESSIVE,
    OVERLOAD_FACTOR_DECREASE,
    OVERLOAD_FACTOR_MODERATE,
    OVERLOAD_FOCUS_SUGGESTION,
    REHAB_FOCUS_SUGGESTION,
    TARGET_AVG_RPE,
)
from .models import NextCycleConfig

OverloadAction = Literal["increase_aggressive", "increase_moderate", "maintain", "decrease"]


@dataclass(frozen=True)
class OverloadAdjustment:
    action: OverloadAction
    factor: float
    reason: str
    avg_rpe: float


def _valid_rpes(session_rpes: Iterable[object]) -> list[float]:
    return [
        float(r)
        for r in session_rpes
        if isinstance(r, (int, float)) and not isinstance(r, bool) and math.isfinite(r) and r > 0
    ]


def calculate_overload_adjustment(
    session_rpes: Iterable[object],
    target_avg_rpe: float = TARGET_AVG_RPE,
) -> OverloadAdjustment:
    """
    Overload multiplier for the next cycle from reported session RPEs.

    Args:
        session_rpes: RPE reported per session; non-numeric and
            non-positive entries are ignored
        target_avg_rpe: RPE the cycle was aiming for

    Returns:
        OverloadAdjustment (factor 1.15 / 1.05 / 1.0 / 0.90)
    """
    rpes = _valid_rpes(session_rpes)
    if not rpes:
        return OverloadAdjustment("maintain", 1.0, "No RPE reported in session history.", 0.0)

    avg = sum(rpes) / len(rpes)
    if avg <= target_avg_rpe - 1.5:
        return OverloadAdjustment(
            "increase_aggressive", OVERLOAD_FACTOR_AGGRESSIVE, "Reported RPE very low.", avg
        )
    if avg <= target_avg_rpe - 0.5:
        return OverloadAdjustment(
            "increase_moderate", OVERLOAD_FACTOR_MODERATE, "Room for progression detected.", avg
        )
    if avg >= target_avg_rpe + 1.5:
        return OverloadAdjustment(
            "decrease", OVERLOAD_FACTOR_DECREASE, "Excessive RPE, burnout risk.", avg
        )
    return OverloadAdjustment("maintain", 1.0, "Intensity on target.", avg)


def subjective_factor(difficulty_score: int | None) -> float:
    """Difficulty 1 (very easy) → 1.10, 5 (very hard) → 0.85, otherwise 1.0."""
    if difficulty_score == 1:
        return DIFFICULTY_EASY_FACTOR
    if difficulty_score == 5:
        return DIFFICULTY_HARD_FACTOR
    return 1.0


def evaluate_cycle(
    session_rpes: Sequence[object],
    difficulty_score: int | None = None,
    pain_areas: Sequence[str] | None = None,
    target_avg_rpe: float = TARGET_AVG_RPE,
) -> NextCycleConfig:
    """
    Build the carry-over config for the next mesocycle.

    Args:
        session_rpes: RPE reported for each completed session
        difficulty_score: Closing questionnaire, 1 (very easy) to 5 (very hard)
        pain_areas: Body areas where the user reported pain
        target_avg_rpe: RPE the cycle was aiming for

    Returns:
        NextCycleConfig with overload factor, focus suggestion, and adherence
    """
    adjustment = calculate_overload_adjustment(session_rpes, target_avg_rpe)
    factor = round(adjustment.factor * subjective_factor(difficulty_score), 4)
    suggestion = REHAB_FOCUS_SUGGESTION if pain_areas else OVERLOAD_FOCUS_SUGGESTION
    return NextCycleConfig(
        focus_suggestion=suggestion,
        overload_factor=factor,
        previous_adherence=len(session_rpes),
    )
