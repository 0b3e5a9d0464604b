"""
Objective resolution for the upcoming mesocycle.

Decides what the next block should train for, from the user's stated
goal and how the previous block felt.
"""

import logging

from .config import REHAB_FOCUS_SUGGESTION
from .models import (
    Goal,
    NextCycleConfig,
    Objective,
    ObjectiveDecision,
    PriorFeedback,
    SpecialPhase,
)
from .normalization import normalize_goal

logger = logging.getLogger(__name__)

PLATEAU_SENSATIONS: frozenset[str] = frozenset({"estancado", "plateaued", "plateau", "stalled"})
LOW_ENERGY_THRESHOLD = 3  # energy_level below this counts as a plateau
HIGH_SORENESS_THRESHOLD = 7  # soreness or joint pain above this forces a deload

REASON_FIRST_CYCLE = "First cycle: adaptation phase"
REASON_PLATEAU = "Switch to strength to break the plateau via neural stimulus"
REASON_DELOAD = "Active deload due to high soreness or joint pain"
REASON_REHAB = "Recovery-oriented evaluation suggestion"
REASON_CONTINUE = "Continuation of the main goal with progression"


def _is_plateau(feedback: PriorFeedback) -> bool:
    if feedback.sensation and feedback.sensation.strip().lower() in PLATEAU_SENSATIONS:
        return True
    return feedback.energy_level is not None and feedback.energy_level < LOW_ENERGY_THRESHOLD


def _is_overreached(feedback: PriorFeedback) -> bool:
    return any(
        level is not None and level > HIGH_SORENESS_THRESHOLD
        for level in (feedback.soreness_level, feedback.joint_pain)
    )


def resolve_objective(
    fitness_goal: Goal | str | None,
    prior_feedback: PriorFeedback | None = None,
    next_cycle_config: NextCycleConfig | None = None,
) -> ObjectiveDecision:
    """
    Decide the objective of the next mesocycle.

    Rules are evaluated in order and the first match wins:

    1. No prior feedback: first cycle, keep the user's goal.
    2. Plateau (sensation "Estancado" or energy < 3): Strength.
    3. Soreness or joint pain > 7: active deload phase.
    4. Evaluation suggested "Rehab/Prehab": General Health.
    5. Otherwise keep the user's goal.

    Args:
        fitness_goal: Stated goal (free-form strings are normalized)
        prior_feedback: Feedback from the previous mesocycle, if any
        next_cycle_config: Carry-over hints from the previous evaluation

    Returns:
        ObjectiveDecision with the objective and a human-readable reason
    """
    goal = normalize_goal(fitness_goal)

    if prior_feedback is None:
        decision = ObjectiveDecision(goal, REASON_FIRST_CYCLE)
    elif _is_plateau(prior_feedback):
        decision = ObjectiveDecision(Goal.STRENGTH, REASON_PLATEAU)
    elif _is_overreached(prior_feedback):
        decision = ObjectiveDecision(SpecialPhase.ACTIVE_DELOAD, REASON_DELOAD)
    elif (
        next_cycle_config is not None
        and next_cycle_config.focus_suggestion == REHAB_FOCUS_SUGGESTION
    ):
        decision = ObjectiveDecision(Goal.GENERAL_HEALTH, REASON_REHAB)
    else:
        decision = ObjectiveDecision(goal, REASON_CONTINUE)

    logger.debug("Objective %s: %s", decision.objective.value, decision.reason)
    return decision


def effective_goal(objective: Objective) -> Goal:
    """Goal used by split and content decisions; a deload trains for general health."""
    if isinstance(objective, Goal):
        return objective
    return Goal.GENERAL_HEALTH
