"""
Split selection.

Chooses the training-split architecture from the number of available
days, refined by experience, goal, and equipment.  The policy is a
table of rows evaluated top to bottom; the first row whose day count
and condition match wins.  Keeping it as data makes each rule
auditable and testable on its own.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from .models import EquipmentProfile, Experience, Goal, SplitType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SplitContext:
    """Everything a split rule may look at."""

    days: int
    experience: Experience | None
    goal: Goal
    equipment: EquipmentProfile | None

    @property
    def is_home(self) -> bool:
        return self.equipment is not None and self.equipment.is_home

    @property
    def is_home_bodyweight(self) -> bool:
        return self.equipment is not None and self.equipment.is_home_bodyweight


@dataclass(frozen=True)
class SplitRule:
    min_days: int
    max_days: int
    condition: Callable[[SplitContext], bool]
    split: SplitType
    rationale: str


def _always(ctx: SplitContext) -> bool:
    return True


SPLIT_RULES: tuple[SplitRule, ...] = (
    SplitRule(0, 1, _always, SplitType.FULL_BODY, "Minimum fallback for one day or less"),
    SplitRule(2, 2, _always, SplitType.FULL_BODY,
              "Only architecture giving enough per-muscle frequency on two days"),
    SplitRule(3, 3, lambda c: c.is_home, SplitType.FULL_BODY,
              "Home training: spread load across full-body sessions"),
    SplitRule(3, 3, lambda c: c.experience is Experience.BEGINNER or c.goal is Goal.ENDURANCE,
              SplitType.FULL_BODY, "Beginner or endurance goal: full body three times"),
    SplitRule(3, 3, _always, SplitType.UPPER_LOWER_FULL,
              "Undulating upper/lower/full to limit per-session systemic fatigue"),
    SplitRule(4, 4, lambda c: c.is_home_bodyweight, SplitType.TORSO_LIMBS,
              "Bodyweight-only home: avoid heavy axial loading"),
    SplitRule(4, 4, lambda c: c.goal is Goal.STRENGTH, SplitType.UPPER_LOWER,
              "Strength goal: upper/lower keeps the focus on the main lifts"),
    SplitRule(4, 4, lambda c: c.experience is Experience.BEGINNER, SplitType.TORSO_LIMBS,
              "Beginner: torso/limbs, a gentler upper/lower"),
    SplitRule(4, 4, _always, SplitType.UPPER_LOWER, "Upper/lower, the four-day standard"),
    SplitRule(5, 5, lambda c: c.is_home, SplitType.FULL_BODY,
              "Home training: full body spreads volume and limits axial loading"),
    SplitRule(5, 5, lambda c: c.experience is Experience.ADVANCED, SplitType.BODY_PART,
              "Advanced: body-part split with revised frequency"),
    SplitRule(5, 5, _always, SplitType.HYBRID_PHUL, "Upper/lower + push/pull hybrid"),
    # Bodyweight-only home users also get PPL; volume capping moderates it
    SplitRule(6, 6, _always, SplitType.PPL, "Push/pull/legs, each pattern twice a week"),
    SplitRule(7, 10_000, _always, SplitType.PPL_ACTIVE_REST,
              "Seven days: PPL with one mandatory active-recovery day"),
)

FALLBACK_RATIONALE = "Fallback"

SESSION_ORDER: dict[SplitType, tuple[str, ...]] = {
    # Undulating intensity across the week
    SplitType.FULL_BODY: (
        "Full Body (Strength)",
        "Full Body (Hypertrophy)",
        "Full Body (Metabolic)",
    ),
    SplitType.UPPER_LOWER_FULL: (
        "Upper (Strength)",
        "Legs (Strength)",
        "Full Body (Hypertrophy)",
    ),
    SplitType.UPPER_LOWER: (
        "Upper (Strength)",
        "Legs (Strength)",
        "Upper (Hypertrophy)",
        "Legs (Hypertrophy)",
    ),
    SplitType.TORSO_LIMBS: (
        "Torso (General)",
        "Legs/Arms",
        "Torso (Pump)",
        "Legs (Complete)",
    ),
    SplitType.HYBRID_PHUL: (
        "Upper (Strength)",
        "Legs (Strength)",
        "Push (Hypertrophy)",
        "Pull (Hypertrophy)",
        "Legs (Hypertrophy)",
    ),
    SplitType.BODY_PART: (
        "Chest/Triceps",
        "Back/Biceps",
        "Legs (Quads)",
        "Shoulders/Abs",
        "Legs (Hamstrings/Glutes)",
    ),
    SplitType.PPL: ("Push", "Pull", "Legs", "Push", "Pull", "Legs"),
    SplitType.PPL_ACTIVE_REST: (
        "Push",
        "Pull",
        "Legs",
        "Push",
        "Pull",
        "Legs",
        "Active Recovery",
    ),
}

DEFAULT_SESSION_ORDER: tuple[str, ...] = ("Full Body", "Full Body")


def _match_rule(ctx: SplitContext) -> SplitRule | None:
    for rule in SPLIT_RULES:
        if rule.min_days <= ctx.days <= rule.max_days and rule.condition(ctx):
            return rule
    return None


def select_split_architecture(
    days_available: int,
    experience: Experience | None,
    goal: Goal,
    equipment: EquipmentProfile | None = None,
) -> SplitType:
    """
    Choose the split for the number of days the user can train.

    Args:
        days_available: Trainable days in the week (negative counts as 0)
        experience: Normalized experience level, None if unknown
        goal: Normalized training goal
        equipment: Equipment profile, None for an unconstrained gym

    Returns:
        SplitType; Full Body when no rule matches
    """
    ctx = SplitContext(max(0, days_available), experience, goal, equipment)
    rule = _match_rule(ctx)
    split = rule.split if rule is not None else SplitType.FULL_BODY
    logger.debug("Split for %d days: %s", ctx.days, split.value)
    return split


def split_rationale(
    days_available: int,
    experience: Experience | None,
    goal: Goal,
    equipment: EquipmentProfile | None = None,
) -> str:
    """Human-readable reason for the split select_split_architecture() returns."""
    rule = _match_rule(SplitContext(max(0, days_available), experience, goal, equipment))
    return rule.rationale if rule is not None else FALLBACK_RATIONALE


def get_session_order(split_type: SplitType | None) -> tuple[str, ...]:
    """
    Return the ordered session-focus queue for a split.

    Args:
        split_type: Split variant

    Returns:
        Tuple of session focus names; ("Full Body", "Full Body") if unknown
    """
    return SESSION_ORDER.get(split_type, DEFAULT_SESSION_ORDER)
