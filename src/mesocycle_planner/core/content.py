"""
Session content annotations.

Tags each scheduled session with its target muscle groups, core and
cardio policy, and the safe-specialization guardrails the session
generator must respect when adding work for the user's focus area.
Exercise selection itself happens downstream.
"""

from .config import (
    CARDIO_HIIT_MINUTES,
    CARDIO_LISS_MINUTES,
    EXTRA_ISOLATIONS_ADVANCED,
    EXTRA_ISOLATIONS_BEGINNER,
    EXTRA_ISOLATIONS_INTERMEDIATE,
    SPECIALIZATION_CAP_BEGINNER,
    SPECIALIZATION_CAP_INTERMEDIATE,
)
from .focus import (
    BACK_KEYWORDS,
    PULL_KEYWORDS,
    PUSH_KEYWORDS,
    is_core_session,
    is_full_body,
    is_heavy_axial,
    is_leg_session,
    is_upper_pattern,
    matches_user_focus,
)
from .models import (
    CardioWork,
    CoreWork,
    Experience,
    Goal,
    SafeSpecialization,
    SessionContent,
)

PUSH_MUSCLES = frozenset({"Chest", "Front Delts", "Side Delts", "Triceps"})
PULL_MUSCLES = frozenset({"Lats", "Rhomboids", "Rear Delts", "Biceps"})
UPPER_MUSCLES = frozenset({"Chest", "Back", "Shoulders", "Arms"})
LOWER_MUSCLES = frozenset({"Quads", "Hamstrings", "Glutes", "Calves"})
FULL_BODY_MUSCLES = frozenset({"Quads", "Hamstrings", "Chest", "Back", "Shoulders"})

# (required keywords, muscles) for body-part sessions; every group must match
ISOLATION_PATTERNS: tuple[tuple[tuple[tuple[str, ...], ...], frozenset[str]], ...] = (
    ((("chest", "pecho"), ("triceps", "tríceps")), frozenset({"Chest", "Triceps", "Front Delts"})),
    ((("back", "espalda"), ("biceps", "bíceps")), frozenset({"Lats", "Rhomboids", "Biceps"})),
    ((("shoulder", "hombro"),), frozenset({"Front Delts", "Side Delts", "Rear Delts"})),
)

CARDIO_GOALS = frozenset({Goal.FAT_LOSS, Goal.GENERAL_HEALTH})


def _contains(name: str, keywords: tuple[str, ...]) -> bool:
    return any(k in name for k in keywords)


def classify_muscle_groups(session_focus: str | None) -> tuple[frozenset[str], str]:
    """
    Muscle groups and movement pattern for a session focus name.

    Args:
        session_focus: Focus name, e.g. "Push (Hypertrophy)"

    Returns:
        (muscle_groups, pattern_focus); pattern is one of Push, Pull,
        Upper Body, Lower Body, Full Body, Isolation, General
    """
    name = (session_focus or "").lower()

    if is_upper_pattern(name):
        if _contains(name, PUSH_KEYWORDS):
            return PUSH_MUSCLES, "Push"
        if _contains(name, PULL_KEYWORDS + BACK_KEYWORDS):
            return PULL_MUSCLES, "Pull"
        return UPPER_MUSCLES, "Upper Body"
    if is_leg_session(name):
        return LOWER_MUSCLES, "Lower Body"
    if is_full_body(name):
        return FULL_BODY_MUSCLES, "Full Body"
    for keyword_groups, muscles in ISOLATION_PATTERNS:
        if all(_contains(name, group) for group in keyword_groups):
            return muscles, "Isolation"
    return frozenset(), "General"


def build_core_work(session_focus: str | None) -> CoreWork:
    """
    Core policy for a session.

    Core work never precedes heavy squats or deadlifts: on heavy axial
    days it is stability-only at the end.  Core/abs sessions make it
    the main block.
    """
    if is_heavy_axial(session_focus):
        return CoreWork(included=True, timing="End", focus="Anti-Movement")
    if is_core_session(session_focus):
        return CoreWork(included=True, timing="Main", focus="Comprehensive")
    return CoreWork(included=True, timing="End", focus="Dynamic")


def build_cardio_work(session_focus: str | None, goal: Goal) -> CardioWork:
    """LISS after leg days, optional HIIT otherwise; only for fat-loss or health goals."""
    if goal not in CARDIO_GOALS:
        return CardioWork()
    if is_leg_session(session_focus):
        return CardioWork(included=True, type="LISS", duration_minutes=CARDIO_LISS_MINUTES)
    return CardioWork(included=True, type="HIIT_Optional", duration_minutes=CARDIO_HIIT_MINUTES)


def build_safe_specialization(
    session_focus: str | None,
    experience: Experience | None,
    user_declared_focus: str | None,
) -> SafeSpecialization:
    """
    Guardrails on extra work for the user's declared focus.

    Args:
        session_focus: Focus name of the session
        experience: Normalized level; unknown gets the intermediate rules
        user_declared_focus: Free-form focus area, e.g. "Chest"

    Returns:
        SafeSpecialization for the session
    """
    declared = (user_declared_focus or "").strip() or None
    is_focus_session = declared is not None and matches_user_focus(session_focus)

    if experience is Experience.BEGINNER:
        return SafeSpecialization(
            user_declared_focus=declared,
            is_user_focus_session=is_focus_session,
            level=Experience.BEGINNER,
            cap_extra_volume_pct=SPECIALIZATION_CAP_BEGINNER,
            enforce_priority_start=True,
            allowed_extra_isolations=EXTRA_ISOLATIONS_BEGINNER,
        )
    if experience is Experience.ADVANCED:
        return SafeSpecialization(
            user_declared_focus=declared,
            is_user_focus_session=is_focus_session,
            level=Experience.ADVANCED,
            cap_extra_volume_pct=None,
            enforce_priority_start=False,
            allowed_extra_isolations=EXTRA_ISOLATIONS_ADVANCED,
            allow_intensity_techniques=True,
        )
    return SafeSpecialization(
        user_declared_focus=declared,
        is_user_focus_session=is_focus_session,
        level=Experience.INTERMEDIATE,
        cap_extra_volume_pct=SPECIALIZATION_CAP_INTERMEDIATE,
        enforce_priority_start=True,
        allowed_extra_isolations=EXTRA_ISOLATIONS_INTERMEDIATE,
        require_48h_rest_for_focus=True,
    )


def generate_session_content(
    session_focus: str | None,
    goal: Goal,
    experience: Experience | None,
    user_declared_focus: str | None = None,
) -> SessionContent:
    """
    Content annotations for one session.

    Args:
        session_focus: Focus name from the scheduler
        goal: Effective training goal
        experience: Normalized level, None if unknown
        user_declared_focus: User's declared focus area, if any

    Returns:
        SessionContent with muscles, pattern, core, cardio, and guardrails
    """
    muscles, pattern = classify_muscle_groups(session_focus)
    return SessionContent(
        muscle_groups=muscles,
        pattern_focus=pattern,
        core=build_core_work(session_focus),
        cardio=build_cardio_work(session_focus, goal),
        safe_specialization=build_safe_specialization(session_focus, experience, user_declared_focus),
    )
