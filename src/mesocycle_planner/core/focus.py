"""
Keyword classification of session focus names.

Session focus names are display strings ("Legs (Strength)", "Push",
"Torso (Pump)").  Scheduling, intensity, and content decisions all
need to know what kind of session a name describes; the keyword sets
live here so every module classifies a name the same way.

Spanish keywords are kept so focus names from older plans classify
identically.
"""

LEG_KEYWORDS: tuple[str, ...] = ("legs", "lower", "pierna")
BACK_KEYWORDS: tuple[str, ...] = ("back", "espalda")
STRENGTH_KEYWORDS: tuple[str, ...] = ("strength", "fuerza")
FULL_BODY_KEYWORDS: tuple[str, ...] = ("full body", "full")
PUSH_KEYWORDS: tuple[str, ...] = ("push", "empuje")
PULL_KEYWORDS: tuple[str, ...] = ("pull", "tracción", "traccion")
UPPER_KEYWORDS: tuple[str, ...] = ("upper", "torso") + PUSH_KEYWORDS + PULL_KEYWORDS
CORE_KEYWORDS: tuple[str, ...] = ("core", "abs")

# Sessions that must not land on a day with heavy outside work
HARD_SESSION_KEYWORDS: tuple[str, ...] = (
    "legs",
    "pierna",
    "back",
    "espalda",
    "full body (strength)",
    "full body (fuerza)",
    "full body heavy",
)

# Sessions that match the user's declared (upper-body) focus area
USER_FOCUS_KEYWORDS: tuple[str, ...] = UPPER_KEYWORDS + (
    "chest",
    "pecho",
    "shoulder",
    "hombro",
    "back",
    "espalda",
    "tren superior",
    "tren_superior",
)


def _has_any(name: str | None, keywords: tuple[str, ...]) -> bool:
    lowered = (name or "").lower()
    return any(k in lowered for k in keywords)


def is_hard_session(name: str | None) -> bool:
    """True for leg, back, and heavy full-body sessions."""
    return _has_any(name, HARD_SESSION_KEYWORDS)


def is_leg_session(name: str | None) -> bool:
    return _has_any(name, LEG_KEYWORDS)


def is_overload_candidate(name: str | None) -> bool:
    """True when a rested day should push this session slightly harder."""
    return _has_any(name, LEG_KEYWORDS + BACK_KEYWORDS + STRENGTH_KEYWORDS)


def is_heavy_axial(name: str | None) -> bool:
    """
    True for strength sessions built around squats or deadlifts.

    Strength work on legs or the full body loads the spine; core work
    on those days is kept to stability drills at the end.
    """
    return _has_any(name, STRENGTH_KEYWORDS) and (
        _has_any(name, LEG_KEYWORDS) or _has_any(name, ("full body",))
    )


def is_core_session(name: str | None) -> bool:
    return _has_any(name, CORE_KEYWORDS)


def is_upper_pattern(name: str | None) -> bool:
    return _has_any(name, UPPER_KEYWORDS)


def matches_user_focus(name: str | None) -> bool:
    return _has_any(name, USER_FOCUS_KEYWORDS)


def is_full_body(name: str | None) -> bool:
    return _has_any(name, FULL_BODY_KEYWORDS)
