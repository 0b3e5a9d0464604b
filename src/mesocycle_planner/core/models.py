"""
Data models for mesocycle-planner.

All core enums and dataclasses representing the planner's inputs, the
single-week schedule, and the materialized multi-week plan.  Loosely
typed caller values are converted into these types once, in
normalization.py; every planning module downstream works on them only.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Union

Location = Literal["home", "gym"]
CoreTiming = Literal["Main", "End"]


class ScheduleValidationError(ValueError):
    """Raised when a weekly schedule is not a sequence of exactly 7 days."""

    pass


class Experience(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class Goal(str, Enum):
    HYPERTROPHY = "Hypertrophy"
    STRENGTH = "Strength"
    ENDURANCE = "Endurance"
    FAT_LOSS = "FatLoss"
    GENERAL_HEALTH = "GeneralHealth"


class SpecialPhase(str, Enum):
    """Objectives that are not a training goal in their own right."""

    ACTIVE_DELOAD = "ActiveDeloadTechnique"


Objective = Union[Goal, SpecialPhase]


class ExternalLoad(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def score(self) -> int:
        """Systemic-stress points for one day at this load."""
        return _LOAD_SCORES[self]


_LOAD_SCORES = {
    ExternalLoad.NONE: 0,
    ExternalLoad.LOW: 1,
    ExternalLoad.MEDIUM: 2,
    ExternalLoad.HIGH: 3,
}


class SplitType(str, Enum):
    FULL_BODY = "Full Body"
    UPPER_LOWER_FULL = "Upper/Lower/Full"
    UPPER_LOWER = "Upper/Lower"
    TORSO_LIMBS = "Torso/Limbs"
    HYBRID_PHUL = "Hybrid (PHUL)"
    BODY_PART = "Body Part"
    PPL = "Push/Pull/Legs"
    PPL_ACTIVE_REST = "PPL + Active Rest"


class StructureType(str, Enum):
    REST = "Rest"
    NORMAL = "Normal"
    LOW_LOAD = "Low_Load"
    LOW_LOAD_PIVOT = "Low_Load_Pivot"


class StructureCategory(str, Enum):
    NEURAL_STRENGTH = "Neural_Strength"
    HYPERTROPHY_STANDARD = "Hypertrophy_Standard"
    METABOLIC_VOLUME = "Metabolic_Volume"


class DayOfWeek(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def from_index(cls, index: int) -> "DayOfWeek":
        """Monday is 0."""
        return list(cls)[index]


# =============================================================================
# INPUTS
# =============================================================================


@dataclass(frozen=True)
class EquipmentProfile:
    """
    Where and with what the user trains.

    Only ``location == "home"`` changes planning decisions; a gym is
    assumed to have everything.
    """

    location: Location = "gym"
    bodyweight_only: bool = False
    has_barbell: bool = False
    has_machines: bool = False

    def __post_init__(self) -> None:
        if self.location not in ("home", "gym"):
            raise ValueError(f"Invalid location: {self.location!r}")

    @property
    def is_home(self) -> bool:
        return self.location == "home"

    @property
    def is_home_bodyweight(self) -> bool:
        return self.is_home and self.bodyweight_only


@dataclass(frozen=True)
class ProfileData:
    """
    Planner-facing view of a user profile.

    ``experience_level`` is None when the stored level was not
    recognised; each planning table has an explicit row for that case.
    """

    experience_level: Experience | None
    fitness_goal: Goal
    user_declared_focus: str | None = None
    equipment_profile: EquipmentProfile | None = None
    training_days_per_week: int = 3

    def __post_init__(self) -> None:
        if not 0 <= self.training_days_per_week <= 7:
            raise ValueError("training_days_per_week must be between 0 and 7")


@dataclass(frozen=True)
class WeeklyScheduleEntry:
    """One calendar day of the user's availability."""

    day: str
    can_train: bool
    external_load: ExternalLoad = ExternalLoad.NONE


@dataclass(frozen=True)
class PriorFeedback:
    """Subjective feedback collected at the end of the previous mesocycle."""

    sensation: str | None = None
    energy_level: float | None = None  # 1-10
    soreness_level: float | None = None  # 1-10
    joint_pain: float | None = None  # 1-10


@dataclass(frozen=True)
class NextCycleConfig:
    """Carry-over hints produced by evaluating the previous mesocycle."""

    focus_suggestion: str | None = None
    overload_factor: float = 1.0
    previous_adherence: int = 0

    def __post_init__(self) -> None:
        if self.overload_factor <= 0:
            raise ValueError("overload_factor must be positive")
        if self.previous_adherence < 0:
            raise ValueError("previous_adherence must be non-negative")


@dataclass(frozen=True)
class ObjectiveDecision:
    objective: Objective
    reason: str


# =============================================================================
# SINGLE-WEEK SCHEDULE
# =============================================================================


@dataclass(frozen=True)
class SessionContext:
    """
    Scheduling context attached to one calendar day.

    ``max_rpe`` and ``exclude_axial`` are hard limits for the session
    generator downstream; ``adjustment_applied`` records a fatigue swap.
    """

    external_fatigue: ExternalLoad = ExternalLoad.NONE
    note: str | None = None
    low_load: bool = False
    low_load_pivot: bool = False
    exclude_axial: bool = False
    max_rpe: float | None = None
    focus: tuple[str, ...] = ()
    adjustment_applied: str | None = None


@dataclass(frozen=True)
class ScheduledSession:
    """One calendar day of the weekly template (training or rest)."""

    day_of_week: str
    session_focus: str
    structure_type: StructureType
    is_rest_day: bool
    context: SessionContext = field(default_factory=SessionContext)

    def __post_init__(self) -> None:
        if self.is_rest_day != (self.structure_type is StructureType.REST):
            raise ValueError(
                f"is_rest_day={self.is_rest_day} contradicts "
                f"structure_type={self.structure_type.value}"
            )


@dataclass(frozen=True)
class SessionIntensity:
    target_rpe: float
    structure_category: StructureCategory

    def __post_init__(self) -> None:
        if not 5.0 <= self.target_rpe <= 10.0:
            raise ValueError(f"target_rpe must be within [5, 10], got {self.target_rpe}")


@dataclass(frozen=True)
class CoreWork:
    included: bool = True
    timing: CoreTiming = "End"
    focus: str = "Dynamic"


@dataclass(frozen=True)
class CardioWork:
    included: bool = False
    type: str = "None"
    duration_minutes: int = 0


@dataclass(frozen=True)
class SafeSpecialization:
    """
    Guardrails for extra work on the user's declared focus area.

    The session generator only applies the caps when
    ``is_user_focus_session`` is True.
    """

    user_declared_focus: str | None
    is_user_focus_session: bool
    level: Experience
    cap_extra_volume_pct: float | None
    enforce_priority_start: bool
    allowed_extra_isolations: int
    require_48h_rest_for_focus: bool = False
    allow_intensity_techniques: bool = False


@dataclass(frozen=True)
class SessionContent:
    muscle_groups: frozenset[str]
    pattern_focus: str
    core: CoreWork
    cardio: CardioWork
    safe_specialization: SafeSpecialization


# =============================================================================
# MULTI-WEEK PLAN
# =============================================================================


@dataclass(frozen=True)
class MicrocycleProgression:
    focus: str
    notes: str
    intensity_modifier: float  # Added to the base RPE
    volume_modifier: float  # Multiplies the weekly set target


@dataclass(frozen=True)
class PlannedSession:
    """
    A scheduled day with this week's concrete targets.

    Rest days carry no intensity or content.
    """

    week_number: int
    day_index: int  # Monday is 0
    scheduled: ScheduledSession
    base_rpe: float | None = None  # Before weekly progression
    intensity: SessionIntensity | None = None
    target_rir: float | None = None
    content: SessionContent | None = None

    @property
    def is_rest_day(self) -> bool:
        return self.scheduled.is_rest_day

    @property
    def session_focus(self) -> str:
        return self.scheduled.session_focus


@dataclass(frozen=True)
class Microcycle:
    week_number: int
    phase: str
    notes: str
    intensity_modifier: float
    volume_modifier: float
    weekly_sets_per_muscle: int
    sessions: tuple[PlannedSession, ...]

    def __post_init__(self) -> None:
        if len(self.sessions) != 7:
            raise ValueError(f"A microcycle has 7 days, got {len(self.sessions)}")

    @property
    def training_sessions(self) -> list[PlannedSession]:
        return [s for s in self.sessions if not s.is_rest_day]


@dataclass(frozen=True)
class Mesocycle:
    """
    Complete output of one planning run.

    Persisting or versioning it is the caller's job.
    """

    objective: Objective
    objective_reason: str
    split_type: SplitType
    volume_tier: int  # Base weekly sets per muscle group
    systemic_stress: int
    overload_factor: float
    microcycles: tuple[Microcycle, ...]
    split_reason: str = ""

    @property
    def duration_weeks(self) -> int:
        return len(self.microcycles)

    @property
    def training_days_per_week(self) -> int:
        if not self.microcycles:
            return 0
        return len(self.microcycles[0].training_sessions)
