"""
Session scheduling onto the 7-day calendar.

Places a split's session queue on the days the user can train.  Three
templates are chosen by the count and contiguity of trainable days:

- 6 days: "2-1-3-1", with forced rest on Wednesday and Sunday.
- 5 consecutive days: a Low-Load Pivot in the middle of the block
  (plus two Low-Load days for home beginners).
- Anything else: sessions in queue order, with a fatigue swap that
  keeps leg/back/heavy sessions off days with heavy outside work.

The queue is never mutated; templates walk it by index and the greedy
template threads the remaining sessions through its fold as a tuple.
"""

import logging
from collections.abc import Sequence

from .config import (
    DAYS_PER_WEEK,
    FATIGUE_SWAP_NOTE,
    FIVE_DAY_HOME_LOAD_SLOTS,
    FIVE_DAY_LOAD_SLOTS,
    HIGH_LOAD_SCORE,
    LOW_LOAD_FOCUS,
    LOW_LOAD_MAX_RPE,
    LOW_LOAD_PIVOT_MAX_RPE,
    SIX_DAY_FORCED_REST,
    SIX_DAY_LOAD_SLOTS,
)
from .focus import is_hard_session
from .models import (
    EquipmentProfile,
    Experience,
    ScheduledSession,
    SessionContext,
    SplitType,
    StructureType,
    WeeklyScheduleEntry,
)
from .split_selector import DEFAULT_SESSION_ORDER, get_session_order

logger = logging.getLogger(__name__)

REST_FOCUS = "Rest / Recovery"
EXTRA_RECOVERY_FOCUS = "Extra Active Recovery"
LOW_LOAD_PIVOT_FOCUS = "Low-Load Pivot (Dissipation)"
LOW_LOAD_FOCUS_NAME = "Low-Load (Recovery Focus)"

NOTE_UNAVAILABLE = "Day not available for training."
NOTE_FORCED_REST = "Fatigue management: rest day (2-1-3-1 template)"
NOTE_QUEUE_EXHAUSTED = "No more sessions scheduled in the split."


# ---------------------------------------------------------------------------
# Day builders
# ---------------------------------------------------------------------------


def _rest_day(entry: WeeklyScheduleEntry, note: str, focus: str = REST_FOCUS) -> ScheduledSession:
    return ScheduledSession(
        day_of_week=entry.day,
        session_focus=focus,
        structure_type=StructureType.REST,
        is_rest_day=True,
        context=SessionContext(external_fatigue=entry.external_load, note=note),
    )


def _load_day(
    entry: WeeklyScheduleEntry,
    session_focus: str,
    adjustment: str | None = None,
) -> ScheduledSession:
    return ScheduledSession(
        day_of_week=entry.day,
        session_focus=session_focus,
        structure_type=StructureType.NORMAL,
        is_rest_day=False,
        context=SessionContext(external_fatigue=entry.external_load, adjustment_applied=adjustment),
    )


def _low_load_day(entry: WeeklyScheduleEntry, pivot: bool) -> ScheduledSession:
    """Pivot: max RPE 6; plain low-load: max RPE 5.  Both exclude axial loading."""
    return ScheduledSession(
        day_of_week=entry.day,
        session_focus=LOW_LOAD_PIVOT_FOCUS if pivot else LOW_LOAD_FOCUS_NAME,
        structure_type=StructureType.LOW_LOAD_PIVOT if pivot else StructureType.LOW_LOAD,
        is_rest_day=False,
        context=SessionContext(
            external_fatigue=entry.external_load,
            low_load=not pivot,
            low_load_pivot=pivot,
            exclude_axial=True,
            max_rpe=LOW_LOAD_PIVOT_MAX_RPE if pivot else LOW_LOAD_MAX_RPE,
            focus=LOW_LOAD_FOCUS,
        ),
    )


def cycle_sessions(queue: Sequence[str], count: int) -> list[str]:
    """
    Take ``count`` sessions from the queue, wrapping around if it is short.

    Args:
        queue: Ordered session focus names
        count: Number of sessions needed

    Returns:
        List of exactly ``count`` names (empty if count <= 0)
    """
    if not queue:
        queue = DEFAULT_SESSION_ORDER
    return [queue[i % len(queue)] for i in range(max(0, count))]


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


def _six_day_template(
    schedule: Sequence[WeeklyScheduleEntry],
    queue: Sequence[str],
) -> list[ScheduledSession]:
    """[LOAD, LOAD, REST, LOAD, LOAD, LOAD, REST]"""
    loads = cycle_sessions(queue, SIX_DAY_LOAD_SLOTS)
    cursor = 0
    calendar: list[ScheduledSession] = []
    for i, entry in enumerate(schedule):
        if i in SIX_DAY_FORCED_REST:
            calendar.append(_rest_day(entry, NOTE_FORCED_REST))
        elif not entry.can_train:
            calendar.append(_rest_day(entry, NOTE_UNAVAILABLE))
        else:
            calendar.append(_load_day(entry, loads[cursor]))
            cursor += 1
    return calendar


def _five_day_pivot_template(
    schedule: Sequence[WeeklyScheduleEntry],
    queue: Sequence[str],
    trainable: list[int],
) -> list[ScheduledSession]:
    """[LOAD, LOAD, LOW_LOAD_PIVOT, LOAD, LOAD] across the trainable block."""
    pivot_idx = trainable[len(trainable) // 2]
    loads = cycle_sessions(queue, FIVE_DAY_LOAD_SLOTS)
    cursor = 0
    calendar: list[ScheduledSession] = []
    for i, entry in enumerate(schedule):
        if not entry.can_train:
            calendar.append(_rest_day(entry, NOTE_UNAVAILABLE))
        elif i == pivot_idx:
            calendar.append(_low_load_day(entry, pivot=True))
        else:
            calendar.append(_load_day(entry, loads[cursor]))
            cursor += 1
    return calendar


def _five_day_home_beginner_template(
    schedule: Sequence[WeeklyScheduleEntry],
    queue: Sequence[str],
    trainable: list[int],
) -> list[ScheduledSession]:
    """[LOAD, LOW_LOAD, LOW_LOAD_PIVOT, LOW_LOAD, LOAD]: only the outer days load."""
    pivot_idx = trainable[len(trainable) // 2]
    outer = (trainable[0], trainable[-1])
    loads = cycle_sessions(queue, FIVE_DAY_HOME_LOAD_SLOTS)
    cursor = 0
    calendar: list[ScheduledSession] = []
    for i, entry in enumerate(schedule):
        if not entry.can_train:
            calendar.append(_rest_day(entry, NOTE_UNAVAILABLE))
        elif i == pivot_idx:
            calendar.append(_low_load_day(entry, pivot=True))
        elif i in outer:
            calendar.append(_load_day(entry, loads[cursor]))
            cursor += 1
        else:
            calendar.append(_low_load_day(entry, pivot=False))
    return calendar


def _pick_session(remaining: tuple[str, ...], entry: WeeklyScheduleEntry) -> int:
    """
    Index of the session to train on this day.

    On a high external-load day a hard next session is swapped for the
    first non-hard one still in the queue; with none left, the hard
    session stays.
    """
    if entry.external_load.score >= HIGH_LOAD_SCORE and is_hard_session(remaining[0]):
        for idx, name in enumerate(remaining):
            if not is_hard_session(name):
                return idx
    return 0


def _greedy_template(
    schedule: Sequence[WeeklyScheduleEntry],
    queue: Sequence[str],
) -> list[ScheduledSession]:
    remaining = tuple(queue)
    calendar: list[ScheduledSession] = []
    for entry in schedule:
        if not entry.can_train:
            calendar.append(_rest_day(entry, NOTE_UNAVAILABLE))
            continue
        if not remaining:
            calendar.append(_rest_day(entry, NOTE_QUEUE_EXHAUSTED, EXTRA_RECOVERY_FOCUS))
            continue

        idx = _pick_session(remaining, entry)
        swapped = idx != 0
        if swapped:
            logger.debug(
                "%s: %s swapped for %s (high external load)",
                entry.day, remaining[0], remaining[idx],
            )
        calendar.append(_load_day(entry, remaining[idx], FATIGUE_SWAP_NOTE if swapped else None))
        # The skipped hard session keeps its place at the head of the queue
        remaining = remaining[:idx] + remaining[idx + 1:]
    return calendar


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def trainable_indices(schedule: Sequence[WeeklyScheduleEntry]) -> list[int]:
    """Day indices (Monday=0) the user can train on."""
    return [i for i, entry in enumerate(schedule) if entry.can_train]


def is_consecutive(indices: list[int]) -> bool:
    """True if the indices form one unbroken run of days."""
    return bool(indices) and indices[-1] - indices[0] == len(indices) - 1


def map_sessions_to_calendar(
    weekly_schedule: Sequence[WeeklyScheduleEntry],
    split_type: SplitType,
    equipment: EquipmentProfile | None = None,
    experience: Experience | None = None,
) -> list[ScheduledSession]:
    """
    Map the split's sessions onto the 7-day calendar.

    Args:
        weekly_schedule: Exactly 7 validated entries, Monday first
        split_type: Split chosen by select_split_architecture()
        equipment: Equipment profile (home beginners get a gentler 5-day week)
        experience: Normalized experience level, None if unknown

    Returns:
        7 ScheduledSession entries in day order
    """
    if len(weekly_schedule) != DAYS_PER_WEEK:
        raise ValueError(f"weekly_schedule must have {DAYS_PER_WEEK} entries")

    queue = get_session_order(split_type)
    trainable = trainable_indices(weekly_schedule)

    if len(trainable) == 6:
        logger.debug("Applying 2-1-3-1 fatigue template for 6 available days")
        return _six_day_template(weekly_schedule, queue)

    if len(trainable) == 5 and is_consecutive(trainable):
        is_home = equipment is not None and equipment.is_home
        if is_home and experience is Experience.BEGINNER:
            logger.debug("Applying conservative 5-day home template")
            return _five_day_home_beginner_template(weekly_schedule, queue, trainable)
        logger.debug("Applying 5-day central low-load pivot template")
        return _five_day_pivot_template(weekly_schedule, queue, trainable)

    return _greedy_template(weekly_schedule, queue)
