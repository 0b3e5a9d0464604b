"""
Mesocycle planning pipeline.

Runs the decision modules in order and materializes the multi-week plan:

1. Objective: what this block trains for (objective.py)
2. Work capacity: systemic stress and weekly set target (work_capacity.py)
3. Split: architecture for the trainable days (split_selector.py)
4. Calendar: sessions placed on the 7-day week (scheduler.py)
5. Per week and day: RPE target (load_balancer.py), weekly modifiers
   (progression.py), content annotations (content.py)

The single-week calendar is computed once and repeated; only intensity
and volume change from week to week.
"""

import logging
from collections.abc import Sequence
from typing import Any

from rich.markup import escape

from .config import (
    ACTIVE_DELOAD_MAX_RPE,
    DEFAULT_MESOCYCLE_WEEKS,
    MAX_MESOCYCLE_WEEKS,
    MIN_MESOCYCLE_WEEKS,
)
from .content import generate_session_content
from .load_balancer import build_session_intensity, rpe_to_rir, set_session_intensity
from .models import (
    Experience,
    Goal,
    Mesocycle,
    Microcycle,
    MicrocycleProgression,
    NextCycleConfig,
    Objective,
    PlannedSession,
    PriorFeedback,
    ProfileData,
    ScheduledSession,
    SpecialPhase,
    WeeklyScheduleEntry,
)
from .normalization import (
    normalize_next_cycle_config,
    normalize_prior_feedback,
    normalize_profile,
    normalize_weekly_schedule,
)
from .objective import effective_goal, resolve_objective
from .progression import (
    apply_intensity_modifier,
    apply_volume_modifier,
    create_microcycle_progression,
)
from .scheduler import map_sessions_to_calendar, trainable_indices
from .split_selector import select_split_architecture, split_rationale
from .work_capacity import calculate_systemic_stress, determine_volume_tier

logger = logging.getLogger(__name__)


def _session_cap(scheduled: ScheduledSession, objective: Objective) -> float | None:
    """RPE ceiling for a day: the scheduler's cap, tightened during an active deload."""
    cap = scheduled.context.max_rpe
    if objective is SpecialPhase.ACTIVE_DELOAD:
        cap = ACTIVE_DELOAD_MAX_RPE if cap is None else min(cap, ACTIVE_DELOAD_MAX_RPE)
    return cap


def _plan_session(
    week_number: int,
    day_index: int,
    scheduled: ScheduledSession,
    entry: WeeklyScheduleEntry,
    progression: MicrocycleProgression,
    objective: Objective,
    goal: Goal,
    experience: Experience | None,
    user_declared_focus: str | None,
) -> PlannedSession:
    if scheduled.is_rest_day:
        return PlannedSession(week_number=week_number, day_index=day_index, scheduled=scheduled)

    base_rpe = set_session_intensity(experience, entry.external_load, scheduled.session_focus)
    week_rpe = apply_intensity_modifier(base_rpe, progression, _session_cap(scheduled, objective))
    intensity = build_session_intensity(week_rpe)
    return PlannedSession(
        week_number=week_number,
        day_index=day_index,
        scheduled=scheduled,
        base_rpe=base_rpe,
        intensity=intensity,
        target_rir=rpe_to_rir(intensity.target_rpe),
        content=generate_session_content(
            scheduled.session_focus, goal, experience, user_declared_focus
        ),
    )


def plan_mesocycle(
    profile: ProfileData | dict[str, Any],
    weekly_schedule: Sequence[WeeklyScheduleEntry | dict[str, Any]],
    prior_feedback: PriorFeedback | dict[str, Any] | None = None,
    next_cycle_config: NextCycleConfig | dict[str, Any] | None = None,
    weeks: int = DEFAULT_MESOCYCLE_WEEKS,
) -> Mesocycle:
    """
    Plan a mesocycle for a user.

    Args:
        profile: ProfileData or a raw profile mapping
        weekly_schedule: 7 entries, Monday first (objects or mappings)
        prior_feedback: Feedback on the previous block, None for a first cycle
        next_cycle_config: Output of evaluate_cycle() for the previous block
        weeks: Mesocycle length in weeks

    Returns:
        Mesocycle with one Microcycle of 7 PlannedSessions per week

    Raises:
        ScheduleValidationError: If weekly_schedule is not 7 entries
        ValueError: If weeks is outside the supported range
    """
    if not MIN_MESOCYCLE_WEEKS <= weeks <= MAX_MESOCYCLE_WEEKS:
        raise ValueError(
            f"weeks must be between {MIN_MESOCYCLE_WEEKS} and {MAX_MESOCYCLE_WEEKS}, got {weeks}"
        )

    profile_data = normalize_profile(profile)
    schedule = normalize_weekly_schedule(weekly_schedule)
    feedback = normalize_prior_feedback(prior_feedback)
    carry_over = normalize_next_cycle_config(next_cycle_config)

    experience = profile_data.experience_level
    equipment = profile_data.equipment_profile

    decision = resolve_objective(profile_data.fitness_goal, feedback, carry_over)
    goal = effective_goal(decision.objective)

    stress = calculate_systemic_stress(schedule)
    tier = determine_volume_tier(experience, stress, equipment)

    days = len(trainable_indices(schedule))
    split = select_split_architecture(days, experience, goal, equipment)
    calendar = map_sessions_to_calendar(schedule, split, equipment, experience)

    overload_factor = carry_over.overload_factor if carry_over is not None else 1.0

    logger.info(
        "Planning %d-week mesocycle: objective=%s split=%s tier=%d stress=%d",
        weeks, decision.objective.value, split.value, tier, stress,
    )

    microcycles: list[Microcycle] = []
    for week in range(1, weeks + 1):
        progression = create_microcycle_progression(week)
        sessions = tuple(
            _plan_session(
                week, i, scheduled, schedule[i], progression, decision.objective,
                goal, experience, profile_data.user_declared_focus,
            )
            for i, scheduled in enumerate(calendar)
        )
        microcycles.append(
            Microcycle(
                week_number=week,
                phase=progression.focus,
                notes=progression.notes,
                intensity_modifier=progression.intensity_modifier,
                volume_modifier=progression.volume_modifier,
                weekly_sets_per_muscle=apply_volume_modifier(tier, progression, overload_factor),
                sessions=sessions,
            )
        )

    return Mesocycle(
        objective=decision.objective,
        objective_reason=decision.reason,
        split_type=split,
        volume_tier=tier,
        systemic_stress=stress,
        overload_factor=overload_factor,
        microcycles=tuple(microcycles),
        split_reason=split_rationale(days, experience, goal, equipment),
    )


def explain_plan(mesocycle: Mesocycle) -> str:
    """
    Step-by-step Rich-markup explanation of how a mesocycle was derived.

    Pure formatter: every value comes from the Mesocycle itself.
    """
    rule = "─" * 54
    L: list[str] = []

    L.append(
        f"[bold cyan]{mesocycle.objective.value}"
        f"  ·  {mesocycle.split_type.value}"
        f"  ·  {mesocycle.duration_weeks} week(s)[/bold cyan]"
    )
    L.append(rule)

    L.append("\n[bold]OBJECTIVE[/bold]")
    L.append(f"  [magenta]{mesocycle.objective.value}[/magenta]: {mesocycle.objective_reason}.")

    L.append("\n[bold]WORK CAPACITY[/bold]")
    L.append(f"  Systemic stress from outside work: {mesocycle.systemic_stress}.")
    L.append(f"  Weekly sets per muscle group: [bold]{mesocycle.volume_tier}[/bold].")
    if mesocycle.overload_factor != 1.0:
        L.append(f"  Carry-over overload factor: ×{mesocycle.overload_factor:g}.")

    L.append(f"\n[bold]SPLIT: {mesocycle.split_type.value}[/bold]")
    L.append(f"  {mesocycle.training_days_per_week} training day(s) per week.")
    if mesocycle.split_reason:
        L.append(f"  {mesocycle.split_reason}.")

    if mesocycle.microcycles:
        L.append("\n[bold]WEEKLY TEMPLATE[/bold]")
        for session in mesocycle.microcycles[0].sessions:
            scheduled = session.scheduled
            line = f"  {escape(scheduled.day_of_week):<10} {escape(scheduled.session_focus)}"
            if scheduled.is_rest_day:
                line = f"[dim]{line}[/dim]"
            elif scheduled.context.adjustment_applied:
                line += f"  [yellow]({scheduled.context.adjustment_applied})[/yellow]"
            L.append(line)

    L.append("\n[bold]PROGRESSION[/bold]")
    for micro in mesocycle.microcycles:
        rpes = [s.intensity.target_rpe for s in micro.training_sessions if s.intensity]
        rpe_range = f"RPE {min(rpes):g}-{max(rpes):g}" if rpes else "no training"
        L.append(
            f"  Week {micro.week_number}: [cyan]{micro.phase}[/cyan]"
            f"  RPE {micro.intensity_modifier:+g}, volume ×{micro.volume_modifier:g}"
            f" → {micro.weekly_sets_per_muscle} sets, {rpe_range}"
        )

    return "\n".join(L)
