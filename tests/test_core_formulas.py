"""
Formula-focused unit tests for the planning modules.

Each class covers one decision table or formula.  Values are
hand-computed from the constants in core/config.py so the tests double
as a reference for the planning rules.
"""

import pytest

from mesocycle_planner.core.config import (
    ACTIVE_DELOAD_MAX_RPE,
    LOW_LOAD_MAX_RPE,
    LOW_LOAD_PIVOT_MAX_RPE,
    RPE_MAX,
    RPE_MIN,
    round_half_up,
)
from mesocycle_planner.core.content import (
    build_cardio_work,
    build_core_work,
    build_safe_specialization,
    classify_muscle_groups,
    generate_session_content,
)
from mesocycle_planner.core.evaluation import calculate_overload_adjustment, evaluate_cycle
from mesocycle_planner.core.focus import is_hard_session, is_heavy_axial, is_overload_candidate
from mesocycle_planner.core.load_balancer import (
    build_session_intensity,
    determine_session_structure_type,
    rpe_to_rir,
    set_session_intensity,
)
from mesocycle_planner.core.models import (
    EquipmentProfile,
    Experience,
    ExternalLoad,
    Goal,
    NextCycleConfig,
    PriorFeedback,
    ScheduleValidationError,
    SpecialPhase,
    SplitType,
    StructureCategory,
    StructureType,
    WeeklyScheduleEntry,
)
from mesocycle_planner.core.normalization import (
    normalize_equipment,
    normalize_experience,
    normalize_goal,
    normalize_next_cycle_config,
    normalize_prior_feedback,
    normalize_profile,
    normalize_weekly_schedule,
)
from mesocycle_planner.core.objective import (
    REASON_CONTINUE,
    REASON_FIRST_CYCLE,
    effective_goal,
    resolve_objective,
)
from mesocycle_planner.core.progression import (
    apply_intensity_modifier,
    apply_volume_modifier,
    create_microcycle_progression,
)
from mesocycle_planner.core.scheduler import (
    EXTRA_RECOVERY_FOCUS,
    NOTE_FORCED_REST,
    NOTE_UNAVAILABLE,
    map_sessions_to_calendar,
)
from mesocycle_planner.core.split_selector import (
    DEFAULT_SESSION_ORDER,
    get_session_order,
    select_split_architecture,
)
from mesocycle_planner.core.work_capacity import calculate_systemic_stress, determine_volume_tier

DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

HOME = EquipmentProfile(location="home")
HOME_BODYWEIGHT = EquipmentProfile(location="home", bodyweight_only=True)
HOME_BARBELL = EquipmentProfile(location="home", has_barbell=True)
GYM = EquipmentProfile(location="gym")

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _schedule(
    trainable: set[int],
    loads: dict[int, ExternalLoad] | None = None,
) -> list[WeeklyScheduleEntry]:
    """7-day schedule, Monday first, trainable on the given day indices."""
    loads = loads or {}
    return [
        WeeklyScheduleEntry(
            day=DAYS[i],
            can_train=i in trainable,
            external_load=loads.get(i, ExternalLoad.NONE),
        )
        for i in range(7)
    ]


def _foci(calendar) -> list[str]:
    return [s.session_focus for s in calendar]


# ===========================================================================
# config.py: round_half_up
# ===========================================================================

class TestRoundHalfUp:

    def test_half_rounds_up(self):
        # round(4.5) would give 4
        assert round_half_up(4.5) == 5

    def test_one_decimal(self):
        assert round_half_up(7.25, 1) == pytest.approx(7.3)

    def test_below_half_rounds_down(self):
        assert round_half_up(11.2) == 11


# ===========================================================================
# normalization.py
# ===========================================================================

class TestNormalization:
    """Free-form values map to the canonical enums once, at the boundary."""

    def test_spanish_goal_label(self):
        assert normalize_goal("Pérdida grasa") is Goal.FAT_LOSS
        assert normalize_goal("Fuerza") is Goal.STRENGTH

    def test_unknown_goal_falls_back_to_hypertrophy(self):
        assert normalize_goal("Rendimiento_Deportivo") is Goal.HYPERTROPHY
        assert normalize_goal(None) is Goal.HYPERTROPHY

    def test_unknown_experience_is_none(self):
        assert normalize_experience("Guru") is None
        assert normalize_experience("avanzado") is Experience.ADVANCED

    def test_equipment_home_alias(self):
        eq = normalize_equipment({"location": "Casa", "bodyweightOnly": True})
        assert eq.is_home_bodyweight

    def test_schedule_entries_camel_case_and_extreme_load(self):
        raw = [{"day": d, "canTrain": True, "externalLoad": "extreme"} for d in DAYS]
        schedule = normalize_weekly_schedule(raw)
        assert len(schedule) == 7
        assert schedule[0].can_train
        assert schedule[0].external_load is ExternalLoad.HIGH

    def test_missing_day_label_uses_position(self):
        schedule = normalize_weekly_schedule([{"can_train": False}] * 7)
        assert [e.day for e in schedule] == list(DAYS)

    def test_wrong_length_schedule_raises(self):
        with pytest.raises(ScheduleValidationError):
            normalize_weekly_schedule([{"can_train": True}] * 6)

    def test_non_list_schedule_raises(self):
        with pytest.raises(ScheduleValidationError):
            normalize_weekly_schedule("Monday")
        with pytest.raises(ScheduleValidationError):
            normalize_weekly_schedule(None)

    def test_schedule_error_is_value_error(self):
        assert issubclass(ScheduleValidationError, ValueError)

    def test_profile_days_clamped(self):
        profile = normalize_profile({"trainingDaysPerWeek": 12})
        assert profile.training_days_per_week == 7
        assert profile.experience_level is None
        assert profile.fitness_goal is Goal.HYPERTROPHY

    @pytest.mark.parametrize("days", ["nan", "inf", float("-inf")])
    def test_non_finite_days_use_default(self, days):
        assert normalize_profile({"training_days_per_week": days}).training_days_per_week == 3

    def test_non_finite_cycle_config_uses_defaults(self):
        config = normalize_next_cycle_config(
            {"overload_factor": float("inf"), "previous_adherence": "inf"}
        )
        assert config.overload_factor == 1.0
        assert config.previous_adherence == 0

    def test_nan_overload_factor_resets(self):
        assert normalize_next_cycle_config({"overloadFactor": "nan"}).overload_factor == 1.0

    def test_non_finite_feedback_scores_are_none(self):
        feedback = normalize_prior_feedback({"energy_level": "nan", "joint_pain": float("inf")})
        assert feedback.energy_level is None
        assert feedback.joint_pain is None


# ===========================================================================
# focus.py
# ===========================================================================

class TestFocusKeywords:

    def test_hard_sessions(self):
        assert is_hard_session("Legs (Strength)")
        assert is_hard_session("Back/Biceps")
        assert is_hard_session("Full Body (Strength)")
        assert not is_hard_session("Full Body (Hypertrophy)")
        assert not is_hard_session("Upper (Strength)")

    def test_overload_candidates(self):
        assert is_overload_candidate("Upper (Strength)")
        assert is_overload_candidate("Legs")
        assert not is_overload_candidate("Push")

    def test_heavy_axial(self):
        assert is_heavy_axial("Legs (Strength)")
        assert is_heavy_axial("Full Body (Strength)")
        assert not is_heavy_axial("Upper (Strength)")
        assert not is_heavy_axial("Legs (Hypertrophy)")


# ===========================================================================
# objective.py
# ===========================================================================

class TestResolveObjective:
    """First matching rule wins: first cycle, plateau, overreach, rehab, continue."""

    def test_first_cycle_keeps_goal(self):
        decision = resolve_objective(Goal.ENDURANCE)
        assert decision.objective is Goal.ENDURANCE
        assert decision.reason == REASON_FIRST_CYCLE

    def test_first_cycle_ignores_rehab_suggestion(self):
        decision = resolve_objective(
            Goal.HYPERTROPHY, None, NextCycleConfig(focus_suggestion="Rehab/Prehab")
        )
        assert decision.objective is Goal.HYPERTROPHY

    def test_plateau_sensation_switches_to_strength(self):
        decision = resolve_objective(Goal.HYPERTROPHY, PriorFeedback(sensation="Estancado"))
        assert decision.objective is Goal.STRENGTH

    def test_low_energy_switches_to_strength(self):
        assert resolve_objective(Goal.FAT_LOSS, PriorFeedback(energy_level=2)).objective is Goal.STRENGTH

    def test_energy_three_is_not_a_plateau(self):
        decision = resolve_objective(Goal.FAT_LOSS, PriorFeedback(energy_level=3))
        assert decision.objective is Goal.FAT_LOSS
        assert decision.reason == REASON_CONTINUE

    def test_high_soreness_forces_active_deload(self):
        decision = resolve_objective(Goal.HYPERTROPHY, PriorFeedback(soreness_level=8))
        assert decision.objective is SpecialPhase.ACTIVE_DELOAD

    def test_high_joint_pain_forces_active_deload(self):
        decision = resolve_objective(Goal.STRENGTH, PriorFeedback(joint_pain=9))
        assert decision.objective is SpecialPhase.ACTIVE_DELOAD

    def test_threshold_is_exclusive(self):
        decision = resolve_objective(Goal.STRENGTH, PriorFeedback(soreness_level=7, joint_pain=7))
        assert decision.objective is Goal.STRENGTH

    def test_plateau_beats_overreach(self):
        feedback = PriorFeedback(sensation="Estancado", soreness_level=9)
        assert resolve_objective(Goal.HYPERTROPHY, feedback).objective is Goal.STRENGTH

    def test_rehab_suggestion_gives_general_health(self):
        decision = resolve_objective(
            Goal.STRENGTH,
            PriorFeedback(sensation="Good", energy_level=7),
            NextCycleConfig(focus_suggestion="Rehab/Prehab"),
        )
        assert decision.objective is Goal.GENERAL_HEALTH

    def test_string_goal_is_normalized(self):
        assert resolve_objective("fuerza").objective is Goal.STRENGTH

    def test_effective_goal_of_deload(self):
        assert effective_goal(SpecialPhase.ACTIVE_DELOAD) is Goal.GENERAL_HEALTH
        assert effective_goal(Goal.ENDURANCE) is Goal.ENDURANCE


# ===========================================================================
# work_capacity.py
# ===========================================================================

class TestSystemicStress:
    """Sum of per-day scores: none=0, low=1, medium=2, high=3."""

    def test_mixed_week(self):
        loads = {0: ExternalLoad.LOW, 1: ExternalLoad.MEDIUM, 2: ExternalLoad.HIGH}
        assert calculate_systemic_stress(_schedule(set(), loads)) == 6

    def test_four_heavy_days(self):
        loads = {i: ExternalLoad.HIGH for i in range(4)}
        assert calculate_systemic_stress(_schedule(set(), loads)) == 12

    def test_non_sequence_scores_zero(self):
        assert calculate_systemic_stress(None) == 0
        assert calculate_systemic_stress("high") == 0

    def test_tuple_accepted(self):
        loads = {0: ExternalLoad.HIGH}
        assert calculate_systemic_stress(tuple(_schedule(set(), loads))) == 3

    def test_raw_mappings_are_normalized(self):
        week = [
            {"day": "Monday", "canTrain": False, "externalLoad": "high"},
            {"external_load": "medium"},
            {"external_load": "extreme"},
            "not a day",
        ]
        assert calculate_systemic_stress(week) == 8


class TestVolumeTier:
    """base(level) × equipment factor, × 0.8 when stress > 12."""

    def test_base_by_level(self):
        assert determine_volume_tier(Experience.BEGINNER, 0) == 10
        assert determine_volume_tier(Experience.INTERMEDIATE, 0) == 14
        assert determine_volume_tier(Experience.ADVANCED, 0) == 18

    def test_unknown_level_uses_intermediate_base(self):
        assert determine_volume_tier(None, 0) == 14

    def test_stress_above_threshold_cuts_volume(self):
        # int(18 × 0.8) = int(14.4) = 14
        assert determine_volume_tier(Experience.ADVANCED, 13, None) == 14

    def test_stress_at_threshold_keeps_volume(self):
        assert determine_volume_tier(Experience.ADVANCED, 12, None) == 18

    def test_home_bodyweight_beginner(self):
        # 10 × 0.90 = 9, floor 6
        assert determine_volume_tier(Experience.BEGINNER, 0, HOME_BODYWEIGHT) == 9

    def test_home_without_tools(self):
        # 14 × 0.95 = 13.3 → 13
        assert determine_volume_tier(Experience.INTERMEDIATE, 0, HOME) == 13

    def test_home_with_barbell_unchanged(self):
        assert determine_volume_tier(Experience.INTERMEDIATE, 0, HOME_BARBELL) == 14

    def test_gym_unchanged(self):
        assert determine_volume_tier(Experience.INTERMEDIATE, 0, GYM) == 14


# ===========================================================================
# split_selector.py
# ===========================================================================

class TestSelectSplit:
    """Decision table rows, evaluated top to bottom."""

    @pytest.mark.parametrize("days", [-3, 0, 1, 2])
    def test_low_day_counts_are_full_body(self, days):
        assert select_split_architecture(days, Experience.ADVANCED, Goal.STRENGTH) is SplitType.FULL_BODY

    def test_three_days_home(self):
        split = select_split_architecture(3, Experience.ADVANCED, Goal.HYPERTROPHY, HOME)
        assert split is SplitType.FULL_BODY

    def test_three_days_beginner(self):
        assert select_split_architecture(3, Experience.BEGINNER, Goal.STRENGTH) is SplitType.FULL_BODY

    def test_three_days_endurance(self):
        assert select_split_architecture(3, Experience.ADVANCED, Goal.ENDURANCE) is SplitType.FULL_BODY

    def test_three_days_default(self):
        split = select_split_architecture(3, Experience.INTERMEDIATE, Goal.HYPERTROPHY, GYM)
        assert split is SplitType.UPPER_LOWER_FULL

    def test_four_days_home_bodyweight(self):
        split = select_split_architecture(4, Experience.BEGINNER, Goal.HYPERTROPHY, HOME_BODYWEIGHT)
        assert split is SplitType.TORSO_LIMBS

    def test_four_days_bodyweight_beats_strength(self):
        split = select_split_architecture(4, Experience.ADVANCED, Goal.STRENGTH, HOME_BODYWEIGHT)
        assert split is SplitType.TORSO_LIMBS

    def test_four_days_strength(self):
        assert select_split_architecture(4, Experience.BEGINNER, Goal.STRENGTH) is SplitType.UPPER_LOWER

    def test_four_days_beginner(self):
        assert select_split_architecture(4, Experience.BEGINNER, Goal.HYPERTROPHY) is SplitType.TORSO_LIMBS

    def test_four_days_default(self):
        assert select_split_architecture(4, None, Goal.HYPERTROPHY) is SplitType.UPPER_LOWER

    def test_five_days_home(self):
        split = select_split_architecture(5, Experience.ADVANCED, Goal.HYPERTROPHY, HOME)
        assert split is SplitType.FULL_BODY

    def test_five_days_advanced(self):
        assert select_split_architecture(5, Experience.ADVANCED, Goal.HYPERTROPHY) is SplitType.BODY_PART

    def test_five_days_default(self):
        split = select_split_architecture(5, Experience.INTERMEDIATE, Goal.HYPERTROPHY)
        assert split is SplitType.HYBRID_PHUL

    def test_six_days_even_bodyweight(self):
        split = select_split_architecture(6, Experience.BEGINNER, Goal.HYPERTROPHY, HOME_BODYWEIGHT)
        assert split is SplitType.PPL

    @pytest.mark.parametrize("days", [7, 9])
    def test_seven_or_more(self, days):
        split = select_split_architecture(days, Experience.ADVANCED, Goal.STRENGTH, None)
        assert split is SplitType.PPL_ACTIVE_REST

    def test_every_split_has_a_session_order(self):
        for split in SplitType:
            assert len(get_session_order(split)) >= 3

    def test_unknown_split_gets_default_order(self):
        assert get_session_order(None) == DEFAULT_SESSION_ORDER


# ===========================================================================
# scheduler.py
# ===========================================================================

class TestMapSessionsToCalendar:
    """Three templates: 6-day 2-1-3-1, 5-day pivot, greedy with fatigue swap."""

    def test_six_day_forced_rests(self):
        calendar = map_sessions_to_calendar(_schedule({0, 1, 2, 3, 4, 5}), SplitType.PPL)
        assert _foci(calendar)[:2] == ["Push", "Pull"]
        assert calendar[2].is_rest_day and calendar[2].context.note == NOTE_FORCED_REST
        assert _foci(calendar)[3:6] == ["Legs", "Push", "Pull"]
        assert calendar[6].is_rest_day

    def test_six_day_rest_indices_fixed_when_wednesday_unavailable(self):
        calendar = map_sessions_to_calendar(_schedule({0, 1, 3, 4, 5, 6}), SplitType.PPL)
        assert [i for i, s in enumerate(calendar) if s.is_rest_day] == [2, 6]
        assert len([s for s in calendar if not s.is_rest_day]) == 5

    def test_five_consecutive_days_get_central_pivot(self):
        calendar = map_sessions_to_calendar(_schedule({0, 1, 2, 3, 4}), SplitType.HYBRID_PHUL)
        pivot = calendar[2]
        assert pivot.structure_type is StructureType.LOW_LOAD_PIVOT
        assert pivot.context.max_rpe == LOW_LOAD_PIVOT_MAX_RPE
        assert pivot.context.exclude_axial
        assert _foci(calendar)[:2] == ["Upper (Strength)", "Legs (Strength)"]
        assert _foci(calendar)[3:5] == ["Push (Hypertrophy)", "Pull (Hypertrophy)"]
        assert calendar[5].context.note == NOTE_UNAVAILABLE

    def test_pivot_is_middle_of_shifted_block(self):
        calendar = map_sessions_to_calendar(_schedule({2, 3, 4, 5, 6}), SplitType.HYBRID_PHUL)
        assert calendar[4].structure_type is StructureType.LOW_LOAD_PIVOT

    def test_five_day_home_beginner_template(self):
        calendar = map_sessions_to_calendar(
            _schedule({0, 1, 2, 3, 4}), SplitType.FULL_BODY, HOME, Experience.BEGINNER
        )
        types = [s.structure_type for s in calendar[:5]]
        assert types == [
            StructureType.NORMAL,
            StructureType.LOW_LOAD,
            StructureType.LOW_LOAD_PIVOT,
            StructureType.LOW_LOAD,
            StructureType.NORMAL,
        ]
        assert calendar[1].context.max_rpe == LOW_LOAD_MAX_RPE
        assert _foci(calendar)[0] == "Full Body (Strength)"
        assert _foci(calendar)[4] == "Full Body (Hypertrophy)"

    def test_five_scattered_days_use_queue_order(self):
        calendar = map_sessions_to_calendar(_schedule({0, 1, 3, 4, 6}), SplitType.HYBRID_PHUL)
        training = [s.session_focus for s in calendar if not s.is_rest_day]
        assert training == list(get_session_order(SplitType.HYBRID_PHUL))

    def test_fatigue_swap_on_high_load_day(self):
        loads = {1: ExternalLoad.HIGH}
        calendar = map_sessions_to_calendar(_schedule({0, 1, 3, 4}, loads), SplitType.UPPER_LOWER)
        assert _foci(calendar)[0] == "Upper (Strength)"
        assert calendar[1].session_focus == "Upper (Hypertrophy)"
        assert calendar[1].context.adjustment_applied == "Fatigue Management Swap"
        # The skipped hard session is trained later, not dropped
        assert calendar[3].session_focus == "Legs (Strength)"
        assert calendar[4].session_focus == "Legs (Hypertrophy)"
        assert calendar[4].context.adjustment_applied is None

    def test_no_swap_when_next_session_is_not_hard(self):
        loads = {1: ExternalLoad.HIGH}
        calendar = map_sessions_to_calendar(_schedule({0, 1}, loads), SplitType.PPL)
        assert _foci(calendar)[:2] == ["Push", "Pull"]
        assert calendar[1].context.adjustment_applied is None

    def test_no_swap_when_only_hard_sessions_remain(self):
        # Sunday is heavy but "Legs (Hypertrophy)" is the only session left
        loads = {6: ExternalLoad.HIGH}
        calendar = map_sessions_to_calendar(_schedule({0, 2, 4, 6}, loads), SplitType.UPPER_LOWER)
        assert calendar[6].session_focus == "Legs (Hypertrophy)"
        assert calendar[6].context.adjustment_applied is None

    def test_medium_load_does_not_swap(self):
        loads = {1: ExternalLoad.MEDIUM}
        calendar = map_sessions_to_calendar(_schedule({0, 1, 3, 4}, loads), SplitType.UPPER_LOWER)
        assert calendar[1].session_focus == "Legs (Strength)"

    def test_exhausted_queue_adds_recovery_placeholder(self):
        calendar = map_sessions_to_calendar(_schedule({0, 2, 4, 6}), SplitType.FULL_BODY)
        assert calendar[6].session_focus == EXTRA_RECOVERY_FOCUS
        assert calendar[6].is_rest_day

    def test_seven_days_ppl_active_rest(self):
        calendar = map_sessions_to_calendar(_schedule(set(range(7))), SplitType.PPL_ACTIVE_REST)
        assert _foci(calendar) == list(get_session_order(SplitType.PPL_ACTIVE_REST))

    def test_calendar_always_has_seven_days(self):
        for trainable in ({0}, {0, 2, 4}, {0, 1, 2, 3, 4}, set(range(6)), set(range(7))):
            for split in SplitType:
                calendar = map_sessions_to_calendar(_schedule(trainable), split)
                assert len(calendar) == 7
                for entry in calendar:
                    assert entry.is_rest_day == (entry.structure_type is StructureType.REST)

    def test_wrong_length_raises(self):
        with pytest.raises(ValueError):
            map_sessions_to_calendar(_schedule({0})[:6], SplitType.FULL_BODY)


# ===========================================================================
# load_balancer.py
# ===========================================================================

class TestSessionIntensity:
    """base(level) − load penalty, or +0.5 for a rested heavy-pattern day."""

    def test_rested_leg_day_gets_bonus(self):
        assert set_session_intensity(Experience.INTERMEDIATE, ExternalLoad.NONE, "Legs (Strength)") == 8.5

    def test_bonus_capped_at_nine_and_a_half(self):
        assert set_session_intensity(Experience.ADVANCED, ExternalLoad.NONE, "Legs") == 9.5

    def test_high_load_penalty(self):
        assert set_session_intensity(Experience.INTERMEDIATE, ExternalLoad.HIGH, "Legs") == 6.5

    def test_medium_load_penalty(self):
        assert set_session_intensity(Experience.INTERMEDIATE, ExternalLoad.MEDIUM, "Push") == 7.5

    def test_low_load_counts_as_rested(self):
        assert set_session_intensity(Experience.BEGINNER, ExternalLoad.LOW, "Legs") == 7.5
        assert set_session_intensity(Experience.BEGINNER, ExternalLoad.LOW, "Push") == 7.0

    def test_unknown_level(self):
        assert set_session_intensity(None, ExternalLoad.NONE, "Push") == 7.5

    def test_always_within_bounds(self):
        for level in (*Experience, None):
            for load in ExternalLoad:
                for focus in ("Legs (Strength)", "Push", "Back/Biceps", None):
                    rpe = set_session_intensity(level, load, focus)
                    assert RPE_MIN <= rpe <= RPE_MAX

    def test_structure_categories(self):
        assert determine_session_structure_type(8.5) is StructureCategory.NEURAL_STRENGTH
        assert determine_session_structure_type(7.0) is StructureCategory.HYPERTROPHY_STANDARD
        assert determine_session_structure_type(6.9) is StructureCategory.METABOLIC_VOLUME

    def test_build_session_intensity_clamps(self):
        intensity = build_session_intensity(11.0)
        assert intensity.target_rpe == RPE_MAX
        assert intensity.structure_category is StructureCategory.NEURAL_STRENGTH

    def test_rpe_to_rir(self):
        assert rpe_to_rir(8.0) == 2.0
        assert rpe_to_rir(10.0) == 0.0


# ===========================================================================
# progression.py
# ===========================================================================

class TestMicrocycleProgression:
    """Adaptation → accumulation → intensification → deload."""

    def test_deload_week(self):
        week4 = create_microcycle_progression(4)
        assert week4.focus == "Deload"
        assert week4.intensity_modifier == -2.0
        assert week4.volume_modifier == 0.5

    def test_week_modifiers(self):
        mods = [
            (create_microcycle_progression(w).intensity_modifier,
             create_microcycle_progression(w).volume_modifier)
            for w in (1, 2, 3)
        ]
        assert mods == [(-1.0, 0.8), (0.0, 1.0), (1.0, 0.9)]

    @pytest.mark.parametrize("week", [0, 5, 12])
    def test_outside_block_is_maintenance(self, week):
        progression = create_microcycle_progression(week)
        assert progression.focus == "Maintenance"
        assert progression.intensity_modifier == 0.0
        assert progression.volume_modifier == 1.0

    def test_intensity_modifier_clamped(self):
        assert apply_intensity_modifier(9.5, create_microcycle_progression(3)) == RPE_MAX
        assert apply_intensity_modifier(5.5, create_microcycle_progression(4)) == RPE_MIN

    def test_intensity_cap(self):
        week2 = create_microcycle_progression(2)
        assert apply_intensity_modifier(8.0, week2, max_rpe=6.0) == 6.0
        assert apply_intensity_modifier(8.0, week2, max_rpe=ACTIVE_DELOAD_MAX_RPE) == 7.0

    def test_volume_rounds_half_up(self):
        # 9 × 0.5 = 4.5 → 5
        assert apply_volume_modifier(9, create_microcycle_progression(4)) == 5

    def test_volume_with_overload_factor(self):
        # 14 × 1.0 × 1.05 = 14.7 → 15
        assert apply_volume_modifier(14, create_microcycle_progression(2), 1.05) == 15

    def test_volume_never_below_one(self):
        assert apply_volume_modifier(1, create_microcycle_progression(4), 0.9) == 1


# ===========================================================================
# content.py
# ===========================================================================

class TestSessionContent:

    @pytest.mark.parametrize(
        "focus, pattern",
        [
            ("Push (Hypertrophy)", "Push"),
            ("Pull", "Pull"),
            ("Torso (Pump)", "Upper Body"),
            ("Legs (Quads)", "Lower Body"),
            ("Legs/Arms", "Lower Body"),
            ("Full Body (Metabolic)", "Full Body"),
            ("Chest/Triceps", "Isolation"),
            ("Back/Biceps", "Isolation"),
            ("Shoulders/Abs", "Isolation"),
            ("Active Recovery", "General"),
        ],
    )
    def test_pattern_classification(self, focus, pattern):
        assert classify_muscle_groups(focus)[1] == pattern

    def test_push_muscles(self):
        muscles, _ = classify_muscle_groups("Push")
        assert "Chest" in muscles and "Triceps" in muscles

    def test_general_has_no_muscles(self):
        assert classify_muscle_groups(None) == (frozenset(), "General")

    def test_core_after_heavy_axial(self):
        for focus in ("Legs (Strength)", "Full Body (Strength)"):
            core = build_core_work(focus)
            assert core.timing == "End"
            assert core.focus == "Anti-Movement"

    def test_core_session_is_main_block(self):
        core = build_core_work("Shoulders/Abs")
        assert (core.timing, core.focus) == ("Main", "Comprehensive")

    def test_default_core(self):
        core = build_core_work("Upper (Strength)")
        assert (core.timing, core.focus) == ("End", "Dynamic")

    def test_cardio_for_fat_loss(self):
        liss = build_cardio_work("Legs", Goal.FAT_LOSS)
        assert (liss.included, liss.type, liss.duration_minutes) == (True, "LISS", 20)
        hiit = build_cardio_work("Push", Goal.GENERAL_HEALTH)
        assert (hiit.type, hiit.duration_minutes) == ("HIIT_Optional", 15)

    def test_no_cardio_for_hypertrophy(self):
        cardio = build_cardio_work("Legs", Goal.HYPERTROPHY)
        assert not cardio.included
        assert cardio.type == "None"
        assert cardio.duration_minutes == 0

    def test_beginner_specialization(self):
        guard = build_safe_specialization("Push", Experience.BEGINNER, "Chest")
        assert guard.cap_extra_volume_pct == 0.10
        assert guard.enforce_priority_start
        assert guard.allowed_extra_isolations == 0
        assert guard.is_user_focus_session

    def test_advanced_specialization(self):
        guard = build_safe_specialization("Push", Experience.ADVANCED, "Chest")
        assert guard.cap_extra_volume_pct is None
        assert not guard.enforce_priority_start
        assert guard.allow_intensity_techniques
        assert guard.allowed_extra_isolations == 3

    def test_unknown_level_gets_intermediate_rules(self):
        guard = build_safe_specialization("Push", None, "Chest")
        assert guard.level is Experience.INTERMEDIATE
        assert guard.cap_extra_volume_pct == 0.20
        assert guard.require_48h_rest_for_focus
        assert guard.allowed_extra_isolations == 2

    def test_focus_session_needs_declared_focus_and_upper_pattern(self):
        assert not build_safe_specialization("Push", Experience.BEGINNER, None).is_user_focus_session
        assert not build_safe_specialization("Push", Experience.BEGINNER, "   ").is_user_focus_session
        assert not build_safe_specialization("Legs", Experience.BEGINNER, "Chest").is_user_focus_session

    def test_generate_session_content(self):
        content = generate_session_content("Legs (Strength)", Goal.FAT_LOSS, Experience.ADVANCED, "Back")
        assert content.pattern_focus == "Lower Body"
        assert content.core.focus == "Anti-Movement"
        assert content.cardio.type == "LISS"
        assert content.safe_specialization.level is Experience.ADVANCED


# ===========================================================================
# evaluation.py
# ===========================================================================

class TestCycleEvaluation:
    """Thresholds around target RPE 7.5: −1.5 / −0.5 / +1.5."""

    def test_no_rpes_maintains(self):
        adj = calculate_overload_adjustment([])
        assert (adj.action, adj.factor, adj.avg_rpe) == ("maintain", 1.0, 0.0)

    def test_very_low_rpe(self):
        # avg 5.5 ≤ 6.0
        adj = calculate_overload_adjustment([5, 6])
        assert (adj.action, adj.factor) == ("increase_aggressive", 1.15)

    def test_low_rpe(self):
        # avg 6.75 ≤ 7.0
        adj = calculate_overload_adjustment([7, 6.5])
        assert (adj.action, adj.factor) == ("increase_moderate", 1.05)

    def test_high_rpe(self):
        adj = calculate_overload_adjustment([9, 9])
        assert (adj.action, adj.factor) == ("decrease", 0.90)

    def test_on_target(self):
        assert calculate_overload_adjustment([7.5, 8]).action == "maintain"

    def test_invalid_entries_ignored(self):
        adj = calculate_overload_adjustment([0, -1, "x", None, True, 9, 9])
        assert adj.avg_rpe == 9.0

    def test_non_finite_rpes_ignored(self):
        adj = calculate_overload_adjustment([float("inf"), float("nan"), 8])
        assert adj.avg_rpe == 8.0
        assert adj.action == "maintain"

    def test_easy_cycle_boosts_factor(self):
        config = evaluate_cycle([5, 6], difficulty_score=1)
        assert config.overload_factor == pytest.approx(1.15 * 1.10)

    def test_hard_cycle_reduces_factor(self):
        config = evaluate_cycle([9, 9], difficulty_score=5)
        assert config.overload_factor == pytest.approx(0.90 * 0.85)

    def test_pain_suggests_rehab(self):
        assert evaluate_cycle([8], pain_areas=["knee"]).focus_suggestion == "Rehab/Prehab"
        assert evaluate_cycle([8]).focus_suggestion == "Progressive Overload"

    def test_adherence_counts_sessions(self):
        assert evaluate_cycle([7, 8, 7.5]).previous_adherence == 3
