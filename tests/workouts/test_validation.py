"""Tests for pre-submit workout and program validation."""

import pytest

from program_builder.workouts.errors import WorkoutValidationError
from program_builder.workouts.types import (
    AmrapWorkout,
    CompromisedRunWorkout,
    EmomWorkout,
    Exercise,
    RecoveryWorkout,
    RunningSegment,
    RunningWorkout,
    StrengthExercise,
    StrengthWorkout,
    TrainingProgram,
)
from program_builder.workouts.validation import validate_program, validate_workout, workout_problems


class TestWorkoutProblems:
    """Tests for per-workout validation problems."""

    def test_valid_workouts_have_no_problems(self, strength_workout, running_workout, compromised_workout):
        for workout in (strength_workout, running_workout, compromised_workout):
            assert workout_problems(workout) == []

    def test_empty_strength_workout(self):
        assert workout_problems(StrengthWorkout()) == ["At least one exercise is required"]

    def test_bodyweight_exercise_is_allowed(self):
        workout = StrengthWorkout(exercises=[StrengthExercise(name="Pull-up", weight=0, reps=8, sets=3)])
        assert workout_problems(workout) == []

    def test_non_positive_strength_values(self):
        workout = StrengthWorkout(exercises=[StrengthExercise(name="Squat", weight=-5, reps=0, sets=3)])
        assert workout_problems(workout) == [
            "Exercise 1: weight cannot be negative",
            "Exercise 1: reps must be greater than 0",
        ]

    def test_running_segment_values_must_be_positive(self):
        workout = RunningWorkout(running_segments=[RunningSegment(distance=5, time=0, pace=-1)])
        assert workout_problems(workout) == [
            "Running segment 1: time must be greater than 0",
            "Running segment 1: pace must be greater than 0",
        ]

    def test_compromised_run_checks_each_segment_kind(self):
        workout = CompromisedRunWorkout(
            segments=[
                RunningSegment(distance=0, time=5, pace=5),
                StrengthExercise(name="", weight=20, reps=10, sets=1),
            ]
        )
        assert workout_problems(workout) == [
            "Segment 1: distance must be greater than 0",
            "Segment 2: name is required",
        ]

    def test_amrap_needs_time_limit_and_exercises(self):
        assert workout_problems(AmrapWorkout(time_limit=0)) == [
            "Time limit must be greater than 0",
            "At least one exercise is required",
        ]

    def test_emom_checks_both_durations(self):
        workout = EmomWorkout(round_time=60, total_time=0, exercises=[Exercise(name="Thrusters", reps=8)])
        assert workout_problems(workout) == ["Total time must be greater than 0"]

    def test_recovery_needs_activity(self):
        assert workout_problems(RecoveryWorkout(duration=30, activity_type=" ")) == ["Activity type is required"]

    @pytest.mark.parametrize(("week", "day"), [(0, 1), (1, 0), (1, 8)])
    def test_week_and_day_bounds(self, week, day):
        workout = RecoveryWorkout(duration=30, activity_type="Walk", week=week, day=day)
        assert len(workout_problems(workout)) == 1


class TestValidateWorkout:
    """Tests for the workout validation entry point."""

    def test_raises_with_all_problems(self):
        with pytest.raises(WorkoutValidationError) as exc_info:
            validate_workout(AmrapWorkout(time_limit=-1))
        assert exc_info.value.code == "INVALID_WORKOUT"
        assert len(exc_info.value.details) == 2
        assert exc_info.value.message == "Time limit must be greater than 0; At least one exercise is required"

    def test_valid_workout_passes(self, running_workout):
        validate_workout(running_workout)


class TestValidateProgram:
    """Tests for program-level validation."""

    def test_requires_name_and_anchor(self):
        with pytest.raises(WorkoutValidationError) as exc_info:
            validate_program(TrainingProgram(name=" "))
        assert exc_info.value.code == "INVALID_PROGRAM"
        assert exc_info.value.details == ["Program name is required", "Event date or start date is required"]

    def test_event_date_alone_is_enough(self):
        validate_program(TrainingProgram(name="Race", event_date="2024-06-01"))

    def test_workout_problems_are_prefixed(self):
        program = TrainingProgram(name="Block", start_date="2024-03-01", workouts=[StrengthWorkout(name="Push")])
        with pytest.raises(WorkoutValidationError) as exc_info:
            validate_program(program)
        assert exc_info.value.details == ["Push: At least one exercise is required"]
