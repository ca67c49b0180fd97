"""Tests for the workout tagged union and stored document shape."""

import datetime as dt

import pytest
from pydantic import ValidationError

from program_builder.workouts.types import (
    AmrapWorkout,
    CompromisedRunWorkout,
    RecoveryWorkout,
    RunningSegment,
    StrengthExercise,
    TrainingProgram,
    WorkoutResult,
    parse_workout,
)


class TestParseWorkout:
    """Tests for parsing stored workout documents."""

    def test_running_document_with_camel_case_keys(self):
        workout = parse_workout(
            {
                "id": "w1",
                "name": "Intervals",
                "type": "running",
                "week": 2,
                "day": 3,
                "runningSegments": [{"type": "running", "distance": 1, "time": 4, "pace": 4}],
            }
        )
        assert workout.type == "running"
        assert workout.running_segments[0].pace == 4

    def test_amrap_document(self):
        workout = parse_workout(
            {"type": "amrap", "timeLimit": 20, "exercises": [{"name": "Burpees", "reps": 10}]}
        )
        assert isinstance(workout, AmrapWorkout)
        assert workout.time_limit == 20

    def test_compromised_run_uses_segment_tags(self):
        workout = parse_workout(
            {
                "type": "compromised-run",
                "segments": [
                    {"type": "running", "distance": 1, "time": 5, "pace": 5},
                    {"type": "strength", "name": "Sled push", "weight": 50, "reps": 1, "sets": 4},
                ],
            }
        )
        assert isinstance(workout, CompromisedRunWorkout)
        assert isinstance(workout.segments[0], RunningSegment)
        assert isinstance(workout.segments[1], StrengthExercise)
        assert workout.segments[1].rest_time == 60

    def test_untagged_compromised_segment_is_rejected(self):
        with pytest.raises(ValidationError):
            parse_workout({"type": "compromised-run", "segments": [{"distance": 1, "time": 5, "pace": 5}]})

    def test_unknown_type_is_rejected(self):
        with pytest.raises(ValidationError):
            parse_workout({"type": "crossfit", "exercises": []})

    def test_timestamp_date_reduces_to_calendar_day(self):
        workout = parse_workout(
            {
                "type": "recovery",
                "date": "2024-03-14T00:00:00.000Z",
                "duration": 30,
                "activityType": "Mobility",
            }
        )
        assert workout.date == dt.date(2024, 3, 14)


class TestDocuments:
    """Tests for the stored document shape."""

    def test_to_document_uses_camel_case(self, running_workout, strength_workout):
        running = running_workout.to_document()
        assert "runningSegments" in running
        assert running["runningSegments"][0]["type"] == "running"
        assert "restTime" in strength_workout.to_document()["exercises"][0]

    def test_program_document_round_trips(self, program):
        restored = TrainingProgram.model_validate(program.to_document())
        assert restored.to_document() == program.to_document()
        assert program.to_document()["startDate"] == "2024-03-01"

    def test_result_keeps_snake_case_workout_id(self):
        result = WorkoutResult(workout_id="w1", date="2024-03-13", status="complete")
        assert result.to_document() == {"workout_id": "w1", "date": "2024-03-13", "status": "complete"}

    def test_result_status_is_closed(self):
        with pytest.raises(ValidationError):
            WorkoutResult(workout_id="w1", date="2024-03-13", status="skipped")


class TestDisplayName:
    """Tests for workout display names."""

    def test_uses_name(self, strength_workout):
        assert strength_workout.display_name == "Lower body"

    def test_blank_name_falls_back_to_type(self):
        workout = RecoveryWorkout(name="  ", duration=20, activity_type="Walk")
        assert workout.display_name == "recovery Workout"
