"""Tests for placing workouts on calendar days."""

import datetime as dt

import pytest

from program_builder.calendar.bucketing import (
    day_status,
    is_event_date,
    month_grid,
    program_anchor,
    week_day_for_date,
    workouts_for_date,
)
from program_builder.workouts.types import RecoveryWorkout, TrainingProgram, WorkoutResult


def _recovery(workout_id: str, **kwargs) -> RecoveryWorkout:
    return RecoveryWorkout(id=workout_id, duration=30, activity_type="Walk", **kwargs)


class TestWeekDayForDate:
    """Tests for mapping calendar dates to program week and day."""

    @pytest.mark.parametrize(
        ("date", "expected"),
        [
            (dt.date(2024, 3, 1), (1, 5)),
            (dt.date(2024, 3, 7), (1, 4)),
            (dt.date(2024, 3, 8), (2, 5)),
            (dt.date(2024, 3, 13), (2, 3)),
            (dt.date(2024, 2, 23), (2, 5)),
        ],
    )
    def test_week_and_iso_weekday(self, date, expected):
        assert week_day_for_date(dt.date(2024, 3, 1), date) == expected


class TestProgramAnchor:
    """Tests for the date week 1 is counted from."""

    def test_start_date_wins(self, program):
        assert program_anchor(program) == dt.date(2024, 3, 1)

    def test_falls_back_to_event_date(self):
        program = TrainingProgram(name="Race", event_date=dt.date(2024, 6, 1))
        assert program_anchor(program) == dt.date(2024, 6, 1)


class TestWorkoutsForDate:
    """Tests for which workouts land on a calendar day."""

    def test_explicit_date_beats_week_day(self):
        program = TrainingProgram(
            name="Block",
            start_date=dt.date(2024, 3, 1),
            workouts=[
                _recovery("undated", week=2, day=3),
                _recovery("dated", week=2, day=3, date=dt.date(2024, 3, 14)),
            ],
        )

        assert [w.id for w in workouts_for_date(program, dt.date(2024, 3, 13))] == ["undated"]
        assert [w.id for w in workouts_for_date(program, dt.date(2024, 3, 14))] == ["dated"]
        assert workouts_for_date(program, dt.date(2024, 3, 6)) == []

    def test_no_anchor_places_only_dated_workouts(self):
        program = TrainingProgram(
            name="Loose",
            workouts=[_recovery("undated"), _recovery("dated", date=dt.date(2024, 3, 4))],
        )
        assert [w.id for w in workouts_for_date(program, dt.date(2024, 3, 4))] == ["dated"]

    def test_extra_workouts_match_by_date_only(self, program):
        extras = [
            _recovery("other-dated", date=dt.date(2024, 3, 13)),
            _recovery("other-undated", week=2, day=3),
        ]
        found = workouts_for_date(program, dt.date(2024, 3, 13), extras)
        assert [w.id for w in found] == ["running-1", "other-dated"]

    def test_duplicate_ids_collapse(self, program, running_workout):
        copy = running_workout.model_copy(update={"date": dt.date(2024, 3, 13), "name": "Tempo (copy)"})
        found = workouts_for_date(program, dt.date(2024, 3, 13), [copy])
        assert len(found) == 1
        assert found[0].name == "Tempo (copy)"


class TestMonthGrid:
    """Tests for Monday-first month grids."""

    def test_march_2024(self):
        grid = month_grid(2024, 3)
        assert len(grid) == 35
        assert grid[0] == dt.date(2024, 2, 26)
        assert grid[-1] == dt.date(2024, 3, 31)

    def test_february_2024(self):
        grid = month_grid(2024, 2)
        assert grid[0] == dt.date(2024, 1, 29)
        assert grid[-1] == dt.date(2024, 3, 3)
        assert all(day.isoweekday() == 1 for day in grid[::7])


class TestDayStatus:
    """Tests for the per-day result status."""

    def test_complete_wins_over_missed(self):
        day = dt.date(2024, 3, 13)
        results = [
            WorkoutResult(workout_id="a", date=day, status="missed"),
            WorkoutResult(workout_id="b", date=day, status="complete"),
        ]
        assert day_status(results, day) == "complete"

    def test_missed_only(self):
        day = dt.date(2024, 3, 13)
        assert day_status([WorkoutResult(workout_id="a", date=day, status="missed")], day) == "missed"

    def test_nothing_logged(self):
        results = [WorkoutResult(workout_id="a", date=dt.date(2024, 3, 12), status="complete")]
        assert day_status(results, dt.date(2024, 3, 13)) is None


def test_is_event_date(program):
    assert is_event_date(program, dt.date(2024, 4, 26))
    assert not is_event_date(program, dt.date(2024, 4, 25))
