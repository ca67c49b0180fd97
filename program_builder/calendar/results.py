"""Helpers for the log-result dialog."""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable

from program_builder.workouts.types import (
    CompromisedRunWorkout,
    ResultSegment,
    RunningSegment,
    RunningWorkout,
    StrengthExercise,
    StrengthWorkout,
    Workout,
    WorkoutResult,
)


def _from_strength(exercise: StrengthExercise) -> ResultSegment:
    return ResultSegment(
        type="strength",
        name=exercise.name,
        reps=exercise.reps,
        rest_time=exercise.rest_time,
        weight=exercise.weight,
        sets=exercise.sets,
    )


def _from_running(segment: RunningSegment) -> ResultSegment:
    return ResultSegment(type="running", distance=segment.distance, time=segment.time, pace=segment.pace)


def prefill_result_segments(workout: Workout, existing: WorkoutResult | None = None) -> list[ResultSegment]:
    """Segments the result form starts with.

    A previously logged result is shown as-is; otherwise the planned
    exercises or running segments are copied so the athlete only edits what
    differed. AMRAP, EMOM and recovery workouts log status only.
    """
    if existing is not None and existing.segments:
        return [segment.model_copy() for segment in existing.segments]

    match workout:
        case StrengthWorkout():
            return [_from_strength(exercise) for exercise in workout.exercises]
        case RunningWorkout():
            return [_from_running(segment) for segment in workout.running_segments]
        case CompromisedRunWorkout():
            return [
                _from_running(segment) if isinstance(segment, RunningSegment) else _from_strength(segment)
                for segment in workout.segments
            ]
        case _:
            return []


def find_result(results: Iterable[WorkoutResult], workout_id: str, date: dt.date) -> WorkoutResult | None:
    """Result logged for a workout on a given day, if any."""
    for result in results:
        if result.workout_id == workout_id and result.date == date:
            return result
    return None
