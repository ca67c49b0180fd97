"""Editable workout drafts behind the quick-workout form.

A draft holds nullable values while the user types. Switching the workout
type resets the type-specific parts to a fresh blank state and keeps the
name. Submitting turns the draft into a validated workout; a draft with
missing values is rejected instead of silently filling zeros.
"""

from __future__ import annotations

import datetime as dt
import uuid
from dataclasses import dataclass, field, fields

from loguru import logger

from program_builder.segments.form import RunningSegmentForm
from program_builder.workouts.errors import WorkoutValidationError
from program_builder.workouts.types import (
    WORKOUT_TYPES,
    AmrapWorkout,
    CompromisedRunWorkout,
    EmomWorkout,
    Exercise,
    RecoveryWorkout,
    RunningSegment,
    RunningWorkout,
    StrengthExercise,
    StrengthWorkout,
    Workout,
    WorkoutType,
)
from program_builder.workouts.validation import validate_workout

DEFAULT_REST_TIME = 60


@dataclass
class ExerciseDraft:
    name: str = ""
    reps: int | None = None


@dataclass
class StrengthExerciseDraft:
    name: str = ""
    weight: float | None = None
    reps: int | None = None
    sets: int | None = None
    rest_time: int = DEFAULT_REST_TIME


@dataclass
class WorkoutDraft:
    """Form state for one workout.

    ``segments`` holds running-segment forms for running workouts and a mix
    of strength drafts and running-segment forms for compromised runs.
    """

    type: WorkoutType = "strength"
    name: str = ""
    id: str | None = None
    exercises: list[ExerciseDraft | StrengthExerciseDraft] = field(default_factory=list)
    segments: list[StrengthExerciseDraft | RunningSegmentForm] = field(default_factory=list)
    time_limit: float | None = None
    round_time: float | None = None
    total_time: float | None = None
    duration: float | None = None
    activity_type: str = ""
    intensity: str = "light"

    def change_type(self, kind: WorkoutType) -> None:
        """Switch workout type, resetting everything but the name and id."""
        if kind not in WORKOUT_TYPES:
            raise ValueError(f"Unknown workout type: {kind}. Valid types: {WORKOUT_TYPES}")
        blank = blank_draft(kind)
        blank.name = self.name
        blank.id = self.id
        for draft_field in fields(self):
            setattr(self, draft_field.name, getattr(blank, draft_field.name))

    def add_exercise(self) -> None:
        if self.type == "strength":
            self.exercises.append(StrengthExerciseDraft())
        else:
            self.exercises.append(ExerciseDraft())

    def remove_exercise(self, index: int) -> None:
        del self.exercises[index]

    def add_strength_segment(self) -> StrengthExerciseDraft:
        segment = StrengthExerciseDraft()
        self.segments.append(segment)
        return segment

    def add_running_segment(self) -> RunningSegmentForm:
        segment = RunningSegmentForm()
        self.segments.append(segment)
        return segment

    def remove_segment(self, index: int) -> None:
        del self.segments[index]


def blank_draft(kind: WorkoutType = "strength") -> WorkoutDraft:
    """Fresh draft for a workout type, as shown when the type is picked."""
    match kind:
        case "strength":
            return WorkoutDraft(type=kind, exercises=[StrengthExerciseDraft()])
        case "running":
            return WorkoutDraft(type=kind, segments=[RunningSegmentForm()])
        case "compromised-run":
            return WorkoutDraft(type=kind)
        case "amrap" | "emom":
            return WorkoutDraft(type=kind, exercises=[ExerciseDraft()])
        case "recovery":
            return WorkoutDraft(type=kind)
        case _:
            raise ValueError(f"Unknown workout type: {kind}. Valid types: {WORKOUT_TYPES}")


def draft_from_workout(workout: Workout) -> WorkoutDraft:
    """Pre-populate a draft from an existing workout for editing."""
    draft = WorkoutDraft(type=workout.type, name=workout.name, id=workout.id)
    match workout:
        case StrengthWorkout():
            draft.exercises = [_strength_draft(exercise) for exercise in workout.exercises]
        case RunningWorkout():
            draft.segments = [RunningSegmentForm.from_segment(segment) for segment in workout.running_segments]
        case CompromisedRunWorkout():
            draft.segments = [
                RunningSegmentForm.from_segment(segment)
                if isinstance(segment, RunningSegment)
                else _strength_draft(segment)
                for segment in workout.segments
            ]
        case AmrapWorkout():
            draft.time_limit = workout.time_limit
            draft.exercises = [ExerciseDraft(name=e.name, reps=e.reps) for e in workout.exercises]
        case EmomWorkout():
            draft.round_time = workout.round_time
            draft.total_time = workout.total_time
            draft.exercises = [ExerciseDraft(name=e.name, reps=e.reps) for e in workout.exercises]
        case RecoveryWorkout():
            draft.duration = workout.duration
            draft.activity_type = workout.activity_type
            draft.intensity = workout.intensity
    return draft


def _strength_draft(exercise: StrengthExercise) -> StrengthExerciseDraft:
    return StrengthExerciseDraft(
        name=exercise.name,
        weight=exercise.weight,
        reps=exercise.reps,
        sets=exercise.sets,
        rest_time=exercise.rest_time,
    )


def _require(problems: list[str], label: str, value: object) -> object:
    if value is None:
        problems.append(f"{label} is required")
    return value


def _build_strength(problems: list[str], label: str, draft: StrengthExerciseDraft) -> StrengthExercise | None:
    weight = _require(problems, f"{label}: weight", draft.weight)
    reps = _require(problems, f"{label}: reps", draft.reps)
    sets = _require(problems, f"{label}: sets", draft.sets)
    if weight is None or reps is None or sets is None:
        return None
    return StrengthExercise(name=draft.name, weight=weight, reps=reps, sets=sets, rest_time=draft.rest_time)


def _build_exercise(problems: list[str], label: str, draft: ExerciseDraft) -> Exercise | None:
    reps = _require(problems, f"{label}: reps", draft.reps)
    if reps is None:
        return None
    return Exercise(name=draft.name, reps=reps)


def _build_running(problems: list[str], label: str, form: RunningSegmentForm) -> RunningSegment | None:
    try:
        return form.to_segment()
    except WorkoutValidationError as e:
        problems.extend(f"{label}: {detail}" for detail in e.details)
        return None


def submit_draft(draft: WorkoutDraft, week: int, day: int, date: dt.date | None = None) -> Workout:
    """Turn a draft into a validated workout.

    A blank name becomes '<type> Workout'. The draft id is kept when editing,
    otherwise a new id is generated.

    Args:
        draft: Form state to submit
        week: Program week the workout belongs to
        day: ISO weekday (1 = Monday)
        date: Optional explicit calendar date

    Returns:
        The workout variant for the draft's type

    Raises:
        WorkoutValidationError: If values are missing or invalid
    """
    problems: list[str] = []
    common = {
        "id": draft.id or str(uuid.uuid4()),
        "name": draft.name.strip() or f"{draft.type} Workout",
        "week": week,
        "day": day,
        "date": date,
    }

    workout: Workout | None = None
    match draft.type:
        case "strength":
            exercises = [
                _build_strength(problems, f"Exercise {i}", e) for i, e in enumerate(draft.exercises, start=1)
            ]
            if not problems:
                workout = StrengthWorkout(**common, exercises=exercises)
        case "running":
            segments = [
                _build_running(problems, f"Running segment {i}", s) for i, s in enumerate(draft.segments, start=1)
            ]
            if not problems:
                workout = RunningWorkout(**common, running_segments=segments)
        case "compromised-run":
            mixed = [
                _build_running(problems, f"Segment {i}", s)
                if isinstance(s, RunningSegmentForm)
                else _build_strength(problems, f"Segment {i}", s)
                for i, s in enumerate(draft.segments, start=1)
            ]
            if not problems:
                workout = CompromisedRunWorkout(**common, segments=mixed)
        case "amrap":
            time_limit = _require(problems, "Time limit", draft.time_limit)
            exercises = [_build_exercise(problems, f"Exercise {i}", e) for i, e in enumerate(draft.exercises, start=1)]
            if not problems:
                workout = AmrapWorkout(**common, time_limit=time_limit, exercises=exercises)
        case "emom":
            round_time = _require(problems, "Round time", draft.round_time)
            total_time = _require(problems, "Total time", draft.total_time)
            exercises = [_build_exercise(problems, f"Exercise {i}", e) for i, e in enumerate(draft.exercises, start=1)]
            if not problems:
                workout = EmomWorkout(**common, round_time=round_time, total_time=total_time, exercises=exercises)
        case "recovery":
            duration = _require(problems, "Duration", draft.duration)
            if draft.intensity not in ("light", "moderate"):
                problems.append(f"Intensity must be light or moderate, got {draft.intensity!r}")
            if not problems:
                workout = RecoveryWorkout(
                    **common,
                    duration=duration,
                    activity_type=draft.activity_type,
                    intensity=draft.intensity,
                )
        case _:
            problems.append(f"Unknown workout type: {draft.type}")

    if problems or workout is None:
        logger.debug(f"[DRAFT] Rejected {draft.type} draft: {problems}")
        raise WorkoutValidationError("INCOMPLETE_DRAFT", problems)

    validate_workout(workout)
    return workout
