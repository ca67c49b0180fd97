"""Program service: validation, storage and calendar views.

Saves are serialised per program: while one save for a program is in
flight, a second one fails fast with SaveInProgressError instead of writing
twice.
"""

from __future__ import annotations

import datetime as dt
import threading
from collections.abc import Generator
from contextlib import contextmanager

from loguru import logger
from pydantic import BaseModel
from sqlalchemy.orm import Session

from program_builder.calendar.bucketing import (
    day_status,
    is_event_date,
    month_grid,
    program_anchor,
    week_day_for_date,
    workouts_for_date,
)
from program_builder.core.session_context import SessionContext, require_user_id
from program_builder.plans import repository
from program_builder.plans.errors import SaveInProgressError
from program_builder.workouts.types import TrainingProgram, Workout, WorkoutResult
from program_builder.workouts.validation import validate_program, validate_workout


class SaveGuard:
    """Per-(user, program) save markers; a second save fails fast instead of waiting."""

    def __init__(self) -> None:
        self._in_flight: set[tuple[str, str]] = set()
        self._lock = threading.Lock()

    @contextmanager
    def hold(self, user_id: str, key: str) -> Generator[None, None, None]:
        """Mark a save for a program as in flight until the block exits.

        Raises:
            SaveInProgressError: If a save for the same program is already running
        """
        marker = (user_id, key)
        with self._lock:
            if marker in self._in_flight:
                logger.warning(f"[PROGRAMS] Rejected concurrent save for {key} (user {user_id})")
                raise SaveInProgressError("A save for this program is already in progress")
            self._in_flight.add(marker)
        try:
            yield
        finally:
            with self._lock:
                self._in_flight.discard(marker)

    def is_saving(self, user_id: str, key: str) -> bool:
        with self._lock:
            return (user_id, key) in self._in_flight

    @property
    def in_flight(self) -> int:
        """Number of saves currently running."""
        with self._lock:
            return len(self._in_flight)


save_guard = SaveGuard()


def _program_key(program: TrainingProgram) -> str:
    if program.id:
        return program.id
    return f"new:{program.name.strip().lower()}"


def save_program(
    session: Session,
    context: SessionContext | None,
    program: TrainingProgram,
    guard: SaveGuard = save_guard,
) -> TrainingProgram:
    """Create a program, or update the details of an existing one.

    When the program has an id only its details (name, type, description,
    dates) are written; the stored workouts are kept, since workouts are
    edited from the calendar.

    Raises:
        WorkoutValidationError: If the program is invalid
        StorageError: On storage failures (auth, not found, duplicate name, save in flight)
    """
    validate_program(program)
    user_id = require_user_id(context, "save programs")
    with guard.hold(user_id, _program_key(program)):
        if program.id:
            patch = {
                "name": program.name,
                "type": program.type,
                "description": program.description,
                "event_date": program.event_date,
                "start_date": program.start_date,
            }
            return repository.update_program(session, context, program.id, patch)
        return repository.insert_program(session, context, program)


def put_workout(
    session: Session,
    context: SessionContext | None,
    program_id: str,
    workout: Workout,
    guard: SaveGuard = save_guard,
) -> TrainingProgram:
    """Add a workout to a program, replacing any workout with the same id.

    Raises:
        WorkoutValidationError: If the workout is invalid
        StorageError: On storage failures
    """
    validate_workout(workout)
    user_id = require_user_id(context, "save programs")
    with guard.hold(user_id, program_id):
        program = repository.get_program(session, context, program_id)
        replaced = any(existing.id == workout.id for existing in program.workouts)
        if replaced:
            workouts = [workout if existing.id == workout.id else existing for existing in program.workouts]
        else:
            workouts = [*program.workouts, workout]
        logger.info(f"[PROGRAMS] {'Replacing' if replaced else 'Adding'} workout {workout.id} in program {program_id}")
        return repository.update_program(session, context, program_id, {"workouts": workouts})


def log_result(
    session: Session,
    context: SessionContext | None,
    program_id: str,
    result: WorkoutResult,
    guard: SaveGuard = save_guard,
) -> WorkoutResult:
    """Record the outcome of a workout on a day (replacing an earlier entry)."""
    user_id = require_user_id(context, "save workout results")
    with guard.hold(user_id, f"result:{program_id}:{result.workout_id}:{result.date.isoformat()}"):
        return repository.upsert_result(session, context, program_id, result)


class CalendarDay(BaseModel):
    """Everything the calendar shows for one day."""

    date: dt.date
    week: int | None = None
    day: int
    is_event_date: bool = False
    status: str | None = None
    workouts: list[Workout]
    results: list[WorkoutResult]


def _other_program_workouts(programs: list[TrainingProgram], program_id: str) -> list[Workout]:
    return [workout for program in programs if program.id != program_id for workout in program.workouts]


def _build_day(
    program: TrainingProgram,
    date: dt.date,
    extra_workouts: list[Workout],
    results: list[WorkoutResult],
) -> CalendarDay:
    anchor = program_anchor(program)
    week = week_day_for_date(anchor, date)[0] if anchor is not None else None
    return CalendarDay(
        date=date,
        week=week,
        day=date.isoweekday(),
        is_event_date=is_event_date(program, date),
        status=day_status(results, date),
        workouts=workouts_for_date(program, date, extra_workouts),
        results=[result for result in results if result.date == date],
    )


def calendar_day(
    session: Session,
    context: SessionContext | None,
    program_id: str,
    date: dt.date,
) -> CalendarDay:
    """Workouts, results and status for one day of a program.

    Dated workouts from the user's other programs are shown too.
    """
    program = repository.get_program(session, context, program_id)
    extra = _other_program_workouts(repository.select_programs(session, context), program_id)
    results = repository.select_results(session, context, program_id)
    return _build_day(program, date, extra, results)


def calendar_month(
    session: Session,
    context: SessionContext | None,
    program_id: str,
    year: int,
    month: int,
) -> list[CalendarDay]:
    """Month view: one CalendarDay per cell of the Monday-first grid."""
    program = repository.get_program(session, context, program_id)
    extra = _other_program_workouts(repository.select_programs(session, context), program_id)
    results = repository.select_results(session, context, program_id)
    logger.debug(f"[CALENDAR] Building {year}-{month:02d} for program {program_id}")
    return [_build_day(program, date, extra, results) for date in month_grid(year, month)]
