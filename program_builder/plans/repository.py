"""Storage for training programs and workout results.

Every function takes the caller's SessionContext and only ever touches
rows owned by that user. Writes are committed before returning.
"""

from __future__ import annotations

import uuid
from typing import Any

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from program_builder.core.session_context import SessionContext, require_user_id
from program_builder.db.models import TrainingProgramRecord, WorkoutResultRecord
from program_builder.plans.errors import DuplicateProgramNameError, ProgramNotFoundError
from program_builder.workouts.types import TrainingProgram, WorkoutResult

PATCHABLE_FIELDS = frozenset({"name", "type", "description", "event_date", "start_date", "workouts"})


def _to_program(record: TrainingProgramRecord) -> TrainingProgram:
    return TrainingProgram.model_validate(
        {
            "id": record.id,
            "name": record.name,
            "type": record.type,
            "description": record.description,
            "event_date": record.event_date,
            "start_date": record.start_date,
            "workouts": record.workouts or [],
        }
    )


def _to_result(record: WorkoutResultRecord) -> WorkoutResult:
    return WorkoutResult.model_validate(
        {
            "workout_id": record.workout_id,
            "date": record.date,
            "status": record.status,
            "segments": record.segments,
        }
    )


def _apply_program(record: TrainingProgramRecord, program: TrainingProgram) -> None:
    record.name = program.name.strip()
    record.type = program.type
    record.description = program.description
    record.event_date = program.event_date
    record.start_date = program.start_date
    record.workouts = [workout.to_document() for workout in program.workouts]


def _commit(session: Session, name: str) -> None:
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning(f"[PROGRAMS] Integrity error saving program '{name}': {e.orig!r}")
        raise DuplicateProgramNameError(f'A program named "{name}" already exists') from e


def _get_record(session: Session, user_id: str, program_id: str) -> TrainingProgramRecord:
    record = session.execute(
        select(TrainingProgramRecord).where(
            TrainingProgramRecord.id == program_id,
            TrainingProgramRecord.user_id == user_id,
        )
    ).scalar_one_or_none()
    if record is None:
        raise ProgramNotFoundError(f"Training program {program_id} not found")
    return record


def insert_program(session: Session, context: SessionContext | None, program: TrainingProgram) -> TrainingProgram:
    """Insert a new program for the current user.

    Raises:
        AuthenticationError: If there is no authenticated user
        DuplicateProgramNameError: If the user already has a program with this name
    """
    user_id = require_user_id(context, "save programs")
    record = TrainingProgramRecord(id=program.id or str(uuid.uuid4()), user_id=user_id)
    _apply_program(record, program)
    session.add(record)
    _commit(session, record.name)
    session.refresh(record)
    logger.info(f"[PROGRAMS] Inserted program {record.id} for user {user_id} ({len(record.workouts)} workouts)")
    return _to_program(record)


def select_programs(
    session: Session,
    context: SessionContext | None,
    program_id: str | None = None,
    name: str | None = None,
    program_type: str | None = None,
) -> list[TrainingProgram]:
    """List the current user's programs, optionally filtered.

    Raises:
        AuthenticationError: If there is no authenticated user
    """
    user_id = require_user_id(context, "fetch programs")
    query = select(TrainingProgramRecord).where(TrainingProgramRecord.user_id == user_id)
    if program_id is not None:
        query = query.where(TrainingProgramRecord.id == program_id)
    if name is not None:
        query = query.where(TrainingProgramRecord.name == name)
    if program_type is not None:
        query = query.where(TrainingProgramRecord.type == program_type)
    query = query.order_by(TrainingProgramRecord.created_at, TrainingProgramRecord.name)

    records = session.execute(query).scalars().all()
    return [_to_program(record) for record in records]


def get_program(session: Session, context: SessionContext | None, program_id: str) -> TrainingProgram:
    """Fetch one of the current user's programs.

    Raises:
        AuthenticationError: If there is no authenticated user
        ProgramNotFoundError: If the program does not exist for this user
    """
    user_id = require_user_id(context, "fetch programs")
    return _to_program(_get_record(session, user_id, program_id))


def update_program(
    session: Session,
    context: SessionContext | None,
    program_id: str,
    patch: dict[str, Any],
) -> TrainingProgram:
    """Apply a partial update to a program.

    Args:
        session: Database session
        context: Current session context
        program_id: Program to update
        patch: Snake-case field names mapped to new values; workouts may be
            models or documents

    Raises:
        AuthenticationError: If there is no authenticated user
        ProgramNotFoundError: If the program does not exist for this user
        DuplicateProgramNameError: If the new name is already taken
        ValueError: If the patch names unknown fields
    """
    user_id = require_user_id(context, "update programs")
    unknown = set(patch) - PATCHABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown program fields: {sorted(unknown)}")

    record = _get_record(session, user_id, program_id)
    current = _to_program(record)
    merged = current.model_dump()
    for key, value in patch.items():
        if key == "workouts":
            value = [w.to_document() if hasattr(w, "to_document") else w for w in value]
        merged[key] = value
    program = TrainingProgram.model_validate(merged)

    _apply_program(record, program)
    _commit(session, record.name)
    session.refresh(record)
    logger.info(f"[PROGRAMS] Updated program {program_id} fields={sorted(patch)}")
    return _to_program(record)


def delete_program(session: Session, context: SessionContext | None, program_id: str) -> None:
    """Delete a program and every result logged against it.

    Raises:
        AuthenticationError: If there is no authenticated user
        ProgramNotFoundError: If the program does not exist for this user
    """
    user_id = require_user_id(context, "delete programs")
    record = _get_record(session, user_id, program_id)
    session.execute(delete(WorkoutResultRecord).where(WorkoutResultRecord.program_id == program_id))
    session.delete(record)
    session.commit()
    logger.info(f"[PROGRAMS] Deleted program {program_id} for user {user_id}")


def upsert_result(
    session: Session,
    context: SessionContext | None,
    program_id: str,
    result: WorkoutResult,
) -> WorkoutResult:
    """Create or replace the result for (program, workout, date).

    Raises:
        AuthenticationError: If there is no authenticated user
        ProgramNotFoundError: If the program does not exist for this user
    """
    user_id = require_user_id(context, "save workout results")
    _get_record(session, user_id, program_id)

    segments = [segment.to_document() for segment in result.segments] if result.segments is not None else None
    record = session.execute(
        select(WorkoutResultRecord).where(
            WorkoutResultRecord.program_id == program_id,
            WorkoutResultRecord.workout_id == result.workout_id,
            WorkoutResultRecord.date == result.date,
        )
    ).scalar_one_or_none()

    if record is None:
        record = WorkoutResultRecord(
            user_id=user_id,
            program_id=program_id,
            workout_id=result.workout_id,
            date=result.date,
        )
        session.add(record)
        action = "Inserted"
    else:
        action = "Replaced"
    record.status = result.status
    record.segments = segments
    session.commit()
    session.refresh(record)
    logger.info(f"[RESULTS] {action} result workout={result.workout_id} date={result.date} status={result.status}")
    return _to_result(record)


def select_results(session: Session, context: SessionContext | None, program_id: str) -> list[WorkoutResult]:
    """All results logged for a program, oldest first.

    Raises:
        AuthenticationError: If there is no authenticated user
        ProgramNotFoundError: If the program does not exist for this user
    """
    user_id = require_user_id(context, "fetch workout results")
    _get_record(session, user_id, program_id)
    records = (
        session.execute(
            select(WorkoutResultRecord)
            .where(WorkoutResultRecord.program_id == program_id)
            .order_by(WorkoutResultRecord.date, WorkoutResultRecord.created_at)
        )
        .scalars()
        .all()
    )
    return [_to_result(record) for record in records]
