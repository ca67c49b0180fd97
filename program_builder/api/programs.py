"""Training program, workout and result endpoints."""

from __future__ import annotations

import datetime as dt
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status
from loguru import logger
from pydantic import ValidationError
from sqlalchemy.orm import Session

from program_builder.api.dependencies.auth import get_session_context
from program_builder.api.errors import to_http_exception
from program_builder.calendar.results import find_result, prefill_result_segments
from program_builder.core.session_context import SessionContext
from program_builder.db.session import get_db
from program_builder.plans import repository, service
from program_builder.plans.errors import StorageError
from program_builder.workouts.errors import WorkoutValidationError
from program_builder.workouts.types import TrainingProgram, WorkoutResult, parse_workout

router = APIRouter(prefix="/programs", tags=["programs"])


@router.get("")
def list_programs(
    program_type: str | None = Query(None, alias="type"),
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
) -> list[dict[str, Any]]:
    try:
        programs = repository.select_programs(db, context, program_type=program_type)
    except StorageError as e:
        raise to_http_exception(e) from e
    return [program.to_document() for program in programs]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_program(
    program: TrainingProgram,
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Create a program (with any workouts it already carries)."""
    try:
        saved = service.save_program(db, context, program.model_copy(update={"id": None}))
    except (StorageError, WorkoutValidationError) as e:
        raise to_http_exception(e) from e
    return saved.to_document()


@router.get("/{program_id}")
def read_program(
    program_id: str,
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    try:
        return repository.get_program(db, context, program_id).to_document()
    except StorageError as e:
        raise to_http_exception(e) from e


@router.put("/{program_id}")
def update_program_details(
    program_id: str,
    program: TrainingProgram,
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Update name, type, description and dates; stored workouts are kept."""
    try:
        saved = service.save_program(db, context, program.model_copy(update={"id": program_id}))
    except (StorageError, WorkoutValidationError) as e:
        raise to_http_exception(e) from e
    return saved.to_document()


@router.delete("/{program_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_program(
    program_id: str,
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
) -> Response:
    try:
        repository.delete_program(db, context, program_id)
    except StorageError as e:
        raise to_http_exception(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{program_id}/workouts")
def put_workout(
    program_id: str,
    payload: dict[str, Any] = Body(...),
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Add a workout, or replace the workout with the same id."""
    try:
        workout = parse_workout(payload)
    except ValidationError as e:
        logger.info(f"[PROGRAMS] Rejected workout payload: {e.error_count()} errors")
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False)) from e
    try:
        return service.put_workout(db, context, program_id, workout).to_document()
    except (StorageError, WorkoutValidationError) as e:
        raise to_http_exception(e) from e


@router.get("/{program_id}/results")
def list_results(
    program_id: str,
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
) -> list[dict[str, Any]]:
    try:
        results = repository.select_results(db, context, program_id)
    except StorageError as e:
        raise to_http_exception(e) from e
    return [result.to_document() for result in results]


@router.put("/{program_id}/results")
def save_result(
    program_id: str,
    result: WorkoutResult,
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    try:
        return service.log_result(db, context, program_id, result).to_document()
    except StorageError as e:
        raise to_http_exception(e) from e


@router.get("/{program_id}/results/prefill")
def prefill_result(
    program_id: str,
    workout_id: str = Query(...),
    date: dt.date = Query(...),
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
) -> list[dict[str, Any]]:
    """Segments to start the log-result form with for a workout on a day."""
    try:
        program = repository.get_program(db, context, program_id)
        results = repository.select_results(db, context, program_id)
    except StorageError as e:
        raise to_http_exception(e) from e

    workout = next((w for w in program.workouts if w.id == workout_id), None)
    if workout is None:
        raise HTTPException(status_code=404, detail=f"Workout {workout_id} not found")
    existing = find_result(results, workout_id, date)
    return [segment.to_document() for segment in prefill_result_segments(workout, existing)]
