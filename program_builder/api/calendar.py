"""Calendar endpoints for a single program."""

from __future__ import annotations

import datetime as dt
from typing import Any

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from program_builder.api.dependencies.auth import get_session_context
from program_builder.api.errors import to_http_exception
from program_builder.core.session_context import SessionContext
from program_builder.db.session import get_db
from program_builder.plans import service
from program_builder.plans.errors import StorageError

router = APIRouter(prefix="/programs/{program_id}/calendar", tags=["calendar"])


@router.get("/month/{year}/{month}")
def get_month(
    program_id: str,
    year: int = Path(..., ge=1, le=9999),
    month: int = Path(..., ge=1, le=12),
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
) -> list[dict[str, Any]]:
    """Month grid (Monday-first, padded to full weeks) with workouts and day status."""
    try:
        days = service.calendar_month(db, context, program_id, year, month)
    except StorageError as e:
        raise to_http_exception(e) from e
    return [day.model_dump(mode="json", by_alias=True) for day in days]


@router.get("/{date}")
def get_day(
    program_id: str,
    date: dt.date,
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Workouts and results for one day."""
    try:
        day = service.calendar_day(db, context, program_id, date)
    except StorageError as e:
        raise to_http_exception(e) from e
    return day.model_dump(mode="json", by_alias=True)
