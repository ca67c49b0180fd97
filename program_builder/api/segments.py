"""Stateless running-segment resolver endpoint.

Clients send the current segment state and one edit and get the resolved
state back, so the derived-field rules live in one place.
"""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel, Field

from program_builder.segments.resolver import SegmentEdit, SegmentField, SegmentState, resolve_edit
from program_builder.segments.time_format import format_minutes_seconds

router = APIRouter(prefix="/segments", tags=["segments"])


class SegmentStateBody(BaseModel):
    distance: float | None = None
    time: float | None = None
    pace: float | None = None
    pending_distance: str | None = None


class SegmentEditBody(BaseModel):
    field: SegmentField
    value: float | str | None = None


class ResolveRequest(BaseModel):
    state: SegmentStateBody = Field(default_factory=SegmentStateBody)
    edit: SegmentEditBody


class ResolveResponse(SegmentStateBody):
    time_display: str = ""
    pace_display: str = ""


@router.post("/resolve")
def resolve(request: ResolveRequest) -> ResolveResponse:
    state = SegmentState(**request.state.model_dump())
    resolved = resolve_edit(state, SegmentEdit(request.edit.field, request.edit.value))
    return ResolveResponse(
        **resolved.as_dict(),
        time_display=format_minutes_seconds(resolved.time),
        pace_display=format_minutes_seconds(resolved.pace),
    )
