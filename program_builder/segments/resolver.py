"""Derived-field resolver for running segments.

A running segment has three linked fields: distance (km), time (minutes) and
pace (minutes per km), tied together by time = distance x pace. After each
edit the resolver keeps the edited value and, when enough is known,
recomputes exactly one other field. It is a pure function of
(state, edit) and never raises: incomplete or unusable input simply
produces no derived update.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from typing import Literal

SegmentField = Literal["distance", "time", "pace"]
DecimalTextKind = Literal["empty", "number", "pending", "invalid"]

SEGMENT_FIELDS: tuple[SegmentField, ...] = ("distance", "time", "pace")

# What the distance box lets through at all (digits with at most one point)
_ACCEPTED_TEXT = re.compile(r"^\d*\.?\d*$")
_COMPLETE_NUMBER = re.compile(r"^(\d+(\.\d+)?|\.\d+)$")


@dataclass(frozen=True)
class SegmentState:
    """Current values of one running segment.

    Attributes:
        distance: Distance in kilometres
        time: Time in fractional minutes
        pace: Pace in fractional minutes per kilometre
        pending_distance: Partial distance text (e.g. "2.") kept verbatim
            until it forms a complete number
    """

    distance: float | None = None
    time: float | None = None
    pace: float | None = None
    pending_distance: str | None = None

    def as_dict(self) -> dict[str, float | str | None]:
        return {
            "distance": self.distance,
            "time": self.time,
            "pace": self.pace,
            "pending_distance": self.pending_distance,
        }


@dataclass(frozen=True)
class SegmentEdit:
    """A single user edit: a field and its new value.

    value is a number, None when the field was cleared, or free text for
    the distance box.
    """

    field: SegmentField
    value: float | str | None


def classify_decimal_text(text: str) -> tuple[DecimalTextKind, float | None]:
    """Classify free-text decimal input.

    A comma is read as the decimal point.

    Returns:
        ("empty", None) for an empty box, ("number", value) for a complete
        number, ("pending", None) for accepted partial text such as "2." and
        ("invalid", None) for anything the box would refuse
    """
    normalized = text.replace(",", ".")
    if normalized == "":
        return "empty", None
    if not _ACCEPTED_TEXT.match(normalized):
        return "invalid", None
    if _COMPLETE_NUMBER.match(normalized):
        return "number", float(normalized)
    return "pending", None


def resolve_edit(state: SegmentState, edit: SegmentEdit) -> SegmentState:
    """Apply one edit and recompute at most one other field.

    Branch order after applying the edit:
    1. edited field is not distance and distance is known
       (time -> pace = time / distance, pace -> time = distance x pace)
    2. else edited field is not time and time is known
       (distance -> pace = time / distance, pace -> distance = time / pace)
    3. else edited field is not pace and pace is known
       (distance -> time = distance x pace, time -> distance = time / pace)

    Only the first matching branch is evaluated; a division by zero inside it
    is skipped without falling through. Clearing a field recomputes nothing.

    Args:
        state: Segment state before the edit
        edit: Field and new value

    Returns:
        New segment state (the input state when the edit is ignored)
    """
    if edit.field not in SEGMENT_FIELDS:
        return state

    value = edit.value
    if isinstance(value, str):
        kind, number = classify_decimal_text(value)
        if kind == "invalid":
            return state
        if kind == "pending":
            if edit.field != "distance":
                return state
            return replace(state, pending_distance=value)
        value = number
    elif value is not None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return state
        if not math.isfinite(value):
            return state
        value = float(value)

    updated = replace(state, **{edit.field: value})
    if edit.field == "distance":
        updated = replace(updated, pending_distance=None)

    if value is None:
        return updated
    return _derive(updated, edit.field, value)


def _set_derived(state: SegmentState, field: SegmentField, result: float) -> SegmentState:
    # An overflowing product or quotient is dropped like a division by zero
    if not math.isfinite(result):
        return state
    return replace(state, **{field: result})


def _derive(state: SegmentState, field: SegmentField, value: float) -> SegmentState:
    if field != "distance" and state.distance is not None:
        if field == "time":
            if state.distance:
                return _set_derived(state, "pace", value / state.distance)
        elif field == "pace":
            return _set_derived(state, "time", state.distance * value)
        return state

    if field != "time" and state.time is not None:
        if value:
            if field == "distance":
                return _set_derived(state, "pace", state.time / value)
            if field == "pace":
                return _set_derived(state, "distance", state.time / value)
        return state

    if field != "pace" and state.pace is not None:
        if field == "distance":
            return _set_derived(state, "time", value * state.pace)
        if field == "time" and state.pace:
            return _set_derived(state, "distance", value / state.pace)

    return state


def resolve_edits(state: SegmentState, edits: list[SegmentEdit]) -> SegmentState:
    """Apply a sequence of edits in order."""
    for edit in edits:
        state = resolve_edit(state, edit)
    return state
