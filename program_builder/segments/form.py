"""Stateful adapter between a running-segment form and the resolver.

The resolver is pure; this class owns the mutable segment state of one
open form, turns raw box input (decimal text, minutes and seconds) into
edits, and exposes what each box should display.
"""

from __future__ import annotations

import re

from loguru import logger

from program_builder.segments.resolver import SegmentEdit, SegmentField, SegmentState, resolve_edit
from program_builder.segments.time_format import from_minutes_seconds, to_minutes_seconds
from program_builder.workouts.errors import WorkoutValidationError
from program_builder.workouts.types import RunningSegment

_DIGITS = re.compile(r"^\d*$")


class RunningSegmentForm:
    """Mutable form state for a single running segment."""

    def __init__(self, state: SegmentState | None = None):
        self.state = state or SegmentState()

    @classmethod
    def from_segment(cls, segment: RunningSegment) -> RunningSegmentForm:
        """Pre-populate the form from an existing segment (editing)."""
        return cls(SegmentState(distance=segment.distance, time=segment.time, pace=segment.pace))

    def apply(self, edit: SegmentEdit) -> SegmentState:
        self.state = resolve_edit(self.state, edit)
        return self.state

    def set_distance_text(self, text: str) -> SegmentState:
        """Handle a keystroke in the free-text distance box."""
        return self.apply(SegmentEdit("distance", text))

    def set_distance(self, value: float | None) -> SegmentState:
        return self.apply(SegmentEdit("distance", value))

    def set_time(self, value: float | None) -> SegmentState:
        return self.apply(SegmentEdit("time", value))

    def set_pace(self, value: float | None) -> SegmentState:
        return self.apply(SegmentEdit("pace", value))

    def set_time_minutes(self, text: str) -> SegmentState:
        return self._set_part("time", minutes=text)

    def set_time_seconds(self, text: str) -> SegmentState:
        return self._set_part("time", seconds=text)

    def set_pace_minutes(self, text: str) -> SegmentState:
        return self._set_part("pace", minutes=text)

    def set_pace_seconds(self, text: str) -> SegmentState:
        return self._set_part("pace", seconds=text)

    def _set_part(
        self,
        field: SegmentField,
        minutes: str | None = None,
        seconds: str | None = None,
    ) -> SegmentState:
        text = minutes if minutes is not None else seconds
        if text is None or not _DIGITS.match(text):
            return self.state
        if seconds is not None and seconds != "" and int(seconds) > 59:
            logger.debug(f"[SEGMENT] Ignoring out-of-range seconds for {field}: {seconds}")
            return self.state

        current_minutes, current_seconds = self._parts(field)
        new_minutes = minutes if minutes is not None else current_minutes
        new_seconds = seconds if seconds is not None else current_seconds

        value = from_minutes_seconds(new_minutes, new_seconds)
        # Blanking a box that leaves nothing but zero clears the field
        if text == "" and value == 0:
            return self.apply(SegmentEdit(field, None))
        return self.apply(SegmentEdit(field, value))

    def _parts(self, field: SegmentField) -> tuple[str, str]:
        parts = to_minutes_seconds(getattr(self.state, field))
        if parts is None:
            return "", ""
        minutes, seconds = parts
        return str(minutes), f"{seconds:02d}"

    @property
    def distance_display(self) -> str:
        """Text for the distance box: pending text verbatim, else the number."""
        if self.state.pending_distance is not None:
            return self.state.pending_distance
        if self.state.distance is None:
            return ""
        return f"{self.state.distance:g}"

    @property
    def time_parts(self) -> tuple[str, str]:
        """(minutes, seconds) text for the time boxes."""
        return self._parts("time")

    @property
    def pace_parts(self) -> tuple[str, str]:
        """(minutes, seconds) text for the pace boxes."""
        return self._parts("pace")

    def to_segment(self) -> RunningSegment:
        """Build the segment to store.

        Raises:
            WorkoutValidationError: If distance, time or pace is still unknown
        """
        problems = []
        if self.state.pending_distance is not None:
            problems.append(f"Distance '{self.state.pending_distance}' is incomplete")
        for field in ("distance", "time", "pace"):
            if getattr(self.state, field) is None:
                problems.append(f"{field.capitalize()} is required")
        if problems:
            raise WorkoutValidationError("INCOMPLETE_DRAFT", problems)
        return RunningSegment(distance=self.state.distance, time=self.state.time, pace=self.state.pace)
