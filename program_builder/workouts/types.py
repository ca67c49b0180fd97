"""Workout, program and result schemas.

The six workout kinds form a closed union discriminated on the explicit
``type`` field. Compromised-run segments carry their own ``type`` tag
("strength" or "running"); untagged segments are rejected rather than
guessed from their shape.

Stored documents use camelCase keys (runningSegments, restTime, eventDate);
Python code uses snake_case and either form is accepted on input.
"""

from __future__ import annotations

import datetime as dt
import uuid
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

WorkoutType = Literal["strength", "running", "compromised-run", "amrap", "emom", "recovery"]

WORKOUT_TYPES: tuple[str, ...] = ("strength", "running", "compromised-run", "amrap", "emom", "recovery")

ResultStatus = Literal["complete", "missed"]


def coerce_calendar_date(value: object) -> object:
    """Reduce ISO date or datetime strings to a calendar date.

    Stored workouts may carry a full timestamp ("2024-03-14T00:00:00.000Z");
    only the date written in it matters for the calendar.
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return dt.datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return value


class DocumentModel(BaseModel):
    """Base for models stored as JSON documents."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Exercise(DocumentModel):
    """Exercise inside an AMRAP or EMOM workout."""

    name: str = ""
    reps: int


class StrengthExercise(DocumentModel):
    type: Literal["strength"] = "strength"
    name: str = ""
    weight: float
    reps: int
    sets: int
    rest_time: int = 60


class RunningSegment(DocumentModel):
    """Running segment: distance in km, time in minutes, pace in min/km."""

    type: Literal["running"] = "running"
    distance: float
    time: float
    pace: float
    heart_rate: int | None = None


CompromisedSegment = Annotated[Union[StrengthExercise, RunningSegment], Field(discriminator="type")]


class BaseWorkout(DocumentModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    week: int = 1
    day: int = 1
    date: dt.date | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: object) -> object:
        return coerce_calendar_date(value)

    @property
    def display_name(self) -> str:
        """Workout name, falling back to '<type> Workout' when blank."""
        return self.name.strip() or f"{self.type} Workout"


class StrengthWorkout(BaseWorkout):
    type: Literal["strength"] = "strength"
    exercises: list[StrengthExercise] = Field(default_factory=list)


class RunningWorkout(BaseWorkout):
    type: Literal["running"] = "running"
    running_segments: list[RunningSegment] = Field(default_factory=list)


class CompromisedRunWorkout(BaseWorkout):
    type: Literal["compromised-run"] = "compromised-run"
    segments: list[CompromisedSegment] = Field(default_factory=list)


class AmrapWorkout(BaseWorkout):
    """As Many Rounds As Possible within time_limit minutes."""

    type: Literal["amrap"] = "amrap"
    time_limit: float
    exercises: list[Exercise] = Field(default_factory=list)


class EmomWorkout(BaseWorkout):
    """Every Minute On the Minute: round_time in seconds, total_time in minutes."""

    type: Literal["emom"] = "emom"
    round_time: float
    total_time: float
    exercises: list[Exercise] = Field(default_factory=list)


class RecoveryWorkout(BaseWorkout):
    type: Literal["recovery"] = "recovery"
    duration: float
    activity_type: str = ""
    intensity: Literal["light", "moderate"] = "light"


Workout = Annotated[
    Union[StrengthWorkout, RunningWorkout, CompromisedRunWorkout, AmrapWorkout, EmomWorkout, RecoveryWorkout],
    Field(discriminator="type"),
]

workout_adapter: TypeAdapter[Workout] = TypeAdapter(Workout)


def parse_workout(data: dict) -> Workout:
    """Parse a stored workout document into its variant model."""
    return workout_adapter.validate_python(data)


class ResultSegment(DocumentModel):
    """Logged result for one exercise or running segment."""

    type: Literal["strength", "running"]
    name: str | None = None
    reps: int | None = None
    rest_time: int | None = None
    weight: float | None = None
    sets: int | None = None
    distance: float | None = None
    time: float | None = None
    pace: float | None = None


class WorkoutResult(DocumentModel):
    workout_id: str = Field(alias="workout_id")
    date: dt.date
    status: ResultStatus
    segments: list[ResultSegment] | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: object) -> object:
        return coerce_calendar_date(value)


class TrainingProgram(DocumentModel):
    """Multi-week training program.

    Workouts without an explicit date are placed by week/day relative to
    start_date (or event_date when no start date is set).
    """

    id: str | None = None
    name: str = ""
    type: str | None = None
    description: str | None = None
    event_date: dt.date | None = None
    start_date: dt.date | None = None
    workouts: list[Workout] = Field(default_factory=list)

    @field_validator("event_date", "start_date", mode="before")
    @classmethod
    def _coerce_dates(cls, value: object) -> object:
        return coerce_calendar_date(value)
