"""Calendar bucketing: which workouts fall on which day.

A workout with an explicit date appears on that date only. A workout
without one is placed by its program week and ISO weekday relative to the
program anchor (start date, else event date):

    week = floor(|days between anchor and date| / 7) + 1
    day  = ISO weekday of date (Monday = 1 ... Sunday = 7)
"""

from __future__ import annotations

import calendar
import datetime as dt
from collections.abc import Iterable

from program_builder.workouts.types import TrainingProgram, Workout, WorkoutResult


def program_anchor(program: TrainingProgram) -> dt.date | None:
    """Date that week 1 of the program is counted from."""
    return program.start_date or program.event_date


def week_day_for_date(anchor: dt.date, date: dt.date) -> tuple[int, int]:
    """Program (week, day) that a calendar date maps to.

    Args:
        anchor: Program anchor date
        date: Calendar date

    Returns:
        (week, day) with week starting at 1 and day as ISO weekday
    """
    days_between = abs((date - anchor).days)
    return days_between // 7 + 1, date.isoweekday()


def workout_matches_date(workout: Workout, date: dt.date, anchor: dt.date | None) -> bool:
    """Check whether a workout is scheduled on a date.

    An explicit date takes precedence; week/day placement is only used when
    the workout has no date and the program has an anchor.
    """
    if workout.date is not None:
        return workout.date == date
    if anchor is None:
        return False
    week, day = week_day_for_date(anchor, date)
    return workout.week == week and workout.day == day


def workouts_for_date(
    program: TrainingProgram,
    date: dt.date,
    extra_workouts: Iterable[Workout] = (),
) -> list[Workout]:
    """Workouts shown on one calendar day.

    Args:
        program: Program being viewed
        date: Calendar day
        extra_workouts: Workouts from the user's other programs; these only
            match by explicit date

    Returns:
        Matching workouts de-duplicated by id, in first-seen order
    """
    anchor = program_anchor(program)
    matched = [w for w in program.workouts if workout_matches_date(w, date, anchor)]
    matched.extend(w for w in extra_workouts if w.date is not None and w.date == date)

    unique: dict[str, Workout] = {}
    for workout in matched:
        unique[workout.id] = workout
    return list(unique.values())


def is_event_date(program: TrainingProgram, date: dt.date) -> bool:
    return program.event_date is not None and program.event_date == date


def month_grid(year: int, month: int) -> list[dt.date]:
    """Dates shown for a month view, Monday-first and padded to full weeks."""
    first = dt.date(year, month, 1)
    last = dt.date(year, month, calendar.monthrange(year, month)[1])
    start = first - dt.timedelta(days=first.isoweekday() - 1)
    end = last + dt.timedelta(days=7 - last.isoweekday())
    return [start + dt.timedelta(days=offset) for offset in range((end - start).days + 1)]


def day_status(results: Iterable[WorkoutResult], date: dt.date) -> str | None:
    """Overall status of a day: complete wins over missed, None if nothing logged."""
    statuses = {result.status for result in results if result.date == date}
    if "complete" in statuses:
        return "complete"
    if "missed" in statuses:
        return "missed"
    return None
