"""Minutes/seconds codec for segment time and pace.

Time (minutes) and pace (minutes per km) are stored as fractional minutes
where the fractional part is seconds / 60, so 5.5 means 5:30, not 5:50.
The form edits them as two separate boxes: whole minutes and 0-59 seconds.
"""

import math


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def to_minutes_seconds(value: float | None) -> tuple[int, int] | None:
    """Split fractional minutes into whole minutes and rounded seconds.

    Seconds are rounded to the nearest integer; a value that rounds up to
    60 seconds carries into the minutes.

    Args:
        value: Fractional minutes, or None

    Returns:
        (minutes, seconds) tuple, or None when value is None
    """
    if value is None:
        return None
    minutes = math.floor(value)
    seconds = _round_half_up((value - minutes) * 60)
    if seconds == 60:
        minutes += 1
        seconds = 0
    return minutes, seconds


def from_minutes_seconds(minutes: float | str | None, seconds: float | str | None) -> float:
    """Combine minutes and seconds into fractional minutes.

    Blank or missing parts count as zero, matching how the form treats an
    empty box.
    """
    mins = float(minutes) if minutes not in (None, "") else 0.0
    secs = float(seconds) if seconds not in (None, "") else 0.0
    return mins + secs / 60


def format_minutes_seconds(value: float | None) -> str:
    """Render fractional minutes as m:ss ('' when unset)."""
    parts = to_minutes_seconds(value)
    if parts is None:
        return ""
    minutes, seconds = parts
    return f"{minutes}:{seconds:02d}"
