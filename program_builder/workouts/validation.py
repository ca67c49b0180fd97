"""Pre-submit validation for workouts and programs.

Enforces:
- Required names and list entries are present
- Numeric fields are positive (weight and rest time may be zero)
- Week is at least 1 and day is an ISO weekday (1-7)
- A program has a name and an anchor date (start_date or event_date)

All problems are collected and raised together so the user sees every
issue at once.
"""

from program_builder.workouts.errors import WorkoutValidationError
from program_builder.workouts.types import (
    AmrapWorkout,
    CompromisedRunWorkout,
    EmomWorkout,
    Exercise,
    RecoveryWorkout,
    RunningSegment,
    RunningWorkout,
    StrengthExercise,
    StrengthWorkout,
    TrainingProgram,
    Workout,
)


def _check_positive(problems: list[str], label: str, value: float | None) -> None:
    if value is None:
        problems.append(f"{label} is required")
    elif value <= 0:
        problems.append(f"{label} must be greater than 0")


def _check_non_negative(problems: list[str], label: str, value: float | None) -> None:
    if value is None:
        problems.append(f"{label} is required")
    elif value < 0:
        problems.append(f"{label} cannot be negative")


def _check_strength_exercise(problems: list[str], label: str, exercise: StrengthExercise) -> None:
    if not exercise.name.strip():
        problems.append(f"{label}: name is required")
    _check_non_negative(problems, f"{label}: weight", exercise.weight)
    _check_positive(problems, f"{label}: reps", exercise.reps)
    _check_positive(problems, f"{label}: sets", exercise.sets)
    _check_non_negative(problems, f"{label}: rest time", exercise.rest_time)


def _check_exercise(problems: list[str], label: str, exercise: Exercise) -> None:
    if not exercise.name.strip():
        problems.append(f"{label}: name is required")
    _check_positive(problems, f"{label}: reps", exercise.reps)


def _check_running_segment(problems: list[str], label: str, segment: RunningSegment) -> None:
    _check_positive(problems, f"{label}: distance", segment.distance)
    _check_positive(problems, f"{label}: time", segment.time)
    _check_positive(problems, f"{label}: pace", segment.pace)


def workout_problems(workout: Workout) -> list[str]:
    """List everything wrong with a workout (empty when valid)."""
    problems: list[str] = []

    if workout.week < 1:
        problems.append("Week must be 1 or later")
    if not 1 <= workout.day <= 7:
        problems.append("Day must be between 1 (Monday) and 7 (Sunday)")

    match workout:
        case StrengthWorkout():
            if not workout.exercises:
                problems.append("At least one exercise is required")
            for index, exercise in enumerate(workout.exercises, start=1):
                _check_strength_exercise(problems, f"Exercise {index}", exercise)
        case RunningWorkout():
            if not workout.running_segments:
                problems.append("At least one running segment is required")
            for index, segment in enumerate(workout.running_segments, start=1):
                _check_running_segment(problems, f"Running segment {index}", segment)
        case CompromisedRunWorkout():
            if not workout.segments:
                problems.append("At least one segment is required")
            for index, segment in enumerate(workout.segments, start=1):
                match segment:
                    case RunningSegment():
                        _check_running_segment(problems, f"Segment {index}", segment)
                    case StrengthExercise():
                        _check_strength_exercise(problems, f"Segment {index}", segment)
        case AmrapWorkout():
            _check_positive(problems, "Time limit", workout.time_limit)
            if not workout.exercises:
                problems.append("At least one exercise is required")
            for index, exercise in enumerate(workout.exercises, start=1):
                _check_exercise(problems, f"Exercise {index}", exercise)
        case EmomWorkout():
            _check_positive(problems, "Round time", workout.round_time)
            _check_positive(problems, "Total time", workout.total_time)
            if not workout.exercises:
                problems.append("At least one exercise is required")
            for index, exercise in enumerate(workout.exercises, start=1):
                _check_exercise(problems, f"Exercise {index}", exercise)
        case RecoveryWorkout():
            _check_positive(problems, "Duration", workout.duration)
            if not workout.activity_type.strip():
                problems.append("Activity type is required")
        case _:
            problems.append(f"Unknown workout type: {getattr(workout, 'type', None)}")

    return problems


def validate_workout(workout: Workout) -> None:
    """Validate a workout before it is saved.

    Raises:
        WorkoutValidationError: If any check fails
    """
    problems = workout_problems(workout)
    if problems:
        raise WorkoutValidationError("INVALID_WORKOUT", problems)


def validate_program(program: TrainingProgram) -> None:
    """Validate a program and every workout in it before it is saved.

    Raises:
        WorkoutValidationError: If any check fails
    """
    problems: list[str] = []
    if not program.name.strip():
        problems.append("Program name is required")
    if program.start_date is None and program.event_date is None:
        problems.append("Event date or start date is required")

    for workout in program.workouts:
        problems.extend(f"{workout.display_name}: {problem}" for problem in workout_problems(workout))

    if problems:
        raise WorkoutValidationError("INVALID_PROGRAM", problems)
