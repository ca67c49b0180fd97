"""Workout validation error type.

Standard error codes:
- INVALID_WORKOUT: A workout is missing required fields or has non-positive values
- INVALID_PROGRAM: A program is missing its name or anchor date
- INCOMPLETE_DRAFT: A form draft cannot be turned into a workout yet
"""


class WorkoutValidationError(ValueError):
    """Raised when a workout or program fails pre-submit validation.

    Nothing is written when this is raised.

    Attributes:
        code: Error code (e.g., "INVALID_WORKOUT", "INVALID_PROGRAM")
        details: Human-readable problems, one per entry
    """

    def __init__(self, code: str, details: list[str]):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")

    @property
    def message(self) -> str:
        """Single message suitable for showing to the user."""
        return "; ".join(self.details)
