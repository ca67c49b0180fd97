from fastapi import HTTPException

from program_builder.plans.errors import StorageError
from program_builder.workouts.errors import WorkoutValidationError


def to_http_exception(error: StorageError | WorkoutValidationError) -> HTTPException:
    """Map a domain error to an HTTPException with one readable message."""
    if isinstance(error, WorkoutValidationError):
        return HTTPException(status_code=422, detail=error.message)
    return HTTPException(status_code=error.status_code, detail=error.message)
