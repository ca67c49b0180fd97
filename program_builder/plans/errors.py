"""Error types for program storage.

Every storage failure reaches the caller as one of these with a single
human-readable message. Nothing is retried automatically.
"""


class StorageError(RuntimeError):
    """Base class for storage failures."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AuthenticationError(StorageError):
    """Raised when a storage call is made without an authenticated user."""

    status_code = 401


class ProgramNotFoundError(StorageError):
    """Raised when a program does not exist or belongs to another user."""

    status_code = 404


class DuplicateProgramNameError(StorageError):
    """Raised when the user already has a program with the same name."""

    status_code = 409


class SaveInProgressError(StorageError):
    """Raised when a save is triggered while another save for the same program is running."""

    status_code = 409
