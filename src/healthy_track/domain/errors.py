"""Error taxonomy surfaced to the user."""


class HealthTrackError(Exception):
    """Base class for recoverable application errors."""


class ValidationError(HealthTrackError):
    """A draft record failed validation before reaching the store."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.fields = fields


class StoreUnavailable(HealthTrackError):
    """The backing store could not be read."""


class StoreWriteError(HealthTrackError):
    """An insert, update or delete did not reach the backing store."""


class NotFound(StoreWriteError):
    """No record with the requested id exists in the store."""


class AuthError(HealthTrackError):
    """The authentication provider rejected an operation."""

    def __init__(self, message: str, stage: str | None = None) -> None:
        super().__init__(message)
        self.stage = stage


class SessionRequired(AuthError):
    """An operation needs a signed-in session."""


class SubmissionInProgress(HealthTrackError):
    """A mutating call for the same record is still pending."""
