"""Error taxonomy shared by the engine, services and API layer."""


class ReviewError(Exception):
    """Base class for every error raised by the review core."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ReviewError):
    """Missing or out-of-range input. Never mutates state."""

    status_code = 422

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.fields = list(fields or [])


class ConflictError(ReviewError):
    """Operation not allowed in the current state (duplicate consensus, wrong cycle status)."""

    status_code = 409


class NotFoundError(ReviewError):
    """Unknown cycle, employee, evaluation or plan item."""

    status_code = 404


class TransientError(ReviewError):
    """Timeout or connectivity failure from the store.

    The outcome of a failed write is unknown: re-check state before retrying.
    """

    status_code = 503
