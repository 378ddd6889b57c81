class TaskError(Exception):
    """Base class for errors raised by the task lifecycle and store."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(TaskError):
    """Request fields failed validation (missing title, unknown color)."""


class NotFoundError(TaskError):
    """No active task with the requested id."""


class ConflictError(TaskError):
    """A task with the requested id already exists."""
