# src/task_tracker/core/errors.py

from __future__ import annotations


class TaskTrackerError(Exception):
    """Base class for errors raised by the service layer."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskTrackerError):
    status_code = 400


class AuthError(TaskTrackerError):
    """Bad credentials or token. status_code is per instance (401 vs 403)."""

    def __init__(self, message: str, *, status_code: int = 401) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(TaskTrackerError):
    status_code = 404


class ConflictError(TaskTrackerError):
    status_code = 409


class StorageError(TaskTrackerError):
    """The task store rejected or failed a query."""

    status_code = 500
