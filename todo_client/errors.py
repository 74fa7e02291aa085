"""Error kinds raised by the task synchronization layer."""

from __future__ import annotations


class TaskClientError(Exception):
    """Base class for every error the to-do client raises."""


class ValidationError(TaskClientError):
    """Input rejected locally; the task API was never contacted."""


class FetchError(TaskClientError):
    """
    A call to the task API failed.

    Raised for network failures, timeouts, non-2xx statuses and response
    bodies that cannot be decoded.

    Attributes:
        operation: Name of the API operation (``"list"``, ``"create"``,
            ``"update"`` or ``"delete"``).
        status_code: HTTP status returned by the API, or ``None`` when no
            response was received.
    """

    def __init__(self, operation: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.operation = operation
        self.status_code = status_code
