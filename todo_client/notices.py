"""
User-facing notices for task operations.

Every operation outcome is reported to the user as a short, transient
notice.  ``perform`` is the single call site where synchronization errors
are caught: it runs one ``TaskSyncClient`` operation, logs any failure and
turns the outcome into an ``Outcome`` carrying the notice to display.
Errors never escape ``perform``; the view simply keeps its last-known-good
state and the user may retry.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .errors import FetchError, TaskClientError, ValidationError

logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"

SUCCESS_MESSAGES = {
    "load": "Tasks up to date.",
    "create": "Task added successfully!",
    "remove": "Task deleted!",
}

FAILURE_MESSAGES = {
    "load": "Failed to load tasks. Please refresh.",
    "create": "Failed to add task. Try again.",
    "update": "Failed to update task.",
    "remove": "Could not delete task.",
}


@dataclass(frozen=True)
class Notice:
    """A transient message shown after an operation; ``category`` is ``success`` or ``error``."""

    message: str
    category: str = SUCCESS

    @property
    def is_error(self) -> bool:
        return self.category == ERROR

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message, "category": self.category}


@dataclass(frozen=True)
class Outcome:
    """
    Result of one operation run through ``perform``.

    Attributes:
        result: Value returned by the operation, or ``None`` on failure.
        notice: Feedback for the user.
        error: The caught error, or ``None`` on success.
    """

    result: Any = None
    notice: Notice | None = None
    error: TaskClientError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def success_notice(operation: str, result: Any = None) -> Notice | None:
    """Return the notice for a successful operation."""
    if operation == "update":
        completed = getattr(result, "completed", False)
        return Notice("Task completed!" if completed else "Task moved back!")
    message = SUCCESS_MESSAGES.get(operation)
    return Notice(message) if message else None


def failure_notice(operation: str, error: TaskClientError) -> Notice:
    """Return the error notice for a failed operation."""
    if isinstance(error, ValidationError):
        return Notice(str(error), ERROR)
    return Notice(FAILURE_MESSAGES.get(operation, "Something went wrong. Try again."), ERROR)


def perform(operation: str, func: Callable[..., Any], *args, **kwargs) -> Outcome:
    """
    Run one synchronization operation and convert its outcome to a notice.

    Args:
        operation: ``"load"``, ``"create"``, ``"update"`` or ``"remove"``.
        func: The bound ``TaskSyncClient`` method to call.
        *args: Positional arguments forwarded to ``func``.
        **kwargs: Keyword arguments forwarded to ``func``.

    Returns:
        An ``Outcome`` with the result and notice; never raises
        ``TaskClientError``.
    """
    try:
        result = func(*args, **kwargs)
    except ValidationError as error:
        logger.info("Rejected %s: %s", operation, error)
        return Outcome(notice=failure_notice(operation, error), error=error)
    except FetchError as error:
        logger.warning(
            "Task API %s failed (status=%s): %s",
            operation,
            error.status_code,
            error,
        )
        return Outcome(notice=failure_notice(operation, error), error=error)

    return Outcome(result=result, notice=success_notice(operation, result))


__all__ = [
    "ERROR",
    "SUCCESS",
    "Notice",
    "Outcome",
    "failure_notice",
    "perform",
    "success_notice",
]
