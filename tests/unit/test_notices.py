"""
Unit tests for operation notices and the ``perform`` call site.
"""

from unittest.mock import MagicMock

import pytest

from todo_client.errors import FetchError, ValidationError
from todo_client.models import Task
from todo_client.notices import ERROR, SUCCESS, Notice, perform, success_notice


pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("operation", "result", "message"),
    [
        ("create", Task(id=1, text="a"), "Task added successfully!"),
        ("remove", None, "Task deleted!"),
        ("update", Task(id=1, text="a", completed=True), "Task completed!"),
        ("update", Task(id=1, text="a", completed=False), "Task moved back!"),
    ],
)
def test_every_mutation_has_a_success_notice(operation, result, message):
    """Test that each mutating operation reports its own success notice."""
    outcome = perform(operation, MagicMock(return_value=result))

    assert outcome.ok
    assert outcome.result == result
    assert outcome.notice == Notice(message, SUCCESS)


def test_successful_load_has_a_notice():
    """Test that a successful reload also reports feedback."""
    outcome = perform("load", MagicMock(return_value=[]))

    assert outcome.ok
    assert outcome.notice == success_notice("load", [])
    assert outcome.notice == Notice("Tasks up to date.", SUCCESS)


@pytest.mark.parametrize(
    ("operation", "message"),
    [
        ("load", "Failed to load tasks. Please refresh."),
        ("create", "Failed to add task. Try again."),
        ("update", "Failed to update task."),
        ("remove", "Could not delete task."),
    ],
)
def test_fetch_error_becomes_error_notice(operation, message):
    """Test that a FetchError becomes the operation's error notice."""
    error = FetchError(operation, "boom", status_code=500)

    outcome = perform(operation, MagicMock(side_effect=error))

    assert not outcome.ok
    assert outcome.error is error
    assert outcome.result is None
    assert outcome.notice == Notice(message, ERROR)
    assert outcome.notice.is_error


def test_validation_error_message_is_shown_to_user():
    """Test that a validation message reaches the user unchanged."""
    outcome = perform("create", MagicMock(side_effect=ValidationError("Please enter a task!")))

    assert outcome.notice == Notice("Please enter a task!", ERROR)


def test_fetch_error_is_logged_as_warning(caplog):
    """Test that API failures are logged at WARNING with their status."""
    with caplog.at_level("WARNING", logger="todo_client.notices"):
        perform("remove", MagicMock(side_effect=FetchError("delete", "gone", status_code=503)))

    assert "remove failed (status=503)" in caplog.text


def test_arguments_are_forwarded():
    """Test that perform passes its arguments through to the operation."""
    func = MagicMock(return_value=None)

    perform("remove", func, 7, force=True)

    func.assert_called_once_with(7, force=True)


def test_unexpected_errors_propagate():
    """Test that errors other than client errors are not swallowed."""
    with pytest.raises(KeyError):
        perform("create", MagicMock(side_effect=KeyError("bug")))


def test_notice_to_dict():
    """Test that a notice serialises to message and category."""
    assert Notice("hi").to_dict() == {"message": "hi", "category": "success"}
