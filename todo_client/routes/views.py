"""
HTML view routes for the to-do client.

Each mutating route runs one ``TaskSyncClient`` operation through
``perform``, flashes the resulting notice and redirects to the index,
which reloads the full task list from the task API.  That reload is
authoritative: whatever the API returns replaces the cached view.

If the reload fails, the index still renders the last-known-good view
together with an error notice, so the page always stays usable.
"""

from __future__ import annotations

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from .. import get_sync_client
from ..models import ViewState
from ..notices import Notice, perform

views_bp = Blueprint("views", __name__)

_TRUE_VALUES = {"1", "true", "on", "yes"}


def _flash_notice(notice: Notice | None) -> None:
    if notice is not None:
        flash(notice.message, notice.category)


def _render_index(view: ViewState, status_code: int = 200):
    """Render the task list page for ``view``."""
    return (
        render_template(
            "index.html",
            pending=view.pending,
            done=view.done,
            counters=view.counters,
            notice_dismiss_seconds=current_app.config["NOTICE_DISMISS_SECONDS"],
        ),
        status_code,
    )


@views_bp.route("/health", methods=["GET"])
def health_check():
    """Liveness check; does not contact the task API."""
    return {"status": "healthy", "service": "todo-client"}, 200


@views_bp.route("/", methods=["GET"])
def index():
    """
    Reload all tasks and render the pending and done lists.

    Returns:
        The rendered ``index.html`` page.  On a failed reload the page
        shows the previous view with an error notice.
    """
    client = get_sync_client()
    outcome = perform("load", client.load_all)
    # The page itself is the feedback for a good reload; only failures are flashed.
    if not outcome.ok:
        _flash_notice(outcome.notice)
    return _render_index(client.view)


@views_bp.route("/tasks", methods=["POST"])
def create_task():
    """Create a task from the ``task`` form field."""
    client = get_sync_client()
    outcome = perform("create", client.create, request.form.get("task", ""))
    _flash_notice(outcome.notice)
    return redirect(url_for("views.index"))


@views_bp.route("/tasks/<task_id>/toggle", methods=["POST"])
def toggle_task(task_id: str):
    """
    Change a task's completion state.

    The optional ``completed`` form field sets the target state
    explicitly; without it the cached state is flipped.
    """
    client = get_sync_client()
    target = request.form.get("completed")
    if target is None:
        outcome = perform("update", client.toggle, task_id)
    else:
        completed = target.strip().lower() in _TRUE_VALUES
        outcome = perform("update", client.set_completed, task_id, completed)
    _flash_notice(outcome.notice)
    return redirect(url_for("views.index"))


@views_bp.route("/tasks/<task_id>/delete", methods=["POST"])
def delete_task(task_id: str):
    """Delete a task."""
    client = get_sync_client()
    outcome = perform("remove", client.remove, task_id)
    _flash_notice(outcome.notice)
    return redirect(url_for("views.index"))
