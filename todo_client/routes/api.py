"""
JSON endpoints for the to-do client.

Exposes the same operations as the HTML views to in-page scripts.  Every
response carries the committed view and the notice for the outcome, so a
script can re-render the lists, counters and toast from a single reply.

Endpoints:
    GET    /api/view          - Reload all tasks and return the view
    POST   /api/tasks         - Create a task
    PUT    /api/tasks/<id>    - Set a task's completion state
    DELETE /api/tasks/<id>    - Delete a task
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, jsonify, request

from .. import get_sync_client
from ..errors import ValidationError
from ..notices import ERROR, Notice, Outcome, perform

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _outcome_response(outcome: Outcome, success_status: int = 200, **extra) -> tuple[Response, int]:
    """
    Build the JSON reply for an operation outcome.

    Validation failures map to 400 and task API failures to 502; the
    body always holds the current view and the notice.
    """
    client = get_sync_client()
    body = {
        "view": client.view.to_dict(),
        "notice": outcome.notice.to_dict() if outcome.notice else None,
        **extra,
    }
    if outcome.ok:
        return jsonify(body), success_status
    if isinstance(outcome.error, ValidationError):
        return jsonify(body), 400
    return jsonify(body), 502


def _json_object() -> dict:
    """Return the request body if it is a JSON object, otherwise an empty dict."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@api_bp.route("/view", methods=["GET"])
def get_view() -> tuple[Response, int]:
    """Reload all tasks from the task API and return the refreshed view."""
    client = get_sync_client()
    outcome = perform("load", client.load_all)
    return _outcome_response(outcome)


@api_bp.route("/tasks", methods=["POST"])
def create_task() -> tuple[Response, int]:
    """Create a task from the ``task`` field of the JSON body."""
    client = get_sync_client()
    data = _json_object()
    text = data.get("task")
    if not isinstance(text, str):
        text = ""
    outcome = perform("create", client.create, text)
    task = outcome.result.to_dict() if outcome.ok else None
    return _outcome_response(outcome, 201, task=task)


@api_bp.route("/tasks/<task_id>", methods=["PUT"])
def update_task(task_id: str) -> tuple[Response, int]:
    """Set a task's completion state from the boolean ``completed`` field."""
    client = get_sync_client()
    data = _json_object()
    completed = data.get("completed")
    if not isinstance(completed, bool):
        logger.info("Rejected update of task %s: 'completed' must be a boolean", task_id)
        notice = Notice("'completed' must be true or false.", ERROR)
        return _outcome_response(
            Outcome(notice=notice, error=ValidationError(notice.message)),
            task=None,
        )
    outcome = perform("update", client.set_completed, task_id, completed)
    task = outcome.result.to_dict() if outcome.ok else None
    return _outcome_response(outcome, task=task)


@api_bp.route("/tasks/<task_id>", methods=["DELETE"])
def delete_task(task_id: str) -> tuple[Response, int]:
    """Delete a task."""
    client = get_sync_client()
    outcome = perform("remove", client.remove, task_id)
    return _outcome_response(outcome)
