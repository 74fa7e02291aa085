"""
In-memory stand-in for the remote task API.

``FakeTaskAPI`` duck-types the part of :class:`requests.Session` that
``TaskAPIClient`` uses (``headers``, ``request`` and ``close``) and serves
``/api/tasks`` from a dict, answering exactly like the real server:
``null`` for an empty list, ``201`` with the created task, and ``204``
with no body for update and delete.

Failures are injected per call with ``fail_next`` (non-2xx status) and
``raise_next`` (network-level exception), so tests can exercise every
error path without a live service.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import urlsplit

_NO_BODY = object()


class _FakeResponse:
    """
    Minimal stand-in for :class:`requests.Response`.

    Provides ``status_code``, ``content`` and ``json()``, which are the
    only attributes the task API client inspects.
    """

    def __init__(self, status_code: int, payload: Any = _NO_BODY, raw: bytes | None = None):
        self.status_code = status_code
        self._payload = payload
        self._raw = raw

    @property
    def content(self) -> bytes:
        if self._raw is not None:
            return self._raw
        if self._payload is _NO_BODY:
            return b""
        return json.dumps(self._payload).encode("utf-8")

    def json(self):
        """Decode the body; raises ``ValueError`` like requests does for bad JSON."""
        return json.loads(self.content.decode("utf-8") or "")


class FakeTaskAPI:
    """
    Fake ``requests.Session`` backed by an in-memory task table.

    Attributes:
        tasks: Stored tasks keyed by id, in insertion order.
        calls: ``(method, path)`` of every request received.
        update_echoes_task: When True, PUT answers 200 with the task
            instead of 204 with no body.
    """

    def __init__(self, update_echoes_task: bool = False) -> None:
        self.headers: dict[str, str] = {}
        self.tasks: dict[int, dict[str, Any]] = {}
        self.calls: list[tuple[str, str]] = []
        self.update_echoes_task = update_echoes_task
        self.closed = False
        self._next_id = 1
        self._failures: list[tuple[str | None, int | None, Exception | None]] = []

    # ------------------------------------------------------------------
    # Test controls
    # ------------------------------------------------------------------

    def seed(self, text: str, completed: bool = False) -> dict[str, Any]:
        """Store a task directly, bypassing the request log."""
        task = {
            "id": self._next_id,
            "task": text,
            "completed": completed,
            "created_at": "2026-01-01T10:00:00Z",
            "updated_at": "2026-01-01T10:00:00Z",
        }
        self.tasks[self._next_id] = task
        self._next_id += 1
        return dict(task)

    def fail_next(self, method: str | None = None, status: int = 500) -> None:
        """Answer the next request (optionally only of ``method``) with ``status``."""
        self._failures.append((method, status, None))

    def raise_next(self, error: Exception, method: str | None = None) -> None:
        """Raise ``error`` for the next request (optionally only of ``method``)."""
        self._failures.append((method, None, error))

    def count(self, method: str) -> int:
        return sum(1 for called_method, _ in self.calls if called_method == method)

    # ------------------------------------------------------------------
    # requests.Session surface
    # ------------------------------------------------------------------

    def close(self) -> None:
        self.closed = True

    def _pop_failure(self, method: str):
        for index, (failing_method, status, error) in enumerate(self._failures):
            if failing_method is None or failing_method == method:
                del self._failures[index]
                return status, error
        return None, None

    def request(self, method: str, url: str, timeout=None, json=None, **kwargs) -> _FakeResponse:
        path = urlsplit(url).path.rstrip("/")
        self.calls.append((method, path))

        status, error = self._pop_failure(method)
        if error is not None:
            raise error
        if status is not None:
            return _FakeResponse(status, {"error": "injected failure"})

        if path == "/api/tasks":
            if method == "GET":
                # The real server encodes an empty table as null.
                return _FakeResponse(200, list(self.tasks.values()) or None)
            if method == "POST":
                body = json or {}
                task = self.seed(body.get("task", ""), bool(body.get("completed", False)))
                return _FakeResponse(201, task)
            return _FakeResponse(405, {"error": "Method not allowed"})

        if path.startswith("/api/tasks/"):
            try:
                task_id = int(path.rsplit("/", 1)[1])
            except ValueError:
                return _FakeResponse(400, {"error": "invalid id"})
            if method == "PUT":
                body = json or {}
                if task_id in self.tasks:
                    self.tasks[task_id]["completed"] = bool(body.get("completed"))
                    if self.update_echoes_task:
                        return _FakeResponse(200, dict(self.tasks[task_id]))
                return _FakeResponse(204)
            if method == "DELETE":
                self.tasks.pop(task_id, None)
                return _FakeResponse(204)
            return _FakeResponse(405, {"error": "Method not allowed"})

        return _FakeResponse(404, {"error": "not found"})
