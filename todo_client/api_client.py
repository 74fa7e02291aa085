"""
HTTP client for the remote task API.

Centralises every call to the task API so that the synchronization layer
never touches :mod:`requests` directly.  Each method maps to exactly one
HTTP request; any network failure, timeout, non-2xx status or
undecodable body is converted into a :class:`FetchError` carrying the
operation name and (when known) the status code.

Key Concepts Demonstrated:
- A shared ``requests.Session`` with default headers and timeout
- Uniform non-2xx handling across list/create/update/delete
- Status-only responses (``204 No Content``) for update and delete
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from .errors import FetchError
from .models import Task, TaskId

logger = logging.getLogger(__name__)

TASKS_PATH = "/api/tasks"


class TaskAPIClient:
    """
    Minimal client for the task REST API.

    Args:
        base_url: Scheme and host of the task API, e.g.
            ``http://localhost:8080``.
        timeout: Per-request timeout in seconds.
        session: Optional pre-configured session (tests pass a fake).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "User-Agent": "todo-client/0.1",
                "Accept": "application/json",
            }
        )

    @property
    def base_url(self) -> str:
        return self._base_url.rstrip("/")

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, operation: str, method: str, path: str, **kwargs) -> requests.Response:
        """
        Send one request and reject anything but a 2xx response.

        Raises:
            FetchError: On network failure, timeout or non-2xx status.
        """
        url = self._url(path)
        logger.debug("Task API %s: %s %s", operation, method, url)
        try:
            response = self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.Timeout as exc:
            raise FetchError(operation, f"Task API timed out during {operation}: {exc}") from exc
        except requests.RequestException as exc:
            raise FetchError(operation, f"Task API unreachable during {operation}: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise FetchError(
                operation,
                f"Task API returned {response.status_code} for {method} {url}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _json(operation: str, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(
                operation,
                f"Task API sent an invalid JSON body during {operation}",
                status_code=response.status_code,
            ) from exc

    @staticmethod
    def _task(operation: str, response: requests.Response, payload: Any) -> Task:
        try:
            return Task.from_api(payload)
        except ValueError as exc:
            raise FetchError(
                operation,
                f"Task API sent a malformed task during {operation}: {exc}",
                status_code=response.status_code,
            ) from exc

    def list_tasks(self) -> list[Task]:
        """Return every task known to the API, in server order."""
        response = self._request("list", "GET", TASKS_PATH)
        payload = self._json("list", response)
        # An empty table is encoded as ``null`` rather than ``[]``.
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise FetchError(
                "list",
                "Task API sent a non-list body for the task list",
                status_code=response.status_code,
            )
        return [self._task("list", response, item) for item in payload]

    def create_task(self, text: str) -> Task:
        """Create a pending task and return it with its server-assigned id."""
        response = self._request(
            "create",
            "POST",
            TASKS_PATH,
            json={"task": text, "completed": False},
        )
        return self._task("create", response, self._json("create", response))

    def update_task(self, task_id: TaskId, completed: bool) -> Task | None:
        """
        Set a task's completion state.

        Returns:
            The updated task when the API echoes it back, or ``None`` for
            status-only responses.
        """
        response = self._request(
            "update",
            "PUT",
            f"{TASKS_PATH}/{task_id}",
            json={"completed": completed},
        )
        if response.status_code == 204 or not response.content:
            return None
        return self._task("update", response, self._json("update", response))

    def delete_task(self, task_id: TaskId) -> None:
        self._request("delete", "DELETE", f"{TASKS_PATH}/{task_id}")

    def close(self) -> None:
        self._session.close()


__all__ = ["TaskAPIClient", "TASKS_PATH"]
