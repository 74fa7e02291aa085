"""
Task synchronization client.

``TaskSyncClient`` owns the locally cached view of all tasks and keeps it
consistent with the task API.  Each operation issues exactly one API call
and commits its local effect only after that call succeeds; on failure the
exception propagates and the previous ``ViewState`` stays in place
untouched.

The web server handles requests on several threads, so view-state writes
are serialised with a lock.  API calls happen *outside* the lock: a slow
request never blocks other operations, and its outcome is applied to
whatever the view is when the response arrives.  Deltas for ids the view
no longer holds are no-ops, and a full reload always replaces the view
wholesale.

Listeners see changes in the order they were committed, even when the
commits come from different threads.

Key Concepts Demonstrated:
- Commit-after-success updates (no optimistic mutation)
- Immutable snapshots swapped under a lock
- Registered change listeners instead of ambient globals
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

from .api_client import TaskAPIClient
from .errors import ValidationError
from .models import Task, TaskId, ViewState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewChange:
    """
    Event delivered to listeners after a successful reconciliation.

    Attributes:
        operation: ``"load"``, ``"create"``, ``"update"`` or ``"remove"``.
        view: The view as committed by that operation.
    """

    operation: str
    view: ViewState


Listener = Callable[[ViewChange], None]


class TaskSyncClient:
    """
    Keeps a local task view consistent with the task API.

    Args:
        api: Client used for every call to the task API.
        view: Initial view; empty by default.
    """

    def __init__(self, api: TaskAPIClient, view: ViewState | None = None) -> None:
        self._api = api
        self._view = view or ViewState()
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []
        self._pending: deque[ViewChange] = deque()
        self._delivering = threading.Lock()

    @property
    def view(self) -> ViewState:
        """The current immutable view snapshot."""
        return self._view

    def snapshot(self) -> ViewState:
        return self._view

    def get(self, task_id: TaskId) -> Task | None:
        return self._view.get(task_id)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback invoked after every committed change.

        Returns:
            A function that removes the listener again.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _deliver(self, change: ViewChange, listeners: list[Listener]) -> None:
        for listener in listeners:
            try:
                listener(change)
            except Exception:
                # The change is already committed; a broken listener must not undo it.
                logger.exception("View listener failed after %s", change.operation)

    def _drain(self) -> None:
        """
        Deliver queued changes to listeners in commit order.

        Only one thread delivers at a time.  A thread that finds delivery
        in progress returns at once and leaves its change to the thread
        already delivering.
        """
        while True:
            if not self._delivering.acquire(blocking=False):
                return
            try:
                while True:
                    with self._lock:
                        if not self._pending:
                            break
                        change = self._pending.popleft()
                        listeners = list(self._listeners)
                    self._deliver(change, listeners)
            finally:
                self._delivering.release()
            # A change queued between the last check and the release would
            # otherwise be stranded.
            with self._lock:
                if not self._pending:
                    return

    def _commit(self, operation: str, update: Callable[[ViewState], ViewState]) -> ViewState:
        with self._lock:
            self._view = update(self._view)
            view = self._view
            self._pending.append(ViewChange(operation=operation, view=view))
        self._drain()
        return view

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def load_all(self) -> list[Task]:
        """
        Fetch the full task set and replace the local view with it.

        Raises:
            FetchError: If the API is unreachable or rejects the request;
                the previous view is kept.
        """
        tasks = self._api.list_tasks()
        view = self._commit("load", lambda _current: ViewState.from_tasks(tasks))
        logger.debug(
            "Loaded %d tasks (%d pending, %d done)",
            view.counters.total,
            view.counters.pending_count,
            view.counters.completed_count,
        )
        return tasks

    def create(self, text: str) -> Task:
        """
        Create a pending task and add it to the view.

        Raises:
            ValidationError: If ``text`` is empty or whitespace only; the
                API is not contacted.
            FetchError: If the API call fails; the view is unchanged.
        """
        cleaned = (text or "").strip()
        if not cleaned:
            raise ValidationError("Please enter a task!")

        task = self._api.create_task(cleaned)
        self._commit("create", lambda current: current.with_created(task))
        logger.info("Created task %s", task.id)
        return task

    def remove(self, task_id: TaskId) -> None:
        """
        Delete a task and drop it from the view.

        Removing an id the view does not hold is not an error.

        Raises:
            FetchError: If the API call fails; the view is unchanged.
        """
        self._api.delete_task(task_id)
        self._commit("remove", lambda current: current.without(task_id))
        logger.info("Removed task %s", task_id)

    def set_completed(self, task_id: TaskId, completed: bool) -> Task:
        """
        Set a task's completion state and move it between partitions.

        When the API answers with status only, the returned task is built
        from the copy the view holds at commit time.  If the view no longer
        holds the task, the view is left as is and a task with empty text
        is returned.

        Raises:
            FetchError: If the API call fails; the view is unchanged.
        """
        completed = bool(completed)
        updated = self._api.update_task(task_id, completed)

        def reconcile(current: ViewState) -> ViewState:
            nonlocal updated
            if updated is None:
                # Read under the lock so a refresh that landed meanwhile is not overwritten.
                cached = current.get(task_id)
                if cached is not None:
                    updated = cached.with_completed(completed)
                else:
                    updated = Task(id=task_id, text="", completed=completed)
            return current.with_completion(updated)

        self._commit("update", reconcile)
        logger.info("Task %s marked %s", task_id, "completed" if completed else "pending")
        return updated

    def toggle(self, task_id: TaskId) -> Task:
        """
        Flip the completion state of a cached task.

        Raises:
            ValidationError: If the view does not hold ``task_id``.
            FetchError: If the API call fails; the view is unchanged.
        """
        current = self._view.get(task_id)
        if current is None:
            raise ValidationError(f"Task {task_id} is not in the current list.")
        return self.set_completed(task_id, not current.completed)


__all__ = ["TaskSyncClient", "ViewChange", "Listener"]
