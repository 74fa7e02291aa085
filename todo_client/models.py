"""
View-model types for the to-do client.

Defines the immutable value types the synchronization layer works with:
the server-owned ``Task``, the derived ``Counters`` and the ``ViewState``
that partitions the known tasks into pending and done.

Every ``ViewState`` method returns a *new* instance; the current view is
swapped in only after the task API confirms a change, so a failed request
can never leave a half-applied view behind.

Key Concepts Demonstrated:
- Frozen dataclasses as a pure view-model
- Derived state (partitions, counters) computed from one task sequence
- Tolerant application of stale deltas (absent ids are no-ops)
- Serialisation helpers (``from_api`` / ``to_dict``) for JSON payloads
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Iterable

TaskId = int | str


def _parse_iso_datetime(iso_string: str | None) -> datetime | None:
    """
    Parse an ISO-8601 datetime string returned by the task API.

    Handles the ``Z`` suffix by replacing it with ``+00:00``, and assumes
    UTC for naive values.  Returns ``None`` for empty or unparseable input.
    """
    if not iso_string or not isinstance(iso_string, str):
        return None
    try:
        value = datetime.fromisoformat(iso_string.replace("Z", "+00:00"))
    except ValueError:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _id_key(task_id: TaskId) -> str:
    # Ids arrive as ints from JSON and as strings from URLs.
    return str(task_id)


@dataclass(frozen=True)
class Task:
    """
    A unit of work owned by the task API.

    Attributes:
        id: Server-assigned identifier.  Never assigned or changed by the
            client.
        text: The task description.
        completed: Whether the task is done.
        created_at: Creation timestamp reported by the server, if any.
        updated_at: Last-modified timestamp reported by the server, if any.
    """

    id: TaskId
    text: str
    completed: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_api(cls, payload: Any) -> "Task":
        """
        Build a Task from a task API JSON object.

        The API names the text field ``task``; ``text`` is accepted too.

        Raises:
            ValueError: If the payload is not an object, lacks an id, or
                carries a non-boolean ``completed``.
        """
        if not isinstance(payload, dict):
            raise ValueError(f"Task payload must be an object, got {type(payload).__name__}")
        task_id = payload.get("id")
        if task_id is None or isinstance(task_id, bool):
            raise ValueError("Task payload is missing 'id'")
        completed = payload.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"Task payload has non-boolean 'completed': {completed!r}")
        text = payload.get("task", payload.get("text", ""))
        return cls(
            id=task_id,
            text="" if text is None else str(text),
            completed=completed,
            created_at=_parse_iso_datetime(payload.get("created_at")),
            updated_at=_parse_iso_datetime(payload.get("updated_at")),
        )

    def with_completed(self, completed: bool) -> "Task":
        """Return a copy of this task with a new completion state."""
        return replace(self, completed=completed)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the task to a JSON-safe dictionary."""
        return {
            "id": self.id,
            "task": self.text,
            "completed": self.completed,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class Counters:
    """Task counts shown above the lists; ``total`` is always the sum of the other two."""

    completed_count: int = 0
    pending_count: int = 0

    @property
    def total(self) -> int:
        return self.completed_count + self.pending_count

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "completed_count": self.completed_count,
            "pending_count": self.pending_count,
        }


@dataclass(frozen=True)
class ViewState:
    """
    Immutable snapshot of every known task, in display order.

    The pending and done partitions and the counters are all derived from
    ``tasks``, so a task can never sit in both partitions and the counters
    can never drift from the lists.

    Attributes:
        tasks: Known tasks, unique by id, in display order.
    """

    tasks: tuple[Task, ...] = ()

    @classmethod
    def from_tasks(cls, tasks: Iterable[Task]) -> "ViewState":
        """
        Build a view from a full server task set, keeping server order.

        Duplicate ids keep their first position and their last value.
        """
        by_id: dict[str, Task] = {}
        for task in tasks:
            by_id[_id_key(task.id)] = task
        return cls(tasks=tuple(by_id.values()))

    @property
    def pending(self) -> tuple[Task, ...]:
        return tuple(task for task in self.tasks if not task.completed)

    @property
    def done(self) -> tuple[Task, ...]:
        return tuple(task for task in self.tasks if task.completed)

    @property
    def counters(self) -> Counters:
        completed = sum(1 for task in self.tasks if task.completed)
        return Counters(completed_count=completed, pending_count=len(self.tasks) - completed)

    def get(self, task_id: TaskId) -> Task | None:
        """Return the task with this id, or ``None`` if the view does not hold it."""
        key = _id_key(task_id)
        for task in self.tasks:
            if _id_key(task.id) == key:
                return task
        return None

    def __contains__(self, task_id: object) -> bool:
        return isinstance(task_id, (int, str)) and self.get(task_id) is not None

    def with_created(self, task: Task) -> "ViewState":
        """
        Return a view that includes a newly created task.

        The task is appended to the end.  If a concurrent refresh already
        brought in the same id, that entry is replaced in place instead.
        """
        key = _id_key(task.id)
        if self.get(task.id) is not None:
            return ViewState(
                tasks=tuple(task if _id_key(t.id) == key else t for t in self.tasks)
            )
        return ViewState(tasks=self.tasks + (task,))

    def with_completion(self, task: Task) -> "ViewState":
        """
        Return a view where ``task`` replaces the entry with the same id.

        A task whose completion state changed moves to the end of its new
        partition.  Unknown ids leave the view unchanged.
        """
        current = self.get(task.id)
        if current is None:
            return self
        key = _id_key(task.id)
        if current.completed == task.completed:
            return ViewState(
                tasks=tuple(task if _id_key(t.id) == key else t for t in self.tasks)
            )
        remaining = tuple(t for t in self.tasks if _id_key(t.id) != key)
        return ViewState(tasks=remaining + (task,))

    def without(self, task_id: TaskId) -> "ViewState":
        """Return a view with no task of this id; absent ids are a no-op."""
        if self.get(task_id) is None:
            return self
        key = _id_key(task_id)
        return ViewState(tasks=tuple(t for t in self.tasks if _id_key(t.id) != key))

    def to_dict(self) -> dict[str, Any]:
        """Serialise the partitions and counters to a JSON-safe dictionary."""
        return {
            "pending": [task.to_dict() for task in self.pending],
            "done": [task.to_dict() for task in self.done],
            "counters": self.counters.to_dict(),
        }
