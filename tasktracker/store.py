"""
Task Store — In-Memory Task Storage
====================================
Owns the authoritative mapping of task id → Task for the lifetime of
the process.

Components:
    Task       — The single domain record (id, title, description, priority)
    TaskStore  — Id allocation plus create / get / update / delete

Invariants:
    - Every key in the mapping equals the ``id`` of its value.
    - Ids come from a per-store counter starting at 1. The counter only
      moves forward; ids are never reused, even after a delete.
    - Callers only ever see copies. Mutating a returned Task never
      changes what is stored.

The store does no validation. Deciding what a valid task looks like is
the server's job.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, asdict, replace

from tasktracker.errors import TaskNotFoundError

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
#  Task
# ─────────────────────────────────────────────────────────────

@dataclass
class Task:
    """A titled, described, prioritized unit of work."""

    id: str
    title: str
    description: str = ""
    priority: int = 0

    def to_dict(self) -> dict:
        """Serialize using the wire field names."""
        return asdict(self)


# ─────────────────────────────────────────────────────────────
#  Task Store
# ─────────────────────────────────────────────────────────────

class TaskStore:
    """Thread-safe in-memory task store.

    A single lock guards both the mapping and the id counter, and is
    held for the whole of each operation.
    """

    def __init__(self):
        self._tasks: dict[str, Task] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, title: str, description: str, priority: int) -> Task:
        """Store a new task under the next free id and return a copy."""
        with self._lock:
            task_id = str(self._next_id)
            self._next_id += 1
            task = Task(id=task_id, title=title,
                        description=description, priority=priority)
            self._tasks[task_id] = task
            logger.info("Created task id=%s priority=%d", task_id, priority)
            return replace(task)

    def get(self, task_id: str) -> Task:
        """Return a copy of the task stored under ``task_id``.

        Raises:
            TaskNotFoundError: If no task has that id.
        """
        with self._lock:
            return replace(self._lookup(task_id))

    def update(self, task_id: str, title: str, description: str,
               priority: int) -> Task:
        """Overwrite title, description and priority; the id is kept.

        Raises:
            TaskNotFoundError: If no task has that id. Nothing is changed.
        """
        with self._lock:
            task = self._lookup(task_id)
            task.title = title
            task.description = description
            task.priority = priority
            logger.info("Updated task id=%s", task_id)
            return replace(task)

    def delete(self, task_id: str) -> None:
        """Remove the task stored under ``task_id``.

        Raises:
            TaskNotFoundError: If no task has that id.
        """
        with self._lock:
            self._lookup(task_id)
            del self._tasks[task_id]
            logger.info("Deleted task id=%s", task_id)

    def list(self) -> dict[str, Task]:
        """Snapshot of every task, keyed by id, in creation order."""
        with self._lock:
            return {task_id: replace(task)
                    for task_id, task in self._tasks.items()}

    def clear(self) -> None:
        """Drop every task. The id counter keeps counting."""
        with self._lock:
            self._tasks.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        with self._lock:
            return task_id in self._tasks

    # ─── Internal ─────────────────────────────────────────

    def _lookup(self, task_id: str) -> Task:
        # Caller must hold the lock.
        task = self._tasks.get(task_id)
        if task is None:
            logger.debug("Task id=%s not found", task_id)
            raise TaskNotFoundError(task_id)
        return task
