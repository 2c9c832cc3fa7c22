from __future__ import annotations

import datetime as _dt
from pathlib import Path

from todolist.models.task import Task
from todolist.observability import get_json_logger, get_metrics
from todolist.storage import JsonFileTaskPersistence, TaskPersistence


class TaskStore:
    """Ordered, position-addressed task collection with write-through persistence.

    - A task's index in ``list_tasks()`` is its identity for ``edit``, ``delete``
      and ``mark_complete``; positions shift after a delete
    - Out-of-range positions (including negative ones) are ignored silently
    - Every mutation rewrites the whole collection through the persistence
      adapter before returning; write errors propagate to the caller
    - Queries (``list_tasks``, ``search``, ``sort_by_*``) return new lists and
      never reorder the backing collection
    """

    def __init__(self, persistence: TaskPersistence | str | Path = "tasks.json") -> None:
        if isinstance(persistence, str | Path):
            persistence = JsonFileTaskPersistence(persistence)
        self._persistence = persistence
        self._logger = get_json_logger("todolist.store")
        # Parse errors propagate: no fallback to an empty collection
        self._tasks: list[Task] = persistence.load()
        self._logger.info(
            "task store ready",
            extra={"event": "store_loaded", "count": len(self._tasks)},
        )

    def __len__(self) -> int:
        return len(self._tasks)

    # ----------------------------
    # Mutations
    # ----------------------------
    def create(
        self,
        title: str,
        description: str,
        due_date: _dt.date,
        priority: str,
        category: str,
    ) -> None:
        self._tasks.append(
            Task(
                title=title,
                description=description,
                due_date=due_date,
                priority=priority,
                category=category,
            )
        )
        self._logger.debug(
            "task created",
            extra={"event": "task_created", "op": "create", "position": len(self._tasks) - 1},
        )
        self._commit("create")

    def edit(
        self,
        position: int,
        title: str,
        description: str,
        due_date: _dt.date,
        priority: str,
        category: str,
    ) -> None:
        if not self._valid(position, "edit"):
            return
        self._tasks[position] = Task(
            title=title,
            description=description,
            due_date=due_date,
            priority=priority,
            category=category,
            is_complete=self._tasks[position].is_complete,
        )
        self._logger.debug(
            "task edited", extra={"event": "task_edited", "op": "edit", "position": position}
        )
        self._commit("edit")

    def delete(self, position: int) -> None:
        if not self._valid(position, "delete"):
            return
        del self._tasks[position]
        self._logger.debug(
            "task deleted", extra={"event": "task_deleted", "op": "delete", "position": position}
        )
        self._commit("delete")

    def mark_complete(self, position: int) -> None:
        if not self._valid(position, "complete"):
            return
        self._tasks[position].is_complete = True
        self._logger.debug(
            "task completed",
            extra={"event": "task_completed", "op": "complete", "position": position},
        )
        self._commit("complete")

    # ----------------------------
    # Queries
    # ----------------------------
    def list_tasks(self) -> list[Task]:
        return list(self._tasks)

    def search(self, query: str) -> list[Task]:
        """Tasks whose title or description contains ``query``, ignoring case.

        Relative order is preserved; an empty query matches every task.
        """
        return [t for t in self._tasks if t.matches(query)]

    def sort_by_due_date(self) -> list[Task]:
        return sorted(self._tasks, key=lambda t: t.due_date)

    def sort_by_priority(self) -> list[Task]:
        """High, Medium, Low, then any other priority text; stable within a rank."""
        return sorted(self._tasks, key=lambda t: t.priority_rank())

    # ----------------------------
    # Internals
    # ----------------------------
    def _valid(self, position: int, op: str) -> bool:
        # Explicit bounds: a negative index must not wrap around to the tail
        if 0 <= position < len(self._tasks):
            return True
        self._logger.debug(
            "position out of range; ignored",
            extra={"event": "position_ignored", "op": op, "position": position},
        )
        get_metrics().increment("positions_ignored", {"op": op})
        return False

    def _commit(self, op: str) -> None:
        self._persistence.save(self._tasks)
        metrics = get_metrics()
        metrics.increment("task_mutations", {"op": op})
        metrics.increment("persist_writes")


__all__ = ["TaskStore"]
