from __future__ import annotations

from .models.task import Task
from .storage import JsonFileTaskPersistence, TaskFileParseError, TaskPersistence
from .store import TaskStore

__all__ = [
    "JsonFileTaskPersistence",
    "Task",
    "TaskFileParseError",
    "TaskPersistence",
    "TaskStore",
]
