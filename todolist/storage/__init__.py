from __future__ import annotations

from .json_store import JsonFileTaskPersistence, TaskFileParseError, TaskPersistence

__all__ = [
    "JsonFileTaskPersistence",
    "TaskFileParseError",
    "TaskPersistence",
]
