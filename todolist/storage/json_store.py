from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from todolist.models.task import Task
from todolist.observability import get_json_logger

_TASK_LIST: TypeAdapter[list[Task]] = TypeAdapter(list[Task])


class TaskFileParseError(ValueError):
    """The task file exists but does not hold a valid list of task records."""

    def __init__(self, path: Path, detail: str) -> None:
        super().__init__(f"{path}: {detail}")
        self.path = path
        self.detail = detail


class TaskPersistence:
    """Whole-collection persistence interface.

    Implementations are stateless apart from where they write: each call is a
    complete read or a complete overwrite of the stored collection.
    """

    def save(self, tasks: Sequence[Task]) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    def load(self) -> list[Task]:  # pragma: no cover - interface only
        raise NotImplementedError


class JsonFileTaskPersistence(TaskPersistence):
    """Task collection stored as a JSON array in a single file.

    Record shape (keys are camelCase, dates are ISO ``YYYY-MM-DD``)::

        {"title": str, "description": str, "dueDate": str,
         "priority": str, "category": str, "isComplete": bool}

    A missing file loads as an empty collection. There is no atomic rename and
    no backup: ``save`` overwrites the file in place.
    """

    def __init__(self, path: str | Path = "tasks.json", *, indent: int | None = None) -> None:
        self._path = Path(path)
        self._indent = indent
        self._logger = get_json_logger("todolist.storage")

    @property
    def path(self) -> Path:
        return self._path

    def save(self, tasks: Sequence[Task]) -> None:
        records = [t.model_dump(mode="json", by_alias=True) for t in tasks]
        payload = json.dumps(records, ensure_ascii=False, indent=self._indent)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        # Encode before opening: a failed encode must not truncate the existing file
        data = payload.encode("utf-8")
        self._path.write_bytes(data)
        self._logger.debug(
            "tasks saved",
            extra={"event": "tasks_saved", "path": str(self._path), "count": len(records)},
        )

    def load(self) -> list[Task]:
        if not self._path.exists():
            self._logger.debug(
                "task file missing; starting empty",
                extra={"event": "tasks_loaded", "path": str(self._path), "count": 0},
            )
            return []
        raw = self._path.read_text(encoding="utf-8")
        try:
            # Strict: no coercion of e.g. "yes" to bool or 1 to str
            tasks = _TASK_LIST.validate_json(raw, strict=True)
        except ValidationError as e:
            raise TaskFileParseError(self._path, _summarize(e)) from e
        self._logger.debug(
            "tasks loaded",
            extra={"event": "tasks_loaded", "path": str(self._path), "count": len(tasks)},
        )
        return tasks


def _summarize(error: ValidationError) -> str:
    first = error.errors()[0]
    loc = ".".join(str(p) for p in first.get("loc", ())) or "<root>"
    more = error.error_count() - 1
    suffix = f" (+{more} more)" if more > 0 else ""
    return f"{loc}: {first.get('msg', 'invalid')}{suffix}"


__all__ = ["JsonFileTaskPersistence", "TaskFileParseError", "TaskPersistence"]
