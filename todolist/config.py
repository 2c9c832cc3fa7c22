from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(slots=True)
class TodoConfig:
    tasks_file: Path
    default_priority: str
    json_indent: int | None


def _read_indent(raw: str | None) -> int | None:
    value = (raw or "").strip()
    if not value:
        return None
    try:
        indent = int(value)
    except ValueError:
        # Unparseable indent falls back to compact output
        return None
    return indent if indent >= 0 else None


def load_config(env: dict[str, str] | None = None) -> TodoConfig:
    e: dict[str, Any] = dict(os.environ)
    if env:
        e.update(env)
    tasks_file = (e.get("TODO_TASKS_FILE") or "").strip() or "tasks.json"
    default_priority = (e.get("TODO_DEFAULT_PRIORITY") or "").strip() or "Low"
    return TodoConfig(
        tasks_file=Path(tasks_file),
        default_priority=default_priority,
        json_indent=_read_indent(e.get("TODO_JSON_INDENT")),
    )


__all__ = ["TodoConfig", "load_config"]
