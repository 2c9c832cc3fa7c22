from __future__ import annotations

import argparse
import datetime as _dt
import json
import sys
from collections.abc import Sequence
from typing import Any

from todolist.config import TodoConfig, load_config
from todolist.models.task import Task
from todolist.storage import JsonFileTaskPersistence, TaskFileParseError
from todolist.store import TaskStore


def _parse_date(value: str) -> _dt.date:
    try:
        return _dt.date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}; expected YYYY-MM-DD") from exc


def render_task(task: Task) -> str:
    return (
        f"{task.title} - {task.description} (Due: {task.due_date.isoformat()}) "
        f"[{task.priority}] [{task.category}]"
    )


def render_match(task: Task) -> str:
    return f"{task.title} - {task.description} (Due: {task.due_date.isoformat()})"


def _print_positions(tasks: Sequence[Task]) -> None:
    """Print tasks prefixed by their store position (the id edit/delete/done take)."""
    for i, task in enumerate(tasks):
        mark = "x" if task.is_complete else " "
        sys.stdout.write(f"{i}: [{mark}] {render_task(task)}\n")


def _print_json(tasks: Sequence[Task]) -> None:
    records: list[dict[str, Any]] = [t.model_dump(mode="json", by_alias=True) for t in tasks]
    sys.stdout.write(json.dumps(records, ensure_ascii=False) + "\n")


def _add_task_fields(p: argparse.ArgumentParser, cfg: TodoConfig) -> None:
    p.add_argument("title")
    p.add_argument("--description", default="")
    p.add_argument("--due", type=_parse_date, required=True, help="Due date, YYYY-MM-DD")
    p.add_argument("--priority", default=cfg.default_priority)
    p.add_argument("--category", default="")


def build_parser(cfg: TodoConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("todolist")
    parser.add_argument("--file", default=str(cfg.tasks_file), help="Task file (JSON)")
    parser.add_argument("--json", action="store_true", help="Print plain-data records")
    sub = parser.add_subparsers(dest="cmd")

    _add_task_fields(sub.add_parser("add", help="Append a new task"), cfg)

    p_edit = sub.add_parser("edit", help="Replace the task at POSITION, keeping its completion")
    p_edit.add_argument("position", type=int)
    _add_task_fields(p_edit, cfg)

    p_delete = sub.add_parser("delete", help="Remove the task at POSITION")
    p_delete.add_argument("position", type=int)

    p_done = sub.add_parser("done", help="Mark the task at POSITION complete")
    p_done.add_argument("position", type=int)

    sub.add_parser("list", help="Show all tasks with their positions")

    p_search = sub.add_parser("search", help="Tasks whose title or description contains QUERY")
    p_search.add_argument("query")

    p_sort = sub.add_parser("sort", help="Show tasks sorted by due date or priority")
    p_sort.add_argument("by", choices=["due", "priority"])

    return parser


def main(argv: list[str] | None = None) -> None:
    cfg = load_config()
    parser = build_parser(cfg)
    args = parser.parse_args(argv)
    cmd = str(getattr(args, "cmd", None) or "")

    if not cmd:
        parser.print_help()
        return

    try:
        store = TaskStore(JsonFileTaskPersistence(args.file, indent=cfg.json_indent))
    except TaskFileParseError as exc:
        sys.stderr.write(f"error: cannot read task file: {exc}\n")
        raise SystemExit(1) from exc

    if cmd == "add":
        store.create(args.title, args.description, args.due, args.priority, args.category)
    elif cmd == "edit":
        store.edit(
            args.position, args.title, args.description, args.due, args.priority, args.category
        )
    elif cmd == "delete":
        store.delete(args.position)
    elif cmd == "done":
        store.mark_complete(args.position)

    if cmd == "search":
        results = store.search(args.query)
        if args.json:
            _print_json(results)
        else:
            for task in results:
                sys.stdout.write(render_match(task) + "\n")
        return

    if cmd == "sort":
        ordered = store.sort_by_due_date() if args.by == "due" else store.sort_by_priority()
        if args.json:
            _print_json(ordered)
        else:
            # Sorted views are projections; positions here are not store positions
            for task in ordered:
                sys.stdout.write(render_task(task) + "\n")
        return

    # list, and the re-render after every mutation
    if args.json:
        _print_json(store.list_tasks())
    else:
        _print_positions(store.list_tasks())


if __name__ == "__main__":
    main()
