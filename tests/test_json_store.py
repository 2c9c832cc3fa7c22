from __future__ import annotations

import datetime as dt
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from tests.helpers.store import make_task
from todolist.storage import JsonFileTaskPersistence, TaskFileParseError
from todolist.store import TaskStore


def _record(**overrides: object) -> dict[str, object]:
    rec: dict[str, object] = {
        "title": "Buy milk",
        "description": "2%",
        "dueDate": "2024-05-01",
        "priority": "High",
        "category": "Errand",
        "isComplete": False,
    }
    rec.update(overrides)
    return rec


def test_missing_file_loads_empty(tasks_path: Path) -> None:
    assert JsonFileTaskPersistence(tasks_path).load() == []
    assert not tasks_path.exists()


def test_save_writes_camel_case_records(tasks_path: Path) -> None:
    JsonFileTaskPersistence(tasks_path).save(
        [make_task("Buy milk", description="2%", due=dt.date(2024, 5, 1), priority="High")]
    )

    data = json.loads(tasks_path.read_text(encoding="utf-8"))
    assert data == [
        {
            "title": "Buy milk",
            "description": "2%",
            "dueDate": "2024-05-01",
            "priority": "High",
            "category": "",
            "isComplete": False,
        }
    ]


def test_round_trip_through_a_fresh_store(tasks_path: Path) -> None:
    first = TaskStore(tasks_path)
    first.create("Buy milk", "2% – organic", dt.date(2024, 5, 1), "High", "Errand")
    first.create("Write report", "Q2", dt.date(2024, 4, 15), "Whenever", "Work")
    first.create("Ünïcode", "", dt.date(1999, 12, 31), "Low", "")
    first.mark_complete(1)

    second = TaskStore(tasks_path)

    assert [t.model_dump() for t in second.list_tasks()] == [
        t.model_dump() for t in first.list_tasks()
    ]
    assert second.list_tasks()[1].is_complete is True
    assert second.list_tasks()[2].due_date == dt.date(1999, 12, 31)


def test_save_overwrites_previous_contents(tasks_path: Path) -> None:
    persistence = JsonFileTaskPersistence(tasks_path)
    persistence.save([make_task("a"), make_task("b")])
    persistence.save([make_task("c")])

    assert [t.title for t in persistence.load()] == ["c"]


def test_save_creates_parent_directories(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "tasks.json"
    JsonFileTaskPersistence(path).save([])
    assert json.loads(path.read_text(encoding="utf-8")) == []


def test_indent_option_pretty_prints(tasks_path: Path) -> None:
    JsonFileTaskPersistence(tasks_path, indent=2).save([make_task("a")])
    text = tasks_path.read_text(encoding="utf-8")
    assert text.startswith("[\n  {")


@pytest.mark.parametrize(
    "content",
    [
        "",
        "not json",
        "{}",
        json.dumps({"title": "x"}),
        json.dumps([_record(dueDate="2024-13-40")]),
        json.dumps([_record(dueDate="yesterday")]),
        json.dumps([_record(isComplete="yes")]),
        json.dumps([_record(title=5)]),
        json.dumps([{k: v for k, v in _record().items() if k != "priority"}]),
        json.dumps([_record(), "oops"]),
    ],
)
def test_malformed_file_raises_parse_error(tasks_path: Path, content: str) -> None:
    tasks_path.write_text(content, encoding="utf-8")

    with pytest.raises(TaskFileParseError) as excinfo:
        JsonFileTaskPersistence(tasks_path).load()

    assert excinfo.value.path == tasks_path
    assert isinstance(excinfo.value.__cause__, ValidationError)


def test_parse_error_propagates_out_of_store_construction(tasks_path: Path) -> None:
    tasks_path.write_text("[{", encoding="utf-8")
    with pytest.raises(TaskFileParseError):
        TaskStore(tasks_path)
    # No fallback: the corrupt file is left as it was
    assert tasks_path.read_text(encoding="utf-8") == "[{"


def test_write_failure_propagates(tmp_path: Path) -> None:
    # A regular file where the parent directory should be makes the write fail
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = TaskStore(JsonFileTaskPersistence(blocker / "tasks.json"))
    assert store.list_tasks() == []

    with pytest.raises(OSError):
        store.create("x", "", dt.date(2024, 1, 1), "Low", "")


def test_extra_keys_are_ignored(tasks_path: Path) -> None:
    tasks_path.write_text(json.dumps([_record(notes="legacy")]), encoding="utf-8")
    tasks = JsonFileTaskPersistence(tasks_path).load()
    assert tasks[0].title == "Buy milk"
    assert tasks[0].due_date == dt.date(2024, 5, 1)


def test_unencodable_text_leaves_previous_file_intact(tasks_path: Path) -> None:
    store = TaskStore(tasks_path)
    store.create("keep me", "", dt.date(2024, 1, 1), "Low", "")
    before = tasks_path.read_bytes()

    # Lone surrogate, as produced by surrogateescape on a non-UTF-8 argv byte
    with pytest.raises(UnicodeEncodeError):
        store.create("bad \udcff", "", dt.date(2024, 1, 2), "Low", "")

    assert tasks_path.read_bytes() == before
    assert [t.title for t in TaskStore(tasks_path).list_tasks()] == ["keep me"]
