from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from tests.helpers.store import RecordingPersistence
from todolist.observability import reset_metrics


@pytest.fixture(autouse=True)
def _fresh_metrics() -> Generator[None, None, None]:
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's shell settings out of the tests."""
    for name in ("TODO_TASKS_FILE", "TODO_DEFAULT_PRIORITY", "TODO_JSON_INDENT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def tasks_path(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture()
def recorder() -> RecordingPersistence:
    return RecordingPersistence()
