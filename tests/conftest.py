# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tracker.cli.bootstrap import create_initial_state
from task_tracker.core.state import AppState
from task_tracker.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="task-tracker-test",
        log_level="DEBUG",
        database_url=f"sqlite:///{tmp_path / 'tasks.sqlite3'}",
        data_dir=tmp_path / "data",
        web_enabled=False,
        console_enabled=False,
        web_host="127.0.0.1",
        web_port=0,
        secret_key="test",
    )


@pytest.fixture()
def store(tmp_path: Path) -> TaskStore:
    return TaskStore(tmp_path / "store.sqlite3")


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState built through the real composition root.

    NOTE: We keep the real SQLite store here because its correctness is part
    of what we want to test.
    """
    return create_initial_state(settings=settings)
