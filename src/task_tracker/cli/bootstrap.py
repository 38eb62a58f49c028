# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- validates the database connection string (fatal if missing),
- ensures local (gitignored) directories exist,
- wires the task store and the task manager view into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings, sqlite_path_from_url
from ..core.manager import TaskManagerView
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    Raises ConfigError when the connection string is missing or unusable.
    """
    if settings is None:
        settings = get_settings()

    db_path = sqlite_path_from_url(getattr(settings, "database_url", None))

    _ensure_local_dirs(settings)

    store = TaskStore(db_path)
    view = TaskManagerView(store)

    state = AppState(
        settings=settings,
        task_store=store,
        view=view,
    )

    result = view.load()
    if not result.ok:
        logger.warning("Initial task load failed: %s", result.message)
    return state
