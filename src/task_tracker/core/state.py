# src/task_tracker/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from .manager import TaskManagerView
from .ports import TaskRepo


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    task_store: TaskRepo
    view: TaskManagerView

    # Connectors hold this while they drive the view.
    lock: threading.RLock = field(default_factory=threading.RLock)
