# tests/test_config.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tracker.cli import main as main_mod
from task_tracker.cli.bootstrap import create_initial_state
from task_tracker.config import ConfigError, Settings, sqlite_path_from_url


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("sqlite:///data/tasks.db", Path("data/tasks.db")),
        ("sqlite:////var/lib/tasks.db", Path("/var/lib/tasks.db")),
        ("/tmp/plain.db", Path("/tmp/plain.db")),
        ("relative.db", Path("relative.db")),
    ],
)
def test_sqlite_path_from_url(url: str, expected: Path) -> None:
    assert sqlite_path_from_url(url) == expected


@pytest.mark.parametrize("url", [None, "", "   ", "postgres://u:p@host/db", "sqlite:///", "sqlite:///:memory:"])
def test_bad_connection_strings(url) -> None:
    with pytest.raises(ConfigError):
        sqlite_path_from_url(url)


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TRACKER_DATABASE_URL", raising=False)
    monkeypatch.setenv("DATABASE_URL", "sqlite:///x.db")
    monkeypatch.setenv("TRACKER_WEB_PORT", "8123")
    monkeypatch.setenv("TRACKER_CONSOLE_ENABLED", "yes")
    s = Settings.from_env()
    assert s.database_url == "sqlite:///x.db"
    assert s.tasks_db_path == Path("x.db")
    assert s.web_port == 8123
    assert s.console_enabled is True

    monkeypatch.setenv("TRACKER_DATABASE_URL", "sqlite:///y.db")
    assert Settings.from_env().database_url == "sqlite:///y.db"


def test_missing_database_url_is_fatal_at_bootstrap(tmp_path: Path) -> None:
    settings = SimpleNamespace(database_url=None, data_dir=tmp_path)
    with pytest.raises(ConfigError):
        create_initial_state(settings=settings)


def test_main_exits_on_missing_database_url(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    settings = SimpleNamespace(
        app_name="t",
        log_level="INFO",
        database_url=None,
        data_dir=tmp_path,
        web_enabled=True,
        console_enabled=False,
    )
    monkeypatch.setattr(main_mod, "get_settings", lambda: settings)
    monkeypatch.setattr(main_mod, "setup_logging", lambda **kwargs: None)

    with pytest.raises(SystemExit) as exc:
        main_mod.main()
    assert exc.value.code == main_mod.EXIT_CONFIG_ERROR
