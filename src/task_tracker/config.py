# src/task_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time: the connection string is validated
  by bootstrap, at startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlsplit

from dotenv import load_dotenv

ENV_PREFIX = "TRACKER"

SQLITE_SCHEMES = {"sqlite", "sqlite3"}


class ConfigError(RuntimeError):
    """Startup configuration is missing or invalid."""


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def sqlite_path_from_url(database_url: str | None) -> Path:
    """
    Resolve the connection string to a SQLite file path.

    Accepted forms:
      sqlite:///relative/path.db
      sqlite:////absolute/path.db
      /plain/path.db  (or a relative plain path)
    """
    raw = (database_url or "").strip()
    if not raw:
        raise ConfigError(
            f"Database connection string is not set (use {_k('DATABASE_URL')} or DATABASE_URL)."
        )

    if "://" not in raw:
        return Path(raw).expanduser()

    parts = urlsplit(raw)
    if parts.scheme.lower() not in SQLITE_SCHEMES:
        raise ConfigError(f"Unsupported database scheme {parts.scheme!r}; only sqlite is supported.")

    # sqlite:///rel.db -> path "/rel.db"; sqlite:////abs.db -> path "//abs.db"
    path = unquote(parts.path)
    if path.startswith("//"):
        path = path[1:]
    elif path.startswith("/"):
        path = path[1:]
    if not path or path == ":memory:":
        raise ConfigError(f"Database URL {raw!r} does not name a database file.")
    return Path(path).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Storage ----
    database_url: Optional[str]

    # ---- Connector flags ----
    web_enabled: bool
    console_enabled: bool

    # ---- Web ----
    web_host: str
    web_port: int
    secret_key: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path

    @property
    def tasks_db_path(self) -> Path:
        return sqlite_path_from_url(self.database_url)

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "task-tracker") or "task-tracker"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        database_url = _first_env(_k("DATABASE_URL"), "DATABASE_URL", default=None)

        web_enabled = _env_bool(_k("WEB_ENABLED"), True)
        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), False)

        web_host = _env(_k("WEB_HOST"), "127.0.0.1")
        web_port = _env_int(_k("WEB_PORT"), 5000)
        # Only signs flash messages; there is no login.
        secret_key = _env(_k("SECRET_KEY"), "task-tracker-dev")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/task_tracker"))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            database_url=database_url,
            web_enabled=web_enabled,
            console_enabled=console_enabled,
            web_host=web_host,
            web_port=web_port,
            secret_key=secret_key,
            data_dir=data_dir,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env; use config_local.py only for safe overrides.
try:
    import config_local as _config_local  # type: ignore

    if hasattr(_config_local, "CONSOLE_ENABLED"):
        object.__setattr__(SETTINGS, "console_enabled", bool(_config_local.CONSOLE_ENABLED))  # type: ignore[misc]
    if hasattr(_config_local, "WEB_ENABLED"):
        object.__setattr__(SETTINGS, "web_enabled", bool(_config_local.WEB_ENABLED))  # type: ignore[misc]
except ImportError:
    pass


def get_settings() -> Settings:
    return SETTINGS
