# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # Storage (required)
    "TRACKER_DATABASE_URL": (
        "Connection string, e.g. sqlite:///.local/task_tracker/tasks.sqlite3. "
        "DATABASE_URL is accepted as a fallback. Missing => startup fails."
    ),
    # App / logging
    "TRACKER_APP_NAME": "App display name (default: task-tracker).",
    "TRACKER_LOG_LEVEL": "Console logging level (default: INFO).",
    # Connectors
    "TRACKER_WEB_ENABLED": "Run the web UI / JSON API (true/false, default true).",
    "TRACKER_CONSOLE_ENABLED": "Run the console REPL (true/false, default false).",
    # Web
    "TRACKER_WEB_HOST": "Bind host (default: 127.0.0.1).",
    "TRACKER_WEB_PORT": "Bind port (default: 5000).",
    "TRACKER_SECRET_KEY": "Flask secret key used to sign flash messages.",
    # Paths (gitignored)
    "TRACKER_DATA_DIR": "Local data directory for logs (default: .local/task_tracker).",
}
