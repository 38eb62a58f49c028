# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts connectors:
- web server (Flask) in the main thread, or in a background thread when
  the console is enabled too,
- console REPL in the main thread (optional).
"""

from __future__ import annotations

import logging
import sys
import threading

from ..cli.bootstrap import create_initial_state
from ..config import ConfigError, get_settings
from ..connectors.console_connector import run_console_loop
from ..connectors.web_connector import run_web_server
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)

EXIT_CONFIG_ERROR = 2


def _shutdown(state) -> None:
    """Best-effort shutdown."""
    # TaskStore uses short-lived sqlite connections per call; close() is a no-op hook.
    try:
        state.task_store.close()
    except Exception:
        logger.debug("TaskStore close failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (log file: %s)...", settings.app_name, log_file)

    try:
        state = create_initial_state(settings=settings)
    except ConfigError as e:
        logger.critical("Configuration error: %s", e)
        sys.exit(EXIT_CONFIG_ERROR)

    if not settings.web_enabled and not settings.console_enabled:
        logger.warning("Both web and console connectors are disabled; nothing to run.")
        _shutdown(state)
        return

    try:
        if settings.console_enabled:
            if settings.web_enabled:
                web_thread = threading.Thread(
                    target=run_web_server,
                    args=(state,),
                    daemon=True,
                    name="WebConnector",
                )
                web_thread.start()
            run_console_loop(state)
        else:
            run_web_server(state)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
