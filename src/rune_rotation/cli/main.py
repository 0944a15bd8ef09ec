# src/rune_rotation/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then either:
- runs the console REPL in the main thread, or
- steps the rotation headlessly until SIGINT/SIGTERM.
"""

from __future__ import annotations

import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..tasks.rotation import run_rotation
from ..tasks.task_api import format_task_table

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)
    logger.info("%s", format_task_table(state.registry))

    # Use an Event so main can wait without a busy while-loop.
    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            try:
                signal.signal(signal.SIGINT, _handle_signal)
                signal.signal(signal.SIGTERM, _handle_signal)
            except (ValueError, OSError):
                # Some platforms may not support SIGTERM, etc.
                logger.debug("Signal handlers not installed.", exc_info=True)

            logger.info("Console disabled. Rotating headlessly. Press Ctrl+C to stop.")
            run_rotation(
                state.runner,
                stop_main,
                interval_seconds=settings.step_interval_seconds,
                lock=state.lock,
            )
    finally:
        logger.info("%s", format_task_table(state.registry))
        logger.info("Bye.")


if __name__ == "__main__":
    main()
