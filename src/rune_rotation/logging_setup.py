# src/rune_rotation/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "rotation.log"

# Console thresholds for our own loggers; anything else shows at ERROR only.
_CONSOLE_THRESHOLDS = {
    "rune_rotation.tasks.task_models": logging.INFO,  # arrival poll chatter
}


def _console_filter(record: logging.LogRecord) -> bool:
    if record.name.startswith("rune_rotation."):
        return record.levelno >= _CONSOLE_THRESHOLDS.get(record.name, logging.NOTSET)
    return record.levelno >= logging.ERROR


def setup_logging(*, log_dir: str | Path, console_level: int = logging.INFO) -> Path:
    """Send filtered logs to stderr and everything to <log_dir>/rotation.log."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    fmt = logging.Formatter(
        "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.addFilter(_console_filter)

    file = logging.FileHandler(log_file, encoding="utf-8")

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in (console, file):
        h.setFormatter(fmt)
        root.addHandler(h)
    root.setLevel(logging.DEBUG)

    logging.captureWarnings(True)
    return log_file
