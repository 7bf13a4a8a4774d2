"""Package logging for lazydata exports and imports."""

# Module responsibilities:
# - Send every lazydata.* logger to one rotating log file; only warnings reach the console.
# - Let LAZYDATA_LOG_DIR (or an explicit directory) relocate the log file.

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

LOG_DIR_ENV = "LAZYDATA_LOG_DIR"
DEFAULT_LOG_BASE = Path.home() / "LazyData" / "logs"
LOG_FILE_NAME = "lazydata.log"
PACKAGE_LOGGER = "lazydata"
_LOG_CONFIGURED = False


def _log_directory(log_dir: Optional[Path] = None) -> Path:
    env_dir = os.environ.get(LOG_DIR_ENV)
    target = log_dir or (Path(env_dir).expanduser() if env_dir else DEFAULT_LOG_BASE)
    target.mkdir(parents=True, exist_ok=True)
    return target


def _install_handlers(log_dir: Optional[Path] = None) -> None:
    """Attach the file and console handlers to the package logger, once per process."""
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Record writes and reads (rows, columns, output paths) for later inspection.
    file_handler = logging.handlers.RotatingFileHandler(
        _log_directory(log_dir) / LOG_FILE_NAME,
        maxBytes=2_000_000,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.INFO)

    # Library callers only see problems such as stripped characters.
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.WARNING)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.INFO)
    package_logger.addHandler(file_handler)
    package_logger.addHandler(console_handler)
    package_logger.propagate = False

    _LOG_CONFIGURED = True


def get_logger(name: str, log_dir: Optional[Path] = None) -> logging.Logger:
    """Return ``lazydata.<name>``, installing the package handlers on first use.

    Args:
        name: Module-level suffix such as ``"excel_writer"``.
        log_dir: Directory for ``lazydata.log``. Defaults to ``LAZYDATA_LOG_DIR``
            and then ``~/LazyData/logs``. Only the first call in a process
            decides where the file lives.
    """

    _install_handlers(log_dir)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
