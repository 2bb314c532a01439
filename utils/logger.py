"""Logging configuration for plugkit.

Records go to a per-run file under ~/.plugkit/logs/ once setup_logger() has
run, which main.py does only for --verbose. Otherwise they are dropped.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .runtime import get_log_dir

_log_file_path: Optional[str] = None


def setup_logger(log_level: Optional[str] = None) -> None:
    """Attach a file handler to the root logger. Later calls are no-ops.

    Args:
        log_level: Logging level name (default: Config.LOG_LEVEL)
    """
    global _log_file_path

    if _log_file_path is not None:
        return

    if log_level is None:
        from config import Config

        log_level = Config.LOG_LEVEL
    level = getattr(logging, log_level.upper(), logging.DEBUG)

    log_dir = Path(get_log_dir())
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"plugkit_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )
    )
    logging.root.setLevel(level)
    logging.root.addHandler(handler)
    _log_file_path = str(log_file)

    logging.getLogger(__name__).info(f"Logging to {_log_file_path} at {log_level}")


def get_logger(name: str) -> logging.Logger:
    """Get a module logger (typically get_logger(__name__))."""
    return logging.getLogger(name)


def get_log_file_path() -> Optional[str]:
    """Path of the current log file, or None when file logging is off."""
    return _log_file_path
