"""Runtime directory management for plugkit.

All runtime data is stored under ~/.plugkit/ directory:
- config: Configuration file (read by config.py, never written)
- logs/: Log files (only created with --verbose)
"""

import os

RUNTIME_DIR = os.path.join(os.path.expanduser("~"), ".plugkit")


def get_log_dir() -> str:
    """Get the log directory path.

    Returns:
        Path to ~/.plugkit/logs/
    """
    return os.path.join(RUNTIME_DIR, "logs")


def ensure_runtime_dirs(create_logs: bool = False) -> None:
    """Ensure runtime directories exist.

    Args:
        create_logs: Whether to create the logs directory (for --verbose mode)
    """
    os.makedirs(RUNTIME_DIR, exist_ok=True)

    if create_logs:
        os.makedirs(os.path.join(RUNTIME_DIR, "logs"), exist_ok=True)
