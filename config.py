"""Configuration management for plugkit."""

import os

# Path constants are defined here rather than taken from utils.runtime
# (utils.terminal_ui imports Config, and utils.runtime is in the utils package)
_RUNTIME_DIR = os.path.join(os.path.expanduser("~"), ".plugkit")
_CONFIG_FILE = os.path.join(_RUNTIME_DIR, "config")

_VALID_THEMES = ("dark", "light")
_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _load_config(path: str) -> dict[str, str]:
    """Parse a KEY=VALUE config file, skipping comments and blank lines."""
    cfg: dict[str, str] = {}
    if not os.path.isfile(path):
        return cfg
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, _, value = line.partition("=")
            # Strip inline comments (# ...) from the value
            if "#" in value:
                value = value[: value.index("#")]
            cfg[key.strip()] = value.strip()
    return cfg


_cfg = _load_config(_CONFIG_FILE)

# Settings that failed to parse, reported by Config.validate()
_invalid_values: dict[str, str] = {}


def _int_setting(key: str, default: int) -> int:
    """Read an integer setting, falling back to default when the value is malformed."""
    raw = _cfg.get(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        _invalid_values[key] = raw
        return default


class Config:
    """Configuration for plugkit.

    Values come from ~/.plugkit/config. Access them directly via Config.XXX.
    """

    # Plugin tree layout, relative to the repository root
    PLUGINS_DIR = _cfg.get("PLUGINS_DIR", "plugins")
    MARKETPLACE_FILE = _cfg.get("MARKETPLACE_FILE", ".claude-plugin/marketplace.json")

    # Skill validation
    SKILL_DESCRIPTION_MAX_LENGTH = _int_setting("SKILL_DESCRIPTION_MAX_LENGTH", 1024)

    # Scaffolding defaults written into new plugin.json manifests
    PLUGIN_LICENSE = _cfg.get("PLUGIN_LICENSE", "MIT")
    PLUGIN_REPOSITORY = _cfg.get("PLUGIN_REPOSITORY", "")

    # Logging Configuration
    # Note: Logging is controlled via --verbose flag; files go to ~/.plugkit/logs/
    LOG_LEVEL = _cfg.get("LOG_LEVEL", "DEBUG").upper()

    # Terminal output
    TUI_THEME = _cfg.get("TUI_THEME", "dark")  # "dark" or "light"

    @classmethod
    def validate(cls):
        """Validate configuration values.

        Raises:
            ValueError: If a configuration value is invalid
        """
        if _invalid_values:
            bad = ", ".join(f"{key}={raw}" for key, raw in _invalid_values.items())
            raise ValueError(f"Expected an integer value: {bad}.")
        if not cls.PLUGINS_DIR:
            raise ValueError("PLUGINS_DIR must not be empty. Please set it in ~/.plugkit/config.")
        if cls.SKILL_DESCRIPTION_MAX_LENGTH <= 0:
            raise ValueError("SKILL_DESCRIPTION_MAX_LENGTH must be a positive integer.")
        if cls.TUI_THEME not in _VALID_THEMES:
            raise ValueError(f"TUI_THEME must be one of {', '.join(_VALID_THEMES)}.")
        if cls.LOG_LEVEL not in _VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(_VALID_LOG_LEVELS)}.")
