"""
Engine configuration persistence.

Stores logging preferences in a JSON file so applications embedding the
engine can share one setup.
"""

import json
import logging
from pathlib import Path
from typing import TypedDict


class Config(TypedDict, total=False):
    """Engine configuration."""
    log_level: str  # DEBUG, INFO, WARNING, ERROR
    log_format: str  # logging.Formatter format string


DEFAULT_CONFIG: Config = {
    "log_level": "WARNING",
    "log_format": "%(asctime)s %(name)s %(levelname)s %(message)s",
}


def get_config_path(config_dir: Path | str = ".") -> Path:
    """Get path to config file."""
    return Path(config_dir) / ".champions_config.json"


def load_config(config_dir: Path | str = ".") -> Config:
    """Load config from file, or return defaults if not found."""
    path = get_config_path(config_dir)

    if not path.exists():
        return DEFAULT_CONFIG.copy()

    try:
        with open(path, "r", encoding="utf-8") as f:
            saved = json.load(f)
        # Merge with defaults to handle missing keys
        config = DEFAULT_CONFIG.copy()
        config.update(saved)
        return config
    except (json.JSONDecodeError, OSError):
        return DEFAULT_CONFIG.copy()


def save_config(config: Config, config_dir: Path | str = ".") -> bool:
    """Save config to file. Returns True on success."""
    path = get_config_path(config_dir)

    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        return True
    except OSError:
        return False


def set_log_level(level: str, config_dir: Path | str = ".") -> None:
    """Save log level preference."""
    config = load_config(config_dir)
    config["log_level"] = level.upper()
    save_config(config, config_dir)


def configure_logging(config: Config | None = None) -> None:
    """
    Apply logging settings to the root logger.

    The engine modules only create named loggers; call this once from the
    embedding application (or a test) to see their output.
    """
    settings = DEFAULT_CONFIG.copy()
    if config:
        settings.update(config)

    level = getattr(logging, str(settings["log_level"]).upper(), logging.WARNING)
    logging.basicConfig(level=level, format=settings["log_format"], force=True)
