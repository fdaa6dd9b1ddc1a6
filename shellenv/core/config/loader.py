"""
Configuration loader: reads shellenv.yml into domain models.

It reads YAML, validates against Pydantic schemas, and returns a typed
ShellenvConfig. Running without a config file is allowed; the CLI then
works from command-line arguments alone.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from shellenv.core.models.config import ShellenvConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "shellenv.yml"


class ConfigError(Exception):
    """Raised when shellenv configuration is invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for shellenv.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to shellenv.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path) -> ShellenvConfig:
    """Load and validate configuration.

    Args:
        path: Path to shellenv.yml.

    Returns:
        Validated ShellenvConfig model.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = ShellenvConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    names = [v.name for v in config.variables]
    dupes = sorted({n for n in names if names.count(n) > 1})
    if dupes:
        raise ConfigError(f"Duplicate variable names: {', '.join(dupes)}")

    logger.info("Loaded config with %d variables", len(config.variables))
    return config


def load_or_default(path: Path | None = None) -> ShellenvConfig:
    """Load ``path`` (or the discovered file); no file means defaults."""
    if path is None:
        path = find_config_file()
    if path is None:
        logger.debug("No %s found; using defaults", CONFIG_FILE)
        return ShellenvConfig()
    return load_config(path)
