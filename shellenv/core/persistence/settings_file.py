"""
Settings sidecar: read one string field from a JSON settings document.

The sidecar is owned by another tool, so reading is tolerant: a missing
file, undecodable or corrupt JSON, a missing key or a non-string value
all mean "no value" rather than an error.
"""

from __future__ import annotations

import json
import logging
from functools import partial
from pathlib import Path
from typing import Any

from shellenv.core.models.request import SettingsLookup

logger = logging.getLogger(__name__)

# Default settings filename and field (dotted path into the document)
DEFAULT_SETTINGS_FILE = "settings.json"
DEFAULT_SETTINGS_KEY = "env.ANTHROPIC_API_KEY"


def load_settings(path: Path) -> dict[str, Any]:
    """Load a settings document; anything unreadable loads as ``{}``."""
    if not path.is_file():
        logger.debug("No settings file at %s", path)
        return {}

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.warning("Corrupt settings file %s: %s; ignoring", path, e)
        return {}
    except UnicodeDecodeError as e:
        logger.warning("Settings file %s is not UTF-8: %s; ignoring", path, e)
        return {}
    except OSError as e:
        logger.warning("Cannot read settings from %s: %s; ignoring", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Expected a JSON object in %s, got %s", path, type(data).__name__)
        return {}
    return data


def read_settings_value(path: Path, key: str = DEFAULT_SETTINGS_KEY) -> str | None:
    """Walk ``key`` (e.g. ``env.ANTHROPIC_API_KEY``) and return a string or None."""
    node: Any = load_settings(path)
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]

    if not isinstance(node, str):
        return None
    return node


def settings_lookup(path: Path, key: str = DEFAULT_SETTINGS_KEY) -> SettingsLookup:
    """Build the zero-argument lookup capability a ProvisionRequest expects."""
    return partial(read_settings_value, Path(path).expanduser(), key)


def settings_path(config_dir: Path) -> Path:
    """Settings file inside a tool's config directory."""
    return config_dir / DEFAULT_SETTINGS_FILE
