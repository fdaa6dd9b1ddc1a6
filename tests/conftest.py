"""
Shared test fixtures and configuration.
"""

import json
from pathlib import Path

import pytest

from shellenv.core.models import EnvironmentSnapshot


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """A throwaway home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def zsh_env(home: Path) -> EnvironmentSnapshot:
    """A Linux zsh session with nothing exported."""
    return EnvironmentSnapshot(platform="linux", environ={"SHELL": "/bin/zsh"}, home=home)


@pytest.fixture
def write_settings(tmp_path: Path):
    """Write a settings.json sidecar holding an API key; returns its path."""

    def _write(api_key, name: str = "settings.json") -> Path:
        config_dir = tmp_path / "config"
        config_dir.mkdir(exist_ok=True)
        path = config_dir / name
        path.write_text(json.dumps({"env": {"ANTHROPIC_API_KEY": api_key}}, indent=2))
        return path

    return _write
