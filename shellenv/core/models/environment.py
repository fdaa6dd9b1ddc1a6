"""
EnvironmentSnapshot: the process environment as an explicit input.

Detection and profile location read only from a snapshot, never from
``os.environ`` directly, so tests can describe any platform without
mutating real process state.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class EnvironmentSnapshot(BaseModel):
    """Frozen view of platform, environment variables and home directory."""

    model_config = ConfigDict(frozen=True)

    platform: str = "linux"                       # sys.platform value
    environ: dict[str, str] = Field(default_factory=dict)
    home: Path = Field(default_factory=Path.home)

    @classmethod
    def capture(cls) -> EnvironmentSnapshot:
        """Snapshot the running process."""
        return cls(platform=sys.platform, environ=dict(os.environ), home=Path.home())

    @property
    def is_windows(self) -> bool:
        return self.platform == "win32"

    def get(self, name: str, default: str | None = None) -> str | None:
        """Look up a variable; names are case-insensitive on Windows."""
        if name in self.environ:
            return self.environ[name]
        if self.is_windows:
            wanted = name.upper()
            for key, value in self.environ.items():
                if key.upper() == wanted:
                    return value
        return default
