"""
Profile models: the file being edited and the block written into it.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class ProfileDocument(BaseModel):
    """In-memory copy of a profile file, owned by a single provisioning call."""

    path: Path
    raw_content: str = ""
    existed_before_write: bool = False


class MarkedBlock(BaseModel):
    """A delimited, engine-owned region wrapping one assignment line.

    The start and end markers are fixed literals that are not expected
    anywhere else in a hand-edited profile.
    """

    model_config = ConfigDict(frozen=True)

    start_marker: str
    end_marker: str
    body_line: str

    @property
    def text(self) -> str:
        """The block as it appears in a file, without a trailing newline."""
        return f"{self.start_marker}\n{self.body_line}\n{self.end_marker}"
