"""
Filesystem adapter: profile read, parent creation and whole-file write.

The engine touches the disk only through this class so tests can swap it
for a stub that fails on demand. Writes are atomic (write to a temp file
in the same directory, then rename) so a crash never leaves a half-written
profile behind.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from shellenv.core.models.profile import ProfileDocument

logger = logging.getLogger(__name__)


class ProfileFilesystem:
    """Profile file I/O.

    ``read`` and ``write`` raise ``OSError`` on failure; the provisioner
    turns those into failed results. ``ensure_parent`` never raises.
    """

    encoding = "utf-8"

    def ensure_parent(self, path: Path) -> bool:
        """Best-effort ``mkdir -p`` of the profile's directory."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            return True
        except OSError as e:
            # Some hosts lock down profile directories but still allow
            # writing to a file that is already there.
            logger.debug("Cannot create %s: %s", path.parent, e)
            return False

    def read(self, path: Path) -> ProfileDocument:
        """Load a profile; a missing file reads as empty."""
        if not path.exists():
            return ProfileDocument(path=path, raw_content="", existed_before_write=False)

        # newline="" keeps line endings byte-exact for the unchanged check
        with path.open("r", encoding=self.encoding, newline="") as f:
            content = f.read()
        logger.debug("Read %d chars from %s", len(content), path)
        return ProfileDocument(path=path, raw_content=content, existed_before_write=True)

    def write(self, path: Path, content: str) -> None:
        """Replace the profile with ``content`` (atomic write).

        Symlinked profiles (dotfile managers) are written through to their
        target. An existing file keeps its permission bits.
        """
        target = path.resolve() if path.is_symlink() else path
        mode = stat.S_IMODE(target.stat().st_mode) if target.exists() else None

        fd, tmp_path = tempfile.mkstemp(
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with os.fdopen(fd, "w", encoding=self.encoding, newline="") as f:
                f.write(content)
            if mode is not None:
                os.chmod(tmp, mode)
            tmp.replace(target)
            logger.debug("Profile saved to %s", target)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
