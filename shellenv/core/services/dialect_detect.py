"""
L1 Domain: shell dialect detection (pure).

Two entry points:

- ``detect_dialect(snapshot)`` infers the active shell from environment
  signals (``PSModulePath``/``PWSH`` on Windows, ``SHELL`` elsewhere).
- ``detect_dialect_from_path(path)`` infers it from a profile file name.

Both are best-effort heuristics. ``ShellDialect.UNKNOWN`` is an expected
answer and callers must treat it as "cannot provision automatically".
"""

from __future__ import annotations

import logging
import ntpath
import posixpath
from pathlib import Path

from shellenv.core.data.dialects import _PATH_NAME_MAP, POWERSHELL_SUFFIX
from shellenv.core.models.dialect import ShellDialect
from shellenv.core.models.environment import EnvironmentSnapshot

logger = logging.getLogger(__name__)


def detect_dialect(snapshot: EnvironmentSnapshot) -> ShellDialect:
    """Infer the dialect of the user's interactive shell."""
    shell = snapshot.get("SHELL") or ""

    if snapshot.is_windows:
        if snapshot.get("PSModulePath"):
            dialect = ShellDialect.POWERSHELL_CORE if snapshot.get("PWSH") else ShellDialect.POWERSHELL
        elif "bash" in shell:
            # Git Bash / MSYS on Windows
            dialect = ShellDialect.BASH
        else:
            dialect = ShellDialect.UNKNOWN
    else:
        name = posixpath.basename(shell)
        if name == "zsh":
            dialect = ShellDialect.ZSH
        elif name == "bash":
            dialect = ShellDialect.BASH
        else:
            dialect = ShellDialect.UNKNOWN

    logger.debug("Detected dialect %s (platform=%s, SHELL=%r)", dialect, snapshot.platform, shell)
    return dialect


def detect_dialect_from_path(path: Path | str) -> ShellDialect:
    """Infer the dialect from a profile's naming convention."""
    # Windows-style separators are accepted on every platform.
    name = ntpath.basename(str(path))

    if name.lower().endswith(POWERSHELL_SUFFIX):
        # Both PowerShell variants share assignment syntax.
        return ShellDialect.POWERSHELL

    mapped = _PATH_NAME_MAP.get(name)
    if mapped:
        return ShellDialect(mapped)
    return ShellDialect.UNKNOWN
