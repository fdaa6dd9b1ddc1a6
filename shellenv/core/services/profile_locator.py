"""
L1 Domain: resolve the profile file for a dialect.

Only reads the filesystem (existence checks); never creates anything.
Creating the parent directory is the provisioner's job.
"""

from __future__ import annotations

import logging
from pathlib import Path

from shellenv.core.data.dialects import _PROFILE_MAP
from shellenv.core.models.dialect import ShellDialect
from shellenv.core.models.environment import EnvironmentSnapshot

logger = logging.getLogger(__name__)


def resolve_profile(
    dialect: ShellDialect,
    snapshot: EnvironmentSnapshot,
    explicit_path: Path | None = None,
) -> Path | None:
    """Return the profile path to edit, or None when it cannot be located.

    Args:
        dialect: Detected dialect.
        snapshot: Environment snapshot (home directory, ``PROFILE``).
        explicit_path: Caller override. Always wins.

    Returns:
        The resolved path (which may not exist yet), or None for
        ``ShellDialect.UNKNOWN``.
    """
    if explicit_path is not None:
        return Path(explicit_path).expanduser()

    if dialect is ShellDialect.UNKNOWN:
        logger.debug("No profile location for unknown dialect")
        return None

    if dialect.is_powershell:
        # $PROFILE is only exported by some hosts; trust it when it points
        # at a real file.
        profile_env = snapshot.get("PROFILE")
        if profile_env and Path(profile_env).is_file():
            return Path(profile_env)

    candidates = [snapshot.home / rel for rel in _PROFILE_MAP.get(dialect.value, [])]
    if not candidates:
        return None

    for candidate in candidates:
        if candidate.is_file():
            logger.debug("Using existing profile %s", candidate)
            return candidate

    return candidates[-1]
