"""
Provision use case: make sure a variable is exported from the shell profile.

Decision order (first match wins):

    1. no usable value            -> skipped ("missing API key")
    2. already in the environment -> skipped
    3. no profile for this shell  -> failed  ("set manually")
    4. mkdir -p profile dir       (best effort)
    5. read profile
    6. already assigned there     -> skipped, file untouched
    7. upsert block, no change    -> skipped ("already up to date")
    8. write                      -> updated (+ reload hint)

Never raises. Every I/O failure ends as a failed result carrying the
underlying error text.

Each call is a read-modify-write of one file with no locking. Callers must
serialize calls against the same profile; concurrent processes can race.
"""

from __future__ import annotations

import logging
from pathlib import Path

from shellenv.adapters.shell.filesystem import ProfileFilesystem
from shellenv.core.models.dialect import ShellDialect
from shellenv.core.models.environment import EnvironmentSnapshot
from shellenv.core.models.request import ProvisionRequest
from shellenv.core.models.result import ProvisionResult
from shellenv.core.observability.logging_config import register_secret
from shellenv.core.services.assignment_scan import has_effective_assignment
from shellenv.core.services.block_codec import render_block, upsert_block
from shellenv.core.services.dialect_detect import detect_dialect, detect_dialect_from_path
from shellenv.core.services.profile_locator import resolve_profile

logger = logging.getLogger(__name__)


def resolve_target(
    request: ProvisionRequest,
    snapshot: EnvironmentSnapshot,
) -> tuple[ShellDialect, Path | None]:
    """Resolve the (dialect, profile path) pair for a request."""
    return locate_target(snapshot, request.explicit_profile_path)


def locate_target(
    snapshot: EnvironmentSnapshot,
    explicit: Path | None = None,
) -> tuple[ShellDialect, Path | None]:
    """Dialect and profile for ``snapshot``, optionally pinned to a path.

    With an explicit path the dialect comes from its file name, falling
    back to the environment when the name is not recognized.
    """
    if explicit is not None:
        dialect = detect_dialect_from_path(explicit)
        if dialect is ShellDialect.UNKNOWN:
            dialect = detect_dialect(snapshot)
        return dialect, resolve_profile(dialect, snapshot, explicit_path=explicit)

    dialect = detect_dialect(snapshot)
    return dialect, resolve_profile(dialect, snapshot)


def reload_hint(dialect: ShellDialect, path: Path) -> str:
    """Command that loads the new profile into the current session."""
    return dialect.syntax["reload_template"].format(path=path)


def _desired_value(request: ProvisionRequest) -> str | None:
    """Explicit value if usable, else whatever the settings lookup yields."""
    value = request.normalize(request.desired_value)
    if value:
        return value
    try:
        return request.lookup_settings()
    except Exception as e:
        logger.warning("%s: settings lookup failed: %s", request.variable_name, e)
        return None


def _unsupported_message(name: str, snapshot: EnvironmentSnapshot) -> str:
    if snapshot.is_windows:
        return (
            "Unsupported shell; please use PowerShell or Git Bash. "
            f"Set {name} manually."
        )
    return f"Unsupported shell; set {name} manually"


def ensure_shell_env(
    request: ProvisionRequest,
    snapshot: EnvironmentSnapshot | None = None,
    fs: ProfileFilesystem | None = None,
) -> ProvisionResult:
    """Provision ``request.variable_name`` into the user's shell profile.

    Args:
        request: What to provision.
        snapshot: Environment to decide against (default: this process).
        fs: Profile I/O (default: the real filesystem).

    Returns:
        ProvisionResult with status updated, skipped or failed.
    """
    snapshot = snapshot or EnvironmentSnapshot.capture()
    fs = fs or ProfileFilesystem()
    name = request.variable_name

    # ── 1. Desired value ────────────────────────────────────────
    value = _desired_value(request)
    if not value:
        logger.info("%s: no value to provision", name)
        return ProvisionResult.skipped(name, f"{name} not set (missing {request.value_label})")
    register_secret(value)

    # ── 2. Live environment ─────────────────────────────────────
    if request.normalize(snapshot.get(name)):
        logger.info("%s: already set in environment", name)
        return ProvisionResult.skipped(name, f"{name} already set in environment")

    # ── 3. Profile location ─────────────────────────────────────
    dialect, profile = resolve_target(request, snapshot)
    if profile is None:
        logger.warning("%s: cannot locate a profile for dialect %s", name, dialect)
        return ProvisionResult.failure(name, _unsupported_message(name, snapshot), dialect=dialect)

    # ── 4-5. Directory + current content ────────────────────────
    fs.ensure_parent(profile)
    try:
        document = fs.read(profile)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("%s: cannot read %s: %s", name, profile, e)
        return ProvisionResult.failure(
            name, f"Cannot read {profile}: {e}", path=profile, dialect=dialect,
        )

    existing = document.raw_content

    # ── 6. Existing assignment (ours or the user's) ─────────────
    if has_effective_assignment(existing, name, dialect, request.placeholder_values):
        logger.info("%s: already set in %s", name, profile)
        return ProvisionResult.skipped(
            name, f"{name} already set in shell profile", path=profile, dialect=dialect,
        )

    # ── 7. Render + upsert ──────────────────────────────────────
    block = render_block(name, value, dialect, tool=request.tool, label=request.marker_label)
    updated = upsert_block(existing, block)
    if updated == existing:
        return ProvisionResult.skipped(
            name, "Shell profile already up to date", path=profile, dialect=dialect,
        )

    # ── 8. Write ────────────────────────────────────────────────
    try:
        fs.write(profile, updated)
    except OSError as e:
        logger.error("%s: cannot write %s: %s", name, profile, e)
        return ProvisionResult.failure(
            name, f"Cannot write {profile}: {e}", path=profile, dialect=dialect,
        )

    logger.info(
        "%s: wrote block to %s (%s)",
        name, profile, "updated" if document.existed_before_write else "created",
    )
    return ProvisionResult.updated(
        name, path=profile, reload_hint=reload_hint(dialect, profile), dialect=dialect,
    )
