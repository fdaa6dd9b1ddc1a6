"""
Status use case: report how a variable is configured, without writing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from shellenv.adapters.shell.filesystem import ProfileFilesystem
from shellenv.core.models.dialect import ShellDialect
from shellenv.core.models.environment import EnvironmentSnapshot
from shellenv.core.models.request import ProvisionRequest
from shellenv.core.services.assignment_scan import Assignment, find_assignments
from shellenv.core.services.block_codec import block_markers, has_block
from shellenv.core.use_cases.provision import resolve_target


@dataclass
class StatusResult:
    """Observed configuration of one variable."""

    variable: str
    dialect: ShellDialect = ShellDialect.UNKNOWN
    profile: Path | None = None
    profile_exists: bool = False
    in_environment: bool = False
    in_profile: bool = False
    has_block: bool = False
    assignments: list[Assignment] = field(default_factory=list)
    error: str | None = None

    @property
    def configured(self) -> bool:
        return self.in_environment or self.in_profile

    def to_dict(self) -> dict:
        return {
            "variable": self.variable,
            "dialect": self.dialect.value,
            "profile": str(self.profile) if self.profile else None,
            "profile_exists": self.profile_exists,
            "in_environment": self.in_environment,
            "in_profile": self.in_profile,
            "has_block": self.has_block,
            "configured": self.configured,
            "assignments": [a.to_dict() for a in self.assignments],
            "error": self.error,
        }


def check_status(
    request: ProvisionRequest,
    snapshot: EnvironmentSnapshot | None = None,
    fs: ProfileFilesystem | None = None,
) -> StatusResult:
    """Inspect environment and profile for ``request.variable_name``."""
    snapshot = snapshot or EnvironmentSnapshot.capture()
    fs = fs or ProfileFilesystem()
    name = request.variable_name

    result = StatusResult(variable=name)
    result.in_environment = request.normalize(snapshot.get(name)) is not None

    result.dialect, result.profile = resolve_target(request, snapshot)
    if result.profile is None:
        result.error = "Unsupported shell; cannot locate a profile"
        return result

    try:
        document = fs.read(result.profile)
    except (OSError, UnicodeDecodeError) as e:
        result.error = f"Cannot read {result.profile}: {e}"
        return result

    result.profile_exists = document.existed_before_write
    content = document.raw_content

    result.assignments = find_assignments(
        content, name, result.dialect, request.placeholder_values,
    )
    result.in_profile = any(a.effective for a in result.assignments)

    start, end = block_markers(name, result.dialect, tool=request.tool, label=request.marker_label)
    result.has_block = has_block(content, start, end)
    return result
