"""
ProvisionResult: the outcome contract of a provisioning call.

The provisioner NEVER raises. Every path, including I/O failures, ends in
one of three statuses carrying a human-readable message the caller can
print verbatim.
"""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

from shellenv.core.models.dialect import ShellDialect


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class ProvisionResult(BaseModel):
    """Tagged outcome: ``updated``, ``skipped`` or ``failed``."""

    variable: str
    status: Literal["updated", "skipped", "failed"] = "skipped"
    message: str = ""
    path: Path | None = None              # profile touched or inspected
    dialect: ShellDialect | None = None
    reload_hint: str | None = None        # only set when updated
    finished_at: str = Field(default_factory=_now_iso)

    @property
    def ok(self) -> bool:
        """Whether the call ended without failure."""
        return self.status != "failed"

    @property
    def changed(self) -> bool:
        """Whether the profile was written."""
        return self.status == "updated"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    def to_dict(self) -> dict[str, Any]:
        return {
            "variable": self.variable,
            "status": self.status,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "dialect": self.dialect.value if self.dialect else None,
            "reload_hint": self.reload_hint,
        }

    @classmethod
    def updated(
        cls,
        variable: str,
        path: Path,
        reload_hint: str,
        **kwargs: Any,
    ) -> ProvisionResult:
        """Create an updated result; the message is the reload hint."""
        return cls(
            variable=variable,
            status="updated",
            message=f"Run: {reload_hint}",
            path=path,
            reload_hint=reload_hint,
            **kwargs,
        )

    @classmethod
    def skipped(cls, variable: str, reason: str, **kwargs: Any) -> ProvisionResult:
        """Create a skipped result."""
        return cls(variable=variable, status="skipped", message=reason, **kwargs)

    @classmethod
    def failure(cls, variable: str, error: str, **kwargs: Any) -> ProvisionResult:
        """Create a failed result."""
        return cls(variable=variable, status="failed", message=error, **kwargs)
