"""
ShellDialect: the closed set of profile syntaxes the engine understands.

The dialect decides two things: how an assignment is written and how a
marker comment is written. ``unknown`` is a normal value, not an error;
it means "cannot provision automatically".
"""

from __future__ import annotations

from enum import Enum

from shellenv.core.data.dialects import _SYNTAX_MAP


class ShellDialect(str, Enum):
    """Shell configuration dialect."""

    ZSH = "zsh"
    BASH = "bash"
    POWERSHELL = "powershell"            # Windows PowerShell 5
    POWERSHELL_CORE = "powershell-core"  # PowerShell 7+
    UNKNOWN = "unknown"

    @property
    def is_powershell(self) -> bool:
        return self in (ShellDialect.POWERSHELL, ShellDialect.POWERSHELL_CORE)

    @property
    def is_posix(self) -> bool:
        return self in (ShellDialect.ZSH, ShellDialect.BASH)

    @property
    def family(self) -> str:
        """Syntax family: ``posix``, ``powershell`` or ``unknown``."""
        if self.is_powershell:
            return "powershell"
        if self.is_posix:
            return "posix"
        return "unknown"

    @property
    def syntax(self) -> dict[str, str]:
        """Rendering syntax for this dialect.

        Unknown dialects render with POSIX syntax, the most common
        target for a profile whose shell cannot be inferred.
        """
        return _SYNTAX_MAP["powershell" if self.is_powershell else "posix"]

    def __str__(self) -> str:
        return self.value
