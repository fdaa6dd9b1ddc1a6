"""
L0 Data: shell dialect syntax and profile file mappings.

Maps each dialect family to the literal syntax used when rendering and
scanning assignments, and each dialect to its default profile locations.
"""

from __future__ import annotations

# Both families use ``#`` comments today; keep the leader per family so
# they can diverge without touching the codec.
_SYNTAX_MAP: dict[str, dict[str, str]] = {
    "posix": {
        "comment": "#",
        "assign_prefix": "export ",
        "assign_template": 'export {name}="{value}"',
        "reload_template": "source {path}",
    },
    "powershell": {
        "comment": "#",
        "assign_prefix": "$env:",
        "assign_template": '$env:{name}="{value}"',
        "reload_template": ". $PROFILE",
    },
}

# Candidates are tried in order; the first existing file wins, otherwise
# the last entry is the canonical default. Paths are home-relative.
_PROFILE_MAP: dict[str, list[str]] = {
    "zsh": [".zshrc"],
    "bash": [".bashrc", ".bash_profile"],
    "powershell": ["Documents/WindowsPowerShell/Microsoft.PowerShell_profile.ps1"],
    "powershell-core": ["Documents/PowerShell/Microsoft.PowerShell_profile.ps1"],
}

# Profile base names that identify a POSIX dialect from a path alone.
_PATH_NAME_MAP: dict[str, str] = {
    ".zshrc": "zsh",
    ".bashrc": "bash",
    ".bash_profile": "bash",
}

POWERSHELL_SUFFIX = ".ps1"
