"""
L1 Domain: find existing assignments of a variable in profile text (pure).

This is deliberately a line scanner, not a shell parser. It recognizes:

    NAME=value                 (POSIX)
    export NAME="value"        (POSIX)
    $env:NAME="value"          (PowerShell)
    $env:NAME = 'value'        (PowerShell)

Comment lines and blank lines are ignored. A match counts whether it sits
inside an engine-owned block or was typed by the user, so a working
hand-written assignment is never shadowed by a generated one.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from shellenv.core.models.dialect import ShellDialect
from shellenv.core.services.quoted_value import parse_quoted_value


@dataclass(frozen=True)
class Assignment:
    """One assignment line for the target variable."""

    line_number: int          # 1-based
    raw_value: str            # right-hand side as written
    value: str | None         # parsed literal, None when malformed
    effective: bool           # non-empty and not a placeholder

    def to_dict(self) -> dict:
        return {
            "line": self.line_number,
            "effective": self.effective,
        }


def _match_rhs(line: str, name: str, dialect: ShellDialect) -> str | None:
    """Return the right-hand side if ``line`` assigns ``name``."""
    syntax = dialect.syntax
    prefix = syntax["assign_prefix"]

    if dialect.is_powershell:
        # PowerShell identifiers and the env: drive are case-insensitive.
        if line[: len(prefix)].lower() == prefix.lower():
            line = line[len(prefix):]
        if line[: len(name)].lower() != name.lower():
            return None
        rest = line[len(name):].lstrip()
        if not rest.startswith("="):
            return None
        return rest[1:]

    if line.startswith(prefix):
        line = line[len(prefix):].lstrip()
    if not line.startswith(f"{name}="):
        return None
    return line[len(name) + 1:]


def iter_assignments(
    content: str,
    name: str,
    dialect: ShellDialect,
    placeholders: Iterable[str] = (),
) -> Iterator[Assignment]:
    """Yield every assignment of ``name`` in file order."""
    comment = dialect.syntax["comment"]
    blocked = set(placeholders)

    for number, line in enumerate(content.split("\n"), start=1):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith(comment):
            continue

        rhs = _match_rhs(trimmed, name, dialect)
        if rhs is None:
            continue

        raw = rhs.strip()
        value = parse_quoted_value(raw)
        cleaned = value.strip() if value else ""
        yield Assignment(
            line_number=number,
            raw_value=raw,
            value=value,
            effective=bool(cleaned) and cleaned not in blocked,
        )


def find_assignments(
    content: str,
    name: str,
    dialect: ShellDialect,
    placeholders: Iterable[str] = (),
) -> list[Assignment]:
    """All assignments of ``name``, effective or not."""
    return list(iter_assignments(content, name, dialect, placeholders))


def has_effective_assignment(
    content: str,
    name: str,
    dialect: ShellDialect,
    placeholders: Iterable[str] = (),
) -> bool:
    """Whether ``content`` already binds ``name`` to a real value.

    Stops at the first effective assignment (top to bottom).
    """
    return any(a.effective for a in iter_assignments(content, name, dialect, placeholders))
