"""
L1 Domain: render and upsert engine-owned marked blocks (pure).

A block looks like::

    # shellenv: Z_AI_API_KEY env start
    export Z_AI_API_KEY="value"
    # shellenv: Z_AI_API_KEY env end

``upsert_block`` replaces the block in place when its markers are present
and appends it otherwise. The result is a fixed point:

    upsert_block(upsert_block(c, b), b) == upsert_block(c, b)

No I/O.
"""

from __future__ import annotations

from shellenv.core.models.dialect import ShellDialect
from shellenv.core.models.profile import MarkedBlock
from shellenv.core.models.request import DEFAULT_TOOL

_SEPARATOR = "\n\n"


def block_markers(
    name: str,
    dialect: ShellDialect,
    tool: str = DEFAULT_TOOL,
    label: str | None = None,
) -> tuple[str, str]:
    """Return the (start, end) marker comments for a variable's block."""
    comment = dialect.syntax["comment"]
    head = f"{comment} {tool}: {label or name} env"
    return f"{head} start", f"{head} end"


def render_block(
    name: str,
    value: str,
    dialect: ShellDialect,
    tool: str = DEFAULT_TOOL,
    label: str | None = None,
) -> MarkedBlock:
    """Render the block exporting ``name=value`` in the dialect's syntax.

    The value is wrapped in double quotes as-is; embedded double quotes
    and backslashes are not escaped.
    """
    start, end = block_markers(name, dialect, tool=tool, label=label)
    body = dialect.syntax["assign_template"].format(name=name, value=value)
    return MarkedBlock(start_marker=start, end_marker=end, body_line=body)


def _find_block(content: str, start: str, end: str) -> tuple[int, int] | None:
    """Locate the first complete block as a (begin, stop) slice.

    Pairs the first end marker that has a start marker before it with the
    nearest such start, so a stray start marker earlier in the file never
    swallows the text between it and a real block.
    """
    pos = 0
    while True:
        e = content.find(end, pos)
        if e == -1:
            return None
        s = content.rfind(start, 0, e)
        if s != -1:
            return s, e + len(end)
        pos = e + len(end)


def _join(*parts: str) -> str:
    """Join non-empty parts with one blank line; end with a single newline."""
    return _SEPARATOR.join(p for p in parts if p) + "\n"


def upsert_block(content: str, block: MarkedBlock) -> str:
    """Insert or replace ``block`` in ``content``, leaving other text alone."""
    found = _find_block(content, block.start_marker, block.end_marker)
    if found is None:
        return _join(content.rstrip(), block.text)

    begin, stop = found
    before = content[:begin].rstrip()
    after = content[stop:].strip()

    # Drop duplicate blocks left behind by hand edits or copy/paste.
    while (dup := _find_block(after, block.start_marker, block.end_marker)) is not None:
        after = _join(after[: dup[0]].rstrip(), after[dup[1]:].strip()).strip()

    return _join(before, block.text, after)


def has_block(content: str, start_marker: str, end_marker: str) -> bool:
    """Whether ``content`` holds a complete block with these markers."""
    return _find_block(content, start_marker, end_marker) is not None
