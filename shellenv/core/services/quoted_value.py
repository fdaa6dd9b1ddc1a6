"""
L1 Domain: parse a shell literal into its logical value (pure).

Handles the small subset of shell quoting that shows up on the right-hand
side of a profile assignment:

- "value"            -> value
- 'value'            -> value
- "a\\"b"            -> a"b      (every escaped quote, not just the first)
- 'a\\'b'            -> a'b
- value              -> value    (bare word, returned verbatim)

No I/O, never raises.
"""

from __future__ import annotations

_QUOTES = ('"', "'")


def parse_quoted_value(token: str) -> str | None:
    """Return the logical value of ``token`` or None when malformed/empty."""
    value = token.strip()
    if not value:
        return None

    if len(value) < 2:
        # A lone quote mark is an unterminated literal.
        return None if value in _QUOTES else value

    first, last = value[0], value[-1]
    if first == last and first in _QUOTES:
        inner = value[1:-1]
        return inner.replace(f"\\{first}", first)

    return value
