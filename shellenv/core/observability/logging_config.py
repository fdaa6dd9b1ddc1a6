"""
Logging configuration for the shellenv CLI.

``setup_logging`` runs once at startup (main.py); modules log through
``logging.getLogger(__name__)``.

Level precedence: CLI flag > SHELLENV_LOG_LEVEL > WARNING. A log file is
opt-in via SHELLENV_LOG_FILE (level: SHELLENV_LOG_FILE_LEVEL).

Provisioned values are secrets. The provision use case registers each
value with ``register_secret`` before touching a profile, and every
handler installed here carries a ``SecretRedactionFilter`` that masks
registered values in the rendered message.
"""

from __future__ import annotations

import logging
import sys

ENV_LEVEL = "SHELLENV_LOG_LEVEL"
ENV_FILE = "SHELLENV_LOG_FILE"
ENV_FILE_LEVEL = "SHELLENV_LOG_FILE_LEVEL"

REDACTED = "********"

# (max level, format, datefmt): first row whose level >= handler level wins
_CONSOLE_FORMATS: list[tuple[int, str, str | None]] = [
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d | %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
]
_FILE_FORMAT = ("%(asctime)s %(levelname)-5s %(name)s | %(message)s", "%Y-%m-%d %H:%M:%S")

_secrets: set[str] = set()


def register_secret(value: str | None) -> None:
    """Mask ``value`` in every log record from now on."""
    if value:
        _secrets.add(value)


def clear_secrets() -> None:
    _secrets.clear()


def redact(text: str) -> str:
    """Replace every registered secret in ``text``; longest first."""
    for secret in sorted(_secrets, key=len, reverse=True):
        text = text.replace(secret, REDACTED)
    return text


class SecretRedactionFilter(logging.Filter):
    """Rewrites records whose message contains a registered secret."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not _secrets:
            return True
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Bad %-args; let the handler report it through handleError
            return True
        masked = redact(message)
        if masked != message:
            record.msg, record.args = masked, None
        if record.exc_text:
            record.exc_text = redact(record.exc_text)
        return True


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console handler (stderr) and the optional file handler.

    Replaces any handlers already on the root logger, so calling it twice
    does not duplicate output.
    """
    console_level = _parse_level(level)
    fmt, datefmt = next(
        (f, d) for limit, f, d in _CONSOLE_FORMATS if console_level <= limit
    )
    handlers = [_handler(logging.StreamHandler(sys.stderr), console_level, fmt, datefmt)]

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handlers.append(
            _handler(logging.FileHandler(log_file, encoding="utf-8"), file_level, *_FILE_FORMAT)
        )

    root = logging.getLogger()
    root.handlers[:] = handlers
    root.setLevel(min(h.level for h in handlers))

    # A broken stderr must not turn a provision into a traceback
    logging.raiseExceptions = False


def _handler(
    handler: logging.Handler, level: int, fmt: str, datefmt: str | None,
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    handler.addFilter(SecretRedactionFilter())
    return handler


def _parse_level(level: str | None) -> int:
    """Level name to number; unknown or empty names mean WARNING."""
    numeric = getattr(logging, level.upper(), None) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
