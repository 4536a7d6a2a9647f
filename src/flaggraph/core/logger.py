import contextvars
import logging
import os
import sys
from typing import Optional

# Context variable to carry the name of the running command across the call chain
_COMMAND: contextvars.ContextVar[str] = contextvars.ContextVar("command", default="-")

LOG_LEVEL_ENV = "FLAGGRAPH_LOG_LEVEL"


class _CommandFilter(logging.Filter):
    """Logging filter that injects the current command name from contextvars into the record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.command = _COMMAND.get()
        return True


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | cmd=%(command)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _resolve_level(level: Optional[str]) -> int:
    name = level or os.environ.get(LOG_LEVEL_ENV) or "INFO"
    return getattr(logging, name.upper(), logging.INFO)


def configure_root_logger(level: Optional[str] = None) -> None:
    """
    Attach the flaggraph stderr handler to the root logger and set the level of
    the ``flaggraph`` namespace.

    Level defaults to ``$FLAGGRAPH_LOG_LEVEL`` and then INFO. Other libraries
    (httpx, httpcore) stay at WARNING so request chatter does not mix with
    command output.

    Safe to call multiple times; it will not duplicate handlers (idempotent).
    """
    root = logging.getLogger()

    configured = any(
        isinstance(h, logging.StreamHandler) and any(isinstance(f, _CommandFilter) for f in h.filters)
        for h in root.handlers
    )
    if not configured:
        # stdout carries command output; diagnostics go to stderr
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_build_formatter())
        handler.addFilter(_CommandFilter())
        root.addHandler(handler)
        root.setLevel(logging.WARNING)

    logging.getLogger("flaggraph").setLevel(_resolve_level(level))


def get_logger(name: str = "flaggraph", level: Optional[str] = None) -> logging.Logger:
    """
    Get a module-specific logger under the configured ``flaggraph`` namespace.
    """
    configure_root_logger(level)
    return logging.getLogger(name)


def push_command(name: Optional[str]) -> Optional[contextvars.Token]:
    """Set the current command name in context and return a token for later reset."""
    if not name:
        return None
    return _COMMAND.set(name)


def reset_command(token: Optional[contextvars.Token]) -> None:
    """Reset the command context using the provided token (if any)."""
    if token is None:
        return
    _COMMAND.reset(token)
