"""Process logging setup for the auth API."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite")


def resolve_log_level(level: str) -> int:
    """Map a level name such as `debug` to its `logging` constant, defaulting to INFO."""

    normalized_level = level.strip().upper()
    resolved = logging.getLevelName(normalized_level) if normalized_level else logging.INFO
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(*, level: str) -> int:
    """Configure root logging once and keep driver chatter below DEBUG runs."""

    resolved_level = resolve_log_level(level)
    logging.basicConfig(level=resolved_level, format=_LOG_FORMAT)

    if resolved_level > logging.DEBUG:
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    return resolved_level
