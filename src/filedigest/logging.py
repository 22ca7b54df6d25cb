"""Structured logging setup for filedigest.

Modules log through ``structlog.get_logger``. Until :func:`configure_logging` runs,
structlog's built-in defaults apply, which print every event to stdout. Library
callers that need a clean stdout should call ``configure_logging`` first; the
command line always does.
"""
from __future__ import annotations

import logging
import sys
from enum import Enum

import structlog


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def numeric(self) -> int:
        return getattr(logging, self.name)


def configure_logging(level: LogLevel | str = LogLevel.WARNING) -> None:
    """Send JSON lines (``ts``, ``level``, ``msg``, ``component``) to stderr.

    Raises ``ValueError`` for a level name outside :class:`LogLevel`.
    """

    numeric_level = LogLevel(level.lower() if isinstance(level, str) else level).numeric

    logging.basicConfig(
        level=numeric_level,
        handlers=[logging.StreamHandler(sys.stderr)],
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.stdlib.add_log_level,
            _component_processor,
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )


def _component_processor(
    logger: structlog.BoundLoggerBase, _name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    event_dict.setdefault("component", getattr(logger, "name", None) or "filedigest")
    return event_dict


__all__ = ["LogLevel", "configure_logging"]
