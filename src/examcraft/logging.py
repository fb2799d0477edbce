"""structlog setup for examcraft.

Console rendering is the default. The API switches to JSON lines through
configure_from_settings and binds a request id into every entry it logs.
"""

import logging
import sys
from typing import Any

import structlog

__all__ = [
    "bind_request_context",
    "clear_request_context",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
]

_QUIET_LOGGERS = ("httpx", "httpcore", "motor", "pymongo")

_configured = False


def configure_logging(
    level: int = logging.INFO,
    json_output: bool = False,
    add_timestamp: bool = True,
) -> None:
    """Install the examcraft processor chain.

    Args:
        level: Root stdlib log level
        json_output: Render JSON lines instead of coloured console output
        add_timestamp: Prefix entries with an ISO timestamp
    """
    global _configured

    processors: list[Any] = []
    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    processors += [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    _configured = True


def configure_from_settings(level_name: str, json_output: bool) -> None:
    """Reconfigure from ApiSettings values. Unknown level names mean INFO."""
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO
    configure_logging(level=level, json_output=json_output)
    logging.getLogger().setLevel(level)


def bind_request_context(**values: Any) -> None:
    """Replace the request-scoped context merged into every entry."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, usually named after the calling module."""
    return structlog.get_logger(name)


if not _configured:
    configure_logging()
