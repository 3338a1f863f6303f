"""structlog setup for the ``tff`` command line.

One shared processor chain feeds either a ConsoleRenderer or, when
``APP_ENV=production`` (or ``json_output`` is forced), a JSONRenderer.
Everything is written to **stderr** because stdout carries the tables and
JSON that users pipe into other tools.  Colours are only used when stderr is
a terminal.

Standard-library records (httpx, httpcore) go through the same renderer.
Their request chatter is only shown at ``DEBUG``; at any other level those
loggers are held at ``WARNING``.
"""

import logging
import os
import sys

import structlog

from tff.utils.errors import ConfigurationError

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRANSPORT_LOGGERS = ("httpx", "httpcore")


def _level_number(log_level: str) -> int:
    name = log_level.strip().upper()
    if name not in _LEVELS:
        raise ConfigurationError(
            f"invalid log level {log_level!r} (expected one of {', '.join(_LEVELS)})",
            source="LOG_LEVEL",
        )
    return logging.getLevelName(name)


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def configure_logging(log_level: str = "WARNING", json_output: bool = False) -> structlog.BoundLogger:
    """Configure structlog and the stdlib root logger for one CLI run.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL (case-insensitive).
        json_output: Force JSON lines instead of console rendering.

    Raises:
        ConfigurationError: If *log_level* is not a known level name.
    """
    level = _level_number(log_level)
    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"

    shared = _shared_processors()
    if use_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=shared,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    transport_level = logging.DEBUG if level <= logging.DEBUG else max(level, logging.WARNING)
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger bound to *name*, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
