"""
Structured Logging

DESIGN DECISION: Every skipped record and every data-quality flag is logged.
Bulk parsing skips bad rows instead of raising, so the log is where upstream problems
(custom recurrences without an interval, rows that fail parsing) show up.

Events are snake_case names with key/value context, rendered as JSON by
default so they can be shipped as-is.

structlog is configured when this module is imported, with the level and
renderer from AppSettings. No handler is installed at that point: events
below the configured level are dropped and the rest go wherever the host
application points the standard library's logging. configure_logging()
additionally sends output to stdout.
"""

import logging
import sys
from typing import Optional

import structlog


LOGGER_NAMESPACE = "bizfin"


def _configure_structlog(level: str, json_output: bool) -> None:
    logging.getLogger(LOGGER_NAMESPACE).setLevel(
        getattr(logging, level.upper(), logging.INFO)
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    # Loggers are not cached so that a later configure_logging() call reaches
    # module-level loggers that have already been used.
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_default_logging() -> None:
    """Apply the AppSettings level and renderer without installing a handler."""
    from bizfin.config import get_settings

    app = get_settings().app
    _configure_structlog(app.log_level, app.log_json)


def configure_logging(
    level: Optional[str] = None,
    json_output: Optional[bool] = None,
) -> None:
    """
    Configure structlog for the process and log to stdout.

    Defaults come from AppSettings (BIZFIN_LOG_LEVEL, BIZFIN_LOG_JSON).
    Safe to call more than once; the last call wins.
    """
    if level is None or json_output is None:
        from bizfin.config import get_settings

        app = get_settings().app
        level = level or app.log_level
        json_output = app.log_json if json_output is None else json_output

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )
    _configure_structlog(level, json_output)


def get_logger(name: Optional[str] = None):
    return structlog.get_logger(name)


configure_default_logging()
