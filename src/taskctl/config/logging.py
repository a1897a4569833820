"""Logging setup: stdlib loggers rendered through structlog.

Modules log with ``logging.getLogger(__name__)``. A single stderr handler
carries a structlog ``ProcessorFormatter`` that renders every record either
as console lines (default) or as JSON objects (``--log-json``).

Request-scoped fields bound with :func:`structlog.contextvars.bound_contextvars`
are merged into each record emitted while they are bound.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

APP_LOGGER = "taskctl"

# Third-party loggers that stay at WARNING even with --verbose.
_QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "httpx", "multipart")

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def _renderer(log_json: bool, stream: TextIO) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def build_formatter(*, log_json: bool, stream: TextIO | None = None) -> logging.Formatter:
    """ProcessorFormatter rendering both structlog and stdlib records."""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_SHARED_PROCESSORS,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(log_json, stream or sys.stderr),
        ],
    )


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route all logging to *stream* (stderr by default).

    Calling this again replaces the previous handler, so the CLI and the
    HTTP server can both configure logging without duplicating output.

    Args:
        verbose: ``taskctl`` loggers emit DEBUG; otherwise WARNING and up.
        log_json: One JSON object per line instead of console formatting.
        stream: Destination for log output.
    """
    target = stream or sys.stderr

    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(target)
    handler.setFormatter(build_formatter(log_json=log_json, stream=target))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    app_level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger(APP_LOGGER).setLevel(app_level)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
