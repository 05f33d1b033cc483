"""Logging for linkctl: stdlib loggers rendered by structlog on stderr.

Modules log through ``logging.getLogger(__name__)``. One stderr handler
with a structlog ``ProcessorFormatter`` renders those records, and the
records of the web server too: ``serve`` runs uvicorn with
``log_config=None`` so its loggers propagate here and ``--log-json``
covers them as well.

Once a command opens its store, :func:`bind_storage_context` attaches the
backend and location to every later record.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the stderr handler and set linkctl and uvicorn levels.

    ``verbose`` lowers linkctl (and the uvicorn access log) to DEBUG;
    otherwise only warnings get through. Calling this again replaces the
    previous configuration and forgets any bound storage context.
    """
    structlog.contextvars.clear_contextvars()

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    tail: list[structlog.types.Processor]
    if log_json:
        tail = [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        tail = [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *tail],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("linkctl").setLevel(level)
    _route_server_loggers(access_level=level)


def _route_server_loggers(*, access_level: int) -> None:
    # Startup and shutdown lines are INFO; request lines only when verbose.
    for name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(access_level)


def bind_storage_context(backend: str, location: Path | None) -> None:
    """Tag subsequent log records with the open store."""
    structlog.contextvars.bind_contextvars(
        storage=backend,
        links_file=str(location) if location is not None else None,
    )
