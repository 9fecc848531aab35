"""structlog setup shared by the app, uvicorn and the provider clients."""

from __future__ import annotations

import logging
import os

import structlog

# httpx logs every provider request at INFO; provider_* events cover failures.
QUIET_LOGGERS = ("httpx", "httpcore")


def _renderer():
    explicit = os.getenv("LOG_FORMAT")
    console = explicit == "console" or (explicit is None and os.getenv("APP_ENV") == "dev")
    if console:
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_logging() -> None:
    """Route structlog and stdlib records through one JSON (or dev console) handler.

    Bound contextvars (request_id from the request middleware) are merged into
    every event, including those emitted by resolvers and provider clients.
    """

    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, _renderer()],
        )
    )
    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    logging.basicConfig(level=level, handlers=[handler], force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
