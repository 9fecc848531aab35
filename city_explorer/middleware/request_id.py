from __future__ import annotations

import time
import uuid
from collections.abc import Callable

import sentry_sdk
import structlog
from fastapi import Request, Response

REQUEST_ID_HEADER = "X-Request-ID"

logger = structlog.get_logger(__name__)


async def request_id_middleware(request: Request, call_next: Callable) -> Response:
    """Tag the request with an id and write one ``http_request`` access log line.

    The inbound X-Request-ID is reused when present. The id is bound to the
    structlog context for resolver and provider logs, set as a Sentry tag and
    echoed on the response.
    """
    rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    structlog.contextvars.bind_contextvars(request_id=rid)
    sentry_sdk.set_tag("request_id", rid)

    started = time.perf_counter()
    status = 500
    try:
        response = await call_next(request)
        status = response.status_code
        response.headers[REQUEST_ID_HEADER] = rid
        return response
    finally:
        logger.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status=status,
            duration_ms=round((time.perf_counter() - started) * 1000, 3),
        )
        structlog.contextvars.clear_contextvars()
