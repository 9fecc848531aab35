import structlog
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from city_explorer.core import exceptions as domain_exceptions

GENERIC_ERROR_DETAIL = "Sorry, something went wrong"

logger = structlog.get_logger(__name__)


def _http_exception_handler(_: Request, exc: HTTPException) -> JSONResponse:
    # Normalize to a consistent JSON body
    return JSONResponse(
        status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers
    )


def _validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    # Keep simple, unified error message (avoid verbose FastAPI default list)
    return JSONResponse(status_code=422, content={"detail": "Unprocessable Entity"})


def _failure_handler(request: Request, exc: Exception) -> JSONResponse:
    # Store, provider and not-found failures all look the same to clients.
    logger.error(
        "request_failed",
        error_kind=exc.__class__.__name__,
        error=str(exc),
        path=request.url.path,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": GENERIC_ERROR_DETAIL})


def install(app) -> None:
    # Register centralized exception handlers
    app.add_exception_handler(HTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(domain_exceptions.DomainError, _failure_handler)
    app.add_exception_handler(Exception, _failure_handler)
