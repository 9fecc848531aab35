"""Shared request helper for provider clients."""

from __future__ import annotations

from typing import Any, TypeVar

import httpx
import pydantic
import structlog

from city_explorer.core.exceptions import MalformedPayloadError, UpstreamError

logger = structlog.get_logger(__name__)

USER_AGENT = "CityExplorer/0.1 (+https://github.com/city-explorer)"

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


async def request_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    provider: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> Any:
    """GET ``url`` and decode the JSON body.

    No retries: any transport failure, non-2xx status or undecodable body
    raises UpstreamError.
    """

    merged_headers = {"User-Agent": USER_AGENT}
    if headers:
        merged_headers.update(headers)

    try:
        response = await client.get(url, params=params, headers=merged_headers)
    except httpx.HTTPError as exc:
        logger.warning("provider_request_failed", provider=provider, error=str(exc))
        raise UpstreamError(provider, f"request failed: {exc.__class__.__name__}") from exc

    if not response.is_success:
        logger.warning(
            "provider_request_failed", provider=provider, status=response.status_code
        )
        raise UpstreamError(
            provider,
            f"request failed with status {response.status_code}",
            status_code=response.status_code,
        )

    try:
        return response.json()
    except ValueError as exc:
        logger.warning("provider_invalid_json", provider=provider)
        raise UpstreamError(provider, "response is not valid JSON") from exc


def parse_payload(provider: str, model: type[ModelT], payload: Any) -> ModelT:
    """Validate a decoded payload against ``model``."""

    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as exc:
        errors = exc.error_count()
        logger.warning("provider_malformed_payload", provider=provider, errors=errors)
        message = f"unexpected payload shape ({errors} errors)"
        raise MalformedPayloadError(provider, message) from exc
