"""Domain-level exception hierarchy for service, provider and repository layers."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for domain-specific failures."""


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist (e.g. geocoder has no match)."""


class ValidationError(DomainError):
    """Raised when input validation fails at the domain/service layer."""


class MalformedPayloadError(DomainError):
    """Raised when a third-party payload does not match its expected shape."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class UpstreamError(DomainError):
    """Raised when a third-party API call fails (network, status or decoding)."""

    def __init__(self, provider: str, message: str, *, status_code: int | None = None) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.status_code = status_code


class InfrastructureError(DomainError):
    """Raised when infrastructure (DB) is unavailable."""


class StoreError(InfrastructureError):
    """Raised when a query or insert against the store fails."""
